"""Local filesystem photo storage."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from photo_gallery.domain.errors import StorageDeleteFailed, StorageUploadFailed
from photo_gallery.domain.photos import PhotoRef
from photo_gallery.services.storage import PhotoStorage


@dataclass
class LocalPhotoStorage(PhotoStorage):
    """Stores photos under an uploads directory served at ``/uploads``."""

    root: Path
    base_url: str = ""
    url_prefix: str = "/uploads"

    @classmethod
    def create(cls, root: str | Path, base_url: str = "") -> "LocalPhotoStorage":
        """Create the storage, making the uploads directory if needed."""
        path = Path(root).resolve()
        path.mkdir(parents=True, exist_ok=True)
        return cls(root=path, base_url=base_url.rstrip("/"))

    async def upload(self, data: bytes, name: str, content_type: str) -> PhotoRef:
        """Write bytes to a temp file and rename it into place."""
        target = self.root / Path(name).name
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".upload-")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(data)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageUploadFailed(f"Failed to write {target.name}: {exc}") from exc
        return PhotoRef(
            reference=f"{self.base_url}{self.url_prefix}/{target.name}",
            storage_id=target.name,
        )

    async def delete(self, storage_id: str) -> None:
        """Delete a stored file; a file that is already gone is not an error."""
        path = (self.root / storage_id).resolve()
        if path.parent != self.root:
            raise StorageDeleteFailed(f"Refusing to delete outside uploads: {storage_id}")
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageDeleteFailed(f"Failed to delete {storage_id}: {exc}") from exc

    async def close(self) -> None:
        return None
