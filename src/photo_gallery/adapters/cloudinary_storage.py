"""Cloudinary photo storage."""

import asyncio
import io
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from types import ModuleType

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from photo_gallery.domain.errors import StorageDeleteFailed, StorageUploadFailed
from photo_gallery.domain.photos import PhotoRef
from photo_gallery.services.storage import PhotoStorage


@dataclass
class CloudinaryPhotoStorage(PhotoStorage):
    """Cloudinary-backed storage; storage ids are Cloudinary public ids."""

    cloud_name: str
    api_key: str
    api_secret: str
    folder: str
    uploader: ModuleType = field(default=cloudinary.uploader, repr=False)

    async def upload(self, data: bytes, name: str, content_type: str) -> PhotoRef:
        """Upload an image and return its secure URL."""
        try:
            payload = await asyncio.to_thread(
                self.uploader.upload,
                io.BytesIO(data),
                folder=self.folder,
                public_id=PurePosixPath(name).stem,
                overwrite=True,
                resource_type="image",
                **self._credentials(),
            )
        except CloudinaryError as exc:
            raise StorageUploadFailed(f"Cloudinary upload failed: {exc}") from exc
        if "secure_url" not in payload or "public_id" not in payload:
            raise StorageUploadFailed("Cloudinary upload returned no secure_url")
        return PhotoRef(
            reference=payload["secure_url"], storage_id=payload["public_id"]
        )

    async def delete(self, storage_id: str) -> None:
        """Destroy an uploaded image by public id."""
        try:
            payload = await asyncio.to_thread(
                self.uploader.destroy,
                storage_id,
                resource_type="image",
                **self._credentials(),
            )
        except CloudinaryError as exc:
            raise StorageDeleteFailed(f"Cloudinary delete failed: {exc}") from exc
        if payload.get("result") not in {"ok", "not found"}:
            raise StorageDeleteFailed(
                f"Cloudinary delete failed: {payload.get('result')}"
            )

    def _credentials(self) -> dict[str, str]:
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }

    async def close(self) -> None:
        return None
