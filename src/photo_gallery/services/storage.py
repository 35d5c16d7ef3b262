"""Storage adapter contract."""

from typing import Protocol

from photo_gallery.domain.photos import PhotoRef


class PhotoStorage(Protocol):
    """Interface for durable photo byte storage."""

    async def upload(self, data: bytes, name: str, content_type: str) -> PhotoRef:
        """Persist bytes under a logical name and return a usable reference.

        Raises StorageUploadFailed when nothing usable was stored.
        """

    async def delete(self, storage_id: str) -> None:
        """Delete stored bytes by their storage id.

        Raises StorageDeleteFailed on failure.
        """

    async def close(self) -> None:
        """Release any held resources."""
