"""Photo service orchestrating storage and gallery metadata."""

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from uuid import uuid4

from photo_gallery.domain.errors import (
    InvalidEncoding,
    NotFound,
    StorageDeleteFailed,
    StorageUploadFailed,
)
from photo_gallery.domain.photos import (
    GalleryEntry,
    GallerySnapshot,
    GalleryUploadResult,
    PhotoRef,
    UploadFailure,
)
from photo_gallery.services.encoding import DecodedImage, decode_data_url
from photo_gallery.services.metadata import MetadataStore
from photo_gallery.services.storage import PhotoStorage

logger = logging.getLogger(__name__)


@dataclass
class PhotoService:
    """Upload, caption and delete photos while keeping metadata consistent.

    Every mutation runs under a single lock, so concurrent requests are
    applied one at a time. Storage deletes are best-effort: failures are
    logged and the metadata change still happens.
    """

    storage: PhotoStorage
    store: MetadataStore
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def list_photos(self) -> GallerySnapshot:
        """Return the current main photo and gallery."""
        return self.store.snapshot()

    async def upload_main(self, payload: object) -> PhotoRef:
        """Store a new main photo and make it current.

        The previously stored main photo is left in the backing store.
        """
        image = decode_data_url(payload)
        async with self._lock:
            photo = await self._upload(image, _object_name("main"))
            self.store.main_photo = photo
        logger.info("Main photo uploaded", extra={"storage_id": photo.storage_id})
        return photo

    async def upload_gallery(self, payloads: Sequence[object]) -> GalleryUploadResult:
        """Upload gallery photos in order and append each one that persists.

        All payloads are decoded before the first upload, so one malformed
        payload rejects the whole batch. Upload failures after that are
        collected per item; earlier successes stay in the gallery.
        """
        if not payloads:
            raise InvalidEncoding("No photos provided")
        images = [decode_data_url(payload) for payload in payloads]
        result = GalleryUploadResult()
        async with self._lock:
            for index, image in enumerate(images):
                try:
                    photo = await self._upload(image, _object_name("gallery", index))
                except StorageUploadFailed as exc:
                    result.failures.append(UploadFailure(index=index, error=str(exc)))
                    continue
                entry = GalleryEntry(
                    id=self._new_id(),
                    photo=photo,
                    caption=f"Photo {self.store.count() + 1}",
                )
                self.store.append([entry])
                result.entries.append(entry)
        logger.info(
            "Gallery upload finished",
            extra={
                "uploaded": len(result.entries),
                "failed": len(result.failures),
            },
        )
        if not result.entries:
            raise StorageUploadFailed(result.failures[0].error)
        return result

    async def update_caption(self, entry_id: str, caption: str) -> None:
        """Replace the caption of one gallery entry."""
        async with self._lock:
            if not self.store.set_caption(entry_id, caption):
                raise NotFound("Photo not found")
        logger.info("Caption updated", extra={"photo_id": entry_id})

    async def delete_one(self, entry_id: str) -> GalleryEntry:
        """Remove one gallery entry and try to delete its stored bytes."""
        async with self._lock:
            entry = self.store.find(entry_id)
            if entry is None:
                raise NotFound("Photo not found")
            await self._delete_quietly(entry.photo)
            self.store.remove(entry_id)
        logger.info("Photo deleted", extra={"photo_id": entry_id})
        return entry

    async def clear_all(self) -> int:
        """Empty the gallery and main photo; return how many deletes failed."""
        async with self._lock:
            previous = self.store.snapshot()
            photos = [entry.photo for entry in previous.gallery]
            if previous.main_photo is not None:
                photos.append(previous.main_photo)
            failed = 0
            for photo in photos:
                if not await self._delete_quietly(photo):
                    failed += 1
            self.store.clear()
        logger.info(
            "All photos cleared",
            extra={"deleted": len(photos) - failed, "failed": failed},
        )
        return failed

    async def _upload(self, image: DecodedImage, name: str) -> PhotoRef:
        try:
            return await self.storage.upload(
                image.data, f"{name}.{image.extension}", image.content_type
            )
        except StorageUploadFailed:
            logger.exception("Storage upload failed", extra={"photo_name": name})
            raise

    async def _delete_quietly(self, photo: PhotoRef) -> bool:
        try:
            await self.storage.delete(photo.storage_id)
        except StorageDeleteFailed:
            logger.exception(
                "Storage delete failed", extra={"storage_id": photo.storage_id}
            )
            return False
        return True

    def _new_id(self) -> str:
        while True:
            candidate = uuid4().hex
            if self.store.find(candidate) is None:
                return candidate


def _object_name(prefix: str, *parts: object) -> str:
    """Return a storage name that no other call produces."""
    millis = time.time_ns() // 1_000_000
    return "-".join([prefix, str(millis), *map(str, parts), uuid4().hex[:12]])
