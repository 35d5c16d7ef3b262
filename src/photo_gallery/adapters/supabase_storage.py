"""Supabase Storage photo storage."""

import asyncio
from dataclasses import dataclass

import httpx
from storage3.exceptions import StorageException
from supabase import Client, create_client

from photo_gallery.domain.errors import StorageDeleteFailed, StorageUploadFailed
from photo_gallery.domain.photos import PhotoRef
from photo_gallery.services.storage import PhotoStorage


@dataclass
class SupabasePhotoStorage(PhotoStorage):
    """Supabase bucket storage; storage ids are object paths in the bucket."""

    client: Client
    bucket: str
    folder: str

    @classmethod
    def create(
        cls, url: str, service_key: str, bucket: str, folder: str
    ) -> "SupabasePhotoStorage":
        """Create a storage backed by a new Supabase client."""
        return cls(client=create_client(url, service_key), bucket=bucket, folder=folder)

    async def upload(self, data: bytes, name: str, content_type: str) -> PhotoRef:
        """Upload an object and return its public URL."""
        path = f"{self.folder}/{name}" if self.folder else name
        bucket = self.client.storage.from_(self.bucket)
        try:
            await asyncio.to_thread(
                bucket.upload,
                path,
                data,
                {"content-type": content_type, "upsert": "true"},
            )
            public_url = bucket.get_public_url(path)
        except (StorageException, httpx.HTTPError) as exc:
            raise StorageUploadFailed(f"Supabase upload failed: {exc}") from exc
        return PhotoRef(reference=public_url, storage_id=path)

    async def delete(self, storage_id: str) -> None:
        """Remove an object by path."""
        bucket = self.client.storage.from_(self.bucket)
        try:
            await asyncio.to_thread(bucket.remove, [storage_id])
        except (StorageException, httpx.HTTPError) as exc:
            raise StorageDeleteFailed(f"Supabase delete failed: {exc}") from exc

    async def close(self) -> None:
        return None
