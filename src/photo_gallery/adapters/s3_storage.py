"""Amazon S3 photo storage."""

import asyncio
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from photo_gallery.domain.errors import StorageDeleteFailed, StorageUploadFailed
from photo_gallery.domain.photos import PhotoRef
from photo_gallery.services.storage import PhotoStorage


@dataclass
class S3PhotoStorage(PhotoStorage):
    """S3-backed storage; storage ids are object keys."""

    client: Any
    bucket: str
    region: str
    folder: str

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        bucket: str,
        region: str,
        folder: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
    ) -> "S3PhotoStorage":
        """Create an S3 storage; missing keys fall back to the default chain."""
        client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )
        return cls(client=client, bucket=bucket, region=region, folder=folder)

    async def upload(self, data: bytes, name: str, content_type: str) -> PhotoRef:
        """Put an object and return its public URL."""
        key = f"{self.folder}/{name}" if self.folder else name
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageUploadFailed(f"S3 upload failed: {exc}") from exc
        return PhotoRef(reference=self.object_url(key), storage_id=key)

    async def delete(self, storage_id: str) -> None:
        """Delete an object by key."""
        try:
            await asyncio.to_thread(
                self.client.delete_object, Bucket=self.bucket, Key=storage_id
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageDeleteFailed(f"S3 delete failed: {exc}") from exc

    def object_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def close(self) -> None:
        return None
