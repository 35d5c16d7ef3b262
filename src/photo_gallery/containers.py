"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from photo_gallery.adapters.cloudinary_storage import CloudinaryPhotoStorage
from photo_gallery.adapters.local_storage import LocalPhotoStorage
from photo_gallery.adapters.s3_storage import S3PhotoStorage
from photo_gallery.adapters.supabase_storage import SupabasePhotoStorage
from photo_gallery.config import Settings
from photo_gallery.domain.errors import UnconfiguredStorage
from photo_gallery.services.metadata import InMemoryMetadataStore
from photo_gallery.services.photos import PhotoService
from photo_gallery.services.storage import PhotoStorage

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies.

    ``photo_service`` is None when the selected storage backend is missing
    settings; ``storage_error`` then explains what is missing.
    """

    settings: Settings
    photo_service: PhotoService | None
    storage_error: str | None
    uploads_dir: Path | None
    close_resources: Callable[[], Awaitable[None]]


def build_storage(settings: Settings) -> PhotoStorage:
    """Create the storage adapter selected by settings."""
    missing = settings.missing_storage_settings()
    if missing:
        raise UnconfiguredStorage(
            f"Storage backend '{settings.storage_backend}' is not configured. "
            f"Please set {', '.join(missing)}."
        )
    if settings.storage_backend == "cloudinary":
        return CloudinaryPhotoStorage(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.storage_folder,
        )
    if settings.storage_backend == "s3":
        return S3PhotoStorage.create(
            bucket=settings.aws_s3_bucket,
            region=settings.aws_region,
            folder=settings.storage_folder,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
        )
    if settings.storage_backend == "supabase":
        return SupabasePhotoStorage.create(
            url=settings.supabase_url,
            service_key=settings.supabase_service_key,
            bucket=settings.supabase_bucket,
            folder=settings.storage_folder,
        )
    return LocalPhotoStorage.create(
        settings.uploads_dir, base_url=settings.public_base_url
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    try:
        storage = build_storage(resolved_settings)
    except UnconfiguredStorage as exc:
        logger.error("Storage unavailable: %s", exc)
        storage = None
        storage_error = str(exc)
    else:
        storage_error = None

    photo_service = None
    uploads_dir = None
    if storage is not None:
        photo_service = PhotoService(storage=storage, store=InMemoryMetadataStore())
        if isinstance(storage, LocalPhotoStorage):
            uploads_dir = storage.root

    async def close_resources() -> None:
        if storage is not None:
            await storage.close()

    return AppContainer(
        settings=resolved_settings,
        photo_service=photo_service,
        storage_error=storage_error,
        uploads_dir=uploads_dir,
        close_resources=close_resources,
    )
