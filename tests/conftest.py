"""Shared test fixtures."""

import base64
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from photo_gallery.config import Settings
from photo_gallery.containers import AppContainer
from photo_gallery.domain.errors import StorageDeleteFailed, StorageUploadFailed
from photo_gallery.domain.photos import PhotoRef
from photo_gallery.services.metadata import InMemoryMetadataStore
from photo_gallery.services.photos import PhotoService
from photo_gallery.services.storage import PhotoStorage


def data_url(data: bytes, content_type: str = "image/jpeg") -> str:
    """Build a base64 data URL for test payloads."""
    return f"data:{content_type};base64,{base64.b64encode(data).decode()}"


@dataclass
class FakePhotoStorage(PhotoStorage):
    """In-memory storage that records calls and can be told to fail."""

    objects: dict[str, bytes] = field(default_factory=dict)
    uploads: list[str] = field(default_factory=list)
    deletes: list[str] = field(default_factory=list)
    fail_upload_calls: set[int] = field(default_factory=set)
    fail_deletes: bool = False
    closed: bool = False

    async def upload(self, data: bytes, name: str, content_type: str) -> PhotoRef:
        call_index = len(self.uploads)
        self.uploads.append(name)
        if call_index in self.fail_upload_calls:
            raise StorageUploadFailed(f"upload rejected: {name}")
        storage_id = name
        self.objects[storage_id] = data
        return PhotoRef(reference=f"memory://{storage_id}", storage_id=storage_id)

    async def delete(self, storage_id: str) -> None:
        self.deletes.append(storage_id)
        if self.fail_deletes:
            raise StorageDeleteFailed(f"delete rejected: {storage_id}")
        self.objects.pop(storage_id, None)

    async def close(self) -> None:
        self.closed = True

    def fetch(self, reference: str) -> bytes:
        return self.objects[reference.removeprefix("memory://")]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        environment="test",
        storage_backend="local",
        uploads_dir=str(tmp_path / "uploads"),
        public_base_url="http://localhost:5005",
    )


@pytest.fixture
def storage() -> FakePhotoStorage:
    return FakePhotoStorage()


@pytest.fixture
def photo_service(storage: FakePhotoStorage) -> PhotoService:
    return PhotoService(storage=storage, store=InMemoryMetadataStore())


@pytest.fixture
def container(settings: Settings, photo_service: PhotoService) -> AppContainer:
    async def close_resources() -> None:
        await photo_service.storage.close()

    return AppContainer(
        settings=settings,
        photo_service=photo_service,
        storage_error=None,
        uploads_dir=None,
        close_resources=close_resources,
    )
