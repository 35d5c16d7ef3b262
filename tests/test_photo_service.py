"""Tests for the photo service."""

import asyncio
from pathlib import Path

import pytest

from photo_gallery.adapters.local_storage import LocalPhotoStorage
from photo_gallery.domain.errors import InvalidEncoding, NotFound, StorageUploadFailed
from photo_gallery.services.metadata import InMemoryMetadataStore
from photo_gallery.services.photos import PhotoService
from tests.conftest import FakePhotoStorage, data_url


def test_upload_main_round_trips_bytes(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    photo = asyncio.run(photo_service.upload_main(data_url(b"main-bytes")))

    snapshot = photo_service.list_photos()
    assert snapshot.main_photo == photo
    assert photo.permanent is True
    assert storage.fetch(photo.reference) == b"main-bytes"
    assert storage.uploads[0].startswith("main-")
    assert storage.uploads[0].endswith(".jpg")


def test_upload_main_rejects_malformed_payload_before_storage(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    original = asyncio.run(photo_service.upload_main(data_url(b"first")))

    with pytest.raises(InvalidEncoding):
        asyncio.run(photo_service.upload_main("not-a-data-url"))

    assert photo_service.list_photos().main_photo == original
    assert len(storage.uploads) == 1


def test_upload_main_storage_failure_keeps_previous(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    original = asyncio.run(photo_service.upload_main(data_url(b"first")))
    storage.fail_upload_calls.add(1)

    with pytest.raises(StorageUploadFailed):
        asyncio.run(photo_service.upload_main(data_url(b"second")))

    assert photo_service.list_photos().main_photo == original


def test_upload_main_replacement_keeps_previous_object(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    first = asyncio.run(photo_service.upload_main(data_url(b"first")))
    second = asyncio.run(photo_service.upload_main(data_url(b"second")))

    assert photo_service.list_photos().main_photo == second
    assert first.storage_id in storage.objects
    assert storage.deletes == []


def test_upload_gallery_assigns_captions_and_unique_ids(
    photo_service: PhotoService,
) -> None:
    first = asyncio.run(
        photo_service.upload_gallery([data_url(b"one"), data_url(b"two")])
    )
    second = asyncio.run(photo_service.upload_gallery([data_url(b"three")]))

    gallery = photo_service.list_photos().gallery
    assert [entry.caption for entry in gallery] == ["Photo 1", "Photo 2", "Photo 3"]
    assert [entry.id for entry in gallery] == [
        *(entry.id for entry in first.entries),
        *(entry.id for entry in second.entries),
    ]
    assert len({entry.id for entry in gallery}) == 3
    assert first.failures == []


def test_upload_gallery_rejects_batch_with_malformed_payload(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    with pytest.raises(InvalidEncoding):
        asyncio.run(photo_service.upload_gallery([data_url(b"ok"), "broken"]))

    assert storage.uploads == []
    assert photo_service.list_photos().gallery == ()


def test_upload_gallery_rejects_empty_batch(photo_service: PhotoService) -> None:
    with pytest.raises(InvalidEncoding):
        asyncio.run(photo_service.upload_gallery([]))


def test_upload_gallery_keeps_successes_when_one_upload_fails(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    storage.fail_upload_calls.add(1)

    result = asyncio.run(
        photo_service.upload_gallery(
            [data_url(b"one"), data_url(b"two"), data_url(b"three")]
        )
    )

    assert [entry.caption for entry in result.entries] == ["Photo 1", "Photo 2"]
    assert [failure.index for failure in result.failures] == [1]
    assert len(photo_service.list_photos().gallery) == 2


def test_upload_gallery_raises_when_every_upload_fails(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    storage.fail_upload_calls.update({0, 1})

    with pytest.raises(StorageUploadFailed):
        asyncio.run(photo_service.upload_gallery([data_url(b"a"), data_url(b"b")]))

    assert photo_service.list_photos().gallery == ()


def test_update_caption_changes_only_target(photo_service: PhotoService) -> None:
    result = asyncio.run(
        photo_service.upload_gallery([data_url(b"one"), data_url(b"two")])
    )
    first, second = result.entries

    asyncio.run(photo_service.update_caption(first.id, "Rakhi Day"))

    captions = {entry.id: entry.caption for entry in photo_service.list_photos().gallery}
    assert captions == {first.id: "Rakhi Day", second.id: "Photo 2"}


def test_update_caption_unknown_id(photo_service: PhotoService) -> None:
    with pytest.raises(NotFound):
        asyncio.run(photo_service.update_caption("missing", "x"))


def test_delete_one_removes_exactly_one(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    result = asyncio.run(
        photo_service.upload_gallery([data_url(b"one"), data_url(b"two")])
    )
    target, survivor = result.entries

    removed = asyncio.run(photo_service.delete_one(target.id))

    assert removed.id == target.id
    assert storage.deletes == [target.photo.storage_id]
    assert [entry.id for entry in photo_service.list_photos().gallery] == [survivor.id]
    with pytest.raises(NotFound):
        asyncio.run(photo_service.delete_one(target.id))


def test_delete_one_proceeds_when_storage_delete_fails(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    result = asyncio.run(photo_service.upload_gallery([data_url(b"one")]))
    storage.fail_deletes = True

    asyncio.run(photo_service.delete_one(result.entries[0].id))

    assert photo_service.list_photos().gallery == ()
    assert storage.deletes == [result.entries[0].photo.storage_id]


def test_clear_all_empties_store_despite_delete_failures(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    asyncio.run(photo_service.upload_main(data_url(b"main")))
    asyncio.run(photo_service.upload_gallery([data_url(b"one"), data_url(b"two")]))
    storage.fail_deletes = True

    failed = asyncio.run(photo_service.clear_all())

    assert failed == 3
    assert len(storage.deletes) == 3
    assert photo_service.list_photos().to_dict() == {
        "mainPhoto": None,
        "galleryPhotos": [],
    }


def test_clear_all_deletes_stored_objects(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    asyncio.run(photo_service.upload_main(data_url(b"main")))
    asyncio.run(photo_service.upload_gallery([data_url(b"one")]))

    failed = asyncio.run(photo_service.clear_all())

    assert failed == 0
    assert storage.objects == {}


def test_concurrent_gallery_uploads_keep_ids_and_captions_distinct() -> None:
    service = PhotoService(storage=FakePhotoStorage(), store=InMemoryMetadataStore())

    async def run_batches() -> None:
        await asyncio.gather(
            *(service.upload_gallery([data_url(b"x"), data_url(b"y")]) for _ in range(5))
        )

    asyncio.run(run_batches())

    gallery = service.list_photos().gallery
    assert len(gallery) == 10
    assert len({entry.id for entry in gallery}) == 10
    assert [entry.caption for entry in gallery] == [f"Photo {n}" for n in range(1, 11)]


def test_back_to_back_local_uploads_keep_their_own_bytes(tmp_path: Path) -> None:
    storage = LocalPhotoStorage.create(tmp_path)
    service = PhotoService(storage=storage, store=InMemoryMetadataStore())

    for n in range(20):
        asyncio.run(service.upload_gallery([data_url(f"gallery-{n}".encode())]))
    mains = [
        asyncio.run(service.upload_main(data_url(f"main-{n}".encode())))
        for n in range(5)
    ]

    gallery = service.list_photos().gallery
    storage_ids = [entry.photo.storage_id for entry in gallery]
    assert len(set(storage_ids)) == 20
    assert len({photo.storage_id for photo in mains}) == 5
    for n, entry in enumerate(gallery):
        assert (tmp_path / entry.photo.storage_id).read_bytes() == f"gallery-{n}".encode()
    for n, photo in enumerate(mains):
        assert (tmp_path / photo.storage_id).read_bytes() == f"main-{n}".encode()

    asyncio.run(service.delete_one(gallery[0].id))

    for n, entry in enumerate(gallery[1:], start=1):
        assert (tmp_path / entry.photo.storage_id).read_bytes() == f"gallery-{n}".encode()


def test_storage_names_follow_prefix_and_index(
    photo_service: PhotoService, storage: FakePhotoStorage
) -> None:
    asyncio.run(photo_service.upload_gallery([data_url(b"a"), data_url(b"b")]))

    first, second = storage.uploads
    assert first.startswith("gallery-")
    assert first.split("-")[2] == "0"
    assert second.split("-")[2] == "1"
    assert first != second
