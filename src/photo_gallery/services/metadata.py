"""Gallery metadata store."""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Protocol

from photo_gallery.domain.photos import GalleryEntry, GallerySnapshot, PhotoRef


class MetadataStore(Protocol):
    """Interface for the main photo and the ordered gallery list."""

    main_photo: PhotoRef | None

    def snapshot(self) -> GallerySnapshot:
        """Return a copy of the current metadata."""

    def count(self) -> int:
        """Return the number of gallery entries."""

    def append(self, entries: Iterable[GalleryEntry]) -> None:
        """Append entries to the end of the gallery."""

    def find(self, entry_id: str) -> GalleryEntry | None:
        """Return the entry with the given id, if present."""

    def set_caption(self, entry_id: str, caption: str) -> bool:
        """Update an entry caption; return False when the id is unknown."""

    def remove(self, entry_id: str) -> GalleryEntry | None:
        """Remove and return the entry with the given id, if present."""

    def clear(self) -> GallerySnapshot:
        """Reset to empty and return what was held."""


@dataclass
class InMemoryMetadataStore(MetadataStore):
    """Process-lifetime metadata; nothing survives a restart."""

    main_photo: PhotoRef | None = None
    _gallery: list[GalleryEntry] = field(default_factory=list)

    def snapshot(self) -> GallerySnapshot:
        return GallerySnapshot(
            main_photo=self.main_photo,
            gallery=tuple(replace(entry) for entry in self._gallery),
        )

    def count(self) -> int:
        return len(self._gallery)

    def append(self, entries: Iterable[GalleryEntry]) -> None:
        """Append entries, rejecting any id already in the gallery."""
        new_entries = list(entries)
        seen = {entry.id for entry in self._gallery}
        for entry in new_entries:
            if entry.id in seen:
                raise ValueError(f"Duplicate gallery id: {entry.id}")
            seen.add(entry.id)
        self._gallery.extend(new_entries)

    def find(self, entry_id: str) -> GalleryEntry | None:
        for entry in self._gallery:
            if entry.id == entry_id:
                return entry
        return None

    def set_caption(self, entry_id: str, caption: str) -> bool:
        entry = self.find(entry_id)
        if entry is None:
            return False
        entry.caption = caption
        return True

    def remove(self, entry_id: str) -> GalleryEntry | None:
        for index, entry in enumerate(self._gallery):
            if entry.id == entry_id:
                return self._gallery.pop(index)
        return None

    def clear(self) -> GallerySnapshot:
        previous = GallerySnapshot(
            main_photo=self.main_photo, gallery=tuple(self._gallery)
        )
        self.main_photo = None
        self._gallery = []
        return previous
