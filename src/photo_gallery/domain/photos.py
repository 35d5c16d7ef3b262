"""Domain models for stored photos and gallery metadata."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PhotoRef:
    """Handle to stored bytes: where to fetch them and how to delete them."""

    reference: str
    storage_id: str
    permanent: bool = True

    def to_dict(self) -> dict[str, object]:
        return {
            "reference": self.reference,
            "storageId": self.storage_id,
            "permanent": self.permanent,
        }


@dataclass
class GalleryEntry:
    """One captioned item of the gallery; ``id`` never changes once assigned."""

    id: str
    photo: PhotoRef
    caption: str

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, **self.photo.to_dict(), "caption": self.caption}


@dataclass(frozen=True)
class GallerySnapshot:
    """Point-in-time copy of the metadata store."""

    main_photo: PhotoRef | None = None
    gallery: tuple[GalleryEntry, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "mainPhoto": self.main_photo.to_dict() if self.main_photo else None,
            "galleryPhotos": [entry.to_dict() for entry in self.gallery],
        }


@dataclass(frozen=True)
class UploadFailure:
    """A gallery payload whose upload did not persist."""

    index: int
    error: str


@dataclass(frozen=True)
class GalleryUploadResult:
    """Outcome of a batch gallery upload."""

    entries: list[GalleryEntry] = field(default_factory=list)
    failures: list[UploadFailure] = field(default_factory=list)
