"""Error taxonomy for gallery operations."""


class PhotoGalleryError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidEncoding(PhotoGalleryError):
    """Upload payload is not a base64 data URL."""

    status_code = 400
    default_message = "Invalid base64 string"


class NotFound(PhotoGalleryError):
    """Referenced gallery entry does not exist."""

    status_code = 404
    default_message = "Photo not found"


class UnsupportedVerb(PhotoGalleryError):
    status_code = 405
    default_message = "Method not allowed"


class UnconfiguredStorage(PhotoGalleryError):
    """Selected storage backend is missing required settings."""

    default_message = "Cloud storage not configured"


class StorageError(PhotoGalleryError):
    """Backing store rejected or failed an operation."""


class StorageUploadFailed(StorageError):
    default_message = "Photo upload failed"


class StorageDeleteFailed(StorageError):
    default_message = "Photo delete failed"
