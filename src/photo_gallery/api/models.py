"""Pydantic models for photo API request bodies."""

from pydantic import BaseModel


class PhotoUploadRequest(BaseModel):
    """Upload body: one main photo or a batch of gallery photos."""

    type: str
    photo: str | None = None
    photos: list[str] | None = None


class CaptionUpdateRequest(BaseModel):
    """Caption update body."""

    caption: str
