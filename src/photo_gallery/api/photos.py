"""Photo gallery API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from photo_gallery.api.models import CaptionUpdateRequest, PhotoUploadRequest
from photo_gallery.domain.errors import UnconfiguredStorage
from photo_gallery.services.photos import PhotoService

if TYPE_CHECKING:
    from photo_gallery.containers import AppContainer

router = APIRouter(prefix="/api", tags=["photos"])

MAIN_PHOTO_TYPES = {"childhood", "main"}


def get_photo_service(request: Request) -> PhotoService:
    """Return the photo service, failing when storage is not configured."""
    container: AppContainer = request.app.state.container
    if container.photo_service is None:
        raise UnconfiguredStorage(container.storage_error)
    return container.photo_service


@router.options("/photos")
async def photos_preflight() -> Response:
    """Answer bare preflight requests."""
    return Response(status_code=status.HTTP_200_OK)


@router.get("/photos")
async def list_photos(
    service: PhotoService = Depends(get_photo_service),
) -> dict[str, object]:
    """Return the main photo and the gallery."""
    return service.list_photos().to_dict()


@router.post("/photos")
async def upload_photos(
    body: PhotoUploadRequest,
    service: PhotoService = Depends(get_photo_service),
) -> dict[str, object]:
    """Upload a main photo or a batch of gallery photos."""
    if body.type in MAIN_PHOTO_TYPES and body.photo:
        photo = await service.upload_main(body.photo)
        return {
            "success": True,
            "photo": photo.to_dict(),
            "message": "Main photo uploaded successfully!",
        }
    if body.type == "gallery" and body.photos:
        result = await service.upload_gallery(body.photos)
        message = f"{len(result.entries)} photos uploaded successfully!"
        if result.failures:
            message = f"{message} {len(result.failures)} failed."
        return {
            "success": True,
            "photos": [entry.to_dict() for entry in result.entries],
            "failed": [
                {"index": failure.index, "error": failure.error}
                for failure in result.failures
            ],
            "message": message,
        }
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid upload data"
    )


@router.put("/photos")
async def update_caption(
    body: CaptionUpdateRequest,
    photo_id: str | None = Query(default=None, alias="photoId"),
    service: PhotoService = Depends(get_photo_service),
) -> dict[str, object]:
    """Update the caption of one gallery photo."""
    if not photo_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="photoId is required"
        )
    await service.update_caption(photo_id, body.caption)
    return {"success": True, "message": "Caption updated successfully!"}


@router.delete("/photos")
async def delete_photos(
    photo_id: str | None = Query(default=None, alias="photoId"),
    service: PhotoService = Depends(get_photo_service),
) -> dict[str, object]:
    """Delete one gallery photo, or everything when no id is given."""
    if photo_id:
        await service.delete_one(photo_id)
        return {"success": True, "message": "Photo deleted successfully!"}
    await service.clear_all()
    return {"success": True, "message": "All photos cleared successfully!"}
