"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from photo_gallery.api.photos import router as photos_router
from photo_gallery.app_logging import configure_logging
from photo_gallery.config import parse_cors_origins
from photo_gallery.containers import AppContainer
from photo_gallery.domain.errors import PhotoGalleryError, UnsupportedVerb

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    debug_errors = container.settings.environment == "local"

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.container.storage_error:
            logger.error(app.state.container.storage_error)
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_methods=CORS_METHODS,
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(PhotoGalleryError)
    async def handle_gallery_error(
        request: Request, exc: PhotoGalleryError
    ) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "error": exc.message},
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = (
            "Invalid upload data" if request.method == "POST" else "Invalid request data"
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": message}
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": UnsupportedVerb().message},
                headers=exc.headers,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("API error", extra={"path": request.url.path})
        content: dict[str, str] = {"error": "Internal server error"}
        if debug_errors:
            content["details"] = f"{type(exc).__name__}: {exc}"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    app.include_router(photos_router)

    if container.uploads_dir is not None:
        app.mount(
            "/uploads",
            StaticFiles(directory=str(container.uploads_dir)),
            name="uploads",
        )

    return app
