"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from photo_gallery.api.app import create_app
from photo_gallery.config import Settings
from photo_gallery.containers import AppContainer, build_container


def startup_banner(container: AppContainer) -> str:
    """Describe where the API is served and where photos are stored."""
    settings = container.settings
    base = f"http://localhost:{settings.port}"
    if container.uploads_dir is not None:
        storage = f"Local filesystem ({container.uploads_dir})"
    else:
        storage = settings.storage_backend
    lines = [
        f"Photo Gallery running on port {settings.port}",
        f"Photo storage: {storage}",
        f"API available at: {base}/api/photos",
    ]
    if container.storage_error:
        lines.append(f"WARNING: {container.storage_error}")
    return "\n".join(lines)


def main(serve: bool = True) -> None:
    """Build the app, print the banner and run the server."""
    settings = Settings()
    container = build_container(settings)
    print(startup_banner(container))  # noqa: T201
    if serve:
        uvicorn.run(create_app(container), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
