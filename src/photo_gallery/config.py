"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

StorageBackend = Literal["local", "cloudinary", "s3", "supabase"]

_REQUIRED_STORAGE_SETTINGS: dict[str, tuple[str, ...]] = {
    "local": ("uploads_dir",),
    "cloudinary": (
        "cloudinary_cloud_name",
        "cloudinary_api_key",
        "cloudinary_api_secret",
    ),
    "s3": ("aws_s3_bucket",),
    "supabase": ("supabase_url", "supabase_service_key", "supabase_bucket"),
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    environment: str = _ENVIRONMENT
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 5005
    cors_origins: str = "*"

    storage_backend: StorageBackend = "local"
    storage_folder: str = "gallery"
    uploads_dir: str = "public/uploads"
    public_base_url: str = ""

    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None

    aws_s3_bucket: str | None = None
    aws_region: str = "us-east-1"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_bucket: str | None = None

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def missing_storage_settings(self) -> list[str]:
        """Return env names the selected storage backend still needs."""
        return [
            name.upper()
            for name in _REQUIRED_STORAGE_SETTINGS[self.storage_backend]
            if not getattr(self, name)
        ]


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins = [chunk.strip().rstrip("/") for chunk in cleaned.split(",")]
    return [origin for origin in origins if origin] or ["*"]
