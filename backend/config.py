"""
Techpack configuration: all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Page footer shown on every techpack page
    COPYRIGHT_FOOTER: str = os.environ.get(
        "COPYRIGHT_FOOTER",
        "ALL THE DESIGN ARE THE PROPERTY OF SAMO UNLESS OTHERWISE STATED COPYRIGHT © 2023-2033",
    )

    # Uploads (techpack image slots and the image-edit panel)
    MAX_UPLOAD_BYTES: int = int(os.environ.get("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

    # AI image editing
    IMAGE_EDIT_PROVIDER: str = os.environ.get("IMAGE_EDIT_PROVIDER", "gemini")  # "gemini" or "openai"
    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_IMAGE_MODEL: str = os.environ.get("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image")
    OPENAI_API_KEY: str = os.environ.get("OPENAI_API_KEY", "")
    OPENAI_IMAGE_MODEL: str = os.environ.get("OPENAI_IMAGE_MODEL", "gpt-image-1")

    # R2 / S3 storage used as the share target for exported PDFs
    R2_ENDPOINT: str = os.environ.get("R2_ENDPOINT", "")
    R2_ACCESS_KEY: str = os.environ.get("R2_ACCESS_KEY", "")
    R2_SECRET_KEY: str = os.environ.get("R2_SECRET_KEY", "")
    R2_SHARE_BUCKET: str = os.environ.get("R2_SHARE_BUCKET", "techpack-shares")
    R2_PUBLIC_URL: str = os.environ.get("R2_PUBLIC_URL", "")
    SHARE_MAX_BYTES: int = int(os.environ.get("SHARE_MAX_BYTES", str(25 * 1024 * 1024)))

    @property
    def share_configured(self) -> bool:
        return bool(self.R2_ENDPOINT and self.R2_ACCESS_KEY and self.R2_SECRET_KEY and self.R2_PUBLIC_URL)


# Singleton instance
settings = Settings()

# Validate required settings (production only; development and tests run without keys)
if settings.ENVIRONMENT == "production":
    if settings.IMAGE_EDIT_PROVIDER not in ("gemini", "openai"):
        raise RuntimeError("IMAGE_EDIT_PROVIDER must be 'gemini' or 'openai'")
    if settings.IMAGE_EDIT_PROVIDER == "gemini" and not settings.GEMINI_API_KEY:
        raise RuntimeError("GEMINI_API_KEY environment variable is required")
    if settings.IMAGE_EDIT_PROVIDER == "openai" and not settings.OPENAI_API_KEY:
        raise RuntimeError("OPENAI_API_KEY environment variable is required")
