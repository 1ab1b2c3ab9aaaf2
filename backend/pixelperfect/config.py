"""Global configuration for PixelPerfect ID."""

from __future__ import annotations

import os
from dataclasses import dataclass

from PIL import Image

# Checked in order; the first non-empty value wins
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


class Config:
    """Global configuration."""

    # Processing limits
    MAX_IMAGE_SIZE = 8192

    # Output
    OUTPUT_FORMAT = "JPEG"
    OUTPUT_MIME_TYPE = "image/jpeg"
    JPEG_QUALITY = 95  # 0.95 on the canvas scale
    BACKGROUND_COLOR = (255, 255, 255)
    DOWNLOAD_PREFIX = "pixelperfect-id"

    # Quality
    RESIZE_QUALITY = Image.Resampling.LANCZOS
    GAMMA = 2.2

    # AI
    GEMINI_MODEL = "gemini-2.5-flash-image"

    # Server
    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_PORT = 7860


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved once at startup.

    ``api_key`` is ``None`` when no credential is configured; the critique
    client treats that as a normal outcome rather than an error.
    """

    api_key: str | None = None
    model: str = Config.GEMINI_MODEL
    host: str = Config.DEFAULT_HOST
    port: int = Config.DEFAULT_PORT
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``.

        Returns:
            Resolved settings.
        """
        env = os.environ if environ is None else environ

        api_key = None
        for name in API_KEY_ENV_VARS:
            value = env.get(name, "").strip()
            if value:
                api_key = value
                break

        try:
            port = int(env.get("PIXELPERFECT_PORT", Config.DEFAULT_PORT))
        except ValueError:
            port = Config.DEFAULT_PORT

        return cls(
            api_key=api_key,
            model=env.get("PIXELPERFECT_MODEL") or Config.GEMINI_MODEL,
            host=env.get("PIXELPERFECT_HOST") or Config.DEFAULT_HOST,
            port=port,
            log_level=env.get("PIXELPERFECT_LOG_LEVEL") or "INFO",
        )
