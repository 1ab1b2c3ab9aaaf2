"""AI suitability critique of ID photos via Gemini."""

from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from .config import Config, Settings
from .constants import (
    CRITIQUE_FAILED_MESSAGE,
    CRITIQUE_PROMPT,
    EMPTY_CRITIQUE_MESSAGE,
    MISSING_KEY_MESSAGE,
)

logger = logging.getLogger("pixelperfect.critique")


class CritiqueClient:
    """Ask a multimodal model whether a photo is fit for an ID document.

    Never raises for credential or service problems: the caller always gets
    text back, either the critique or a message explaining why there is none.
    """

    def __init__(self, settings: Settings, client: Any | None = None) -> None:
        self.settings = settings
        self._client = client

    def _get_client(self) -> Any | None:
        """Lazily create the genai client. Returns None without a key."""
        if self._client is None and self.settings.has_api_key:
            self._client = genai.Client(api_key=self.settings.api_key)
            logger.info("Google GenAI client initialized")
        return self._client

    def analyze(self, image_bytes: bytes, mime_type: str = Config.OUTPUT_MIME_TYPE) -> str:
        """Request a critique of an encoded image.

        Args:
            image_bytes: Encoded image as displayed to the user.
            mime_type: MIME type of ``image_bytes``.

        Returns:
            The model's text, or a placeholder message on any failure.
        """
        try:
            client = self._get_client()
        except Exception as e:
            logger.error("Could not initialize Google GenAI client: %s", e)
            return CRITIQUE_FAILED_MESSAGE

        if client is None:
            logger.warning("API key not found in environment variables")
            return MISSING_KEY_MESSAGE

        logger.info("Requesting critique from %s (%d bytes)", self.settings.model, len(image_bytes))

        try:
            response = client.models.generate_content(
                model=self.settings.model,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                    CRITIQUE_PROMPT,
                ],
            )
        except Exception as e:
            logger.error("Gemini analysis error: %s", e, exc_info=True)
            return CRITIQUE_FAILED_MESSAGE

        text = getattr(response, "text", None)
        return text or EMPTY_CRITIQUE_MESSAGE


class CritiqueCache:
    """Remember the critique of the image currently on display.

    Holds a single entry keyed by the displayed image's digest. Any new
    render replaces the key, so a stale answer is never shown for it.
    """

    def __init__(self) -> None:
        self._key: str | None = None
        self._result: str | None = None

    def get(self, key: str) -> str | None:
        if key == self._key:
            return self._result
        return None

    def store(self, key: str, result: str) -> None:
        self._key = key
        self._result = result

    def invalidate(self) -> None:
        self._key = None
        self._result = None
