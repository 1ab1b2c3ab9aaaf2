"""Custom exception hierarchy for PixelPerfect ID."""

from __future__ import annotations


class PixelPerfectError(Exception):
    """Base exception for all PixelPerfect ID errors."""


class ValidationError(PixelPerfectError):
    """Raised when input validation fails."""


class DecodeError(PixelPerfectError):
    """Raised when uploaded data cannot be decoded as an image."""


class RenderError(PixelPerfectError):
    """Raised when the rendering surface fails to produce an image."""


class NoImageLoadedError(PixelPerfectError):
    """Raised when an action needs an uploaded image and there is none."""
