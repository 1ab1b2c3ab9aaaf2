"""Input validation for PixelPerfect ID."""

from __future__ import annotations

import math
from pathlib import Path

from .config import Config
from .exceptions import ValidationError


def _to_number(value: object, label: str) -> float:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{label} must be a number, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{label} must be a number, got {value!r}") from e
    if not math.isfinite(number):
        raise ValidationError(f"{label} must be finite, got {value!r}")
    return number


def validate_dimensions(width: object, height: object) -> tuple[int, int]:
    """Validate target dimensions entered by the user.

    Accepts numbers or numeric strings as they come from form fields.
    Fractional values are truncated to whole pixels before the range check.

    Args:
        width: Target width in pixels.
        height: Target height in pixels.

    Returns:
        The dimensions as a (width, height) tuple of ints.

    Raises:
        ValidationError: If dimensions are invalid.
    """
    w = int(_to_number(width, "Width"))
    h = int(_to_number(height, "Height"))

    if w <= 0 or h <= 0:
        raise ValidationError(f"Dimensions must be positive, got {w}x{h}")
    if w > Config.MAX_IMAGE_SIZE or h > Config.MAX_IMAGE_SIZE:
        raise ValidationError(
            f"Dimensions exceed maximum {Config.MAX_IMAGE_SIZE}, got {w}x{h}"
        )
    return w, h


def validate_file_path(path: str) -> None:
    """Validate that an uploaded file exists.

    The format is not checked here; decoding decides what is an image.

    Args:
        path: Path to the uploaded file.

    Raises:
        ValidationError: If the file doesn't exist.
    """
    p = Path(path)
    if not p.is_file():
        raise ValidationError(f"File not found: {path}")
