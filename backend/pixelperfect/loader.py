"""Upload adapter: turn user-supplied files into decoded source images."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps

from .exceptions import DecodeError
from .models import SourceImage
from .validators import validate_file_path

logger = logging.getLogger("pixelperfect.loader")

# Integer modes Pillow uses for 16-bit (and wider) grayscale files
_HIGH_BIT_DEPTH_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N")


def _to_8bit(image: Image.Image) -> Image.Image:
    """Scale 16-bit grayscale into 8-bit "L"; a plain convert() clips at 255."""
    arr = np.asarray(image, dtype=np.float32) / 256.0
    return Image.fromarray(np.clip(np.round(arr), 0, 255).astype(np.uint8))


def load_image(source: str | Path | bytes, name: str | None = None) -> SourceImage:
    """Decode an uploaded file into a SourceImage.

    Nothing is validated beyond what Pillow can decode. EXIF orientation is
    applied so the natural size matches what a browser would display.

    Args:
        source: Path to the uploaded file, or its raw bytes.
        name: Display name; defaults to the file name.

    Returns:
        The decoded source image with pixels fully loaded.

    Raises:
        ValidationError: If ``source`` is a path that doesn't exist.
        DecodeError: If the data cannot be decoded as an image.
    """
    if isinstance(source, bytes):
        fp: io.BytesIO | Path = io.BytesIO(source)
        name = name or "upload"
    else:
        validate_file_path(str(source))
        fp = Path(source)
        name = name or fp.name

    try:
        with Image.open(fp) as img:
            img.load()
            image = ImageOps.exif_transpose(img)
            if image.mode in _HIGH_BIT_DEPTH_MODES:
                image = _to_8bit(image)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Failed to load image '{name}': {e}") from e

    logger.info("Loaded image %s: %dx%d (%s)", name, image.width, image.height, image.mode)

    return SourceImage(image=image, name=name)
