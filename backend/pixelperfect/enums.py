"""Resize modes for PixelPerfect ID."""

from __future__ import annotations

from enum import Enum


class ResizeMode(Enum):
    """How the source image is mapped onto the target canvas."""
    STRETCH = "stretch"
    CROP_CENTER = "crop_center"
    FIT_CONTAIN = "fit_contain"
