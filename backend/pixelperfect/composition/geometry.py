"""Geometry transform: map source and target sizes to drawing instructions."""

from __future__ import annotations

import logging

from ..config import Config
from ..enums import ResizeMode
from ..exceptions import ValidationError
from ..models import DrawPlan, Rect

logger = logging.getLogger("pixelperfect.composition.geometry")


def plan_draw(
    source_size: tuple[int, int],
    target_size: tuple[int, int],
    mode: ResizeMode,
) -> DrawPlan:
    """Compute how to draw a source image onto a target canvas.

    All coordinates are floating point; rounding to whole pixels is left to
    the rendering surface. The canvas is always filled with opaque white
    before drawing so uncovered areas never stay transparent.

    Args:
        source_size: Natural (width, height) of the source image.
        target_size: Output canvas (width, height).
        mode: STRETCH, CROP_CENTER or FIT_CONTAIN.

    Returns:
        DrawPlan describing background, source rectangle and destination
        rectangle.

    Raises:
        ValidationError: If either size is not strictly positive.
    """
    src_w, src_h = source_size
    target_w, target_h = target_size

    if src_w <= 0 or src_h <= 0:
        raise ValidationError(f"Source size must be positive, got {src_w}x{src_h}")
    if target_w <= 0 or target_h <= 0:
        raise ValidationError(
            f"Target size must be positive, got {target_w}x{target_h}"
        )

    full_source = Rect(0.0, 0.0, float(src_w), float(src_h))
    full_canvas = Rect(0.0, 0.0, float(target_w), float(target_h))

    if mode == ResizeMode.STRETCH:
        source_rect, dest_rect = full_source, full_canvas
    elif mode == ResizeMode.CROP_CENTER:
        source_rect, dest_rect = _center_crop(src_w, src_h, target_w, target_h), full_canvas
    elif mode == ResizeMode.FIT_CONTAIN:
        source_rect, dest_rect = full_source, _contain(src_w, src_h, target_w, target_h)
    else:
        raise ValidationError(f"Unknown resize mode: {mode!r}")

    logger.debug(
        "%s %dx%d -> %dx%d: src=%s dest=%s",
        mode.value, src_w, src_h, target_w, target_h, source_rect, dest_rect,
    )

    return DrawPlan(
        canvas_size=(target_w, target_h),
        background=Config.BACKGROUND_COLOR,
        source_rect=source_rect,
        dest_rect=dest_rect,
    )


def _center_crop(src_w: int, src_h: int, target_w: int, target_h: int) -> Rect:
    """Largest centered source region with the target's aspect ratio."""
    source_aspect = src_w / src_h
    target_aspect = target_w / target_h

    if source_aspect > target_aspect:
        # Source is wider: keep full height, trim the sides
        crop_h = float(src_h)
        crop_w = src_h * target_aspect
        offset_x = (src_w - crop_w) / 2
        offset_y = 0.0
    else:
        # Source is taller or equal: keep full width, trim top and bottom
        crop_w = float(src_w)
        crop_h = src_w / target_aspect
        offset_x = 0.0
        offset_y = (src_h - crop_h) / 2

    return Rect(offset_x, offset_y, crop_w, crop_h)


def _contain(src_w: int, src_h: int, target_w: int, target_h: int) -> Rect:
    """Centered destination for the whole source scaled to fit the canvas."""
    scale = min(target_w / src_w, target_h / src_h)
    draw_w = src_w * scale
    draw_h = src_h * scale
    return Rect((target_w - draw_w) / 2, (target_h - draw_h) / 2, draw_w, draw_h)
