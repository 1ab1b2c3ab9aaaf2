"""Rendering surface: execute a DrawPlan and encode the result."""

from __future__ import annotations

import hashlib
import io
import logging

from PIL import Image

from ..config import Config
from ..exceptions import RenderError
from ..models import DrawPlan, RenderedImage, SourceImage, TargetSpec
from .geometry import plan_draw
from .resize import high_quality_resize

logger = logging.getLogger("pixelperfect.composition.render")


def render(source: Image.Image, plan: DrawPlan) -> Image.Image:
    """Draw ``plan.source_rect`` of ``source`` into ``plan.dest_rect``.

    The destination rectangle is rounded to whole pixels here; everything
    before this point is floating point.

    Returns:
        RGB image of exactly ``plan.canvas_size``.

    Raises:
        RenderError: If the drawing surface cannot produce the image.
    """
    dest = plan.dest_rect
    left, top = round(dest.x), round(dest.y)
    draw_w = max(1, round(dest.x2) - left)
    draw_h = max(1, round(dest.y2) - top)

    try:
        canvas = Image.new("RGB", plan.canvas_size, plan.background)
        drawn = high_quality_resize(
            source, (draw_w, draw_h), box=plan.source_rect.to_box()
        )
        if drawn.mode == "RGBA":
            # Alpha-composite onto the background so no holes reach the JPEG
            canvas.paste(drawn, (left, top), drawn)
        else:
            canvas.paste(drawn, (left, top))
    except (OSError, ValueError, MemoryError) as e:
        raise RenderError(f"Could not render {plan.canvas_size}: {e}") from e

    return canvas


def encode_jpeg(image: Image.Image) -> bytes:
    """Serialize an image with the fixed output encoding and quality."""
    buffer = io.BytesIO()
    try:
        image.convert("RGB").save(
            buffer, format=Config.OUTPUT_FORMAT, quality=Config.JPEG_QUALITY
        )
    except (OSError, ValueError) as e:
        raise RenderError(f"Could not encode image: {e}") from e
    return buffer.getvalue()


def render_target(source: SourceImage, spec: TargetSpec) -> RenderedImage:
    """Render the source image at ``spec`` and encode it.

    Always works from the untouched source so repeated resizes never
    recompress an earlier result.

    Raises:
        ValidationError: If the target size is not positive.
        RenderError: If drawing or encoding fails.
    """
    plan = plan_draw(source.size, spec.size, spec.mode)
    image = render(source.image, plan)
    data = encode_jpeg(image)
    digest = hashlib.sha256(data).hexdigest()

    logger.info(
        "Rendered %s %dx%d -> %dx%d (%d bytes)",
        spec.mode.value, source.width, source.height, spec.width, spec.height, len(data),
    )

    return RenderedImage(data=data, image=image, spec=spec, digest=digest)
