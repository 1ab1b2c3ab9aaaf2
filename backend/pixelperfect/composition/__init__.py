"""Geometry transform and rendering surface for PixelPerfect ID."""

from .geometry import plan_draw
from .render import encode_jpeg, render, render_target

__all__ = ["plan_draw", "render", "render_target", "encode_jpeg"]
