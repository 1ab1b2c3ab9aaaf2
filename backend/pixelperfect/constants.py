"""Shared constants for PixelPerfect ID."""

from __future__ import annotations

from .exceptions import ValidationError
from .models import Preset

# Sizes are millimetres at 300dpi
ID_PRESETS: tuple[Preset, ...] = (
    Preset(
        id="1inch",
        label="1 Inch (1寸)",
        width=295,
        height=413,
        description="25mm x 35mm @ 300dpi - Standard ID",
    ),
    Preset(
        id="2inch",
        label="2 Inch (2寸)",
        width=413,
        height=579,
        description="35mm x 49mm @ 300dpi - Passport/Visa",
    ),
    Preset(
        id="2inch_lg",
        label="Large 2 Inch (大2寸)",
        width=413,
        height=626,
        description="35mm x 53mm @ 300dpi",
    ),
)

CRITIQUE_PROMPT = """Act as a professional photographer reviewing an ID photo.
Analyze this image for suitability as a formal ID or Passport photo.
Check the following criteria:
1. Background (Is it clean/plain?)
2. Lighting (Are there shadows on the face?)
3. Face Visibility (Eyes open, looking straight?)
4. Head Position (Is it centered?)

Provide a short, constructive assessment in bullet points.
Start with an overall verdict: "✅ Suitable" or "⚠️ Needs Improvement"."""

# Text returned in place of a critique
MISSING_KEY_MESSAGE = "Error: API Key is missing. Please configure your environment."
EMPTY_CRITIQUE_MESSAGE = "No analysis could be generated."
CRITIQUE_FAILED_MESSAGE = "Failed to analyze image. Please try again later."


def get_preset(preset_id: str) -> Preset:
    """Look up a preset by identifier.

    Raises:
        ValidationError: If no preset has that identifier.
    """
    for preset in ID_PRESETS:
        if preset.id == preset_id:
            return preset
    raise ValidationError(
        f"Unknown preset '{preset_id}'. Available: {', '.join(p.id for p in ID_PRESETS)}"
    )
