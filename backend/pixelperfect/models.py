"""Data structures for PixelPerfect ID."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image as PILImage

from .enums import ResizeMode


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in floating point pixel coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def aspect(self) -> float:
        return self.width / self.height

    def to_box(self) -> tuple[float, float, float, float]:
        """Return the (left, upper, right, lower) box Pillow expects."""
        return (self.x, self.y, self.x2, self.y2)


@dataclass(frozen=True)
class DrawPlan:
    """Drawing instructions produced by the geometry transform.

    The canvas is filled with ``background`` first, then ``source_rect`` of the
    source image is drawn into ``dest_rect``.
    """
    canvas_size: tuple[int, int]
    background: tuple[int, int, int]
    source_rect: Rect
    dest_rect: Rect


@dataclass(frozen=True)
class TargetSpec:
    """Requested output size and how to get there."""
    width: int
    height: int
    mode: ResizeMode

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class Preset:
    """A named standard ID-photo size."""
    id: str
    label: str
    width: int
    height: int
    description: str

    def to_target(self) -> TargetSpec:
        # Presets always preserve the aspect ratio by center cropping
        return TargetSpec(self.width, self.height, ResizeMode.CROP_CENTER)


@dataclass(frozen=True)
class SourceImage:
    """The decoded upload, kept untouched for the whole session."""
    image: PILImage.Image
    name: str = "upload"

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


@dataclass(frozen=True)
class RenderedImage:
    """Encoded output of one resize action.

    ``digest`` identifies the rendered content and keys the critique cache.
    """
    data: bytes
    image: PILImage.Image
    spec: TargetSpec
    digest: str

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size
