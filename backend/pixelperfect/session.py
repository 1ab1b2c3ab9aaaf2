"""Per-user session state and the actions a user can trigger."""

from __future__ import annotations

import logging
import tempfile
import time
from pathlib import Path

from PIL import Image

from .composition import render_target
from .config import Config, Settings
from .constants import get_preset
from .critique import CritiqueCache, CritiqueClient
from .enums import ResizeMode
from .exceptions import NoImageLoadedError, RenderError
from .loader import load_image
from .models import RenderedImage, SourceImage, TargetSpec
from .validators import validate_dimensions

logger = logging.getLogger("pixelperfect.session")


class PhotoSession:
    """State of one editing session.

    Each public method is one user action. Actions validate before they
    mutate, so a failed action leaves the session exactly as it was.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        critique_client: CritiqueClient | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.critique_client = critique_client or CritiqueClient(self.settings)
        self.critique_cache = CritiqueCache()

        self.source: SourceImage | None = None
        # None while the original upload is on display
        self.rendered: RenderedImage | None = None
        self._original_render: RenderedImage | None = None

        self.target_width: int | str = ""
        self.target_height: int | str = ""
        self.is_processing = False

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def has_image(self) -> bool:
        return self.source is not None

    def _require_source(self) -> SourceImage:
        if self.source is None:
            raise NoImageLoadedError("No image loaded. Upload a photo first.")
        return self.source

    @property
    def display_image(self) -> Image.Image | None:
        """Image currently shown to the user."""
        if self.source is None:
            return None
        if self.rendered is not None:
            return self.rendered.image
        return self.source.image

    @property
    def dimensions(self) -> tuple[int, int]:
        """Pixel size of the displayed image, (0, 0) when nothing is loaded."""
        image = self.display_image
        return image.size if image is not None else (0, 0)

    @property
    def displayed_digest(self) -> str | None:
        """Identity of the displayed image, None when nothing is loaded."""
        if self.source is None:
            return None
        return self._displayed_render().digest

    def _displayed_render(self) -> RenderedImage:
        """Encoded form of the displayed image.

        Before any resize this is the original encoded at its natural size.
        """
        source = self._require_source()
        if self.rendered is not None:
            return self.rendered
        if self._original_render is None:
            spec = TargetSpec(source.width, source.height, ResizeMode.STRETCH)
            self._original_render = render_target(source, spec)
        return self._original_render

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def _replace_source(self, source: SourceImage) -> tuple[int, int]:
        self.source = source
        self.rendered = None
        self._original_render = None
        self.target_width, self.target_height = source.size
        self.critique_cache.invalidate()
        return source.size

    def load_file(self, file_path: str) -> tuple[int, int]:
        """Replace the session's image with an uploaded file.

        Returns:
            Natural (width, height) of the new image.

        Raises:
            ValidationError: If the file doesn't exist.
            DecodeError: If the file isn't a decodable image. The current
                image stays in place.
        """
        return self._replace_source(load_image(file_path))

    def load_bytes(self, data: bytes, name: str = "upload") -> tuple[int, int]:
        """Same as :meth:`load_file` for in-memory uploads."""
        return self._replace_source(load_image(data, name=name))

    # ------------------------------------------------------------------
    # Resize
    # ------------------------------------------------------------------

    def apply_resize(self, width: int, height: int, mode: ResizeMode) -> RenderedImage:
        """Resize the original upload and put the result on display.

        Raises:
            NoImageLoadedError: If nothing has been uploaded.
            ValidationError: If the dimensions are invalid.
            RenderError: If rendering fails; the previous result stays.
        """
        source = self._require_source()
        width, height = validate_dimensions(width, height)
        spec = TargetSpec(width, height, mode)

        self.is_processing = True
        try:
            rendered = render_target(source, spec)
        except RenderError:
            logger.error("Resize to %dx%d failed", width, height, exc_info=True)
            raise
        finally:
            self.is_processing = False

        self.rendered = rendered
        self.target_width, self.target_height = width, height
        self.critique_cache.invalidate()
        return rendered

    def apply_preset(self, preset_id: str) -> RenderedImage:
        """Center-crop resize to a standard ID size."""
        preset = get_preset(preset_id)
        spec = preset.to_target()
        logger.info("Applying preset %s", preset.id)
        return self.apply_resize(spec.width, spec.height, spec.mode)

    def apply_custom(self, width: object, height: object) -> RenderedImage:
        """Stretch resize to user-entered dimensions.

        Args:
            width: Raw width field value.
            height: Raw height field value.

        Raises:
            ValidationError: If either value is missing, non-numeric or not
                positive. Nothing is applied.
        """
        self._require_source()
        w, h = validate_dimensions(width, height)
        return self.apply_resize(w, h, ResizeMode.STRETCH)

    def reset(self) -> tuple[int, int]:
        """Put the original upload back on display.

        Returns:
            Natural (width, height) of the original.
        """
        source = self._require_source()
        self.rendered = None
        self.target_width, self.target_height = source.size
        self.critique_cache.invalidate()
        logger.info("Reset to original %dx%d", source.width, source.height)
        return source.size

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def export_bytes(self) -> bytes:
        """JPEG bytes of the displayed image."""
        return self._displayed_render().data

    def download_filename(self) -> str:
        return f"{Config.DOWNLOAD_PREFIX}-{int(time.time() * 1000)}.jpg"

    def download(self, directory: str | Path | None = None) -> Path:
        """Write the displayed image to disk for download.

        Args:
            directory: Where to write; the system temp directory by default.

        Returns:
            Path of the written JPEG.
        """
        data = self.export_bytes()
        target_dir = Path(directory) if directory else Path(tempfile.gettempdir())
        path = target_dir / self.download_filename()
        path.write_bytes(data)
        logger.info("Saved download %s (%d bytes)", path.name, len(data))
        return path

    def request_critique(self) -> str:
        """Critique the displayed image, reusing the cached answer if any.

        The model is only called on explicit request. The result is cached
        only if the same image is still on display when it arrives.
        """
        displayed = self._displayed_render()
        cached = self.critique_cache.get(displayed.digest)
        if cached is not None:
            logger.debug("Critique cache hit for %s", displayed.digest[:12])
            return cached

        result = self.critique_client.analyze(displayed.data)

        if self.source is not None and self._displayed_render().digest == displayed.digest:
            self.critique_cache.store(displayed.digest, result)
        else:
            logger.info("Discarding critique for an image no longer on display")
        return result
