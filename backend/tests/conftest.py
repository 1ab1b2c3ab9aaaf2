"""Shared pytest fixtures for PixelPerfect ID tests."""

from __future__ import annotations

import io
from types import SimpleNamespace

import pytest
from PIL import Image

from backend.pixelperfect.config import Settings
from backend.pixelperfect.critique import CritiqueClient
from backend.pixelperfect.models import SourceImage
from backend.pixelperfect.session import PhotoSession


class FakeModels:
    """Stand-in for ``genai.Client().models``."""

    def __init__(self, text: str | None = "✅ Suitable", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[dict] = []
        self.on_call = None

    def generate_content(self, model, contents):
        self.calls.append({"model": model, "contents": contents})
        if self.on_call is not None:
            self.on_call()
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeGenaiClient:
    def __init__(self, models: FakeModels) -> None:
        self.models = models


def png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def fake_models() -> FakeModels:
    return FakeModels()


@pytest.fixture
def settings_with_key() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture
def make_critique_client(settings_with_key):
    """Build a client around a FakeModels configured with the given kwargs."""

    def _make(**kwargs) -> CritiqueClient:
        return CritiqueClient(settings_with_key, client=FakeGenaiClient(FakeModels(**kwargs)))

    return _make


@pytest.fixture
def critique_client(settings_with_key, fake_models) -> CritiqueClient:
    return CritiqueClient(settings_with_key, client=FakeGenaiClient(fake_models))


@pytest.fixture
def landscape_image() -> Image.Image:
    """1000x800 RGB photo stand-in."""
    return Image.new("RGB", (1000, 800), (120, 160, 200))


@pytest.fixture
def split_image() -> Image.Image:
    """1000x500 image, left half blue and right half red."""
    img = Image.new("RGB", (1000, 500), (0, 0, 255))
    img.paste((255, 0, 0), (500, 0, 1000, 500))
    return img


@pytest.fixture
def rgba_image() -> Image.Image:
    """Fully transparent RGBA image."""
    return Image.new("RGBA", (40, 60), (0, 0, 0, 0))


@pytest.fixture
def landscape_source(landscape_image) -> SourceImage:
    return SourceImage(image=landscape_image, name="landscape.png")


@pytest.fixture
def session(critique_client) -> PhotoSession:
    return PhotoSession(Settings(api_key="test-key"), critique_client)


@pytest.fixture
def loaded_session(session, landscape_image) -> PhotoSession:
    session.load_bytes(png_bytes(landscape_image), name="landscape.png")
    return session
