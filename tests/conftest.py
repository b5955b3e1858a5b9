"""
Shared fixtures for the chat-to-DOCX tests.
"""

import io
import sys
import threading
import time
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_png(width: int = 60, height: int = 20) -> bytes:
    """A white PNG with a black bar, like a tiny rendered equation."""
    from PIL import Image, ImageDraw

    image = Image.new("RGB", (width, height), "white")
    ImageDraw.Draw(image).rectangle([5, height // 3, width - 5, 2 * height // 3], fill="black")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class FakeSurface:
    """Rendering surface that fails on chosen inputs and tracks overlap."""

    def __init__(self, fail_on=(), delay: float = 0.0, data: bytes = None):
        self.lock = threading.Lock()
        self.fail_on = set(fail_on)
        self.delay = delay
        self.data = data if data is not None else make_png()
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    def rasterize(self, latex, display_mode=True):
        from chat2docx.utils.math_render import MathRenderError

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            self.calls.append((latex, display_mode))
            if self.delay:
                time.sleep(self.delay)
            if latex in self.fail_on:
                raise MathRenderError(f"cannot typeset {latex}")
            return self.data
        finally:
            self.in_flight -= 1


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def fake_surface():
    return FakeSurface()


@pytest.fixture
def fake_renderer(fake_surface):
    from chat2docx.utils.math_render import MathRenderer

    return MathRenderer(surface=fake_surface)
