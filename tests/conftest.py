import os

import pytest
from PIL import ImageFont

from texart.fonts import find_font

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _find_monospace_font():
    """Find a monospace font on the system."""
    for path in _FONT_CANDIDATES:
        if os.path.exists(path):
            return path
    return find_font("monospace")


FONT_PATH = _find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")


@pytest.fixture
def font_face():
    """Pillow's bundled FreeType face, available without system fonts."""
    face = ImageFont.load_default(size=12)
    if not isinstance(face, ImageFont.FreeTypeFont):
        pytest.skip("Pillow built without FreeType")
    return face


@pytest.fixture
def mono_font():
    if FONT_PATH is None:
        pytest.skip("No monospace font found on system")
    return ImageFont.truetype(FONT_PATH, 12)
