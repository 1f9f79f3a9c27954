import logging
import os
import shutil
import subprocess
from pathlib import Path

from PIL import ImageFont

from texart.errors import InvalidArgument

logger = logging.getLogger(__name__)


def find_font(name: str) -> str | None:
    """Ask fontconfig for the file that provides a font name like ``"monospace"``."""
    if shutil.which("fc-match") is None:
        return None
    result = subprocess.run(["fc-match", "-f", "%{file}", name], capture_output=True, text=True)
    if result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    return None


def load_font(font: str | Path | None = None, size: float = 12.0) -> ImageFont.FreeTypeFont:
    """Load a font face from a file path or fontconfig name.

    With no font, Pillow's bundled default face is used.
    """
    if font is None:
        face = ImageFont.load_default(size=size)
        if not isinstance(face, ImageFont.FreeTypeFont):
            raise InvalidArgument("Pillow was built without FreeType; pass a font path")
        return face
    looks_like_path = isinstance(font, Path) or os.sep in font or Path(font).suffix != ""
    if os.path.exists(font):
        path = font
    elif looks_like_path:
        path = None
    else:
        path = find_font(font)
    if path is None:
        raise InvalidArgument(f"Font not found: {font}")
    logger.debug("Loading font %s at size %s", path, size)
    try:
        return ImageFont.truetype(path, size)
    except OSError as e:
        raise InvalidArgument(f"Could not load font {path}: {e}") from e


def resize_font(font: ImageFont.FreeTypeFont, size: float) -> ImageFont.FreeTypeFont:
    """Return the same face at a different point size."""
    if hasattr(font.path, "seek"):
        # Faces loaded from memory re-read their source buffer
        font.path.seek(0)
    return font.font_variant(size=size)
