"""Renderers rasterize a CharacterGrid back into an image.

Each character gets a square cell of ``character_spacing`` pixels. Glyphs are
centered horizontally in their cell and drawn on a baseline three quarters of
the way down it. That baseline is an approximation of vertical centering, so
unusually tall or deep glyphs can spill into neighbouring cells.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import BinaryIO, Protocol, runtime_checkable

from PIL import Image, ImageColor, ImageDraw, ImageFont

from texart.errors import InvalidArgument
from texart.fonts import resize_font
from texart.grid import CharacterGrid

logger = logging.getLogger(__name__)

DEFAULT_CHARACTER_SPACING = 8
DEFAULT_TEXT_SIZE = 12.0
DEFAULT_FOREGROUND_COLOR = (0, 0, 0)
DEFAULT_BACKGROUND_COLOR = (255, 255, 255)

# Fraction of the cell height at which the glyph baseline sits
BASELINE_FRACTION = 0.75

# Formats that can only store palette images
_PALETTE_FORMATS = {"GIF"}

Color = tuple[int, int, int]


@runtime_checkable
class Renderer(Protocol):
    def render(self, grid: CharacterGrid) -> Image.Image:
        """Rasterize a grid to an RGB image."""
        ...

    async def render_async(self, grid: CharacterGrid) -> Image.Image: ...

    async def render_and_encode(self, grid: CharacterGrid, sink: BinaryIO, format: str = "PNG") -> None: ...


def _to_rgb(value, name: str) -> Color:
    if isinstance(value, str):
        try:
            return ImageColor.getrgb(value)[:3]
        except ValueError as e:
            raise InvalidArgument(f"{name} is not a valid colour: {value!r}") from e
    if isinstance(value, tuple) and len(value) in (3, 4) and all(isinstance(c, int) and 0 <= c <= 255 for c in value):
        return value[:3]
    raise InvalidArgument(f"{name} is not a valid colour: {value!r}")


def _check_font_face(value) -> ImageFont.FreeTypeFont:
    if value is None:
        raise InvalidArgument("font_face is required")
    if not isinstance(value, ImageFont.FreeTypeFont):
        raise InvalidArgument(f"font_face must be a FreeTypeFont, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class _Paint:
    """Snapshot of the settings one render call draws with."""

    font: ImageFont.FreeTypeFont
    spacing: int
    foreground: Color
    antialias: bool
    hinting: bool


class FontRenderer:
    """Draws every character of a grid with a TrueType/OpenType font face."""

    def __init__(
        self,
        font_face: ImageFont.FreeTypeFont,
        character_spacing: int = DEFAULT_CHARACTER_SPACING,
        text_size: float = DEFAULT_TEXT_SIZE,
        foreground_color=DEFAULT_FOREGROUND_COLOR,
        background_color=DEFAULT_BACKGROUND_COLOR,
        antialias: bool = False,
        dither: bool = False,
        hinting: bool = False,
    ):
        self._font_face = _check_font_face(font_face)
        self.character_spacing = character_spacing
        self.text_size = text_size
        self.foreground_color = foreground_color
        self.background_color = background_color
        self.antialias = antialias
        self.dither = dither
        self.hinting = hinting

    @property
    def font_face(self) -> ImageFont.FreeTypeFont:
        return self._font_face

    @font_face.setter
    def font_face(self, value: ImageFont.FreeTypeFont) -> None:
        self._font = resize_font(_check_font_face(value), self._text_size)
        self._font_face = value

    @property
    def character_spacing(self) -> int:
        """Side length in pixels of the square cell reserved for one character."""
        return self._character_spacing

    @character_spacing.setter
    def character_spacing(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidArgument(f"character_spacing must be a positive integer, got {value!r}")
        self._character_spacing = value

    @property
    def text_size(self) -> float:
        """Font point size."""
        return self._text_size

    @text_size.setter
    def text_size(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not value > 0:
            raise InvalidArgument(f"text_size must be positive, got {value!r}")
        self._text_size = float(value)
        self._font = resize_font(self._font_face, self._text_size)

    @property
    def foreground_color(self) -> Color:
        return self._foreground_color

    @foreground_color.setter
    def foreground_color(self, value) -> None:
        self._foreground_color = _to_rgb(value, "foreground_color")

    @property
    def background_color(self) -> Color:
        return self._background_color

    @background_color.setter
    def background_color(self, value) -> None:
        self._background_color = _to_rgb(value, "background_color")

    def measure(self, char: str) -> tuple[float, float]:
        """Return (advance width, ascent) of ``char`` at the configured size."""
        ascent, _ = self._font.getmetrics()
        return self._font.getlength(char), float(ascent)

    def _snapshot(self) -> _Paint:
        return _Paint(
            font=self._font,
            spacing=self._character_spacing,
            foreground=self._foreground_color,
            antialias=self.antialias,
            hinting=self.hinting,
        )

    def _canvas(self, grid: CharacterGrid, paint: _Paint) -> tuple[Image.Image, ImageDraw.ImageDraw]:
        size = (paint.spacing * grid.width, paint.spacing * grid.height)
        image = Image.new("RGB", size, self._background_color)
        draw = ImageDraw.Draw(image)
        draw.fontmode = "L" if paint.antialias else "1"
        logger.debug("Rendering %dx%d grid onto %dx%d canvas", grid.width, grid.height, *size)
        return image, draw

    @staticmethod
    def _paint_row(draw: ImageDraw.ImageDraw, paint: _Paint, grid: CharacterGrid, y: int) -> None:
        spacing = paint.spacing
        widths: dict[str, float] = {}
        row = grid.rows[y]
        text_y = y * spacing + spacing * BASELINE_FRACTION
        for x, char in enumerate(row):
            if char not in widths:
                widths[char] = paint.font.getlength(char)
            text_x = x * spacing + (spacing - widths[char]) * 0.5
            origin = (round(text_x), round(text_y)) if paint.hinting else (text_x, text_y)
            draw.text(origin, char, fill=paint.foreground, font=paint.font, anchor="ls")

    def render(self, grid: CharacterGrid) -> Image.Image:
        paint = self._snapshot()
        image, draw = self._canvas(grid, paint)
        for y in range(grid.height):
            self._paint_row(draw, paint, grid, y)
        return image

    async def render_async(self, grid: CharacterGrid) -> Image.Image:
        """Render one row at a time in a worker thread.

        Only one row draws on the canvas at once. Cancelling the awaiting task
        stops the render before the next row starts.
        """
        paint = self._snapshot()
        image, draw = self._canvas(grid, paint)
        for y in range(grid.height):
            await asyncio.to_thread(self._paint_row, draw, paint, grid, y)
        return image

    def encode(self, image: Image.Image, sink: BinaryIO, format: str = "PNG") -> None:
        format = format.upper()
        if format in _PALETTE_FORMATS:
            dither = Image.Dither.FLOYDSTEINBERG if self.dither else Image.Dither.NONE
            image = image.convert("P", palette=Image.Palette.WEB, dither=dither)
        image.save(sink, format=format)

    async def render_and_encode(self, grid: CharacterGrid, sink: BinaryIO, format: str = "PNG") -> None:
        image = await self.render_async(grid)
        await asyncio.to_thread(self.encode, image, sink, format)
        logger.debug("Encoded %dx%d %s image", image.width, image.height, format)
