"""Generators turn a source image into a CharacterGrid.

Every generator chunks the image into square ``pixel_sampling_ratio`` x
``pixel_sampling_ratio`` blocks and emits one character per block, so a
``W`` x ``H`` image becomes a ``W / ratio`` x ``H / ratio`` grid. A ratio of 1
is lossless. Images whose sides are not multiples of the ratio are rejected
with :class:`ResolutionMismatch`; resize or crop them first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, runtime_checkable

import numpy as np
from PIL import Image, ImageFont

from texart.charsets import ASCII_PRINTABLE, DENSITY_RAMP
from texart.errors import InvalidArgument, ResolutionMismatch
from texart.grid import CharacterGrid
from texart.model import GlyphModel
from texart.sampling import block_means, sample_blocks

logger = logging.getLogger(__name__)


@runtime_checkable
class Generator(Protocol):
    pixel_sampling_ratio: int

    async def generate(self, image: Image.Image) -> CharacterGrid:
        """Convert an image to a grid of characters, one per sampled block."""
        ...


def validate_ratio(ratio: int) -> int:
    if isinstance(ratio, bool) or not isinstance(ratio, int) or ratio <= 0:
        raise InvalidArgument(f"pixel_sampling_ratio must be a positive integer, got {ratio!r}")
    return ratio


def check_resolution(image: Image.Image, ratio: int) -> tuple[int, int]:
    """Return the (columns, rows) of the grid ``image`` produces at ``ratio``."""
    width, height = image.size
    if width % ratio or height % ratio:
        raise ResolutionMismatch(
            f"Sampling ratio {ratio} does not evenly divide image size {width}x{height}; "
            f"valid ratios are {perfect_pixel_ratios(image)}"
        )
    return width // ratio, height // ratio


def perfect_pixel_ratios(image: Image.Image) -> list[int]:
    """All sampling ratios that evenly divide both sides of ``image``, ascending."""
    width, height = image.size
    return [r for r in range(1, min(width, height) + 1) if width % r == 0 and height % r == 0]


class BrightnessGenerator:
    """Maps the mean brightness of each block onto a character ramp.

    ``charset`` runs from the character used for the darkest blocks to the one
    used for the lightest. ``invert`` flips that, for light text on a dark
    background.
    """

    def __init__(self, pixel_sampling_ratio: int = 1, charset: str = DENSITY_RAMP, invert: bool = False):
        self.pixel_sampling_ratio = validate_ratio(pixel_sampling_ratio)
        if not charset:
            raise InvalidArgument("charset must contain at least one character")
        self.charset = charset
        self.invert = invert

    def sample(self, image: Image.Image) -> CharacterGrid:
        cols, rows = check_resolution(image, self.pixel_sampling_ratio)
        brightness = block_means(image, self.pixel_sampling_ratio) / 255.0
        if self.invert:
            brightness = 1.0 - brightness
        levels = len(self.charset)
        indices = np.minimum((brightness * levels).astype(int), levels - 1)
        ramp = np.array(list(self.charset))
        logger.debug("Sampled %dx%d brightness grid at ratio %d", cols, rows, self.pixel_sampling_ratio)
        return CharacterGrid("".join(row) for row in ramp[indices])

    async def generate(self, image: Image.Image) -> CharacterGrid:
        check_resolution(image, self.pixel_sampling_ratio)
        return await asyncio.to_thread(self.sample, image)


class ShapeGenerator:
    """Matches the ink pattern of each block against glyph shapes via circle sampling."""

    def __init__(
        self,
        font: ImageFont.FreeTypeFont,
        pixel_sampling_ratio: int = 8,
        charset: str = ASCII_PRINTABLE,
        invert: bool = False,
    ):
        if font is None:
            raise InvalidArgument("font is required")
        self.pixel_sampling_ratio = validate_ratio(pixel_sampling_ratio)
        if not charset:
            raise InvalidArgument("charset must contain at least one character")
        self.model = GlyphModel.from_font(font, charset)
        self.invert = invert

    def sample(self, image: Image.Image) -> CharacterGrid:
        cols, rows = check_resolution(image, self.pixel_sampling_ratio)
        # Dark pixels are ink unless inverted
        ink = sample_blocks(image, self.pixel_sampling_ratio) / 255.0
        if not self.invert:
            ink = 1.0 - ink
        logger.debug("Matching %dx%d blocks against %d glyphs", cols, rows, len(self.model.characters))
        return CharacterGrid(self.model.find_nearest_grid(ink))

    async def generate(self, image: Image.Image) -> CharacterGrid:
        check_resolution(image, self.pixel_sampling_ratio)
        return await asyncio.to_thread(self.sample, image)
