import asyncio

import pytest
from PIL import Image

from texart.charsets import DENSITY_RAMP
from texart.errors import InvalidArgument, ResolutionMismatch
from texart.generators import BrightnessGenerator, Generator, ShapeGenerator, perfect_pixel_ratios


def generate(generator, image):
    return asyncio.run(generator.generate(image))


def half_and_half(block, dark_left=True):
    """A two-block-wide image: one black block and one white block."""
    img = Image.new("L", (block * 2, block), 255)
    box = (0, 0, block, block) if dark_left else (block, 0, block * 2, block)
    img.paste(0, box)
    return img


@pytest.mark.parametrize("width,height,ratio", [(8, 4, 1), (8, 4, 2), (8, 4, 4), (30, 12, 3), (7, 7, 7)])
def test_grid_dimensions(width, height, ratio):
    grid = generate(BrightnessGenerator(ratio), Image.new("RGB", (width, height), (128, 128, 128)))
    assert grid.width == width // ratio
    assert grid.height == height // ratio


@pytest.mark.parametrize("width,height,ratio", [(8, 6, 4), (9, 8, 2), (5, 7, 2)])
def test_mismatched_ratio_is_rejected(width, height, ratio):
    with pytest.raises(ResolutionMismatch, match="does not evenly divide"):
        generate(BrightnessGenerator(ratio), Image.new("L", (width, height)))


def test_mismatch_is_raised_before_sampling():
    generator = BrightnessGenerator(3)
    with pytest.raises(ResolutionMismatch):
        generator.sample(Image.new("L", (4, 3)))


@pytest.mark.parametrize("ratio", [0, -1, 1.5, True, "2"])
def test_invalid_ratio(ratio):
    with pytest.raises(InvalidArgument):
        BrightnessGenerator(ratio)


def test_empty_charset():
    with pytest.raises(InvalidArgument):
        BrightnessGenerator(1, charset="")


def test_perfect_pixel_ratios():
    assert perfect_pixel_ratios(Image.new("L", (12, 8))) == [1, 2, 4]
    assert perfect_pixel_ratios(Image.new("L", (7, 5))) == [1]


def test_solid_colours_map_to_ramp_ends():
    generator = BrightnessGenerator(2)
    assert str(generate(generator, Image.new("L", (4, 4), 0))) == "@@\n@@"
    assert str(generate(generator, Image.new("L", (4, 4), 255))) == "  \n  "


def test_invert_swaps_ramp():
    grid = generate(BrightnessGenerator(2, invert=True), Image.new("L", (4, 2), 0))
    assert str(grid) == DENSITY_RAMP[-1] * 2


def test_ratio_one_is_per_pixel():
    img = Image.new("L", (3, 1), 255)
    img.putpixel((1, 0), 0)
    assert str(generate(BrightnessGenerator(1, charset="#."), img)) == ".#."


def test_concurrent_generations():
    async def run():
        generator = BrightnessGenerator(2)
        return await asyncio.gather(
            generator.generate(Image.new("L", (4, 4), 0)),
            generator.generate(Image.new("L", (6, 2), 255)),
        )

    dark, light = asyncio.run(run())
    assert (dark.width, dark.height) == (2, 2)
    assert (light.width, light.height) == (3, 1)


def test_satisfies_protocol(font_face):
    assert isinstance(BrightnessGenerator(), Generator)
    assert isinstance(ShapeGenerator(font_face), Generator)


def test_shape_generator_requires_font():
    with pytest.raises(InvalidArgument):
        ShapeGenerator(None)


def test_shape_generator_blank_and_ink(font_face):
    generator = ShapeGenerator(font_face, pixel_sampling_ratio=8)
    grid = generate(generator, half_and_half(8))
    assert grid.width == 2
    assert grid.height == 1
    assert grid[0, 0] != " "
    assert grid[1, 0] == " "


def test_shape_generator_mismatch(font_face):
    with pytest.raises(ResolutionMismatch):
        generate(ShapeGenerator(font_face, pixel_sampling_ratio=8), Image.new("L", (12, 8)))


def test_shape_generator_invert(font_face):
    generator = ShapeGenerator(font_face, pixel_sampling_ratio=8, invert=True)
    grid = generate(generator, half_and_half(8))
    # Light pixels are ink when inverted
    assert grid[0, 0] == " "
    assert grid[1, 0] != " "
