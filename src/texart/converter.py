from pathlib import Path

from PIL import Image

from texart.generators import Generator
from texart.grid import CharacterGrid
from texart.renderers import Renderer


def load_image(image: Image.Image | str | Path) -> Image.Image:
    if not isinstance(image, Image.Image):
        image = Image.open(image)
    return image.convert("RGB")


async def image_to_grid(image: Image.Image | str | Path, generator: Generator) -> CharacterGrid:
    return await generator.generate(load_image(image))


async def image_to_text_art(
    image: Image.Image | str | Path,
    generator: Generator,
    renderer: Renderer,
) -> Image.Image:
    """Run the full pipeline: image to characters and back to an image."""
    grid = await image_to_grid(image, generator)
    return await renderer.render_async(grid)
