from dataclasses import dataclass, field

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from texart.sampling import NUM_SAMPLES, sample_cell


@dataclass
class GlyphModel:
    """Ink-coverage sample vectors for a set of glyphs, each value in 0-1."""

    characters: dict[str, tuple[float, ...]] = field(default_factory=dict)

    @classmethod
    def from_font(cls, font: ImageFont.FreeTypeFont, characters: str) -> "GlyphModel":
        # Measure cell size from a reference character
        bbox = font.getbbox("M")
        cell_width = max(1, int(bbox[2] - bbox[0]))
        cell_height = max(1, int(bbox[3] - bbox[1]))
        y_offset = -bbox[1]

        raw_vectors = {}
        for char in dict.fromkeys(characters):
            img = Image.new("L", (cell_width, cell_height), 0)
            draw = ImageDraw.Draw(img)
            draw.text((0, y_offset), char, fill=255, font=font)
            raw_vectors[char] = sample_cell(np.asarray(img, dtype=np.float64))

        # Normalize each dimension to 0–1
        maxes = np.max(np.stack(list(raw_vectors.values())), axis=0)
        safe_maxes = np.where(maxes > 0, maxes, 1.0)
        return cls({char: tuple(float(v) for v in vec / safe_maxes) for char, vec in raw_vectors.items()})

    def find_nearest(self, vector: tuple[float, ...]) -> str:
        return self.find_nearest_grid(np.asarray(vector, dtype=np.float64).reshape(1, 1, -1))[0]

    def find_nearest_grid(self, grid: np.ndarray) -> list[str]:
        """Pick the nearest glyph for every cell of a (rows, cols, NUM_SAMPLES) grid.

        Ties go to the character that appears first in the model. Distances are
        computed one grid row at a time so memory stays proportional to a row.
        """
        if not self.characters:
            raise ValueError("GlyphModel has no characters")
        chars = np.array(list(self.characters))
        vectors = np.array(list(self.characters.values()), dtype=np.float64)  # (C, NUM_SAMPLES)
        if grid.shape[-1] != NUM_SAMPLES:
            raise ValueError(f"Expected {NUM_SAMPLES} samples per cell, got {grid.shape[-1]}")

        lines = []
        for row in grid:
            dists = ((row[:, np.newaxis, :] - vectors) ** 2).sum(axis=-1)  # (cols, C)
            lines.append("".join(chars[dists.argmin(axis=-1)]))
        return lines
