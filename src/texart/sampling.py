import numpy as np
from PIL import Image

# Circle centers as fractions of the cell side: 3x3 grid
SAMPLE_POSITIONS = [
    (0.167, 0.167),
    (0.5, 0.167),
    (0.833, 0.167),
    (0.167, 0.5),
    (0.5, 0.5),
    (0.833, 0.5),
    (0.167, 0.833),
    (0.5, 0.833),
    (0.833, 0.833),
]
NUM_SAMPLES = len(SAMPLE_POSITIONS)


def build_circle_masks(cell_width: int, cell_height: int) -> list[np.ndarray]:
    """Pre-compute boolean circle masks for each sample position.

    Cells too small to contain a whole circle fall back to the single pixel
    under the circle's center, so every mask selects at least one pixel.
    """
    radius = min(cell_width, cell_height) * 0.25
    r2 = radius * radius
    ys = np.arange(cell_height)[:, None]
    xs = np.arange(cell_width)[None, :]
    masks = []
    for cx_frac, cy_frac in SAMPLE_POSITIONS:
        cx = cx_frac * cell_width
        cy = cy_frac * cell_height
        mask = (xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2 <= r2
        if not mask.any():
            mask = np.zeros((cell_height, cell_width), dtype=bool)
            mask[min(int(cy), cell_height - 1), min(int(cx), cell_width - 1)] = True
        masks.append(mask)
    return masks


def to_blocks(image: Image.Image, ratio: int) -> np.ndarray:
    """Split a greyscale image into square ``ratio`` x ``ratio`` blocks.

    Returns a float64 array of shape (rows, cols, ratio, ratio). The image
    dimensions must already be multiples of ``ratio``.
    """
    arr = np.asarray(image.convert("L"), dtype=np.float64)
    rows = arr.shape[0] // ratio
    cols = arr.shape[1] // ratio
    return arr.reshape(rows, ratio, cols, ratio).transpose(0, 2, 1, 3)


def block_means(image: Image.Image, ratio: int) -> np.ndarray:
    """Mean brightness (0-255) of every block. Shape (rows, cols)."""
    return to_blocks(image, ratio).mean(axis=(2, 3))


def sample_blocks(image: Image.Image, ratio: int) -> np.ndarray:
    """Sample every block at the circle positions. Returns array of shape (rows, cols, NUM_SAMPLES)."""
    cells = to_blocks(image, ratio)
    masks = build_circle_masks(ratio, ratio)
    rows, cols = cells.shape[:2]

    result = np.empty((rows, cols, NUM_SAMPLES))
    for i, mask in enumerate(masks):
        # mask is (ratio, ratio), broadcast across all blocks
        result[:, :, i] = (cells * mask).sum(axis=(2, 3)) / mask.sum()
    return result


def sample_cell(cell: np.ndarray) -> np.ndarray:
    """Sample a single (height, width) cell at the circle positions."""
    h, w = cell.shape
    return np.array([cell[mask].mean() for mask in build_circle_masks(w, h)])
