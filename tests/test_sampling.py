import numpy as np
import pytest
from PIL import Image

from texart.sampling import NUM_SAMPLES, block_means, build_circle_masks, sample_blocks, sample_cell


@pytest.mark.parametrize("size", [1, 2, 3, 8, 16])
def test_every_mask_selects_a_pixel(size):
    masks = build_circle_masks(size, size)
    assert len(masks) == NUM_SAMPLES
    assert all(mask.sum() > 0 for mask in masks)


def test_block_means_shape_and_values():
    img = Image.new("L", (8, 4), 0)
    img.paste(255, (4, 0, 8, 4))
    means = block_means(img, 4)
    assert means.shape == (1, 2)
    np.testing.assert_allclose(means, [[0.0, 255.0]])


def test_sample_blocks_uniform_image():
    img = Image.new("L", (16, 8), 200)
    result = sample_blocks(img, 8)
    assert result.shape == (1, 2, NUM_SAMPLES)
    np.testing.assert_allclose(result, 200.0)


def test_sample_blocks_accepts_rgb():
    img = Image.new("RGB", (4, 4), (255, 255, 255))
    np.testing.assert_allclose(sample_blocks(img, 2), 255.0)


def test_sample_blocks_sees_left_half():
    img = Image.new("L", (12, 12), 0)
    img.paste(255, (0, 0, 6, 12))
    result = sample_blocks(img, 12)[0, 0]
    left_column = [0, 3, 6]
    right_column = [2, 5, 8]
    assert all(result[i] == 255.0 for i in left_column)
    assert all(result[i] == 0.0 for i in right_column)


def test_sample_cell_non_square():
    cell = np.ones((10, 6))
    np.testing.assert_allclose(sample_cell(cell), 1.0)
