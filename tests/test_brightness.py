import numpy as np
import pytest
from PIL import Image

from chunkascii.brightness import chunk_origins, compute_chunk_grid, grid_shape, pixel_brightness
from chunkascii.errors import InvalidParameter
from chunkascii.pixels import PixelBuffer


def make_buffer(rgb, alpha=255):
    """Build a PixelBuffer from an (h, w, 3) array-like."""
    rgb = np.asarray(rgb, dtype=np.uint8)
    a = np.full(rgb.shape[:2] + (1,), alpha, dtype=np.uint8)
    rgba = np.concatenate([rgb, a], axis=2)
    return PixelBuffer(width=rgba.shape[1], height=rgba.shape[0], data=rgba.tobytes())


def test_chunk_origins_never_reach_length():
    np.testing.assert_array_equal(chunk_origins(5, 3), [0, 3])
    np.testing.assert_array_equal(chunk_origins(6, 3), [0, 3])
    np.testing.assert_array_equal(chunk_origins(7, 3), [0, 3, 6])
    np.testing.assert_array_equal(chunk_origins(2, 10), [0])


def test_pixel_brightness_ignores_alpha():
    opaque = make_buffer([[[30, 60, 90]]], alpha=255)
    transparent = make_buffer([[[30, 60, 90]]], alpha=0)
    assert pixel_brightness(opaque)[0, 0] == pytest.approx(60.0)
    assert pixel_brightness(transparent)[0, 0] == pytest.approx(60.0)


def test_uniform_image():
    buffer = PixelBuffer.from_image(Image.new("RGB", (30, 40), (90, 120, 150)))
    grid = compute_chunk_grid(buffer, 10, 20)
    assert grid.shape == (2, 3)
    np.testing.assert_allclose(grid, 120.0)


def test_two_by_two_black_white_single_chunk():
    buffer = make_buffer([[[0, 0, 0], [255, 255, 255]], [[0, 0, 0], [255, 255, 255]]])
    grid = compute_chunk_grid(buffer, 2, 2)
    assert grid.shape == (1, 1)
    assert grid[0, 0] == 127.5


def test_edge_chunks_average_only_in_bounds_pixels():
    # 5x5 image where each pixel's grey level is 10 * (y * 5 + x)
    levels = (np.arange(25).reshape(5, 5) * 10).astype(np.uint8)
    buffer = make_buffer(np.repeat(levels[:, :, None], 3, axis=2))
    grid = compute_chunk_grid(buffer, 3, 3)

    assert grid.shape == (2, 2)
    expected = [
        [levels[0:3, 0:3].mean(), levels[0:3, 3:5].mean()],
        [levels[3:5, 0:3].mean(), levels[3:5, 3:5].mean()],
    ]
    np.testing.assert_allclose(grid, expected)


def test_chunk_larger_than_image_is_single_chunk():
    buffer = make_buffer([[[0, 0, 0], [30, 30, 30], [60, 60, 60]]])
    grid = compute_chunk_grid(buffer, 100, 100)
    assert grid.shape == (1, 1)
    assert grid[0, 0] == pytest.approx(30.0)


def test_one_pixel_chunks_match_pixel_brightness():
    rng = np.random.default_rng(7)
    buffer = make_buffer(rng.integers(0, 256, size=(4, 6, 3)))
    np.testing.assert_allclose(compute_chunk_grid(buffer, 1, 1), pixel_brightness(buffer))


@pytest.mark.parametrize(
    "width,height,cw,ch",
    [(5, 5, 3, 3), (10, 20, 10, 20), (11, 21, 10, 20), (1, 1, 4, 4), (17, 3, 2, 1)],
)
def test_grid_shape_matches_ceiling(width, height, cw, ch):
    buffer = PixelBuffer.from_image(Image.new("RGB", (width, height), (200, 0, 0)))
    grid = compute_chunk_grid(buffer, cw, ch)
    assert grid.shape == grid_shape(width, height, cw, ch)
    assert grid.shape == (-(-height // ch), -(-width // cw))
    assert np.isfinite(grid).all()


@pytest.mark.parametrize("cw,ch", [(0, 1), (1, 0), (-3, 2), (2, -1), (1.5, 2), (True, 2)])
def test_invalid_chunk_sizes_fail_fast(cw, ch):
    buffer = make_buffer([[[0, 0, 0]]])
    with pytest.raises(InvalidParameter):
        compute_chunk_grid(buffer, cw, ch)


def test_deterministic():
    rng = np.random.default_rng(1)
    buffer = make_buffer(rng.integers(0, 256, size=(13, 9, 3)))
    np.testing.assert_array_equal(compute_chunk_grid(buffer, 4, 5), compute_chunk_grid(buffer, 4, 5))


@pytest.mark.parametrize("cw,ch", [(np.int64(2), 2), (2, np.int32(2)), (np.uint8(2), np.int16(2))])
def test_numpy_integer_chunk_sizes(cw, ch):
    buffer = make_buffer(np.zeros((4, 4, 3)))
    grid = compute_chunk_grid(buffer, cw, ch)
    assert grid.shape == (2, 2)
    np.testing.assert_allclose(grid, 0.0)
