import math

import numpy as np

from chunkascii.errors import check_chunk_size
from chunkascii.pixels import PixelBuffer


def chunk_origins(length: int, step: int) -> np.ndarray:
    """Start offsets of each chunk along one axis. Never includes an offset >= length."""
    return np.arange(0, length, step)


def grid_shape(width: int, height: int, chunk_width: int, chunk_height: int) -> tuple[int, int]:
    """(rows, cols) of the chunk grid for an image of the given size."""
    return math.ceil(height / chunk_height), math.ceil(width / chunk_width)


def pixel_brightness(buffer: PixelBuffer) -> np.ndarray:
    """Unweighted mean of R, G, B for every pixel. Alpha is ignored. Shape (height, width)."""
    rgb = buffer.to_array()[:, :, :3].astype(np.float64)
    return rgb.mean(axis=2)


def compute_chunk_grid(buffer: PixelBuffer, chunk_width: int, chunk_height: int) -> np.ndarray:
    """Mean brightness of each chunk_width x chunk_height chunk of the image.

    Chunks on the right and bottom edges are clipped to the image bounds and
    averaged over only the pixels they contain. Returns a float64 array of
    shape (ceil(height / chunk_height), ceil(width / chunk_width)).
    """
    check_chunk_size("chunk_width", chunk_width)
    check_chunk_size("chunk_height", chunk_height)

    brightness = pixel_brightness(buffer)
    row_starts = chunk_origins(buffer.height, chunk_height)
    col_starts = chunk_origins(buffer.width, chunk_width)

    # Sum each band of rows, then each band of columns within those
    sums = np.add.reduceat(np.add.reduceat(brightness, row_starts, axis=0), col_starts, axis=1)

    row_counts = np.diff(np.append(row_starts, buffer.height))
    col_counts = np.diff(np.append(col_starts, buffer.width))
    counts = np.outer(row_counts, col_counts)

    return sums / counts
