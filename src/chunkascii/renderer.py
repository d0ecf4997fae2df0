import logging

import numpy as np

from chunkascii.brightness import compute_chunk_grid
from chunkascii.errors import check_chunk_size
from chunkascii.pixels import PixelBuffer
from chunkascii.ramp import map_grid
from chunkascii.source import ImageReference, ImageSource, PixelSource

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_WIDTH = 10
DEFAULT_CHUNK_HEIGHT = 20


def render(grid: np.ndarray, reverse: bool = False) -> str:
    """Join mapped rows into one text block, each row terminated by a newline."""
    return "".join(line + "\n" for line in map_grid(grid, reverse))


def _chunk_sizes(chunk_width: int | None, chunk_height: int | None) -> tuple[int, int]:
    # None and 0 both fall back to the defaults; negatives are rejected
    chunk_width = check_chunk_size("chunk_width", chunk_width or DEFAULT_CHUNK_WIDTH)
    chunk_height = check_chunk_size("chunk_height", chunk_height or DEFAULT_CHUNK_HEIGHT)
    return chunk_width, chunk_height


def convert_buffer(
    buffer: PixelBuffer,
    chunk_width: int | None = None,
    chunk_height: int | None = None,
    reverse: bool = False,
) -> str:
    chunk_width, chunk_height = _chunk_sizes(chunk_width, chunk_height)
    grid = compute_chunk_grid(buffer, chunk_width, chunk_height)
    logger.debug(
        "Rendering %dx%d image as %dx%d chunks of %dx%d",
        buffer.width,
        buffer.height,
        grid.shape[1],
        grid.shape[0],
        chunk_width,
        chunk_height,
    )
    return render(grid, reverse)


async def image_to_ascii(
    source: ImageReference,
    chunk_width: int | None = None,
    chunk_height: int | None = None,
    reverse: bool = False,
    *,
    pixel_source: PixelSource | None = None,
) -> str:
    """Load an image and render it as ASCII art.

    Args:
        source: path, http(s) URL or an open PIL image
        chunk_width: pixels per character horizontally (default 10)
        chunk_height: pixels per character vertically (default 20)
        reverse: use the ramp lightest-glyph first, for light text on dark backgrounds
        pixel_source: loader to decode ``source`` with (default: ImageSource)

    Raises:
        InvalidParameter: chunk sizes are negative or not integers
        LoadError: the image could not be fetched or decoded
    """
    # Validate before touching the network or filesystem
    chunk_width, chunk_height = _chunk_sizes(chunk_width, chunk_height)
    if pixel_source is None:
        pixel_source = ImageSource()
    buffer = await pixel_source.load(source)
    return convert_buffer(buffer, chunk_width, chunk_height, reverse)
