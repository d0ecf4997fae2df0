from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path
from typing import Protocol

import aiohttp
from PIL import Image

from chunkascii.errors import LoadError
from chunkascii.pixels import PixelBuffer

logger = logging.getLogger(__name__)

ImageReference = str | Path | Image.Image

URL_SCHEMES = ("http://", "https://")


class PixelSource(Protocol):
    async def load(self, reference: ImageReference) -> PixelBuffer:
        """Decode the referenced image, raising LoadError if it can't be fetched or read."""
        ...


def is_url(reference: ImageReference) -> bool:
    return isinstance(reference, str) and reference.lower().startswith(URL_SCHEMES)


# Pillow plugins signal corrupt input with OSError, ValueError or SyntaxError
DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def _decode(data: bytes | Path) -> PixelBuffer:
    if isinstance(data, Path) and not data.is_file():
        raise LoadError(f"Failed to load image: file not found: {data}")
    source = io.BytesIO(data) if isinstance(data, bytes) else data
    try:
        with Image.open(source) as image:
            return PixelBuffer.from_image(image)
    except DECODE_ERRORS as e:
        raise LoadError(f"Failed to load image: {e}") from e


class ImageSource:
    """PixelSource backed by Pillow, fetching http(s) references with aiohttp."""

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout

    async def load(self, reference: ImageReference) -> PixelBuffer:
        if isinstance(reference, Image.Image):
            return PixelBuffer.from_image(reference)
        if is_url(reference):
            data = await self._fetch(reference)
            return await asyncio.to_thread(_decode, data)

        path = Path(reference)
        logger.debug("Decoding %s", path)
        return await asyncio.to_thread(_decode, path)

    async def _fetch(self, url: str) -> bytes:
        logger.debug("Fetching %s", url)
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as resp:
                    if resp.status != 200:
                        raise LoadError(f"Failed to load image: {url} returned HTTP {resp.status}")
                    data = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise LoadError(f"Failed to load image: {e}") from e
        logger.debug("Fetched %d bytes from %s", len(data), url)
        return data
