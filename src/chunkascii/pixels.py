from dataclasses import dataclass

import numpy as np
from PIL import Image

from chunkascii.errors import InvalidParameter, check_integer

CHANNELS = 4


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded RGBA pixels, row-major, one byte per channel."""

    width: int
    height: int
    data: bytes

    def __post_init__(self):
        width = check_integer("width", self.width)
        height = check_integer("height", self.height)
        if width < 1 or height < 1:
            raise InvalidParameter(f"Image must be at least 1x1, got {width}x{height}")
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)

        if not isinstance(self.data, bytes):
            try:
                object.__setattr__(self, "data", bytes(self.data))
            except (TypeError, ValueError) as e:
                raise InvalidParameter(f"Pixel data must be bytes in range 0-255: {e}") from e
        expected = width * height * CHANNELS
        if len(self.data) != expected:
            raise InvalidParameter(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(self.data)}")

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        rgba = image.convert("RGBA")
        return cls(width=rgba.width, height=rgba.height, data=rgba.tobytes())

    def to_array(self) -> np.ndarray:
        """Read-only uint8 view of shape (height, width, 4)."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)
