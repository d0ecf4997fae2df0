import math

import numpy as np

# Densest glyph first, space last
RAMP = ("@", "%", "#", "*", "+", "=", "-", ":", ".", " ")
MAX_BRIGHTNESS = 255.0


def ramp_for(reverse: bool = False) -> tuple[str, ...]:
    return RAMP[::-1] if reverse else RAMP


def brightness_to_index(brightness: float) -> int:
    """Ramp index for a brightness in [0, 255], clamped to the ramp bounds."""
    index = math.floor(brightness / MAX_BRIGHTNESS * (len(RAMP) - 1))
    return min(max(index, 0), len(RAMP) - 1)


def map_brightness_to_char(brightness: float, reverse: bool = False) -> str:
    return ramp_for(reverse)[brightness_to_index(brightness)]


def map_grid(grid: np.ndarray, reverse: bool = False) -> list[str]:
    """Map a 2D brightness grid to one string per row."""
    ramp = np.array(ramp_for(reverse))
    indices = np.floor(np.asarray(grid, dtype=np.float64) / MAX_BRIGHTNESS * (len(RAMP) - 1))
    indices = np.clip(indices, 0, len(RAMP) - 1).astype(np.intp)
    return ["".join(row) for row in ramp[indices]]
