import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def checkerboard_path(tmp_path):
    """4x2 PNG: black/white columns alternating, fully opaque."""
    arr = np.zeros((2, 4, 3), dtype=np.uint8)
    arr[:, 1::2] = 255
    path = tmp_path / "checker.png"
    Image.fromarray(arr).save(path)
    return path
