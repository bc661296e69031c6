import numpy as np
import pytest

from pixel_prefab.core import RawImage


def rgba(*rows):
    """Build an HxWx4 uint8 array from rows of (r, g, b, a) tuples"""
    return np.array(rows, dtype=np.uint8)


@pytest.fixture
def make_image():
    """Factory: make_image(frame_rows, ..., delays=None) -> RawImage"""
    def _make(*frames, delays=None):
        return RawImage.from_arrays([rgba(*f) for f in frames], delays)
    return _make


@pytest.fixture
def random_image():
    """
    12x9, 3 frames, 4 colors, mixed alpha (0, 128, 255).
    """
    rng = np.random.default_rng(1234)
    colors = np.array([[255, 0, 0], [0, 255, 0], [10, 10, 10], [250, 250, 250]], dtype=np.uint8)
    alphas = np.array([0, 128, 255, 255], dtype=np.uint8)

    frames = []
    for _ in range(3):
        rgb = colors[rng.integers(0, len(colors), size=(9, 12))]
        alpha = alphas[rng.integers(0, len(alphas), size=(9, 12))]
        frames.append(np.dstack([rgb, alpha]))

    return RawImage.from_arrays(frames, [100, 100, 200])
