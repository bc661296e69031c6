"""
Indexer - Maps RGBA pixels to (palette index, opacity)

Transparent pixels (alpha 0) are absent and stored as index -1.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .color import IndexedColor
from .palette import Palette, build_palette
from .parser import RawImage, RawImageFrame

logger = logging.getLogger(__name__)

ABSENT = -1


@dataclass
class IndexedImageFrame:
    """Per-pixel palette indices (HxW int32, -1 = absent) and opacities (HxW float)"""

    indices: np.ndarray
    opacities: np.ndarray
    delay: int = 0  # in milliseconds

    @property
    def width(self) -> int:
        return self.indices.shape[1]

    @property
    def height(self) -> int:
        return self.indices.shape[0]

    def get(self, x: int, y: int) -> Optional[IndexedColor]:
        """Indexed color at (x, y), or None for a transparent pixel"""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} frame")

        index = int(self.indices[y, x])
        if index == ABSENT:
            return None
        return IndexedColor(index, float(self.opacities[y, x]))

    @property
    def opaque_mask(self) -> np.ndarray:
        return self.indices != ABSENT


@dataclass
class IndexedImage:
    """All frames of an image expressed against one shared palette"""

    width: int
    height: int
    frames: List[IndexedImageFrame] = field(default_factory=list)
    palette: Palette = field(default_factory=Palette)
    palette_misses: int = 0  # opaque pixels whose color was missing from the palette


def index_frame(
    frame: RawImageFrame,
    width: int,
    height: int,
    palette: Palette
) -> Tuple[IndexedImageFrame, int]:
    """
    Index one frame against a palette.

    Returns:
        (IndexedImageFrame, number of palette lookup misses)
    """
    rgba = frame.as_array().reshape(height, width, 4)
    alpha = rgba[:, :, 3]

    indices = np.full((height, width), ABSENT, dtype=np.int32)
    opacities = np.zeros((height, width), dtype=np.float64)
    misses = 0

    for y, x in zip(*np.nonzero(alpha)):
        r, g, b, a = (int(v) for v in rgba[y, x])
        index = palette.index_map.get((r << 16) | (g << 8) | b)

        if index is None:
            # Unreachable when the palette was built from the same frames
            misses += 1
            continue

        indices[y, x] = index
        opacities[y, x] = a / 255.0

    return IndexedImageFrame(indices, opacities, frame.delay), misses


def index_image(image: RawImage, palette: Optional[Palette] = None) -> IndexedImage:
    """
    Convert a raw image into an indexed image.

    Args:
        image: Source frames
        palette: Palette to index against (built from the image if omitted)

    Returns:
        IndexedImage sharing one palette across frames
    """
    image.validate()

    if palette is None:
        palette = build_palette(image)

    frames = []
    total_misses = 0
    for i, frame in enumerate(image.frames):
        indexed, misses = index_frame(frame, image.width, image.height, palette)
        if misses:
            logger.warning("Frame %d: %d pixel(s) missing from palette, treated as transparent", i, misses)
        total_misses += misses
        frames.append(indexed)

    return IndexedImage(
        width=image.width,
        height=image.height,
        frames=frames,
        palette=palette,
        palette_misses=total_misses
    )
