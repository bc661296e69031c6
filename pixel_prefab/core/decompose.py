"""
Rectangle Decomposition - Cover each frame with maximal single-color rectangles

Greedy, deterministic cover of the opaque pixels of an indexed frame.
Pixels are visited row by row; every uncovered opaque pixel anchors a new
rectangle that grows:

1. diagonally (width and height together) while it stays valid,
2. then in width alone,
3. then in height alone.

A candidate is valid when it lies inside the frame and every pixel in it is
uncovered and has the anchor's palette index and opacity. The rectangles of
a frame partition its opaque region with no overlap.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

import numpy as np

from .color import ColorRgb, IndexedColor
from .indexer import ABSENT, IndexedImage, IndexedImageFrame

logger = logging.getLogger(__name__)


# =============================================================================
# Rect Types
# =============================================================================

class Rect(NamedTuple):
    """Axis-aligned rectangle in pixel units"""
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height


class ColoredRect(NamedTuple):
    """A rectangle filled with one indexed color"""
    x: int
    y: int
    width: int
    height: int
    color: IndexedColor

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass
class RectImageFrame:
    rects: List[ColoredRect] = field(default_factory=list)
    delay: int = 0  # in milliseconds


@dataclass
class RectImage:
    """Rectangle decomposition of every frame plus the shared palette"""
    width: int
    height: int
    palette: List[ColorRgb] = field(default_factory=list)
    frames: List[RectImageFrame] = field(default_factory=list)

    @property
    def rect_counts(self) -> List[int]:
        return [len(f.rects) for f in self.frames]


# =============================================================================
# Decomposer
# =============================================================================

class RectDecomposer:
    """Greedy rectangle cover of a single indexed frame"""

    def __init__(self, frame: IndexedImageFrame):
        self.indices = frame.indices
        self.opacities = frame.opacities
        self.height, self.width = frame.indices.shape
        self.covered = np.zeros((self.height, self.width), dtype=bool)

    def can_be_rect(self, x0: int, y0: int, w: int, h: int) -> bool:
        """Check a candidate rectangle anchored at (x0, y0)"""
        if x0 + w > self.width or y0 + h > self.height:
            return False

        region = np.s_[y0:y0 + h, x0:x0 + w]
        if self.covered[region].any():
            return False

        return bool(
            (self.indices[region] == self.indices[y0, x0]).all()
            and (self.opacities[region] == self.opacities[y0, x0]).all()
        )

    def expand(self, x: int, y: int) -> Rect:
        """Grow the largest rectangle the fixed growth order allows"""
        width, height = 1, 1

        # Square first
        while self.can_be_rect(x, y, width + 1, height + 1):
            width += 1
            height += 1

        while self.can_be_rect(x, y, width + 1, height):
            width += 1

        while self.can_be_rect(x, y, width, height + 1):
            height += 1

        return Rect(x, y, width, height)

    def mark_covered(self, rect: Rect) -> None:
        self.covered[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width] = True

    def decompose(self) -> List[ColoredRect]:
        rects = []

        for y in range(self.height):
            for x in range(self.width):
                if self.covered[y, x]:
                    continue

                index = int(self.indices[y, x])

                # Transparent pixels produce no rectangle
                if index == ABSENT:
                    self.covered[y, x] = True
                    continue

                rect = self.expand(x, y)
                self.mark_covered(rect)
                color = IndexedColor(index, float(self.opacities[y, x]))
                rects.append(ColoredRect(rect.x, rect.y, rect.width, rect.height, color))

        return rects


def decompose_frame(frame: IndexedImageFrame) -> RectImageFrame:
    """Decompose one indexed frame into colored rectangles"""
    return RectImageFrame(rects=RectDecomposer(frame).decompose(), delay=frame.delay)


def decompose_image(image: IndexedImage, max_workers: Optional[int] = None) -> RectImage:
    """
    Decompose every frame of an indexed image.

    Args:
        image: Indexed image
        max_workers: Decompose frames on a thread pool of this size (default: sequential)

    Returns:
        RectImage with frames in the same order as the input
    """
    if max_workers and max_workers > 1 and len(image.frames) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            frames = list(pool.map(decompose_frame, image.frames))
    else:
        frames = [decompose_frame(f) for f in image.frames]

    for i, frame in enumerate(frames):
        logger.debug("Frame %d: %d rect(s)", i, len(frame.rects))

    return RectImage(
        width=image.width,
        height=image.height,
        palette=list(image.palette.colors),
        frames=frames
    )
