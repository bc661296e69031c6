"""
Palette Builder - Global, perceptually ordered color palette

Every distinct opaque RGB color found in any frame gets one palette slot.
Colors are collected in first-occurrence order (frame order, then row-major)
and then stably sorted by OKLCH (lightness, chroma, hue), so the same input
always yields the same palette.

Fully transparent pixels (alpha 0) never enter the palette. Opacity is not
part of a palette color; it is carried per pixel by the indexer.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import numpy as np

from .color import ColorRgb, color_hex, rgb_key, to_oklch
from .parser import RawImage, RawImageFrame

logger = logging.getLogger(__name__)


@dataclass
class Palette:
    """Sorted colors plus the rgb_key -> index lookup built from them"""

    colors: List[ColorRgb] = field(default_factory=list)
    index_map: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_colors(cls, colors: Iterable[ColorRgb]) -> 'Palette':
        """Build a palette whose indices follow the given order"""
        colors = [ColorRgb(*c) for c in colors]
        index_map = {rgb_key(color): i for i, color in enumerate(colors)}
        return cls(colors=colors, index_map=index_map)

    def index_of(self, color: ColorRgb) -> Optional[int]:
        return self.index_map.get(rgb_key(color))

    def to_hex(self) -> List[str]:
        return [color_hex(c) for c in self.colors]

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> ColorRgb:
        return self.colors[index]

    def __iter__(self):
        return iter(self.colors)


class PaletteBuilder:
    """
    Accumulates colors frame by frame, then sorts them.

    Partial builders (e.g. one per frame) can be combined with merge();
    merging in frame order gives the same result as a single pass.
    """

    def __init__(self):
        self._colors: List[ColorRgb] = []
        self._seen: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._colors)

    def add(self, color: ColorRgb) -> None:
        """Append a color unless it is already known"""
        key = rgb_key(color)
        if key not in self._seen:
            self._seen[key] = len(self._colors)
            self._colors.append(ColorRgb(*color))

    def accumulate(self, frame: RawImageFrame) -> 'PaletteBuilder':
        """Add the opaque colors of one frame in row-major first-occurrence order"""
        rgba = frame.as_array().reshape(-1, 4)
        opaque = rgba[rgba[:, 3] != 0]
        if len(opaque) == 0:
            return self

        rgb = opaque[:, :3].astype(np.uint32)
        keys = (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]

        # np.unique sorts by key; reorder by first pixel position
        unique_keys, first_positions = np.unique(keys, return_index=True)
        for key in unique_keys[np.argsort(first_positions, kind='stable')]:
            key = int(key)
            self.add(ColorRgb((key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF))

        return self

    def merge(self, other: 'PaletteBuilder') -> 'PaletteBuilder':
        """Append the colors of a later partial palette"""
        for color in other._colors:
            self.add(color)
        return self

    def build(self) -> Palette:
        """Sort accumulated colors by OKLCH and index them"""
        # sorted() is stable: identical perceptual keys keep accumulation order
        ordered = sorted(self._colors, key=to_oklch)
        palette = Palette.from_colors(ordered)

        logger.debug("Built palette with %d color(s)", len(palette))
        return palette


def build_palette(image: RawImage) -> Palette:
    """Build the global palette for every frame of an image"""
    image.validate()

    builder = PaletteBuilder()
    for frame in image.frames:
        builder.accumulate(frame)
    return builder.build()
