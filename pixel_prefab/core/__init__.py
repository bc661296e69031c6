"""
Pixel Prefab - Core Pipeline
"""

from .color import (
    ColorRgb, ColorOklch, IndexedColor,
    rgb_key, color_hex, to_oklch, colors_equal, indexed_colors_equal,
)
from .errors import PixelPrefabError, MalformedFrameError, SlotMismatchError
from .parser import RawImage, RawImageFrame, ImageLoader
from .palette import Palette, PaletteBuilder, build_palette
from .indexer import IndexedImage, IndexedImageFrame, index_image, index_frame
from .decompose import (
    Rect, ColoredRect, RectImage, RectImageFrame, RectDecomposer,
    decompose_frame, decompose_image,
)
from .keyframes import (
    Keyframe, PrefabRect, SlotPolicy, HorizontalAlignment, VerticalAlignment,
    dedup_keyframes, dedup_colors, frame_schedule, build_prefab_rects,
)
from .ids import mulberry32, int_to_id, generate_ids
from .prefab import (
    ObjectType, Prefab, PrefabObject, PrefabObjectEvent, PrefabKeyframe,
    create_prefab, encode_color,
)
from .settings import ExportSettings, load_settings, save_settings
from .exporter import PrefabExporter

__all__ = [
    # Color model
    'ColorRgb', 'ColorOklch', 'IndexedColor',
    'rgb_key', 'color_hex', 'to_oklch', 'colors_equal', 'indexed_colors_equal',
    # Errors
    'PixelPrefabError', 'MalformedFrameError', 'SlotMismatchError',
    # Input
    'RawImage', 'RawImageFrame', 'ImageLoader',
    # Palette / indexing
    'Palette', 'PaletteBuilder', 'build_palette',
    'IndexedImage', 'IndexedImageFrame', 'index_image', 'index_frame',
    # Rectangles
    'Rect', 'ColoredRect', 'RectImage', 'RectImageFrame', 'RectDecomposer',
    'decompose_frame', 'decompose_image',
    # Tracks
    'Keyframe', 'PrefabRect', 'SlotPolicy', 'HorizontalAlignment', 'VerticalAlignment',
    'dedup_keyframes', 'dedup_colors', 'frame_schedule', 'build_prefab_rects',
    # Prefab
    'mulberry32', 'int_to_id', 'generate_ids',
    'ObjectType', 'Prefab', 'PrefabObject', 'PrefabObjectEvent', 'PrefabKeyframe',
    'create_prefab', 'encode_color',
    # Settings / output
    'ExportSettings', 'load_settings', 'save_settings', 'PrefabExporter',
]
