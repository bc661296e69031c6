"""
Color Model - RGB packing, perceptual conversion and color equality

Colors are small immutable tuples so they hash and compare cheaply.
The perceptual (OKLCH) conversion is only used to order the palette.
"""

import math
from typing import NamedTuple, Optional

import numpy as np


# =============================================================================
# Color Types
# =============================================================================

class ColorRgb(NamedTuple):
    """An opaque 8-bit RGB color"""
    r: int
    g: int
    b: int


class ColorOklch(NamedTuple):
    """Perceptual color: lightness, chroma, hue (radians, 0-2pi)"""
    lightness: float
    chroma: float
    hue: float


class IndexedColor(NamedTuple):
    """A palette reference with opacity in 0-1"""
    index: int
    opacity: float


# =============================================================================
# OKLab Matrices
# =============================================================================

# Linear sRGB -> LMS
LMS_MATRIX = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
])

# Cube-rooted LMS -> Lab
LAB_MATRIX = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
])

SRGB_THRESHOLD = 0.04045
TWO_PI = 2.0 * math.pi


# =============================================================================
# Conversions
# =============================================================================

def rgb_key(color: ColorRgb) -> int:
    """Pack a color into a 24-bit integer (r << 16 | g << 8 | b)"""
    r = color[0] & 0xFF
    g = color[1] & 0xFF
    b = color[2] & 0xFF
    return (r << 16) | (g << 8) | b


def color_hex(color: ColorRgb) -> str:
    """Format a color as #rrggbb"""
    return f"#{rgb_key(color):06x}"


def srgb_to_linear(channel: float) -> float:
    """Decode one sRGB channel (0-1) to linear light"""
    if channel <= SRGB_THRESHOLD:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def to_oklch(color: ColorRgb) -> ColorOklch:
    """Convert an 8-bit RGB color to OKLCH"""
    linear = np.array([srgb_to_linear(c / 255.0) for c in color[:3]])
    lms = np.cbrt(LMS_MATRIX @ linear)
    lightness, a, b = LAB_MATRIX @ lms

    chroma = math.hypot(a, b)
    hue = math.atan2(b, a)
    if hue < 0:
        hue += TWO_PI

    return ColorOklch(float(lightness), float(chroma), float(hue))


# =============================================================================
# Equality
# =============================================================================

def colors_equal(c1: ColorRgb, c2: ColorRgb) -> bool:
    return c1[0] == c2[0] and c1[1] == c2[1] and c1[2] == c2[2]


def indexed_colors_equal(c1: Optional[IndexedColor], c2: Optional[IndexedColor]) -> bool:
    """Compare two indexed pixels; an absent pixel only equals another absent one"""
    if c1 is None or c2 is None:
        return c1 is c2
    return c1.index == c2.index and c1.opacity == c2.opacity
