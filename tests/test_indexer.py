"""
Unit tests for the indexer
"""

import numpy as np
import pytest

from pixel_prefab.core import (
    IndexedColor, MalformedFrameError, Palette, RawImage, RawImageFrame,
    build_palette, index_image,
)

RED = (255, 0, 0, 255)
CLEAR = (0, 0, 0, 0)


def test_half_alpha_pixel_opacity(make_image):
    image = make_image([[(200, 10, 10, 128)]])
    indexed = index_image(image)

    pixel = indexed.frames[0].get(0, 0)
    assert pixel.index == 0
    assert pixel.opacity == pytest.approx(128 / 255)
    assert pixel.opacity == pytest.approx(0.502, abs=1e-3)


def test_transparent_pixel_is_absent(make_image):
    indexed = index_image(make_image([[CLEAR, RED]]))
    frame = indexed.frames[0]

    assert frame.get(0, 0) is None
    assert frame.get(1, 0) == IndexedColor(0, 1.0)


def test_round_trip_through_palette(random_image):
    """Every opaque pixel decodes back to its RGB and alpha/255"""
    indexed = index_image(random_image)
    palette = indexed.palette

    for raw_frame, frame in zip(random_image.frames, indexed.frames):
        pixels = raw_frame.as_array().reshape(random_image.height, random_image.width, 4)
        for y in range(random_image.height):
            for x in range(random_image.width):
                r, g, b, a = (int(v) for v in pixels[y, x])
                pixel = frame.get(x, y)
                if a == 0:
                    assert pixel is None
                    continue
                assert tuple(palette[pixel.index]) == (r, g, b)
                assert pixel.opacity == pytest.approx(a / 255)

    assert indexed.palette_misses == 0


def test_frames_share_global_palette(make_image):
    image = make_image([[RED, (0, 0, 255, 255)]], [[(0, 0, 255, 255), RED]])
    indexed = index_image(image)

    first, second = indexed.frames
    assert first.get(0, 0) == second.get(1, 0)
    assert first.get(1, 0) == second.get(0, 0)


def test_delay_is_preserved(make_image):
    indexed = index_image(make_image([[RED]], [[RED]], delays=[80, 120]))

    assert [f.delay for f in indexed.frames] == [80, 120]


def test_malformed_frame_raises():
    image = RawImage(width=2, height=2, frames=[
        RawImageFrame(bytes(16), 0),
        RawImageFrame(bytes(12), 0),
    ])

    with pytest.raises(MalformedFrameError) as info:
        index_image(image)

    assert info.value.frame_index == 1
    assert info.value.expected == 16
    assert info.value.actual == 12
    assert info.value.kind == "MalformedFrame"


def test_malformed_frame_is_a_value_error():
    image = RawImage(width=1, height=1, frames=[RawImageFrame(b"\x00\x00\x00", 0)])

    with pytest.raises(ValueError):
        build_palette(image)


def test_palette_miss_is_counted_and_absent(make_image):
    image = make_image([[RED, (0, 0, 0, 255)]])
    palette = Palette.from_colors([(0, 0, 0)])

    indexed = index_image(image, palette)

    assert indexed.palette_misses == 1
    assert indexed.frames[0].get(0, 0) is None
    assert indexed.frames[0].get(1, 0) == IndexedColor(0, 1.0)


def test_get_is_bounds_checked(make_image):
    frame = index_image(make_image([[RED, RED]])).frames[0]

    with pytest.raises(IndexError):
        frame.get(2, 0)
    with pytest.raises(IndexError):
        frame.get(0, -1)


def test_numpy_buffers_are_accepted():
    pixels = np.zeros((2, 3, 4), dtype=np.uint8)
    pixels[1, 2] = (1, 2, 3, 255)
    image = RawImage(width=3, height=2, frames=[RawImageFrame(pixels, 50)])

    frame = index_image(image).frames[0]
    assert frame.get(2, 1) == IndexedColor(0, 1.0)
    assert int(frame.opaque_mask.sum()) == 1
