"""
Keyframe Tracks - Turn per-frame rectangles into per-slot animation tracks

A slot is the position of a rectangle in its frame's emission order: the
i-th rectangle of every frame drives the same animated object. Each slot
gets a position, size and color track sampled once per frame.

Frames may decompose into different rectangle counts. SlotPolicy decides
what happens then:

    PAD     slot count is the largest frame's rect count; a frame without
            rect i hides slot i with a zero size keyframe
    STRICT  differing counts raise SlotMismatchError
"""

import logging
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from .color import IndexedColor, indexed_colors_equal
from .decompose import ColoredRect, RectImage
from .errors import SlotMismatchError

logger = logging.getLogger(__name__)

T = TypeVar('T')
Vec2 = Tuple[float, float]

HIDDEN_SIZE: Vec2 = (0.0, 0.0)


# =============================================================================
# Options
# =============================================================================

class SlotPolicy(Enum):
    PAD = "pad"
    STRICT = "strict"


class HorizontalAlignment(Enum):
    """Where the image's origin sits horizontally"""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @property
    def factor(self) -> float:
        return {"left": 0.0, "center": 0.5, "right": 1.0}[self.value]


class VerticalAlignment(Enum):
    """Where the image's origin sits vertically"""
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"

    @property
    def factor(self) -> float:
        return {"top": 0.0, "center": 0.5, "bottom": 1.0}[self.value]


# =============================================================================
# Keyframes
# =============================================================================

@dataclass(frozen=True)
class Keyframe(Generic[T]):
    """A (time, value) sample on a track; time in seconds"""
    time: float
    value: T


@dataclass
class PrefabRect:
    """Animation tracks of one rectangle slot, in image space (Y down)"""
    positions: List[Keyframe[Vec2]] = field(default_factory=list)
    sizes: List[Keyframe[Vec2]] = field(default_factory=list)
    colors: List[Keyframe[IndexedColor]] = field(default_factory=list)


def dedup_keyframes(
    keyframes: Sequence[Keyframe[T]],
    equals: Callable[[T, T], bool] = operator.eq
) -> List[Keyframe[T]]:
    """Drop keyframes whose value equals the previous kept keyframe's value"""
    result: List[Keyframe[T]] = []
    for keyframe in keyframes:
        if result and equals(result[-1].value, keyframe.value):
            continue
        result.append(keyframe)
    return result


def dedup_colors(keyframes: Sequence[Keyframe[IndexedColor]]) -> List[Keyframe[IndexedColor]]:
    return dedup_keyframes(keyframes, indexed_colors_equal)


# =============================================================================
# Timing
# =============================================================================

def frame_schedule(
    delays: Sequence[int],
    speed: float = 1.0,
    looped: bool = False,
    lifetime: float = 0.0
) -> List[Tuple[int, float]]:
    """
    Start time of every frame sample.

    Args:
        delays: Per-frame delays in milliseconds
        speed: Playback speed multiplier (2.0 = twice as fast)
        looped: Repeat the frames until `lifetime` seconds have passed
        lifetime: Object lifetime in seconds (only used when looped)

    Returns:
        List of (frame index, time in seconds)
    """
    starts_ms = []
    total_ms = 0
    for delay in delays:
        starts_ms.append(total_ms)
        total_ms += delay

    schedule = [(i, start / 1000.0 / speed) for i, start in enumerate(starts_ms)]
    if not looped or total_ms <= 0:
        return schedule

    cycle = 1
    while True:
        for i, start in enumerate(starts_ms):
            time = (cycle * total_ms + start) / 1000.0 / speed
            if time >= lifetime:
                return schedule
            schedule.append((i, time))
        cycle += 1


# =============================================================================
# Slot Tracks
# =============================================================================

def slot_count(rect_image: RectImage, policy: SlotPolicy = SlotPolicy.PAD) -> int:
    """Number of rectangle slots, enforcing the slot policy"""
    counts = rect_image.rect_counts
    if not counts:
        return 0

    if len(set(counts)) > 1:
        if policy == SlotPolicy.STRICT:
            raise SlotMismatchError(counts)
        logger.warning(
            "Rect counts differ between frames (%d-%d); padding missing slots as hidden",
            min(counts), max(counts)
        )

    return max(counts)


def build_prefab_rects(
    rect_image: RectImage,
    pixels_per_unit: float = 1.0,
    horizontal_alignment: HorizontalAlignment = HorizontalAlignment.LEFT,
    vertical_alignment: VerticalAlignment = VerticalAlignment.TOP,
    speed: float = 1.0,
    looped: bool = False,
    lifetime: float = 0.0,
    slot_policy: SlotPolicy = SlotPolicy.PAD
) -> List[PrefabRect]:
    """
    Build one PrefabRect per slot.

    Positions are rectangle top-left corners in units (pixels / pixels_per_unit),
    shifted by the alignment so the origin lands on the chosen image edge or
    center. Y still grows downward here; the prefab flips it.
    """
    count = slot_count(rect_image, slot_policy)
    schedule = frame_schedule(
        [f.delay for f in rect_image.frames], speed, looped, lifetime
    )

    offset_x = -horizontal_alignment.factor * rect_image.width / pixels_per_unit
    offset_y = -vertical_alignment.factor * rect_image.height / pixels_per_unit

    prefab_rects = []
    for slot in range(count):
        # Hidden samples reuse the slot's last (or first) real rect
        fallback = _first_rect(rect_image, slot)
        previous: Optional[ColoredRect] = None
        prefab_rect = PrefabRect()

        for frame_index, time in schedule:
            rects = rect_image.frames[frame_index].rects
            if slot < len(rects):
                rect = rects[slot]
                size = (rect.width / pixels_per_unit, rect.height / pixels_per_unit)
                previous = rect
            else:
                rect = previous or fallback
                size = HIDDEN_SIZE

            position = (rect.x / pixels_per_unit + offset_x, rect.y / pixels_per_unit + offset_y)
            prefab_rect.positions.append(Keyframe(time, position))
            prefab_rect.sizes.append(Keyframe(time, size))
            prefab_rect.colors.append(Keyframe(time, rect.color))

        prefab_rects.append(prefab_rect)

    logger.debug("Built %d slot track(s) over %d sample(s)", count, len(schedule))
    return prefab_rects


def _first_rect(rect_image: RectImage, slot: int) -> ColoredRect:
    for frame in rect_image.frames:
        if slot < len(frame.rects):
            return frame.rects[slot]
    raise IndexError(f"No frame has a rect in slot {slot}")
