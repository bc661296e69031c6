"""
Prefab Synthesizer - Build the editor's animated object graph

A prefab holds one empty root object that parents one object per rectangle
slot. Every object has four event tracks in fixed order:

    0  position  [x, y]
    1  scale     [w, h]
    2  rotation  [angle]          (always a single 0 keyframe)
    3  color     [index] or [index, opacity * 100]

Consecutive keyframes with equal values are dropped. The first keyframe of a
track carries no curve type; every later one is "Instant" (step).
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Sequence

from .color import ColorRgb, IndexedColor
from .ids import generate_ids
from .keyframes import Keyframe, PrefabRect, Vec2, dedup_colors, dedup_keyframes

logger = logging.getLogger(__name__)

INSTANT = "Instant"
AUTO_KILL_FIXED_TIME = 3
PARENT_TYPE_ALL = "111"  # follow parent position, scale and rotation

ROOT_BIN = 0
RECT_BIN = 1
ROOT_ORIGIN = (0.0, 0.0)
RECT_ORIGIN = (0.5, -0.5)  # pivot on the top-left corner


class ObjectType(IntEnum):
    HIT = 4
    NO_HIT = 5
    EMPTY = 6


# =============================================================================
# Object Graph
# =============================================================================

@dataclass
class PrefabKeyframe:
    time: float
    values: List[float]
    curve: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'t': self.time, 'ev': list(self.values)}
        if self.curve is not None:
            data['ct'] = self.curve
        return data


@dataclass
class PrefabObjectEvent:
    keyframes: List[PrefabKeyframe] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'k': [k.to_dict() for k in self.keyframes]}


@dataclass
class PrefabObject:
    id: str
    name: str
    object_type: ObjectType
    bin: int
    origin: Vec2
    lifetime: float
    depth: int
    events: List[PrefabObjectEvent] = field(default_factory=list)
    parent_id: Optional[str] = None
    auto_kill_type: int = AUTO_KILL_FIXED_TIME
    parent_type: str = PARENT_TYPE_ALL

    @property
    def positions(self) -> PrefabObjectEvent:
        return self.events[0]

    @property
    def scales(self) -> PrefabObjectEvent:
        return self.events[1]

    @property
    def rotations(self) -> PrefabObjectEvent:
        return self.events[2]

    @property
    def colors(self) -> PrefabObjectEvent:
        return self.events[3]

    def to_dict(self) -> Dict[str, Any]:
        data = {'id': self.id}
        if self.parent_id:
            data['p_id'] = self.parent_id
        data.update({
            'ak_t': self.auto_kill_type,
            'ak_o': self.lifetime,
            'p_t': self.parent_type,
            'ot': int(self.object_type),
            'd': self.depth,
            'n': self.name,
            'ed': {'b': self.bin},
            'o': {'x': self.origin[0], 'y': self.origin[1]},
            'e': [e.to_dict() for e in self.events],
        })
        return data


@dataclass
class Prefab:
    name: str
    description: str
    type: int
    objects: List[PrefabObject] = field(default_factory=list)
    # Colors behind the color track indices; not part of the editor layout
    palette: List[ColorRgb] = field(default_factory=list)

    @property
    def root(self) -> PrefabObject:
        return self.objects[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'n': self.name,
            'description': self.description,
            'type': self.type,
            'objs': [o.to_dict() for o in self.objects],
        }


# =============================================================================
# Track Encoding
# =============================================================================

def encode_color(color: IndexedColor) -> List[float]:
    """[index] for opaque colors, [index, opacity * 100] otherwise"""
    if color.opacity == 1:
        return [color.index]
    return [color.index, color.opacity * 100]


def encode_track(
    keyframes: Sequence[Keyframe],
    encode: Callable[[Any], List[float]]
) -> PrefabObjectEvent:
    event = PrefabObjectEvent()
    for i, keyframe in enumerate(keyframes):
        curve = None if i == 0 else INSTANT
        event.keyframes.append(PrefabKeyframe(keyframe.time, encode(keyframe.value), curve))
    return event


def _encode_vec2(value: Vec2) -> List[float]:
    return [value[0], value[1]]


def rotation_track() -> PrefabObjectEvent:
    return PrefabObjectEvent([PrefabKeyframe(0, [0])])


def create_prefab_object(
    id: str,
    parent_id: Optional[str],
    name: str,
    bin: int,
    origin: Vec2,
    object_type: ObjectType,
    lifetime: float,
    depth: int,
    positions: Sequence[Keyframe[Vec2]],
    scales: Sequence[Keyframe[Vec2]],
    colors: Sequence[Keyframe[IndexedColor]]
) -> PrefabObject:
    """Build one object; positions are given in image space and flipped here"""
    # 0.0 - y avoids emitting -0.0
    flipped = [Keyframe(k.time, (k.value[0], 0.0 - k.value[1])) for k in positions]

    events = [
        encode_track(dedup_keyframes(flipped), _encode_vec2),
        encode_track(dedup_keyframes(scales), _encode_vec2),
        rotation_track(),
        encode_track(dedup_colors(colors), encode_color),
    ]

    return PrefabObject(
        id=id,
        name=name,
        object_type=object_type,
        bin=bin,
        origin=origin,
        lifetime=lifetime,
        depth=depth,
        events=events,
        parent_id=parent_id
    )


def create_prefab(
    name: str,
    description: str,
    type: int,
    lifetime: float,
    depth: int,
    hit: bool,
    prefab_rects: Sequence[PrefabRect],
    seed: int,
    palette: Optional[Sequence[ColorRgb]] = None
) -> Prefab:
    """
    Assemble the prefab: an empty root plus one object per rectangle slot.

    Args:
        name: Prefab name
        description: Prefab description
        type: Editor prefab type code
        lifetime: Seconds until every object is removed
        depth: Render depth of every object
        hit: Make rectangle objects hit objects
        prefab_rects: Per-slot tracks (image space)
        seed: Identifier seed; same seed and slot count give the same ids
        palette: Colors the color track indices refer to
    """
    ids = generate_ids(seed, len(prefab_rects) + 1)

    root = create_prefab_object(
        ids[0], None, "root", ROOT_BIN, ROOT_ORIGIN, ObjectType.EMPTY,
        lifetime, depth,
        [Keyframe(0, (0, 0))],
        [Keyframe(0, (1, 1))],
        [Keyframe(0, IndexedColor(0, 1.0))]
    )

    rect_type = ObjectType.HIT if hit else ObjectType.NO_HIT
    objects = [root]
    for i, rect in enumerate(prefab_rects):
        objects.append(create_prefab_object(
            ids[i + 1], root.id, f"rect_{i}", RECT_BIN, RECT_ORIGIN, rect_type,
            lifetime, depth, rect.positions, rect.sizes, rect.colors
        ))

    logger.debug("Created prefab '%s' with %d object(s)", name, len(objects))

    return Prefab(
        name=name,
        description=description,
        type=type,
        objects=objects,
        palette=list(palette or [])
    )
