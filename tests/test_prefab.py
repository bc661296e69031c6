"""
Unit tests for prefab synthesis and identifier generation
"""

import base64
import json

from pixel_prefab.core import (
    IndexedColor, Keyframe, ObjectType, PrefabRect,
    create_prefab, encode_color, generate_ids, int_to_id, mulberry32,
)


def make_rect(positions, sizes=None, colors=None):
    sizes = sizes or [Keyframe(0.0, (1.0, 1.0))]
    colors = colors or [Keyframe(0.0, IndexedColor(0, 1.0))]
    return PrefabRect(
        positions=[Keyframe(t, p) for t, p in positions],
        sizes=sizes,
        colors=colors
    )


def build(prefab_rects, hit=False, seed=7):
    return create_prefab("torch", "a torch", 3, 10.0, 15, hit, prefab_rects, seed)


# =============================================================================
# Identifiers
# =============================================================================

def test_int_to_id_is_big_endian_base64():
    assert int_to_id(0) == "AAAAAA=="
    assert int_to_id(1) == "AAAAAQ=="
    assert int_to_id(0xFFFFFFFF) == "/////w=="
    assert base64.b64decode(int_to_id(0x01020304)) == b"\x01\x02\x03\x04"


def test_mulberry32_values_are_32_bit():
    stream = mulberry32(123)
    values = [next(stream) for _ in range(100)]

    assert all(0 <= v <= 0xFFFFFFFF for v in values)
    assert len(set(values)) == 100


def test_ids_are_deterministic():
    assert generate_ids(42, 5) == generate_ids(42, 5)
    assert generate_ids(42, 3) == generate_ids(42, 5)[:3]


def test_different_seeds_give_different_ids():
    assert generate_ids(1, 4) != generate_ids(2, 4)


def test_negative_and_large_seeds_wrap_to_32_bits():
    assert generate_ids(-1, 2) == generate_ids(0xFFFFFFFF, 2)
    assert generate_ids(2 ** 32 + 5, 2) == generate_ids(5, 2)


def test_mulberry32_reference_values():
    """Stream must match the reference mulberry32 bit for bit"""
    stream = mulberry32(0)
    assert [next(stream) for _ in range(5)] == [
        1144304738, 1416247, 958946056, 627933444, 2007157716,
    ]

    stream = mulberry32(42)
    assert [next(stream) for _ in range(2)] == [2581720956, 1925393290]


def test_generate_ids_reference_values():
    assert generate_ids(0, 2) == [int_to_id(1144304738), int_to_id(1416247)]


def test_palette_is_carried_on_prefab():
    prefab = create_prefab("p", "", 0, 1.0, 0, False, [], 0, palette=[(1, 2, 3), (4, 5, 6)])

    assert prefab.palette == [(1, 2, 3), (4, 5, 6)]
    assert 'palette' not in prefab.to_dict()


# =============================================================================
# Object Graph
# =============================================================================

def test_root_and_slot_objects():
    prefab = build([make_rect([(0.0, (0, 0))]), make_rect([(0.0, (1, 0))])])

    assert len(prefab.objects) == 3
    root, first, second = prefab.objects

    assert root.object_type == ObjectType.EMPTY
    assert root.bin == 0
    assert root.parent_id is None
    assert root.name == "root"

    for i, obj in enumerate([first, second]):
        assert obj.parent_id == root.id
        assert obj.bin == 1
        assert obj.origin == (0.5, -0.5)
        assert obj.object_type == ObjectType.NO_HIT
        assert obj.name == f"rect_{i}"


def test_shared_kill_policy_and_depth():
    prefab = build([make_rect([(0.0, (0, 0))])])

    for obj in prefab.objects:
        assert obj.auto_kill_type == 3
        assert obj.lifetime == 10.0
        assert obj.depth == 15


def test_hit_flag_sets_object_type():
    prefab = build([make_rect([(0.0, (0, 0))])], hit=True)

    assert prefab.objects[1].object_type == ObjectType.HIT
    assert int(prefab.objects[1].object_type) == 4


def test_object_ids_follow_seed():
    prefab = build([make_rect([(0.0, (0, 0))])] * 3, seed=99)

    assert [o.id for o in prefab.objects] == generate_ids(99, 4)


def test_positions_are_flipped_vertically():
    prefab = build([make_rect([(0.0, (2.0, 3.0))])])
    keyframe = prefab.objects[1].positions.keyframes[0]

    assert keyframe.values == [2.0, -3.0]


def test_zero_y_is_not_negative_zero():
    prefab = build([make_rect([(0.0, (0.0, 0.0))])])
    data = json.dumps(prefab.objects[1].to_dict())

    assert "-0.0" not in data


def test_color_encoding():
    assert encode_color(IndexedColor(3, 1.0)) == [3]
    assert encode_color(IndexedColor(3, 0.5)) == [3, 50.0]


def test_keyframes_are_deduplicated_and_tagged():
    rect = make_rect(
        [(0.0, (0, 0)), (0.1, (0, 0)), (0.2, (1, 0)), (0.3, (1, 0))],
        colors=[
            Keyframe(0.0, IndexedColor(1, 1.0)),
            Keyframe(0.1, IndexedColor(1, 1.0)),
            Keyframe(0.2, IndexedColor(1, 0.25)),
        ]
    )
    obj = build([rect]).objects[1]

    positions = [k.to_dict() for k in obj.positions.keyframes]
    assert positions == [
        {'t': 0.0, 'ev': [0, 0.0]},
        {'t': 0.2, 'ev': [1, 0.0], 'ct': 'Instant'},
    ]

    colors = [k.to_dict() for k in obj.colors.keyframes]
    assert colors == [
        {'t': 0.0, 'ev': [1]},
        {'t': 0.2, 'ev': [1, 25.0], 'ct': 'Instant'},
    ]


def test_rotation_track_is_constant():
    obj = build([make_rect([(0.0, (0, 0)), (1.0, (5, 5))])]).objects[1]

    assert obj.rotations.to_dict() == {'k': [{'t': 0, 'ev': [0]}]}


def test_to_dict_layout():
    prefab = build([make_rect([(0.0, (0, 0))])])
    data = prefab.to_dict()

    assert data['n'] == "torch"
    assert data['description'] == "a torch"
    assert data['type'] == 3
    assert len(data['objs']) == 2

    root, rect = data['objs']
    assert 'p_id' not in root
    assert rect['p_id'] == root['id']
    assert rect['ak_t'] == 3
    assert rect['ak_o'] == 10.0
    assert rect['p_t'] == "111"
    assert rect['ot'] == 5
    assert rect['d'] == 15
    assert rect['ed'] == {'b': 1}
    assert rect['o'] == {'x': 0.5, 'y': -0.5}
    assert len(rect['e']) == 4

    # Serializable as-is
    json.dumps(data)


def test_root_tracks():
    root = build([]).objects[0]

    assert root.positions.keyframes[0].values == [0, 0.0]
    assert root.scales.keyframes[0].values == [1, 1]
    assert root.colors.keyframes[0].values == [0]


def test_empty_prefab_has_only_root():
    prefab = build([])

    assert len(prefab.objects) == 1
    assert prefab.root.object_type == ObjectType.EMPTY
