"""
Deterministic object identifiers

Object ids come from a mulberry32 generator seeded by the caller, so
exporting the same image with the same seed always gives the same ids.
"""

import base64
import struct
from typing import Iterator, List

MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply (low 32 bits)"""
    return (a * b) & MASK32


def mulberry32(seed: int) -> Iterator[int]:
    """Yield unsigned 32-bit values from a mulberry32 stream"""
    state = seed & MASK32
    while True:
        state = (state + 0x6D2B79F5) & MASK32
        x = state
        x = _imul(x ^ (x >> 15), x | 1)
        x ^= (x + _imul(x ^ (x >> 7), x | 61)) & MASK32
        yield (x ^ (x >> 14)) & MASK32


def int_to_id(n: int) -> str:
    """Encode a 32-bit value as base64 of its big-endian bytes"""
    return base64.b64encode(struct.pack('>I', n & MASK32)).decode('ascii')


def generate_ids(seed: int, count: int) -> List[str]:
    """First `count` identifiers of the stream for `seed`"""
    stream = mulberry32(seed)
    return [int_to_id(next(stream)) for _ in range(count)]
