"""Seeded 32-bit helpers.

Arithmetic follows JavaScript int32 semantics (``x | 0``, ``x >>> 0``) so that
ids, fallback classes and level bumps stay identical to the browser build.
"""
from __future__ import annotations
import struct
from typing import Callable

_MASK = 0xFFFFFFFF


def to_int32(x: int) -> int:
    x &= _MASK
    return x - 0x100000000 if x & 0x80000000 else x


def to_uint32(x: int) -> int:
    return x & _MASK


def _utf16_units(s: str):
    data = s.encode("utf-16-le", "surrogatepass")
    return struct.unpack(f"<{len(data) // 2}H", data)


def hash_str(s: str, seed: int = 0) -> int:
    h = to_int32(int(seed))
    for code in _utf16_units(str(s)):
        h = to_int32(h * 31 + code)
    return to_uint32(h)


def seeded01(seed: int) -> float:
    """Single xorshift step mapped onto [0, 1) with five decimal places."""
    x = to_int32(int(seed))
    x = to_int32(x ^ to_int32(x << 13))
    x = to_int32(x ^ (x >> 17))
    x = to_int32(x ^ to_int32(x << 5))
    return (to_uint32(x) % 100000) / 100000


def xorshift32(seed: int) -> Callable[[], float]:
    """Return a generator function yielding a repeatable sequence in [0, 1)."""
    # plain 13/17/5 xorshift: seed 0 stays at 0 and always yields 0.0
    state = to_uint32(int(seed))

    def next_value() -> float:
        nonlocal state
        x = state
        x ^= (x << 13) & _MASK
        x ^= x >> 17
        x ^= (x << 5) & _MASK
        state = x
        return x / 4294967296.0

    return next_value


def stable_id_from(ts: int, name: str) -> str:
    h = hash_str(f"{ts}:{name}", ts)
    return str(h % 100000000).zfill(8)


def seeded_shuffle(items: list, seed: int) -> list:
    """Fisher-Yates over a copy, driven by ``xorshift32(seed)``."""
    out = list(items)
    r = xorshift32(seed)
    for i in range(len(out) - 1, 0, -1):
        j = int(r() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out
