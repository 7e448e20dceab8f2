from __future__ import annotations

MASK64 = (1 << 64) - 1


def derive_seed(name: str) -> int:
    """Order-sensitive rolling hash of `name` as an unsigned 64-bit integer.

    ``h = h * 31 + ord(ch)`` over the code points, wrapping at 64 bits.
    The empty string maps to 0.
    """
    h = 0
    for ch in name:
        h = (h * 31 + ord(ch)) & MASK64
    return h


def seeded_random(name: str, index: int) -> float:
    """Per-index pseudo-random value in [0, 1) derived from a name."""
    h = 5381
    for ch in name:
        h = (h * 33 + ord(ch)) & MASK64
    h = (h * 31 + index * 7919) & MASK64
    h ^= h >> 13
    h = (h * 0x5BD1E995) & MASK64
    h ^= h >> 15
    return (h % 10000) / 10000.0
