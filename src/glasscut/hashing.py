"""Fixed-width integer hashing for per-edge and per-site decisions.

Every stochastic-looking choice in the pipeline (edge phase, tab offset,
tab shape, seed jitter) is derived from this module so results are
bit-reproducible across runs, platforms and implementations.

Algorithm
---------
Coordinates are quantised to integer micro-millimetres
(``round(v * 10**6)``) and reinterpreted as unsigned 64-bit words (two's
complement for negatives).  Starting from ``state = seed``, each word is
folded in with::

    state = splitmix64(state ^ word)

where ``splitmix64`` is the SplitMix64 output function (Steele, Lea &
Flood 2014)::

    z = (x + 0x9E3779B97F4A7C15)            mod 2**64
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 mod 2**64
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB mod 2**64
    return z ^ (z >> 31)

Word order matters; callers that need direction-independent hashes must
canonicalise the point order first (see :func:`edges.canonical_edge`).
"""

from __future__ import annotations

from typing import Iterable, Tuple

MASK64 = (1 << 64) - 1
COORD_PRECISION = 6

_GOLDEN = 0x9E3779B97F4A7C15
_MIX1 = 0xBF58476D1CE4E5B9
_MIX2 = 0x94D049BB133111EB


def splitmix64(x: int) -> int:
    """SplitMix64 finalizer over a 64-bit word."""
    z = (x + _GOLDEN) & MASK64
    z = ((z ^ (z >> 30)) * _MIX1) & MASK64
    z = ((z ^ (z >> 27)) * _MIX2) & MASK64
    return z ^ (z >> 31)


def quantize(value: float, precision: int = COORD_PRECISION) -> int:
    """Coordinate → unsigned 64-bit word at *precision* decimal places."""
    return int(round(value * 10 ** precision)) & MASK64


def hash_words(words: Iterable[int], seed: int = 0) -> int:
    state = seed & MASK64
    for word in words:
        state = splitmix64(state ^ (word & MASK64))
    return state


def hash_points(*points: Tuple[float, float], seed: int = 0) -> int:
    """64-bit hash of an ordered sequence of 2-D points."""
    return hash_words(
        (quantize(c) for p in points for c in p),
        seed=seed,
    )


def hash_values(*values: float, seed: int = 0) -> int:
    """64-bit hash of an ordered sequence of scalars."""
    return hash_words((quantize(v) for v in values), seed=seed)


def bit_field(h: int, offset: int, width: int) -> int:
    return (h >> offset) & ((1 << width) - 1)


def unit_field(h: int, offset: int, width: int) -> float:
    """Sub-field of *h* as a fraction in ``[0, 1)``."""
    return bit_field(h, offset, width) / float(1 << width)


def unit_float(h: int) -> float:
    """Top 53 bits of *h* as a double in ``[0, 1)``."""
    return (h >> 11) / float(1 << 53)


def signed_unit(h: int) -> float:
    """Top 53 bits of *h* mapped to ``[-1, 1)``."""
    return unit_float(h) * 2.0 - 1.0
