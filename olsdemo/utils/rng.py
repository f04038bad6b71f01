"""
Random-access pseudo-random numbers.

Every value is a pure hash of (seed, index): there is no generator object and
no cursor, so the i-th draw can be recomputed on its own and in any order.
The scalar functions are the reference; the *_array twins evaluate the same
hash over numpy arrays for batch generation.
"""
from __future__ import annotations

import math

import numpy as np

_MASK32 = 0xFFFFFFFF
_STEP = 0x6D2B79F5          # Mulberry32 increment
_TWO_32 = 4294967296.0
_MIN_UNIFORM = 1.0 / _TWO_32  # smallest non-zero output of seeded_random


def seeded_random(seed: int, index: int) -> float:
    """
    Uniform value in [0, 1) for the given seed and index.

    Mulberry32 finalizer applied to seed + index * 0x6D2B79F5, with every
    intermediate wrapped to 32 bits.
    """
    t = (seed + index * _STEP) & _MASK32
    t = ((t ^ (t >> 15)) * (t | 1)) & _MASK32
    t ^= (t + ((t ^ (t >> 7)) * (t | 61))) & _MASK32
    return (t ^ (t >> 14)) / _TWO_32


def seeded_random_array(seed: int, indices) -> np.ndarray:
    """Vectorised seeded_random; bit-identical to the scalar function."""
    idx = np.asarray(indices, dtype=np.int64).astype(np.uint64)
    # uint64 products wrap mod 2**64, which preserves the value mod 2**32
    t = (np.uint64(seed & _MASK32) + idx * np.uint64(_STEP)) & np.uint64(_MASK32)
    t = t.astype(np.uint32)
    t = (t ^ (t >> np.uint32(15))) * (t | np.uint32(1))
    t ^= t + (t ^ (t >> np.uint32(7))) * (t | np.uint32(61))
    t ^= t >> np.uint32(14)
    return t.astype(np.float64) / _TWO_32


def random_normal(mean: float, std_dev: float, seed: int, index: int) -> float:
    """
    Normal draw via Box-Muller from RNG slots 2*index and 2*index + 1.

    A uniform of exactly 0 is clamped to 2**-32 so the log stays finite.
    """
    u = max(seeded_random(seed, 2 * index), _MIN_UNIFORM)
    v = max(seeded_random(seed, 2 * index + 1), _MIN_UNIFORM)
    z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
    return mean + z * std_dev


def random_normal_array(mean: float, std_dev: float, seed: int, indices) -> np.ndarray:
    idx = np.asarray(indices, dtype=np.int64)
    u = np.maximum(seeded_random_array(seed, 2 * idx), _MIN_UNIFORM)
    v = np.maximum(seeded_random_array(seed, 2 * idx + 1), _MIN_UNIFORM)
    z = np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)
    return mean + z * std_dev
