from __future__ import annotations
import numpy as np
from numpy.typing import NDArray

from .nbody_constants import HASH_VERSION, UINT32_SPAN

"""
This module provides the deterministic pseudo-random source used to build initial scenes. hash_u32 applies a versioned 32-bit integer hash (version 1 is Robert Jenkins' six-shift integer hash) to arrays of counters with wrap-around uint32 arithmetic, and UniformSampler combines a seed with per-draw counters to produce uniform values in [0, 1). Every value is a pure function of (seed, counter, version): no global random state is read or written, so the same seed always regenerates the same scene bit for bit. New hash functions must be registered under a new version number rather than replacing an existing one.

"""


__all__ = ["hash_u32", "UniformSampler"]


def _jenkins32(a: NDArray[np.uint32]) -> NDArray[np.uint32]:
    with np.errstate(over="ignore"):
        a = (a + np.uint32(0x7ED55D16)) + (a << np.uint32(12))
        a = (a ^ np.uint32(0xC761C23C)) ^ (a >> np.uint32(19))
        a = (a + np.uint32(0x165667B1)) + (a << np.uint32(5))
        a = (a + np.uint32(0xD3A2646C)) ^ (a << np.uint32(9))
        a = (a + np.uint32(0xFD7046C5)) + (a << np.uint32(3))
        a = (a ^ np.uint32(0xB55A4F09)) ^ (a >> np.uint32(16))
    return a


_HASHES = {
    1: _jenkins32,
}


def _to_u32(values) -> NDArray[np.uint32]:
    wide = np.asarray(values, dtype=np.int64) & np.int64(0xFFFFFFFF)
    return np.atleast_1d(wide.astype(np.uint32))


def hash_u32(values, version: int = HASH_VERSION) -> NDArray[np.uint32]:
    fn = _HASHES.get(int(version))
    if fn is None:
        print(f"[warning] unknown hash version {version}; using version {HASH_VERSION}")
        fn = _HASHES[HASH_VERSION]
    return fn(_to_u32(values))


class UniformSampler:
    def __init__(self, seed: int, version: int = HASH_VERSION) -> None:
        self.seed = int(seed)
        self.version = int(version)
        self._seed_u32 = _to_u32(self.seed)[0]

    def uniform01(self, counters) -> NDArray[np.float64]:
        mixed = hash_u32(counters, self.version) ^ self._seed_u32
        h = hash_u32(mixed, self.version)
        return h.astype(np.float64) / UINT32_SPAN

    def uniform_block(self, n: int, width: int) -> NDArray[np.float64]:
        n = max(0, int(n))
        width = int(width)
        counters = np.arange(n * width, dtype=np.int64)
        return self.uniform01(counters).reshape(n, width)
