# infinitune/services/randomizer.py
"""
Seeded random stream.

Every generated field of a song is drawn from one SeededStream, so the
stream (hash + generator) is part of the reproducibility contract:

- hash_seed: DJB2-xor over the UTF-8 bytes of the seed, wrapped to 32 bits
- generator: numpy's legacy RandomState (MT19937), whose stream NumPy
  keeps frozen across releases
"""

from __future__ import annotations

from typing import Sequence, TypeVar

import numpy as np

from infinitune.core.errors import EmptyInputError

T = TypeVar("T")

_U32 = 0xFFFFFFFF
_FLOAT_STEPS = 1_000_000
RESEED_MAX = 1_000_000


def hash_seed(seed: str) -> int:
    # lone surrogates (undecodable argv bytes) hash as their 3-byte form
    h = 5381
    for b in seed.encode("utf-8", "surrogatepass"):
        h = (((h << 5) + h) ^ b) & _U32
    return h


class SeededStream:
    """
    Deterministic draw source for one item.
    Same seed string => same sequence of ints, floats and picks.
    """

    def __init__(self, seed: str):
        self.seed = seed
        self.hash = hash_seed(seed)
        self.rng = np.random.RandomState(self.hash)

    def next_int(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi], both ends inclusive."""
        lo, hi = int(lo), int(hi)
        if lo > hi:
            raise ValueError(f"empty range: [{lo}, {hi}]")
        return int(self.rng.randint(lo, hi + 1))

    def next_float(self) -> float:
        """Uniform float in [0, 1) on a fixed grid of 1e6 steps."""
        return self.next_int(0, _FLOAT_STEPS - 1) / _FLOAT_STEPS

    def pick(self, items: Sequence[T]) -> T:
        if len(items) == 0:
            raise EmptyInputError("Cannot pick from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def reseed_value(self) -> int:
        """One draw used to seed an external provider (e.g. the identity text generator)."""
        return self.next_int(0, RESEED_MAX)
