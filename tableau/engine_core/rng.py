"""
Seeded RNG - Reproducible random source for deals and AI tie-breaks.

An Rng is any zero-argument callable returning a float in [0, 1).
SeededRng is a 32-bit linear congruential generator: the same seed
yields the same infinite sequence on every platform.
"""

from __future__ import annotations
import random
from typing import Callable

Rng = Callable[[], float]

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32


class SeededRng:
    """
    LCG with s' = (s * 1664525 + 1013904223) mod 2^32, returning s'/2^32.

    The state advances on every call.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self.state = seed % LCG_MODULUS

    def __call__(self) -> float:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS

    def __repr__(self) -> str:
        return f"SeededRng(seed={self.seed}, state={self.state})"


def create_seeded_rng(seed: int) -> SeededRng:
    """Create a deterministic RNG from an integer seed."""
    return SeededRng(seed)


def default_rng() -> Rng:
    """Platform PRNG for callers that do not need reproducibility."""
    return random.random


def choose_index(rng: Rng, count: int) -> int:
    """Pick a uniform index in [0, count) from one rng draw."""
    return int(rng() * count)
