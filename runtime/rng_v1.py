from __future__ import annotations
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class DeterministicRNG:
    """Deterministic RNG for the preview simulation.

    Every random draw the preview makes (spawn jitter, palette pick, decay
    jitter) goes through one of these so a seeded run replays exactly.
    seed=None seeds from the OS for live previews.
    """
    def __init__(self, seed: Optional[int] = 0):
        self.seed = None if seed is None else int(seed) & 0xFFFFFFFF
        self._rng = random.Random(self.seed)

    def rand(self) -> float:
        return self._rng.random()

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def symmetric(self, half_width: float) -> float:
        """Uniform sample in [-half_width, half_width]."""
        return (self._rng.random() - 0.5) * 2.0 * half_width


def clamp(x: float, lo: float, hi: float) -> float:
    if x < lo: return lo
    if x > hi: return hi
    return x
