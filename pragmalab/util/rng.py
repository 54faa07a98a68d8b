"""Seedable random source shared by every stochastic operation.

All randomness in pragmalab is expressed as draws from a ``RandomSource``:
uniform floats, bounded integers, coin flips and weighted coin flips.
Identical seeds and identical call order reproduce identical results.

Functions that need randomness take an optional ``rng`` argument. When it
is omitted the process-wide default source is used, which can be reseeded
with :func:`set_seed`. Simulations that run side by side should each own
a fresh ``RandomSource`` instead of sharing the default.
"""

from __future__ import annotations

import random


class RandomSource:
    """A seeded random number generator."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._random = random.Random(seed)

    def set_seed(self, seed: int) -> None:
        """Reset the generator to the start of the stream for ``seed``."""
        self.seed = seed
        self._random.seed(seed)

    def next_float(self) -> float:
        """Return a uniform float in [0.0, 1.0)."""
        return self._random.random()

    def next_int(self, upper: int) -> int:
        """Return a uniform integer in [0, upper)."""
        return self._random.randrange(upper)

    def next_bool(self) -> bool:
        """Return True or False with equal probability."""
        return self._random.random() < 0.5

    def next_bernoulli(self, p: float) -> bool:
        """Return True with probability ``p``.

        ``p <= 0`` never succeeds and ``p >= 1`` always does.
        """
        return self._random.random() < p

    def spawn(self, offset: int) -> RandomSource:
        """Create an independent source seeded relative to this one."""
        base = self.seed if self.seed is not None else 0
        return RandomSource(base + offset)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"


_default_source = RandomSource()


def default_source() -> RandomSource:
    """Return the process-wide random source."""
    return _default_source


def set_seed(seed: int) -> None:
    """Reseed the process-wide random source."""
    _default_source.set_seed(seed)


def resolve(rng: RandomSource | None) -> RandomSource:
    """Return ``rng`` or, when None, the process-wide source."""
    return rng if rng is not None else _default_source
