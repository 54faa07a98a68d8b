"""Stateless probability utilities over plain numeric vectors.

These return indices rather than domain elements; use
:class:`pragmalab.probability.distribution.Distribution` when the
outcomes carry labels.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pragmalab.util.rng import RandomSource, resolve


def arg_max(values: Sequence[float], rng: RandomSource | None = None) -> int | None:
    """Index of the highest value, ties broken uniformly at random.

    Returns:
        The index, or None when ``values`` is empty
    """
    if not values:
        return None
    rng = resolve(rng)
    max_value = max(values)
    maxima = [i for i, v in enumerate(values) if v == max_value]
    return maxima[rng.next_int(len(maxima))]


def softened(values: Sequence[float], beta: float) -> list[float] | None:
    """Softmax weights ``exp(beta * v_i) / sum_j exp(beta * v_j)``.

    Returns None when the weights are not representable (NaN or float
    overflow), which callers treat as "fall back to hard argmax".
    """
    try:
        exps = [math.exp(beta * v) for v in values]
        total = sum(exps)
        weights = [e / total for e in exps]
    except (OverflowError, ZeroDivisionError):
        return None
    if any(math.isnan(w) for w in weights):
        return None
    return weights


def pick_cumulative(weights: Sequence[float], arrow: float) -> int:
    """First index whose cumulative weight exceeds ``arrow``; the last index if none."""
    acc = 0.0
    for i, w in enumerate(weights):
        acc += w
        if arrow < acc:
            return i
    return len(weights) - 1


def soft_arg_max(
    values: Sequence[float], beta: float, rng: RandomSource | None = None
) -> int | None:
    """Index drawn by soft argmax with inverse temperature ``beta``.

    As beta grows this approaches :func:`arg_max`; beta should be >= 0.
    When the softened weights contain NaN the hard argmax is used.

    Returns:
        The index, or None when ``values`` is empty
    """
    if not values:
        return None
    rng = resolve(rng)
    weights = softened(values, beta)
    if weights is None:
        return arg_max(values, rng)
    return pick_cumulative(weights, rng.next_float())


def entropy(distribution: Sequence[float]) -> float:
    """Shannon entropy in bits; zero-probability entries contribute nothing.

    Only meaningful when ``distribution`` sums to 1.0.
    """
    return -sum(p * math.log2(p) for p in distribution if p > 0)
