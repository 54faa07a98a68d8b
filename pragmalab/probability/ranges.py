"""Explicit numeric ranges, e.g. for sweeping a parameter space."""

from __future__ import annotations

from pragmalab.errors import MalformedInputError


def frange(step: float, lower: float = 0.0, upper: float = 1.0) -> list[float]:
    """Return ``lower, lower + step, ...`` while below ``upper``.

    When the walk lands exactly on ``upper`` it is included, so
    ``frange(0.5)`` is ``[0.0, 0.5, 1.0]``. ``lower > upper`` gives an
    empty list.

    Raises:
        MalformedInputError: If ``step`` is zero, or negative while
            ``lower < upper`` (the range would never end)
    """
    if step == 0:
        raise MalformedInputError("Step size in range equals zero, cannot compute infinite range.")
    if step < 0 and lower < upper:
        raise MalformedInputError(f"Negative step {step} never reaches upper bound {upper}.")
    values = []
    current = lower
    while current < upper:
        values.append(current)
        current += step
    if current == upper:
        values.append(upper)
    return values
