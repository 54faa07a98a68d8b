"""Probability distributions and decision rules over discrete domains."""

from __future__ import annotations

from pragmalab.probability.distribution import DecisionRule, Distribution
from pragmalab.probability.functions import arg_max, entropy, soft_arg_max
from pragmalab.probability.ranges import frange

__all__ = [
    "Distribution",
    "DecisionRule",
    "arg_max",
    "soft_arg_max",
    "entropy",
    "frange",
]
