"""Simulation infrastructure: random source, memo cache, identifiers."""

from __future__ import annotations

from pragmalab.util.identifiers import InteractionIdentifier, default_identifier
from pragmalab.util.memo import MemoizingMap
from pragmalab.util.rng import RandomSource, default_source, resolve, set_seed

__all__ = [
    "RandomSource",
    "default_source",
    "resolve",
    "set_seed",
    "MemoizingMap",
    "InteractionIdentifier",
    "default_identifier",
]
