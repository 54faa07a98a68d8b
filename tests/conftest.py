"""Shared test fixtures for the pragmalab test suite."""

from __future__ import annotations

import pytest

from pragmalab.config import SimulationConfig
from pragmalab.rsa.lexicon import Lexicon
from pragmalab.util.rng import RandomSource


@pytest.fixture
def rng() -> RandomSource:
    """A deterministic random source."""
    return RandomSource(42)


@pytest.fixture
def binary_lexicon() -> Lexicon:
    """3 signals x 3 referents, consistent, with one ambiguous signal."""
    return Lexicon.from_matrix(
        [
            [1.0, 1.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
        ]
    )


@pytest.fixture
def graded_lexicon() -> Lexicon:
    """The 2 x 3 example lexicon with one all-zero column removed."""
    return Lexicon.from_matrix(
        [
            [0.8, 0.2, 0.0],
            [0.0, 0.6, 0.4],
        ]
    )


@pytest.fixture
def config() -> SimulationConfig:
    """Small config for fast tests."""
    return SimulationConfig(
        seed=7,
        vocabulary_size=4,
        context_size=3,
        ambiguities=[1, 2],
        orders=[0, 1],
        max_turns=6,
        sample_size=2,
    )
