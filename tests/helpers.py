"""Shared assertions for pragmalab test suites."""

from __future__ import annotations

from collections.abc import Sequence

import pytest


def assert_cells_approx(actual: Sequence[float], expected: Sequence[float]) -> None:
    """Element-wise approximate equality of two flat cell sequences."""
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert a == pytest.approx(e)
