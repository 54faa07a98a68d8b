"""Generating pairs of agents from a parameter space."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from pragmalab.core.types import Data
from pragmalab.util.rng import RandomSource


class Parameters:
    """Marker base for a point in a pair generator's parameter space."""


P = TypeVar("P", bound=Parameters)
A = TypeVar("A")
D = TypeVar("D", bound=Data)


@dataclass(frozen=True)
class AgentPair(Generic[A, D]):
    """Two agents plus data describing where they came from."""

    agent1: A
    agent2: A
    origin_data: D


class PairGenerator(ABC, Generic[P, A, D]):
    """Specifies a parameter space and how to draw agent pairs from it.

    Args:
        sample_size: Number of pairs drawn per parameter point
    """

    def __init__(self, sample_size: int):
        self.sample_size = sample_size

    @abstractmethod
    def generate_parameter_space(self) -> Sequence[P]:
        """The full domain of parameters used to generate pairs."""
        pass

    @abstractmethod
    def generate_pair(self, parameters: P, rng: RandomSource | None = None) -> AgentPair[A, D]:
        """Generate one pair of agents for ``parameters``, drawing from ``rng``."""
        pass

    def sample_generator(
        self, parameters: P, rng: RandomSource | None = None
    ) -> Iterator[AgentPair[A, D]]:
        """Yield ``sample_size`` freshly generated pairs for ``parameters``."""
        for _ in range(self.sample_size):
            yield self.generate_pair(parameters, rng)
