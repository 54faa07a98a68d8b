"""Probability distribution over a labeled discrete domain."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Generic, TypeVar

from pragmalab.errors import DimensionMismatchError, DomainMismatchError, MalformedInputError
from pragmalab.probability import functions
from pragmalab.util.rng import RandomSource, resolve

A = TypeVar("A")


class DecisionRule(Enum):
    """How a discrete choice is made from a distribution."""

    SAMPLE = "sample"  # proportional to probability
    ARGMAX = "argmax"  # most probable, random tie-break
    SOFTARGMAX = "softargmax"  # softmax with inverse temperature beta


@dataclass(frozen=True)
class Distribution(Generic[A]):
    """A probability distribution over ``domain``.

    ``raw_weights`` need not sum to 1.0; the normalized distribution is
    derived lazily. If the raw weights sum to zero or less, the
    normalized distribution is the raw weights themselves.

    The domain may contain duplicates; lookups resolve to the first
    matching position.
    """

    domain: tuple[A, ...]
    raw_weights: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", tuple(self.domain))
        object.__setattr__(self, "raw_weights", tuple(float(w) for w in self.raw_weights))
        if len(self.domain) != len(self.raw_weights):
            raise DimensionMismatchError(
                f"domain has {len(self.domain)} elements but {len(self.raw_weights)} weights"
            )

    @classmethod
    def uniform(cls, domain: Sequence[A]) -> Distribution[A]:
        return cls(tuple(domain), tuple(1.0 for _ in domain))

    @cached_property
    def normalized(self) -> tuple[float, ...]:
        """The normalized probabilities, parallel to ``domain``."""
        total = sum(self.raw_weights)
        if total > 0:
            return tuple(w / total for w in self.raw_weights)
        return self.raw_weights

    def probability_of(self, elem: A) -> float | None:
        """Probability of ``elem``, or None if it is not in the domain."""
        try:
            i = self.domain.index(elem)
        except ValueError:
            return None
        return self.normalized[i]

    def __len__(self) -> int:
        return len(self.domain)

    def __iter__(self) -> Iterator[tuple[A, float]]:
        return iter(zip(self.domain, self.normalized))

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def sample(self, rng: RandomSource | None = None) -> A:
        """Draw one element, proportionate to the probabilities.

        Walks the cumulative distribution and returns the element whose
        interval contains the draw; the last element absorbs any
        remainder, so a single-element domain always returns its element.

        Raises:
            MalformedInputError: If the domain is empty
        """
        if not self.domain:
            raise MalformedInputError("Cannot sample from an empty distribution.")
        arrow = resolve(rng).next_float()
        acc = 0.0
        for elem, p in zip(self.domain[:-1], self.normalized):
            if acc <= arrow < acc + p:
                return elem
            acc += p
        return self.domain[-1]

    def sample_many(self, n: int, rng: RandomSource | None = None) -> list[A]:
        """Draw ``n`` independent samples."""
        rng = resolve(rng)
        return [self.sample(rng) for _ in range(n)]

    def arg_max(self, rng: RandomSource | None = None) -> A | None:
        """Most probable element, ties broken uniformly at random.

        Returns None for an empty domain.
        """
        index = functions.arg_max(self.normalized, rng)
        return None if index is None else self.domain[index]

    def soft_arg_max(self, beta: float, rng: RandomSource | None = None) -> A | None:
        """Element drawn by soft argmax with inverse temperature ``beta``.

        If beta -> inf this is equivalent to :meth:`arg_max`. Soft argmax
        is ill-defined for negative beta. Returns None for an empty domain.
        """
        index = functions.soft_arg_max(self.normalized, beta, rng)
        return None if index is None else self.domain[index]

    def decide(
        self,
        rule: DecisionRule,
        beta: float = 1.0,
        rng: RandomSource | None = None,
    ) -> A | None:
        """Make a choice according to ``rule``; ``beta`` only applies to SOFTARGMAX."""
        if not self.domain:
            return None
        if rule is DecisionRule.SAMPLE:
            return self.sample(rng)
        if rule is DecisionRule.ARGMAX:
            return self.arg_max(rng)
        return self.soft_arg_max(beta, rng)

    def entropy(self) -> float:
        """Shannon entropy in bits of the normalized distribution."""
        return functions.entropy(self.normalized)

    # ------------------------------------------------------------------
    # Combinators on raw weights
    # ------------------------------------------------------------------

    def scale_by(self, value: float) -> Distribution[A]:
        """Multiply the raw weights by ``value``; the normalized distribution is unchanged."""
        return Distribution(self.domain, tuple(w * value for w in self.raw_weights))

    def add_to(self, other: Distribution[A]) -> Distribution[A]:
        """Add raw weights position by position.

        Raises:
            DomainMismatchError: If the domains differ
        """
        if self.domain != other.domain:
            raise DomainMismatchError("Cannot add distributions with different domains.")
        return Distribution(
            self.domain, tuple(a + b for a, b in zip(self.raw_weights, other.raw_weights))
        )

    def __str__(self) -> str:
        return ", ".join(f"P({elem})={p}" for elem, p in self)
