"""Lexicon as defined in Rational Speech Act theory (Frank & Goodman, 2012).

A lexicon relates a vocabulary of signals (rows) to a context of
referents (columns). Both binary and graded lexicons are supported. The
relations are stored as one flat row-major tuple, so the mapping

    |    | R1  | R2  | R3  |
    |----|-----|-----|-----|
    | S1 | 0.8 | 0.2 | 0.0 |
    | S2 | 0.0 | 0.6 | 0.4 |

is held as ``(0.8, 0.2, 0.0, 0.0, 0.6, 0.4)``.

Lexicons are immutable: normalization, mutation and pragmatic-order
transformations all return new instances.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from functools import cached_property

from pragmalab.errors import DimensionMismatchError, IndexOutOfRangeError, MalformedInputError
from pragmalab.rsa import models
from pragmalab.rsa.models import PragmaticModel
from pragmalab.util.rng import RandomSource, resolve

logger = logging.getLogger(__name__)


def _normalized(value: float, total: float) -> float:
    """Divide, mapping zero-sum (NaN) cells to 0.0."""
    if total == 0:
        return 0.0
    result = value / total
    return 0.0 if result != result else result


def _count_from(row: Sequence[float], start: int, predicate) -> int:
    return sum(1 for v in row[start:] if predicate(v))


class Lexicon:
    """Signal × referent association matrix.

    Attributes:
        vocabulary_size: Number of signals (rows)
        context_size: Number of referents (columns)
        data: Row-major cell values, length vocabulary_size * context_size
        model: Pragmatic model used by set_order_as_speaker/listener

    Instances are immutable; assigning or deleting any attribute raises
    ``AttributeError``.
    """

    vocabulary_size: int
    context_size: int
    data: tuple[float, ...]
    model: PragmaticModel

    def __init__(
        self,
        vocabulary_size: int,
        context_size: int,
        data: Iterable[float],
        model: PragmaticModel = PragmaticModel.BLOKPOEL_ET_AL,
    ):
        self._init_attrs(
            vocabulary_size=vocabulary_size,
            context_size=context_size,
            data=tuple(float(v) for v in data),
            model=model,
        )
        if vocabulary_size < 0 or context_size < 0:
            raise MalformedInputError(
                f"negative lexicon shape {vocabulary_size}x{context_size}"
            )
        if len(self.data) != vocabulary_size * context_size:
            raise DimensionMismatchError(
                f"data length {len(self.data)} != {vocabulary_size}x{context_size}"
            )

    @classmethod
    def from_matrix(
        cls,
        matrix: Sequence[Sequence[float]],
        model: PragmaticModel = PragmaticModel.BLOKPOEL_ET_AL,
    ) -> Lexicon:
        """Build a lexicon from a 2-D nested sequence (rows are signals).

        Raises:
            MalformedInputError: If the matrix is empty or ragged
        """
        if not matrix or any(len(row) != len(matrix[0]) for row in matrix):
            raise MalformedInputError("Matrix is not well-formed.")
        data = [v for row in matrix for v in row]
        return Lexicon(len(matrix), len(matrix[0]), data, model)

    def _init_attrs(self, **attrs) -> None:
        for name, value in attrs.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable, cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable, cannot delete '{name}'")

    def _derive(self, data: Iterable[float]) -> Lexicon:
        """New plain lexicon of the same shape and model."""
        return Lexicon(self.vocabulary_size, self.context_size, data, self.model)

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def _check_row(self, i: int) -> None:
        if not 0 <= i < self.vocabulary_size:
            raise IndexOutOfRangeError(i, self.vocabulary_size, "row")

    def _check_column(self, j: int) -> None:
        if not 0 <= j < self.context_size:
            raise IndexOutOfRangeError(j, self.context_size, "column")

    def get(self, i: int, j: int) -> float:
        """Return the relation between signal ``i`` and referent ``j``."""
        self._check_row(i)
        self._check_column(j)
        return self.data[j + i * self.context_size]

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return self.get(i, j)

    def set(self, i: int, j: int, v: float) -> Lexicon:
        """Return a copy with the relation between ``i`` and ``j`` set to ``v``."""
        self._check_row(i)
        self._check_column(j)
        data = list(self.data)
        data[j + i * self.context_size] = v
        return self._derive(data)

    def row(self, i: int) -> tuple[float, ...]:
        """All relations between signal ``i`` and the referents."""
        self._check_row(i)
        return self.data[i * self.context_size : (i + 1) * self.context_size]

    @cached_property
    def _columns(self) -> tuple[tuple[float, ...], ...]:
        # Column-major shadow copy, built once per instance
        return tuple(self.data[j :: self.context_size] for j in range(self.context_size))

    def column(self, j: int) -> tuple[float, ...]:
        """All relations between referent ``j`` and the signals."""
        self._check_column(j)
        return self._columns[j]

    def rows(self) -> list[tuple[float, ...]]:
        return [self.row(i) for i in range(self.vocabulary_size)]

    def to_2d(self) -> list[list[float]]:
        """Nested-list view, one list per signal."""
        return [list(r) for r in self.rows()]

    # ------------------------------------------------------------------
    # Linear algebra
    # ------------------------------------------------------------------

    def is_consistent(self) -> bool:
        """True iff every referent is expressed by some signal."""
        return all(sum(col) > 0.0 for col in self._columns)

    def dot(self, vector: Sequence[float]) -> list[float]:
        """Matrix-vector product; ``vector`` has one entry per referent.

        Raises:
            DimensionMismatchError: If len(vector) != context_size
        """
        if len(vector) != self.context_size:
            raise DimensionMismatchError(
                f"dot dimensions incompatible: vector length {len(vector)}"
                f" != context size {self.context_size}"
            )
        return [sum(a * b for a, b in zip(r, vector)) for r in self.rows()]

    def dot_t(self, vector: Sequence[float]) -> list[float]:
        """Transposed product; ``vector`` has one entry per signal.

        Raises:
            DimensionMismatchError: If len(vector) != vocabulary_size
        """
        if len(vector) != self.vocabulary_size:
            raise DimensionMismatchError(
                f"dot_t dimensions incompatible: vector length {len(vector)}"
                f" != vocabulary size {self.vocabulary_size}"
            )
        return [sum(a * b for a, b in zip(col, vector)) for col in self._columns]

    def normalize_columns(self) -> Lexicon:
        """Divide every cell by its column sum (zero columns stay zero)."""
        sums = [sum(col) for col in self._columns]
        return self._derive(
            _normalized(v, sums[k % self.context_size]) for k, v in enumerate(self.data)
        )

    def normalize_rows(self) -> Lexicon:
        """Divide every cell by its row sum (zero rows stay zero)."""
        sums = [sum(r) for r in self.rows()]
        return self._derive(
            _normalized(v, sums[k // self.context_size]) for k, v in enumerate(self.data)
        )

    # ------------------------------------------------------------------
    # Pragmatic reasoning
    # ------------------------------------------------------------------

    def set_order_as_speaker(self, n: int) -> Lexicon:
        """The nth-order speaker lexicon under this lexicon's model."""
        return models.speaker(self, n, self.model)

    def set_order_as_listener(self, n: int) -> Lexicon:
        """The nth-order listener lexicon under this lexicon's model."""
        return models.listener(self, n, self.model)

    def with_model(self, model: PragmaticModel) -> Lexicon:
        return Lexicon(self.vocabulary_size, self.context_size, self.data, model)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def asymmetry_with(self, other: Lexicon, similarity: float = 0.0) -> float:
        """Fraction of cells that differ from ``other`` by more than ``similarity``.

        Raises:
            DimensionMismatchError: If the two lexicons have different shapes
        """
        if (self.vocabulary_size, self.context_size) != (
            other.vocabulary_size,
            other.context_size,
        ):
            raise DimensionMismatchError(
                f"cannot compare {self.vocabulary_size}x{self.context_size} lexicon"
                f" with {other.vocabulary_size}x{other.context_size}"
            )
        if not self.data:
            return 0.0
        differing = sum(1 for a, b in zip(self.data, other.data) if abs(a - b) > similarity)
        return differing / len(self.data)

    def _ambiguity_counts(self, threshold: float) -> list[int]:
        return [sum(1 for v in r if v >= threshold) for r in self.rows()]

    def mean_ambiguity(self, threshold: float = 1.0) -> float:
        """Cells with a relation of at least ``threshold``, over all cells."""
        if not self.data:
            return 0.0
        return sum(self._ambiguity_counts(threshold)) / len(self.data)

    def mean_and_variance_ambiguity(self, threshold: float = 1.0) -> tuple[float, float]:
        """Mean and population variance of the per-signal ambiguity."""
        counts = self._ambiguity_counts(threshold)
        if not counts:
            return 0.0, 0.0
        mean = sum(counts) / len(counts)
        variance = sum((c - mean) ** 2 for c in counts) / len(counts)
        return mean, variance

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def mutate(self, mutation_rate: float, rng: RandomSource | None = None) -> Lexicon:
        """Flip each cell ``v`` to ``|v - 1|`` with probability ``mutation_rate``.

        In binary lexicons 1 becomes 0 and vice versa; graded values are
        mirrored, e.g. 0.9 becomes 0.1. One draw is made per cell.
        """
        rng = resolve(rng)
        return self._derive(
            abs(v - 1) if rng.next_bernoulli(mutation_rate) else v for v in self.data
        )

    def mix_referents(self, mix_rate: float, rng: RandomSource | None = None) -> Lexicon:
        """Swap relations across each row's central axis.

        For every row, ``int(mix_rate * (context_size // 2))`` of the
        mirrored pairs ``(j, context_size - 1 - j)`` are swapped. Pairs are
        visited left to right and each is swapped with probability
        swaps-still-needed / pairs-still-left, so exactly that many swaps
        happen. The middle cell of an odd-length row never moves.
        """
        rng = resolve(rng)
        size = self.context_size
        half = size // 2
        mixed = []
        for r in self.rows():
            new_row = list(r)
            swaps_needed = int(mix_rate * half)
            for j in range(half):
                if rng.next_bernoulli(swaps_needed / (half - j)):
                    new_row[j], new_row[size - 1 - j] = r[size - 1 - j], r[j]
                    swaps_needed -= 1
            mixed.extend(new_row)
        return self._derive(mixed)

    def additive_binary_mutation(
        self, addition_rate: float, rng: RandomSource | None = None
    ) -> Lexicon:
        """Turn ``int(addition_rate * zeros)`` zero cells per row into 1.0.

        Zero cells are visited left to right; each is converted with
        probability additions-still-needed / zero-cells-still-left, which
        spreads the additions evenly instead of favouring early cells.
        """
        rng = resolve(rng)
        return self._derive(
            self._proportional_rewrite(lambda v: v == 0.0, addition_rate, 1.0, rng)
        )

    def removal_binary_mutation(
        self,
        removal_rate: float,
        threshold: float = 1.0,
        rng: RandomSource | None = None,
    ) -> Lexicon:
        """Set ``int(removal_rate * qualifying)`` cells per row to 0.0.

        A cell qualifies when its value is at least ``threshold``.
        Selection follows the same sequential proportional sampling as
        :meth:`additive_binary_mutation`.
        """
        rng = resolve(rng)
        return self._derive(
            self._proportional_rewrite(lambda v: v >= threshold, removal_rate, 0.0, rng)
        )

    def _proportional_rewrite(
        self, qualifies, rate: float, new_value: float, rng: RandomSource
    ) -> list[float]:
        result: list[float] = []
        for r in self.rows():
            candidates = sum(1 for v in r if qualifies(v))
            needed = max(0, min(candidates, int(rate * candidates)))
            new_row = list(r)
            for j, v in enumerate(r):
                if not qualifies(v):
                    continue
                left = _count_from(r, j, qualifies)
                if rng.next_bernoulli(needed / left):
                    new_row[j] = new_value
                    needed -= 1
            result.extend(new_row)
        return result

    # ------------------------------------------------------------------
    # Generators
    # ------------------------------------------------------------------

    @classmethod
    def generate_random_binary_lexicon(
        cls,
        probability: float,
        vocabulary_size: int,
        context_size: int,
        rng: RandomSource | None = None,
    ) -> Lexicon:
        """Each cell is independently 1.0 with ``probability``, else 0.0.

        A probability <= 0 gives an empty lexicon, >= 1 a full one.
        """
        rng = resolve(rng)
        data = [
            1.0 if rng.next_bernoulli(probability) else 0.0
            for _ in range(vocabulary_size * context_size)
        ]
        logger.debug(
            f"Generated random binary lexicon {vocabulary_size}x{context_size} (p={probability})"
        )
        return Lexicon(vocabulary_size, context_size, data)

    @classmethod
    def generate_consistent_ambiguity_mapping(
        cls,
        ambiguity: int,
        vocabulary_size: int,
        context_size: int,
        rng: RandomSource | None = None,
    ) -> Lexicon:
        """Generate a consistent lexicon in which every signal has a fixed ambiguity.

        Every referent is covered by at least one signal and every signal
        relates to exactly ``ambiguity`` referents (clamped to
        [1, context_size]).

        Args:
            ambiguity: Number of referents per signal
            vocabulary_size: Number of signals
            context_size: Number of referents
            rng: Random source

        Returns:
            A binary lexicon

        Raises:
            DimensionMismatchError: If vocabulary_size < context_size
        """
        if vocabulary_size < context_size:
            raise DimensionMismatchError(
                "Vocabulary is smaller than the context, cannot create consistent lexicon."
            )
        rng = resolve(rng)
        quota = max(1, min(ambiguity, context_size))
        remaining = [quota] * vocabulary_size
        matrix = [[0.0] * context_size for _ in range(vocabulary_size)]

        # Cover each referent with its own signal first, guaranteeing consistency
        not_picked = list(range(vocabulary_size))
        for j in range(context_size):
            sig = not_picked.pop(rng.next_int(len(not_picked)))
            matrix[sig][j] = 1.0
            remaining[sig] -= 1

        for i, r in enumerate(matrix):
            for j in range(context_size):
                if r[j] != 0.0:
                    continue
                left = _count_from(r, j, lambda v: v == 0.0)
                if rng.next_bernoulli(remaining[i] / left):
                    r[j] = 1.0
                    remaining[i] -= 1

        logger.debug(
            f"Generated consistent lexicon {vocabulary_size}x{context_size} (ambiguity={quota})"
        )
        return Lexicon(vocabulary_size, context_size, [v for r in matrix for v in r])

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.vocabulary_size == other.vocabulary_size
            and self.context_size == other.context_size
            and self.data == other.data
            and self.model == other.model
        )

    def __hash__(self) -> int:
        return hash((self.vocabulary_size, self.context_size, self.data, self.model))

    def __repr__(self) -> str:
        return (
            f"Lexicon({self.vocabulary_size}x{self.context_size}, "
            f"model={self.model.value})"
        )

    def __str__(self) -> str:
        return "".join("\t".join(str(v) for v in r) + "\t\n" for r in self.rows())
