"""Structured lexicons: relations derived from binary feature representations.

Signals and referents are each represented by a bit-vector of a common
length. The relation between signal ``i`` and referent ``j`` is the value
of a mapping function over their representations, optionally binarized
by a threshold.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from pragmalab.errors import DimensionMismatchError, MalformedInputError
from pragmalab.rsa.lexicon import Lexicon
from pragmalab.rsa.models import PragmaticModel
from pragmalab.util.rng import RandomSource, resolve

logger = logging.getLogger(__name__)

Representation = tuple[bool, ...]


@dataclass(frozen=True)
class MappingFunction:
    """A named, pure function relating two bit-vectors."""

    name: str
    func: Callable[[Sequence[bool], Sequence[bool]], float]

    def __call__(self, r1: Sequence[bool], r2: Sequence[bool]) -> float:
        return self.func(r1, r2)


def hamming_distance(r1: Sequence[bool], r2: Sequence[bool]) -> float:
    """Positional mismatch count, normalized by the vector length.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(r1) != len(r2):
        raise DimensionMismatchError(
            f"Hamming distance needs equal lengths, got {len(r1)} and {len(r2)}"
        )
    if not r1:
        return 0.0
    mismatches = sum(1 for a, b in zip(r1, r2) if a != b)
    return mismatches / len(r1)


def edit_distance(r1: Sequence[bool], r2: Sequence[bool]) -> float:
    """Levenshtein distance (insert, delete, substitute), normalized by len(r1)."""
    if not r1:
        return 0.0
    # Single rolling row of the dynamic-programming table
    prev = list(range(len(r2) + 1))
    for x in r1:
        current = [prev[0] + 1]
        for k, y in enumerate(r2):
            current.append(
                min(
                    current[k] + 1,  # insertion
                    prev[k + 1] + 1,  # deletion
                    prev[k] + (0 if x == y else 1),  # substitution
                )
            )
        prev = current
    return prev[-1] / len(r1)


HAMMING_DISTANCE = MappingFunction("hamming distance", hamming_distance)
EDIT_DISTANCE = MappingFunction("edit distance", edit_distance)

MAPPING_FUNCTIONS: dict[str, MappingFunction] = {
    "hamming_distance": HAMMING_DISTANCE,
    "edit_distance": EDIT_DISTANCE,
}


def mapping_function_by_name(name: str) -> MappingFunction:
    """Look up a mapping function by key (``hamming_distance``) or display name.

    Raises:
        KeyError: If no mapping function has that name
    """
    key = name.strip().lower().replace(" ", "_")
    if key not in MAPPING_FUNCTIONS:
        raise KeyError(f"Unknown mapping function '{name}'. Available: {sorted(MAPPING_FUNCTIONS)}")
    return MAPPING_FUNCTIONS[key]


def random_representation(length: int, rng: RandomSource | None = None) -> Representation:
    """A uniformly random bit-vector of ``length`` bits."""
    rng = resolve(rng)
    return tuple(rng.next_bool() for _ in range(length))


def generate_representations(
    length: int, count: int, rng: RandomSource | None = None
) -> tuple[Representation, ...]:
    rng = resolve(rng)
    return tuple(random_representation(length, rng) for _ in range(count))


def mutate_structured_representations(
    representations: Sequence[Sequence[bool]],
    change_rate: float,
    rng: RandomSource | None = None,
) -> tuple[Representation, ...]:
    """Flip each bit of each representation with probability ``change_rate``."""
    rng = resolve(rng)
    return tuple(
        tuple((not bit) if rng.next_bernoulli(change_rate) else bit for bit in representation)
        for representation in representations
    )


def _relations(
    vocabulary: Sequence[Sequence[bool]],
    context: Sequence[Sequence[bool]],
    mapping_function: MappingFunction,
    mapping_threshold: float | None,
) -> tuple[float, ...]:
    data = []
    for signal in vocabulary:
        for referent in context:
            value = mapping_function(signal, referent)
            if mapping_threshold is not None:
                value = 1.0 if value >= mapping_threshold else 0.0
            data.append(value)
    return tuple(data)


class StructuredLexicon(Lexicon):
    """A lexicon whose relations come from representational similarity.

    Attributes:
        vocabulary_representations: One bit-vector per signal
        context_representations: One bit-vector per referent
        mapping_function: Computes the relation between two bit-vectors
        mapping_threshold: When set, relations are 1.0 if the mapping
            value is >= threshold and 0.0 otherwise
        representation_length: Common length of all bit-vectors

    The relations are computed from the representations when ``data`` is
    omitted. Explicit ``data`` must equal those relations.

    Raises:
        DimensionMismatchError: If representation lengths differ, or
            ``data`` has the wrong length
        MalformedInputError: If ``data`` disagrees with the mapping function
    """

    def __init__(
        self,
        vocabulary_representations: Sequence[Sequence[bool]],
        context_representations: Sequence[Sequence[bool]],
        mapping_function: MappingFunction,
        data: Sequence[float] | None = None,
        mapping_threshold: float | None = None,
        model: PragmaticModel = PragmaticModel.BLOKPOEL_ET_AL,
    ):
        vocabulary = tuple(tuple(r) for r in vocabulary_representations)
        context = tuple(tuple(r) for r in context_representations)
        lengths = {len(r) for r in vocabulary + context}
        if len(lengths) > 1:
            raise DimensionMismatchError(
                "Vocabulary and context binary representations are not of equal length."
            )
        relations = _relations(vocabulary, context, mapping_function, mapping_threshold)
        if data is None:
            data = relations
        else:
            data = tuple(float(v) for v in data)
            if len(data) != len(relations):
                raise DimensionMismatchError(
                    f"data length {len(data)} != {len(vocabulary)}x{len(context)}"
                )
            if any(not math.isclose(a, b, abs_tol=1e-9) for a, b in zip(data, relations)):
                raise MalformedInputError(
                    f"data does not match {mapping_function.name} over the representations"
                )
        self._init_attrs(
            vocabulary_representations=vocabulary,
            context_representations=context,
            representation_length=lengths.pop() if lengths else 0,
            mapping_function=mapping_function,
            mapping_threshold=mapping_threshold,
        )
        super().__init__(len(vocabulary), len(context), data, model)

    def get_lexicon(self) -> Lexicon:
        """Plain lexicon with the same relations, dropping the representations."""
        return Lexicon(self.vocabulary_size, self.context_size, self.data, self.model)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructuredLexicon):
            return NotImplemented
        return (
            super().__eq__(other)
            and self.vocabulary_representations == other.vocabulary_representations
            and self.context_representations == other.context_representations
            and self.mapping_function == other.mapping_function
            and self.mapping_threshold == other.mapping_threshold
        )

    def __hash__(self) -> int:
        return hash((super().__hash__(), self.vocabulary_representations, self.context_representations))

    def __repr__(self) -> str:
        return (
            f"StructuredLexicon({self.vocabulary_size}x{self.context_size}, "
            f"mapping={self.mapping_function.name}, threshold={self.mapping_threshold})"
        )

    @classmethod
    def from_representations(
        cls,
        vocabulary_representations: Sequence[Sequence[bool]],
        context_representations: Sequence[Sequence[bool]],
        mapping_function: MappingFunction,
        mapping_threshold: float | None = None,
    ) -> StructuredLexicon:
        """Compute every signal-referent relation from the given representations.

        Args:
            vocabulary_representations: One bit-vector per signal
            context_representations: One bit-vector per referent
            mapping_function: Relation between two bit-vectors
            mapping_threshold: Optional binarization threshold

        Returns:
            A graded (no threshold) or binary structured lexicon
        """
        return cls(
            vocabulary_representations,
            context_representations,
            mapping_function,
            mapping_threshold=mapping_threshold,
        )

    @classmethod
    def generate_graded_structured_lexicon(
        cls,
        representation_length: int,
        mapping_function: MappingFunction,
        vocabulary_size: int,
        context_size: int,
        rng: RandomSource | None = None,
    ) -> StructuredLexicon:
        """Generate random representations and their graded lexicon.

        A representation_length below vocabulary_size or context_size
        makes identical representations likely.
        """
        rng = resolve(rng)
        vocabulary = generate_representations(representation_length, vocabulary_size, rng)
        context = generate_representations(representation_length, context_size, rng)
        logger.debug(
            f"Generated graded structured lexicon {vocabulary_size}x{context_size} "
            f"({mapping_function.name}, {representation_length} bits)"
        )
        return cls.from_representations(vocabulary, context, mapping_function)

    @classmethod
    def generate_binary_structured_lexicon(
        cls,
        representation_length: int,
        mapping_function: MappingFunction,
        mapping_threshold: float,
        vocabulary_size: int,
        context_size: int,
        rng: RandomSource | None = None,
    ) -> StructuredLexicon:
        """Generate random representations and their thresholded lexicon."""
        rng = resolve(rng)
        vocabulary = generate_representations(representation_length, vocabulary_size, rng)
        context = generate_representations(representation_length, context_size, rng)
        logger.debug(
            f"Generated binary structured lexicon {vocabulary_size}x{context_size} "
            f"({mapping_function.name} >= {mapping_threshold})"
        )
        return cls.from_representations(vocabulary, context, mapping_function, mapping_threshold)
