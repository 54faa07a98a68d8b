"""Structured error hierarchy for pragmalab.

Every error also derives from the closest builtin, so callers that only
know about ``IndexError`` or ``ValueError`` still catch them.
"""


class PragmalabError(Exception):
    """Base for all pragmalab errors."""

    pass


class IndexOutOfRangeError(PragmalabError, IndexError):
    """Row or column index outside the lexicon."""

    def __init__(self, index: int, size: int, axis: str = "index"):
        self.index = index
        self.size = size
        self.axis = axis
        super().__init__(f"{axis} {index} out of range [0, {size})")


class DimensionMismatchError(PragmalabError, ValueError):
    """Matrix, vector or representation shapes are incompatible."""

    pass


class DomainMismatchError(PragmalabError, ValueError):
    """Distributions combined over different domains."""

    pass


class MalformedInputError(PragmalabError, ValueError):
    """Input cannot be interpreted (ragged matrix, zero step, ...)."""

    pass


class ConfigurationError(PragmalabError, ValueError):
    """Configuration file could not be read."""

    pass
