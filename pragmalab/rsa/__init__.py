"""Mathematical foundations of Rational Speech Act theory (Frank & Goodman, 2012).

- Lexicon: signal × referent relation matrix with pragmatic-order reasoning
- PragmaticModel: the speaker/listener recursion families
- StructuredLexicon: lexicons derived from bit-vector representations
"""

from __future__ import annotations

from pragmalab.rsa.lexicon import Lexicon
from pragmalab.rsa.models import PragmaticModel, listener, speaker
from pragmalab.rsa.structured import (
    EDIT_DISTANCE,
    HAMMING_DISTANCE,
    MappingFunction,
    StructuredLexicon,
    mapping_function_by_name,
    mutate_structured_representations,
)

__all__ = [
    "Lexicon",
    "PragmaticModel",
    "speaker",
    "listener",
    "StructuredLexicon",
    "MappingFunction",
    "HAMMING_DISTANCE",
    "EDIT_DISTANCE",
    "mapping_function_by_name",
    "mutate_structured_representations",
]
