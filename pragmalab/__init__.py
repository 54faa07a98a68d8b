"""pragmalab: simulating pragmatic reasoning between communicating agents.

The core is the Rational Speech Act lexicon engine (``pragmalab.rsa``)
together with distributions and decision rules (``pragmalab.probability``).
"""

from __future__ import annotations

from pragmalab.probability import DecisionRule, Distribution
from pragmalab.rsa import Lexicon, PragmaticModel, StructuredLexicon
from pragmalab.util import RandomSource, set_seed

__version__ = "0.1.0"

__all__ = [
    "Lexicon",
    "StructuredLexicon",
    "PragmaticModel",
    "Distribution",
    "DecisionRule",
    "RandomSource",
    "set_seed",
]
