"""Reference agents built on the RSA lexicon."""

from __future__ import annotations

from pragmalab.agents.rsa_agent import (
    InteractionData,
    ReferentialInteraction,
    RSAAgent,
    RSAPairGenerator,
    RSAParameters,
    TurnData,
)

__all__ = [
    "RSAAgent",
    "RSAPairGenerator",
    "RSAParameters",
    "ReferentialInteraction",
    "TurnData",
    "InteractionData",
]
