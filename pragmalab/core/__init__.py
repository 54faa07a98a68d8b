"""Agent, interaction and pair-generation interfaces."""

from __future__ import annotations

from pragmalab.core.agent import Agent, Listener, Speaker
from pragmalab.core.interaction import Interaction
from pragmalab.core.pairs import AgentPair, PairGenerator, Parameters
from pragmalab.core.types import (
    ContentSignal,
    Data,
    Intention,
    NoData,
    ReferentialIntention,
    Signal,
)

__all__ = [
    "Agent",
    "Speaker",
    "Listener",
    "Interaction",
    "AgentPair",
    "PairGenerator",
    "Parameters",
    "Signal",
    "ContentSignal",
    "Intention",
    "ReferentialIntention",
    "Data",
    "NoData",
]
