"""Turn-based interaction between two agents."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pragmalab.core.agent import Agent, Listener, Speaker
from pragmalab.core.types import Data, NoData
from pragmalab.util.identifiers import InteractionIdentifier, default_identifier

logger = logging.getLogger(__name__)

A = TypeVar("A", bound=Agent)


class Interaction(ABC, Generic[A]):
    """Base class for interactions between a pair of agents.

    Agent 1 speaks first. Subclasses implement :meth:`turn` and
    :meth:`stopping_criterion`, and may override :meth:`collect` to
    summarize the per-turn data.
    """

    def __init__(
        self,
        agent1: A,
        agent2: A,
        origin_data: Data | None = None,
        identifier: InteractionIdentifier | None = None,
    ):
        self.agent1 = agent1
        self.agent2 = agent2
        self.origin_data = origin_data if origin_data is not None else NoData()
        self.pair_id = (identifier or default_identifier()).next_id()

        self.agent1_as_speaker: Speaker = agent1.as_speaker()
        self.agent2_as_speaker: Speaker = agent2.as_speaker()
        self.agent1_as_listener: Listener = agent1.as_listener()
        self.agent2_as_listener: Listener = agent2.as_listener()

        self.current_speaker: Speaker = self.agent1_as_speaker
        self.current_listener: Listener = self.agent2_as_listener
        self.turn_data: list[Data] = []

    def switch_roles(self) -> None:
        """Speaker becomes listener and listener becomes speaker."""
        if self.current_speaker is self.agent1_as_speaker:
            self.current_speaker = self.agent2_as_speaker
            self.current_listener = self.agent1_as_listener
        else:
            self.current_speaker = self.agent1_as_speaker
            self.current_listener = self.agent2_as_listener

    @abstractmethod
    def turn(self) -> Data:
        """Execute one turn and return data reflecting its result."""
        pass

    @abstractmethod
    def stopping_criterion(self) -> bool:
        """True when the interaction is over."""
        pass

    def collect(self, turns: list[Data]) -> Data:
        """Summarize the data of all turns (default: no summary)."""
        return NoData()

    def run_and_collect_data(self) -> Data:
        """Run turns until the stopping criterion holds, then collect."""
        while not self.stopping_criterion():
            self.turn_data.append(self.turn())
        logger.debug(f"Interaction {self.pair_id} finished after {len(self.turn_data)} turns")
        return self.collect(self.turn_data)
