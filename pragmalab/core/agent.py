"""Agent capabilities.

An agent is anything that can be viewed as a speaker and as a listener.
The capabilities are protocols, so concrete agents compose them instead
of inheriting from a common base.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pragmalab.core.types import Data, Intention, Signal


@runtime_checkable
class Speaker(Protocol):
    """An agent in speaker mode."""

    def select_intention(self) -> Intention:
        """Select an intention to communicate."""
        ...

    def produce_signal(self, intention: Intention) -> tuple[Signal, Data]:
        """Produce a signal for ``intention``, with data about the production."""
        ...


@runtime_checkable
class Listener(Protocol):
    """An agent in listener mode."""

    def interpret_signal(self, signal: Signal) -> tuple[Intention, Data]:
        """Interpret ``signal``, with data about the interpretation."""
        ...


@runtime_checkable
class Agent(Protocol):
    """Something that can switch between speaking and listening."""

    def as_speaker(self) -> Speaker:
        ...

    def as_listener(self) -> Listener:
        ...
