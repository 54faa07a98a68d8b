"""Signals, intentions and collected data exchanged by agents."""

from __future__ import annotations

from dataclasses import dataclass


class Signal:
    """Marker base for everything a speaker can produce."""


class Intention:
    """Marker base for everything a speaker can intend."""


class Data:
    """Marker base for data collected during a simulation."""


@dataclass(frozen=True)
class ContentSignal(Signal):
    """A signal carrying the index of a signal in a lexicon, or None."""

    content: int | None = None

    @property
    def is_defined(self) -> bool:
        return self.content is not None


@dataclass(frozen=True)
class ReferentialIntention(Intention):
    """An intention carrying the index of a referent in a lexicon, or None."""

    content: int | None = None

    @property
    def is_defined(self) -> bool:
        return self.content is not None


@dataclass(frozen=True)
class NoData(Data):
    """Use when a simulation has no data to collect."""
