"""Rational Speech Act agents playing a referential game.

A speaker picks a referent, consults its nth-order speaker lexicon and
chooses a signal from the referent's column. The listener consults its
nth-order listener lexicon and chooses a referent from the signal's row.
A turn succeeds when the listener recovers the speaker's referent.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pragmalab.core.interaction import Interaction
from pragmalab.core.pairs import AgentPair, PairGenerator, Parameters
from pragmalab.core.types import ContentSignal, Data, ReferentialIntention
from pragmalab.errors import MalformedInputError
from pragmalab.probability.distribution import DecisionRule, Distribution
from pragmalab.rsa.lexicon import Lexicon
from pragmalab.rsa.structured import (
    StructuredLexicon,
    mapping_function_by_name,
    mutate_structured_representations,
)
from pragmalab.util.identifiers import InteractionIdentifier
from pragmalab.util.memo import MemoizingMap
from pragmalab.util.rng import RandomSource, default_source, resolve

if TYPE_CHECKING:
    from pragmalab.config import SimulationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductionData(Data):
    """What went into producing a signal."""

    intention: ReferentialIntention
    signal: ContentSignal
    order: int


@dataclass(frozen=True)
class InterpretationData(Data):
    """What went into interpreting a signal."""

    signal: ContentSignal
    intention: ReferentialIntention
    order: int


class RSAAgent:
    """An agent that reasons pragmatically over a lexicon.

    The agent is both speaker and listener: ``as_speaker`` and
    ``as_listener`` return the agent itself. Pragmatic lexicons for
    every order up to ``order`` are computed on first use and cached.
    """

    def __init__(
        self,
        lexicon: Lexicon,
        order: int = 0,
        decision_rule: DecisionRule = DecisionRule.SAMPLE,
        beta: float = 20.0,
        rng: RandomSource | None = None,
    ):
        self.lexicon = lexicon
        self.order = order
        self.decision_rule = decision_rule
        self.beta = beta
        self.rng = rng or default_source()
        self._speaker_lexicons = MemoizingMap(range(order + 1), lexicon.set_order_as_speaker)
        self._listener_lexicons = MemoizingMap(range(order + 1), lexicon.set_order_as_listener)

    def __repr__(self) -> str:
        return f"RSAAgent({self.lexicon!r}, order={self.order}, rule={self.decision_rule.value})"

    def as_speaker(self) -> RSAAgent:
        return self

    def as_listener(self) -> RSAAgent:
        return self

    def speaker_lexicon(self, order: int | None = None) -> Lexicon:
        """The cached speaker lexicon of ``order`` (default: the agent's order)."""
        return self._speaker_lexicons[self.order if order is None else order]

    def listener_lexicon(self, order: int | None = None) -> Lexicon:
        """The cached listener lexicon of ``order`` (default: the agent's order)."""
        return self._listener_lexicons[self.order if order is None else order]

    def _decide(self, weights: Sequence[float]) -> int | None:
        # Nothing to choose when no option carries weight
        if not any(w > 0 for w in weights):
            return None
        distribution = Distribution(tuple(range(len(weights))), tuple(weights))
        return distribution.decide(self.decision_rule, self.beta, self.rng)

    # Speaker

    def select_intention(self) -> ReferentialIntention:
        """Pick a referent uniformly at random."""
        return ReferentialIntention(self.rng.next_int(self.lexicon.context_size))

    def produce_signal(self, intention: ReferentialIntention) -> tuple[ContentSignal, Data]:
        """Choose a signal for the intended referent.

        Undefined intentions, and referents no signal expresses, produce an
        undefined signal.
        """
        content = None
        if intention.is_defined:
            content = self._decide(self.speaker_lexicon().column(intention.content))
        signal = ContentSignal(content)
        return signal, ProductionData(intention, signal, self.order)

    # Listener

    def interpret_signal(self, signal: ContentSignal) -> tuple[ReferentialIntention, Data]:
        """Choose the referent the signal most plausibly refers to."""
        content = None
        if signal.is_defined:
            content = self._decide(self.listener_lexicon().row(signal.content))
        intention = ReferentialIntention(content)
        return intention, InterpretationData(signal, intention, self.order)


@dataclass(frozen=True)
class TurnData(Data):
    """Outcome of one referential-game turn."""

    turn: int
    speaker: int  # 1 or 2
    intention: ReferentialIntention
    signal: ContentSignal
    interpretation: ReferentialIntention

    @property
    def success(self) -> bool:
        return self.intention.is_defined and self.intention == self.interpretation


@dataclass(frozen=True)
class InteractionData(Data):
    """All turns of one interaction plus where the pair came from."""

    pair_id: int
    origin: Data
    turns: tuple[TurnData, ...] = ()
    asymmetry: float = 0.0

    @property
    def success_rate(self) -> float:
        if not self.turns:
            return 0.0
        return sum(1 for t in self.turns if t.success) / len(self.turns)


class ReferentialInteraction(Interaction[RSAAgent]):
    """Referential game played for a fixed number of turns.

    Roles switch after every turn.
    """

    def __init__(
        self,
        agent1: RSAAgent,
        agent2: RSAAgent,
        max_turns: int = 10,
        origin_data: Data | None = None,
        identifier: InteractionIdentifier | None = None,
    ):
        super().__init__(agent1, agent2, origin_data, identifier)
        self.max_turns = max_turns

    def turn(self) -> TurnData:
        speaker_index = 1 if self.current_speaker is self.agent1_as_speaker else 2
        intention = self.current_speaker.select_intention()
        signal, _ = self.current_speaker.produce_signal(intention)
        interpretation, _ = self.current_listener.interpret_signal(signal)
        data = TurnData(
            turn=len(self.turn_data),
            speaker=speaker_index,
            intention=intention,
            signal=signal,
            interpretation=interpretation,
        )
        self.switch_roles()
        return data

    def stopping_criterion(self) -> bool:
        return len(self.turn_data) >= self.max_turns

    def collect(self, turns: list[Data]) -> InteractionData:
        return InteractionData(
            pair_id=self.pair_id,
            origin=self.origin_data,
            turns=tuple(t for t in turns if isinstance(t, TurnData)),
            asymmetry=self.agent1.lexicon.asymmetry_with(self.agent2.lexicon),
        )


@dataclass(frozen=True)
class RSAParameters(Parameters, Data):
    """One point of the parameter grid; doubles as the pair's origin data."""

    ambiguity: int
    order: int


@dataclass
class RSAPairGenerator(PairGenerator[RSAParameters, RSAAgent, RSAParameters]):
    """Generates agent pairs over an ambiguity × order grid.

    Agent 1 gets a freshly generated lexicon; agent 2 gets a mutated copy
    of it, so the pair's lexicons are similar but asymmetric.
    """

    config: SimulationConfig
    sample_size: int = 10
    ambiguities: list[int] = field(default_factory=list)
    orders: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.ambiguities:
            self.ambiguities = list(self.config.ambiguities)
        if not self.orders:
            self.orders = list(self.config.orders)

    @classmethod
    def from_config(cls, config: SimulationConfig) -> RSAPairGenerator:
        return cls(config=config, sample_size=config.sample_size)

    def generate_parameter_space(self) -> list[RSAParameters]:
        return [RSAParameters(a, n) for a in self.ambiguities for n in self.orders]

    def _speaker_lexicon(self, parameters: RSAParameters, rng: RandomSource) -> Lexicon:
        config = self.config
        if config.lexicon_kind == "consistent":
            return Lexicon.generate_consistent_ambiguity_mapping(
                parameters.ambiguity, config.vocabulary_size, config.context_size, rng
            )
        if config.lexicon_kind == "random":
            return Lexicon.generate_random_binary_lexicon(
                config.density, config.vocabulary_size, config.context_size, rng
            )
        if config.lexicon_kind == "structured":
            mapping = mapping_function_by_name(config.mapping_function)
            if config.mapping_threshold is None:
                return StructuredLexicon.generate_graded_structured_lexicon(
                    config.representation_length,
                    mapping,
                    config.vocabulary_size,
                    config.context_size,
                    rng,
                )
            return StructuredLexicon.generate_binary_structured_lexicon(
                config.representation_length,
                mapping,
                config.mapping_threshold,
                config.vocabulary_size,
                config.context_size,
                rng,
            )
        raise MalformedInputError(f"Unknown lexicon kind '{config.lexicon_kind}'")

    def _listener_lexicon(self, lexicon: Lexicon, rng: RandomSource) -> Lexicon:
        config = self.config
        if isinstance(lexicon, StructuredLexicon):
            # Perturb the representations, not the relations
            return StructuredLexicon.from_representations(
                mutate_structured_representations(
                    lexicon.vocabulary_representations, config.representation_change_rate, rng
                ),
                mutate_structured_representations(
                    lexicon.context_representations, config.representation_change_rate, rng
                ),
                lexicon.mapping_function,
                lexicon.mapping_threshold,
            ).get_lexicon()
        mutated = lexicon.mutate(config.mutation_rate, rng)
        if config.mix_rate > 0:
            mutated = mutated.mix_referents(config.mix_rate, rng)
        if config.addition_rate > 0:
            mutated = mutated.additive_binary_mutation(config.addition_rate, rng)
        if config.removal_rate > 0:
            mutated = mutated.removal_binary_mutation(
                config.removal_rate, config.removal_threshold, rng
            )
        return mutated

    def generate_pair(
        self, parameters: RSAParameters, rng: RandomSource | None = None
    ) -> AgentPair[RSAAgent, RSAParameters]:
        rng = resolve(rng)
        config = self.config
        literal = self._speaker_lexicon(parameters, rng)
        other = self._listener_lexicon(literal, rng).with_model(config.pragmatic_model)
        lexicon = literal.with_model(config.pragmatic_model)
        logger.debug(
            f"Generated pair for ambiguity={parameters.ambiguity} order={parameters.order} "
            f"(asymmetry {lexicon.asymmetry_with(other):.3f})"
        )

        def make_agent(lex: Lexicon) -> RSAAgent:
            return RSAAgent(lex, parameters.order, config.decision_rule, config.beta, rng)

        return AgentPair(make_agent(lexicon), make_agent(other), parameters)
