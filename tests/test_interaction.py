"""Tests for RSA agents, referential interactions and pair generation."""

from __future__ import annotations

import pytest

from pragmalab.agents.rsa_agent import (
    InteractionData,
    ReferentialInteraction,
    RSAAgent,
    RSAPairGenerator,
    RSAParameters,
    TurnData,
)
from pragmalab.config import SimulationConfig
from pragmalab.core.agent import Agent, Listener, Speaker
from pragmalab.core.interaction import Interaction
from pragmalab.core.pairs import PairGenerator
from pragmalab.core.types import ContentSignal, NoData, ReferentialIntention
from pragmalab.errors import MalformedInputError
from pragmalab.probability.distribution import DecisionRule
from pragmalab.rsa.lexicon import Lexicon
from pragmalab.rsa.models import PragmaticModel
from pragmalab.util.identifiers import InteractionIdentifier
from pragmalab.util.rng import RandomSource


@pytest.fixture
def identity_lexicon() -> Lexicon:
    return Lexicon.from_matrix([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])


def argmax_agent(lexicon: Lexicon, order: int, rng: RandomSource) -> RSAAgent:
    return RSAAgent(lexicon, order, DecisionRule.ARGMAX, rng=rng)


# ========================================================================
# RSAAgent
# ========================================================================


class TestRSAAgent:
    """Tests for the pragmatic speaker/listener."""

    def test_satisfies_protocols(self, identity_lexicon: Lexicon, rng: RandomSource):
        agent = argmax_agent(identity_lexicon, 0, rng)
        assert isinstance(agent, Agent)
        assert isinstance(agent.as_speaker(), Speaker)
        assert isinstance(agent.as_listener(), Listener)

    def test_pragmatic_lexicons_are_cached(self, binary_lexicon: Lexicon, rng: RandomSource):
        agent = argmax_agent(binary_lexicon, 2, rng)
        assert agent.listener_lexicon() is agent.listener_lexicon()
        assert agent.listener_lexicon() == binary_lexicon.set_order_as_listener(2)
        assert agent.speaker_lexicon(1) == binary_lexicon.set_order_as_speaker(1)

    def test_order_above_agent_order_unavailable(self, binary_lexicon: Lexicon, rng: RandomSource):
        agent = argmax_agent(binary_lexicon, 1, rng)
        with pytest.raises(KeyError):
            agent.speaker_lexicon(2)

    def test_select_intention_in_context(self, binary_lexicon: Lexicon, rng: RandomSource):
        agent = argmax_agent(binary_lexicon, 0, rng)
        picks = {agent.select_intention().content for _ in range(100)}
        assert picks == {0, 1, 2}

    def test_pragmatic_listener_resolves_ambiguity(
        self, binary_lexicon: Lexicon, rng: RandomSource
    ):
        lexicon = binary_lexicon.with_model(PragmaticModel.FRANK_GOODMAN)
        literal = argmax_agent(lexicon, 0, rng)
        pragmatic = argmax_agent(lexicon, 1, rng)
        signal = ContentSignal(0)

        assert {literal.interpret_signal(signal)[0].content for _ in range(100)} == {0, 1}
        assert {pragmatic.interpret_signal(signal)[0].content for _ in range(100)} == {0}

    def test_pragmatic_speaker_avoids_ambiguous_signal(
        self, binary_lexicon: Lexicon, rng: RandomSource
    ):
        lexicon = binary_lexicon.with_model(PragmaticModel.FRANK_GOODMAN)
        agent = argmax_agent(lexicon, 1, rng)
        signal, data = agent.produce_signal(ReferentialIntention(1))
        assert signal == ContentSignal(1)
        assert data.order == 1

    def test_unexpressed_referent_gives_undefined_signal(self, rng: RandomSource):
        lexicon = Lexicon.from_matrix([[1.0, 0.0], [1.0, 0.0]])
        agent = argmax_agent(lexicon, 0, rng)
        signal, _ = agent.produce_signal(ReferentialIntention(1))
        assert not signal.is_defined

    def test_undefined_signal_gives_undefined_interpretation(
        self, identity_lexicon: Lexicon, rng: RandomSource
    ):
        agent = argmax_agent(identity_lexicon, 0, rng)
        intention, _ = agent.interpret_signal(ContentSignal())
        assert intention == ReferentialIntention(None)

    @pytest.mark.parametrize("rule", list(DecisionRule))
    def test_every_rule_decodes_identity(self, identity_lexicon: Lexicon, rule: DecisionRule):
        agent = RSAAgent(identity_lexicon, 0, rule, beta=20.0, rng=RandomSource(3))
        for j in range(3):
            signal, _ = agent.produce_signal(ReferentialIntention(j))
            if rule is DecisionRule.SOFTARGMAX:
                assert signal.content in {0, 1, 2}
            else:
                assert signal == ContentSignal(j)


# ========================================================================
# Interactions
# ========================================================================


class TestReferentialInteraction:
    """Tests for the turn-based referential game."""

    def test_perfect_communication(self, identity_lexicon: Lexicon, rng: RandomSource):
        interaction = ReferentialInteraction(
            argmax_agent(identity_lexicon, 0, rng),
            argmax_agent(identity_lexicon, 0, rng),
            max_turns=6,
            identifier=InteractionIdentifier(),
        )
        data = interaction.run_and_collect_data()

        assert isinstance(data, InteractionData)
        assert len(data.turns) == 6
        assert data.success_rate == 1.0
        assert data.asymmetry == 0.0

    def test_roles_alternate(self, identity_lexicon: Lexicon, rng: RandomSource):
        interaction = ReferentialInteraction(
            argmax_agent(identity_lexicon, 0, rng),
            argmax_agent(identity_lexicon, 0, rng),
            max_turns=5,
            identifier=InteractionIdentifier(),
        )
        data = interaction.run_and_collect_data()
        assert [t.speaker for t in data.turns] == [1, 2, 1, 2, 1]
        assert [t.turn for t in data.turns] == [0, 1, 2, 3, 4]

    def test_pair_ids_come_from_identifier(self, identity_lexicon: Lexicon, rng: RandomSource):
        ids = InteractionIdentifier()
        agent = argmax_agent(identity_lexicon, 0, rng)
        first = ReferentialInteraction(agent, agent, identifier=ids)
        second = ReferentialInteraction(agent, agent, identifier=ids)
        assert (first.pair_id, second.pair_id) == (1, 2)

    def test_failed_turn(self):
        turn = TurnData(
            turn=0,
            speaker=1,
            intention=ReferentialIntention(1),
            signal=ContentSignal(None),
            interpretation=ReferentialIntention(None),
        )
        assert not turn.success
        assert InteractionData(pair_id=1, origin=NoData(), turns=(turn,)).success_rate == 0.0

    def test_no_turns(self):
        assert InteractionData(pair_id=1, origin=NoData()).success_rate == 0.0

    def test_origin_defaults_to_no_data(self, identity_lexicon: Lexicon, rng: RandomSource):
        agent = argmax_agent(identity_lexicon, 0, rng)
        interaction = ReferentialInteraction(agent, agent, identifier=InteractionIdentifier())
        assert interaction.origin_data == NoData()

    def test_base_interaction_is_abstract(self, identity_lexicon: Lexicon, rng: RandomSource):
        agent = argmax_agent(identity_lexicon, 0, rng)
        with pytest.raises(TypeError):
            Interaction(agent, agent, identifier=InteractionIdentifier())

    def test_default_collect_is_no_data(self, identity_lexicon: Lexicon, rng: RandomSource):
        class Silent(Interaction[RSAAgent]):
            def turn(self) -> NoData:
                return NoData()

            def stopping_criterion(self) -> bool:
                return len(self.turn_data) >= 2

        agent = argmax_agent(identity_lexicon, 0, rng)
        interaction = Silent(agent, agent, identifier=InteractionIdentifier())
        assert interaction.run_and_collect_data() == NoData()
        assert interaction.turn_data == [NoData(), NoData()]


# ========================================================================
# Pair generation
# ========================================================================


class TestRSAPairGenerator:
    """Tests for drawing agent pairs from the parameter grid."""

    def test_parameter_space(self, config: SimulationConfig):
        generator = RSAPairGenerator.from_config(config)
        assert generator.sample_size == 2
        assert generator.generate_parameter_space() == [
            RSAParameters(1, 0),
            RSAParameters(1, 1),
            RSAParameters(2, 0),
            RSAParameters(2, 1),
        ]

    def test_generate_pair(self, config: SimulationConfig):
        generator = RSAPairGenerator.from_config(config)
        params = RSAParameters(ambiguity=2, order=1)
        pair = generator.generate_pair(params, RandomSource(1))

        assert pair.origin_data == params
        assert pair.agent1.order == pair.agent2.order == 1
        assert pair.agent1.lexicon.model == config.pragmatic_model
        assert pair.agent2.lexicon.model == config.pragmatic_model
        assert pair.agent1.lexicon.is_consistent()
        assert [sum(r) for r in pair.agent1.lexicon.rows()] == [2.0] * 4

    def test_generate_pair_reproducible(self, config: SimulationConfig):
        generator = RSAPairGenerator.from_config(config)
        params = RSAParameters(ambiguity=1, order=0)
        a = generator.generate_pair(params, RandomSource(8))
        b = generator.generate_pair(params, RandomSource(8))
        assert a.agent1.lexicon == b.agent1.lexicon
        assert a.agent2.lexicon == b.agent2.lexicon

    def test_model_from_config(self, config: SimulationConfig):
        config = config.model_copy(update={"pragmatic_model": PragmaticModel.FRANKE_DEGEN})
        pair = RSAPairGenerator.from_config(config).generate_pair(RSAParameters(1, 1), RandomSource(2))
        assert pair.agent1.lexicon.model == PragmaticModel.FRANKE_DEGEN

    def test_random_lexicons(self, config: SimulationConfig):
        config = config.model_copy(update={"lexicon_kind": "random", "density": 1.0})
        pair = RSAPairGenerator.from_config(config).generate_pair(RSAParameters(1, 0), RandomSource(2))
        assert pair.agent1.lexicon.data == (1.0,) * 12

    def test_structured_lexicons(self, config: SimulationConfig):
        config = config.model_copy(
            update={"lexicon_kind": "structured", "mapping_threshold": 0.5}
        )
        pair = RSAPairGenerator.from_config(config).generate_pair(RSAParameters(1, 0), RandomSource(2))
        for agent in (pair.agent1, pair.agent2):
            assert (agent.lexicon.vocabulary_size, agent.lexicon.context_size) == (4, 3)
            assert set(agent.lexicon.data) <= {0.0, 1.0}

    def test_unknown_lexicon_kind(self, config: SimulationConfig):
        config = config.model_copy(update={"lexicon_kind": "telepathic"})
        with pytest.raises(MalformedInputError):
            RSAPairGenerator.from_config(config).generate_pair(RSAParameters(1, 0), RandomSource(2))

    def test_listener_removal_mutation(self, config: SimulationConfig):
        config = config.model_copy(
            update={"mutation_rate": 0.0, "removal_rate": 1.0, "lexicon_kind": "random", "density": 1.0}
        )
        pair = RSAPairGenerator.from_config(config).generate_pair(RSAParameters(1, 0), RandomSource(2))
        assert pair.agent2.lexicon.data == (0.0,) * 12

    def test_sample_generator(self, config: SimulationConfig, rng: RandomSource):
        generator = RSAPairGenerator.from_config(config)
        pairs = list(generator.sample_generator(RSAParameters(1, 0), rng))
        assert len(pairs) == 2

    def test_base_pair_generator_is_abstract(self):
        with pytest.raises(TypeError):
            PairGenerator(sample_size=1)
