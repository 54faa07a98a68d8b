"""Sequential batch runner for independent simulations.

Each run gets its own RandomSource seeded with ``seed_start + run index``,
so any single run can be reproduced in isolation and runs never share
random state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pragmalab.agents.rsa_agent import ReferentialInteraction, RSAPairGenerator
from pragmalab.config import SimulationConfig
from pragmalab.core.interaction import Interaction
from pragmalab.core.pairs import AgentPair, PairGenerator
from pragmalab.core.types import Data
from pragmalab.util.identifiers import InteractionIdentifier
from pragmalab.util.rng import RandomSource

logger = logging.getLogger(__name__)

InteractionFactory = Callable[[AgentPair, InteractionIdentifier], Interaction]


@dataclass
class RunResult:
    """Result from a single simulation run."""

    parameters: Any
    replicate: int
    seed: int
    data: Data
    duration_seconds: float


class SimulationRunner:
    """Runs every parameter point × sample of a pair generator.

    Args:
        generator: Produces the parameter space and agent pairs
        interaction_factory: Builds an interaction for a generated pair
        seed_start: Seed of the first run; run k uses seed_start + k
        identifier: Source of interaction ids (a fresh counter by default)
    """

    def __init__(
        self,
        generator: PairGenerator,
        interaction_factory: InteractionFactory,
        seed_start: int = 42,
        identifier: InteractionIdentifier | None = None,
    ):
        self.generator = generator
        self.interaction_factory = interaction_factory
        self.seed_start = seed_start
        self.identifier = identifier or InteractionIdentifier()
        self._results: list[RunResult] = []

    @property
    def results(self) -> list[RunResult]:
        return list(self._results)

    def run_single(self, parameters: Any, replicate: int, seed: int) -> RunResult:
        """Generate one pair with a fresh source seeded ``seed`` and run it."""
        start = time.perf_counter()
        rng = RandomSource(seed)
        pair = self.generator.generate_pair(parameters, rng)
        interaction = self.interaction_factory(pair, self.identifier)
        data = interaction.run_and_collect_data()
        return RunResult(
            parameters=parameters,
            replicate=replicate,
            seed=seed,
            data=data,
            duration_seconds=time.perf_counter() - start,
        )

    def run_all(self, progress_callback: Any = None) -> list[RunResult]:
        """Execute all parameter points × samples.

        Each call starts a fresh batch; results of earlier calls are discarded.

        Args:
            progress_callback: Optional callback(parameters, replicate, total)

        Returns:
            List of RunResult objects, in execution order
        """
        self._results = []
        space = list(self.generator.generate_parameter_space())
        total_runs = len(space) * self.generator.sample_size
        logger.info(f"Running {total_runs} simulations over {len(space)} parameter points")

        run_index = 0
        for parameters in space:
            for replicate in range(self.generator.sample_size):
                if progress_callback:
                    progress_callback(parameters, replicate, total_runs)
                result = self.run_single(parameters, replicate, self.seed_start + run_index)
                self._results.append(result)
                run_index += 1
            logger.debug(f"Finished parameter point {parameters}")

        logger.info(f"Completed {run_index} simulations")
        return self._results


def build_rsa_runner(config: SimulationConfig) -> SimulationRunner:
    """Runner for referential games between RSA agents configured by ``config``."""
    generator = RSAPairGenerator.from_config(config)

    def interaction_factory(
        pair: AgentPair, identifier: InteractionIdentifier
    ) -> ReferentialInteraction:
        return ReferentialInteraction(
            pair.agent1,
            pair.agent2,
            max_turns=config.max_turns,
            origin_data=pair.origin_data,
            identifier=identifier,
        )

    return SimulationRunner(generator, interaction_factory, seed_start=config.seed)
