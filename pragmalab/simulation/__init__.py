"""Running batches of independent simulations."""

from __future__ import annotations

from pragmalab.simulation.runner import RunResult, SimulationRunner, build_rsa_runner

__all__ = ["RunResult", "SimulationRunner", "build_rsa_runner"]
