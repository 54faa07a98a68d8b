"""Configuration settings for pragmalab simulations.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via PRAGMALAB_* environment variables, or
loaded from a YAML file with :func:`load_config`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, TypeAdapter, ValidationError
from pydantic_settings import BaseSettings

from pragmalab.errors import ConfigurationError
from pragmalab.probability.distribution import DecisionRule
from pragmalab.rsa.models import PragmaticModel

logger = logging.getLogger(__name__)


class SimulationConfig(BaseSettings):
    """Parameters of a batch of referential-game simulations."""

    # Reproducibility
    seed: int = 42

    # Lexicon shape
    vocabulary_size: int = 8
    context_size: int = 4
    lexicon_kind: str = "consistent"  # "consistent" | "random" | "structured"
    density: float = 0.5  # P(1.0) per cell for "random" lexicons

    # Parameter grid
    ambiguities: list[int] = Field(default=[1, 2, 3])
    orders: list[int] = Field(default=[0, 1, 2])

    # Pragmatic reasoning
    pragmatic_model: PragmaticModel = PragmaticModel.BLOKPOEL_ET_AL
    decision_rule: DecisionRule = DecisionRule.SAMPLE
    beta: float = 20.0  # soft argmax inverse temperature

    # Listener lexicon = mutated copy of the speaker's
    mutation_rate: float = 0.1
    mix_rate: float = 0.0
    addition_rate: float = 0.0
    removal_rate: float = 0.0
    removal_threshold: float = 1.0

    # Structured lexicons
    representation_length: int = 8
    mapping_function: str = "hamming_distance"
    mapping_threshold: float | None = None  # None = graded
    representation_change_rate: float = 0.1

    # Runs
    max_turns: int = 10
    sample_size: int = 10

    model_config = {"env_prefix": "PRAGMALAB_"}


def _read_yaml(path: str | Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as err:
        raise ConfigurationError(f"Configuration file not found: {path}") from err
    except yaml.YAMLError as err:
        raise ConfigurationError(f"Could not parse configuration file {path}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return data


def load_config(path: str | Path, section: str | None = None) -> SimulationConfig:
    """Load a SimulationConfig from a YAML file.

    Values are validated one key at a time. A key that is missing, or
    whose value has the wrong type, falls back to its default (logged),
    so a partially valid file still yields a usable configuration.

    Args:
        path: YAML file path
        section: Optional top-level key holding the settings

    Returns:
        SimulationConfig instance

    Raises:
        ConfigurationError: If the file is missing, unparsable or not a mapping
    """
    data = _read_yaml(path)
    if section is not None:
        data = data.get(section) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Section '{section}' in {path} must be a mapping")

    values: dict[str, Any] = {}
    for name, field in SimulationConfig.model_fields.items():
        if name not in data:
            logger.info(f"Missing configuration value at {name}, using fallback {field.default!r}")
            continue
        try:
            values[name] = TypeAdapter(field.annotation).validate_python(data[name])
        except ValidationError:
            logger.warning(
                f"Wrong configuration value type at {name} ({data[name]!r}), "
                f"using fallback {field.default!r}"
            )

    for name in data:
        if name not in SimulationConfig.model_fields:
            logger.warning(f"Ignoring unknown configuration key '{name}'")

    return SimulationConfig(**values)
