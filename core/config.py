"""
Configuration Module
====================

Loads the analyzer YAML configuration and turns the ``analysis`` section
into a validated, typed settings object.

Example config.yaml:

    analysis:
      default_volatility: 0.30
      edge_threshold: 0.10
      min_time_to_expiry: 0.02
      contract_multiplier: 100
      max_targets: 3
      iv_solver:
        max_iterations: 100
        tolerance: 1.0e-6
        initial_guess: 0.30
        min_volatility: 0.001
        max_volatility: 5.0
    logging:
      level: INFO
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core import implied_volatility


logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when configuration values are missing or out of range."""
    pass


@dataclass(frozen=True)
class IVSolverConfig:
    """Newton-Raphson tuning."""
    max_iterations: int = implied_volatility.MAX_ITERATIONS
    tolerance: float = implied_volatility.TOLERANCE
    initial_guess: float = implied_volatility.INITIAL_GUESS
    min_volatility: float = implied_volatility.MIN_VOLATILITY
    max_volatility: float = implied_volatility.MAX_VOLATILITY

    def validate(self) -> None:
        if self.max_iterations < 1:
            raise ConfigError(f"iv_solver.max_iterations must be >= 1, got {self.max_iterations}")
        if self.tolerance <= 0:
            raise ConfigError(f"iv_solver.tolerance must be positive, got {self.tolerance}")
        if not 0 < self.min_volatility < self.max_volatility:
            raise ConfigError(
                f"iv_solver bounds must satisfy 0 < min < max, "
                f"got [{self.min_volatility}, {self.max_volatility}]"
            )
        if not self.min_volatility <= self.initial_guess <= self.max_volatility:
            raise ConfigError(
                f"iv_solver.initial_guess {self.initial_guess} outside bounds "
                f"[{self.min_volatility}, {self.max_volatility}]"
            )


@dataclass(frozen=True)
class AnalyzerConfig:
    """Settings for analysis, signal generation and PnL projection."""
    default_volatility: float = 0.30
    edge_threshold: float = 0.10
    min_time_to_expiry: float = 0.02  # ~1 week, in years
    contract_multiplier: int = 100
    max_targets: int = 3
    iv_solver: IVSolverConfig = field(default_factory=IVSolverConfig)

    def validate(self) -> None:
        if self.default_volatility <= 0:
            raise ConfigError(f"default_volatility must be positive, got {self.default_volatility}")
        if self.edge_threshold <= 0:
            raise ConfigError(f"edge_threshold must be positive, got {self.edge_threshold}")
        if self.min_time_to_expiry < 0:
            raise ConfigError(f"min_time_to_expiry must be >= 0, got {self.min_time_to_expiry}")
        if self.contract_multiplier <= 0:
            raise ConfigError(f"contract_multiplier must be positive, got {self.contract_multiplier}")
        if self.max_targets < 1:
            raise ConfigError(f"max_targets must be >= 1, got {self.max_targets}")
        self.iv_solver.validate()

    @classmethod
    def from_dict(cls, section: dict[str, Any] | None) -> "AnalyzerConfig":
        """Build from the ``analysis`` section; missing keys keep defaults."""
        section = dict(section or {})
        solver_section = section.pop("iv_solver", None) or {}
        if not isinstance(solver_section, dict):
            raise ConfigError(f"iv_solver must be a mapping, got {solver_section!r}")

        known = set(cls.__dataclass_fields__) - {"iv_solver"}
        unknown = set(section) - known
        if unknown:
            logger.warning(f"Ignoring unknown analysis config keys: {sorted(unknown)}")

        solver_known = set(IVSolverConfig.__dataclass_fields__)
        solver_unknown = set(solver_section) - solver_known
        if solver_unknown:
            logger.warning(f"Ignoring unknown iv_solver config keys: {sorted(solver_unknown)}")

        try:
            solver = IVSolverConfig(
                **{k: v for k, v in solver_section.items() if k in solver_known}
            )
            config = cls(
                iv_solver=solver,
                **{k: v for k, v in section.items() if k in known},
            )
            config.validate()
        except TypeError as e:
            raise ConfigError(f"Invalid analysis configuration: {e}") from e

        return config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(config_path: str | Path = "config.yaml") -> dict[str, Any]:
    """Load configuration from YAML file."""
    config_file = Path(config_path)

    if not config_file.exists():
        logger.error(f"Config file not found: {config_file}")
        raise FileNotFoundError(f"Config file not found: {config_file}")

    with open(config_file, "r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_file}: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigError(f"Top level of {config_file} must be a mapping")

    logger.info(f"Loaded configuration from {config_file}")
    return config
