"""Configuration management for distribution runs.

Loads run parameters from defaults, an optional YAML file and environment
variables (in that order of precedence, lowest first).
"""

import logging
import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .exceptions import ConfigurationError
from .models import Holder

logger = logging.getLogger(__name__)

ENV_PREFIX = "REWARDFLOW_"


@dataclass(frozen=True)
class DistributionConfig:
    """Run configuration shared by every holder in a distribution."""

    # Holders below this balance do not qualify
    min_balance: float = 20_000.0

    # Qualified holders above this balance are excluded from the payout
    max_balance: float = 100_000_000.0

    # Reward pool before the fee reserve is taken
    treasury_balance: float = 10.0

    # Fraction of the treasury withheld for fees
    fee_reserve: float = 0.05

    # Reference time for the run, in hours after launch
    hours_since_launch: float = 48.0

    @classmethod
    def from_env(cls, base: Optional["DistributionConfig"] = None) -> "DistributionConfig":
        """Apply REWARDFLOW_* environment variables on top of a base config."""
        base = base or cls()
        overrides: dict[str, float] = {}

        for field in fields(cls):
            env_key = f"{ENV_PREFIX}{field.name.upper()}"
            raw = os.getenv(env_key)
            if raw is None or raw.strip() == "":
                continue
            overrides[field.name] = _to_float(env_key, raw)

        if overrides:
            logger.debug(f"Environment overrides: {overrides}")
        return replace(base, **overrides)

    @classmethod
    def from_file(cls, config_path: Path | str) -> "DistributionConfig":
        """
        Load configuration from a YAML file.

        The file may either hold the keys at top level or under a
        ``distribution`` mapping. Unknown keys are rejected.

        Args:
            config_path: Path to the YAML file

        Returns:
            DistributionConfig with file values over the defaults
        """
        config_path = Path(config_path)
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ConfigurationError("config_path", f"Config file not found: {config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError("config_path", f"Invalid YAML in {config_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError("config_path", f"Expected a mapping in {config_path}")

        section = data.get("distribution", data)
        if not isinstance(section, dict):
            raise ConfigurationError("distribution", "Expected a mapping")

        known = {field.name for field in fields(cls)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise ConfigurationError(unknown[0], f"Unknown setting in {config_path}")

        values = {key: _to_float(key, value) for key, value in section.items()}
        logger.info(f"Loaded distribution config from {config_path}")
        return cls(**values)

    @classmethod
    def resolve(
        cls,
        config_path: Path | str | None = None,
        **overrides: float | None,
    ) -> "DistributionConfig":
        """Merge defaults, YAML file, environment and overrides without validating."""
        base = cls.from_file(config_path) if config_path else cls()
        return cls.from_env(base).with_overrides(**overrides)

    @classmethod
    def load(
        cls,
        config_path: Path | str | None = None,
        **overrides: float | None,
    ) -> "DistributionConfig":
        """
        Load configuration from an optional YAML file and the environment.

        Explicit overrides (None values ignored) take precedence over both
        and are applied before validation.

        Args:
            config_path: Optional path to a YAML config file
            **overrides: Setting values, e.g. from command line options

        Returns:
            Validated DistributionConfig
        """
        config = cls.resolve(config_path, **overrides)
        config.validate()
        return config

    def validate(self) -> None:
        """Check configuration invariants, raising ConfigurationError."""
        for field in fields(self):
            value = getattr(self, field.name)
            if not math.isfinite(value):
                raise ConfigurationError(field.name, f"must be a finite number, got {value}")

        if self.min_balance <= 0:
            raise ConfigurationError("min_balance", f"must be positive, got {self.min_balance}")
        if self.max_balance < self.min_balance:
            raise ConfigurationError(
                "max_balance",
                f"must be >= min_balance ({self.min_balance}), got {self.max_balance}",
            )
        if self.treasury_balance < 0:
            raise ConfigurationError(
                "treasury_balance", f"must not be negative, got {self.treasury_balance}"
            )
        if not 0 <= self.fee_reserve < 1:
            raise ConfigurationError("fee_reserve", f"must be in [0, 1), got {self.fee_reserve}")
        if self.hours_since_launch < 0:
            raise ConfigurationError(
                "hours_since_launch", f"must not be negative, got {self.hours_since_launch}"
            )

    def with_overrides(self, **overrides: float | None) -> "DistributionConfig":
        """Return a copy with the given non-None values replaced."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)

    def make_holder(self, address: str, tokens: float, hours_after_launch: float) -> Holder:
        """Build a Holder carrying this run's thresholds and reference time."""
        return Holder(
            address=address,
            tokens=tokens,
            hours_after_launch=hours_after_launch,
            min_balance=self.min_balance,
            max_balance=self.max_balance,
            hours_since_launch=self.hours_since_launch,
        )


def _to_float(key: str, value: Any) -> float:
    """Parse a numeric setting."""
    if isinstance(value, bool):
        raise ConfigurationError(key, f"expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(key, f"expected a number, got {value!r}")


# Global config instance (lazy loaded)
_config: Optional[DistributionConfig] = None


def get_config() -> DistributionConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = DistributionConfig.load()
    return _config


def reload_config(config_path: Optional[Path] = None) -> DistributionConfig:
    """Reload configuration from file and environment."""
    global _config
    _config = DistributionConfig.load(config_path)
    return _config
