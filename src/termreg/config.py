"""Configuration loading for enrollment rules.

Rule thresholds default to the registrar's standing policy and can be
overridden from a YAML file:

    rules:
      passing_grade: 10.0
      max_units: 20
      units_tiers:
        - {gpa_below: 12, max_units: 14}
        - {gpa_below: 16, max_units: 16}
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_ENV_VAR = "TERMREG_CONFIG"

DEFAULT_PASSING_GRADE = 10.0
DEFAULT_MAX_UNITS = 20

# Grades are recorded on a 0-20 scale
MAX_GRADE = 20.0


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class UnitsTier:
    """Load cap for students whose GPA is strictly below a bound."""

    gpa_below: float
    max_units: int


def _default_tiers() -> list[UnitsTier]:
    return [UnitsTier(gpa_below=12, max_units=14), UnitsTier(gpa_below=16, max_units=16)]


@dataclass
class RulesConfig:
    """Thresholds used by the enrollment rules.

    Attributes:
        passing_grade: Minimum grade (inclusive) that counts as passed.
        max_units: Absolute units cap regardless of GPA.
        units_tiers: GPA-dependent caps; every matching tier applies.
    """

    passing_grade: float = DEFAULT_PASSING_GRADE
    max_units: int = DEFAULT_MAX_UNITS
    units_tiers: list[UnitsTier] = field(default_factory=_default_tiers)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RulesConfig:
        """Create config from dictionary.

        Args:
            data: The ``rules`` mapping from YAML. Missing keys keep defaults.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a value has the wrong type or is out of range.
        """
        if not isinstance(data, dict):
            raise ConfigError("'rules' must be a mapping")

        try:
            passing_grade = float(data.get("passing_grade", DEFAULT_PASSING_GRADE))
            max_units = int(data.get("max_units", DEFAULT_MAX_UNITS))
            raw_tiers = data.get("units_tiers")
            if raw_tiers is None:
                tiers = _default_tiers()
            else:
                tiers = [
                    UnitsTier(gpa_below=float(t["gpa_below"]), max_units=int(t["max_units"]))
                    for t in raw_tiers
                ]
        except (TypeError, ValueError, KeyError) as e:
            raise ConfigError(f"Invalid rules configuration: {e}") from e

        if not 0 < passing_grade <= MAX_GRADE:
            raise ConfigError(f"passing_grade must be within (0, {MAX_GRADE}]")
        if max_units <= 0:
            raise ConfigError("max_units must be positive")

        return cls(
            passing_grade=passing_grade,
            max_units=max_units,
            units_tiers=tiers,
        )


def load_config(path: str | Path | None = None) -> RulesConfig:
    """Load rules configuration from a YAML file.

    Args:
        path: Path to the YAML file. Defaults to the TERMREG_CONFIG environment
              variable; when neither is set the built-in defaults are returned.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If the file is missing or malformed.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return RulesConfig()
    path = Path(path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")

    return RulesConfig.from_dict(data.get("rules", {}))
