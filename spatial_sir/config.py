"""Configuration for the spatial SIR engine.

Dataclass configuration with YAML loading and deep-merge overrides:
  defaults → YAML file → override dict

Validation fails fast with ValueError so the engine never runs with a
negative population, a zero recovery rate or more seeds than people.
"""

from __future__ import annotations

import copy
import math
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


@dataclass
class EngineConfig:
    """Parameters and tuning constants for one simulation."""
    # Epidemiological parameters
    transmission_rate: float = 0.3   # β
    recovery_rate: float = 0.1       # γ (R0 only)
    population_size: int = 1000
    initial_infected: int = 5

    # Disease course
    recovery_days: int = 14

    # Transmission
    infection_radius: float = 2.0
    probability_scale: float = 10.0  # p = β / scale
    use_spatial_index: bool = True

    # Placement
    min_spacing: float = 1.2
    max_placement_attempts: int = 100

    # Random seed
    seed: Optional[int] = None


INTEGER_FIELDS = ('population_size', 'initial_infected', 'recovery_days', 'max_placement_attempts')
REAL_FIELDS = ('transmission_rate', 'recovery_rate', 'infection_radius', 'probability_scale', 'min_spacing')


def _check_types(config: EngineConfig) -> None:
    for name in INTEGER_FIELDS:
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"{name} must be an integer, got {value!r}")
    for name in REAL_FIELDS:
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
            raise ValueError(f"{name} must be a finite number, got {value!r}")


def validate_config(config: EngineConfig) -> None:
    """Validate configuration constraints. Raises ValueError on failure.

    Checks:
      - Counts are integers, rates and distances are finite numbers
      - Value ranges (positive population, recovery_rate > 0, seeds <= population)
    """
    _check_types(config)

    if config.population_size <= 0:
        raise ValueError(
            f"population_size must be positive, got {config.population_size}"
        )
    if config.transmission_rate < 0:
        raise ValueError(
            f"transmission_rate must be >= 0, got {config.transmission_rate}"
        )
    if config.recovery_rate <= 0:
        raise ValueError(
            f"recovery_rate must be > 0, got {config.recovery_rate}"
        )
    if not 0 <= config.initial_infected <= config.population_size:
        raise ValueError(
            f"initial_infected must be in [0, {config.population_size}], "
            f"got {config.initial_infected}"
        )
    if config.recovery_days < 1:
        raise ValueError(
            f"recovery_days must be >= 1, got {config.recovery_days}"
        )
    if config.infection_radius < 0:
        raise ValueError(
            f"infection_radius must be >= 0, got {config.infection_radius}"
        )
    if config.probability_scale <= 0:
        raise ValueError(
            f"probability_scale must be > 0, got {config.probability_scale}"
        )
    if config.min_spacing < 0:
        raise ValueError(
            f"min_spacing must be >= 0, got {config.min_spacing}"
        )
    if config.max_placement_attempts < 1:
        raise ValueError(
            f"max_placement_attempts must be >= 1, got {config.max_placement_attempts}"
        )


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into base. Returns base (modified in place)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def config_from_dict(d: Dict[str, Any]) -> EngineConfig:
    """Build and validate an EngineConfig from a flat dict."""
    known = {f.name for f in fields(EngineConfig)}
    unknown = set(d) - known
    if unknown:
        raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
    config = EngineConfig(**d)
    validate_config(config)
    return config


def config_to_dict(config: EngineConfig) -> Dict[str, Any]:
    return asdict(config)


def load_config(
    path: Union[str, Path],
    overrides: Optional[Dict] = None,
) -> EngineConfig:
    """Load a YAML configuration and apply overrides.

    The YAML file may hold the fields at top level or under an ``engine``
    section. Fields not given keep their defaults.

    Raises:
        FileNotFoundError: If path doesn't exist.
        ValueError: On unknown keys or invalid values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if 'engine' in raw and isinstance(raw['engine'], dict):
        raw = raw['engine']

    config_dict = config_to_dict(EngineConfig())
    deep_merge(config_dict, raw)
    if overrides is not None:
        deep_merge(config_dict, overrides)

    return config_from_dict(config_dict)


def default_config() -> EngineConfig:
    """Return an EngineConfig with all default values."""
    return EngineConfig()
