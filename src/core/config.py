"""
Simulation configuration.

Tunable step budgets, tolerances and defaults, optionally loaded from a
YAML file. Physical constants are not configurable; see core.constants.
"""

from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@dataclass(frozen=True)
class SimulationConfig:
    """
    Tunables for the numerical engines.

    Attributes:
        dt: Trajectory integration step (seconds)
        max_steps: Step budget for a trajectory run
        progress_interval: Steps between progress callbacks
        yield_interval: Steps between cooperative suspension points
        escape_check_after: Steps before the escape heuristic is armed
        escape_distance_km: Distance beyond which the asteroid is considered escaped
        kepler_tolerance: Newton-Raphson convergence tolerance (radians)
        kepler_max_iterations: Newton-Raphson iteration cap
        default_water_depth: Water depth used when an ocean impact omits one (m)
        log_level: Logging level name used by the command-line driver
    """
    dt: float = 10.0
    max_steps: int = 100000
    progress_interval: int = 500
    yield_interval: int = 5000
    escape_check_after: int = 1000
    escape_distance_km: float = 2000000.0
    kepler_tolerance: float = 1e-8
    kepler_max_iterations: int = 20
    default_water_depth: float = 4000.0
    log_level: str = "INFO"

    def __post_init__(self):
        if self.dt <= 0:
            raise ConfigError(f"dt must be positive, got {self.dt}")
        for name in ('max_steps', 'progress_interval', 'yield_interval',
                     'kepler_max_iterations'):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be >= 1, got {getattr(self, name)}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **overrides) -> 'SimulationConfig':
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)


DEFAULT_CONFIG = SimulationConfig()


def load_config(path: Optional[str] = None) -> SimulationConfig:
    """
    Load configuration from a YAML file.

    Missing keys keep their defaults. Unknown keys are rejected so that
    typos do not silently fall back to defaults.

    Args:
        path: Path to a YAML mapping, or None for defaults

    Returns:
        SimulationConfig
    """
    if path is None:
        return DEFAULT_CONFIG

    with open(path, 'r') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    config = SimulationConfig(**data)
    logger.debug(f"Loaded config from {path}: {config}")
    return config


def save_config(config: SimulationConfig, path: str):
    """Write configuration as YAML, creating parent directories."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)


def configure_logging(level: str = "INFO"):
    """Install a root handler. Intended for command-line use only."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigError(f"Unknown log level: {level}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
