"""Core domain models, constants and configuration."""

from .models import (
    OrbitalElements, StateVector, ImpactLocation, ImpactParameters,
    ImpactResult, CityRecord, DeflectionScenario, DeflectionResult,
    CollisionInfo, Collision, NoCollision, Escaped,
)
from .config import SimulationConfig, load_config
from .errors import ImpactSimError, ComputationError, ConfigError

__all__ = [
    'OrbitalElements',
    'StateVector',
    'ImpactLocation',
    'ImpactParameters',
    'ImpactResult',
    'CityRecord',
    'DeflectionScenario',
    'DeflectionResult',
    'CollisionInfo',
    'Collision',
    'NoCollision',
    'Escaped',
    'SimulationConfig',
    'load_config',
    'ImpactSimError',
    'ComputationError',
    'ConfigError',
]
