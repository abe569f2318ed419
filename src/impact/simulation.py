"""
Request-shaped entry points for impact and deflection simulations.

Callers (HTTP handlers, the command-line driver) pass plain mappings with
the external field names; these functions build the typed inputs and run
the engines.
"""

from typing import Any, Dict, Mapping
import logging

from core.config import SimulationConfig, DEFAULT_CONFIG
from core.constants import DEFAULT_ASTEROID_DENSITY
from core.models import (
    DeflectionResult, DeflectionScenario, ImpactLocation, ImpactParameters,
    ImpactResult
)
from .casualties import CasualtyEstimator
from .deflection import DeflectionFeasibilityModel
from .effects import ImpactEffectsCalculator

logger = logging.getLogger(__name__)

DEFAULT_ANGLE = 45.0


def _require(request: Mapping[str, Any], *keys: str):
    missing = [k for k in keys if request.get(k) is None]
    if missing:
        raise ValueError(f"Missing required parameters: {', '.join(missing)}")


def impact_parameters_from_request(request: Mapping[str, Any]) -> ImpactParameters:
    """
    Build ImpactParameters from an impact request.

    Expected shape::

        {diameter, velocity, angle, density,
         impactLocation: {lat, lon, isOcean, waterDepth}}

    velocity is in m/s; angle and density default to 45 deg and 3000 kg/m^3.
    """
    _require(request, 'diameter', 'velocity', 'impactLocation')
    loc = request['impactLocation']

    location = ImpactLocation(
        lat=float(loc.get('lat', 0.0)),
        lon=float(loc.get('lon', 0.0)),
        is_ocean=bool(loc.get('isOcean', False)),
        water_depth=loc.get('waterDepth'),
    )

    return ImpactParameters(
        diameter=float(request['diameter']),
        velocity=float(request['velocity']),
        angle=float(request.get('angle', DEFAULT_ANGLE)),
        density=float(request.get('density', DEFAULT_ASTEROID_DENSITY)),
        location=location,
    )


def simulate_impact(request: Mapping[str, Any],
                    config: SimulationConfig = DEFAULT_CONFIG,
                    estimator: CasualtyEstimator = None) -> ImpactResult:
    """
    Run the impact pipeline including casualty estimation.

    Args:
        request: Impact request mapping (see impact_parameters_from_request)
        config: Simulation config
        estimator: Casualty estimator, defaults to one over the built-in registry

    Returns:
        ImpactResult
    """
    params = impact_parameters_from_request(request)
    calculator = ImpactEffectsCalculator(
        casualty_estimator=estimator or CasualtyEstimator(), config=config
    )
    result = calculator.simulate(params)

    logger.info(
        f"Impact at ({params.location.lat:.3f}, {params.location.lon:.3f}): "
        f"{result.energy.megatons:.3g} Mt, {result.casualties.estimated_casualties:,} casualties"
    )
    return result


def simulate_deflection(request: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Assess a deflection strategy.

    Expected shape::

        {asteroidDiameter, asteroidDensity, warningTimeDays, missDistanceKm, method}

    Returns:
        {'deflection': DeflectionResult, 'asteroid_mass': kg}
    """
    _require(request, 'asteroidDiameter', 'warningTimeDays', 'missDistanceKm')

    density = float(request.get('asteroidDensity', DEFAULT_ASTEROID_DENSITY))
    mass = ImpactEffectsCalculator.calculate_mass(float(request['asteroidDiameter']), density)

    scenario = DeflectionScenario(
        method=request.get('method', 'kinetic'),
        asteroid_mass=mass,
        warning_time_days=float(request['warningTimeDays']),
        miss_distance_km=float(request['missDistanceKm']),
    )
    result: DeflectionResult = DeflectionFeasibilityModel().evaluate(scenario)

    return {'deflection': result, 'asteroid_mass': mass}
