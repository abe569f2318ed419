"""
Deflection feasibility heuristic.

First-order estimate of the velocity change needed to turn an impact into
a miss, valid only for small deflections over times short relative to
an orbital period.
"""

import math
import logging

from core.constants import SECONDS_PER_DAY
from core.models import DeflectionScenario, DeflectionResult

logger = logging.getLogger(__name__)

# method -> (momentum/energy efficiency, description)
DEFLECTION_METHODS = {
    'kinetic': (0.5, 'Kinetic Impactor: High-speed spacecraft collision'),
    'gravity': (0.01, 'Gravity Tractor: Spacecraft gravitational pull'),
    'nuclear': (10.0, 'Nuclear Deflection: Standoff nuclear detonation'),
}

MIN_WARNING_DAYS = 30
MAX_IMPACTOR_MASS = 50000.0  # kg

# (warning time strictly above, probability)
SUCCESS_STEPS = (
    (365, 0.9),
    (180, 0.7),
    (90, 0.5),
)
SUCCESS_FLOOR = 0.2


def success_probability(warning_time_days: float) -> float:
    """Step function of warning time."""
    for threshold, probability in SUCCESS_STEPS:
        if warning_time_days > threshold:
            return probability
    return SUCCESS_FLOOR


class DeflectionFeasibilityModel:
    """Pure function of a DeflectionScenario."""

    def evaluate(self, scenario: DeflectionScenario) -> DeflectionResult:
        """
        Assess a deflection scenario.

        Args:
            scenario: Method, asteroid mass (kg), warning time (days) and
                desired miss distance (km)

        Returns:
            DeflectionResult

        Raises:
            ValueError: Unknown method or non-positive warning time
        """
        if scenario.method not in DEFLECTION_METHODS:
            raise ValueError(
                f"Unknown deflection method: {scenario.method!r} "
                f"(expected one of {', '.join(DEFLECTION_METHODS)})"
            )
        if scenario.warning_time_days <= 0:
            raise ValueError(f"warning_time_days must be positive, got {scenario.warning_time_days}")

        efficiency, description = DEFLECTION_METHODS[scenario.method]

        miss_distance_m = scenario.miss_distance_km * 1000.0
        warning_time_s = scenario.warning_time_days * SECONDS_PER_DAY
        required_delta_v = miss_distance_m / warning_time_s

        impactor_mass = scenario.asteroid_mass * required_delta_v / (efficiency * 1000.0)
        feasible = (scenario.warning_time_days > MIN_WARNING_DAYS
                    and impactor_mass < MAX_IMPACTOR_MASS)
        warning_time_needed = math.ceil(
            miss_distance_m * scenario.asteroid_mass / (efficiency * 1000.0 * 100.0)
        )

        logger.debug(
            f"Deflection {scenario.method}: dv={required_delta_v:.4g} m/s, "
            f"impactor {impactor_mass:.4g} kg, feasible={feasible}"
        )

        return DeflectionResult(
            method=scenario.method,
            description=description,
            required_delta_v=required_delta_v,
            impactor_mass=impactor_mass,
            feasible=feasible,
            success_probability=success_probability(scenario.warning_time_days),
            warning_time_needed=warning_time_needed,
        )
