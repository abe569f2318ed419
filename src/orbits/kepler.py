"""
Closed-form Keplerian orbit propagation.

Converts orbital elements to heliocentric Cartesian positions by solving
Kepler's equation with Newton-Raphson and rotating the orbital-plane
position through the three classical angles.

Reference: Vallado, D. "Fundamentals of Astrodynamics and Applications" (2013)
"""

from typing import List
import numpy as np
import logging

from core.constants import SECONDS_PER_DAY, MU_SUN
from core.models import OrbitalElements

logger = logging.getLogger(__name__)

KEPLER_TOLERANCE = 1e-8  # radians
KEPLER_MAX_ITERATIONS = 20


def solve_kepler_equation(mean_anomaly: float, eccentricity: float,
                          tolerance: float = KEPLER_TOLERANCE,
                          max_iterations: int = KEPLER_MAX_ITERATIONS) -> float:
    """
    Solve M = E - e*sin(E) for the eccentric anomaly E.

    Newton-Raphson starting from E = M. If the iteration cap is reached
    the last iterate is returned as-is.

    Args:
        mean_anomaly: Mean anomaly M (radians)
        eccentricity: Orbital eccentricity (0 <= e < 1)
        tolerance: Convergence threshold on the Newton step (radians)
        max_iterations: Iteration cap

    Returns:
        Eccentric anomaly E (radians)

    Example:
        >>> E = solve_kepler_equation(np.pi / 2, 0.5)
        >>> abs(E - 0.5 * np.sin(E) - np.pi / 2) < 1e-7
        True
    """
    E = mean_anomaly

    for i in range(max_iterations):
        f = E - eccentricity * np.sin(E) - mean_anomaly
        df = 1.0 - eccentricity * np.cos(E)
        delta = f / df
        E -= delta

        if abs(delta) < tolerance:
            logger.debug(f"Kepler solver converged in {i + 1} iterations")
            return float(E)

    logger.warning(
        f"Kepler solver did not converge after {max_iterations} iterations "
        f"(M={mean_anomaly:.6f}, e={eccentricity:.6f}); using last iterate"
    )
    return float(E)


def true_anomaly(eccentric_anomaly: float, eccentricity: float) -> float:
    """Convert eccentric anomaly to true anomaly (radians)."""
    half = eccentric_anomaly / 2.0
    return float(2.0 * np.arctan2(np.sqrt(1.0 + eccentricity) * np.sin(half),
                                  np.sqrt(1.0 - eccentricity) * np.cos(half)))


def orbit_radius(semi_major_axis: float, eccentricity: float, nu: float) -> float:
    """Conic equation r = a(1 - e^2) / (1 + e cos(nu))."""
    return semi_major_axis * (1.0 - eccentricity ** 2) / (1.0 + eccentricity * np.cos(nu))


def perifocal_to_inertial(inclination: float, ascending_node: float,
                          argument_of_periapsis: float) -> np.ndarray:
    """
    Rotation matrix from the perifocal (orbital-plane) frame to the
    reference frame: R = Rz(node) @ Rx(inclination) @ Rz(periapsis).

    All angles in radians.
    """
    cos_w, sin_w = np.cos(argument_of_periapsis), np.sin(argument_of_periapsis)
    cos_i, sin_i = np.cos(inclination), np.sin(inclination)
    cos_O, sin_O = np.cos(ascending_node), np.sin(ascending_node)

    R_periapsis = np.array([
        [cos_w, -sin_w, 0],
        [sin_w, cos_w, 0],
        [0, 0, 1]
    ])

    R_inc = np.array([
        [1, 0, 0],
        [0, cos_i, -sin_i],
        [0, sin_i, cos_i]
    ])

    R_node = np.array([
        [cos_O, -sin_O, 0],
        [sin_O, cos_O, 0],
        [0, 0, 1]
    ])

    return R_node @ R_inc @ R_periapsis


def mean_motion(semi_major_axis: float, mu: float = MU_SUN) -> float:
    """Mean motion n = sqrt(mu / a^3) in rad/s (a in km, mu in km^3/s^2)."""
    return float(np.sqrt(mu / semi_major_axis ** 3))


def state_from_elements(elements: OrbitalElements, julian_date: float,
                        tolerance: float = KEPLER_TOLERANCE,
                        max_iterations: int = KEPLER_MAX_ITERATIONS) -> np.ndarray:
    """
    Heliocentric Cartesian position at a given time.

    The mean anomaly is advanced linearly from the epoch and is not reduced
    modulo 2*pi, so precision degrades for very long propagation spans.

    Args:
        elements: Orbital elements (angles in degrees, n in rad/s)
        julian_date: Query time (Julian date)

    Returns:
        Position [x, y, z] in km
    """
    dt_seconds = (julian_date - elements.epoch) * SECONDS_PER_DAY
    M = np.deg2rad(elements.mean_anomaly) + elements.mean_motion * dt_seconds

    E = solve_kepler_equation(M, elements.eccentricity, tolerance, max_iterations)
    nu = true_anomaly(E, elements.eccentricity)
    r = orbit_radius(elements.semi_major_axis, elements.eccentricity, nu)

    r_orbital = np.array([r * np.cos(nu), r * np.sin(nu), 0.0])

    R = perifocal_to_inertial(
        np.deg2rad(elements.inclination),
        np.deg2rad(elements.ascending_node),
        np.deg2rad(elements.argument_of_periapsis),
    )

    return R @ r_orbital


def orbit_track(elements: OrbitalElements, start_jd: float, end_jd: float,
                samples: int = 360) -> List[np.ndarray]:
    """
    Sample positions along an orbit between two Julian dates.

    Args:
        elements: Orbital elements
        start_jd: First sample time (Julian date)
        end_jd: Last sample time (Julian date)
        samples: Number of samples (>= 2)

    Returns:
        List of [x, y, z] positions in km
    """
    if samples < 2:
        raise ValueError(f"samples must be >= 2, got {samples}")

    return [state_from_elements(elements, jd)
            for jd in np.linspace(start_jd, end_jd, samples)]
