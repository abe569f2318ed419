"""Orbital propagation: Keplerian elements, Earth ephemeris, two-body integration."""

from .kepler import solve_kepler_equation, true_anomaly, state_from_elements, orbit_track
from .ephemeris import earth_heliocentric_position, datetime_to_julian, julian_to_datetime
from .integrator import Earth, Asteroid, TrajectorySimulation, create_simulation

__all__ = [
    'solve_kepler_equation',
    'true_anomaly',
    'state_from_elements',
    'orbit_track',
    'earth_heliocentric_position',
    'datetime_to_julian',
    'julian_to_datetime',
    'Earth',
    'Asteroid',
    'TrajectorySimulation',
    'create_simulation',
]
