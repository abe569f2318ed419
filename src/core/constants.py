"""
Physical constants shared by every engine.

Values are process-wide and read-only. Units are noted per constant; the
trajectory integrator works in km / kg / s while the impact pipeline works
in SI metres.
"""

import numpy as np

# Gravitation
G_SI = 6.67430e-11  # m^3/(kg*s^2)
G_KM = G_SI / 1000.0 ** 3  # km^3/(kg*s^2)

# Earth
EARTH_MASS = 5.972e24  # kg
EARTH_RADIUS_M = 6371000.0  # m
EARTH_RADIUS_KM = 6371.0  # km, also used for haversine distances
EARTH_SURFACE_GRAVITY = 9.81  # m/s^2
SIDEREAL_DAY = 86164.0  # s
EARTH_OMEGA = 2 * np.pi / SIDEREAL_DAY  # rad/s

# ~11.2 km/s
ESCAPE_VELOCITY = np.sqrt(2 * G_SI * EARTH_MASS / EARTH_RADIUS_M)  # m/s

# Sun
AU_KM = 149597870.7  # km
MU_SUN = 1.32712440018e11  # km^3/s^2

# Energy
JOULES_PER_TON_TNT = 4.184e9
TONS_PER_MEGATON = 1e6
JOULES_PER_MEGATON = JOULES_PER_TON_TNT * TONS_PER_MEGATON

# Materials
DEFAULT_ASTEROID_DENSITY = 3000.0  # kg/m^3, rocky asteroid
DEFAULT_WATER_DEPTH = 4000.0  # m, open ocean

# Time
SECONDS_PER_DAY = 86400.0
MS_PER_DAY = 86400000.0
UNIX_EPOCH_JD = 2440587.5
J2000_JD = 2451545.0
