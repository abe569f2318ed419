"""
Earth ephemeris and date conversions.

Low-precision analytical solar position (mean longitude plus a two-term
equation of center). Earth sits opposite the apparent Sun in the ecliptic
plane. Accuracy is better than ~15,000 km, which is enough for orbit
visualization but is not a perturbation model.
"""

from datetime import datetime, timezone
import numpy as np
import logging

from core.constants import AU_KM, J2000_JD, MS_PER_DAY, UNIX_EPOCH_JD

logger = logging.getLogger(__name__)


def earth_heliocentric_position(julian_date: float) -> np.ndarray:
    """
    Compute Earth's heliocentric ecliptic position.

    Args:
        julian_date: Julian date

    Returns:
        Position vector [x, y, z] in km (z = 0, ecliptic plane)

    Example:
        >>> r = earth_heliocentric_position(2451545.0)
        >>> 0.98 < np.linalg.norm(r) / AU_KM < 1.02
        True
    """
    # Days since J2000.0
    d = julian_date - J2000_JD

    # Mean longitude of the Sun (degrees)
    L = _normalize_angle(280.460 + 0.9856474 * d)

    # Mean anomaly (degrees)
    g = _normalize_angle(357.528 + 0.9856003 * d)
    g_rad = np.deg2rad(g)

    # Ecliptic longitude with equation of center
    lambda_sun = _normalize_angle(L + 1.915 * np.sin(g_rad) + 0.020 * np.sin(2 * g_rad))

    # Earth-Sun distance (AU)
    R_au = 1.00014 - 0.01671 * np.cos(g_rad) - 0.00014 * np.cos(2 * g_rad)

    # Earth is opposite the Sun
    earth_lambda = (np.deg2rad(lambda_sun) + np.pi) % (2 * np.pi)

    R_km = R_au * AU_KM
    return np.array([R_km * np.cos(earth_lambda), R_km * np.sin(earth_lambda), 0.0])


def datetime_to_julian(time_utc: datetime) -> float:
    """
    Convert a datetime to Julian date via Unix milliseconds.

    Naive datetimes are taken as UTC.
    """
    if time_utc.tzinfo is None:
        time_utc = time_utc.replace(tzinfo=timezone.utc)
    return time_utc.timestamp() * 1000.0 / MS_PER_DAY + UNIX_EPOCH_JD


def julian_to_datetime(julian_date: float) -> datetime:
    """Convert a Julian date to a timezone-aware UTC datetime."""
    ms = (julian_date - UNIX_EPOCH_JD) * MS_PER_DAY
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)


def _normalize_angle(angle_deg: float) -> float:
    """Normalize angle to [0, 360) degrees."""
    return angle_deg % 360.0
