"""
Tests for Keplerian propagation and the Earth ephemeris.
"""

import pytest
import numpy as np
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from core.constants import AU_KM, J2000_JD, UNIX_EPOCH_JD
from core.models import OrbitalElements
from orbits.kepler import (
    solve_kepler_equation, true_anomaly, mean_motion, state_from_elements, orbit_track
)
from orbits.ephemeris import (
    earth_heliocentric_position, datetime_to_julian, julian_to_datetime
)


def make_elements(**overrides):
    values = dict(
        semi_major_axis=1.5e8,
        eccentricity=0.2,
        inclination=10.0,
        ascending_node=40.0,
        argument_of_periapsis=60.0,
        mean_anomaly=30.0,
        mean_motion=mean_motion(1.5e8),
        epoch=J2000_JD,
    )
    values.update(overrides)
    return OrbitalElements(**values)


class TestKeplerSolver:
    """Test Newton-Raphson solution of Kepler's equation."""

    def test_circular_orbit_returns_mean_anomaly(self):
        """For e = 0 the eccentric anomaly equals the mean anomaly."""
        for M in [0.0, 0.5, 1.234, 3.0, 6.0]:
            assert solve_kepler_equation(M, 0.0) == M

    @pytest.mark.parametrize("e", [0.0, 0.1, 0.3, 0.5, 0.7, 0.8])
    def test_residual_small(self, e):
        """Solution satisfies E - e sin E = M."""
        for M in [0.1, 1.0, 2.0, 3.0, 5.0]:
            E = solve_kepler_equation(M, e)
            assert abs(E - e * np.sin(E) - M) < 1e-7

    def test_quarter_orbit(self):
        E = solve_kepler_equation(np.pi / 2, 0.5)
        assert abs(E - 0.5 * np.sin(E) - np.pi / 2) < 1e-7
        assert np.pi / 2 < E < np.pi

    def test_non_convergence_returns_last_iterate(self):
        """Iteration cap returns a value instead of raising."""
        E = solve_kepler_equation(0.1, 0.95, max_iterations=1)
        assert np.isfinite(E)

    def test_true_anomaly_at_apsides(self):
        assert true_anomaly(0.0, 0.5) == pytest.approx(0.0)
        assert abs(true_anomaly(np.pi, 0.5)) == pytest.approx(np.pi)


class TestStateFromElements:
    """Test position from orbital elements."""

    def test_radius_matches_conic(self):
        """|r| equals a(1 - e cos E) at the solved anomaly."""
        elements = make_elements()
        position = state_from_elements(elements, J2000_JD)

        E = solve_kepler_equation(np.deg2rad(30.0), 0.2)
        expected = 1.5e8 * (1 - 0.2 * np.cos(E))
        assert np.linalg.norm(position) == pytest.approx(expected, rel=1e-9)

    def test_periapsis_on_x_axis(self):
        """With all angles zero, periapsis lies on +x."""
        elements = make_elements(inclination=0.0, ascending_node=0.0,
                                 argument_of_periapsis=0.0, mean_anomaly=0.0)
        position = state_from_elements(elements, J2000_JD)

        assert position[0] == pytest.approx(1.5e8 * 0.8)
        assert position[1] == pytest.approx(0.0, abs=1e-6)
        assert position[2] == pytest.approx(0.0, abs=1e-6)

    def test_polar_orbit_rotation(self):
        """i = 90, w = 90 puts periapsis on +z."""
        elements = make_elements(eccentricity=0.0, inclination=90.0, ascending_node=0.0,
                                 argument_of_periapsis=90.0, mean_anomaly=0.0)
        position = state_from_elements(elements, J2000_JD)

        assert position[2] == pytest.approx(1.5e8)
        assert abs(position[0]) < 1e-3
        assert abs(position[1]) < 1e-3

    def test_propagation_advances_mean_anomaly(self):
        """Half a period after periapsis the body is at apoapsis."""
        elements = make_elements(inclination=0.0, ascending_node=0.0,
                                 argument_of_periapsis=0.0, mean_anomaly=0.0)
        half_period_days = np.pi / elements.mean_motion / 86400.0
        position = state_from_elements(elements, J2000_JD + half_period_days)

        assert position[0] == pytest.approx(-1.5e8 * 1.2, rel=1e-9)

    def test_orbit_track(self):
        elements = make_elements()
        track = orbit_track(elements, J2000_JD, J2000_JD + 365.0, samples=12)

        assert len(track) == 12
        assert np.allclose(track[0], state_from_elements(elements, J2000_JD))

    def test_orbit_track_requires_two_samples(self):
        with pytest.raises(ValueError):
            orbit_track(make_elements(), J2000_JD, J2000_JD + 1.0, samples=1)

    def test_rejects_non_elliptical(self):
        with pytest.raises(ValueError):
            make_elements(eccentricity=1.0)
        with pytest.raises(ValueError):
            make_elements(semi_major_axis=-1.0)


class TestEphemeris:
    """Test Earth ephemeris and date conversions."""

    @pytest.mark.parametrize("offset_days", [0.0, 91.3, 182.6, 273.9, 3652.5])
    def test_earth_near_one_au(self, offset_days):
        r = earth_heliocentric_position(J2000_JD + offset_days)
        assert 0.98 < np.linalg.norm(r) / AU_KM < 1.02
        assert r[2] == 0.0

    def test_earth_opposite_sun_at_j2000(self):
        """In early January the Sun is near longitude 280, Earth near 100."""
        r = earth_heliocentric_position(J2000_JD)
        longitude = np.rad2deg(np.arctan2(r[1], r[0])) % 360.0
        assert longitude == pytest.approx(100.38, abs=0.05)

    def test_unix_epoch(self):
        epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert datetime_to_julian(epoch) == UNIX_EPOCH_JD

    def test_j2000(self):
        assert datetime_to_julian(datetime(2000, 1, 1, 12, tzinfo=timezone.utc)) == J2000_JD

    def test_naive_datetime_is_utc(self):
        naive = datetime(2024, 3, 1, 6, 30)
        aware = naive.replace(tzinfo=timezone.utc)
        assert datetime_to_julian(naive) == datetime_to_julian(aware)

    def test_julian_to_datetime(self):
        assert julian_to_datetime(J2000_JD) == datetime(2000, 1, 1, 12, tzinfo=timezone.utc)
