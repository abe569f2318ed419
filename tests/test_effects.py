"""
Tests for the impact effects pipeline.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from core.constants import ESCAPE_VELOCITY
from core.errors import ComputationError
from core.models import ImpactLocation, ImpactParameters
from impact.effects import ImpactEffectsCalculator

PARIS = ImpactLocation(lat=48.8566, lon=2.3522)
MID_PACIFIC = ImpactLocation(lat=0.0, lon=-160.0, is_ocean=True)


@pytest.fixture
def calculator():
    return ImpactEffectsCalculator()


class TestEnergy:
    """Test mass, velocity and energy stages."""

    def test_city_killer_energy(self, calculator):
        """100 m rocky body at 20 km/s releases about 75 Mt."""
        result = calculator.simulate(ImpactParameters(diameter=100, velocity=20000, location=PARIS))

        assert result.energy.megatons == pytest.approx(75.0, rel=0.01)
        assert result.energy.tnt_tons == pytest.approx(result.energy.megatons * 1e6)
        assert result.asteroid.mass == pytest.approx(1.5708e9, rel=1e-4)

    def test_chelyabinsk_order_of_magnitude(self, calculator):
        """18 m at 19 km/s lands within 20% of the observed ~450 kt."""
        result = calculator.simulate(ImpactParameters(diameter=18, velocity=19000, location=PARIS))

        kilotons = result.energy.megatons * 1000
        assert 360 <= kilotons <= 540

    def test_impact_velocity_adds_escape_velocity(self):
        v = ImpactEffectsCalculator.calculate_impact_velocity(20000.0, 45.0)
        assert v == pytest.approx(np.sqrt(20000.0 ** 2 + ESCAPE_VELOCITY ** 2))
        assert v > 20000.0

    def test_energy_monotonic_in_diameter(self, calculator):
        energies = [
            calculator.simulate(ImpactParameters(diameter=d, velocity=20000)).energy.joules
            for d in [10, 50, 100, 500]
        ]
        assert energies == sorted(energies)

    def test_energy_monotonic_in_velocity(self, calculator):
        energies = [
            calculator.simulate(ImpactParameters(diameter=100, velocity=v)).energy.joules
            for v in [11000, 15000, 20000, 40000]
        ]
        assert energies == sorted(energies)


class TestCrater:
    """Test crater scaling."""

    def test_land_impact_has_crater(self, calculator):
        result = calculator.simulate(ImpactParameters(diameter=100, velocity=20000, location=PARIS))

        assert result.crater is not None
        assert result.tsunami is None
        assert result.crater.depth == pytest.approx(result.crater.diameter / 5)

    def test_crater_formula(self):
        crater = ImpactEffectsCalculator.calculate_crater(100.0, 20000.0, 90.0)
        assert crater.diameter == pytest.approx(15.6 * 100 ** 0.78 * 20 ** 0.44)

    def test_crater_volume(self):
        crater = ImpactEffectsCalculator.calculate_crater(100.0, 20000.0, 45.0)
        radius = crater.diameter / 2
        assert crater.volume == pytest.approx(np.pi / 3 * radius ** 2 * crater.depth)

    def test_horizontal_impact_has_no_crater(self):
        crater = ImpactEffectsCalculator.calculate_crater(100.0, 20000.0, 0.0)
        assert crater.diameter == 0.0
        assert crater.volume == 0.0

    def test_steeper_impact_larger_crater(self):
        shallow = ImpactEffectsCalculator.calculate_crater(100.0, 20000.0, 15.0)
        steep = ImpactEffectsCalculator.calculate_crater(100.0, 20000.0, 75.0)
        assert steep.diameter > shallow.diameter


class TestSeismic:
    """Test seismic magnitude."""

    def test_city_killer_magnitude(self):
        seismic = ImpactEffectsCalculator.calculate_seismic(3.1416e17)
        assert seismic.magnitude == pytest.approx(0.67 * np.log10(3.1416e17) - 5.87)
        assert seismic.description.startswith('Moderate')
        assert seismic.radius_km == pytest.approx(10 ** (seismic.magnitude - 1))

    def test_magnitude_floored_at_zero(self):
        seismic = ImpactEffectsCalculator.calculate_seismic(1.0)
        assert seismic.magnitude == 0.0
        assert seismic.radius_km == pytest.approx(0.1)
        assert seismic.description.startswith('Minor')

    def test_great_band(self):
        seismic = ImpactEffectsCalculator.calculate_seismic(1e26)
        assert seismic.magnitude > 8
        assert seismic.description.startswith('Great')


class TestBlastAndTsunami:
    """Test blast radii and tsunami estimates."""

    def test_one_megaton_blast(self):
        blast = ImpactEffectsCalculator.calculate_blast(1.0)
        assert blast.fireball == pytest.approx(40.0)
        assert blast.thermal == pytest.approx(500.0)
        assert blast.airblast == pytest.approx(350.0)
        assert blast.radiation == pytest.approx(200.0)

    def test_blast_grows_with_energy(self):
        small = ImpactEffectsCalculator.calculate_blast(1.0)
        large = ImpactEffectsCalculator.calculate_blast(100.0)
        assert large.thermal == pytest.approx(500.0 * 100 ** 0.41)
        assert large.fireball > small.fireball

    def test_tsunami_formula(self):
        tsunami = ImpactEffectsCalculator.calculate_tsunami(1.0, 4000.0)
        assert tsunami.wave_height == pytest.approx(10.0)
        assert tsunami.wavelength == pytest.approx(200000.0)
        assert tsunami.propagation_speed == pytest.approx(np.sqrt(9.81 * 4000.0))
        assert tsunami.speed_kmh == pytest.approx(tsunami.propagation_speed * 3.6)
        assert tsunami.affected_radius_km == pytest.approx(100.0)

    def test_ocean_impact(self, calculator):
        result = calculator.simulate(
            ImpactParameters(diameter=100, velocity=20000, location=MID_PACIFIC)
        )
        assert result.crater is None
        assert result.tsunami is not None
        # Default water depth
        assert result.tsunami.wavelength == pytest.approx(4000.0 * 50)

    def test_ocean_impact_with_depth(self, calculator):
        location = ImpactLocation(lat=0.0, lon=-160.0, is_ocean=True, water_depth=1000.0)
        result = calculator.simulate(ImpactParameters(diameter=100, velocity=20000,
                                                      location=location))
        assert result.tsunami.propagation_speed == pytest.approx(np.sqrt(9.81 * 1000.0))


class TestPipeline:
    """Test simulate() as a whole."""

    def test_no_estimator_no_casualties(self, calculator):
        result = calculator.simulate(ImpactParameters(diameter=100, velocity=20000))
        assert result.casualties is None

    def test_non_finite_velocity_raises(self, calculator):
        with pytest.raises(ComputationError):
            calculator.simulate(ImpactParameters(diameter=100, velocity=float('nan')))

    def test_zero_diameter_raises(self, calculator):
        with pytest.raises(ComputationError):
            calculator.simulate(ImpactParameters(diameter=0, velocity=20000))

    def test_result_serializable(self, calculator):
        result = calculator.simulate(ImpactParameters(diameter=100, velocity=20000, location=PARIS))
        data = result.to_dict()

        assert data['energy']['megatons'] == pytest.approx(result.energy.megatons)
        assert data['tsunami'] is None
        assert 'Energy' in result.summary()
