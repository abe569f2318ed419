"""
Tests for casualty estimation.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from core.models import BlastZones, CityRecord, ImpactLocation
from impact.casualties import (
    CasualtyEstimator, circle_overlap_area, haversine_distance, classify_severity
)
from impact.cities import MAJOR_CITIES

# South Pacific, thousands of km from any registry city
REMOTE = ImpactLocation(lat=-40.0, lon=-130.0, is_ocean=True)
PARIS = ImpactLocation(lat=48.8566, lon=2.3522)


@pytest.fixture
def estimator():
    return CasualtyEstimator()


class TestGeometry:
    """Test distance and overlap helpers."""

    def test_haversine_quarter_circumference(self):
        assert haversine_distance(0, 0, 0, 90) == pytest.approx(6371 * np.pi / 2)

    def test_haversine_same_point(self):
        assert haversine_distance(48.8566, 2.3522, 48.8566, 2.3522) == pytest.approx(0.0)

    def test_overlap_concentric(self):
        assert circle_overlap_area(0, 5, 3) == pytest.approx(np.pi * 9)

    def test_overlap_disjoint(self):
        assert circle_overlap_area(10, 2, 3) == 0.0
        assert circle_overlap_area(5, 2, 3) == 0.0

    def test_overlap_containment_either_way(self):
        assert circle_overlap_area(1, 5, 2) == pytest.approx(np.pi * 4)
        assert circle_overlap_area(1, 2, 5) == pytest.approx(np.pi * 4)

    def test_overlap_lens(self):
        """Two unit circles one radius apart."""
        expected = 2 * np.arccos(0.5) - 0.5 * np.sqrt(3)
        assert circle_overlap_area(1, 1, 1) == pytest.approx(expected)

    def test_overlap_symmetric(self):
        assert circle_overlap_area(4, 3, 2) == pytest.approx(circle_overlap_area(4, 2, 3))


class TestSeverity:
    """Test severity classification."""

    @pytest.mark.parametrize("casualties,label", [
        (0, 'Minor'),
        (99, 'Minor'),
        (100, 'Moderate'),
        (9999, 'Serious'),
        (10000, 'Severe'),
        (500000, 'Catastrophic'),
        (9999999, 'Mass Casualty Event'),
        (10000000, 'Extinction-Level Event'),
    ])
    def test_labels(self, casualties, label):
        assert classify_severity(casualties) == label


class TestPopulation:
    """Test population exposure."""

    def test_registry_size(self):
        assert len(MAJOR_CITIES) == 45
        assert all(city.population > 0 and city.radius > 0 for city in MAJOR_CITIES)

    def test_remote_fallback(self, estimator):
        total, cities, used_fallback = estimator.population_in_radius(-40.0, -130.0, 5.0)

        assert used_fallback
        assert cities == []
        assert total == round(np.pi * 25.0 * 10.0)

    def test_density_decay_bands(self):
        city = CityRecord('Testville', 0.0, 0.0, 1000000, 10)

        near = CasualtyEstimator.density_from_nearest_city(20.0, city)
        assert near == pytest.approx(city.density * np.exp(-20.0 / 30.0))
        assert CasualtyEstimator.density_from_nearest_city(100.0, city) == 50.0
        assert CasualtyEstimator.density_from_nearest_city(500.0, city) == 10.0

    def test_city_centre_disc(self, estimator):
        """A disc inside Paris sees Paris density over its whole area."""
        paris = next(c for c in MAJOR_CITIES if c.name == 'Paris')
        total, cities, used_fallback = estimator.population_in_radius(paris.lat, paris.lon, 2.0)

        assert not used_fallback
        assert [c.name for c in cities] == ['Paris']
        assert total == round(np.pi * 4.0 * paris.density)
        assert cities[0].distance == 0

    def test_custom_registry(self):
        city = CityRecord('Testville', 0.0, 0.0, 1000000, 10)
        estimator = CasualtyEstimator(cities=[city])

        nearest, distance = estimator.nearest_city(0.0, 1.0)
        assert nearest.name == 'Testville'
        assert distance == pytest.approx(haversine_distance(0, 0, 0, 1))

    def test_empty_registry_rejected(self):
        with pytest.raises(ValueError):
            CasualtyEstimator(cities=[])


class TestEstimate:
    """Test the full casualty estimate."""

    def test_remote_zone_totals(self, estimator):
        blast = BlastZones(fireball=1000.0, thermal=2000.0, airblast=1500.0, radiation=500.0)
        estimate = estimator.estimate(blast, REMOTE)

        thermal = estimate.zones['thermal']
        assert thermal.used_fallback
        assert thermal.population_affected == round(np.pi * 4.0 * 10.0)
        assert thermal.casualties == round(thermal.population_affected * 0.9)
        assert thermal.injured == round(thermal.population_affected * 0.1 * 0.8)

        fireball = estimate.zones['fireball']
        assert fireball.casualties == fireball.population_affected
        assert fireball.injured == 0

        assert estimate.estimated_casualties == sum(z.casualties for z in estimate.zones.values())
        assert estimate.total_affected == estimate.estimated_casualties + estimate.estimated_injured
        assert estimate.affected_cities == []
        assert estimate.note.startswith('Ocean impact')

    def test_paris_direct_hit(self, estimator):
        blast = BlastZones(fireball=1000.0, thermal=8000.0, airblast=5000.0, radiation=3000.0)
        estimate = estimator.estimate(blast, PARIS)

        assert estimate.severity == 'Mass Casualty Event'
        assert [c.name for c in estimate.affected_cities] == ['Paris']
        assert estimate.note == 'Direct land impact - 1 major cities affected'

    def test_reported_cities_from_widest_zone(self, estimator):
        blast = BlastZones(fireball=1000.0, thermal=8000.0, airblast=5000.0, radiation=3000.0)
        estimate = estimator.estimate(blast, PARIS)

        assert estimate.affected_cities == estimate.zones['thermal'].affected_cities

    def test_zone_metadata(self, estimator):
        blast = BlastZones(fireball=1000.0, thermal=8000.0, airblast=5000.0, radiation=3000.0)
        estimate = estimator.estimate(blast, PARIS)

        assert list(estimate.zones) == ['fireball', 'thermal', 'airblast', 'radiation']
        airblast = estimate.zones['airblast']
        assert airblast.radius == pytest.approx(5.0)
        assert airblast.area == pytest.approx(np.pi * 25.0)
        assert airblast.mortality_rate == 0.7
