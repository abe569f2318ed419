"""
Casualty estimation from blast zones and a static city registry.

Each blast zone is a disc around the impact point. Exposed population is
the overlap area between that disc and each city disc times the city's
uniform density. When no city is reached, density is extrapolated from
the nearest city instead.
"""

from typing import Dict, List, Sequence, Tuple
import numpy as np
import logging

from core.constants import EARTH_RADIUS_KM
from core.models import (
    AffectedCity, BlastZones, CasualtyEstimate, CityRecord, ImpactLocation,
    ZoneCasualties
)
from .cities import MAJOR_CITIES

logger = logging.getLogger(__name__)

# (zone name, BlastZones attribute, mortality rate, description)
BLAST_ZONES = (
    ('fireball', 'fireball', 1.0, 'Total vaporization'),
    ('thermal', 'thermal', 0.9, 'Severe burns, fires'),
    ('airblast', 'airblast', 0.7, 'Building collapse, flying debris'),
    ('radiation', 'radiation', 0.3, 'Radiation sickness, structural damage'),
)

# Share of non-fatal exposed population counted as injured
INJURY_FRACTION = 0.8

# Nearest-city density fallback
URBAN_DECAY_LIMIT_KM = 50.0
URBAN_DECAY_LENGTH_KM = 30.0
RURAL_LIMIT_KM = 200.0
RURAL_DENSITY = 50.0  # people/km^2
REMOTE_DENSITY = 10.0  # people/km^2

SEVERITY_SCALE = (
    (100, 'Minor'),
    (1000, 'Moderate'),
    (10000, 'Serious'),
    (100000, 'Severe'),
    (1000000, 'Catastrophic'),
    (10000000, 'Mass Casualty Event'),
)
SEVERITY_MAX = 'Extinction-Level Event'


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float,
                       radius: float = EARTH_RADIUS_KM) -> float:
    """Great-circle distance in km between two lat/lon points (degrees)."""
    phi1, phi2 = np.deg2rad(lat1), np.deg2rad(lat2)
    d_phi = np.deg2rad(lat2 - lat1)
    d_lambda = np.deg2rad(lon2 - lon1)

    a = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2
    return float(radius * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a)))


def circle_overlap_area(distance: float, r1: float, r2: float) -> float:
    """
    Intersection area of two circles.

    Args:
        distance: Centre separation
        r1: Radius of the first circle
        r2: Radius of the second circle

    Returns:
        Overlap area in the squared unit of the inputs
    """
    if distance == 0:
        return np.pi * min(r1, r2) ** 2

    if distance >= r1 + r2:
        return 0.0

    # Full containment either way
    if distance + r2 <= r1:
        return np.pi * r2 ** 2
    if distance + r1 <= r2:
        return np.pi * r1 ** 2

    # Lens: two circular segments
    d = distance
    alpha = np.arccos(np.clip((d * d + r1 * r1 - r2 * r2) / (2 * d * r1), -1.0, 1.0))
    beta = np.arccos(np.clip((d * d + r2 * r2 - r1 * r1) / (2 * d * r2), -1.0, 1.0))
    kite = 0.5 * np.sqrt(max((-d + r1 + r2) * (d + r1 - r2) * (d - r1 + r2) * (d + r1 + r2), 0.0))

    return float(r1 * r1 * alpha + r2 * r2 * beta - kite)


def classify_severity(casualties: int) -> str:
    for upper, label in SEVERITY_SCALE:
        if casualties < upper:
            return label
    return SEVERITY_MAX


class CasualtyEstimator:
    """
    Population exposure and casualty model.

    Example:
        >>> estimator = CasualtyEstimator()
        >>> blast = BlastZones(fireball=1000, thermal=8000, airblast=5000, radiation=3000)
        >>> est = estimator.estimate(blast, ImpactLocation(lat=48.8566, lon=2.3522))
        >>> est.severity
        'Mass Casualty Event'
    """

    def __init__(self, cities: Sequence[CityRecord] = MAJOR_CITIES):
        """
        Args:
            cities: Read-only city registry, shared by reference
        """
        if not cities:
            raise ValueError("City registry must not be empty")
        self.cities = cities

    def nearest_city(self, lat: float, lon: float) -> Tuple[CityRecord, float]:
        """Nearest registry city and its distance (km)."""
        distances = [haversine_distance(lat, lon, c.lat, c.lon) for c in self.cities]
        idx = int(np.argmin(distances))
        return self.cities[idx], distances[idx]

    @staticmethod
    def density_from_nearest_city(distance_km: float, city: CityRecord) -> float:
        """
        Population density (people/km^2) extrapolated from the nearest city.

        Exponential decay of the city density within 50 km, a flat rural
        density within 200 km and a flat remote density beyond.
        """
        if distance_km < URBAN_DECAY_LIMIT_KM:
            return city.density * np.exp(-distance_km / URBAN_DECAY_LENGTH_KM)
        elif distance_km < RURAL_LIMIT_KM:
            return RURAL_DENSITY
        return REMOTE_DENSITY

    def population_in_radius(self, lat: float, lon: float,
                             radius_km: float) -> Tuple[int, List[AffectedCity], bool]:
        """
        Population inside a disc around a point.

        Args:
            lat: Centre latitude (degrees)
            lon: Centre longitude (degrees)
            radius_km: Disc radius (km)

        Returns:
            (total_population, affected_cities, used_fallback)
        """
        affected: List[AffectedCity] = []
        total = 0

        for city in self.cities:
            distance = haversine_distance(lat, lon, city.lat, city.lon)
            if distance > radius_km + city.radius:
                continue

            overlap = circle_overlap_area(distance, radius_km, city.radius)
            affected_pop = int(round(overlap * city.density))

            if affected_pop > 0:
                affected.append(AffectedCity(
                    name=city.name,
                    distance=int(round(distance)),
                    population=city.population,
                    affected_population=affected_pop,
                    overlap_factor=affected_pop / city.population,
                ))
                total += affected_pop

        if affected:
            return total, affected, False

        city, distance = self.nearest_city(lat, lon)
        density = self.density_from_nearest_city(distance, city)
        total = int(round(np.pi * radius_km ** 2 * density))
        logger.debug(
            f"No city within {radius_km:.2f} km; using {city.name} at {distance:.0f} km "
            f"({density:.1f} people/km^2)"
        )
        return total, [], True

    def estimate(self, blast: BlastZones, location: ImpactLocation) -> CasualtyEstimate:
        """
        Casualties and injuries summed over all blast zones.

        Args:
            blast: Blast radii (m)
            location: Impact point

        Returns:
            CasualtyEstimate
        """
        zones: Dict[str, ZoneCasualties] = {}
        total_casualties = 0
        total_injured = 0
        largest_cities: List[AffectedCity] = []
        max_radius = 0.0

        for name, attr, mortality, description in BLAST_ZONES:
            radius_km = getattr(blast, attr) / 1000.0
            population, cities, used_fallback = self.population_in_radius(
                location.lat, location.lon, radius_km
            )

            casualties = int(round(population * mortality))
            injured = int(round(population * (1 - mortality) * INJURY_FRACTION))

            zones[name] = ZoneCasualties(
                name=name,
                radius=radius_km,
                area=np.pi * radius_km ** 2,
                mortality_rate=mortality,
                description=description,
                population_affected=population,
                casualties=casualties,
                injured=injured,
                affected_cities=cities,
                used_fallback=used_fallback,
            )

            # Zones share a centre, so the widest one holds every affected city
            if radius_km > max_radius:
                max_radius = radius_km
                largest_cities = cities

            total_casualties += casualties
            total_injured += injured

        if all(zone.used_fallback for zone in zones.values()):
            logger.warning(
                f"No registry city reached from ({location.lat:.3f}, {location.lon:.3f}); "
                f"population estimated from nearest city"
            )

        if location.is_ocean:
            note = 'Ocean impact - tsunami and coastal effects primary concern'
        else:
            note = f"Direct land impact - {len(largest_cities)} major cities affected"

        return CasualtyEstimate(
            estimated_casualties=total_casualties,
            estimated_injured=total_injured,
            total_affected=total_casualties + total_injured,
            severity=classify_severity(total_casualties),
            zones=zones,
            affected_cities=largest_cities,
            note=note,
        )
