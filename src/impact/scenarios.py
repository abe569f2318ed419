"""
Predefined impact scenarios.

Historical events and well-known near-Earth objects with their documented
(or, for hypothetical impacts, typical) parameters.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Scenario:
    id: str
    name: str
    description: str
    historical: bool
    diameter: float  # m
    velocity: float  # km/s
    angle: float  # deg
    density: float  # kg/m^3
    composition: str  # 'rocky', 'iron' or 'icy'
    year: Optional[int] = None
    location: Optional[Tuple[float, float, str]] = None  # (lat, lon, name)

    def to_request(self, lat: float = None, lon: float = None,
                   is_ocean: bool = False, water_depth: float = None) -> Dict[str, Any]:
        """
        Impact request for this scenario.

        The documented location is used unless lat/lon are given; scenarios
        without one default to (0, 0).
        """
        if lat is None or lon is None:
            lat, lon = (self.location[0], self.location[1]) if self.location else (0.0, 0.0)

        return {
            'diameter': self.diameter,
            'velocity': self.velocity * 1000.0,
            'angle': self.angle,
            'density': self.density,
            'impactLocation': {
                'lat': lat,
                'lon': lon,
                'isOcean': is_ocean,
                'waterDepth': water_depth,
            },
        }


SCENARIOS: Dict[str, Scenario] = {s.id: s for s in (
    Scenario(
        id='chelyabinsk',
        name='Chelyabinsk Meteor',
        description='Russian meteor airburst - 1,500 injured by shockwave, 7,200 buildings damaged',
        historical=True, year=2013,
        diameter=20, velocity=19, angle=18, density=3300, composition='rocky',
        location=(55.1644, 61.4368, 'Chelyabinsk, Russia'),
    ),
    Scenario(
        id='tunguska',
        name='Tunguska Event',
        description='Siberian forest devastation - 2,000 km² flattened, no crater found (airburst)',
        historical=True, year=1908,
        diameter=60, velocity=27, angle=30, density=1800, composition='icy',
        location=(60.8858, 101.8939, 'Tunguska, Siberia'),
    ),
    Scenario(
        id='apophis',
        name='Apophis (99942)',
        description='Near-miss asteroid - will pass closer than satellites on April 13, 2029',
        historical=False,
        diameter=370, velocity=31, angle=45, density=3200, composition='rocky',
    ),
    Scenario(
        id='bennu',
        name='Bennu (101955)',
        description='OSIRIS-REx target - 1 in 2,700 chance of impact between 2175-2199',
        historical=False,
        diameter=490, velocity=28, angle=45, density=1190, composition='icy',
    ),
    Scenario(
        id='chicxulub',
        name='Chicxulub Impact',
        description='Dinosaur extinction - 10-15 km asteroid, 180 km crater, 66 million years ago',
        historical=True, year=-66000000,
        diameter=10000, velocity=20, angle=60, density=2600, composition='icy',
        location=(21.3, -89.5, 'Yucatán Peninsula, Mexico'),
    ),
    Scenario(
        id='city_killer',
        name='City Killer (100m)',
        description='Hypothetical 100m urban impact - expected every 10,000 years',
        historical=False,
        diameter=100, velocity=20, angle=45, density=3000, composition='rocky',
        location=(48.8566, 2.3522, 'Paris, France'),
    ),
)}


def get_scenario(scenario_id: str) -> Scenario:
    try:
        return SCENARIOS[scenario_id]
    except KeyError:
        raise ValueError(
            f"Unknown scenario: {scenario_id!r} (available: {', '.join(SCENARIOS)})"
        ) from None
