"""
Core domain models for the impact simulator.

Plain data containers passed between the orbital engines, the impact
pipeline and the casualty/deflection models. Inputs are frozen; the only
mutable objects are the per-run trajectory bodies (Earth, Asteroid).
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Any, Optional, Union
import numpy as np


@dataclass(frozen=True)
class OrbitalElements:
    """
    Keplerian orbital elements at an epoch.

    Angles are in degrees; mean motion in rad/s. Only elliptical orbits
    (0 <= e < 1) are supported.
    """
    semi_major_axis: float  # km
    eccentricity: float
    inclination: float  # deg
    ascending_node: float  # deg, longitude of ascending node
    argument_of_periapsis: float  # deg
    mean_anomaly: float  # deg, at epoch
    mean_motion: float  # rad/s
    epoch: float  # Julian date

    def __post_init__(self):
        if self.semi_major_axis <= 0:
            raise ValueError(f"semi_major_axis must be positive, got {self.semi_major_axis}")
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError(
                f"Only elliptical orbits are supported (0 <= e < 1), got e={self.eccentricity}"
            )


@dataclass
class StateVector:
    """Cartesian position (km) and velocity (km/s)."""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float)
        self.velocity = np.asarray(self.velocity, dtype=float)

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position))

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


@dataclass(frozen=True)
class ImpactLocation:
    """Impact point. Ocean/water depth come from the terrain service."""
    lat: float = 0.0
    lon: float = 0.0
    is_ocean: bool = False
    water_depth: Optional[float] = None  # m


@dataclass(frozen=True)
class ImpactParameters:
    """
    Caller-validated impact inputs.

    Attributes:
        diameter: Asteroid diameter (m)
        velocity: Entry velocity (m/s)
        angle: Impact angle from horizontal (degrees, 0-90)
        density: Asteroid bulk density (kg/m^3)
        location: Impact point
    """
    diameter: float
    velocity: float
    angle: float = 45.0
    density: float = 3000.0
    location: ImpactLocation = field(default_factory=ImpactLocation)


@dataclass(frozen=True)
class AsteroidProperties:
    diameter: float  # m
    mass: float  # kg
    entry_velocity: float  # m/s
    impact_velocity: float  # m/s
    density: float  # kg/m^3
    angle: float  # deg


@dataclass(frozen=True)
class Energy:
    joules: float
    tnt_tons: float
    megatons: float


@dataclass(frozen=True)
class Crater:
    diameter: float  # m
    depth: float  # m
    volume: float  # m^3


@dataclass(frozen=True)
class SeismicEffects:
    magnitude: float
    radius_km: float
    description: str


@dataclass(frozen=True)
class BlastZones:
    """Blast radii in metres."""
    fireball: float
    thermal: float
    airblast: float
    radiation: float


@dataclass(frozen=True)
class TsunamiEffects:
    wave_height: float  # m
    wavelength: float  # m
    propagation_speed: float  # m/s
    speed_kmh: float
    affected_radius_km: float


@dataclass(frozen=True)
class CityRecord:
    """A city modelled as a disc of uniform population density."""
    name: str
    lat: float
    lon: float
    population: int
    radius: float  # km

    @property
    def area(self) -> float:
        return np.pi * self.radius ** 2

    @property
    def density(self) -> float:
        """People per km^2."""
        return self.population / self.area


@dataclass(frozen=True)
class AffectedCity:
    name: str
    distance: int  # km, rounded
    population: int
    affected_population: int
    overlap_factor: float


@dataclass(frozen=True)
class ZoneCasualties:
    name: str
    radius: float  # km
    area: float  # km^2
    mortality_rate: float
    description: str
    population_affected: int
    casualties: int
    injured: int
    affected_cities: List[AffectedCity] = field(default_factory=list)
    used_fallback: bool = False


@dataclass(frozen=True)
class CasualtyEstimate:
    estimated_casualties: int
    estimated_injured: int
    total_affected: int
    severity: str
    zones: Dict[str, ZoneCasualties]
    affected_cities: List[AffectedCity]
    note: str


@dataclass(frozen=True)
class ImpactResult:
    """
    Complete output of one impact simulation.

    crater is None for ocean impacts; tsunami is None for land impacts.
    """
    asteroid: AsteroidProperties
    energy: Energy
    crater: Optional[Crater]
    seismic: SeismicEffects
    blast: BlastZones
    tsunami: Optional[TsunamiEffects]
    casualties: Optional[CasualtyEstimate]
    location: ImpactLocation

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [
            f"Energy: {self.energy.megatons:.3f} Mt TNT ({self.energy.joules:.3e} J)",
            f"Impact velocity: {self.asteroid.impact_velocity / 1000:.2f} km/s",
        ]
        if self.crater is not None:
            lines.append(f"Crater: {self.crater.diameter:.0f} m wide, {self.crater.depth:.0f} m deep")
        lines.append(f"Seismic magnitude: {self.seismic.magnitude:.2f} ({self.seismic.description})")
        lines.append(
            f"Blast radii (m): fireball {self.blast.fireball:.0f}, thermal {self.blast.thermal:.0f}, "
            f"airblast {self.blast.airblast:.0f}, radiation {self.blast.radiation:.0f}"
        )
        if self.tsunami is not None:
            lines.append(
                f"Tsunami: {self.tsunami.wave_height:.1f} m wave, "
                f"{self.tsunami.affected_radius_km:.0f} km reach"
            )
        if self.casualties is not None:
            lines.append(
                f"Casualties: {self.casualties.estimated_casualties:,} dead, "
                f"{self.casualties.estimated_injured:,} injured ({self.casualties.severity})"
            )
        return "\n".join(lines)


@dataclass(frozen=True)
class DeflectionScenario:
    method: str  # 'kinetic', 'gravity' or 'nuclear'
    asteroid_mass: float  # kg
    warning_time_days: float
    miss_distance_km: float


@dataclass(frozen=True)
class DeflectionResult:
    method: str
    description: str
    required_delta_v: float  # m/s
    impactor_mass: float  # kg
    feasible: bool
    success_probability: float
    warning_time_needed: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Trajectory outcomes. "No collision" is a value, not an exception.

@dataclass(frozen=True)
class CollisionInfo:
    latitude: float  # deg
    longitude: float  # deg, wrapped to [-180, 180)
    impact_angle: float  # deg from local horizontal
    time_to_impact: float  # s since run start
    impact_speed: float  # km/s


@dataclass(frozen=True)
class Collision:
    info: CollisionInfo
    steps: int


@dataclass(frozen=True)
class NoCollision:
    steps: int
    elapsed: float  # s
    cancelled: bool = False


@dataclass(frozen=True)
class Escaped:
    steps: int
    elapsed: float  # s
    distance_km: float


TrajectoryOutcome = Union[Collision, NoCollision, Escaped]
