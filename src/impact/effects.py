"""
Impact effects pipeline.

Deterministic chain of empirical scaling laws:
mass -> impact velocity -> energy -> crater -> seismic -> blast -> tsunami,
with blast radii optionally fed to the casualty estimator.

These are simplified, order-of-magnitude relations for education. The
coefficients are kept literal so results match the reference scenarios.

Reference: Collins, G. S., Melosh, H. J., Marcus, R. A. (2005).
           "Earth Impact Effects Program." Meteoritics & Planetary Science 40(6).
"""

import numpy as np
import logging

from core.config import SimulationConfig, DEFAULT_CONFIG
from core.constants import (
    ESCAPE_VELOCITY, EARTH_SURFACE_GRAVITY, JOULES_PER_TON_TNT,
    TONS_PER_MEGATON
)
from core.errors import ComputationError
from core.models import (
    ImpactParameters, ImpactResult, AsteroidProperties, Energy, Crater,
    SeismicEffects, BlastZones, TsunamiEffects
)

logger = logging.getLogger(__name__)

# Transient crater coefficient for d in metres and v in km/s
CRATER_COEFFICIENT = 15.6
CRATER_DIAMETER_EXPONENT = 0.78
CRATER_VELOCITY_EXPONENT = 0.44
CRATER_ANGLE_EXPONENT = 0.33
CRATER_DEPTH_RATIO = 5.0

# Seismic magnitude M = a*log10(E) - b
SEISMIC_SLOPE = 0.67
SEISMIC_OFFSET = 5.87

# Blast radii (m) = coefficient * megatons**exponent
BLAST_SCALING = {
    'fireball': (40.0, 0.33),
    'thermal': (500.0, 0.41),
    'airblast': (350.0, 0.33),
    'radiation': (200.0, 0.41),
}

TSUNAMI_HEIGHT_COEFFICIENT = 10.0  # m per sqrt(Mt)
TSUNAMI_WAVELENGTH_RATIO = 50.0  # wavelength / water depth
TSUNAMI_RADIUS_COEFFICIENT = 100.0  # km per Mt

SEISMIC_BANDS = [
    (4.0, 'Minor - Often felt, but rarely causes damage'),
    (5.0, 'Light - Noticeable shaking, minor damage'),
    (6.0, 'Moderate - Can cause damage to buildings'),
    (7.0, 'Strong - Major damage in populated areas'),
    (8.0, 'Major - Serious damage over large areas'),
]
SEISMIC_TOP_BAND = 'Great - Catastrophic destruction'


class ImpactEffectsCalculator:
    """
    Converts impact parameters into physical effects.

    Each stage is a pure function; simulate() chains them. A casualty
    estimator, when given, receives the blast radii.
    """

    def __init__(self, casualty_estimator=None, config: SimulationConfig = DEFAULT_CONFIG):
        """
        Args:
            casualty_estimator: Optional CasualtyEstimator fed with blast radii
            config: Simulation config (default water depth)
        """
        self.casualty_estimator = casualty_estimator
        self.config = config

    @staticmethod
    def calculate_mass(diameter: float, density: float) -> float:
        """Mass (kg) of a sphere of given diameter (m) and density (kg/m^3)."""
        radius = diameter / 2.0
        return density * (4.0 / 3.0) * np.pi * radius ** 3

    @staticmethod
    def calculate_impact_velocity(velocity: float, angle: float) -> float:
        """
        Combine entry velocity with Earth's escape velocity.

        The vertical component is summed in quadrature with the escape
        velocity, then recombined with the horizontal component.

        Args:
            velocity: Entry velocity (m/s)
            angle: Impact angle from horizontal (degrees)

        Returns:
            Impact velocity (m/s)
        """
        angle_rad = np.deg2rad(angle)
        vertical = velocity * np.sin(angle_rad)
        horizontal = velocity * np.cos(angle_rad)

        final_vertical = np.sqrt(vertical ** 2 + ESCAPE_VELOCITY ** 2)
        return float(np.sqrt(final_vertical ** 2 + horizontal ** 2))

    @staticmethod
    def calculate_energy(mass: float, velocity: float) -> Energy:
        """Kinetic energy with TNT equivalents."""
        joules = 0.5 * mass * velocity ** 2
        tnt_tons = joules / JOULES_PER_TON_TNT
        return Energy(joules=joules, tnt_tons=tnt_tons, megatons=tnt_tons / TONS_PER_MEGATON)

    @staticmethod
    def calculate_crater(diameter: float, impact_velocity: float, angle: float) -> Crater:
        """
        Crater dimensions from projectile size, speed and angle.

        Args:
            diameter: Projectile diameter (m)
            impact_velocity: Impact velocity (m/s)
            angle: Impact angle from horizontal (degrees)

        Returns:
            Crater (diameter and depth in m, volume in m^3)
        """
        v_kms = impact_velocity / 1000.0
        sin_angle = max(np.sin(np.deg2rad(angle)), 0.0)

        crater_diameter = (CRATER_COEFFICIENT
                           * diameter ** CRATER_DIAMETER_EXPONENT
                           * v_kms ** CRATER_VELOCITY_EXPONENT
                           * sin_angle ** CRATER_ANGLE_EXPONENT)
        depth = crater_diameter / CRATER_DEPTH_RATIO
        volume = (np.pi / 3.0) * (crater_diameter / 2.0) ** 2 * depth

        return Crater(diameter=float(crater_diameter), depth=float(depth), volume=float(volume))

    @staticmethod
    def calculate_seismic(energy_joules: float) -> SeismicEffects:
        """Richter-equivalent magnitude (floored at 0) and felt radius."""
        magnitude = max(0.0, SEISMIC_SLOPE * np.log10(energy_joules) - SEISMIC_OFFSET)

        description = SEISMIC_TOP_BAND
        for upper, label in SEISMIC_BANDS:
            if magnitude < upper:
                description = label
                break

        return SeismicEffects(
            magnitude=float(magnitude),
            radius_km=float(10.0 ** (magnitude - 1.0)),
            description=description,
        )

    @staticmethod
    def calculate_blast(megatons: float) -> BlastZones:
        """Blast zone radii (m). Zones are independent power laws."""
        radii = {name: coef * megatons ** exponent
                 for name, (coef, exponent) in BLAST_SCALING.items()}
        return BlastZones(**radii)

    @staticmethod
    def calculate_tsunami(megatons: float, water_depth: float) -> TsunamiEffects:
        """
        Tsunami characteristics for an ocean impact.

        Args:
            megatons: Impact energy (Mt TNT)
            water_depth: Ocean depth at the impact point (m)
        """
        speed = np.sqrt(EARTH_SURFACE_GRAVITY * water_depth)
        return TsunamiEffects(
            wave_height=float(np.sqrt(megatons) * TSUNAMI_HEIGHT_COEFFICIENT),
            wavelength=float(water_depth * TSUNAMI_WAVELENGTH_RATIO),
            propagation_speed=float(speed),
            speed_kmh=float(speed * 3.6),
            affected_radius_km=float(megatons * TSUNAMI_RADIUS_COEFFICIENT),
        )

    def simulate(self, params: ImpactParameters) -> ImpactResult:
        """
        Run the full pipeline for one impact.

        Energy uses the entry velocity; the escape-velocity-corrected
        impact velocity drives crater scaling and is reported alongside.

        Raises:
            ComputationError: If the pipeline produces non-finite values
        """
        location = params.location

        mass = self.calculate_mass(params.diameter, params.density)
        impact_velocity = self.calculate_impact_velocity(params.velocity, params.angle)
        energy = self.calculate_energy(mass, params.velocity)

        if not (np.isfinite(energy.joules) and energy.joules > 0):
            raise ComputationError(
                f"Impact energy is not a positive finite number: {energy.joules!r} "
                f"(diameter={params.diameter}, velocity={params.velocity})"
            )

        crater = None
        if not location.is_ocean:
            crater = self.calculate_crater(params.diameter, impact_velocity, params.angle)

        seismic = self.calculate_seismic(energy.joules)
        blast = self.calculate_blast(energy.megatons)

        tsunami = None
        if location.is_ocean:
            depth = location.water_depth
            if depth is None:
                depth = self.config.default_water_depth
            tsunami = self.calculate_tsunami(energy.megatons, depth)

        _check_finite(impact_velocity=impact_velocity, magnitude=seismic.magnitude,
                      fireball=blast.fireball, thermal=blast.thermal,
                      crater=crater.diameter if crater else 0.0,
                      tsunami=tsunami.wave_height if tsunami else 0.0)

        logger.debug(
            f"Impact d={params.diameter} m v={params.velocity} m/s: "
            f"{energy.megatons:.4g} Mt, M={seismic.magnitude:.2f}, "
            f"thermal radius {blast.thermal:.0f} m"
        )

        casualties = None
        if self.casualty_estimator is not None:
            casualties = self.casualty_estimator.estimate(blast, location)

        return ImpactResult(
            asteroid=AsteroidProperties(
                diameter=params.diameter,
                mass=float(mass),
                entry_velocity=params.velocity,
                impact_velocity=impact_velocity,
                density=params.density,
                angle=params.angle,
            ),
            energy=energy,
            crater=crater,
            seismic=seismic,
            blast=blast,
            tsunami=tsunami,
            casualties=casualties,
            location=location,
        )


def _check_finite(**values):
    bad = {name: v for name, v in values.items() if not np.isfinite(v)}
    if bad:
        raise ComputationError(f"Non-finite impact quantities: {bad}")
