"""
Newtonian two-body trajectory integration with collision detection.

One rotating Earth at the origin and one point-mass asteroid under Earth's
gravity only. Integration is semi-implicit Euler with a position
correction term, adequate for approach timescales under a day.

The run loop is a generator so a single-threaded host can resume it at
its own pace; run() drives it to completion for callers that do not care.
"""

from typing import Callable, Generator, List, Optional
import numpy as np
import logging

from core.config import SimulationConfig, DEFAULT_CONFIG
from core.constants import EARTH_MASS, EARTH_RADIUS_KM, EARTH_OMEGA, G_KM
from core.errors import ComputationError
from core.models import (
    CollisionInfo, Collision, NoCollision, Escaped, TrajectoryOutcome
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, 'Asteroid'], None]


class Earth:
    """
    The single massive body. Fixed at the origin; only its rotation
    angle changes during a run.
    """

    def __init__(self, position: np.ndarray = None, radius_km: float = EARTH_RADIUS_KM,
                 mass: float = EARTH_MASS, omega: float = EARTH_OMEGA):
        self.position = np.zeros(3) if position is None else np.asarray(position, dtype=float)
        self.radius_km = radius_km
        self.mass = mass
        self.omega = omega  # rad/s, sidereal
        self.rotation = 0.0  # rad

    def update_rotation(self, dt: float):
        self.rotation = (self.rotation + self.omega * dt) % (2 * np.pi)


class Asteroid:
    """Point-mass asteroid with an append-only trajectory history."""

    def __init__(self, position: np.ndarray, velocity: np.ndarray,
                 radius_km: float = 1.0, mass: float = 1e12):
        self.position = np.array(position, dtype=float)
        self.velocity = np.array(velocity, dtype=float)
        self.acceleration = np.zeros(3)
        self.radius_km = radius_km
        self.mass = mass  # kg
        self.positions: List[np.ndarray] = [self.position.copy()]

    def update_acceleration(self, earth: Earth):
        """Gravitational acceleration toward Earth (km/s^2)."""
        r_vec = earth.position - self.position
        r_mag = np.linalg.norm(r_vec)

        if r_mag > 0:
            self.acceleration = (G_KM * earth.mass / r_mag ** 3) * r_vec
        else:
            self.acceleration = np.zeros(3)

    def apply_force(self, force: np.ndarray):
        """
        Add an external force to the current acceleration.

        Args:
            force: Force vector in newtons
        """
        # N / kg = m/s^2 -> km/s^2
        self.acceleration = self.acceleration + np.asarray(force, dtype=float) / self.mass / 1000.0

    def distance_to(self, point: np.ndarray) -> float:
        return float(np.linalg.norm(self.position - point))


class TrajectorySimulation:
    """
    Two-body trajectory integrator.

    Each instance owns its Earth and Asteroid exclusively; independent
    instances may run in parallel.

    Example:
        >>> sim = create_simulation(0.05, 3000, [0, 0, 20000], [0, 0, -15])
        >>> outcome = sim.run()
        >>> isinstance(outcome, Collision)
        True
    """

    def __init__(self, earth: Earth, asteroid: Asteroid,
                 config: SimulationConfig = DEFAULT_CONFIG):
        self.earth = earth
        self.asteroid = asteroid
        self.config = config
        self.total_time = 0.0
        self.steps_taken = 0
        self.collision_info: Optional[CollisionInfo] = None

    @property
    def collision_detected(self) -> bool:
        return self.collision_info is not None

    def step(self, dt: float = None, thrust_force: np.ndarray = None) -> Optional[CollisionInfo]:
        """
        Advance the simulation by one step.

        Args:
            dt: Time step (seconds), defaults to config.dt
            thrust_force: Optional force on the asteroid (newtons)

        Returns:
            CollisionInfo if this step ends in contact with Earth, else None
        """
        dt = self.config.dt if dt is None else dt
        asteroid = self.asteroid

        asteroid.update_acceleration(self.earth)
        if thrust_force is not None:
            asteroid.apply_force(thrust_force)

        a = asteroid.acceleration
        asteroid.velocity = asteroid.velocity + a * dt
        asteroid.position = asteroid.position + asteroid.velocity * dt + 0.5 * a * dt ** 2

        if not (np.all(np.isfinite(asteroid.position)) and np.all(np.isfinite(asteroid.velocity))):
            raise ComputationError(
                f"Non-finite asteroid state after {self.steps_taken + 1} steps "
                f"(t={self.total_time + dt:.1f} s)"
            )

        asteroid.positions.append(asteroid.position.copy())
        self.earth.update_rotation(dt)
        self.total_time += dt
        self.steps_taken += 1

        return self.check_collision()

    def check_collision(self) -> Optional[CollisionInfo]:
        """
        Test for contact with Earth (boundary inclusive).

        Returns:
            CollisionInfo on contact, else None
        """
        asteroid = self.asteroid
        distance = asteroid.distance_to(self.earth.position)

        if distance > self.earth.radius_km + asteroid.radius_km:
            return None

        r = asteroid.position - self.earth.position
        r_mag = np.linalg.norm(r)
        v_mag = np.linalg.norm(asteroid.velocity)

        if r_mag > 0 and v_mag > 0:
            cos_angle = np.clip(np.dot(r, asteroid.velocity) / (r_mag * v_mag), -1.0, 1.0)
            impact_angle = np.rad2deg(np.arccos(cos_angle)) - 90.0
        else:
            # No direction of travel: treat as a vertical drop
            impact_angle = 90.0

        if r_mag > 0:
            latitude = 90.0 - np.rad2deg(np.arccos(np.clip(r[2] / r_mag, -1.0, 1.0)))
        else:
            latitude = 0.0
        longitude = _wrap_longitude(
            np.rad2deg(np.arctan2(r[1], r[0])) - np.rad2deg(self.earth.rotation)
        )

        self.collision_info = CollisionInfo(
            latitude=float(latitude),
            longitude=float(longitude),
            impact_angle=float(impact_angle),
            time_to_impact=self.total_time,
            impact_speed=float(v_mag),
        )
        return self.collision_info

    def iter_run(self, max_steps: int = None, dt: float = None,
                 on_progress: ProgressCallback = None
                 ) -> Generator[int, None, TrajectoryOutcome]:
        """
        Step until collision, escape or step budget exhaustion.

        Yields the step count every config.yield_interval steps so the
        caller can interleave other work; closing the generator cancels
        the run. The outcome is the generator's return value.

        Args:
            max_steps: Step budget, defaults to config.max_steps
            dt: Time step (seconds), defaults to config.dt
            on_progress: Called every config.progress_interval steps with
                (percent_of_budget, asteroid)
        """
        max_steps = self.config.max_steps if max_steps is None else max_steps
        dt = self.config.dt if dt is None else dt
        cfg = self.config
        step_count = 0

        while step_count < max_steps:
            info = self.step(dt)
            step_count += 1

            if info is not None:
                logger.info(
                    f"Collision after {step_count} steps (t={self.total_time:.0f} s) at "
                    f"lat={info.latitude:.2f}, lon={info.longitude:.2f}, "
                    f"angle={info.impact_angle:.1f} deg"
                )
                return Collision(info=info, steps=step_count)

            if on_progress is not None and step_count % cfg.progress_interval == 0:
                on_progress(step_count / max_steps * 100.0, self.asteroid)

            if step_count > cfg.escape_check_after:
                distance = self.asteroid.distance_to(self.earth.position)
                if distance > cfg.escape_distance_km:
                    logger.info(f"Asteroid escaped after {step_count} steps ({distance:.0f} km)")
                    return Escaped(steps=step_count, elapsed=self.total_time,
                                   distance_km=distance)

            if step_count % cfg.yield_interval == 0:
                yield step_count

        logger.info(f"No collision within {step_count} steps (t={self.total_time:.0f} s)")
        return NoCollision(steps=step_count, elapsed=self.total_time)

    def run(self, max_steps: int = None, dt: float = None,
            on_progress: ProgressCallback = None,
            should_cancel: Callable[[], bool] = None) -> TrajectoryOutcome:
        """
        Drive iter_run to completion.

        Args:
            max_steps: Step budget, defaults to config.max_steps
            dt: Time step (seconds), defaults to config.dt
            on_progress: Progress callback (percent, asteroid)
            should_cancel: Polled at each suspension point; returning True
                stops the run with a cancelled NoCollision

        Returns:
            Collision, NoCollision or Escaped
        """
        runner = self.iter_run(max_steps, dt, on_progress)
        while True:
            try:
                next(runner)
            except StopIteration as stop:
                return stop.value

            if should_cancel is not None and should_cancel():
                runner.close()
                logger.info(f"Run cancelled after {self.steps_taken} steps")
                return NoCollision(steps=self.steps_taken, elapsed=self.total_time,
                                   cancelled=True)

    def reset(self):
        """Clear run bookkeeping. Body states are left untouched."""
        self.total_time = 0.0
        self.steps_taken = 0
        self.collision_info = None


def create_simulation(radius_km: float, density: float, position: np.ndarray,
                      velocity: np.ndarray,
                      config: SimulationConfig = DEFAULT_CONFIG) -> TrajectorySimulation:
    """
    Build a simulation from asteroid size and initial state.

    Args:
        radius_km: Asteroid radius (km)
        density: Asteroid density (kg/m^3)
        position: Initial position relative to Earth's centre (km)
        velocity: Initial velocity (km/s)

    Returns:
        TrajectorySimulation with a fresh Earth
    """
    radius_m = radius_km * 1000.0
    mass = density * (4.0 / 3.0) * np.pi * radius_m ** 3

    asteroid = Asteroid(position, velocity, radius_km=radius_km, mass=mass)
    return TrajectorySimulation(Earth(), asteroid, config=config)


def _wrap_longitude(lon_deg: float) -> float:
    """Wrap longitude to [-180, 180)."""
    return (lon_deg + 180.0) % 360.0 - 180.0
