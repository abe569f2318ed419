#!/usr/bin/env python3
"""
Asteroid Impact Simulator command-line driver.

Runs impact, deflection, trajectory and orbit computations and exports
the results.
"""

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from core.config import load_config, configure_logging
from core.models import Collision, Escaped, ImpactParameters, ImpactLocation, OrbitalElements
from impact.scenarios import SCENARIOS, get_scenario
from impact.simulation import simulate_impact, simulate_deflection
from orbits.ephemeris import datetime_to_julian, earth_heliocentric_position
from orbits.integrator import create_simulation
from orbits.kepler import mean_motion, state_from_elements
from utils.export import ResultExporter
from validation.monte_carlo import ImpactMonteCarlo


def _banner(title: str):
    print("=" * 70)
    print(title)
    print("=" * 70)


def _impact_request(args) -> dict:
    return {
        'diameter': args.diameter,
        'velocity': args.velocity * 1000.0,
        'angle': args.angle,
        'density': args.density,
        'impactLocation': {
            'lat': args.lat,
            'lon': args.lon,
            'isOcean': args.ocean,
            'waterDepth': args.water_depth,
        },
    }


def cmd_impact(args, config, output_dir: Path):
    result = simulate_impact(_impact_request(args), config=config)
    _banner("IMPACT SIMULATION")
    print(result.summary())
    ResultExporter.to_json(result, str(output_dir / 'impact_result.json'))


def cmd_scenario(args, config, output_dir: Path):
    if args.list:
        for scenario in SCENARIOS.values():
            print(f"{scenario.id:<12} {scenario.name:<22} {scenario.description}")
        return

    scenario = get_scenario(args.id)
    result = simulate_impact(scenario.to_request(), config=config)
    _banner(f"SCENARIO: {scenario.name}")
    print(result.summary())
    ResultExporter.to_json(result, str(output_dir / f'{scenario.id}_result.json'))


def cmd_deflection(args, config, output_dir: Path):
    response = simulate_deflection({
        'asteroidDiameter': args.diameter,
        'asteroidDensity': args.density,
        'warningTimeDays': args.warning_days,
        'missDistanceKm': args.miss_distance,
        'method': args.method,
    })
    result = response['deflection']

    _banner("DEFLECTION ASSESSMENT")
    print(f"Method: {result.description}")
    print(f"Asteroid mass: {response['asteroid_mass']:.3e} kg")
    print(f"Required delta-v: {result.required_delta_v:.4g} m/s")
    print(f"Impactor mass: {result.impactor_mass:.4g} kg")
    print(f"Feasible: {result.feasible}")
    print(f"Success probability: {result.success_probability:.0%}")
    ResultExporter.to_json(result, str(output_dir / 'deflection_result.json'))


def cmd_trajectory(args, config, output_dir: Path):
    sim = create_simulation(
        args.radius_km, args.density,
        np.array(args.position, dtype=float), np.array(args.velocity, dtype=float),
        config=config,
    )

    def on_progress(percent, asteroid):
        print(f"  {percent:5.1f}%  distance {np.linalg.norm(asteroid.position):,.0f} km")

    outcome = sim.run(max_steps=args.max_steps, on_progress=on_progress)

    _banner("TRAJECTORY")
    if isinstance(outcome, Collision):
        info = outcome.info
        print(f"Impact after {info.time_to_impact:.0f} s at lat {info.latitude:.3f}, "
              f"lon {info.longitude:.3f}, angle {info.impact_angle:.1f} deg, "
              f"speed {info.impact_speed:.2f} km/s")
    elif isinstance(outcome, Escaped):
        print(f"Asteroid escaped after {outcome.steps} steps ({outcome.distance_km:,.0f} km)")
    else:
        print(f"No collision within {outcome.steps} steps ({outcome.elapsed:.0f} s)")

    ResultExporter.trajectory_to_csv(sim.asteroid.positions, str(output_dir / 'trajectory.csv'),
                                     dt=config.dt)


def cmd_orbit(args, config, output_dir: Path):
    if args.date:
        when = datetime.fromisoformat(args.date)
    else:
        when = datetime.now(timezone.utc)
    jd = datetime_to_julian(when)

    a = args.a
    elements = OrbitalElements(
        semi_major_axis=a,
        eccentricity=args.e,
        inclination=args.i,
        ascending_node=args.node,
        argument_of_periapsis=args.peri,
        mean_anomaly=args.m0,
        mean_motion=mean_motion(a),
        epoch=args.epoch if args.epoch is not None else jd,
    )

    position = state_from_elements(elements, jd, tolerance=config.kepler_tolerance,
                                   max_iterations=config.kepler_max_iterations)
    earth = earth_heliocentric_position(jd)

    _banner(f"ORBIT @ JD {jd:.5f}")
    print(f"Object position: [{position[0]:,.0f}, {position[1]:,.0f}, {position[2]:,.0f}] km")
    print(f"Earth position:  [{earth[0]:,.0f}, {earth[1]:,.0f}, {earth[2]:,.0f}] km")
    print(f"Object-Earth distance: {np.linalg.norm(position - earth):,.0f} km")


def cmd_montecarlo(args, config, output_dir: Path):
    params = ImpactParameters(
        diameter=args.diameter,
        velocity=args.velocity * 1000.0,
        angle=args.angle,
        density=args.density,
        location=ImpactLocation(lat=args.lat, lon=args.lon, is_ocean=args.ocean,
                                water_depth=args.water_depth),
    )
    analysis = ImpactMonteCarlo(n_runs=args.n_runs, seed=args.seed)
    report = analysis.run_analysis(params)
    analysis.print_report(report)

    with open(output_dir / 'monte_carlo_report.json', 'w') as f:
        json.dump(report, f, indent=2)


def _add_impact_args(parser):
    parser.add_argument('--diameter', type=float, default=100.0, help='Diameter (m)')
    parser.add_argument('--velocity', type=float, default=20.0, help='Entry velocity (km/s)')
    parser.add_argument('--angle', type=float, default=45.0, help='Impact angle (deg)')
    parser.add_argument('--density', type=float, default=3000.0, help='Density (kg/m^3)')
    parser.add_argument('--lat', type=float, default=48.8566, help='Impact latitude')
    parser.add_argument('--lon', type=float, default=2.3522, help='Impact longitude')
    parser.add_argument('--ocean', action='store_true', help='Ocean impact')
    parser.add_argument('--water-depth', type=float, default=None, help='Water depth (m)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Asteroid Impact Simulator')
    parser.add_argument('--config', type=str, default=None, help='YAML config file')
    parser.add_argument('--log-level', type=str, default=None, help='Logging level')
    parser.add_argument('--output-dir', type=str, default='outputs', help='Output directory')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('impact', help='Simulate an impact')
    _add_impact_args(p)
    p.set_defaults(func=cmd_impact)

    p = sub.add_parser('scenario', help='Run a predefined scenario')
    p.add_argument('id', nargs='?', default='city_killer', help='Scenario id')
    p.add_argument('--list', action='store_true', help='List scenarios')
    p.set_defaults(func=cmd_scenario)

    p = sub.add_parser('deflection', help='Assess a deflection strategy')
    p.add_argument('--diameter', type=float, default=140.0, help='Diameter (m)')
    p.add_argument('--density', type=float, default=3000.0, help='Density (kg/m^3)')
    p.add_argument('--warning-days', type=float, default=3650.0, help='Warning time (days)')
    p.add_argument('--miss-distance', type=float, default=6400.0, help='Miss distance (km)')
    p.add_argument('--method', choices=['kinetic', 'gravity', 'nuclear'], default='kinetic')
    p.set_defaults(func=cmd_deflection)

    p = sub.add_parser('trajectory', help='Integrate an Earth approach')
    p.add_argument('--radius-km', type=float, default=0.05, help='Asteroid radius (km)')
    p.add_argument('--density', type=float, default=3000.0, help='Density (kg/m^3)')
    p.add_argument('--position', type=float, nargs=3, default=[50000.0, 10000.0, 5000.0],
                   help='Initial position (km)')
    p.add_argument('--velocity', type=float, nargs=3, default=[-8.0, -1.5, -0.8],
                   help='Initial velocity (km/s)')
    p.add_argument('--max-steps', type=int, default=None, help='Step budget')
    p.set_defaults(func=cmd_trajectory)

    p = sub.add_parser('orbit', help='Propagate orbital elements')
    p.add_argument('--a', type=float, default=1.38e8, help='Semi-major axis (km)')
    p.add_argument('--e', type=float, default=0.19, help='Eccentricity')
    p.add_argument('--i', type=float, default=3.3, help='Inclination (deg)')
    p.add_argument('--node', type=float, default=204.0, help='Ascending node (deg)')
    p.add_argument('--peri', type=float, default=126.7, help='Argument of periapsis (deg)')
    p.add_argument('--m0', type=float, default=0.0, help='Mean anomaly at epoch (deg)')
    p.add_argument('--epoch', type=float, default=None, help='Epoch (JD)')
    p.add_argument('--date', type=str, default=None, help='Query time (ISO 8601)')
    p.set_defaults(func=cmd_orbit)

    p = sub.add_parser('montecarlo', help='Monte Carlo sensitivity analysis')
    _add_impact_args(p)
    p.add_argument('--n-runs', type=int, default=200, help='Number of samples')
    p.add_argument('--seed', type=int, default=42, help='Random seed')
    p.set_defaults(func=cmd_montecarlo)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    configure_logging(args.log_level or config.log_level)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    args.func(args, config, output_dir)


if __name__ == '__main__':
    main()
