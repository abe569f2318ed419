"""
Monte Carlo sensitivity analysis for the impact pipeline.

Asteroid properties are rarely known to better than tens of percent.
This module perturbs diameter, velocity, density and angle and reports
the spread of the resulting effects.
"""

from dataclasses import replace
from typing import Dict, List, Any
import numpy as np
import pandas as pd
from tqdm import tqdm
import logging

from core.errors import ComputationError
from core.models import ImpactParameters
from impact.casualties import CasualtyEstimator
from impact.effects import ImpactEffectsCalculator

logger = logging.getLogger(__name__)

DEFAULT_PERTURBATION = {
    'diameter_multiplier_range': (0.8, 1.2),
    'velocity_multiplier_range': (0.9, 1.1),
    'density_multiplier_range': (0.7, 1.3),
    'angle_offset_range': (-15.0, 15.0),
}


class ImpactMonteCarlo:
    """
    Monte Carlo uncertainty propagation for one nominal impact.

    Each instance uses its own random generator so concurrent analyses
    do not interfere.
    """

    def __init__(self, n_runs: int = 100, seed: int = 42,
                 include_casualties: bool = True, show_progress: bool = True):
        """
        Initialize Monte Carlo analysis.

        Args:
            n_runs: Number of perturbed samples
            seed: Random seed for reproducibility
            include_casualties: Run the casualty estimator per sample
            show_progress: Display a tqdm progress bar
        """
        if n_runs < 1:
            raise ValueError(f"n_runs must be >= 1, got {n_runs}")
        self.n_runs = n_runs
        self.seed = seed
        self.include_casualties = include_casualties
        self.show_progress = show_progress
        self.results: List[Dict[str, Any]] = []

    def run_analysis(self, params: ImpactParameters,
                     perturbation_config: Dict[str, Any] = None) -> Dict[str, Any]:
        """
        Run the analysis.

        Args:
            params: Nominal impact parameters
            perturbation_config: Multiplier/offset ranges, see DEFAULT_PERTURBATION

        Returns:
            Dictionary with statistical results
        """
        config = dict(DEFAULT_PERTURBATION)
        if perturbation_config:
            config.update(perturbation_config)

        rng = np.random.default_rng(self.seed)
        estimator = CasualtyEstimator() if self.include_casualties else None
        calculator = ImpactEffectsCalculator(casualty_estimator=estimator)

        self.results = []
        n_failed = 0

        for i in tqdm(range(self.n_runs), desc="Monte Carlo", disable=not self.show_progress):
            sample = self._perturb(params, rng, config)

            try:
                result = calculator.simulate(sample)
            except ComputationError as e:
                logger.warning(f"Sample {i} failed: {e}")
                n_failed += 1
                continue

            self.results.append({
                'run_id': i,
                'diameter': sample.diameter,
                'velocity': sample.velocity,
                'density': sample.density,
                'angle': sample.angle,
                'megatons': result.energy.megatons,
                'crater_diameter': result.crater.diameter if result.crater else np.nan,
                'magnitude': result.seismic.magnitude,
                'thermal_radius': result.blast.thermal,
                'casualties': result.casualties.estimated_casualties if result.casualties else np.nan,
                'severity': result.casualties.severity if result.casualties else None,
            })

        logger.info(f"Monte Carlo complete: {len(self.results)} samples, {n_failed} failed")
        return self._analyze_results(n_failed)

    @staticmethod
    def _perturb(params: ImpactParameters, rng: np.random.Generator,
                 config: Dict[str, Any]) -> ImpactParameters:
        """Create a perturbed copy of the nominal parameters."""
        angle = params.angle + rng.uniform(*config['angle_offset_range'])

        return replace(
            params,
            diameter=params.diameter * rng.uniform(*config['diameter_multiplier_range']),
            velocity=params.velocity * rng.uniform(*config['velocity_multiplier_range']),
            density=params.density * rng.uniform(*config['density_multiplier_range']),
            angle=float(np.clip(angle, 0.0, 90.0)),
        )

    def _analyze_results(self, n_failed: int) -> Dict[str, Any]:
        """
        Summarize samples.

        Returns:
            Statistical summary
        """
        if not self.results:
            return {'n_runs': self.n_runs, 'n_successful': 0, 'n_failed': n_failed}

        df = pd.DataFrame(self.results)

        report: Dict[str, Any] = {
            'n_runs': self.n_runs,
            'n_successful': len(df),
            'n_failed': n_failed,
        }

        for column in ('megatons', 'crater_diameter', 'magnitude', 'thermal_radius', 'casualties'):
            series = df[column].dropna()
            if series.empty:
                continue
            report[column] = {
                'mean': float(series.mean()),
                'std': float(series.std()) if len(series) > 1 else 0.0,
                'min': float(series.min()),
                'max': float(series.max()),
                'percentile_95': float(series.quantile(0.95)),
            }

        severities = df['severity'].dropna()
        if not severities.empty:
            report['severity_counts'] = {k: int(v) for k, v in severities.value_counts().items()}

        return report

    def to_dataframe(self) -> pd.DataFrame:
        """Per-sample results of the last analysis."""
        return pd.DataFrame(self.results)

    def print_report(self, report: Dict[str, Any]):
        """Print human-readable report."""
        print("\n" + "=" * 60)
        print("MONTE CARLO SENSITIVITY REPORT")
        print("=" * 60)
        print(f"Samples: {report['n_successful']} / {report['n_runs']} "
              f"({report['n_failed']} failed)")

        labels = {
            'megatons': ('Energy', 'Mt'),
            'crater_diameter': ('Crater diameter', 'm'),
            'magnitude': ('Seismic magnitude', ''),
            'thermal_radius': ('Thermal radius', 'm'),
            'casualties': ('Casualties', ''),
        }
        for key, (label, unit) in labels.items():
            if key not in report:
                continue
            stats = report[key]
            print(f"\n{label}:")
            print(f"  Mean: {stats['mean']:.4g} ± {stats['std']:.4g} {unit}")
            print(f"  Range: [{stats['min']:.4g}, {stats['max']:.4g}] {unit}")
            print(f"  95th percentile: {stats['percentile_95']:.4g} {unit}")

        if 'severity_counts' in report:
            print("\nSeverity:")
            for label, count in report['severity_counts'].items():
                print(f"  {label}: {count}")
        print("=" * 60 + "\n")
