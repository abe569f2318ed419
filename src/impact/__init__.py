"""Impact effects, casualty estimation and deflection feasibility."""

from .effects import ImpactEffectsCalculator
from .casualties import CasualtyEstimator
from .deflection import DeflectionFeasibilityModel
from .simulation import simulate_impact, simulate_deflection

__all__ = [
    'ImpactEffectsCalculator',
    'CasualtyEstimator',
    'DeflectionFeasibilityModel',
    'simulate_impact',
    'simulate_deflection',
]
