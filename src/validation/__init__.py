"""Uncertainty analysis of simulation outputs."""

from .monte_carlo import ImpactMonteCarlo

__all__ = ['ImpactMonteCarlo']
