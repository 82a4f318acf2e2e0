"""Utility helpers for link statistics experiments."""

from .random import reseed, rng
from .stats import ExperimentSummary, compute_summary_stats, interval_sum

__all__ = [
    "ExperimentSummary",
    "compute_summary_stats",
    "interval_sum",
    "reseed",
    "rng",
]
