"""Experiment execution."""

from linkstats.experiments.runner import ExperimentResult, ExperimentRunner

__all__ = ["ExperimentResult", "ExperimentRunner"]
