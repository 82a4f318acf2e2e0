"""Statistical helper functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import numpy as np

from linkstats.metrics import TimeSeries


@dataclass
class ExperimentSummary:
    """Summary statistics for a completed experiment."""
    scenario: str
    samples: int
    mean_throughput_mbps: float
    peak_throughput_mbps: float
    mean_radiated_power: float
    mean_idle: float
    mean_busy: float
    mean_tx: float
    mean_rx: float
    busy_time_s: float


def _mean(series: TimeSeries) -> float:
    values = series.values()
    return float(values.mean()) if values.size else 0.0


def compute_summary_stats(series: Mapping[str, TimeSeries], scenario_name: str, busy_time_s: float = 0.0) -> ExperimentSummary:
    """Reduce the six reported series to per-run means."""
    throughput = series["throughput"].values()
    return ExperimentSummary(
        scenario=scenario_name,
        samples=len(series["throughput"]),
        mean_throughput_mbps=float(throughput.mean()) if throughput.size else 0.0,
        peak_throughput_mbps=float(throughput.max()) if throughput.size else 0.0,
        mean_radiated_power=_mean(series["power"]),
        mean_idle=_mean(series["idle"]),
        mean_busy=_mean(series["busy"]),
        mean_tx=_mean(series["tx"]),
        mean_rx=_mean(series["rx"]),
        busy_time_s=busy_time_s,
    )


def interval_sum(series: TimeSeries) -> float:
    """Total seconds represented by a channel series (samples are seconds x 100)."""
    return float(np.sum(series.values()) / 100.0)


__all__ = ["compute_summary_stats", "interval_sum", "ExperimentSummary"]
