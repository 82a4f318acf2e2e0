"""Static plots of the reported series (throughput, power, channel states)."""

from __future__ import annotations

import os
from typing import Dict, List, Mapping

from matplotlib.figure import Figure

from linkstats.metrics import TimeSeries

STATE_COLORS = {
    "idle": "#1B998B",
    "busy": "#F18F01",
    "tx": "#C73E1D",
    "rx": "#2E86AB",
}


def _figure(title: str, xlabel: str, ylabel: str):
    fig = Figure(figsize=(6, 4), dpi=100)
    ax = fig.add_subplot(111)
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)
    return fig, ax


def plot_series(series: List[TimeSeries], path: str, title: str, ylabel: str, colors: Mapping[str, str] | None = None) -> str:
    fig, ax = _figure(title, "Time (seconds)", ylabel)
    for s in series:
        ax.plot(s.times(), s.values(), label=s.title, color=(colors or {}).get(s.name))
    if len(series) > 1:
        ax.legend(loc="best", fontsize=8)
    fig.tight_layout()
    fig.savefig(path)
    return path


def write_plots(series: Mapping[str, TimeSeries], output_name: str, out_dir: str = "results", fmt: str = "png") -> Dict[str, str]:
    """Write the throughput, power and channel state figures; returns their paths."""
    os.makedirs(out_dir, exist_ok=True)
    return {
        "throughput": plot_series(
            [series["throughput"]],
            os.path.join(out_dir, f"throughput-{output_name}.{fmt}"),
            "Throughput (AP to STA) vs time",
            "Throughput (Mb/s)",
        ),
        "power": plot_series(
            [series["power"]],
            os.path.join(out_dir, f"power-{output_name}.{fmt}"),
            "Average radiated power (AP to STA) vs time",
            "Power (mW)",
        ),
        "state": plot_series(
            [series[name] for name in ("idle", "busy", "tx", "rx")],
            os.path.join(out_dir, f"state-{output_name}.{fmt}"),
            "PHY state vs time",
            "Time in state (s x 100)",
            STATE_COLORS,
        ),
    }
