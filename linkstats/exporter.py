"""Export experiment series to JSON/CSV and gnuplot-style data files."""

from __future__ import annotations

import csv
import dataclasses
import json
import os
from typing import Any, Dict

from linkstats.experiments import ExperimentResult
from linkstats.metrics import SERIES_NAMES
from linkstats.utils import compute_summary_stats


def export_results(result: ExperimentResult, out_dir: str = "results", output_name: str | None = None) -> Dict[str, str]:
    """
    Export the series, totals and summary of a finished run.

    Returns paths of the JSON and CSV files written, plus one ``.dat`` file per
    series keyed by series name.
    """
    os.makedirs(out_dir, exist_ok=True)
    name = output_name or result.name
    summary = compute_summary_stats(result.series, result.name, result.busy_time)

    data: Dict[str, Any] = {
        "scenario": result.name,
        "end_time": result.end_time,
        "stopped_early": result.stopped_early,
        "busy_time_s": result.busy_time,
        "totals_s": dataclasses.asdict(result.totals),
        "summary": dataclasses.asdict(summary),
        "series": {
            key: {"title": s.title, "unit": s.unit, "samples": [list(p) for p in s.samples]}
            for key, s in result.series.items()
        },
    }

    paths: Dict[str, str] = {}
    json_path = os.path.join(out_dir, f"results-{name}.json")
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    paths["json"] = json_path

    csv_path = os.path.join(out_dir, f"results-{name}.csv")
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["time"] + list(SERIES_NAMES))
        throughput = result.series["throughput"].samples
        for index, (timestamp, _) in enumerate(throughput):
            writer.writerow([timestamp] + [result.series[key].samples[index][1] for key in SERIES_NAMES])
        writer.writerow([])
        writer.writerow(["busy_time_s", result.busy_time])
    paths["csv"] = csv_path

    for key, s in result.series.items():
        dat_path = os.path.join(out_dir, f"{key}-{name}.dat")
        with open(dat_path, "w", encoding="utf-8") as f:
            f.write(f"# {s.title}\n")
            for timestamp, value in s.samples:
                f.write(f"{timestamp} {value}\n")
        paths[key] = dat_path
    return paths
