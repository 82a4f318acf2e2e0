"""Command line entry point: run one experiment and write its series."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from linkstats.config import load_config
from linkstats.config_factory import SCENARIOS, make_config
from linkstats.experiments import ExperimentRunner
from linkstats.exporter import export_results
from linkstats.traffic import load_trace
from linkstats.utils import compute_summary_stats

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Aggregate link events into throughput, power and channel state series.")
    parser.add_argument("--scenario", choices=SCENARIOS, default="baseline")
    parser.add_argument("--stations", type=int, default=1, help="Number of stations served by the AP")
    parser.add_argument("--config", help="YAML file layered over the scenario configuration")
    parser.add_argument("--duration", type=float, help="Total simulation time (sec)")
    parser.add_argument("--interval", type=float, help="Reporting interval (sec)")
    parser.add_argument("--output-name", help="Suffix of the output files")
    parser.add_argument("--output-dir", help="Directory for plots and exports")
    parser.add_argument("--trace", help="CSV event trace to replay instead of synthetic traffic")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--no-plots", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    config = make_config(args.scenario, station_count=args.stations)
    if args.config:
        config = load_config(args.config, base=config)
    if args.duration is not None:
        config.duration_s = args.duration
    if args.interval is not None:
        config.report_interval_s = args.interval
    if args.output_name:
        config.output_name = args.output_name
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.seed is not None:
        config.seed = args.seed

    trace = load_trace(args.trace) if args.trace else None
    result = ExperimentRunner(config).run(args.scenario, trace=trace)

    paths = export_results(result, config.output_dir, config.output_name)
    if not args.no_plots:
        from linkstats.plotting import write_plots

        paths.update({f"plot_{k}": v for k, v in write_plots(result.series, config.output_name, config.output_dir).items()})
    for kind, path in sorted(paths.items()):
        logger.info("wrote %s: %s", kind, path)

    summary = compute_summary_stats(result.series, args.scenario, result.busy_time)
    print(f"Scenario           : {summary.scenario}")
    print(f"Samples            : {summary.samples}")
    print(f"Mean throughput    : {summary.mean_throughput_mbps:.3f} Mb/s")
    print(f"Mean radiated power: {summary.mean_radiated_power:.3f} mW")
    print(f"Busy time          : {result.busy_time:.3f} s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
