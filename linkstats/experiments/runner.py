"""Experiment runner wiring a producer, the statistics engine and the reporter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

import simpy

from linkstats.address import MacAddress
from linkstats.config import ExperimentConfig
from linkstats.events import TraceBus
from linkstats.metrics import NodeStatistics, PeriodicReporter, TimeSeries
from linkstats.metrics.collector import ChannelTotals
from linkstats.phy_modes import modes_for
from linkstats.traffic import LinkTrafficGenerator, TraceRecord, TraceReplayer
from linkstats.utils import reseed

logger = logging.getLogger(__name__)


@dataclass
class ExperimentResult:
    name: str
    series: Dict[str, TimeSeries]
    busy_time: float
    totals: ChannelTotals
    end_time: float
    stopped_early: bool = False


class ExperimentRunner:
    """Runs one experiment per call according to the captured configuration."""

    def __init__(self, config: ExperimentConfig) -> None:
        self.config = config.validate()
        self.current_statistics: Optional[NodeStatistics] = None

    def build_statistics(self) -> NodeStatistics:
        radio = self.config.radio
        modes = modes_for(radio.standard, radio.channel_width_mhz)
        return NodeStatistics(
            modes,
            [MacAddress.parse(addr) for addr in self.config.stations],
            initial_power_dbm=radio.tx_power_end_dbm,
            initial_rate_bps=radio.initial_rate_bps,
            frame_size_bytes=self.config.traffic.frame_size_bytes,
        )

    def run(
        self,
        scenario_name: str,
        stop_flag: Callable[[], bool] | None = None,
        trace: Iterable[TraceRecord] | None = None,
    ) -> ExperimentResult:
        reseed(self.config.seed)
        env = simpy.Environment()
        bus = TraceBus()
        statistics = self.build_statistics()
        statistics.attach(bus)
        self.current_statistics = statistics

        if trace is not None:
            producer = TraceReplayer(env, bus, trace)
            logger.info("%s: replaying %d trace records", scenario_name, len(producer.records))
        else:
            radio = self.config.radio
            LinkTrafficGenerator(
                env,
                bus,
                self.config,
                modes_for(radio.standard, radio.channel_width_mhz),
                radio.power_levels(),
            )

        reporter = PeriodicReporter(env, statistics, stop_flag=stop_flag)
        reporter.start(self.config.report_interval_s)

        stopped_early = False
        logger.info("%s: running for %.1f s", scenario_name, self.config.duration_s)
        if stop_flag is None:
            env.run(until=self.config.duration_s)
        else:
            # Step manually so a GUI or test can halt the clock between events.
            while env.peek() < self.config.duration_s:
                if stop_flag():
                    stopped_early = True
                    break
                env.step()
        if stopped_early:
            logger.warning("%s: stopped early at t=%.3f", scenario_name, env.now)

        return ExperimentResult(
            name=scenario_name,
            series=statistics.datasets(),
            busy_time=statistics.busy_time(),
            totals=statistics.totals(),
            end_time=env.now,
            stopped_early=stopped_early,
        )
