"""SimPy process that samples a NodeStatistics engine at a fixed interval."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

import simpy

from linkstats.metrics.collector import NodeStatistics

logger = logging.getLogger(__name__)


class ReporterState(Enum):
    IDLE = "idle"
    ARMED = "armed"
    REPORTING = "reporting"
    STOPPED = "stopped"


class PeriodicReporter:
    """Ticks once when started, then every ``interval`` seconds of virtual time.

    The loop has no end of its own: when ``env.run(until=...)`` returns the
    pending timeout is never processed and the series just ends there. The
    samples of a final partial interval are dropped with it.
    """

    def __init__(
        self,
        env: simpy.Environment,
        statistics: NodeStatistics,
        stop_flag: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.env = env
        self.statistics = statistics
        self.stop_flag = stop_flag
        self.state = ReporterState.IDLE
        self.interval: Optional[float] = None
        self.ticks = 0
        self.process: Optional[simpy.Process] = None
        self._stop_requested = False

    def start(self, interval: float) -> simpy.Process:
        if interval <= 0:
            raise ValueError(f"reporting interval must be positive, got {interval}")
        if self.process is not None and self.process.is_alive:
            raise RuntimeError("reporter already running")
        self.interval = interval
        self._stop_requested = False
        self.state = ReporterState.ARMED
        self.process = self.env.process(self._run(interval))
        return self.process

    def stop(self) -> None:
        """Stop re-arming; the pending wake-up ends the loop without sampling."""
        self._stop_requested = True

    def _should_stop(self) -> bool:
        return self._stop_requested or bool(self.stop_flag and self.stop_flag())

    def _run(self, interval: float):
        while True:
            # Requeue behind everything already scheduled for this instant so
            # events stamped at the tick time land in the interval they close.
            yield self.env.timeout(0)
            if self._should_stop():
                break
            self.state = ReporterState.REPORTING
            sample = self.statistics.check_statistics(interval, self.env.now)
            self.ticks += 1
            logger.debug(
                "t=%.3f throughput=%.3f Mb/s power=%.3f", sample.timestamp, sample.throughput_mbps, sample.avg_power
            )
            self.state = ReporterState.ARMED
            yield self.env.timeout(interval)
        self.state = ReporterState.STOPPED
        logger.info("reporter stopped at t=%.3f after %d ticks", self.env.now, self.ticks)
