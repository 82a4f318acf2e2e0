"""Per-node link statistics: event handlers plus periodic sampling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence

from linkstats.address import MacAddress
from linkstats.events import (
    BytesReceived,
    ChannelStateInterval,
    FrameTransmitted,
    PowerChanged,
    RateChanged,
    TraceBus,
)
from linkstats.metrics.channel import ChannelOccupancyAccumulator, ChannelState
from linkstats.metrics.energy import EnergyAccumulator, FrameKind
from linkstats.metrics.link_state import LinkStateTracker
from linkstats.metrics.series import TimeSeries
from linkstats.metrics.throughput import ThroughputSampler
from linkstats.metrics.txtime import DEFAULT_FRAME_SIZE_BYTES, TxTimeTable
from linkstats.phy_modes import PhyMode

SERIES_NAMES = ("throughput", "power", "idle", "busy", "tx", "rx")


@dataclass
class StatisticsSample:
    """One reporting tick worth of values, as appended to the series."""

    timestamp: float
    throughput_mbps: float
    avg_power: float
    idle: float
    busy: float
    tx: float
    rx: float
    tx_time_s: float = 0.0


@dataclass
class ChannelTotals:
    idle: float
    busy: float
    tx: float
    rx: float

    @property
    def busy_or_rx(self) -> float:
        return self.busy + self.rx


class NodeStatistics:
    """Aggregates link events of one node into six time series.

    ``avg_power`` is the energy radiated during an interval divided by the
    interval length, i.e. the average radiated power over the interval and not
    the average power of a transmission. The channel series hold interval
    seconds multiplied by 100, which reads as a percentage only for 1 s
    intervals.
    """

    def __init__(
        self,
        modes: Sequence[PhyMode],
        destinations: Iterable[MacAddress],
        initial_power_dbm: float,
        initial_rate_bps: Optional[int] = None,
        frame_size_bytes: int = DEFAULT_FRAME_SIZE_BYTES,
    ) -> None:
        self.tx_times = TxTimeTable.build(modes, frame_size_bytes)
        if initial_rate_bps is None:
            initial_rate_bps = modes[0].data_rate_bps
        self.links = LinkStateTracker()
        self.links.seed(
            [MacAddress.coerce(addr) for addr in destinations],
            power_dbm=initial_power_dbm,
            rate_bps=initial_rate_bps,
        )
        self.channel = ChannelOccupancyAccumulator()
        self.energy = EnergyAccumulator(self.links, self.tx_times)
        self.throughput = ThroughputSampler()
        self.series: Dict[str, TimeSeries] = {
            "throughput": TimeSeries("throughput", "Throughput Mbits/s", "Mb/s"),
            "power": TimeSeries("power", "Average radiated power", "mW"),
            "idle": TimeSeries("idle", "Idle Time", "s x 100"),
            "busy": TimeSeries("busy", "Busy Time", "s x 100"),
            "tx": TimeSeries("tx", "TX Time", "s x 100"),
            "rx": TimeSeries("rx", "RX Time", "s x 100"),
        }
        self.last_sample: Optional[StatisticsSample] = None

    # --- event handlers ---
    def on_power_change(self, address: MacAddress, old_power: Optional[float], new_power: float) -> None:
        self.links.on_power_change(address, new_power, old_power)

    def on_rate_change(self, address: MacAddress, old_rate: Optional[int], new_rate: int) -> None:
        self.links.on_rate_change(address, new_rate, old_rate)

    def on_state_interval(self, state, start: float, duration: float) -> None:
        self.channel.on_state_interval(state, duration)

    def on_frame_sent(self, frame_kind, destination: MacAddress) -> None:
        self.energy.on_frame_sent(destination, frame_kind)

    def on_bytes_received(self, byte_count: int, source: Optional[MacAddress] = None) -> None:
        self.throughput.on_bytes_received(byte_count)

    def attach(self, bus: TraceBus) -> None:
        """Register the handlers above on ``bus``."""
        bus.connect(PowerChanged, lambda e: self.on_power_change(e.address, e.old_power, e.new_power))
        bus.connect(RateChanged, lambda e: self.on_rate_change(e.address, e.old_rate, e.new_rate))
        bus.connect(ChannelStateInterval, lambda e: self.on_state_interval(e.state, e.start, e.duration))
        bus.connect(FrameTransmitted, lambda e: self.on_frame_sent(e.frame_kind, e.destination))
        bus.connect(BytesReceived, lambda e: self.on_bytes_received(e.byte_count, e.source))

    # --- queries ---
    def current_power(self, address: MacAddress) -> float:
        return self.links.current_power(address)

    def current_rate(self, address: MacAddress) -> int:
        return self.links.current_rate(address)

    def busy_time(self) -> float:
        """Cumulative busy plus receive time since the start of the run."""
        return self.channel.busy_time()

    def totals(self) -> ChannelTotals:
        total = self.channel.total
        return ChannelTotals(
            idle=total[ChannelState.IDLE],
            busy=total[ChannelState.BUSY],
            tx=total[ChannelState.TX],
            rx=total[ChannelState.RX],
        )

    # --- sampling ---
    def check_statistics(self, interval: float, now: float) -> StatisticsSample:
        """Append one sample per series for the interval ending at ``now`` and reset."""
        if interval <= 0:
            raise ValueError(f"reporting interval must be positive, got {interval}")
        current = self.channel.interval
        sample = StatisticsSample(
            timestamp=now,
            throughput_mbps=self.throughput.throughput_mbps(interval),
            avg_power=self.energy.energy / interval,
            idle=current[ChannelState.IDLE] * 100,
            busy=current[ChannelState.BUSY] * 100,
            tx=current[ChannelState.TX] * 100,
            rx=current[ChannelState.RX] * 100,
            tx_time_s=self.energy.tx_time,
        )
        self.series["throughput"].add(now, sample.throughput_mbps)
        self.series["power"].add(now, sample.avg_power)
        self.series["idle"].add(now, sample.idle)
        self.series["busy"].add(now, sample.busy)
        self.series["tx"].add(now, sample.tx)
        self.series["rx"].add(now, sample.rx)

        self.throughput.reset_interval()
        self.energy.reset_interval()
        self.channel.reset_interval()
        self.last_sample = sample
        return sample

    def datasets(self) -> Dict[str, TimeSeries]:
        return dict(self.series)


__all__ = [
    "ChannelTotals",
    "FrameKind",
    "NodeStatistics",
    "SERIES_NAMES",
    "StatisticsSample",
]
