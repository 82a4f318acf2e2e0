"""Synthetic link event source for an access point serving its stations.

This stands in for a full network simulator: it produces the same kinds of
events (state intervals, frame transmissions, sink arrivals, rate and power
changes) with plausible timing, but it does not model contention, backoff or
propagation. Frames simply go out back to back at the offered load.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

import simpy

from linkstats.address import BROADCAST, MacAddress
from linkstats.config import ExperimentConfig
from linkstats.events import (
    BytesReceived,
    ChannelStateInterval,
    FrameTransmitted,
    PowerChanged,
    RateChanged,
    TraceBus,
)
from linkstats.metrics.channel import ChannelState
from linkstats.metrics.energy import FrameKind
from linkstats.phy_modes import PhyMode
from linkstats.utils import rng

logger = logging.getLogger(__name__)

SIFS_S = 16e-6
ACK_SIZE_BYTES = 14
BEACON_SIZE_BYTES = 100


@dataclass
class StationLink:
    address: MacAddress
    mode_index: int
    power_index: int


class LinkTrafficGenerator:
    """Downlink constant-rate traffic from one AP plus a random-walk link controller."""

    def __init__(
        self,
        env: simpy.Environment,
        bus: TraceBus,
        config: ExperimentConfig,
        modes: Sequence[PhyMode],
        power_levels: Sequence[float],
    ) -> None:
        self.env = env
        self.bus = bus
        self.config = config
        self.traffic = config.traffic
        self.modes: List[PhyMode] = list(modes)
        self.power_levels: List[float] = list(power_levels)
        initial_mode = 0
        if config.radio.initial_rate_bps is not None:
            rates = [mode.data_rate_bps for mode in self.modes]
            initial_mode = rates.index(config.radio.initial_rate_bps)
        self.links: Dict[MacAddress, StationLink] = {
            addr: StationLink(addr, initial_mode, len(self.power_levels) - 1)
            for addr in (MacAddress.coerce(s) for s in config.stations)
        }
        self.frames_sent = 0
        self.frames_delivered = 0
        self.beacons_sent = 0
        self._next_beacon = self.traffic.start_s
        self.processes = [env.process(self._run_data())]
        if self.traffic.rate_control != "fixed" or self.traffic.power_control != "fixed":
            self.processes.append(env.process(self._run_controller()))

    # --- helpers ---
    def _stopped(self) -> bool:
        return self.traffic.stop_s is not None and self.env.now >= self.traffic.stop_s

    def _busy_for(self, state: ChannelState, duration: float):
        """Hold the channel in ``state`` and report the interval once it ends."""
        start = self.env.now
        yield self.env.timeout(duration)
        self.bus.emit(ChannelStateInterval(state, start, duration))

    def _transmit(self, kind: FrameKind, destination: MacAddress, mode: PhyMode, size_bytes: int):
        self.bus.emit(FrameTransmitted(kind, destination))
        yield from self._busy_for(ChannelState.TX, mode.tx_duration(size_bytes))

    # --- processes ---
    def _run_data(self):
        frame_size = self.traffic.frame_size_bytes
        interarrival = frame_size * 8 / self.traffic.offered_rate_bps
        basic_mode = self.modes[0]
        stations = list(self.links.values())
        if self.traffic.start_s > 0:
            yield from self._busy_for(ChannelState.IDLE, self.traffic.start_s)
        turn = 0
        while not self._stopped():
            cycle_start = self.env.now
            if self.env.now >= self._next_beacon:
                yield from self._transmit(FrameKind.MANAGEMENT, BROADCAST, basic_mode, BEACON_SIZE_BYTES)
                self.beacons_sent += 1
                self._next_beacon += self.traffic.beacon_interval_s

            if rng.random() < self.traffic.busy_probability:
                yield from self._busy_for(ChannelState.BUSY, rng.uniform(*self.traffic.busy_duration_s))

            link = stations[turn % len(stations)]
            turn += 1
            yield from self._transmit(FrameKind.DATA, link.address, self.modes[link.mode_index], frame_size)
            self.frames_sent += 1

            yield from self._busy_for(ChannelState.IDLE, SIFS_S)
            if rng.random() < self.traffic.delivery_ratio:
                yield from self._busy_for(ChannelState.RX, basic_mode.tx_duration(ACK_SIZE_BYTES))
                if self.env.now >= self.traffic.sink_start_s:
                    self.frames_delivered += 1
                    self.bus.emit(BytesReceived(frame_size, link.address))

            gap = interarrival - (self.env.now - cycle_start)
            if gap > 0:
                yield from self._busy_for(ChannelState.IDLE, gap)
        logger.info("traffic stopped at t=%.3f after %d data frames", self.env.now, self.frames_sent)

    def _run_controller(self):
        while not self._stopped():
            yield self.env.timeout(self.traffic.adapt_interval_s)
            for link in self.links.values():
                if self.traffic.rate_control == "random_walk":
                    self._step_rate(link, rng.choice((-1, 1)))
                if self.traffic.power_control == "random_walk":
                    self._step_power(link, rng.choice((-1, 1)))

    def _step_rate(self, link: StationLink, step: int) -> None:
        new_index = min(max(0, link.mode_index + step), len(self.modes) - 1)
        if new_index == link.mode_index:
            return
        old_rate = self.modes[link.mode_index].data_rate_bps
        link.mode_index = new_index
        self.bus.emit(RateChanged(link.address, old_rate, self.modes[new_index].data_rate_bps))

    def _step_power(self, link: StationLink, step: int) -> None:
        new_index = min(max(0, link.power_index + step), len(self.power_levels) - 1)
        if new_index == link.power_index:
            return
        old_power = self.power_levels[link.power_index]
        link.power_index = new_index
        self.bus.emit(PowerChanged(link.address, old_power, self.power_levels[new_index]))
