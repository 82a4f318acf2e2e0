"""Radiated energy accounting for outgoing data frames."""

from __future__ import annotations

from enum import Enum

from linkstats.address import MacAddress
from linkstats.errors import UnrecognizedFrameKind
from linkstats.metrics.link_state import LinkStateTracker
from linkstats.metrics.txtime import TxTimeTable


class FrameKind(Enum):
    DATA = "data"
    CONTROL = "control"
    MANAGEMENT = "management"

    @classmethod
    def parse(cls, tag) -> "FrameKind":
        if isinstance(tag, FrameKind):
            return tag
        if isinstance(tag, str):
            key = tag.strip().upper()
            if key.startswith("WIFI_MAC_"):
                key = key[len("WIFI_MAC_"):]
            if key in ("CTL", "CTRL"):
                key = "CONTROL"
            elif key == "MGT":
                key = "MANAGEMENT"
            if key in cls.__members__:
                return cls[key]
        raise UnrecognizedFrameKind(tag)


def dbm_to_mw(power_dbm: float) -> float:
    return 10.0 ** (power_dbm / 10.0)


class EnergyAccumulator:
    """Charges each data frame with its power held for its whole airtime.

    This is an estimate, not an energy meter: the airtime comes from the
    table's reference frame size, so it only matches the wire when every data
    frame has that size.
    """

    def __init__(self, links: LinkStateTracker, tx_times: TxTimeTable) -> None:
        self.links = links
        self.tx_times = tx_times
        self.energy = 0.0  # mW * s
        self.tx_time = 0.0  # s

    def on_frame_sent(self, destination: MacAddress, frame_kind=FrameKind.DATA) -> float:
        """Account one transmitted frame; returns the energy charged."""
        if FrameKind.parse(frame_kind) is not FrameKind.DATA:
            return 0.0
        power_dbm = self.links.current_power(destination)
        duration = self.tx_times.lookup(self.links.current_rate(destination))
        charged = dbm_to_mw(power_dbm) * duration
        self.energy += charged
        self.tx_time += duration
        return charged

    def reset_interval(self) -> None:
        self.energy = 0.0
        self.tx_time = 0.0
