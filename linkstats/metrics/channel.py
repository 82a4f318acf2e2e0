"""Channel occupancy accounting across the four PHY states."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from linkstats.errors import UnrecognizedState


class ChannelState(Enum):
    IDLE = "idle"
    BUSY = "busy"
    TX = "tx"
    RX = "rx"

    @classmethod
    def parse(cls, tag) -> "ChannelState":
        if isinstance(tag, ChannelState):
            return tag
        if isinstance(tag, str):
            key = tag.strip().upper()
            state = _STATE_ALIASES.get(key)
            if state is not None:
                return state
        raise UnrecognizedState(tag)


_STATE_ALIASES = {
    "IDLE": ChannelState.IDLE,
    "BUSY": ChannelState.BUSY,
    "CCA_BUSY": ChannelState.BUSY,
    "TX": ChannelState.TX,
    "RX": ChannelState.RX,
}


def _zeroed() -> Dict[ChannelState, float]:
    return {state: 0.0 for state in ChannelState}


@dataclass
class ChannelOccupancyAccumulator:
    """Seconds spent in each state, since start and since the last report.

    The producer reports each state interval after the fact, so durations are
    taken as given; no transition checks are made.
    """

    total: Dict[ChannelState, float] = field(default_factory=_zeroed)
    interval: Dict[ChannelState, float] = field(default_factory=_zeroed)

    def on_state_interval(self, state, duration: float) -> None:
        state = ChannelState.parse(state)
        if duration < 0:
            raise ValueError(f"negative {state.value} duration {duration}")
        self.total[state] += duration
        self.interval[state] += duration

    def reset_interval(self) -> None:
        for state in ChannelState:
            self.interval[state] = 0.0

    def busy_time(self) -> float:
        """Cumulative time the channel was sensed busy or receiving."""
        return self.total[ChannelState.BUSY] + self.total[ChannelState.RX]
