"""Link event aggregation into throughput, power and channel state series."""

from linkstats.address import BROADCAST, MacAddress
from linkstats.errors import (
    ConfigError,
    RateNotFound,
    StatisticsError,
    UnknownDestination,
    UnrecognizedFrameKind,
    UnrecognizedState,
)
from linkstats.metrics import ChannelState, FrameKind, NodeStatistics, PeriodicReporter
from linkstats.phy_modes import PHY_STANDARDS, PhyMode, modes_for, ofdm_modes

__all__ = [
    "BROADCAST",
    "ChannelState",
    "ConfigError",
    "FrameKind",
    "MacAddress",
    "NodeStatistics",
    "PHY_STANDARDS",
    "PeriodicReporter",
    "PhyMode",
    "RateNotFound",
    "StatisticsError",
    "UnknownDestination",
    "UnrecognizedFrameKind",
    "UnrecognizedState",
    "modes_for",
    "ofdm_modes",
]
