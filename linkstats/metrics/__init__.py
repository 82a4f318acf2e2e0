"""Link statistics accumulation and periodic reporting."""

from linkstats.metrics.channel import ChannelOccupancyAccumulator, ChannelState
from linkstats.metrics.collector import ChannelTotals, NodeStatistics, SERIES_NAMES, StatisticsSample
from linkstats.metrics.energy import EnergyAccumulator, FrameKind, dbm_to_mw
from linkstats.metrics.link_state import LinkStateTracker
from linkstats.metrics.reporter import PeriodicReporter, ReporterState
from linkstats.metrics.series import TimeSeries
from linkstats.metrics.throughput import ThroughputSampler
from linkstats.metrics.txtime import TxTimeEntry, TxTimeTable

__all__ = [
    "ChannelOccupancyAccumulator",
    "ChannelState",
    "ChannelTotals",
    "EnergyAccumulator",
    "FrameKind",
    "LinkStateTracker",
    "NodeStatistics",
    "PeriodicReporter",
    "ReporterState",
    "SERIES_NAMES",
    "StatisticsSample",
    "ThroughputSampler",
    "TimeSeries",
    "TxTimeEntry",
    "TxTimeTable",
    "dbm_to_mw",
]
