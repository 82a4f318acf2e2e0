"""Rate to airtime lookup for a fixed reference frame size."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from linkstats.errors import RateNotFound
from linkstats.phy_modes import PhyMode

logger = logging.getLogger(__name__)

DEFAULT_FRAME_SIZE_BYTES = 1420


@dataclass(frozen=True)
class TxTimeEntry:
    rate_bps: int
    duration_s: float


class TxTimeTable:
    """Airtime of one ``frame_size_bytes`` frame at each supported rate.

    Built once per run. Lookups scan the entries in mode order and require an
    exact match on the rate: queried rates always come from the same mode set
    the table was built from, so a miss means the caller mixed up radios.
    """

    def __init__(self, entries: Iterable[TxTimeEntry], frame_size_bytes: int) -> None:
        self.entries: Tuple[TxTimeEntry, ...] = tuple(entries)
        self.frame_size_bytes = frame_size_bytes

    @classmethod
    def build(cls, modes: Iterable[PhyMode], frame_size_bytes: int = DEFAULT_FRAME_SIZE_BYTES) -> "TxTimeTable":
        modes = list(modes)
        if not modes:
            raise ValueError("cannot build a TX time table without PHY modes")
        if frame_size_bytes <= 0:
            raise ValueError(f"frame size must be positive, got {frame_size_bytes}")
        entries: List[TxTimeEntry] = []
        for index, mode in enumerate(modes):
            entry = TxTimeEntry(mode.data_rate_bps, mode.tx_duration(frame_size_bytes))
            logger.debug("%d %s %.9f s %d bit/s", index, mode.name, entry.duration_s, entry.rate_bps)
            entries.append(entry)
        return cls(entries, frame_size_bytes)

    def lookup(self, rate_bps: int) -> float:
        for entry in self.entries:
            if entry.rate_bps == rate_bps:
                return entry.duration_s
        raise RateNotFound(rate_bps)

    @property
    def rates(self) -> List[int]:
        return [entry.rate_bps for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)
