"""OFDM PHY mode definitions for 802.11a style radios.

Each mode is described by its data bits per OFDM symbol. Rates and airtimes
are derived from that and the channel width, so the rates handed out here are
exact integers and can be compared for equality by the TX-time table.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List

# 20 MHz OFDM timing in nanoseconds; halved widths double every duration.
OFDM_PREAMBLE_NS = 16_000
OFDM_SIGNAL_NS = 4_000
OFDM_SYMBOL_NS = 4_000
OFDM_SERVICE_BITS = 16
OFDM_TAIL_BITS = 6


@dataclass(frozen=True)
class PhyMode:
    """A single modulation/coding mode at a given channel width."""

    name: str
    data_bits_per_symbol: int
    channel_width_mhz: int = 20
    modulation: str = ""
    coding_rate: str = ""

    @property
    def _scale(self) -> int:
        return 20 // self.channel_width_mhz

    @property
    def symbol_ns(self) -> int:
        return OFDM_SYMBOL_NS * self._scale

    @property
    def data_rate_bps(self) -> int:
        return self.data_bits_per_symbol * 1_000_000_000 // self.symbol_ns

    def tx_duration(self, size_bytes: int) -> float:
        """Airtime in seconds of a ``size_bytes`` PSDU with a long preamble."""
        bits = OFDM_SERVICE_BITS + 8 * size_bytes + OFDM_TAIL_BITS
        symbols = math.ceil(bits / self.data_bits_per_symbol)
        header_ns = (OFDM_PREAMBLE_NS + OFDM_SIGNAL_NS) * self._scale
        return (header_ns + symbols * self.symbol_ns) / 1e9


_OFDM_RATE_TABLE = [
    # (data bits per symbol, modulation, coding rate)
    (24, "BPSK", "1/2"),
    (36, "BPSK", "3/4"),
    (48, "QPSK", "1/2"),
    (72, "QPSK", "3/4"),
    (96, "16-QAM", "1/2"),
    (144, "16-QAM", "3/4"),
    (192, "64-QAM", "2/3"),
    (216, "64-QAM", "3/4"),
]


def ofdm_modes(channel_width_mhz: int = 20) -> List[PhyMode]:
    """Return the eight OFDM modes ordered from the most robust upward."""
    if channel_width_mhz not in (20, 10, 5):
        raise ValueError(f"unsupported OFDM channel width {channel_width_mhz} MHz")
    suffix = "" if channel_width_mhz == 20 else f"BW{channel_width_mhz}MHz"
    return [
        PhyMode(
            name=f"OfdmRate{_format_mbps(ndbps, channel_width_mhz)}Mbps{suffix}",
            data_bits_per_symbol=ndbps,
            channel_width_mhz=channel_width_mhz,
            modulation=modulation,
            coding_rate=coding,
        )
        for ndbps, modulation, coding in _OFDM_RATE_TABLE
    ]


def _format_mbps(ndbps: int, width: int) -> str:
    mbps = ndbps / 4 * width / 20
    return f"{mbps:g}".replace(".", "_")


PHY_STANDARDS: Dict[str, Callable[[int], List[PhyMode]]] = {
    "80211a": ofdm_modes,
    "80211p": ofdm_modes,
}


def modes_for(standard: str, channel_width_mhz: int = 20) -> List[PhyMode]:
    try:
        builder = PHY_STANDARDS[standard.lower()]
    except KeyError:
        raise ValueError(f"unknown PHY standard {standard!r}") from None
    return builder(channel_width_mhz)
