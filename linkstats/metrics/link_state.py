"""Current transmit power and data rate per destination."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from linkstats.address import BROADCAST, MacAddress
from linkstats.errors import UnknownDestination

logger = logging.getLogger(__name__)


@dataclass
class LinkEntry:
    power_dbm: Optional[float] = None
    rate_bps: Optional[int] = None


class LinkStateTracker:
    """Last-write-wins map of destination address to (power, rate).

    The broadcast address is an ordinary key. Callers seed every destination
    they expect frames for; anything else is unknown until a change
    notification arrives for it.
    """

    def __init__(self) -> None:
        self._links: Dict[MacAddress, LinkEntry] = {}

    def seed(
        self,
        addresses: Iterable[MacAddress],
        power_dbm: float,
        rate_bps: int,
        include_broadcast: bool = True,
    ) -> None:
        targets = list(addresses)
        if include_broadcast and BROADCAST not in targets:
            targets.append(BROADCAST)
        for address in targets:
            self._links[MacAddress.coerce(address)] = LinkEntry(power_dbm, rate_bps)

    def on_power_change(
        self,
        address: MacAddress,
        new_power: float,
        old_power: Optional[float] = None,
    ) -> None:
        address = MacAddress.coerce(address)
        self._links.setdefault(address, LinkEntry()).power_dbm = new_power
        if old_power is not None:
            logger.info("%s old power=%s new power=%s", address, old_power, new_power)

    def on_rate_change(
        self,
        address: MacAddress,
        new_rate: int,
        old_rate: Optional[int] = None,
    ) -> None:
        address = MacAddress.coerce(address)
        self._links.setdefault(address, LinkEntry()).rate_bps = new_rate
        if old_rate is not None:
            logger.info("%s old rate=%s new rate=%s", address, old_rate, new_rate)

    def current_power(self, address: MacAddress) -> float:
        entry = self._links.get(MacAddress.coerce(address))
        if entry is None or entry.power_dbm is None:
            raise UnknownDestination(address, "power")
        return entry.power_dbm

    def current_rate(self, address: MacAddress) -> int:
        entry = self._links.get(MacAddress.coerce(address))
        if entry is None or entry.rate_bps is None:
            raise UnknownDestination(address, "rate")
        return entry.rate_bps

    def __contains__(self, address) -> bool:
        return MacAddress.coerce(address) in self._links

    def __iter__(self) -> Iterator[MacAddress]:
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)
