"""Link events and the bus that delivers them to listeners.

Producers (the traffic generator, the trace replayer, or an external
simulator binding) build these records and ``emit`` them; consumers
``connect`` a callback per event type.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, List, Optional, Type

from linkstats.address import MacAddress


@dataclass(frozen=True)
class PowerChanged:
    address: MacAddress
    old_power: float
    new_power: float


@dataclass(frozen=True)
class RateChanged:
    address: MacAddress
    old_rate: int
    new_rate: int


@dataclass(frozen=True)
class ChannelStateInterval:
    state: object  # ChannelState or its name
    start: float
    duration: float


@dataclass(frozen=True)
class FrameTransmitted:
    frame_kind: object  # FrameKind or its name
    destination: MacAddress


@dataclass(frozen=True)
class BytesReceived:
    byte_count: int
    source: Optional[MacAddress] = None


EVENT_TYPES = (PowerChanged, RateChanged, ChannelStateInterval, FrameTransmitted, BytesReceived)

Listener = Callable[[object], None]


class TraceBus:
    """Synchronous fan-out of events to the callbacks registered for their type."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[type, List[Listener]] = defaultdict(list)

    def connect(self, event_type: Type, callback: Listener) -> None:
        if event_type not in EVENT_TYPES:
            raise TypeError(f"{event_type!r} is not a link event type")
        self._listeners[event_type].append(callback)

    def disconnect(self, event_type: Type, callback: Listener) -> None:
        self._listeners[event_type].remove(callback)

    def emit(self, event) -> None:
        for callback in list(self._listeners.get(type(event), ())):
            callback(event)

    def listener_count(self, event_type: Type) -> int:
        return len(self._listeners.get(event_type, ()))
