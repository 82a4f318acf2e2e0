"""Replay of recorded link event traces.

Trace files are CSV with a ``time`` column (virtual seconds at which the event
is delivered), an ``event`` column and up to three arguments::

    time,event,a,b,c
    0.5,rate,00:00:00:00:00:02,6000000,54000000
    0.5,power,00:00:00:00:00:02,17,16
    0.7,state,IDLE,0.4,0.3
    0.7,tx,DATA,00:00:00:00:00:02
    0.8,rx,1420,00:00:00:00:00:02

``state`` rows carry the state tag, interval start and duration; ``rx`` rows
the byte count and an optional source address.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from typing import Iterable, List

import simpy

from linkstats.address import MacAddress
from linkstats.events import (
    BytesReceived,
    ChannelStateInterval,
    FrameTransmitted,
    PowerChanged,
    RateChanged,
    TraceBus,
)
from linkstats.errors import ConfigError

logger = logging.getLogger(__name__)


_EVENT_KINDS = ("power", "rate", "state", "tx", "rx")


@dataclass(frozen=True)
class TraceRecord:
    time: float
    event: object


def _parse_row(row: List[str], line: int) -> TraceRecord:
    fields = [cell.strip() for cell in row]
    while fields and fields[-1] == "":
        fields.pop()
    if len(fields) < 3:
        raise ConfigError(f"trace line {line}: expected time, event and arguments")
    kind, args = fields[1].lower(), fields[2:]
    if kind not in _EVENT_KINDS:
        raise ConfigError(f"trace line {line}: unknown event {kind!r}")
    try:
        time_s = float(fields[0])
        if kind == "power":
            event = PowerChanged(MacAddress.parse(args[0]), float(args[1]), float(args[2]))
        elif kind == "rate":
            event = RateChanged(MacAddress.parse(args[0]), int(args[1]), int(args[2]))
        elif kind == "state":
            event = ChannelStateInterval(args[0], float(args[1]), float(args[2]))
        elif kind == "tx":
            event = FrameTransmitted(args[0], MacAddress.parse(args[1]))
        else:
            source = MacAddress.parse(args[1]) if len(args) > 1 else None
            event = BytesReceived(int(args[0]), source)
    except (IndexError, ValueError) as exc:
        raise ConfigError(f"trace line {line}: {exc}") from exc
    return TraceRecord(time_s, event)


def load_trace(path: str) -> List[TraceRecord]:
    """Parse a CSV trace; records come back sorted by time, ties in file order."""
    records: List[TraceRecord] = []
    header_allowed = True
    with open(path, "r", newline="", encoding="utf-8") as f:
        for line, row in enumerate(csv.reader(f), start=1):
            if not row or row[0].strip().startswith("#"):
                continue
            if header_allowed:
                header_allowed = False
                if row[0].strip().lower() == "time":
                    continue
            records.append(_parse_row(row, line))
    records.sort(key=lambda record: record.time)
    logger.info("loaded %d trace records from %s", len(records), path)
    return records


class TraceReplayer:
    """Emits trace records on the bus at their recorded virtual times."""

    def __init__(self, env: simpy.Environment, bus: TraceBus, records: Iterable[TraceRecord]) -> None:
        self.env = env
        self.bus = bus
        self.records = sorted(records, key=lambda record: record.time)
        self.replayed = 0
        self.process = env.process(self._run())

    def _run(self):
        for record in self.records:
            delay = record.time - self.env.now
            if delay > 0:
                yield self.env.timeout(delay)
            self.bus.emit(record.event)
            self.replayed += 1
