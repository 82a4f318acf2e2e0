"""Error taxonomy for the link statistics engine.

Every error here is a contract violation between the engine and whatever
produces its events. None of them is retried: they propagate out of the
SimPy process and abort the run. SimPy re-raises process failures by calling
``type(exc)(*exc.args)``, so ``args`` holds the constructor arguments.
"""

from __future__ import annotations


class StatisticsError(Exception):
    """Base class for all engine errors."""


class RateNotFound(StatisticsError, LookupError):
    """A data rate was queried that is not part of the TX-time table."""

    def __init__(self, rate_bps: int) -> None:
        super().__init__(rate_bps)
        self.rate_bps = rate_bps

    def __str__(self) -> str:
        return f"no TX time entry for rate {self.rate_bps} bit/s"


class UnknownDestination(StatisticsError, LookupError):
    """Link state was queried for an address that was never seeded or notified."""

    def __init__(self, address, field: str = "state") -> None:
        super().__init__(address, field)
        self.address = address
        self.field = field

    def __str__(self) -> str:
        return f"no {self.field} known for destination {self.address}"


class UnrecognizedState(StatisticsError, ValueError):
    """A channel state tag outside idle/busy/tx/rx."""

    def __init__(self, tag) -> None:
        super().__init__(tag)
        self.tag = tag

    def __str__(self) -> str:
        return f"unrecognized channel state {self.tag!r}"


class UnrecognizedFrameKind(StatisticsError, ValueError):
    """A frame kind tag outside data/control/management."""

    def __init__(self, tag) -> None:
        super().__init__(tag)
        self.tag = tag

    def __str__(self) -> str:
        return f"unrecognized frame kind {self.tag!r}"


class ConfigError(StatisticsError, ValueError):
    """Invalid experiment configuration or trace file."""
