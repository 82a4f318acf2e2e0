"""Received byte counting between reporting ticks."""

from __future__ import annotations


class ThroughputSampler:
    def __init__(self) -> None:
        self.bytes_received = 0

    def on_bytes_received(self, byte_count: int) -> None:
        if byte_count < 0:
            raise ValueError(f"negative byte count {byte_count}")
        self.bytes_received += byte_count

    def throughput_mbps(self, interval_s: float) -> float:
        return (self.bytes_received * 8.0) / (1_000_000 * interval_s)

    def reset_interval(self) -> None:
        self.bytes_received = 0
