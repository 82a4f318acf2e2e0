"""Append-only time series consumed by plotting and export."""

from __future__ import annotations

from typing import Iterator, List, Tuple

import numpy as np

Sample = Tuple[float, float]


class TimeSeries:
    """Ordered ``(timestamp, value)`` samples with a plot title.

    Samples are only ever appended, in time order, and never changed after.
    """

    def __init__(self, name: str, title: str = "", unit: str = "") -> None:
        self.name = name
        self.title = title or name
        self.unit = unit
        self._samples: List[Sample] = []

    def add(self, timestamp: float, value: float) -> None:
        if self._samples and timestamp < self._samples[-1][0]:
            raise ValueError(
                f"{self.name}: sample at {timestamp} precedes last sample at {self._samples[-1][0]}"
            )
        self._samples.append((float(timestamp), float(value)))

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return tuple(self._samples)

    def times(self) -> np.ndarray:
        return np.array([t for t, _ in self._samples], dtype=float)

    def values(self) -> np.ndarray:
        return np.array([v for _, v in self._samples], dtype=float)

    def last(self) -> Sample:
        if not self._samples:
            raise IndexError(f"{self.name} has no samples")
        return self._samples[-1]

    def __iter__(self) -> Iterator[Sample]:
        return iter(tuple(self._samples))

    def __len__(self) -> int:
        return len(self._samples)

    def __repr__(self) -> str:
        return f"TimeSeries({self.name!r}, {len(self._samples)} samples)"
