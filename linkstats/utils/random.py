"""Shared random source for trace generation."""

from __future__ import annotations

import random
from typing import Optional

rng = random.Random()


def reseed(seed: Optional[int]) -> None:
    """Reseed the shared generator; ``None`` draws fresh entropy."""
    rng.seed(seed)
