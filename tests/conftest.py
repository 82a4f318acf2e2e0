import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from linkstats.address import MacAddress
from linkstats.metrics import NodeStatistics
from linkstats.phy_modes import ofdm_modes

AP = MacAddress.parse("00:00:00:00:00:01")
STA = MacAddress.parse("00:00:00:00:00:02")


@pytest.fixture
def modes():
    return ofdm_modes()


@pytest.fixture
def stats(modes) -> NodeStatistics:
    """Engine tracking one station at 17 dBm, starting at the lowest rate."""

    return NodeStatistics(modes, [STA], initial_power_dbm=17.0)
