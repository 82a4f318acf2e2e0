import pytest

from linkstats.errors import UnrecognizedState
from linkstats.metrics import ChannelOccupancyAccumulator, ChannelState


def test_interval_and_total_accumulate():
    acc = ChannelOccupancyAccumulator()
    acc.on_state_interval(ChannelState.IDLE, 0.3)
    acc.on_state_interval("CCA_BUSY", 0.2)
    acc.on_state_interval("tx", 0.1)
    assert acc.interval[ChannelState.IDLE] == pytest.approx(0.3)
    assert acc.interval[ChannelState.BUSY] == pytest.approx(0.2)
    assert acc.total[ChannelState.TX] == pytest.approx(0.1)
    assert acc.total[ChannelState.RX] == 0.0


def test_reset_interval_keeps_totals():
    acc = ChannelOccupancyAccumulator()
    acc.on_state_interval(ChannelState.RX, 0.4)
    acc.on_state_interval(ChannelState.BUSY, 0.1)
    acc.reset_interval()
    assert all(value == 0.0 for value in acc.interval.values())
    assert acc.busy_time() == pytest.approx(0.5)


def test_interval_never_exceeds_total():
    acc = ChannelOccupancyAccumulator()
    for step in range(10):
        acc.on_state_interval(ChannelState.IDLE, 0.05)
        if step % 3 == 0:
            acc.reset_interval()
        for state in ChannelState:
            assert acc.interval[state] <= acc.total[state]


@pytest.mark.parametrize("tag", ["SLEEP", "SWITCHING", "off", 3, None])
def test_unrecognized_state(tag):
    acc = ChannelOccupancyAccumulator()
    with pytest.raises(UnrecognizedState):
        acc.on_state_interval(tag, 0.1)


def test_negative_duration_rejected():
    acc = ChannelOccupancyAccumulator()
    with pytest.raises(ValueError):
        acc.on_state_interval(ChannelState.IDLE, -0.1)
