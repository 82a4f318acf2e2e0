import pytest
import simpy

from linkstats.metrics import ChannelState, PeriodicReporter, ReporterState

from conftest import STA


def _feeder(env, stats):
    """Deliver events strictly between reporting boundaries."""
    yield env.timeout(0.25)
    stats.on_bytes_received(125000, STA)
    stats.on_state_interval(ChannelState.IDLE, 0.0, 0.25)
    yield env.timeout(1.0)
    stats.on_state_interval(ChannelState.TX, 0.25, 1.0)


def test_first_tick_fires_immediately_then_every_interval(stats):
    env = simpy.Environment()
    reporter = PeriodicReporter(env, stats)
    reporter.start(1.0)
    env.process(_feeder(env, stats))
    env.run(until=3.5)
    times = [t for t, _ in stats.series["throughput"].samples]
    assert times == [0.0, 1.0, 2.0, 3.0]
    assert reporter.ticks == 4
    assert reporter.state is ReporterState.ARMED


def test_samples_land_in_their_interval(stats):
    env = simpy.Environment()
    PeriodicReporter(env, stats).start(1.0)
    env.process(_feeder(env, stats))
    env.run(until=3.5)
    assert [v for _, v in stats.series["throughput"].samples] == [0.0, 1.0, 0.0, 0.0]
    assert [v for _, v in stats.series["idle"].samples] == [0.0, pytest.approx(25.0), 0.0, 0.0]
    assert [v for _, v in stats.series["tx"].samples] == [0.0, 0.0, pytest.approx(100.0), 0.0]


def test_event_at_tick_time_counts_toward_that_tick(stats):
    env = simpy.Environment()
    PeriodicReporter(env, stats).start(1.0)

    def on_the_boundary():
        yield env.timeout(1.0)
        stats.on_bytes_received(125000, STA)

    env.process(on_the_boundary())
    env.run(until=2.5)
    assert [v for _, v in stats.series["throughput"].samples] == [0.0, 1.0, 0.0]


def test_partial_interval_is_discarded(stats):
    env = simpy.Environment()
    PeriodicReporter(env, stats).start(1.0)
    env.run(until=1.5)

    def late():
        yield env.timeout(0.2)
        stats.on_bytes_received(1000)

    env.process(late())
    env.run(until=1.9)
    assert len(stats.series["throughput"]) == 2
    assert stats.throughput.bytes_received == 1000


def test_stop_ends_series(stats):
    env = simpy.Environment()
    reporter = PeriodicReporter(env, stats)
    reporter.start(1.0)
    env.run(until=1.5)
    reporter.stop()
    env.run(until=5.0)
    assert len(stats.series["power"]) == 2
    assert reporter.state is ReporterState.STOPPED
    assert not reporter.process.is_alive


def test_stop_flag_is_polled(stats):
    env = simpy.Environment()
    reporter = PeriodicReporter(env, stats, stop_flag=lambda: env.now >= 2.0)
    reporter.start(1.0)
    env.run(until=10.0)
    assert [t for t, _ in stats.series["rx"].samples] == [0.0, 1.0]


def test_start_validation(stats):
    env = simpy.Environment()
    reporter = PeriodicReporter(env, stats)
    with pytest.raises(ValueError):
        reporter.start(0)
    reporter.start(0.5)
    with pytest.raises(RuntimeError):
        reporter.start(0.5)


def test_fatal_error_aborts_run(stats):
    from linkstats.address import MacAddress
    from linkstats.errors import UnknownDestination
    from linkstats.metrics import FrameKind

    env = simpy.Environment()
    PeriodicReporter(env, stats).start(1.0)

    def bad_producer():
        yield env.timeout(0.5)
        stats.on_frame_sent(FrameKind.DATA, MacAddress.from_index(77))

    env.process(bad_producer())
    with pytest.raises(UnknownDestination):
        env.run(until=3.0)
