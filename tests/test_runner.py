import json
import os

import pytest

from linkstats.config_factory import make_config
from linkstats.experiments import ExperimentRunner
from linkstats.exporter import export_results
from linkstats.metrics import SERIES_NAMES
from linkstats.traffic import TraceRecord
from linkstats.events import BytesReceived
from linkstats.utils import compute_summary_stats, interval_sum


@pytest.fixture
def short_config():
    config = make_config("baseline", station_count=2)
    config.duration_s = 4.0
    config.seed = 11
    return config


def test_run_produces_one_sample_per_tick(short_config):
    result = ExperimentRunner(short_config).run("baseline")
    for name in SERIES_NAMES:
        assert [t for t, _ in result.series[name].samples] == [0.0, 1.0, 2.0, 3.0]
    assert result.end_time == 4.0
    assert not result.stopped_early


def test_synthetic_traffic_reaches_statistics(short_config):
    result = ExperimentRunner(short_config).run("baseline")
    throughput = [v for _, v in result.series["throughput"].samples]
    assert throughput[0] == 0.0
    assert all(v > 0 for v in throughput[1:])
    assert all(v > 0 for _, v in result.series["power"].samples[1:])
    assert result.busy_time > 0
    # Reported intervals never exceed what the totals saw.
    assert interval_sum(result.series["tx"]) <= result.totals.tx + 1e-9
    reported = sum(interval_sum(result.series[name]) for name in ("idle", "busy", "tx", "rx"))
    assert reported <= 3.0 + 1e-9
    for index in range(1, 4):
        per_tick = sum(result.series[name].samples[index][1] for name in ("idle", "busy", "tx", "rx"))
        # An interval straddling a tick is reported whole on the tick after it ends.
        assert per_tick <= 100.0 + 1.0


def test_same_seed_same_series(short_config):
    first = ExperimentRunner(short_config).run("a")
    second = ExperimentRunner(short_config).run("b")
    for name in SERIES_NAMES:
        assert first.series[name].samples == second.series[name].samples


def test_fixed_controllers_keep_initial_link(short_config):
    short_config.traffic.rate_control = "fixed"
    short_config.traffic.power_control = "fixed"
    short_config.radio.initial_rate_bps = 54_000_000
    runner = ExperimentRunner(short_config)
    runner.run("fixed")
    stats = runner.current_statistics
    for addr in short_config.stations:
        assert stats.current_rate(addr) == 54_000_000
        assert stats.current_power(addr) == 17.0


def test_stop_flag_halts_run(short_config):
    calls = {"n": 0}

    def stop():
        calls["n"] += 1
        return calls["n"] > 50

    result = ExperimentRunner(short_config).run("stopped", stop_flag=stop)
    assert result.stopped_early
    assert result.end_time < short_config.duration_s


def test_trace_replaces_generator(short_config):
    trace = [TraceRecord(0.5, BytesReceived(125000)), TraceRecord(1.5, BytesReceived(250000))]
    result = ExperimentRunner(short_config).run("replay", trace=trace)
    assert [v for _, v in result.series["throughput"].samples] == [0.0, 1.0, 2.0, 0.0]
    assert result.busy_time == 0.0


def test_trace_record_on_tick_lands_in_closing_interval(short_config):
    trace = [TraceRecord(0.5, BytesReceived(1000)), TraceRecord(1.0, BytesReceived(125000))]
    result = ExperimentRunner(short_config).run("boundary", trace=trace)
    throughput = [v for _, v in result.series["throughput"].samples]
    assert throughput[0] == 0.0
    assert throughput[1] == pytest.approx(126000 * 8 / 1e6)
    assert throughput[2:] == [0.0, 0.0]


def test_summary_and_export(short_config, tmp_path):
    result = ExperimentRunner(short_config).run("baseline")
    summary = compute_summary_stats(result.series, "baseline", result.busy_time)
    assert summary.samples == 4
    assert summary.peak_throughput_mbps >= summary.mean_throughput_mbps > 0

    paths = export_results(result, str(tmp_path), "unit")
    with open(paths["json"], encoding="utf-8") as f:
        data = json.load(f)
    assert data["busy_time_s"] == pytest.approx(result.busy_time)
    assert len(data["series"]["throughput"]["samples"]) == 4
    assert data["series"]["throughput"]["title"] == "Throughput Mbits/s"
    with open(paths["csv"], encoding="utf-8") as f:
        header = f.readline().strip().split(",")
    assert header == ["time"] + list(SERIES_NAMES)
    with open(paths["idle"], encoding="utf-8") as f:
        lines = f.read().splitlines()
    assert lines[0] == "# Idle Time"
    assert len(lines) == 5


def test_write_plots(short_config, tmp_path):
    pytest.importorskip("matplotlib")
    from linkstats.plotting import write_plots

    result = ExperimentRunner(short_config).run("baseline")
    paths = write_plots(result.series, "unit", str(tmp_path))
    assert set(paths) == {"throughput", "power", "state"}
    for path in paths.values():
        assert os.path.getsize(path) > 0
