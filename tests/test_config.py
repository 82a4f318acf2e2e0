import pytest

from linkstats.config import ExperimentConfig, RadioConfig, load_config
from linkstats.config_factory import SCENARIOS, make_config
from linkstats.errors import ConfigError


def test_power_levels_span_start_to_end():
    levels = RadioConfig(tx_power_start_dbm=0.0, tx_power_end_dbm=17.0, tx_power_levels=18).power_levels()
    assert len(levels) == 18
    assert levels[0] == 0.0
    assert levels[-1] == 17.0
    assert RadioConfig(tx_power_levels=1).power_levels() == [17.0]


@pytest.mark.parametrize("scenario", SCENARIOS)
def test_factory_scenarios_validate(scenario):
    config = make_config(scenario, station_count=3)
    assert len(config.stations) == 3
    assert config.stations[0] == "00:00:00:00:00:02"
    assert config.ap_address == "00:00:00:00:00:01"


def test_factory_rejects_unknown_scenario():
    with pytest.raises(ValueError):
        make_config("nope")


def test_load_yaml(tmp_path):
    path = tmp_path / "exp.yaml"
    path.write_text(
        "stations: ['00:00:00:00:00:05']\n"
        "duration_s: 10\n"
        "radio:\n  tx_power_levels: 4\n"
        "traffic:\n  busy_duration_s: [0.001, 0.002]\n"
    )
    config = load_config(str(path))
    assert config.stations == ["00:00:00:00:00:05"]
    assert config.duration_s == 10
    assert config.radio.tx_power_levels == 4
    assert config.traffic.busy_duration_s == (0.001, 0.002)


def test_load_yaml_over_base(tmp_path):
    path = tmp_path / "exp.yaml"
    path.write_text("traffic:\n  delivery_ratio: 0.5\n")
    config = load_config(str(path), base=make_config("fixed_power"))
    assert config.traffic.delivery_ratio == 0.5
    assert config.traffic.power_control == "fixed"


def test_unknown_key_rejected(tmp_path):
    path = tmp_path / "exp.yaml"
    path.write_text("radio:\n  antenna_gain: 3\n")
    with pytest.raises(ConfigError, match="antenna_gain"):
        load_config(str(path))


@pytest.mark.parametrize(
    "change",
    [
        {"stations": []},
        {"report_interval_s": 0},
        {"duration_s": -1},
    ],
)
def test_validation(change):
    config = ExperimentConfig()
    for key, value in change.items():
        setattr(config, key, value)
    with pytest.raises(ConfigError):
        config.validate()


def test_invalid_controller_name():
    config = ExperimentConfig()
    config.traffic.rate_control = "minstrel"
    with pytest.raises(ConfigError):
        config.validate()


def test_initial_rate_must_exist_at_channel_width():
    config = make_config("fixed_rate")
    config.radio.channel_width_mhz = 10
    with pytest.raises(ConfigError, match="initial_rate_bps"):
        config.validate()
    config.radio.initial_rate_bps = 27_000_000
    config.validate()


def test_unsupported_channel_width_rejected():
    config = ExperimentConfig()
    config.radio.channel_width_mhz = 40
    with pytest.raises(ConfigError):
        config.validate()
