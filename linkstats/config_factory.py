"""Factory helpers to build experiment configurations for named scenarios."""

from __future__ import annotations

from typing import List

from linkstats.address import MacAddress
from linkstats.config import ExperimentConfig, RadioConfig, TrafficConfig

SCENARIOS = ("baseline", "fixed_power", "fixed_rate", "congested")


def make_config(scenario: str = "baseline", station_count: int = 1) -> ExperimentConfig:
    stations: List[str] = [str(MacAddress.from_index(idx + 2)) for idx in range(max(1, station_count))]

    radio = RadioConfig(
        standard="80211a",
        channel_width_mhz=20,
        tx_power_start_dbm=0.0,
        tx_power_end_dbm=17.0,
        tx_power_levels=18,
    )
    traffic = TrafficConfig(
        frame_size_bytes=1420,
        offered_rate_bps=54_000_000.0,
        start_s=0.0,
        sink_start_s=0.5,
        adapt_interval_s=0.5,
    )
    config = ExperimentConfig(
        ap_address=str(MacAddress.from_index(1)),
        stations=stations,
        radio=radio,
        traffic=traffic,
        report_interval_s=1.0,
        duration_s=100.0,
        output_name="parf",
    )

    if scenario == "baseline":
        pass
    elif scenario == "fixed_power":
        # Rate adaptation only; power pinned to the top level
        config.traffic.power_control = "fixed"
        config.output_name = "fixed-power"
    elif scenario == "fixed_rate":
        config.traffic.rate_control = "fixed"
        config.radio.initial_rate_bps = 54_000_000
        config.output_name = "fixed-rate"
    elif scenario == "congested":
        # Heavy co-channel activity from a neighbouring BSS
        config.traffic.busy_probability = 0.4
        config.traffic.busy_duration_s = (0.001, 0.005)
        config.traffic.delivery_ratio = 0.8
        config.output_name = "congested"
    else:
        raise ValueError(f"unknown scenario {scenario!r}; expected one of {', '.join(SCENARIOS)}")

    return config.validate()
