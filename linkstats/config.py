"""Configuration dataclasses for link statistics experiments."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

from linkstats.errors import ConfigError
from linkstats.phy_modes import modes_for


@dataclass
class RadioConfig:
    standard: str = "80211a"  # key into PHY_STANDARDS
    channel_width_mhz: int = 20
    tx_power_start_dbm: float = 0.0
    tx_power_end_dbm: float = 17.0
    tx_power_levels: int = 18
    initial_rate_bps: int | None = None  # defaults to the lowest mode

    def power_levels(self) -> List[float]:
        """Evenly spaced power levels from start to end, both included."""
        if self.tx_power_levels == 1:
            return [self.tx_power_end_dbm]
        step = (self.tx_power_end_dbm - self.tx_power_start_dbm) / (self.tx_power_levels - 1)
        levels = [self.tx_power_start_dbm + i * step for i in range(self.tx_power_levels - 1)]
        return levels + [self.tx_power_end_dbm]


@dataclass
class TrafficConfig:
    frame_size_bytes: int = 1420
    offered_rate_bps: float = 54_000_000.0
    start_s: float = 0.0
    stop_s: float | None = None
    sink_start_s: float = 0.5
    delivery_ratio: float = 0.95
    busy_probability: float = 0.05
    busy_duration_s: Tuple[float, float] = (0.0002, 0.002)
    beacon_interval_s: float = 0.1024
    adapt_interval_s: float = 0.5
    rate_control: str = "random_walk"  # "random_walk" or "fixed"
    power_control: str = "random_walk"


@dataclass
class ExperimentConfig:
    ap_address: str = "00:00:00:00:00:01"
    stations: List[str] = field(default_factory=lambda: ["00:00:00:00:00:02"])
    radio: RadioConfig = field(default_factory=RadioConfig)
    traffic: TrafficConfig = field(default_factory=TrafficConfig)
    report_interval_s: float = 1.0
    duration_s: float = 100.0
    output_name: str = "parf"
    output_dir: str = "results"
    seed: int | None = None

    def validate(self) -> "ExperimentConfig":
        if not self.stations:
            raise ConfigError("at least one station address is required")
        if self.report_interval_s <= 0:
            raise ConfigError(f"report_interval_s must be positive, got {self.report_interval_s}")
        if self.duration_s <= 0:
            raise ConfigError(f"duration_s must be positive, got {self.duration_s}")
        try:
            rates = [mode.data_rate_bps for mode in modes_for(self.radio.standard, self.radio.channel_width_mhz)]
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        if self.radio.initial_rate_bps is not None and self.radio.initial_rate_bps not in rates:
            raise ConfigError(
                f"initial_rate_bps {self.radio.initial_rate_bps} is not a {self.radio.standard} "
                f"rate at {self.radio.channel_width_mhz} MHz"
            )
        if self.radio.tx_power_levels < 1:
            raise ConfigError("tx_power_levels must be at least 1")
        if self.radio.tx_power_start_dbm > self.radio.tx_power_end_dbm:
            raise ConfigError("tx_power_start_dbm exceeds tx_power_end_dbm")
        if self.traffic.frame_size_bytes <= 0:
            raise ConfigError("frame_size_bytes must be positive")
        if not 0.0 <= self.traffic.delivery_ratio <= 1.0:
            raise ConfigError("delivery_ratio must be within [0, 1]")
        if not 0.0 <= self.traffic.busy_probability < 1.0:
            raise ConfigError("busy_probability must be within [0, 1)")
        for name in ("rate_control", "power_control"):
            if getattr(self.traffic, name) not in ("random_walk", "fixed"):
                raise ConfigError(f"{name} must be 'random_walk' or 'fixed'")
        return self


def _build(cls, data: Dict[str, Any], section: str):
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown {section} keys: {', '.join(unknown)}")
    return cls(**data)


def config_from_dict(data: Dict[str, Any]) -> ExperimentConfig:
    data = dict(data or {})
    radio = _build(RadioConfig, data.pop("radio", None) or {}, "radio")
    traffic_data = dict(data.pop("traffic", None) or {})
    if "busy_duration_s" in traffic_data:
        traffic_data["busy_duration_s"] = tuple(traffic_data["busy_duration_s"])
    traffic = _build(TrafficConfig, traffic_data, "traffic")
    config = _build(ExperimentConfig, data, "experiment")
    config.radio = radio
    config.traffic = traffic
    return config.validate()


def load_config(path: str, base: Optional[ExperimentConfig] = None) -> ExperimentConfig:
    """Read an experiment from YAML, optionally layered over ``base``."""
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    if base is not None:
        merged = dataclasses.asdict(base)
        for key, value in raw.items():
            if key in ("radio", "traffic") and isinstance(value, dict):
                merged[key].update(value)
            else:
                merged[key] = value
        raw = merged
    return config_from_dict(raw)
