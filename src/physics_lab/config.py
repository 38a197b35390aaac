# MIT License (see LICENSE)
"""
Driver configuration.

Settings shared by every frame driver of a process, loadable from YAML:

    # physics_lab.yaml
    dt: 0.016                 # simulated seconds per step
    history: 100              # samples kept per chart series
    realtime: false           # consume measured frame time in fixed steps
    max_steps_per_frame: 5    # catch-up cap when realtime is on
    frame_interval: 0.016     # scheduler period in wall-clock seconds
    log_level: INFO
    log_file: null

Unknown keys are ignored with a warning; a missing file gives defaults.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, fields, asdict
from typing import Any, Mapping

import yaml

from .constants import FRAME_DT
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriverConfig:
    """
    Attributes:
        dt: Fixed simulated-time increment per step, s.
        history: Maximum samples per chart series.
        realtime: Run as many fixed steps per frame as the measured frame
                  time allows instead of exactly one.
        max_steps_per_frame: Cap on catch-up steps in realtime mode.
        frame_interval: Wall-clock period requested from the scheduler, s.
        log_level: Level name for setup_logging.
        log_file: Optional log file path.
    """
    dt: float = FRAME_DT
    history: int = 100
    realtime: bool = False
    max_steps_per_frame: int = 5
    frame_interval: float = FRAME_DT
    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self) -> None:
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.history < 1:
            raise ValueError(f"history must be at least 1, got {self.history}")
        if self.max_steps_per_frame < 1:
            raise ValueError(f"max_steps_per_frame must be at least 1, got {self.max_steps_per_frame}")
        if self.frame_interval <= 0:
            raise ValueError(f"frame_interval must be positive, got {self.frame_interval}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "DriverConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        kwargs = {k: v for k, v in data.items() if k in known}
        for key in ("dt", "frame_interval"):
            if key in kwargs:
                kwargs[key] = float(kwargs[key])
        for key in ("history", "max_steps_per_frame"):
            if key in kwargs:
                kwargs[key] = int(kwargs[key])
        if "realtime" in kwargs:
            kwargs["realtime"] = bool(kwargs["realtime"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def apply_logging(self) -> logging.Logger:
        """Configure the package logger from ``log_level`` and ``log_file``."""
        return setup_logging(self.log_level, self.log_file)


def load_config(path: str) -> DriverConfig:
    """
    Load a DriverConfig from a YAML file.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If a value is out of range or the document is not a mapping.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file not found: %s; using defaults", path)
        return DriverConfig()

    if data is None:
        return DriverConfig()
    if not isinstance(data, Mapping):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    logger.info("Loaded configuration from %s", path)
    return DriverConfig.from_mapping(data)


def save_config(config: DriverConfig, path: str) -> None:
    """Write a DriverConfig as YAML."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
