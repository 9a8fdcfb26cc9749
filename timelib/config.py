"""Configuration dataclasses for timelib."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from omegaconf import OmegaConf

from .format.duration import DisplayMode
from .utils.logging import setup_logging


@dataclass
class TimelibConfig:
    """Default display and logging settings."""

    print_mode: str = "human"
    format: str = ""
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def display(self) -> DisplayMode:
        return DisplayMode.parse(self.print_mode, self.format)

    def apply_logging(self) -> None:
        setup_logging(Path(self.log_file) if self.log_file else None, level=self.log_level)


def load_config(path: Optional[Union[str, Path]] = None, **overrides: Any) -> TimelibConfig:
    """Merge defaults, an optional YAML file and keyword overrides.

    Raises:
        ValueError: if the resulting print mode is unknown.
    """

    cfg = OmegaConf.structured(TimelibConfig)
    if path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(Path(path)))
    if overrides:
        cfg = OmegaConf.merge(cfg, overrides)
    config = OmegaConf.to_object(cfg)
    assert isinstance(config, TimelibConfig)
    config.display()  # rejects unknown print modes
    return config


__all__ = ["TimelibConfig", "load_config"]
