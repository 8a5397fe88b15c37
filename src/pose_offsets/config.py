from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from .offsets import DEFAULT_EPSILON, DEFAULT_RESOLUTION

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class OffsetConfig:
    """Typed offset-search configuration loaded from a YAML file."""

    # Paths
    model_path: Path
    space_path: Path
    output_path: Path = Path("Results") / "offsets.json"
    plot_path: Path | None = None

    # Search knobs
    epsilon: float = DEFAULT_EPSILON
    offset_resolution: float | None = DEFAULT_RESOLUTION

    # Loading / reporting
    allow_missing: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.model_path = Path(self.model_path)
        self.space_path = Path(self.space_path)
        self.output_path = Path(self.output_path)
        if self.plot_path is not None:
            self.plot_path = Path(self.plot_path)

        self.epsilon = float(self.epsilon)
        if not self.epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if self.offset_resolution is not None:
            self.offset_resolution = float(self.offset_resolution)
            if self.offset_resolution < 0:
                raise ValueError(f"offset_resolution must be >= 0, got {self.offset_resolution}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")


def load_config(path: Path) -> OffsetConfig:
    """Load a YAML config file into an :class:`OffsetConfig`."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return OffsetConfig(**raw)
