"""Game settings, read from ``TILELINK_*`` environment variables over the defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_BOARD_DIR = Path(__file__).resolve().parents[1] / "boards"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class GameConfig:
    width: int = 8
    height: int = 8
    special_chance: float = 0.1
    match_points: int = 10
    special_points: int = 30
    sweep_count: int = 2
    board_dir: str = str(DEFAULT_BOARD_DIR)
    log_level: str = "INFO"

    def validate(self) -> None:
        """Raise ``ValueError`` when a setting is out of range."""
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Board size must be positive, got {self.width}x{self.height}")
        if not 0.0 <= self.special_chance <= 1.0:
            raise ValueError(f"special_chance must be within [0, 1], got {self.special_chance}")
        if self.sweep_count < 1:
            raise ValueError(f"sweep_count must be at least 1, got {self.sweep_count}")
        if self.match_points < 0 or self.special_points < 0:
            raise ValueError("Points awarded cannot be negative")
        if logging.getLevelName(self.log_level.upper()) not in (
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL
        ):
            raise ValueError(f"Unknown log level: {self.log_level!r}")


DEFAULT_CONFIG = GameConfig()


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_config(env: Optional[Mapping[str, str]] = None) -> GameConfig:
    """Build a :class:`GameConfig` from ``env`` (defaults to ``os.environ``)."""
    if env is None:
        env = os.environ
    d = DEFAULT_CONFIG
    config = GameConfig(
        width=_env_int(env, "TILELINK_WIDTH", d.width),
        height=_env_int(env, "TILELINK_HEIGHT", d.height),
        special_chance=_env_float(env, "TILELINK_SPECIAL_CHANCE", d.special_chance),
        match_points=_env_int(env, "TILELINK_MATCH_POINTS", d.match_points),
        special_points=_env_int(env, "TILELINK_SPECIAL_POINTS", d.special_points),
        sweep_count=_env_int(env, "TILELINK_SWEEP_COUNT", d.sweep_count),
        board_dir=env.get("TILELINK_BOARD_DIR", d.board_dir),
        log_level=env.get("TILELINK_LOG_LEVEL", d.log_level).upper(),
    )
    config.validate()
    return config


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("tilelink").setLevel(level.upper())
