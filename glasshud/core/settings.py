from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

MIN_DURATION = 5
MAX_DURATION = 300

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "data" / "settings.yaml"


def is_valid_duration(value: object) -> bool:
    """Return True for an integer test length within [MIN_DURATION, MAX_DURATION]."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_DURATION <= value <= MAX_DURATION


@dataclass(frozen=True)
class Settings:
    default_duration: int = 60
    presets: tuple[int, ...] = (15, 30, 60, 120)
    tick_interval_ms: int = 100
    velocity_threshold_wpm: float = 80.0
    chars_per_minute_budget: int = 1200


def load_settings(path: Optional[Path] = None) -> Settings:
    """Read settings from YAML; keys left out of the file keep their defaults."""
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{settings_path.name}: expected a YAML mapping")

    settings = _parse(raw, settings_path.name)
    logger.info("Loaded settings from %s", settings_path)
    return settings


def _parse(raw: dict[str, Any], name: str) -> Settings:
    defaults = Settings()

    default_duration = raw.get("default_duration", defaults.default_duration)
    if not is_valid_duration(default_duration):
        raise ValueError(
            f"{name}: 'default_duration' must be an integer in [{MIN_DURATION}, {MAX_DURATION}]"
        )

    presets_raw = raw.get("presets", list(defaults.presets))
    if not isinstance(presets_raw, list) or not presets_raw:
        raise ValueError(f"{name}: 'presets' must be a non-empty list")
    for item in presets_raw:
        if not is_valid_duration(item):
            raise ValueError(f"{name}: invalid preset {item!r} in 'presets'")

    tick_interval_ms = raw.get("tick_interval_ms", defaults.tick_interval_ms)
    if isinstance(tick_interval_ms, bool) or not isinstance(tick_interval_ms, int) or tick_interval_ms <= 0:
        raise ValueError(f"{name}: 'tick_interval_ms' must be a positive integer")

    threshold = raw.get("velocity_threshold_wpm", defaults.velocity_threshold_wpm)
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)) or threshold <= 0:
        raise ValueError(f"{name}: 'velocity_threshold_wpm' must be a positive number")

    budget = raw.get("chars_per_minute_budget", defaults.chars_per_minute_budget)
    if isinstance(budget, bool) or not isinstance(budget, int) or budget <= 0:
        raise ValueError(f"{name}: 'chars_per_minute_budget' must be a positive integer")

    return Settings(
        default_duration=default_duration,
        presets=tuple(presets_raw),
        tick_interval_ms=tick_interval_ms,
        velocity_threshold_wpm=float(threshold),
        chars_per_minute_budget=budget,
    )
