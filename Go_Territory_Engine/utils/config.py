"""Settings loading (YAML) and validation for game sessions."""

from __future__ import annotations

from pathlib import Path

import yaml

from Go_Territory_Engine.Board import SUPPORTED_SIZES
from Go_Territory_Engine.engine.errors import ConfigurationError

PROJECT_DIR = Path(__file__).resolve().parent.parent

DEFAULT_SETTINGS = {
    "board_size": 19,
    "komi": 6.5,
    "show_territory": False,
    "highlight_seconds": 4.0,
    "influence_radius": 5,
    "influence_threshold": 0.2,
}


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a package-relative path when invoked from outside `Go_Territory_Engine/`."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    candidate = PROJECT_DIR / p
    return candidate if candidate.exists() else p


def load_settings(path="config/settings.yaml"):
    """Read settings YAML merged over the defaults. A missing file yields the defaults."""
    path = resolve_project_path(path)
    if not path.exists():
        return validate_settings({})
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Malformed settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    return validate_settings(data)


def validate_settings(data):
    unknown = set(data) - set(DEFAULT_SETTINGS)
    if unknown:
        raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")
    settings = {**DEFAULT_SETTINGS, **data}

    if settings["board_size"] not in SUPPORTED_SIZES:
        raise ConfigurationError(f"board_size must be one of {SUPPORTED_SIZES}, got {settings['board_size']!r}")
    for key in ("komi", "highlight_seconds", "influence_threshold"):
        value = settings[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ConfigurationError(f"{key} must be a non-negative number, got {value!r}")
        settings[key] = float(value)
    radius = settings["influence_radius"]
    if isinstance(radius, bool) or not isinstance(radius, int) or radius < 1:
        raise ConfigurationError(f"influence_radius must be a positive integer, got {radius!r}")
    settings["show_territory"] = bool(settings["show_territory"])
    return settings
