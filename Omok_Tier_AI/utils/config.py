"""Settings loading (YAML) and process-wide policy application."""

from pathlib import Path

import yaml

from Omok_Tier_AI.engine import rules

PROJECT_DIR = Path(__file__).resolve().parents[1]

DEFAULT_SETTINGS = {
    "board_size": 15,
    "allow_overline": False,
    "difficulty": "medium",
    "black_difficulty": None,
    "white_difficulty": None,
    "move_timeout_seconds": 10,
    "games": 20,
    "random_open": 0,
}


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a package-relative path when invoked from outside `Omok_Tier_AI/`."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    candidate = PROJECT_DIR / p
    return candidate if candidate.exists() else p


def load_settings(path="config/settings.yaml"):
    """Return DEFAULT_SETTINGS overlaid with the YAML file, if it exists."""
    settings = dict(DEFAULT_SETTINGS)
    path = resolve_project_path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return settings
    if not isinstance(data, dict):
        raise ValueError(f"settings file {path} must contain a mapping")
    settings.update(data)
    return settings


def apply_settings(settings):
    rules.set_allow_overline(settings.get("allow_overline", False))
