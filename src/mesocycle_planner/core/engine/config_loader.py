"""
YAML -> typed config loader.

Loads planner defaults from planner.yaml (bundled with the package) and
optionally merges user overrides from ~/.mesocycle-planner/planner.yaml.

Usage:
    from mesocycle_planner.core.engine.config_loader import load_planner_config
    cfg = load_planner_config()
    weeks = cfg.get("mesocycle", {}).get("default_weeks", 4)

Any key missing from both files falls back to the Python defaults in
config.py.  If the user override file exists but cannot be parsed, a
warning is issued and the file is ignored.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from .. import config
from ..models import GlobalProgressionSettings

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it cannot be used."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"mesocycle-planner: ignoring config {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled planner.yaml, or None if not found."""
    ref = importlib.resources.files("mesocycle_planner").joinpath("planner.yaml")
    if ref.is_file():
        with importlib.resources.as_file(ref) as p:
            return p
    return None


def get_user_config_dir() -> Path:
    """Return ~/.mesocycle-planner (may not exist)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".mesocycle-planner"


def get_user_yaml_path() -> Path | None:
    """Return ~/.mesocycle-planner/planner.yaml if it exists, else None."""
    p = get_user_config_dir() / "planner.yaml"
    return p if p.exists() else None


def load_planner_config() -> dict[str, Any]:
    """
    Load and merge planner configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/mesocycle_planner/planner.yaml
    2. User override at ~/.mesocycle-planner/planner.yaml

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    cfg: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        cfg = _deep_merge(cfg, _load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        user_cfg = _load_yaml_file(user)
        if user_cfg:
            cfg = _deep_merge(cfg, user_cfg)

    return cfg


def default_global_settings(cfg: dict[str, Any] | None = None) -> GlobalProgressionSettings:
    """GlobalProgressionSettings from the ``global_settings`` section."""
    if cfg is None:
        cfg = load_planner_config()
    section = cfg.get("global_settings", {}) or {}
    return GlobalProgressionSettings(
        auto_deload=bool(section.get("auto_deload", config.AUTO_DELOAD)),
        deload_frequency=int(section.get("deload_frequency", config.DELOAD_FREQUENCY_WEEKS)),
        deload_intensity=float(section.get("deload_intensity", config.DELOAD_INTENSITY_PERCENT)),
        main_lift_progression=float(
            section.get("main_lift_progression", config.MAIN_LIFT_PROGRESSION_PERCENT)
        ),
        accessory_progression=float(
            section.get("accessory_progression", config.ACCESSORY_PROGRESSION_PERCENT)
        ),
        fatigue_threshold=float(section.get("fatigue_threshold", config.FATIGUE_THRESHOLD_RPE)),
    )


def default_mesocycle_weeks(cfg: dict[str, Any] | None = None) -> int:
    if cfg is None:
        cfg = load_planner_config()
    weeks = int(cfg.get("mesocycle", {}).get("default_weeks", config.DEFAULT_MESOCYCLE_WEEKS))
    return max(config.MIN_MESOCYCLE_WEEKS, min(weeks, config.MAX_MESOCYCLE_WEEKS))


def default_strategy_name(cfg: dict[str, Any] | None = None) -> str:
    if cfg is None:
        cfg = load_planner_config()
    return str(cfg.get("mesocycle", {}).get("default_strategy", config.DEFAULT_STRATEGY_NAME))


def default_progression_type(cfg: dict[str, Any] | None = None) -> str:
    if cfg is None:
        cfg = load_planner_config()
    return str(
        cfg.get("mesocycle", {}).get("default_progression_type", config.DEFAULT_PROGRESSION_TYPE)
    )
