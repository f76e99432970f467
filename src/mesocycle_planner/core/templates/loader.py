"""
YAML -> ProgressionTemplate loader.

Loads user-defined progression templates from individual YAML files in
``~/.mesocycle-planner/templates/``.  Each file (e.g. my-block.yaml)
contains one flat template definition matching the ProgressionTemplate
schema, with ``week_pattern`` as a list of six-field rows.

Built-in templates are defined in Python (catalog.py) and cannot be
replaced from YAML; a user file reusing a built-in id is skipped with a
warning.

Usage (internal, called by registry.py):
    from .loader import load_user_templates
    extra = load_user_templates()   # {} when the directory is absent
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path

import yaml

from ..models import PROGRESSION_TYPES, IntensityParameters
from .base import ProgressionTemplate

_REQUIRED_WEEK_FIELDS: frozenset[str] = frozenset(
    {"volume", "weight", "rir", "rpe", "sets", "reps_modifier"}
)

_REQUIRED_TEMPLATE_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "name",
        "description",
        "type",
        "week_pattern",
        "target_goal",
        "difficulty",
    }
)


def _validate_week(d: dict) -> IntensityParameters:
    """Convert a raw dict to IntensityParameters, raising ValueError on missing fields."""
    if not isinstance(d, dict):
        raise ValueError(f"week_pattern rows must be mappings, got {type(d).__name__}")
    missing = _REQUIRED_WEEK_FIELDS - set(d)
    if missing:
        raise ValueError(f"week_pattern row missing fields: {sorted(missing)}")
    return IntensityParameters(
        volume=float(d["volume"]),
        weight=float(d["weight"]),
        rir=float(d["rir"]),
        rpe=float(d["rpe"]),
        sets=float(d["sets"]),
        reps_modifier=float(d["reps_modifier"]),
    )


def template_from_dict(d: dict) -> ProgressionTemplate:
    """Convert a raw dict (from YAML) to a ProgressionTemplate.

    ``duration`` is optional and defaults to the pattern length.

    Raises ValueError if any required field is absent or invalid.
    """
    missing = _REQUIRED_TEMPLATE_FIELDS - set(d)
    if missing:
        raise ValueError(f"ProgressionTemplate missing fields: {sorted(missing)}")

    if d["type"] not in PROGRESSION_TYPES:
        raise ValueError(f"Invalid type: {d['type']!r}. Must be one of {PROGRESSION_TYPES}")

    raw_pattern = d["week_pattern"]
    if not isinstance(raw_pattern, list):
        raise ValueError("week_pattern must be a list")
    week_pattern = tuple(_validate_week(row) for row in raw_pattern)

    return ProgressionTemplate(
        id=str(d["id"]),
        name=str(d["name"]),
        description=str(d["description"]),
        type=d["type"],
        week_pattern=week_pattern,
        target_goal=str(d["target_goal"]),  # type: ignore[arg-type]
        difficulty=str(d["difficulty"]),  # type: ignore[arg-type]
        duration=int(d.get("duration", len(week_pattern))),
    )


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file; warn and return {} if it cannot be read or parsed."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"mesocycle-planner: cannot read {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def get_user_templates_dir() -> Path | None:
    """Return ~/.mesocycle-planner/templates/ if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".mesocycle-planner" / "templates"
    return p if p.is_dir() else None


def load_user_templates(reserved_ids: frozenset[str] = frozenset()) -> dict[str, ProgressionTemplate]:
    """Return {template_id: ProgressionTemplate} loaded from the user directory.

    Files that fail validation, or whose id is in ``reserved_ids``, are
    skipped with a warning so one bad file never hides the rest.
    """
    user_dir = get_user_templates_dir()
    if user_dir is None:
        return {}

    result: dict[str, ProgressionTemplate] = {}
    for p in sorted(user_dir.glob("*.yaml")):
        raw = _load_yaml_file(p)
        if not raw:
            continue
        try:
            tpl = template_from_dict(raw)
        except (ValueError, TypeError) as exc:
            warnings.warn(
                f"mesocycle-planner: skipping template '{p.stem}': {exc}",
                stacklevel=2,
            )
            continue
        if tpl.id in reserved_ids or tpl.id in result:
            warnings.warn(
                f"mesocycle-planner: skipping template '{p.stem}': id '{tpl.id}' already exists",
                stacklevel=2,
            )
            continue
        result[tpl.id] = tpl

    return result
