"""
JSON serialization for progression and workout models.

Handles conversion between dataclasses and JSON-compatible dicts.  Keys
are camelCase (``weeklyProgressions``, ``isDeload``, ``repsModifier``) so
documents can be shared with other tools that read the same shape.
"""

import json
import re
from datetime import datetime
from typing import Any

from ..core.models import (
    PRIMARY_FOCUSES,
    PROGRESSION_TYPES,
    DatedWorkoutInstance,
    ExerciseDefaults,
    ExercisePrescription,
    GlobalProgressionSettings,
    IntensityParameters,
    MesocycleProgression,
    ProgressionStrategy,
    ResolvedParameters,
    SecondaryAdjustments,
    StrategyConstraints,
    WeekIntensity,
    WorkoutExerciseTemplate,
    WorkoutTemplate,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise ValidationError(f"Missing '{key}' in {where}")
    return data[key]


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    return value


def _optional_number(data: dict[str, Any], key: str) -> float | None:
    value = data.get(key)
    return None if value is None else _number(value, key)


def _object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(f"{where} must be an object, got {value!r}")
    return value


def _array(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValidationError(f"{where} must be a list, got {value!r}")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{key} must be a string, got {value!r}")
    return value


def _optional_bool(data: dict[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ValidationError(f"{key} must be true or false, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Intensity and weeks
# ---------------------------------------------------------------------------


def intensity_to_dict(params: IntensityParameters) -> dict[str, Any]:
    return {
        "volume": params.volume,
        "weight": params.weight,
        "rir": params.rir,
        "rpe": params.rpe,
        "sets": params.sets,
        "repsModifier": params.reps_modifier,
    }


def dict_to_intensity(data: dict[str, Any]) -> IntensityParameters:
    """
    Convert dict to IntensityParameters.

    All six fields are required.

    Raises:
        ValidationError: If a field is missing or not numeric
    """
    _object(data, "intensity")
    return IntensityParameters(
        volume=_number(_require(data, "volume", "intensity"), "volume"),
        weight=_number(_require(data, "weight", "intensity"), "weight"),
        rir=_number(_require(data, "rir", "intensity"), "rir"),
        rpe=_number(_require(data, "rpe", "intensity"), "rpe"),
        sets=_number(_require(data, "sets", "intensity"), "sets"),
        reps_modifier=_number(_require(data, "repsModifier", "intensity"), "repsModifier"),
    )


def week_intensity_to_dict(week: WeekIntensity) -> dict[str, Any]:
    """Label and notes are omitted when unset."""
    d: dict[str, Any] = {
        "week": week.week,
        "intensity": intensity_to_dict(week.intensity),
        "isDeload": week.is_deload,
    }
    if week.label is not None:
        d["label"] = week.label
    if week.notes is not None:
        d["notes"] = week.notes
    return d


def dict_to_week_intensity(data: dict[str, Any]) -> WeekIntensity:
    week = _require(_object(data, "week entry"), "week", "week entry")
    if not isinstance(week, int) or isinstance(week, bool) or week < 1:
        raise ValidationError(f"week must be a positive integer, got {week!r}")
    return WeekIntensity(
        week=week,
        intensity=dict_to_intensity(_require(data, "intensity", f"week {week}")),
        is_deload=bool(_optional_bool(data, "isDeload")),
        label=_optional_str(data, "label"),
        notes=_optional_str(data, "notes"),
    )


# ---------------------------------------------------------------------------
# Strategy and settings
# ---------------------------------------------------------------------------


def strategy_to_dict(strategy: ProgressionStrategy) -> dict[str, Any]:
    adj = strategy.secondary_adjustments
    con = strategy.constraints
    constraints: dict[str, bool] = {}
    if con.maintain_reps is not None:
        constraints["maintainReps"] = con.maintain_reps
    if con.maintain_sets is not None:
        constraints["maintainSets"] = con.maintain_sets
    if con.maintain_rir is not None:
        constraints["maintainRIR"] = con.maintain_rir
    return {
        "primary": strategy.primary,
        "secondaryAdjustments": {
            "sets": adj.sets,
            "reps": adj.reps,
            "rir": adj.rir,
            "rest": adj.rest,
        },
        "constraints": constraints,
    }


def dict_to_strategy(data: dict[str, Any]) -> ProgressionStrategy:
    """
    Convert dict to ProgressionStrategy.

    Raises:
        ValidationError: If primary is missing or not a known focus
    """
    primary = _require(_object(data, "progressionStrategy"), "primary", "progressionStrategy")
    if primary not in PRIMARY_FOCUSES:
        raise ValidationError(f"Invalid primary: {primary}. Must be one of {PRIMARY_FOCUSES}")

    adj = _object(data.get("secondaryAdjustments") or {}, "secondaryAdjustments")
    con = _object(data.get("constraints") or {}, "constraints")
    return ProgressionStrategy(
        primary=primary,
        secondary_adjustments=SecondaryAdjustments(
            sets=bool(_optional_bool(adj, "sets")),
            reps=bool(_optional_bool(adj, "reps")),
            rir=bool(_optional_bool(adj, "rir")),
            rest=bool(_optional_bool(adj, "rest")),
        ),
        constraints=StrategyConstraints(
            maintain_reps=_optional_bool(con, "maintainReps"),
            maintain_sets=_optional_bool(con, "maintainSets"),
            maintain_rir=_optional_bool(con, "maintainRIR"),
        ),
    )


def global_settings_to_dict(settings: GlobalProgressionSettings) -> dict[str, Any]:
    return {
        "autoDeload": settings.auto_deload,
        "deloadFrequency": settings.deload_frequency,
        "deloadIntensity": settings.deload_intensity,
        "mainLiftProgression": settings.main_lift_progression,
        "accessoryProgression": settings.accessory_progression,
        "fatigueThreshold": settings.fatigue_threshold,
    }


def dict_to_global_settings(data: dict[str, Any]) -> GlobalProgressionSettings:
    """Missing keys take the built-in defaults."""
    _object(data, "globalSettings")
    defaults = GlobalProgressionSettings()
    frequency = data.get("deloadFrequency", defaults.deload_frequency)
    if not isinstance(frequency, int) or isinstance(frequency, bool) or frequency < 1:
        raise ValidationError(f"deloadFrequency must be a positive integer, got {frequency!r}")
    auto_deload = _optional_bool(data, "autoDeload")
    return GlobalProgressionSettings(
        auto_deload=defaults.auto_deload if auto_deload is None else auto_deload,
        deload_frequency=frequency,
        deload_intensity=_number(
            data.get("deloadIntensity", defaults.deload_intensity), "deloadIntensity"
        ),
        main_lift_progression=_number(
            data.get("mainLiftProgression", defaults.main_lift_progression), "mainLiftProgression"
        ),
        accessory_progression=_number(
            data.get("accessoryProgression", defaults.accessory_progression),
            "accessoryProgression",
        ),
        fatigue_threshold=_number(
            data.get("fatigueThreshold", defaults.fatigue_threshold), "fatigueThreshold"
        ),
    )


# ---------------------------------------------------------------------------
# Progression
# ---------------------------------------------------------------------------


def progression_to_dict(progression: MesocycleProgression) -> dict[str, Any]:
    return {
        "id": progression.id,
        "mesocycleId": progression.mesocycle_id,
        "baselineWeek": week_intensity_to_dict(progression.baseline_week),
        "weeklyProgressions": [week_intensity_to_dict(w) for w in progression.weekly_progressions],
        "progressionType": progression.progression_type,
        "globalSettings": global_settings_to_dict(progression.global_settings),
        "progressionStrategy": strategy_to_dict(progression.progression_strategy),
    }


def dict_to_progression(data: dict[str, Any]) -> MesocycleProgression:
    """
    Convert dict to MesocycleProgression.

    Weeks are sorted on load; duplicate week numbers are rejected.  A
    missing baselineWeek is taken from week 1.

    Raises:
        ValidationError: If data is invalid
    """
    _object(data, "progression")
    progression_type = data.get("progressionType", "linear")
    if progression_type not in PROGRESSION_TYPES:
        raise ValidationError(
            f"Invalid progressionType: {progression_type}. Must be one of {PROGRESSION_TYPES}"
        )

    weeks = sorted(
        (
            dict_to_week_intensity(w)
            for w in _array(data.get("weeklyProgressions", []), "weeklyProgressions")
        ),
        key=lambda w: w.week,
    )
    numbers = [w.week for w in weeks]
    if len(numbers) != len(set(numbers)):
        raise ValidationError(f"Duplicate week numbers in weeklyProgressions: {numbers}")

    if data.get("baselineWeek") is not None:
        baseline = dict_to_week_intensity(data["baselineWeek"])
    else:
        baseline = next((w for w in weeks if w.week == 1), WeekIntensity(week=1))

    return MesocycleProgression(
        id=str(data.get("id", "")),
        mesocycle_id=str(data.get("mesocycleId", "")),
        baseline_week=baseline,
        weekly_progressions=tuple(weeks),
        progression_type=progression_type,
        global_settings=dict_to_global_settings(data.get("globalSettings") or {}),
        progression_strategy=dict_to_strategy(
            _require(data, "progressionStrategy", "progression")
        ),
    )


# ---------------------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------------------


def exercise_defaults_to_dict(defaults: ExerciseDefaults) -> dict[str, Any]:
    d: dict[str, Any] = {"sets": defaults.sets, "reps": defaults.reps, "rest": defaults.rest}
    if defaults.rir is not None:
        d["rir"] = defaults.rir
    if defaults.rpe is not None:
        d["rpe"] = defaults.rpe
    return d


def dict_to_exercise_defaults(data: dict[str, Any]) -> ExerciseDefaults:
    sets = _require(_object(data, "exercise defaults"), "sets", "exercise defaults")
    if not isinstance(sets, int) or isinstance(sets, bool) or sets < 0:
        raise ValidationError(f"sets must be a non-negative integer, got {sets!r}")
    return ExerciseDefaults(
        sets=sets,
        reps=str(_require(data, "reps", "exercise defaults")),
        rest=str(_require(data, "rest", "exercise defaults")),
        rir=_optional_number(data, "rir"),
        rpe=_optional_number(data, "rpe"),
    )


def workout_exercise_to_dict(slot: WorkoutExerciseTemplate) -> dict[str, Any]:
    d: dict[str, Any] = {
        "exerciseId": slot.exercise_id,
        "orderIdx": slot.order_idx,
        "defaults": exercise_defaults_to_dict(slot.defaults),
    }
    if slot.exercise_name is not None:
        d["exerciseName"] = slot.exercise_name
    return d


def dict_to_workout_exercise(data: dict[str, Any]) -> WorkoutExerciseTemplate:
    _object(data, "workout exercise")
    order_idx = data.get("orderIdx", 0)
    if not isinstance(order_idx, int) or isinstance(order_idx, bool):
        raise ValidationError(f"orderIdx must be an integer, got {order_idx!r}")
    return WorkoutExerciseTemplate(
        exercise_id=str(_require(data, "exerciseId", "workout exercise")),
        defaults=dict_to_exercise_defaults(_require(data, "defaults", "workout exercise")),
        order_idx=order_idx,
        exercise_name=_optional_str(data, "exerciseName"),
    )


def workout_template_to_dict(template: WorkoutTemplate) -> dict[str, Any]:
    return {
        "id": template.id,
        "label": template.label,
        "daysOfWeek": list(template.days_of_week),
        "exercises": [workout_exercise_to_dict(e) for e in template.exercises],
    }


def dict_to_workout_template(data: dict[str, Any]) -> WorkoutTemplate:
    """
    Convert dict to WorkoutTemplate.

    Raises:
        ValidationError: If a field is missing or a weekday is out of range
    """
    _object(data, "workout template")
    days = _array(data.get("daysOfWeek", []), "daysOfWeek")
    for day in days:
        if not isinstance(day, int) or isinstance(day, bool) or not 0 <= day <= 6:
            raise ValidationError(f"Invalid weekday {day!r}; expected 0 (Sunday) .. 6 (Saturday)")
    return WorkoutTemplate(
        id=str(_require(data, "id", "workout template")),
        label=str(_require(data, "label", "workout template")),
        days_of_week=tuple(sorted(set(days))),
        exercises=tuple(
            dict_to_workout_exercise(e) for e in _array(data.get("exercises", []), "exercises")
        ),
    )


def resolved_parameters_to_dict(params: ResolvedParameters) -> dict[str, Any]:
    d: dict[str, Any] = {
        "sets": params.sets,
        "reps": params.reps,
        "rest": params.rest,
        "weightModifier": params.weight_percent,
    }
    if params.rir is not None:
        d["rir"] = params.rir
    if params.rpe is not None:
        d["rpe"] = params.rpe
    if params.description:
        d["changeDescription"] = params.description
    return d


def prescription_to_dict(prescription: ExercisePrescription) -> dict[str, Any]:
    d: dict[str, Any] = {
        "exerciseId": prescription.exercise_id,
        "orderIdx": prescription.order_idx,
        "exerciseClass": prescription.exercise_class,
        "defaults": exercise_defaults_to_dict(prescription.defaults),
        "parameters": resolved_parameters_to_dict(prescription.parameters),
    }
    if prescription.exercise_name is not None:
        d["exerciseName"] = prescription.exercise_name
    return d


def workout_instance_to_dict(instance: DatedWorkoutInstance) -> dict[str, Any]:
    d: dict[str, Any] = {
        "date": instance.date,
        "label": instance.label,
        "weekNumber": instance.week_number,
        "templateId": instance.template_id,
        "isDeload": instance.is_deload,
        "exercises": [prescription_to_dict(e) for e in instance.exercises],
    }
    if instance.intensity is not None:
        d["intensity"] = intensity_to_dict(instance.intensity)
    return d


def workouts_to_json(instances: list[DatedWorkoutInstance]) -> str:
    """Pretty-printed JSON array of dated workouts."""
    return json.dumps([workout_instance_to_dict(w) for w in instances], indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Compact CLI formats
# ---------------------------------------------------------------------------

_DEFAULT_REST = "120s"  # Used when rest is omitted from an exercise string

_EXERCISE_RE = re.compile(
    r"^(?P<name>[^:]+?)\s*:\s*"
    r"(?P<sets>\d+)\s*[xX×]\s*(?P<reps>\d+(?:\s*-\s*\d+)?|[A-Za-z]+)"
    r"(?:\s*@\s*(?:(?P<rpe>rpe\s*\d+(?:\.\d+)?)|(?P<rir>\d+(?:\.\d+)?)))?"
    r"(?:\s*/\s*(?P<rest>\d+)\s*s)?\s*$",
    re.IGNORECASE,
)

_WEEKDAYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
_WEEKDAY_ABBREVIATIONS = tuple(d[:3] for d in _WEEKDAYS)


def slugify(name: str) -> str:
    """'Bench Press' -> 'bench-press'."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def parse_exercise_string(text: str, order_idx: int = 0) -> WorkoutExerciseTemplate:
    """
    Parse one exercise in compact form.

    Formats:
        NAME:SETSxREPS@RIR/RESTs    e.g. "Bench Press:3x8-10@2/120s"
        NAME:SETSxREPS@rpeN/RESTs   e.g. "Squat:5x5@rpe8/180s"
        NAME:SETSxREPS              rest defaults to 120 s, no RIR/RPE

    Raises:
        ValidationError: If format is invalid
    """
    m = _EXERCISE_RE.match(text.strip())
    if not m:
        raise ValidationError(
            f"Invalid exercise format: '{text}'.\n"
            f"Use: NAME:SETSxREPS@RIR/RESTs (e.g. 'Bench Press:3x8-10@2/120s')\n"
            f"     or NAME:SETSxREPS@rpeN/RESTs (e.g. 'Squat:5x5@rpe8/180s')."
        )

    name = m.group("name").strip()
    reps = re.sub(r"\s+", "", m.group("reps"))
    rir = float(m.group("rir")) if m.group("rir") else None
    rpe = float(m.group("rpe")[3:].strip()) if m.group("rpe") else None
    if rpe is not None and rpe > 10:
        raise ValidationError(f"RPE must be at most 10, got {rpe:g}")
    rest = f"{int(m.group('rest'))}s" if m.group("rest") else _DEFAULT_REST

    return WorkoutExerciseTemplate(
        exercise_id=slugify(name),
        defaults=ExerciseDefaults(
            sets=int(m.group("sets")),
            reps=reps,
            rest=rest,
            rir=int(rir) if rir is not None and rir.is_integer() else rir,
            rpe=rpe,
        ),
        order_idx=order_idx,
        exercise_name=name,
    )


def parse_weekdays(text: str) -> tuple[int, ...]:
    """
    Parse a weekday list into sorted indices (0=Sunday .. 6=Saturday).

    Accepts names ("mon,wed", "Monday") or numbers ("1,3").

    Raises:
        ValidationError: If the list is empty or a day is not recognised
    """
    days: set[int] = set()
    for part in (p.strip().lower() for p in text.split(",")):
        if not part:
            continue
        if part.isdigit():
            day = int(part)
            if not 0 <= day <= 6:
                raise ValidationError(f"Invalid weekday {day}; expected 0 (Sunday) .. 6 (Saturday)")
        elif part in _WEEKDAYS:
            day = _WEEKDAYS.index(part)
        elif part in _WEEKDAY_ABBREVIATIONS:
            day = _WEEKDAY_ABBREVIATIONS.index(part)
        else:
            raise ValidationError(f"Invalid weekday: '{part}'. Use mon,wed or 1,3")
        days.add(day)

    if not days:
        raise ValidationError("Weekday list cannot be empty")
    return tuple(sorted(days))
