"""
Strategy resolution: one exercise, one week, one strategy -> effective parameters.

The resolver is a pure function.  It never raises for odd input: a rep or
rest string it cannot parse is passed through unchanged, and a field the
exercise does not define is skipped.

Order of operations
-------------------
1. Passthrough when the week has no intensity profile or there is no
   strategy: defaults are returned verbatim at 100% weight.
2. The primary branch (weight | volume | intensity | density) computes new
   values and records a change fragment for each value that moved.
3. The constraints pass runs last and restores locked fields to their
   defaults.  Fragments recorded in step 2 are kept even when a constraint
   undoes the change.
"""

import logging
import math
import re

from .config import (
    BASELINE_RIR,
    BASELINE_RPE,
    CHANGE_SEPARATOR,
    DENSITY_REST_FLOOR_SECONDS,
    DENSITY_REST_REDUCTION,
    INTENSITY_WEIGHT_CAP,
    RIR_FLOOR,
    RPE_CAP,
)
from .models import (
    ExerciseClass,
    ExerciseDefaults,
    IntensityParameters,
    ProgressionStrategy,
    ResolvedParameters,
    WeekIntensity,
)

logger = logging.getLogger(__name__)

_COMPOUND_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (r"squat", r"bench", r"deadlift", r"press", r"row", r"pull.*up", r"chin.*up", r"dip")
]
_ISOLATION_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (r"curl", r"extension", r"fly", r"raise", r"shrug", r"calf")
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def classify_exercise(exercise_name: str | None) -> ExerciseClass:
    """
    Classify an exercise by name.

    Compound patterns win over isolation patterns ("Dumbbell Bench Fly" is
    compound); anything unmatched, including a missing name, is accessory.
    """
    if not exercise_name:
        return "accessory"
    for pattern in _COMPOUND_PATTERNS:
        if pattern.search(exercise_name):
            return "compound"
    for pattern in _ISOLATION_PATTERNS:
        if pattern.search(exercise_name):
            return "isolation"
    return "accessory"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, 4.5 -> 5)."""
    return math.floor(value + 0.5)


def parse_leading_int(text: str) -> int | None:
    """Leading integer of ``text`` ("90s" -> 90, "AMRAP" -> None)."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def format_number(value: float) -> str:
    """Render 105.0 as "105" and 102.5 as "102.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def apply_reps_modifier(reps: str, modifier: float) -> str:
    """
    Scale a rep prescription.

    "8-10" x 1.5 -> "12-15" (each bound rounded on its own), "10" x 1.2 ->
    "12".  Strings that do not parse ("AMRAP") come back unchanged, as does
    any input when ``modifier`` is exactly 1.0.
    """
    if modifier == 1.0:
        return reps

    if "-" in reps:
        parts = reps.split("-")
        try:
            low, high = int(parts[0].strip()), int(parts[1].strip())
        except ValueError:
            return reps
        return f"{round_half_up(low * modifier)}-{round_half_up(high * modifier)}"

    value = parse_leading_int(reps)
    if value is None:
        return reps
    return str(round_half_up(value * modifier))


def _shift_rir(
    defaults: ExerciseDefaults,
    intensity: IntensityParameters,
    changes: list[str],
) -> float | None:
    """RIR rule shared by the weight and volume branches (caller checks the gate)."""
    if defaults.rir is None:
        return None
    delta = BASELINE_RIR - intensity.rir
    rir = max(RIR_FLOOR, defaults.rir - delta)
    if rir != defaults.rir:
        changes.append(f"RIR {format_number(rir)}")
    return rir


def resolve_exercise(
    defaults: ExerciseDefaults,
    week_intensity: WeekIntensity | None,
    strategy: ProgressionStrategy | None,
    exercise_class: ExerciseClass | None = None,
) -> ResolvedParameters:
    """
    Compute the effective parameters of one exercise for one week.

    ``exercise_class`` is accepted so per-class rules can be added; the
    current rules treat every class the same.

    Args:
        defaults: Exercise's base prescription from its workout template
        week_intensity: The week's profile, or None
        strategy: Mesocycle strategy, or None

    Returns:
        ResolvedParameters with weight modifier and change description
    """
    if week_intensity is None or strategy is None:
        return ResolvedParameters(
            sets=defaults.sets,
            reps=defaults.reps,
            rest=defaults.rest,
            rir=defaults.rir,
            rpe=defaults.rpe,
            weight_percent=100.0,
            description=None,
        )

    intensity = week_intensity.intensity
    adjust = strategy.secondary_adjustments

    sets = defaults.sets
    reps = defaults.reps
    rir = defaults.rir
    rpe = defaults.rpe
    rest = defaults.rest
    weight = 100.0
    changes: list[str] = []

    if strategy.primary == "weight":
        weight = intensity.weight
        if weight != 100:
            changes.append(f"{format_number(weight)}% weight")
        if adjust.rir and intensity.rir != BASELINE_RIR:
            rir = _shift_rir(defaults, intensity, changes)

    elif strategy.primary == "volume":
        if adjust.sets and intensity.sets != 1.0:
            sets = round_half_up(defaults.sets * intensity.sets)
            if sets != defaults.sets:
                changes.append(f"{sets} sets")
        if adjust.reps and intensity.reps_modifier != 1.0:
            reps = apply_reps_modifier(defaults.reps, intensity.reps_modifier)
            if reps != defaults.reps:
                changes.append(f"{reps} reps")
        if adjust.rir and intensity.rir != BASELINE_RIR:
            rir = _shift_rir(defaults, intensity, changes)

    elif strategy.primary == "intensity":
        delta = BASELINE_RIR - intensity.rir
        if defaults.rir is not None:
            rir = max(RIR_FLOOR, defaults.rir - delta)
            if rir != defaults.rir:
                changes.append(f"RIR {format_number(rir)}")
        elif defaults.rpe is not None:
            rpe = min(RPE_CAP, defaults.rpe + (intensity.rpe - BASELINE_RPE))
            if rpe != defaults.rpe:
                changes.append(f"RPE {format_number(rpe)}")
        if adjust.rir and intensity.weight > 100:
            weight = min(intensity.weight, INTENSITY_WEIGHT_CAP)
            changes.append(f"{format_number(weight)}% weight")

    elif strategy.primary == "density":
        if adjust.rest and defaults.rest:
            original_rest = parse_leading_int(defaults.rest)
            if original_rest is not None:
                reduction = 1 - (intensity.volume / 100) * DENSITY_REST_REDUCTION
                new_rest = max(DENSITY_REST_FLOOR_SECONDS, round_half_up(original_rest * reduction))
                rest = f"{new_rest}s"
                if rest != defaults.rest:
                    changes.append(f"{new_rest}s rest")

    constraints = strategy.constraints
    if constraints.maintain_reps:
        reps = defaults.reps
    if constraints.maintain_sets:
        sets = defaults.sets
    if constraints.maintain_rir:
        rir = defaults.rir

    result = ResolvedParameters(
        sets=sets,
        reps=reps,
        rest=rest,
        rir=rir,
        rpe=rpe,
        weight_percent=weight,
        description=CHANGE_SEPARATOR.join(changes) if changes else None,
    )
    logger.debug(
        "resolved week %d (%s, %s): %s",
        week_intensity.week,
        strategy.primary,
        exercise_class or "unclassified",
        result,
    )
    return result
