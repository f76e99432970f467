"""
Data models for mesocycle-planner.

All core dataclasses representing intensity profiles, progression
strategies, mesocycle progressions, workout templates and the dated
workouts materialized from them.  Value types are frozen; editing goes
through ``dataclasses.replace`` so a snapshot handed to a listener can
never change underneath it.
"""

from dataclasses import dataclass, field, fields
from typing import Literal

from .config import (
    ACCESSORY_PROGRESSION_PERCENT,
    AUTO_DELOAD,
    BASELINE_REPS_MULTIPLIER,
    BASELINE_RIR,
    BASELINE_RPE,
    BASELINE_SETS_MULTIPLIER,
    BASELINE_VOLUME,
    BASELINE_WEIGHT,
    DELOAD_FREQUENCY_WEEKS,
    DELOAD_INTENSITY_PERCENT,
    FATIGUE_THRESHOLD_RPE,
    MAIN_LIFT_PROGRESSION_PERCENT,
)

ProgressionType = Literal["linear", "wave", "block", "undulating", "step", "custom"]
PrimaryFocus = Literal["weight", "volume", "intensity", "density"]
ExerciseClass = Literal["compound", "isolation", "accessory"]

PROGRESSION_TYPES: tuple[str, ...] = ("linear", "wave", "block", "undulating", "step", "custom")
PRIMARY_FOCUSES: tuple[str, ...] = ("weight", "volume", "intensity", "density")


@dataclass(frozen=True)
class IntensityParameters:
    """
    Target training stress of one week relative to baseline.

    Every field is independent: changing ``rir`` does not move ``rpe``.
    """

    volume: float = BASELINE_VOLUME  # percent, 100 = week 1
    weight: float = BASELINE_WEIGHT  # percent of baseline load
    rir: float = BASELINE_RIR  # reps-in-reserve target (lower = harder)
    rpe: float = BASELINE_RPE  # perceived exertion target (higher = harder)
    sets: float = BASELINE_SETS_MULTIPLIER  # multiplier on prescribed sets
    reps_modifier: float = BASELINE_REPS_MULTIPLIER  # multiplier on prescribed reps


@dataclass(frozen=True)
class IntensityOverrides:
    """
    Partial update for IntensityParameters.

    ``None`` means "leave the field alone".
    """

    volume: float | None = None
    weight: float | None = None
    rir: float | None = None
    rpe: float | None = None
    sets: float | None = None
    reps_modifier: float | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def apply_to(self, params: IntensityParameters) -> IntensityParameters:
        """Merge the set fields over ``params`` and return the result."""
        return IntensityParameters(
            volume=params.volume if self.volume is None else self.volume,
            weight=params.weight if self.weight is None else self.weight,
            rir=params.rir if self.rir is None else self.rir,
            rpe=params.rpe if self.rpe is None else self.rpe,
            sets=params.sets if self.sets is None else self.sets,
            reps_modifier=(
                params.reps_modifier if self.reps_modifier is None else self.reps_modifier
            ),
        )


@dataclass(frozen=True)
class WeekIntensity:
    """One numbered week of a mesocycle with its intensity profile."""

    week: int  # 1-based, unique within a progression
    intensity: IntensityParameters = field(default_factory=IntensityParameters)
    is_deload: bool = False
    label: str | None = None  # e.g. "Build Week", "Deload Week"
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.week < 1:
            raise ValueError(f"week must be >= 1, got {self.week}")


@dataclass(frozen=True)
class GlobalProgressionSettings:
    """
    Mesocycle-wide settings.

    Only the auto-deload convenience operation reads these; the resolution
    engine never does.
    """

    auto_deload: bool = AUTO_DELOAD
    deload_frequency: int = DELOAD_FREQUENCY_WEEKS  # every N weeks
    deload_intensity: float = DELOAD_INTENSITY_PERCENT  # percent of normal intensity
    main_lift_progression: float = MAIN_LIFT_PROGRESSION_PERCENT  # weekly weight increase %
    accessory_progression: float = ACCESSORY_PROGRESSION_PERCENT  # weekly volume increase %
    fatigue_threshold: float = FATIGUE_THRESHOLD_RPE  # suggest a deload when reached

    def __post_init__(self) -> None:
        if self.deload_frequency < 1:
            raise ValueError("deload_frequency must be >= 1")


@dataclass(frozen=True)
class SecondaryAdjustments:
    """Which exercise parameters a week may change besides the primary focus."""

    sets: bool = False
    reps: bool = False
    rir: bool = False
    rest: bool = False


@dataclass(frozen=True)
class StrategyConstraints:
    """Hard locks applied after everything else; a set flag always wins."""

    maintain_reps: bool | None = None
    maintain_sets: bool | None = None
    maintain_rir: bool | None = None


@dataclass(frozen=True)
class ProgressionStrategy:
    """Policy deciding which exercise parameters a week's intensity may touch."""

    primary: PrimaryFocus
    secondary_adjustments: SecondaryAdjustments = field(default_factory=SecondaryAdjustments)
    constraints: StrategyConstraints = field(default_factory=StrategyConstraints)

    def __post_init__(self) -> None:
        if self.primary not in PRIMARY_FOCUSES:
            raise ValueError(
                f"Invalid primary focus: {self.primary!r}. Must be one of {PRIMARY_FOCUSES}"
            )


@dataclass(frozen=True)
class MesocycleProgression:
    """
    Complete, consolidated progression of one mesocycle.

    ``weekly_progressions`` is always sorted ascending by week.  ``id`` and
    ``mesocycle_id`` are opaque references owned by whatever stores this.
    """

    id: str
    mesocycle_id: str
    baseline_week: WeekIntensity
    weekly_progressions: tuple[WeekIntensity, ...]
    progression_type: ProgressionType
    global_settings: GlobalProgressionSettings
    progression_strategy: ProgressionStrategy

    def __post_init__(self) -> None:
        weeks = [w.week for w in self.weekly_progressions]
        if weeks != sorted(set(weeks)):
            raise ValueError("weekly_progressions must be strictly ascending by week")
        if self.progression_type not in PROGRESSION_TYPES:
            raise ValueError(f"Invalid progression_type: {self.progression_type}")

    def week(self, number: int) -> WeekIntensity | None:
        """Return the WeekIntensity for ``number`` or None if absent."""
        for w in self.weekly_progressions:
            if w.week == number:
                return w
        return None

    @property
    def deload_weeks(self) -> list[int]:
        return [w.week for w in self.weekly_progressions if w.is_deload]


@dataclass(frozen=True)
class ExerciseDefaults:
    """
    Base prescription of one exercise inside a workout template.

    ``reps`` is a single integer ("10") or a range ("8-10"); ``rest`` has the
    form "{seconds}s".
    """

    sets: int
    reps: str
    rest: str
    rir: float | None = None
    rpe: float | None = None

    def __post_init__(self) -> None:
        if self.sets < 0:
            raise ValueError("sets must be non-negative")


@dataclass(frozen=True)
class ResolvedParameters:
    """Effective parameters of one exercise for one week."""

    sets: int
    reps: str
    rest: str
    rir: float | None = None
    rpe: float | None = None
    weight_percent: float = 100.0
    description: str | None = None  # e.g. "105% weight • RIR 1"

    def as_defaults(self) -> ExerciseDefaults:
        """Drop the weight modifier and description."""
        return ExerciseDefaults(
            sets=self.sets, reps=self.reps, rest=self.rest, rir=self.rir, rpe=self.rpe
        )


@dataclass(frozen=True)
class WorkoutExerciseTemplate:
    """An exercise slot inside a workout template."""

    exercise_id: str
    defaults: ExerciseDefaults
    order_idx: int = 0
    exercise_name: str | None = None


@dataclass(frozen=True)
class WorkoutTemplate:
    """
    A workout repeated every week on the listed weekdays.

    ``days_of_week`` uses 0=Sunday .. 6=Saturday.
    """

    id: str
    label: str
    days_of_week: tuple[int, ...] = ()
    exercises: tuple[WorkoutExerciseTemplate, ...] = ()

    def __post_init__(self) -> None:
        for day in self.days_of_week:
            if not 0 <= day <= 6:
                raise ValueError(f"Invalid weekday {day}; expected 0 (Sunday) .. 6 (Saturday)")


@dataclass(frozen=True)
class ExercisePrescription:
    """One exercise of a dated workout with its defaults and resolved parameters."""

    exercise_id: str
    order_idx: int
    exercise_class: ExerciseClass
    defaults: ExerciseDefaults
    parameters: ResolvedParameters
    exercise_name: str | None = None


@dataclass
class DatedWorkoutInstance:
    """
    A concrete workout on a calendar date.

    Produced by calendar materialization and handed to whatever persists or
    renders workouts.
    """

    date: str  # ISO format: YYYY-MM-DD
    label: str  # "{template label} - Week {n}"
    week_number: int  # 1-indexed
    template_id: str
    intensity: IntensityParameters | None = None  # None when the week has no profile
    is_deload: bool = False
    exercises: list[ExercisePrescription] = field(default_factory=list)

    @property
    def total_sets(self) -> int:
        """Sum of resolved sets across all exercises."""
        return sum(e.parameters.sets for e in self.exercises)
