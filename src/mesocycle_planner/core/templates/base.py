"""
Base type for progression templates.

A ProgressionTemplate is a named, reusable week-by-week intensity shape
of some natural length.  Templates are read-only catalog data; scaling a
template to a mesocycle produces new IntensityParameters lists and never
touches the template itself.
"""

from dataclasses import dataclass
from typing import Literal

from ..models import IntensityParameters, ProgressionType

TargetGoal = Literal["strength", "hypertrophy", "endurance", "powerlifting"]
Difficulty = Literal["beginner", "intermediate", "advanced"]

TARGET_GOALS: tuple[str, ...] = ("strength", "hypertrophy", "endurance", "powerlifting")
DIFFICULTIES: tuple[str, ...] = ("beginner", "intermediate", "advanced")


@dataclass(frozen=True)
class ProgressionTemplate:
    """
    Full definition of one progression shape.

    ``duration`` is the suggested length shown to users; ``len(week_pattern)``
    is what scaling uses.
    """

    # Identity
    id: str  # e.g. "linear-strength"
    name: str  # e.g. "Linear Strength Progression"
    description: str

    # Shape
    type: ProgressionType
    week_pattern: tuple[IntensityParameters, ...]  # original, unscaled

    # Catalog tags
    target_goal: TargetGoal
    difficulty: Difficulty
    duration: int  # suggested weeks

    def __post_init__(self) -> None:
        if not self.week_pattern:
            raise ValueError(f"Template {self.id!r} has an empty week_pattern")
        if self.target_goal not in TARGET_GOALS:
            raise ValueError(f"Invalid target_goal: {self.target_goal}")
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(f"Invalid difficulty: {self.difficulty}")

    @property
    def original_length(self) -> int:
        return len(self.week_pattern)
