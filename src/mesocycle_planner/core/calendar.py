"""
Calendar materialization: workout templates + progression -> dated workouts.

Weeks are calendar weeks running Sunday..Saturday.  Week 1 is the calendar
week containing the start date, so a mesocycle that starts mid-week has a
short first week: days before the start date are dropped.
"""

import logging
import re
from datetime import date, timedelta

from .config import DAYS_PER_WEEK
from .models import (
    DatedWorkoutInstance,
    ExercisePrescription,
    MesocycleProgression,
    WorkoutExerciseTemplate,
    WorkoutTemplate,
)
from .resolution import classify_exercise, resolve_exercise

logger = logging.getLogger(__name__)

_WEEK_SUFFIX = re.compile(r" - Week \d+$")


def calendar_weekday(day: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def start_of_calendar_week(day: date) -> date:
    """The Sunday on or before ``day``."""
    return day - timedelta(days=calendar_weekday(day))


def mesocycle_end_date(start_date: date, weeks: int) -> date:
    """Date ``weeks`` whole weeks after ``start_date``."""
    return start_date + timedelta(weeks=weeks)


def _prescribe(
    slot: WorkoutExerciseTemplate,
    week_number: int,
    progression: MesocycleProgression | None,
) -> ExercisePrescription:
    exercise_class = classify_exercise(slot.exercise_name)
    week = progression.week(week_number) if progression is not None else None
    strategy = progression.progression_strategy if progression is not None else None
    return ExercisePrescription(
        exercise_id=slot.exercise_id,
        order_idx=slot.order_idx,
        exercise_class=exercise_class,
        defaults=slot.defaults,
        parameters=resolve_exercise(slot.defaults, week, strategy, exercise_class),
        exercise_name=slot.exercise_name,
    )


def materialize(
    start_date: date,
    weeks: int,
    templates: list[WorkoutTemplate],
    progression: MesocycleProgression | None = None,
) -> list[DatedWorkoutInstance]:
    """
    Turn workout templates into dated, fully resolved workouts.

    Days are visited in calendar order and, within a day, templates in the
    order given.  Each exercise is resolved against its week's intensity;
    with no progression (or no entry for the week) defaults pass through.

    Args:
        start_date: First day of the mesocycle
        weeks: Number of calendar weeks to generate
        templates: Workout templates with their weekdays
        progression: Progression supplying week intensities and strategy

    Returns:
        Dated workouts in chronological order
    """
    if weeks < 1:
        raise ValueError(f"weeks must be >= 1, got {weeks}")

    first_sunday = start_of_calendar_week(start_date)
    workouts: list[DatedWorkoutInstance] = []

    for week_number in range(1, weeks + 1):
        week_start = first_sunday + timedelta(weeks=week_number - 1)
        week = progression.week(week_number) if progression is not None else None

        for offset in range(DAYS_PER_WEEK):
            day = week_start + timedelta(days=offset)
            if day < start_date:
                continue
            weekday = calendar_weekday(day)

            for template in templates:
                if weekday not in template.days_of_week:
                    continue
                slots = sorted(template.exercises, key=lambda s: s.order_idx)
                workouts.append(
                    DatedWorkoutInstance(
                        date=day.isoformat(),
                        label=f"{template.label} - Week {week_number}",
                        week_number=week_number,
                        template_id=template.id,
                        intensity=week.intensity if week is not None else None,
                        is_deload=week.is_deload if week is not None else False,
                        exercises=[_prescribe(s, week_number, progression) for s in slots],
                    )
                )

    logger.debug(
        "materialized %d workouts over %d weeks from %s", len(workouts), weeks, start_date.isoformat()
    )
    return workouts


def workouts_to_templates(instances: list[DatedWorkoutInstance]) -> list[WorkoutTemplate]:
    """
    Rebuild workout templates from dated workouts.

    Workouts are grouped by label with the " - Week N" suffix removed.  The
    first workout of a group supplies the template id and its exercises
    (original defaults, by order_idx); weekdays are collected from every
    workout in the group.
    """
    groups: dict[str, list[DatedWorkoutInstance]] = {}
    for instance in instances:
        base_label = _WEEK_SUFFIX.sub("", instance.label)
        groups.setdefault(base_label, []).append(instance)

    templates: list[WorkoutTemplate] = []
    for label, group in groups.items():
        first = group[0]
        days = sorted({calendar_weekday(date.fromisoformat(w.date)) for w in group})
        exercises = tuple(
            WorkoutExerciseTemplate(
                exercise_id=e.exercise_id,
                defaults=e.defaults,
                order_idx=e.order_idx,
                exercise_name=e.exercise_name,
            )
            for e in sorted(first.exercises, key=lambda e: e.order_idx)
        )
        templates.append(
            WorkoutTemplate(
                id=first.template_id,
                label=label,
                days_of_week=tuple(days),
                exercises=exercises,
            )
        )
    return templates
