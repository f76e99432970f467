"""
Calendar materialization tests.

2024-01-01 is a Monday, so 2023-12-31 is the Sunday that opens the
calendar week of 2024-01-03 (Wednesday).
"""

from datetime import date

import pytest

from mesocycle_planner.core.calendar import (
    calendar_weekday,
    materialize,
    mesocycle_end_date,
    start_of_calendar_week,
    workouts_to_templates,
)
from mesocycle_planner.core.editor import ProgressionEditor
from mesocycle_planner.core.models import (
    ExerciseDefaults,
    IntensityParameters,
    WorkoutExerciseTemplate,
    WorkoutTemplate,
)
from mesocycle_planner.core.strategies import get_strategy

WEDNESDAY = date(2024, 1, 3)

BENCH = WorkoutExerciseTemplate(
    exercise_id="bench-press",
    exercise_name="Bench Press",
    order_idx=0,
    defaults=ExerciseDefaults(sets=3, reps="8-10", rest="120s", rir=2),
)
CURL = WorkoutExerciseTemplate(
    exercise_id="curl",
    exercise_name="Barbell Curl",
    order_idx=1,
    defaults=ExerciseDefaults(sets=3, reps="12", rest="60s", rpe=8),
)

UPPER = WorkoutTemplate(id="upper", label="Upper", days_of_week=(1, 3), exercises=(CURL, BENCH))
LOWER = WorkoutTemplate(id="lower", label="Lower", days_of_week=(3, 5), exercises=())


class TestCalendarHelpers:
    def test_weekday_index(self):
        assert calendar_weekday(date(2023, 12, 31)) == 0  # Sunday
        assert calendar_weekday(date(2024, 1, 1)) == 1  # Monday
        assert calendar_weekday(date(2024, 1, 6)) == 6  # Saturday

    def test_start_of_calendar_week(self):
        assert start_of_calendar_week(WEDNESDAY) == date(2023, 12, 31)
        assert start_of_calendar_week(date(2023, 12, 31)) == date(2023, 12, 31)

    def test_end_date(self):
        assert mesocycle_end_date(WEDNESDAY, 4) == date(2024, 1, 31)


class TestMaterialize:
    def test_partial_first_week_drops_earlier_days(self):
        workouts = materialize(WEDNESDAY, 2, [UPPER])
        assert [w.date for w in workouts] == ["2024-01-03", "2024-01-08", "2024-01-10"]
        assert [w.week_number for w in workouts] == [1, 2, 2]
        assert workouts[0].label == "Upper - Week 1"
        assert workouts[2].label == "Upper - Week 2"

    def test_sunday_start_gives_full_weeks(self):
        workouts = materialize(date(2023, 12, 31), 2, [UPPER])
        assert len(workouts) == 4

    def test_same_day_keeps_template_order(self):
        workouts = materialize(WEDNESDAY, 1, [LOWER, UPPER])
        assert [(w.date, w.template_id) for w in workouts] == [
            ("2024-01-03", "lower"),
            ("2024-01-03", "upper"),
            ("2024-01-05", "lower"),
        ]

    def test_exercises_ordered_and_classified(self):
        w = materialize(WEDNESDAY, 1, [UPPER])[0]
        assert [e.exercise_id for e in w.exercises] == ["bench-press", "curl"]
        assert [e.exercise_class for e in w.exercises] == ["compound", "isolation"]

    def test_without_progression_defaults_pass_through(self):
        w = materialize(WEDNESDAY, 1, [UPPER])[0]
        assert w.intensity is None
        assert w.is_deload is False
        bench = w.exercises[0]
        assert bench.parameters.as_defaults() == BENCH.defaults
        assert bench.parameters.weight_percent == 100

    def test_resolves_against_each_week(self):
        ed = ProgressionEditor(3, strategy=get_strategy("strength"))
        ed.update_week(2, IntensityParameters(weight=105, rir=1))
        ed.toggle_deload(3)
        workouts = materialize(WEDNESDAY, 3, [UPPER], ed.snapshot())

        by_week = {w.week_number: w for w in workouts}
        week1_bench = by_week[1].exercises[0].parameters
        week2_bench = by_week[2].exercises[0].parameters
        assert week1_bench.weight_percent == 100
        assert week1_bench.description is None
        assert week2_bench.weight_percent == 105
        assert week2_bench.rir == 1
        assert week2_bench.description == "105% weight • RIR 1"
        assert by_week[3].is_deload is True
        assert by_week[3].exercises[0].parameters.weight_percent == 85

    def test_weeks_beyond_progression_pass_through(self):
        ed = ProgressionEditor(1, strategy=get_strategy("strength"))
        ed.update_week(1, IntensityParameters(weight=110))
        workouts = materialize(WEDNESDAY, 2, [UPPER], ed.snapshot())
        last = workouts[-1]
        assert last.week_number == 2
        assert last.intensity is None
        assert last.exercises[0].parameters.weight_percent == 100

    def test_total_sets(self):
        w = materialize(WEDNESDAY, 1, [UPPER])[0]
        assert w.total_sets == 6

    def test_rejects_zero_weeks(self):
        with pytest.raises(ValueError):
            materialize(WEDNESDAY, 0, [UPPER])


class TestWorkoutsToTemplates:
    def test_rebuilds_templates(self):
        workouts = materialize(WEDNESDAY, 2, [UPPER, LOWER])
        templates = workouts_to_templates(workouts)
        assert [t.label for t in templates] == ["Upper", "Lower"]

        upper = templates[0]
        assert upper.id == "upper"
        assert upper.days_of_week == (1, 3)
        assert [e.exercise_id for e in upper.exercises] == ["bench-press", "curl"]
        assert upper.exercises[0].defaults == BENCH.defaults

    def test_uses_original_defaults_not_resolved(self):
        ed = ProgressionEditor(1, strategy=get_strategy("hypertrophy"))
        ed.update_week(1, IntensityParameters(sets=1.5))
        workouts = materialize(WEDNESDAY, 1, [UPPER], ed.snapshot())
        assert workouts[0].exercises[0].parameters.sets == 5
        assert workouts_to_templates(workouts)[0].exercises[0].defaults.sets == 3
