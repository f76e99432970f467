"""Calendar commands: add-workout, materialize."""

from datetime import date
from typing import Annotated, Optional

import typer

from ...core.calendar import materialize as materialize_workouts
from ...core.models import WorkoutTemplate
from ...io.serializers import parse_exercise_string, parse_weekdays, slugify, workouts_to_json
from .. import views
from ..app import CLI_ERRORS, PathOption, app, get_store, load_document


@app.command("add-workout")
def add_workout(
    label: Annotated[str, typer.Option("--label", "-l", help="Workout label, e.g. 'Upper A'")],
    days: Annotated[
        str,
        typer.Option("--days", "-d", help="Weekdays, e.g. mon,thu or 1,4 (0 = Sunday)"),
    ],
    exercises: Annotated[
        list[str],
        typer.Option(
            "--exercise",
            "-e",
            help="NAME:SETSxREPS@RIR/RESTs, e.g. 'Bench Press:3x8-10@2/120s' (repeatable)",
        ),
    ],
    path: PathOption = None,
    workout_id: Annotated[
        Optional[str],
        typer.Option("--id", help="Template ID (default: derived from label)"),
    ] = None,
) -> None:
    """
    Add a weekly workout template (replaces one with the same ID).

    Example:

      mesocycle-planner add-workout -l "Upper A" -d mon,thu
        -e "Bench Press:3x8-10@2/120s" -e "Lateral Raise:3x12-15@rpe8/60s"
    """
    store = get_store(path)
    load_document(store)

    try:
        template = WorkoutTemplate(
            id=workout_id or slugify(label),
            label=label,
            days_of_week=parse_weekdays(days),
            exercises=tuple(parse_exercise_string(e, order_idx=i) for i, e in enumerate(exercises)),
        )
        store.add_workout_template(template)
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(
        f"Saved workout '{template.label}' ({len(template.exercises)} exercises)"
    )


@app.command()
def materialize(
    path: PathOption = None,
    weeks: Annotated[
        Optional[int],
        typer.Option("--weeks", "-w", help="Weeks to generate (default: mesocycle length)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print workouts as JSON instead of a table"),
    ] = False,
) -> None:
    """
    Generate dated workouts with every exercise resolved for its week.
    """
    store = get_store(path)
    document = load_document(store)

    if weeks is None:
        weeks = document.weeks
    try:
        workouts = materialize_workouts(
            date.fromisoformat(document.start_date),
            weeks,
            list(document.workout_templates),
            document.progression,
        )
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_output:
        typer.echo(workouts_to_json(workouts))
        return

    views.print_workouts(workouts)
    views.print_info(f"{len(workouts)} workouts over {weeks} weeks")
