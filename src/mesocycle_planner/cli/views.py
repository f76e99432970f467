"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of progressions and workouts.
"""

from rich.console import Console
from rich.table import Table

from ..core.config import WEEKDAY_NAMES
from ..core.intensity import intensity_score
from ..core.models import (
    DatedWorkoutInstance,
    ExerciseDefaults,
    IntensityParameters,
    MesocycleProgression,
    ResolvedParameters,
    WorkoutTemplate,
)
from ..core.resolution import format_number
from ..core.strategies import describe_strategy, strategy_name
from ..core.templates import ProgressionTemplate

console = Console()
err_console = Console(stderr=True)


def _fmt_intensity_cells(params: IntensityParameters) -> list[str]:
    return [
        f"{format_number(params.volume)}%",
        f"{format_number(params.weight)}%",
        format_number(params.rir),
        format_number(params.rpe),
        f"x{format_number(params.sets)}",
        f"x{format_number(params.reps_modifier)}",
    ]


def _add_intensity_columns(table: Table) -> None:
    table.add_column("Volume", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("RIR", justify="right")
    table.add_column("RPE", justify="right")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")


def _fmt_prescription(params: ExerciseDefaults | ResolvedParameters) -> str:
    """'3x8-10 @RIR 1 / 90s' style one-liner."""
    effort = ""
    if params.rir is not None:
        effort = f" @RIR {format_number(params.rir)}"
    elif params.rpe is not None:
        effort = f" @RPE {format_number(params.rpe)}"
    return f"{params.sets}x{params.reps}{effort} / {params.rest}"


def print_templates(templates: list[ProgressionTemplate]) -> None:
    """
    Print the template catalog.

    Args:
        templates: Templates to display
    """
    if not templates:
        console.print("[yellow]No templates match.[/yellow]")
        return

    table = Table(title="Progression Templates")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Type", style="magenta")
    table.add_column("Goal", style="green")
    table.add_column("Difficulty")
    table.add_column("Weeks", justify="right")
    table.add_column("Description", style="dim")

    for t in templates:
        table.add_row(
            t.id, t.name, t.type, t.target_goal, t.difficulty, str(t.duration), t.description
        )

    console.print(table)


def print_week_pattern(title: str, pattern: list[IntensityParameters]) -> None:
    """Print a bare intensity pattern, one row per week."""
    table = Table(title=title)
    table.add_column("Wk", justify="right", style="dim")
    _add_intensity_columns(table)
    table.add_column("Score", justify="right", style="bold")

    for week, params in enumerate(pattern, 1):
        table.add_row(str(week), *_fmt_intensity_cells(params), f"{intensity_score(params):.0f}")

    console.print(table)


def print_progression(progression: MesocycleProgression, title: str = "Progression") -> None:
    """
    Print every week of a progression with its strategy summary.

    Args:
        progression: Progression to display
        title: Table title
    """
    table = Table(title=title)
    table.add_column("Wk", justify="right", style="dim")
    table.add_column("Label", style="cyan")
    _add_intensity_columns(table)
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Notes", style="dim")

    for w in progression.weekly_progressions:
        label = w.label or ""
        if w.is_deload:
            label = f"[yellow]{label or 'deload'}[/yellow]"
        table.add_row(
            str(w.week),
            label,
            *_fmt_intensity_cells(w.intensity),
            f"{intensity_score(w.intensity):.0f}",
            w.notes or "",
        )

    console.print(table)
    print_strategy(progression)


def print_strategy(progression: MesocycleProgression) -> None:
    strategy = progression.progression_strategy
    console.print(
        f"Type: [magenta]{progression.progression_type}[/magenta]  "
        f"Strategy: [bold]{strategy_name(strategy)}[/bold] ({describe_strategy(strategy)})"
    )
    settings = progression.global_settings
    auto = "on" if settings.auto_deload else "off"
    console.print(
        f"[dim]Auto-deload {auto}, every {settings.deload_frequency} weeks; "
        f"deload weeks: {', '.join(map(str, progression.deload_weeks)) or 'none'}[/dim]"
    )


def print_workout_templates(templates: tuple[WorkoutTemplate, ...]) -> None:
    if not templates:
        console.print("[yellow]No workout templates yet. Use 'add-workout'.[/yellow]")
        return

    table = Table(title="Workout Templates")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Label", style="bold")
    table.add_column("Days")
    table.add_column("Exercises")

    for t in templates:
        days = ", ".join(WEEKDAY_NAMES[d][:3] for d in t.days_of_week)
        exercises = "\n".join(
            f"{e.exercise_name or e.exercise_id}: "
            + _fmt_prescription(e.defaults)
            for e in sorted(t.exercises, key=lambda e: e.order_idx)
        )
        table.add_row(t.id, t.label, days, exercises)

    console.print(table)


def print_workouts(workouts: list[DatedWorkoutInstance]) -> None:
    """
    Print dated workouts with resolved prescriptions.

    Args:
        workouts: Materialized workouts to display
    """
    if not workouts:
        console.print("[yellow]No workouts scheduled.[/yellow]")
        return

    table = Table(title="Scheduled Workouts", show_lines=True)
    table.add_column("Wk", justify="right", style="dim")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Workout", style="bold")
    table.add_column("Exercise")
    table.add_column("Prescription")
    table.add_column("Weight", justify="right")
    table.add_column("Changes", style="dim")

    for w in workouts:
        label = f"[yellow]{w.label}[/yellow]" if w.is_deload else w.label
        for i, e in enumerate(w.exercises):
            p = e.parameters
            table.add_row(
                str(w.week_number) if i == 0 else "",
                w.date if i == 0 else "",
                label if i == 0 else "",
                e.exercise_name or e.exercise_id,
                _fmt_prescription(p),
                f"{format_number(p.weight_percent)}%",
                p.description or "",
            )

    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
