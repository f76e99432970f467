"""Progression commands: init, show, apply-template, set-week, deload, preset, auto-deload, label, notes, strategy."""

import uuid
from datetime import date
from typing import Annotated, Optional

import typer

from ...core.calendar import mesocycle_end_date
from ...core.editor import ProgressionEditor
from ...core.engine.config_loader import default_mesocycle_weeks
from ...core.intensity import DEFAULT_INTENSITY, INTENSITY_PRESETS
from ...core.models import (
    IntensityOverrides,
    ProgressionStrategy,
    SecondaryAdjustments,
    StrategyConstraints,
)
from ...core.strategies import DEFAULT_STRATEGIES, get_strategy
from ...io.mesocycle_store import MesocycleDocument
from ...io.serializers import ValidationError, validate_date
from .. import views
from ..app import CLI_ERRORS, PathOption, app, get_store, load_document, open_editor

# Intensity options shared by set-week and apply-template
VolumeOption = Annotated[Optional[float], typer.Option("--volume", help="Volume %, 100 = baseline")]
WeightOption = Annotated[Optional[float], typer.Option("--weight", help="Weight %, 100 = baseline")]
RirOption = Annotated[Optional[float], typer.Option("--rir", help="Reps-in-reserve target")]
RpeOption = Annotated[Optional[float], typer.Option("--rpe", help="RPE target")]
SetsOption = Annotated[Optional[float], typer.Option("--sets", help="Sets multiplier, e.g. 1.1")]
RepsOption = Annotated[
    Optional[float], typer.Option("--reps-modifier", help="Reps multiplier, e.g. 1.2")
]


def _parse_flags(text: str | None, allowed: tuple[str, ...], option: str) -> set[str]:
    if not text:
        return set()
    flags = {p.strip().lower() for p in text.split(",") if p.strip()}
    unknown = flags - set(allowed)
    if unknown:
        raise ValidationError(
            f"Unknown {option} value(s): {', '.join(sorted(unknown))}. Use: {', '.join(allowed)}"
        )
    return flags


@app.command()
def init(
    path: PathOption = None,
    title: Annotated[str, typer.Option("--title", help="Mesocycle title")] = "Mesocycle",
    weeks: Annotated[
        Optional[int],
        typer.Option("--weeks", "-w", help="Number of weeks (default from planner.yaml)"),
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="Start date YYYY-MM-DD (default: today)"),
    ] = None,
    template_id: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Progression template to apply"),
    ] = None,
    strategy: Annotated[
        Optional[str],
        typer.Option("--strategy", help="Strategy preset: strength, hypertrophy, peaking, conditioning"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing mesocycle file"),
    ] = False,
) -> None:
    """
    Create a new mesocycle file with a default progression.

    With --template the template is scaled to the mesocycle and its goal
    picks the strategy; --strategy overrides that choice.
    """
    store = get_store(path)

    try:
        start_date = validate_date(start) if start else date.today().isoformat()
        n_weeks = weeks if weeks is not None else default_mesocycle_weeks()
        editor = ProgressionEditor(
            n_weeks,
            progression_id=uuid.uuid4().hex,
            mesocycle_id=uuid.uuid4().hex,
        )
        if template_id:
            editor.apply_template(template_id)
        if strategy:
            editor.set_strategy(get_strategy(strategy))
        progression = editor.settle()
        store.init(
            MesocycleDocument(
                title=title, weeks=n_weeks, start_date=start_date, progression=progression
            ),
            overwrite=force,
        )
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Created {n_weeks}-week mesocycle '{title}' at {store.path}")
    views.print_progression(progression, title=title)


@app.command()
def show(path: PathOption = None) -> None:
    """
    Show the mesocycle: weeks, strategy and workout templates.
    """
    store = get_store(path)
    document = load_document(store)

    start = date.fromisoformat(document.start_date)
    end = mesocycle_end_date(start, document.weeks)
    views.console.print(
        f"[bold cyan]{document.title}[/bold cyan]  {document.start_date} -> {end.isoformat()} "
        f"({document.weeks} weeks)"
    )
    views.print_progression(document.progression, title="Weekly Progression")
    views.print_workout_templates(document.workout_templates)


@app.command("apply-template")
def apply_template(
    template_id: Annotated[str, typer.Argument(help="Template ID, e.g. linear-strength")],
    path: PathOption = None,
    volume: VolumeOption = None,
    weight: WeightOption = None,
    rir: RirOption = None,
    rpe: RpeOption = None,
    sets: SetsOption = None,
    reps_modifier: RepsOption = None,
) -> None:
    """
    Replace all weeks with a template scaled to this mesocycle.

    Intensity options override that field in every week.
    """
    store = get_store(path)
    document = load_document(store)
    editor = open_editor(store, document)

    overrides = IntensityOverrides(
        volume=volume, weight=weight, rir=rir, rpe=rpe, sets=sets, reps_modifier=reps_modifier
    )
    try:
        progression = editor.apply_template(template_id, overrides)
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Applied template '{template_id}'")
    views.print_progression(progression)


@app.command("set-week")
def set_week(
    week: Annotated[int, typer.Argument(help="Week number (1-based)")],
    path: PathOption = None,
    volume: VolumeOption = None,
    weight: WeightOption = None,
    rir: RirOption = None,
    rpe: RpeOption = None,
    sets: SetsOption = None,
    reps_modifier: RepsOption = None,
    deload: Annotated[
        Optional[bool],
        typer.Option("--deload/--no-deload", help="Flag or unflag the week as deload"),
    ] = None,
) -> None:
    """
    Change one week's intensity.

    Only the given fields change.  --no-deload on a deload week restores the
    intensity it had before the deload.
    """
    store = get_store(path)
    document = load_document(store)
    editor = open_editor(store, document)

    current = document.progression.week(week)
    base = current.intensity if current is not None else DEFAULT_INTENSITY
    overrides = IntensityOverrides(
        volume=volume, weight=weight, rir=rir, rpe=rpe, sets=sets, reps_modifier=reps_modifier
    )
    try:
        progression = editor.update_week(week, overrides.apply_to(base), is_deload=deload)
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Week {week} updated")
    views.print_progression(progression)


@app.command()
def deload(
    week: Annotated[int, typer.Argument(help="Week number (1-based)")],
    path: PathOption = None,
) -> None:
    """
    Toggle a week in or out of deload.

    Taking a week out of deload restores its previous intensity.
    """
    store = get_store(path)
    document = load_document(store)
    editor = open_editor(store, document)

    try:
        progression = editor.toggle_deload(week)
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    state = "now a deload" if progression.week(week).is_deload else "no longer a deload"
    views.print_success(f"Week {week} is {state}")
    views.print_progression(progression)


@app.command()
def preset(
    week: Annotated[int, typer.Argument(help="Week number (1-based)")],
    name: Annotated[str, typer.Argument(help=f"Preset: {', '.join(INTENSITY_PRESETS)}")],
    path: PathOption = None,
) -> None:
    """
    Apply an intensity preset to one week.
    """
    store = get_store(path)
    document = load_document(store)
    editor = open_editor(store, document)

    try:
        progression = editor.apply_preset(week, name)
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Applied preset '{name}' to week {week}")
    views.print_progression(progression)


@app.command("auto-deload")
def auto_deload(
    path: PathOption = None,
    frequency: Annotated[
        Optional[int],
        typer.Option("--frequency", "-n", help="Deload every N weeks (default from settings)"),
    ] = None,
) -> None:
    """
    Deload every Nth week that is not already a deload.
    """
    store = get_store(path)
    document = load_document(store)
    editor = open_editor(store, document)

    before = editor.snapshot().deload_weeks
    try:
        progression = editor.apply_auto_deload(frequency)
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if progression.deload_weeks == before:
        views.print_warning("No weeks changed; every scheduled deload is already in place.")
    views.print_success(
        f"Deload weeks: {', '.join(map(str, progression.deload_weeks)) or 'none'}"
    )
    views.print_progression(progression)


@app.command()
def label(
    week: Annotated[int, typer.Argument(help="Week number (1-based)")],
    text: Annotated[str, typer.Argument(help="Label text; empty string clears it")],
    path: PathOption = None,
) -> None:
    """
    Set a week's label.
    """
    store = get_store(path)
    document = load_document(store)
    editor = open_editor(store, document)

    try:
        editor.update_label(week, text)
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Week {week} label {'set' if text else 'cleared'}")


@app.command()
def notes(
    week: Annotated[int, typer.Argument(help="Week number (1-based)")],
    text: Annotated[str, typer.Argument(help="Notes text; empty string clears them")],
    path: PathOption = None,
) -> None:
    """
    Set a week's notes.
    """
    store = get_store(path)
    document = load_document(store)
    editor = open_editor(store, document)

    try:
        editor.update_notes(week, text)
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Week {week} notes {'set' if text else 'cleared'}")


@app.command()
def strategy(
    name: Annotated[
        Optional[str],
        typer.Argument(help=f"Strategy preset: {', '.join(DEFAULT_STRATEGIES)}"),
    ] = None,
    path: PathOption = None,
    primary: Annotated[
        Optional[str],
        typer.Option("--primary", help="Custom strategy focus: weight, volume, intensity, density"),
    ] = None,
    adjust: Annotated[
        Optional[str],
        typer.Option("--adjust", help="Secondary adjustments, e.g. sets,reps,rir,rest"),
    ] = None,
    keep: Annotated[
        Optional[str],
        typer.Option("--keep", help="Locked fields, e.g. reps,sets,rir"),
    ] = None,
    progression_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Progression type label, e.g. linear, wave, custom"),
    ] = None,
) -> None:
    """
    Show or change the progression strategy.

    Give a preset NAME, or build a custom strategy with --primary, --adjust
    and --keep.  Without arguments the current strategy is shown.
    """
    store = get_store(path)
    document = load_document(store)
    editor = open_editor(store, document)

    try:
        if name is not None:
            editor.set_strategy(get_strategy(name))
        elif primary is not None:
            adjustments = _parse_flags(adjust, ("sets", "reps", "rir", "rest"), "--adjust")
            locks = _parse_flags(keep, ("reps", "sets", "rir"), "--keep")
            editor.set_strategy(
                ProgressionStrategy(
                    primary=primary,
                    secondary_adjustments=SecondaryAdjustments(
                        sets="sets" in adjustments,
                        reps="reps" in adjustments,
                        rir="rir" in adjustments,
                        rest="rest" in adjustments,
                    ),
                    constraints=StrategyConstraints(
                        maintain_reps=True if "reps" in locks else None,
                        maintain_sets=True if "sets" in locks else None,
                        maintain_rir=True if "rir" in locks else None,
                    ),
                )
            )
        if progression_type is not None:
            editor.set_progression_type(progression_type)
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_strategy(editor.snapshot())
