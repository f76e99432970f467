"""Template catalog commands: templates, scale."""

from typing import Annotated, Optional

import typer

from ...core.templates import (
    TemplateNotFoundError,
    apply_progression_template,
    get_template,
    list_templates,
)
from .. import views
from ..app import app


@app.command()
def templates(
    goal: Annotated[
        Optional[str],
        typer.Option("--goal", "-g", help="Filter by goal: strength, hypertrophy, endurance, powerlifting"),
    ] = None,
    difficulty: Annotated[
        Optional[str],
        typer.Option("--difficulty", "-d", help="Filter by difficulty: beginner, intermediate, advanced"),
    ] = None,
    progression_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Filter by progression type, e.g. linear, wave"),
    ] = None,
) -> None:
    """
    List progression templates (built-in and user-defined).
    """
    found = [
        t
        for t in list_templates()
        if (goal is None or t.target_goal == goal)
        and (difficulty is None or t.difficulty == difficulty)
        and (progression_type is None or t.type == progression_type)
    ]
    views.print_templates(found)


@app.command()
def scale(
    template_id: Annotated[str, typer.Argument(help="Template ID, e.g. linear-strength")],
    weeks: Annotated[int, typer.Argument(help="Target number of weeks")],
) -> None:
    """
    Preview a template stretched or squeezed to WEEKS weeks.
    """
    try:
        template = get_template(template_id)
        pattern = apply_progression_template(template_id, weeks)
    except (TemplateNotFoundError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_week_pattern(
        f"{template.name}: {template.original_length} -> {weeks} weeks", pattern
    )
