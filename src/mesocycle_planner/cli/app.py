"""Shared Typer app object, shared option types, and store utilities."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler

from ..core.editor import ProgressionEditor
from ..core.templates import TemplateNotFoundError
from ..io.mesocycle_store import MesocycleDocument, MesocycleStore, get_default_mesocycle_path
from ..io.serializers import ValidationError
from . import views

# Shared --path option type used across all commands
PathOption = Annotated[
    Optional[Path],
    typer.Option("--path", "-p", help="Path to mesocycle JSON file"),
]

# Errors a command reports as a red line plus exit code 1
CLI_ERRORS = (ValidationError, ValueError, TemplateNotFoundError, FileNotFoundError, FileExistsError)

app = typer.Typer(
    name="mesocycle-planner",
    help="Plan multi-week training progressions and turn them into dated workouts.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Mesocycle progression planner.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=views.err_console, show_path=verbose)],
        force=True,
    )


def get_store(path: Path | None) -> MesocycleStore:
    """Get mesocycle store from path or the default location."""
    if path is None:
        path = get_default_mesocycle_path()
    return MesocycleStore(path)


def load_document(store: MesocycleStore) -> MesocycleDocument:
    """Load the document or exit with an error message."""
    try:
        return store.load()
    except CLI_ERRORS as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def open_editor(store: MesocycleStore, document: MesocycleDocument) -> ProgressionEditor:
    """
    Editor over the stored progression.

    The editor is settled before the store subscribes, so only real edits
    are written back.
    """
    editor = ProgressionEditor(document.weeks, initial_progression=document.progression)
    editor.settle()
    editor.subscribe(store.save_progression)
    return editor
