"""
CLI entry point using Typer.

Provides commands for mesocycle progression management:
- templates / scale: Browse and preview progression templates
- init / show: Create and display a mesocycle
- apply-template, set-week, deload, preset, auto-deload, label, notes, strategy:
  Edit the weekly progression
- add-workout / materialize: Define weekly workouts and generate dated sessions
"""

from .app import app

# Importing the command modules registers their commands on the shared app
from .commands import calendar, progression, templates  # noqa: F401

if __name__ == "__main__":
    app()
