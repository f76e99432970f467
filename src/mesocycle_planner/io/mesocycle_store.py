"""
JSON document storage for one mesocycle.

Handles reading, writing, and updating the mesocycle file.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from ..core.models import MesocycleProgression, WorkoutTemplate
from .serializers import (
    ValidationError,
    dict_to_progression,
    dict_to_workout_template,
    progression_to_dict,
    validate_date,
    workout_template_to_dict,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MesocycleDocument:
    """Everything stored for one mesocycle."""

    title: str
    weeks: int
    start_date: str  # ISO format: YYYY-MM-DD
    progression: MesocycleProgression
    workout_templates: tuple[WorkoutTemplate, ...] = field(default_factory=tuple)


class MesocycleStore:
    """
    Manages a mesocycle stored as a single JSON document.

    The document has three sections:
    - "basics": title, number of weeks and start date
    - "workoutTemplates": weekly workout templates
    - "progression": the MesocycleProgression
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: Path to the mesocycle JSON file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        """Check if the mesocycle file exists."""
        return self.path.exists()

    def init(self, document: MesocycleDocument, overwrite: bool = False) -> None:
        """
        Write a new mesocycle file.

        Creates parent directories if needed.

        Raises:
            FileExistsError: If the file exists and overwrite is False
        """
        if self.path.exists() and not overwrite:
            raise FileExistsError(
                f"Mesocycle file already exists: {self.path}. Use --force to replace it."
            )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.save(document)
        logger.info("initialized mesocycle %r at %s", document.title, self.path)

    def load(self) -> MesocycleDocument:
        """
        Load the mesocycle document.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If the file is not a valid mesocycle document
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Mesocycle file not found: {self.path}. Run 'init' first.")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ValidationError(f"{self.path} does not contain a mesocycle document")

        basics = data.get("basics") or {}
        if not isinstance(basics, dict):
            raise ValidationError(f"basics must be an object, got {basics!r}")
        if "progression" not in data:
            raise ValidationError(f"{self.path} has no 'progression' section")

        weeks = basics.get("weeks")
        if not isinstance(weeks, int) or isinstance(weeks, bool) or weeks < 1:
            raise ValidationError(f"basics.weeks must be a positive integer, got {weeks!r}")

        templates = data.get("workoutTemplates", [])
        if not isinstance(templates, list):
            raise ValidationError(f"workoutTemplates must be a list, got {templates!r}")

        return MesocycleDocument(
            title=str(basics.get("title", "")),
            weeks=weeks,
            start_date=validate_date(str(basics.get("startDate", ""))),
            progression=dict_to_progression(data["progression"]),
            workout_templates=tuple(dict_to_workout_template(t) for t in templates),
        )

    def save(self, document: MesocycleDocument) -> None:
        """Rewrite the whole file."""
        data = {
            "basics": {
                "title": document.title,
                "weeks": document.weeks,
                "startDate": document.start_date,
            },
            "workoutTemplates": [workout_template_to_dict(t) for t in document.workout_templates],
            "progression": progression_to_dict(document.progression),
        }
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")

    def save_progression(self, progression: MesocycleProgression) -> None:
        """Replace only the progression section."""
        document = self.load()
        self.save(replace(document, progression=progression))

    def add_workout_template(self, template: WorkoutTemplate) -> None:
        """
        Add a workout template, replacing any existing one with the same id.
        """
        document = self.load()
        templates = [t for t in document.workout_templates if t.id != template.id]
        templates.append(template)
        self.save(replace(document, workout_templates=tuple(templates)))


def get_default_mesocycle_path() -> Path:
    """
    Get the default mesocycle file path.

    Returns:
        ~/.mesocycle-planner/mesocycle.json
    """
    return Path.home() / ".mesocycle-planner" / "mesocycle.json"
