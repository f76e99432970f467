"""
Minimal smoke tests for mesocycle-planner CLI.

Tests basic functionality:
- App runs and lists templates
- Mesocycle file is created
- Weeks can be edited and are persisted
- Workouts can be added and materialized
- Errors exit with code 1
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mesocycle_planner.cli.main import app
from mesocycle_planner.io.mesocycle_store import MesocycleStore

runner = CliRunner()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def meso_path(temp_dir):
    """An initialized 4-week mesocycle starting on a Wednesday."""
    path = temp_dir / "meso.json"
    result = runner.invoke(app, [
        "init",
        "--path", str(path),
        "--title", "Spring",
        "--weeks", "4",
        "--start", "2024-01-03",
    ])
    assert result.exit_code == 0, result.output
    return path


def _load(path: Path):
    return MesocycleStore(path).load()


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "materialize" in result.output

    def test_templates_lists_builtins(self):
        result = runner.invoke(app, ["templates"])
        assert result.exit_code == 0
        assert "linear-strength" in result.output

    def test_templates_filter(self):
        result = runner.invoke(app, ["templates", "--goal", "powerlifting"])
        assert result.exit_code == 0
        assert "powerlifting-peak" in result.output
        assert "wave-loading" not in result.output

    def test_scale_preview(self):
        result = runner.invoke(app, ["scale", "linear-strength", "4"])
        assert result.exit_code == 0

    def test_scale_unknown_template(self):
        result = runner.invoke(app, ["scale", "nope", "4"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_init_creates_file(self, meso_path):
        doc = _load(meso_path)
        assert doc.title == "Spring"
        assert doc.weeks == 4
        assert doc.start_date == "2024-01-03"
        assert len(doc.progression.weekly_progressions) == 4

    def test_init_with_template_and_strategy(self, temp_dir):
        path = temp_dir / "meso.json"
        result = runner.invoke(app, [
            "init", "--path", str(path), "--weeks", "8",
            "--start", "2024-01-07", "--template", "linear-strength",
            "--strategy", "peaking",
        ])
        assert result.exit_code == 0, result.output
        p = _load(path).progression
        assert p.deload_weeks == [4]
        assert p.progression_strategy.primary == "intensity"

    def test_init_refuses_existing_file(self, meso_path):
        result = runner.invoke(app, ["init", "--path", str(meso_path), "--start", "2024-01-03"])
        assert result.exit_code == 1

    def test_init_bad_date(self, temp_dir):
        result = runner.invoke(app, ["init", "--path", str(temp_dir / "m.json"), "--start", "03.01.2024"])
        assert result.exit_code == 1

    def test_show(self, meso_path):
        result = runner.invoke(app, ["show", "--path", str(meso_path)])
        assert result.exit_code == 0
        assert "Spring" in result.output

    def test_show_missing_file(self, temp_dir):
        result = runner.invoke(app, ["show", "--path", str(temp_dir / "none.json")])
        assert result.exit_code == 1

    def test_apply_template(self, meso_path):
        result = runner.invoke(app, ["apply-template", "wave-loading", "--path", str(meso_path), "--rpe", "7.5"])
        assert result.exit_code == 0, result.output
        p = _load(meso_path).progression
        assert p.progression_type == "wave"
        assert all(w.intensity.rpe == 7.5 for w in p.weekly_progressions)

    def test_set_week_and_deload_round_trip(self, meso_path):
        result = runner.invoke(app, ["set-week", "2", "--path", str(meso_path), "--weight", "105", "--rir", "1"])
        assert result.exit_code == 0, result.output
        week2 = _load(meso_path).progression.week(2)
        assert week2.intensity.weight == 105
        assert week2.intensity.rir == 1
        assert week2.intensity.volume == 100

        result = runner.invoke(app, ["set-week", "2", "--path", str(meso_path), "--deload"])
        assert result.exit_code == 0, result.output
        assert _load(meso_path).progression.week(2).is_deload

    def test_deload_toggle(self, meso_path):
        result = runner.invoke(app, ["deload", "3", "--path", str(meso_path)])
        assert result.exit_code == 0, result.output
        week3 = _load(meso_path).progression.week(3)
        assert week3.is_deload
        assert week3.label == "Deload Week"

    def test_preset(self, meso_path):
        result = runner.invoke(app, ["preset", "1", "peak", "--path", str(meso_path)])
        assert result.exit_code == 0, result.output
        week1 = _load(meso_path).progression.week(1)
        assert week1.label == "Peak Week"
        assert week1.intensity.weight == 115

    def test_unknown_preset(self, meso_path):
        result = runner.invoke(app, ["preset", "1", "brutal", "--path", str(meso_path)])
        assert result.exit_code == 1

    def test_auto_deload(self, meso_path):
        result = runner.invoke(app, ["auto-deload", "--path", str(meso_path), "--frequency", "2"])
        assert result.exit_code == 0, result.output
        assert _load(meso_path).progression.deload_weeks == [2, 4]

    def test_auto_deload_warns_when_nothing_changes(self, meso_path):
        runner.invoke(app, ["auto-deload", "--path", str(meso_path), "--frequency", "2"])
        result = runner.invoke(app, ["auto-deload", "--path", str(meso_path), "--frequency", "2"])
        assert result.exit_code == 0, result.output
        assert "Warning: No weeks changed" in result.output

    def test_malformed_file_reports_error(self, meso_path):
        raw = json.loads(meso_path.read_text())
        raw["progression"]["weeklyProgressions"] = [1]
        meso_path.write_text(json.dumps(raw))
        result = runner.invoke(app, ["show", "--path", str(meso_path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_label_and_notes(self, meso_path):
        runner.invoke(app, ["label", "1", "Intro", "--path", str(meso_path)])
        runner.invoke(app, ["notes", "1", "Go easy", "--path", str(meso_path)])
        week1 = _load(meso_path).progression.week(1)
        assert week1.label == "Intro"
        assert week1.notes == "Go easy"

    def test_strategy_preset_and_custom(self, meso_path):
        result = runner.invoke(app, ["strategy", "strength", "--path", str(meso_path)])
        assert result.exit_code == 0, result.output
        assert _load(meso_path).progression.progression_strategy.primary == "weight"

        result = runner.invoke(app, [
            "strategy", "--path", str(meso_path),
            "--primary", "density", "--adjust", "rest", "--keep", "reps,sets",
            "--type", "custom",
        ])
        assert result.exit_code == 0, result.output
        p = _load(meso_path).progression
        assert p.progression_type == "custom"
        assert p.progression_strategy.secondary_adjustments.rest is True
        assert p.progression_strategy.constraints.maintain_sets is True
        assert p.progression_strategy.constraints.maintain_rir is None

    def test_strategy_bad_flag(self, meso_path):
        result = runner.invoke(app, ["strategy", "--path", str(meso_path), "--primary", "weight", "--adjust", "tempo"])
        assert result.exit_code == 1

    def test_add_workout_and_materialize_json(self, meso_path):
        result = runner.invoke(app, [
            "add-workout", "--path", str(meso_path),
            "--label", "Upper", "--days", "mon,wed",
            "-e", "Bench Press:3x8-10@2/120s",
            "-e", "Lateral Raise:3x12-15@rpe8/60s",
        ])
        assert result.exit_code == 0, result.output
        assert _load(meso_path).workout_templates[0].id == "upper"

        runner.invoke(app, ["set-week", "2", "--path", str(meso_path), "--weight", "105", "--rir", "1"])
        runner.invoke(app, ["strategy", "strength", "--path", str(meso_path)])

        result = runner.invoke(app, ["materialize", "--path", str(meso_path), "--json"])
        assert result.exit_code == 0, result.output
        workouts = json.loads(result.stdout)
        # Monday 2024-01-01 falls before the Wednesday start
        assert workouts[0]["date"] == "2024-01-03"
        assert workouts[0]["label"] == "Upper - Week 1"
        assert len(workouts) == 7

        week2_bench = next(w for w in workouts if w["weekNumber"] == 2)["exercises"][0]
        assert week2_bench["exerciseClass"] == "compound"
        assert week2_bench["parameters"]["weightModifier"] == 105
        assert week2_bench["parameters"]["rir"] == 1

    def test_materialize_table(self, meso_path):
        runner.invoke(app, [
            "add-workout", "--path", str(meso_path),
            "--label", "Legs", "--days", "5", "-e", "Squat:5x5@rpe8/180s",
        ])
        result = runner.invoke(app, ["materialize", "--path", str(meso_path)])
        assert result.exit_code == 0, result.output
        # Fridays 2024-01-05 .. 2024-01-26
        assert "4 workouts over 4 weeks" in result.output

    def test_add_workout_bad_exercise(self, meso_path):
        result = runner.invoke(app, [
            "add-workout", "--path", str(meso_path),
            "--label", "Upper", "--days", "mon", "-e", "Bench Press",
        ])
        assert result.exit_code == 1
