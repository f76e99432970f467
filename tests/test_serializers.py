"""
Serialization, compact-format parsing and mesocycle store tests.
"""

import json

import pytest

from mesocycle_planner.core.editor import ProgressionEditor
from mesocycle_planner.core.models import (
    ExerciseDefaults,
    IntensityParameters,
    ProgressionStrategy,
    StrategyConstraints,
    WorkoutTemplate,
)
from mesocycle_planner.core.strategies import get_strategy
from mesocycle_planner.io.mesocycle_store import (
    MesocycleDocument,
    MesocycleStore,
    get_default_mesocycle_path,
)
from mesocycle_planner.io.serializers import (
    ValidationError,
    dict_to_progression,
    dict_to_workout_template,
    parse_exercise_string,
    parse_weekdays,
    progression_to_dict,
    strategy_to_dict,
    validate_date,
    week_intensity_to_dict,
    workout_template_to_dict,
)


def _progression():
    ed = ProgressionEditor(4, progression_id="p1", mesocycle_id="m1", strategy=get_strategy("strength"))
    ed.update_week(2, IntensityParameters(weight=102.5, rir=1))
    ed.toggle_deload(4)
    ed.update_notes(3, "Heavy singles")
    return ed.snapshot()


class TestProgressionJson:
    def test_camel_case_shape(self):
        d = progression_to_dict(_progression())
        assert set(d) == {
            "id",
            "mesocycleId",
            "baselineWeek",
            "weeklyProgressions",
            "progressionType",
            "globalSettings",
            "progressionStrategy",
        }
        week4 = d["weeklyProgressions"][3]
        assert week4["isDeload"] is True
        assert week4["label"] == "Deload Week"
        assert set(week4["intensity"]) == {"volume", "weight", "rir", "rpe", "sets", "repsModifier"}
        assert d["globalSettings"]["deloadFrequency"] == 4

    def test_optional_keys_omitted(self):
        d = progression_to_dict(_progression())
        week1 = d["weeklyProgressions"][0]
        assert "label" not in week1
        assert "notes" not in week1
        assert d["weeklyProgressions"][2]["notes"] == "Heavy singles"

    def test_constraints_omit_unset_flags(self):
        assert strategy_to_dict(get_strategy("strength"))["constraints"] == {
            "maintainReps": True,
            "maintainSets": True,
        }
        assert strategy_to_dict(get_strategy("hypertrophy"))["constraints"] == {"maintainRIR": False}

    def test_round_trip_through_json_text(self):
        p = _progression()
        assert dict_to_progression(json.loads(json.dumps(progression_to_dict(p)))) == p

    def test_weeks_sorted_on_load(self):
        d = progression_to_dict(_progression())
        d["weeklyProgressions"].reverse()
        loaded = dict_to_progression(d)
        assert [w.week for w in loaded.weekly_progressions] == [1, 2, 3, 4]

    def test_duplicate_weeks_rejected(self):
        d = progression_to_dict(_progression())
        d["weeklyProgressions"].append(d["weeklyProgressions"][0])
        with pytest.raises(ValidationError, match="Duplicate"):
            dict_to_progression(d)

    def test_missing_baseline_uses_week_one(self):
        d = progression_to_dict(_progression())
        del d["baselineWeek"]
        assert dict_to_progression(d).baseline_week.week == 1

    @pytest.mark.parametrize(
        "mutate, message",
        [
            (lambda d: d.update(progressionType="zigzag"), "progressionType"),
            (lambda d: d["progressionStrategy"].update(primary="speed"), "primary"),
            (lambda d: d["weeklyProgressions"][0]["intensity"].pop("repsModifier"), "repsModifier"),
            (lambda d: d["weeklyProgressions"][0].update(week=0), "week"),
            (lambda d: d["weeklyProgressions"][0]["intensity"].update(rir="two"), "rir"),
            (lambda d: d.update(weeklyProgressions=[1]), "week entry"),
            (lambda d: d.update(weeklyProgressions={"1": {}}), "weeklyProgressions"),
            (lambda d: d["weeklyProgressions"][0].update(intensity=[100]), "intensity"),
            (lambda d: d.update(globalSettings=[4]), "globalSettings"),
            (lambda d: d["globalSettings"].update(autoDeload="yes"), "autoDeload"),
            (lambda d: d.update(progressionStrategy="weight"), "progressionStrategy"),
            (lambda d: d["progressionStrategy"].update(secondaryAdjustments="sets"), "secondaryAdjustments"),
            (lambda d: d["progressionStrategy"].update(constraints=["maintainReps"]), "constraints"),
            (lambda d: d["progressionStrategy"]["constraints"].update(maintainReps="yes"), "maintainReps"),
            (lambda d: d["weeklyProgressions"][0].update(label=3), "label"),
            (lambda d: d["weeklyProgressions"][1].update(notes=["x"]), "notes"),
        ],
    )
    def test_invalid_documents(self, mutate, message):
        d = progression_to_dict(_progression())
        mutate(d)
        with pytest.raises(ValidationError, match=message):
            dict_to_progression(d)

    def test_custom_constraints_load(self):
        strategy = ProgressionStrategy(
            primary="density", constraints=StrategyConstraints(maintain_rir=True)
        )
        d = progression_to_dict(_progression())
        d["progressionStrategy"] = strategy_to_dict(strategy)
        assert dict_to_progression(d).progression_strategy == strategy

    def test_week_dict(self):
        week = _progression().week(2)
        d = week_intensity_to_dict(week)
        assert d["intensity"]["weight"] == 102.5
        assert d["isDeload"] is False


class TestWorkoutTemplateJson:
    def test_round_trip(self):
        t = WorkoutTemplate(
            id="upper",
            label="Upper",
            days_of_week=(1, 4),
            exercises=(parse_exercise_string("Bench Press:3x8-10@2/120s"),),
        )
        d = workout_template_to_dict(t)
        assert d["daysOfWeek"] == [1, 4]
        assert d["exercises"][0]["defaults"] == {"sets": 3, "reps": "8-10", "rest": "120s", "rir": 2}
        assert dict_to_workout_template(d) == t

    def test_bad_weekday(self):
        with pytest.raises(ValidationError, match="weekday"):
            dict_to_workout_template({"id": "x", "label": "X", "daysOfWeek": [7]})

    @pytest.mark.parametrize(
        "data, message",
        [
            ("upper", "workout template"),
            ({"id": "x", "label": "X", "daysOfWeek": "mon"}, "daysOfWeek"),
            ({"id": "x", "label": "X", "exercises": [1]}, "workout exercise"),
            ({"id": "x", "label": "X", "exercises": {"bench": {}}}, "exercises"),
            (
                {"id": "x", "label": "X", "exercises": [{"exerciseId": "b", "defaults": [3]}]},
                "exercise defaults",
            ),
        ],
    )
    def test_wrong_nested_types(self, data, message):
        with pytest.raises(ValidationError, match=message):
            dict_to_workout_template(data)


class TestExerciseString:
    def test_full_rir_form(self):
        e = parse_exercise_string("Bench Press:3x8-10@2/120s", order_idx=2)
        assert e.exercise_id == "bench-press"
        assert e.exercise_name == "Bench Press"
        assert e.order_idx == 2
        assert e.defaults == ExerciseDefaults(sets=3, reps="8-10", rest="120s", rir=2)

    def test_rpe_form(self):
        e = parse_exercise_string("Squat:5x5@rpe8.5/180s")
        assert e.defaults.rpe == 8.5
        assert e.defaults.rir is None

    def test_minimal_form_defaults_rest(self):
        e = parse_exercise_string("Plank:3xAMRAP")
        assert e.defaults == ExerciseDefaults(sets=3, reps="AMRAP", rest="120s")

    def test_spaces_tolerated(self):
        e = parse_exercise_string("Lat Pulldown : 4 x 10 - 12 @ 1 / 90s")
        assert e.defaults == ExerciseDefaults(sets=4, reps="10-12", rest="90s", rir=1)

    @pytest.mark.parametrize("text", ["Bench Press", "Bench:three x 8", "Squat:5x5@rpe11/180s", ":3x8"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            parse_exercise_string(text)


class TestWeekdaysAndDates:
    def test_names(self):
        assert parse_weekdays("mon,wed") == (1, 3)
        assert parse_weekdays("Friday, monday") == (1, 5)

    def test_numbers_deduplicated(self):
        assert parse_weekdays("3,1,3") == (1, 3)
        assert parse_weekdays("0") == (0,)

    def test_full_names_and_abbreviations_only(self):
        assert parse_weekdays("sun,saturday") == (0, 6)

    @pytest.mark.parametrize("text", ["", "7", "funday", "monkey", "sunflower", "wedn"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            parse_weekdays(text)

    def test_validate_date(self):
        assert validate_date("2024-01-03") == "2024-01-03"
        with pytest.raises(ValidationError):
            validate_date("2024-02-30")
        with pytest.raises(ValidationError):
            validate_date("03.01.2024")


class TestMesocycleStore:
    def _document(self) -> MesocycleDocument:
        return MesocycleDocument(
            title="Spring Block", weeks=4, start_date="2024-01-03", progression=_progression()
        )

    def test_init_and_load(self, tmp_path):
        store = MesocycleStore(tmp_path / "sub" / "meso.json")
        assert not store.exists()
        store.init(self._document())
        assert store.exists()
        assert store.load() == self._document()

        raw = json.loads(store.path.read_text())
        assert raw["basics"] == {"title": "Spring Block", "weeks": 4, "startDate": "2024-01-03"}
        assert raw["workoutTemplates"] == []

    def test_init_refuses_overwrite(self, tmp_path):
        store = MesocycleStore(tmp_path / "meso.json")
        store.init(self._document())
        with pytest.raises(FileExistsError):
            store.init(self._document())
        store.init(self._document(), overwrite=True)

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MesocycleStore(tmp_path / "none.json").load()

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError):
            MesocycleStore(path).load()

    @pytest.mark.parametrize(
        "mutate, message",
        [
            (lambda raw: raw.update(basics=["Spring Block"]), "basics"),
            (lambda raw: raw["basics"].update(weeks=True), "weeks"),
            (lambda raw: raw.update(workoutTemplates={"upper": {}}), "workoutTemplates"),
            (lambda raw: raw.update(progression=[]), "progression"),
        ],
    )
    def test_load_wrong_section_types(self, tmp_path, mutate, message):
        store = MesocycleStore(tmp_path / "meso.json")
        store.init(self._document())
        raw = json.loads(store.path.read_text())
        mutate(raw)
        store.path.write_text(json.dumps(raw))
        with pytest.raises(ValidationError, match=message):
            store.load()

    def test_add_workout_template_replaces_same_id(self, tmp_path):
        store = MesocycleStore(tmp_path / "meso.json")
        store.init(self._document())
        store.add_workout_template(WorkoutTemplate(id="upper", label="Upper", days_of_week=(1,)))
        store.add_workout_template(WorkoutTemplate(id="lower", label="Lower", days_of_week=(2,)))
        store.add_workout_template(WorkoutTemplate(id="upper", label="Upper A", days_of_week=(4,)))
        templates = store.load().workout_templates
        assert [(t.id, t.label) for t in templates] == [("lower", "Lower"), ("upper", "Upper A")]

    def test_save_progression_keeps_basics(self, tmp_path):
        store = MesocycleStore(tmp_path / "meso.json")
        store.init(self._document())
        ed = ProgressionEditor(4, initial_progression=store.load().progression)
        ed.settle()
        ed.subscribe(store.save_progression)
        ed.apply_preset(1, "hard")

        loaded = store.load()
        assert loaded.title == "Spring Block"
        assert loaded.progression.week(1).label == "Hard Week"

    def test_default_path_under_home(self, isolated_home):
        assert get_default_mesocycle_path() == isolated_home / ".mesocycle-planner" / "mesocycle.json"
