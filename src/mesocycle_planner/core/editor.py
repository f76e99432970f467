"""
Interactive progression editing and the deload state machine.

A ProgressionEditor owns the live week list of one mesocycle being
authored.  Every edit produces a new frozen MesocycleProgression snapshot;
listeners receive that snapshot synchronously once the editor has settled.

Deload toggling is lossless: when a week goes into deload its current
intensity is remembered, and taking it out of deload restores exactly that
intensity.  A week with no remembered intensity falls back to
DEFAULT_INTENSITY.
"""

import logging
from dataclasses import replace
from typing import Callable

from .config import DELOAD_LABEL, MAX_MESOCYCLE_WEEKS, MIN_MESOCYCLE_WEEKS
from .engine.config_loader import (
    default_global_settings,
    default_progression_type,
    default_strategy_name,
    load_planner_config,
)
from .intensity import DEFAULT_INTENSITY, DELOAD_INTENSITY, get_preset, is_deload_volume, preset_label
from .models import (
    PROGRESSION_TYPES,
    GlobalProgressionSettings,
    IntensityOverrides,
    IntensityParameters,
    MesocycleProgression,
    ProgressionStrategy,
    ProgressionType,
    WeekIntensity,
)
from .strategies import get_strategy, strategy_for_template
from .templates import apply_progression_template, get_template

logger = logging.getLogger(__name__)

Listener = Callable[[MesocycleProgression], None]


class ProgressionEditor:
    """
    Editing session for one mesocycle's progression.

    Args:
        mesocycle_weeks: Number of weeks the mesocycle spans
        initial_progression: Existing progression to continue editing
        on_change: Optional listener subscribed at construction
        progression_id: Opaque id carried into every snapshot
        mesocycle_id: Opaque mesocycle reference carried into every snapshot
        global_settings: Overrides the configured global settings
        strategy: Overrides the configured default strategy
        progression_type: Overrides the configured default progression type

    Nothing is emitted until ``settle()`` is called.
    """

    def __init__(
        self,
        mesocycle_weeks: int,
        initial_progression: MesocycleProgression | None = None,
        on_change: Listener | None = None,
        *,
        progression_id: str = "",
        mesocycle_id: str = "",
        global_settings: GlobalProgressionSettings | None = None,
        strategy: ProgressionStrategy | None = None,
        progression_type: ProgressionType | None = None,
    ) -> None:
        if not MIN_MESOCYCLE_WEEKS <= mesocycle_weeks <= MAX_MESOCYCLE_WEEKS:
            raise ValueError(
                f"mesocycle_weeks must be between {MIN_MESOCYCLE_WEEKS} and "
                f"{MAX_MESOCYCLE_WEEKS}, got {mesocycle_weeks}"
            )
        self.mesocycle_weeks = mesocycle_weeks

        self._listeners: list[Listener] = []
        self._settled = False
        self._pre_deload: dict[int, IntensityParameters] = {}

        if initial_progression is not None:
            self.progression_id = progression_id or initial_progression.id
            self.mesocycle_id = mesocycle_id or initial_progression.mesocycle_id
            self._weeks = {w.week: w for w in initial_progression.weekly_progressions}
            self.global_settings = global_settings or initial_progression.global_settings
            self.strategy = strategy or initial_progression.progression_strategy
            self.progression_type = progression_type or initial_progression.progression_type
        else:
            cfg = load_planner_config()
            self.progression_id = progression_id
            self.mesocycle_id = mesocycle_id
            self._weeks = {
                n: WeekIntensity(week=n, intensity=DEFAULT_INTENSITY)
                for n in range(1, mesocycle_weeks + 1)
            }
            self.global_settings = global_settings or default_global_settings(cfg)
            self.strategy = strategy or get_strategy(default_strategy_name(cfg))
            self.progression_type = progression_type or default_progression_type(cfg)

        if self.progression_type not in PROGRESSION_TYPES:
            raise ValueError(f"Invalid progression_type: {self.progression_type}")

        if on_change is not None:
            self._listeners.append(on_change)

    # ------------------------------------------------------------------
    # Subscription and emission
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def settled(self) -> bool:
        return self._settled

    def settle(self) -> MesocycleProgression:
        """
        Mark the editor ready and emit the complete current state once.

        Later calls return the snapshot without emitting again.
        """
        progression = self.snapshot()
        if not self._settled:
            self._settled = True
            self._notify(progression)
        return progression

    def snapshot(self) -> MesocycleProgression:
        """Current progression, without notifying anyone."""
        weeks = tuple(self._weeks[n] for n in sorted(self._weeks))
        return MesocycleProgression(
            id=self.progression_id,
            mesocycle_id=self.mesocycle_id,
            baseline_week=self._weeks.get(1) or WeekIntensity(week=1),
            weekly_progressions=weeks,
            progression_type=self.progression_type,
            global_settings=self.global_settings,
            progression_strategy=self.strategy,
        )

    def _notify(self, progression: MesocycleProgression) -> None:
        for listener in list(self._listeners):
            listener(progression)

    def _commit(self) -> MesocycleProgression:
        progression = self.snapshot()
        if self._settled:
            self._notify(progression)
        return progression

    # ------------------------------------------------------------------
    # Internal week mutation
    # ------------------------------------------------------------------

    def _require_week(self, week: int) -> WeekIntensity:
        current = self._weeks.get(week)
        if current is None:
            raise ValueError(f"Week {week} is not part of this mesocycle")
        return current

    def _write_week(self, week: int, intensity: IntensityParameters, is_deload: bool | None) -> WeekIntensity:
        """Apply one week update including the deload snapshot rules."""
        if week < 1:
            raise ValueError(f"week must be >= 1, got {week}")

        current = self._weeks.get(week)
        was_deload = current.is_deload if current is not None else False
        target_deload = was_deload if is_deload is None else is_deload

        if target_deload and not was_deload:
            if current is not None:
                self._pre_deload[week] = current.intensity
            logger.info("week %d -> deload", week)
        elif was_deload and not target_deload:
            intensity = self._pre_deload.pop(week, DEFAULT_INTENSITY)
            logger.info("week %d <- deload (intensity restored)", week)

        if current is None:
            updated = WeekIntensity(week=week, intensity=intensity, is_deload=target_deload)
        else:
            updated = replace(current, intensity=intensity, is_deload=target_deload)
        self._weeks[week] = updated
        logger.debug("week %d updated: %s", week, updated.intensity)
        return updated

    # ------------------------------------------------------------------
    # Public edits
    # ------------------------------------------------------------------

    def update_week(
        self,
        week: int,
        intensity: IntensityParameters,
        is_deload: bool | None = None,
    ) -> MesocycleProgression:
        """
        Set a week's intensity, appending the week if it does not exist.

        Switching ``is_deload`` on remembers the week's current intensity;
        switching it off restores the remembered intensity (or
        DEFAULT_INTENSITY) and ignores ``intensity``.
        """
        self._write_week(week, intensity, is_deload)
        return self._commit()

    def update_label(self, week: int, label: str | None) -> MesocycleProgression:
        current = self._require_week(week)
        self._weeks[week] = replace(current, label=label or None)
        return self._commit()

    def update_notes(self, week: int, notes: str | None) -> MesocycleProgression:
        current = self._require_week(week)
        self._weeks[week] = replace(current, notes=notes or None)
        return self._commit()

    def toggle_deload(self, week: int) -> MesocycleProgression:
        """
        Flip a week in or out of deload.

        Going in sets DELOAD_INTENSITY and the deload label; coming out
        restores the intensity the week had before and keeps its label.
        """
        current = self._require_week(week)
        if current.is_deload:
            self._write_week(week, current.intensity, False)
        else:
            updated = self._write_week(week, DELOAD_INTENSITY, True)
            self._weeks[week] = replace(updated, label=DELOAD_LABEL)
        return self._commit()

    def apply_preset(self, week: int, name: str) -> MesocycleProgression:
        """
        Apply a named intensity preset to one week.

        The deload preset goes through the normal deload transition.  Any
        other preset takes a week out of deload without restoring its old
        intensity: the preset is the new intensity.

        Raises:
            ValueError: If ``name`` is not a known preset
        """
        params = get_preset(name)
        if name == "deload":
            updated = self._write_week(week, params, True)
        else:
            self._pre_deload.pop(week, None)
            current = self._weeks.get(week)
            if current is None:
                updated = WeekIntensity(week=week, intensity=params)
            else:
                updated = replace(current, intensity=params, is_deload=False)
        self._weeks[week] = replace(updated, label=preset_label(name))
        logger.debug("preset %s applied to week %d", name, week)
        return self._commit()

    def apply_auto_deload(self, frequency: int | None = None) -> MesocycleProgression:
        """
        Deload every ``frequency``-th week that is not already a deload.

        ``frequency`` defaults to ``global_settings.deload_frequency``.
        Emits once for the whole batch.
        """
        if frequency is None:
            frequency = self.global_settings.deload_frequency
        if frequency < 1:
            raise ValueError(f"frequency must be >= 1, got {frequency}")

        changed: list[int] = []
        for week in sorted(self._weeks):
            if week % frequency != 0 or self._weeks[week].is_deload:
                continue
            updated = self._write_week(week, DELOAD_INTENSITY, True)
            self._weeks[week] = replace(updated, label=DELOAD_LABEL)
            changed.append(week)

        logger.info("auto-deload every %d weeks: %s", frequency, changed or "no changes")
        return self._commit()

    def apply_template(
        self,
        template_id: str,
        overrides: IntensityOverrides | None = None,
    ) -> MesocycleProgression:
        """
        Replace all weeks with a template scaled to this mesocycle.

        Weeks with volume <= 75 are flagged deload and labelled.  The
        progression type and strategy follow the template, and any
        remembered pre-deload intensities are dropped.

        Raises:
            TemplateNotFoundError: If template_id is unknown
        """
        template = get_template(template_id)
        pattern = apply_progression_template(template_id, self.mesocycle_weeks, overrides)

        weeks: dict[int, WeekIntensity] = {}
        for index, params in enumerate(pattern, start=1):
            deload = is_deload_volume(params)
            weeks[index] = WeekIntensity(
                week=index,
                intensity=params,
                is_deload=deload,
                label=DELOAD_LABEL if deload else None,
            )

        self._weeks = weeks
        self._pre_deload.clear()
        self.progression_type = template.type
        self.strategy = strategy_for_template(template)
        logger.info(
            "applied template %s to %d weeks (deloads: %s)",
            template_id,
            self.mesocycle_weeks,
            [w for w, v in weeks.items() if v.is_deload] or "none",
        )
        return self._commit()

    def set_strategy(self, strategy: ProgressionStrategy) -> MesocycleProgression:
        self.strategy = strategy
        return self._commit()

    def set_progression_type(self, progression_type: ProgressionType) -> MesocycleProgression:
        if progression_type not in PROGRESSION_TYPES:
            raise ValueError(
                f"Invalid progression_type: {progression_type}. Must be one of {PROGRESSION_TYPES}"
            )
        self.progression_type = progression_type
        return self._commit()
