"""
Progression strategy presets.

A strategy names one primary focus and a set of secondary permissions and
hard constraints.  The four presets below are starting points; any
combination of flags is a legal strategy.
"""

from types import MappingProxyType
from typing import Final, Mapping

from .models import ProgressionStrategy, SecondaryAdjustments, StrategyConstraints
from .templates.base import ProgressionTemplate

DEFAULT_STRATEGIES: Final[Mapping[str, ProgressionStrategy]] = MappingProxyType(
    {
        "strength": ProgressionStrategy(
            primary="weight",
            secondary_adjustments=SecondaryAdjustments(sets=False, reps=False, rir=True, rest=False),
            constraints=StrategyConstraints(maintain_reps=True, maintain_sets=True),
        ),
        "hypertrophy": ProgressionStrategy(
            primary="volume",
            secondary_adjustments=SecondaryAdjustments(sets=True, reps=True, rir=True, rest=False),
            constraints=StrategyConstraints(maintain_rir=False),
        ),
        "peaking": ProgressionStrategy(
            primary="intensity",
            secondary_adjustments=SecondaryAdjustments(sets=False, reps=False, rir=True, rest=True),
            constraints=StrategyConstraints(maintain_reps=True, maintain_sets=True),
        ),
        "conditioning": ProgressionStrategy(
            primary="density",
            secondary_adjustments=SecondaryAdjustments(sets=False, reps=False, rir=False, rest=True),
            constraints=StrategyConstraints(maintain_reps=True, maintain_sets=True),
        ),
    }
)

# Template goal -> strategy preset picked when a template is applied
GOAL_STRATEGY: Final[Mapping[str, str]] = MappingProxyType(
    {
        "strength": "strength",
        "hypertrophy": "hypertrophy",
        "endurance": "conditioning",
        "powerlifting": "peaking",
    }
)


def get_strategy(name: str) -> ProgressionStrategy:
    """
    Return the preset strategy called ``name``.

    Raises:
        ValueError: If ``name`` is not one of the presets
    """
    if name not in DEFAULT_STRATEGIES:
        valid = ", ".join(DEFAULT_STRATEGIES)
        raise ValueError(f"Unknown strategy '{name}'. Valid strategies: {valid}")
    return DEFAULT_STRATEGIES[name]


def strategy_for_goal(goal: str) -> ProgressionStrategy:
    """Strategy matching a template goal; unknown goals fall back to hypertrophy."""
    return DEFAULT_STRATEGIES[GOAL_STRATEGY.get(goal, "hypertrophy")]


def strategy_name(strategy: ProgressionStrategy) -> str:
    """Name of the preset equal to ``strategy``, or "custom"."""
    for name, preset in DEFAULT_STRATEGIES.items():
        if preset == strategy:
            return name
    return "custom"


def describe_strategy(strategy: ProgressionStrategy) -> str:
    """
    One-line summary, e.g. "Primary: weight; adjusts RIR; keeps reps, sets".
    """
    adj = strategy.secondary_adjustments
    adjusts = [
        label
        for label, enabled in (
            ("sets", adj.sets),
            ("reps", adj.reps),
            ("RIR", adj.rir),
            ("rest", adj.rest),
        )
        if enabled
    ]
    con = strategy.constraints
    keeps = [
        label
        for label, enabled in (
            ("reps", con.maintain_reps),
            ("sets", con.maintain_sets),
            ("RIR", con.maintain_rir),
        )
        if enabled
    ]
    parts = [f"Primary: {strategy.primary}"]
    if adjusts:
        parts.append("adjusts " + ", ".join(adjusts))
    if keeps:
        parts.append("keeps " + ", ".join(keeps))
    return "; ".join(parts)


def strategy_for_template(template: ProgressionTemplate) -> ProgressionStrategy:
    """Strategy picked automatically when ``template`` is applied."""
    return strategy_for_goal(template.target_goal)
