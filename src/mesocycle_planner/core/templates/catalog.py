"""
Built-in progression templates.

Each pattern row reads volume %, weight %, RIR, RPE, sets multiplier,
reps multiplier.
"""

from ..models import IntensityParameters
from .base import ProgressionTemplate


def _w(volume, weight, rir, rpe, sets, reps_modifier) -> IntensityParameters:
    return IntensityParameters(
        volume=volume,
        weight=weight,
        rir=rir,
        rpe=rpe,
        sets=sets,
        reps_modifier=reps_modifier,
    )


LINEAR_STRENGTH = ProgressionTemplate(
    id="linear-strength",
    name="Linear Strength Progression",
    description="Steady weekly increases in weight with consistent volume. Great for beginners.",
    type="linear",
    target_goal="strength",
    difficulty="beginner",
    duration=8,
    week_pattern=(
        _w(100, 100, 3, 7, 1.0, 1.0),
        _w(100, 102.5, 2, 7.5, 1.0, 1.0),
        _w(100, 105, 2, 8, 1.0, 1.0),
        _w(70, 85, 4, 5, 0.7, 1.0),  # deload
        _w(100, 107.5, 2, 8, 1.0, 1.0),
        _w(100, 110, 1, 8.5, 1.0, 1.0),
        _w(100, 112.5, 1, 9, 1.0, 1.0),
        _w(90, 115, 0, 9.5, 1.0, 0.9),  # peak
    ),
)

WAVE_LOADING = ProgressionTemplate(
    id="wave-loading",
    name="Wave Loading Pattern",
    description=(
        "Intensity fluctuates in waves - build up, back down, repeat higher. "
        "Good for intermediate lifters."
    ),
    type="wave",
    target_goal="strength",
    difficulty="intermediate",
    duration=6,
    week_pattern=(
        _w(100, 100, 3, 7, 1.0, 1.0),
        _w(95, 105, 2, 8, 1.0, 1.0),
        _w(90, 110, 1, 8.5, 1.0, 1.0),
        _w(105, 102.5, 3, 7, 1.1, 1.0),
        _w(100, 107.5, 2, 8, 1.1, 1.0),
        _w(95, 112.5, 1, 9, 1.0, 1.0),
    ),
)

BLOCK_HYPERTROPHY = ProgressionTemplate(
    id="block-hypertrophy",
    name="Block Periodization (Hypertrophy Focus)",
    description="High volume accumulation followed by intensity phases. Great for muscle building.",
    type="block",
    target_goal="hypertrophy",
    difficulty="intermediate",
    duration=12,
    week_pattern=(
        # accumulation
        _w(120, 95, 4, 6, 1.2, 1.1),
        _w(125, 95, 3, 7, 1.25, 1.1),
        _w(130, 95, 3, 7, 1.3, 1.1),
        _w(80, 85, 5, 5, 0.8, 1.0),  # deload
        # intensification
        _w(110, 100, 3, 7, 1.1, 1.0),
        _w(105, 102.5, 2, 8, 1.05, 1.0),
        _w(100, 105, 2, 8, 1.0, 1.0),
        _w(70, 90, 4, 6, 0.7, 1.0),  # deload
        # realization
        _w(95, 107.5, 2, 8, 1.0, 0.95),
        _w(90, 110, 1, 8.5, 1.0, 0.9),
        _w(85, 112.5, 1, 9, 1.0, 0.85),
        _w(80, 115, 0, 9.5, 1.0, 0.8),  # peak
    ),
)

UNDULATING_POWER = ProgressionTemplate(
    id="undulating-power",
    name="Daily Undulating Periodization",
    description=(
        "Frequent intensity and volume changes within each week. "
        "Good for advanced athletes."
    ),
    type="undulating",
    target_goal="strength",
    difficulty="advanced",
    duration=8,
    week_pattern=(
        _w(100, 100, 3, 7, 1.0, 1.0),
        _w(120, 95, 4, 6.5, 1.2, 1.1),
        _w(90, 105, 2, 8, 0.9, 0.9),
        _w(110, 98, 3, 7, 1.1, 1.05),
        _w(95, 107.5, 2, 8, 1.0, 0.95),
        _w(125, 97.5, 3, 7, 1.25, 1.1),
        _w(85, 110, 1, 8.5, 0.85, 0.9),
        _w(70, 85, 4, 5, 0.7, 1.0),  # deload
    ),
)

POWERLIFTING_PEAK = ProgressionTemplate(
    id="powerlifting-peak",
    name="Powerlifting Competition Peak",
    description=(
        "Designed to peak for a powerlifting meet. "
        "Reduces volume while maintaining/increasing intensity."
    ),
    type="step",
    target_goal="powerlifting",
    difficulty="advanced",
    duration=6,
    week_pattern=(
        _w(100, 100, 3, 7, 1.0, 1.0),
        _w(90, 105, 2, 8, 0.9, 0.95),
        _w(80, 110, 1, 8.5, 0.8, 0.9),
        _w(70, 115, 1, 9, 0.7, 0.85),
        _w(50, 120, 0, 9.5, 0.5, 0.7),
        _w(30, 105, 3, 6, 0.3, 0.8),  # opener practice
    ),
)

HYPERTROPHY_VOLUME = ProgressionTemplate(
    id="hypertrophy-volume",
    name="High Volume Hypertrophy",
    description=(
        "Maximizes muscle growth through progressive volume increases "
        "with moderate intensity."
    ),
    type="linear",
    target_goal="hypertrophy",
    difficulty="intermediate",
    duration=10,
    week_pattern=(
        _w(100, 95, 4, 6, 1.0, 1.0),
        _w(105, 95, 3, 7, 1.05, 1.0),
        _w(110, 97.5, 3, 7, 1.1, 1.0),
        _w(115, 97.5, 2, 7.5, 1.15, 1.0),
        _w(80, 90, 4, 5, 0.8, 1.0),  # deload
        _w(120, 100, 3, 7, 1.2, 1.0),
        _w(125, 100, 2, 7.5, 1.25, 1.0),
        _w(130, 102.5, 2, 8, 1.3, 1.0),
        _w(135, 102.5, 1, 8.5, 1.35, 1.0),
        _w(70, 90, 4, 5, 0.7, 1.0),  # final deload
    ),
)

BUILTIN_TEMPLATES: tuple[ProgressionTemplate, ...] = (
    LINEAR_STRENGTH,
    WAVE_LOADING,
    BLOCK_HYPERTROPHY,
    UNDULATING_POWER,
    POWERLIFTING_PEAK,
    HYPERTROPHY_VOLUME,
)
