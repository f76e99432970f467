"""
Named intensity profiles and small helpers over IntensityParameters.

DEFAULT_INTENSITY is the baseline week; DELOAD_INTENSITY is what a week
becomes when it is toggled into deload.  INTENSITY_PRESETS are the quick
presets offered when configuring a single week.
"""

from types import MappingProxyType
from typing import Final, Mapping

from .config import DELOAD_LABEL, DELOAD_VOLUME_THRESHOLD
from .models import IntensityParameters

DEFAULT_INTENSITY: Final[IntensityParameters] = IntensityParameters()

DELOAD_INTENSITY: Final[IntensityParameters] = IntensityParameters(
    volume=70,
    weight=85,
    rir=4,
    rpe=5,
    sets=0.7,
    reps_modifier=1.0,
)

INTENSITY_PRESETS: Final[Mapping[str, IntensityParameters]] = MappingProxyType(
    {
        "easy": IntensityParameters(volume=90, weight=95, rir=4, rpe=6, sets=0.9, reps_modifier=1.0),
        "moderate": IntensityParameters(volume=100, weight=100, rir=3, rpe=7, sets=1.0, reps_modifier=1.0),
        "hard": IntensityParameters(volume=110, weight=105, rir=2, rpe=8, sets=1.1, reps_modifier=1.0),
        "peak": IntensityParameters(volume=85, weight=115, rir=0, rpe=9.5, sets=0.85, reps_modifier=0.9),
        "deload": DELOAD_INTENSITY,
    }
)


def get_preset(name: str) -> IntensityParameters:
    """
    Return the preset bundle for ``name``.

    Raises:
        ValueError: If the preset name is unknown
    """
    if name not in INTENSITY_PRESETS:
        valid = ", ".join(INTENSITY_PRESETS)
        raise ValueError(f"Unknown preset '{name}'. Valid presets: {valid}")
    return INTENSITY_PRESETS[name]


def preset_label(name: str) -> str:
    """'hard' -> 'Hard Week'; the deload preset gets the shared deload label."""
    if name == "deload":
        return DELOAD_LABEL
    return f"{name[:1].upper()}{name[1:]} Week"


def is_deload_volume(params: IntensityParameters) -> bool:
    """True when the week's volume is low enough to count as a deload."""
    return params.volume <= DELOAD_VOLUME_THRESHOLD


def intensity_score(params: IntensityParameters) -> float:
    """
    Combined intensity score for one week.

    Volume and weight enter as-is; RIR 0-5 maps to 100-0 and RPE 5-10 maps
    to 0-100 before weighting:

        score = 0.3*volume + 0.3*weight + 0.2*(5 - rir)*20 + 0.2*(rpe - 5)*20
    """
    rir_score = (5 - params.rir) * 20
    rpe_score = (params.rpe - 5) * 20
    return params.volume * 0.3 + params.weight * 0.3 + rir_score * 0.2 + rpe_score * 0.2
