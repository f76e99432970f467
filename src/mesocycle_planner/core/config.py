"""
Configuration constants for the mesocycle progression engine.

All adjustable parameters are centralized here for easy tuning.
Values that users may override live in planner.yaml and are read through
``engine.config_loader``; the constants below are the fallbacks.
"""

from typing import Final

# =============================================================================
# BASELINE INTENSITY
# =============================================================================

BASELINE_VOLUME: Final[float] = 100.0  # percent of week-1 volume
BASELINE_WEIGHT: Final[float] = 100.0  # percent of week-1 load
BASELINE_RIR: Final[float] = 2  # reps in reserve
BASELINE_RPE: Final[float] = 7  # perceived exertion
BASELINE_SETS_MULTIPLIER: Final[float] = 1.0
BASELINE_REPS_MULTIPLIER: Final[float] = 1.0

# =============================================================================
# DELOAD DETECTION
# =============================================================================

DELOAD_VOLUME_THRESHOLD: Final[float] = 75.0  # volume <= this marks a deload week
DELOAD_LABEL: Final[str] = "Deload Week"

# =============================================================================
# STRATEGY RESOLUTION
# =============================================================================

INTENSITY_WEIGHT_CAP: Final[float] = 105.0  # max weight % under an intensity focus
RPE_CAP: Final[float] = 10.0
RIR_FLOOR: Final[float] = 0
DENSITY_REST_REDUCTION: Final[float] = 0.30  # rest shrinks by up to 30% at 100% volume
DENSITY_REST_FLOOR_SECONDS: Final[int] = 30
CHANGE_SEPARATOR: Final[str] = " • "

# =============================================================================
# GLOBAL PROGRESSION SETTINGS (defaults)
# =============================================================================

AUTO_DELOAD: Final[bool] = True
DELOAD_FREQUENCY_WEEKS: Final[int] = 4  # every N weeks
DELOAD_INTENSITY_PERCENT: Final[float] = 70.0
MAIN_LIFT_PROGRESSION_PERCENT: Final[float] = 2.5  # weekly weight increase
ACCESSORY_PROGRESSION_PERCENT: Final[float] = 5.0  # weekly volume increase
FATIGUE_THRESHOLD_RPE: Final[float] = 8.5

# =============================================================================
# MESOCYCLE HORIZON
# =============================================================================

MIN_MESOCYCLE_WEEKS: Final[int] = 1
MAX_MESOCYCLE_WEEKS: Final[int] = 52
DEFAULT_MESOCYCLE_WEEKS: Final[int] = 4

DEFAULT_STRATEGY_NAME: Final[str] = "hypertrophy"
DEFAULT_PROGRESSION_TYPE: Final[str] = "linear"

# =============================================================================
# CALENDAR
# =============================================================================

DAYS_PER_WEEK: Final[int] = 7
WEEKDAY_NAMES: Final[list[str]] = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]
