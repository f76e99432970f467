"""mesocycle-planner: plan and resolve multi-week training progressions."""

__version__ = "0.3.0"
