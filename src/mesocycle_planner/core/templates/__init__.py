"""
Progression template catalog for mesocycle-planner.

Each template is described by a ProgressionTemplate object; the registry
serves lookups and filters and the scaling helpers fit a template to a
mesocycle of any length.
"""

from .base import ProgressionTemplate
from .registry import (
    TEMPLATE_REGISTRY,
    TemplateNotFoundError,
    find_template,
    get_template,
    get_templates_by_difficulty,
    get_templates_by_goal,
    get_templates_by_type,
    list_templates,
    reload_templates,
)
from .scaling import apply_progression_template, scale_template

__all__ = [
    "ProgressionTemplate",
    "TEMPLATE_REGISTRY",
    "TemplateNotFoundError",
    "apply_progression_template",
    "find_template",
    "get_template",
    "get_templates_by_difficulty",
    "get_templates_by_goal",
    "get_templates_by_type",
    "list_templates",
    "reload_templates",
    "scale_template",
]
