"""
Progression template registry.

All available templates are registered here: the built-ins from
catalog.py first, then any user templates found in
``~/.mesocycle-planner/templates/``.  Use get_template() to look up a
ProgressionTemplate by id and the get_templates_by_* helpers for the
exact-match catalog filters.
"""

from .base import ProgressionTemplate
from .catalog import BUILTIN_TEMPLATES


class TemplateNotFoundError(LookupError):
    """Raised when a template id is not in the registry."""

    def __init__(self, template_id: str):
        super().__init__(f"Template {template_id} not found")
        self.template_id = template_id


def _build_registry() -> dict[str, ProgressionTemplate]:
    from .loader import load_user_templates

    registry = {t.id: t for t in BUILTIN_TEMPLATES}
    registry.update(load_user_templates(reserved_ids=frozenset(registry)))
    return registry


TEMPLATE_REGISTRY: dict[str, ProgressionTemplate] = _build_registry()


def reload_templates() -> dict[str, ProgressionTemplate]:
    """Rebuild TEMPLATE_REGISTRY in place (picks up new user files)."""
    fresh = _build_registry()
    TEMPLATE_REGISTRY.clear()
    TEMPLATE_REGISTRY.update(fresh)
    return TEMPLATE_REGISTRY


def list_templates() -> list[ProgressionTemplate]:
    """All registered templates, built-ins first."""
    return list(TEMPLATE_REGISTRY.values())


def find_template(template_id: str) -> ProgressionTemplate | None:
    return TEMPLATE_REGISTRY.get(template_id)


def get_template(template_id: str) -> ProgressionTemplate:
    """
    Return the ProgressionTemplate for the given id.

    Args:
        template_id: e.g. "linear-strength"

    Returns:
        ProgressionTemplate for the requested id

    Raises:
        TemplateNotFoundError: If template_id is not in the registry
    """
    if template_id not in TEMPLATE_REGISTRY:
        raise TemplateNotFoundError(template_id)
    return TEMPLATE_REGISTRY[template_id]


def get_templates_by_goal(goal: str) -> list[ProgressionTemplate]:
    return [t for t in TEMPLATE_REGISTRY.values() if t.target_goal == goal]


def get_templates_by_difficulty(difficulty: str) -> list[ProgressionTemplate]:
    return [t for t in TEMPLATE_REGISTRY.values() if t.difficulty == difficulty]


def get_templates_by_type(progression_type: str) -> list[ProgressionTemplate]:
    return [t for t in TEMPLATE_REGISTRY.values() if t.type == progression_type]
