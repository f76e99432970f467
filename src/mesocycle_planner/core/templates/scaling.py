"""
Template rescaling and application.

Scaling is nearest-earlier sampling, not interpolation: target week ``i``
copies source week ``floor(i / scale_factor)``.  Shrinking therefore skips
some source weeks entirely and growing repeats them; an 8-week template
squeezed to 4 weeks keeps source weeks 0, 2, 4 and 6.
"""

import logging
import math

from ..models import IntensityOverrides, IntensityParameters
from .base import ProgressionTemplate
from .registry import get_template

logger = logging.getLogger(__name__)


def scale_template(template: ProgressionTemplate, new_duration: int) -> list[IntensityParameters]:
    """
    Stretch or compress a template's week pattern to ``new_duration`` weeks.

    Args:
        template: Template to scale
        new_duration: Target number of weeks (>= 1)

    Returns:
        List of exactly ``new_duration`` IntensityParameters

    Raises:
        ValueError: If new_duration < 1
    """
    if new_duration < 1:
        raise ValueError(f"new_duration must be >= 1, got {new_duration}")

    original_length = len(template.week_pattern)
    scale_factor = new_duration / original_length

    if scale_factor == 1:
        return list(template.week_pattern)

    scaled: list[IntensityParameters] = []
    for week in range(new_duration):
        source = min(math.floor(week / scale_factor), original_length - 1)
        scaled.append(template.week_pattern[source])
    return scaled


def apply_progression_template(
    template_id: str,
    duration: int,
    overrides: IntensityOverrides | None = None,
) -> list[IntensityParameters]:
    """
    Look up a template, scale it to ``duration`` and apply ``overrides``.

    Overrides are merged into every week, not only the first.

    Raises:
        TemplateNotFoundError: If template_id is unknown
    """
    template = get_template(template_id)
    pattern = scale_template(template, duration)

    if overrides is not None and not overrides.is_empty():
        pattern = [overrides.apply_to(week) for week in pattern]

    logger.debug(
        "applied template %s: %d source weeks -> %d weeks", template_id, template.original_length, duration
    )
    return pattern
