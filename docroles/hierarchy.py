"""
Document-relative heading levels.

Numbered headings take their numbering depth ("2." is level 1, "2.1." is
level 2). The remaining headings are ranked by font size among the
document's own headings, largest first, so a document whose biggest
heading is 14pt still gets a level-1 heading.
"""

from __future__ import annotations

import logging

from docroles.classifiers.base import font_size_ratio
from docroles.classifiers.subheading import level_for_ratio
from docroles.models import ClassifiedElement, DocumentMetrics, Role
from docroles.patterns import numbering_depth

logger = logging.getLogger(__name__)

MAX_LEVEL = 6
MAX_SIZE_RANK = 4
SIZE_ROUNDING = 0.5


def _size_key(size: float) -> float:
    return round(size / SIZE_ROUNDING) * SIZE_ROUNDING


def assign_heading_levels(
    classified: list[ClassifiedElement],
    metrics: DocumentMetrics | None = None,
) -> list[int | None]:
    """
    Heading level (1-6) for every heading-role element.

    Args:
        classified: Orchestrator output in document order.
        metrics: Document metrics, used for the font-ratio fallback.

    Returns:
        List parallel to classified; None for non-heading elements.
    """
    metrics = metrics or DocumentMetrics()
    headings = [item for item in classified if item.role == Role.HEADING]

    sizes = sorted(
        {
            _size_key(item.element.font_size)
            for item in headings
            if item.element.font_size is not None and item.element.font_size > 0
        },
        reverse=True,
    )
    rank = {size: min(i + 1, MAX_SIZE_RANK) for i, size in enumerate(sizes)}

    levels: list[int | None] = []
    for item in classified:
        if item.role != Role.HEADING:
            levels.append(None)
            continue

        depth = numbering_depth(item.element.clean_text)
        size = item.element.font_size
        if depth:
            level = depth
        elif size is not None and size > 0:
            level = rank[_size_key(size)]
        else:
            level = level_for_ratio(font_size_ratio(item.element, metrics))
        levels.append(min(level, MAX_LEVEL))

    logger.debug(f"Assigned levels to {len(headings)} headings over {len(sizes)} sizes")
    return levels
