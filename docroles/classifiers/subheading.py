"""
Subheading level classifier.

Assigns a level 1-5 from font-size ratio bands alone, at a fixed low
confidence. Document-relative levels come from docroles.hierarchy; this
classifier is the fallback when no better evidence exists.
"""

from __future__ import annotations

import logging
from typing import Any

from docroles.classifiers.base import degrade_on_invalid, font_size_ratio, prepare
from docroles.config import ClassifierConfig
from docroles.models import ClassificationResult, ElementContext

# (minimum ratio, level), largest first
LEVEL_BANDS = ((1.5, 1), (1.3, 2), (1.2, 3), (1.1, 4))
DEFAULT_LEVEL = 5
PLACEHOLDER_CONFIDENCE = 0.5


def level_for_ratio(ratio: float) -> int:
    """Heading level for a font size ratio."""
    for minimum, level in LEVEL_BANDS:
        if ratio >= minimum:
            return level
    return DEFAULT_LEVEL


@degrade_on_invalid("heading")
def classify_subheading(
    element: Any,
    metrics: Any = None,
    context: ElementContext | None = None,
    *,
    config: ClassifierConfig | None = None,
    logger: logging.Logger | None = None,
) -> ClassificationResult:
    """Level from font ratio; always reports type "heading"."""
    element, metrics, context = prepare(element, metrics, context)
    ratio = font_size_ratio(element, metrics)
    return ClassificationResult(
        type="heading",
        confidence=PLACEHOLDER_CONFIDENCE,
        algorithm="placeholder-font-size",
        details={
            "fontSize": element.font_size,
            "baseFontSize": metrics.base_font_size,
            "ratio": round(ratio, 2),
        },
        level=level_for_ratio(ratio),
    )
