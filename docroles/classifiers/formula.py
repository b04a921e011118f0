"""Formula classifier (placeholder, always "not-formula")."""

from __future__ import annotations

import logging
from typing import Any

from docroles.classifiers.base import degrade_on_invalid, prepare
from docroles.config import ClassifierConfig
from docroles.models import ClassificationResult, ElementContext


@degrade_on_invalid("formula")
def classify_formula(
    element: Any,
    metrics: Any = None,
    context: ElementContext | None = None,
    *,
    config: ClassifierConfig | None = None,
    logger: logging.Logger | None = None,
) -> ClassificationResult:
    # TODO: detect math symbol density and math fonts once elements carry font names
    prepare(element, metrics, context)
    return ClassificationResult(type="not-formula", confidence=0.0, algorithm="placeholder")
