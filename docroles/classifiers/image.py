"""Image classifier: images are identified upstream by their type tag."""

from __future__ import annotations

import logging
from typing import Any

from docroles.classifiers.base import degrade_on_invalid, prepare
from docroles.config import ClassifierConfig
from docroles.models import ClassificationResult, ElementContext


@degrade_on_invalid("image")
def classify_image(
    element: Any,
    metrics: Any = None,
    context: ElementContext | None = None,
    *,
    config: ClassifierConfig | None = None,
    logger: logging.Logger | None = None,
) -> ClassificationResult:
    element, metrics, context = prepare(element, metrics, context)
    is_image = element.type == "image"
    return ClassificationResult(
        type="image" if is_image else "not-image",
        confidence=1.0,
        algorithm="type-check",
    )
