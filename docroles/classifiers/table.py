"""
Table classifier.

Table detection needs cell geometry (column alignment, row structure)
that TextElement does not carry, so this always answers "not-table" with
zero confidence. The signature matches the other classifiers so the
orchestrator does not change when a real detector lands.
"""

from __future__ import annotations

import logging
from typing import Any

from docroles.classifiers.base import degrade_on_invalid, prepare
from docroles.config import ClassifierConfig
from docroles.models import ClassificationResult, ElementContext


@degrade_on_invalid("table")
def classify_table(
    element: Any,
    metrics: Any = None,
    context: ElementContext | None = None,
    *,
    config: ClassifierConfig | None = None,
    logger: logging.Logger | None = None,
) -> ClassificationResult:
    prepare(element, metrics, context)
    return ClassificationResult(type="not-table", confidence=0.0, algorithm="placeholder")
