"""
Shared plumbing for classifiers.

Every classifier is a plain function
``(element, metrics=None, context=None, *, config=None, logger=None)``
returning a ClassificationResult. Malformed elements never raise out of a
classifier: ``degrade_on_invalid`` turns InvalidElementError into a
``not-X`` result with zero confidence.

Consensus classifiers express each weak check as a Vote and combine them
with one of the combinators below.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from docroles.config import ClassifierConfig
from docroles.exceptions import InvalidElementError
from docroles.models import (
    DEFAULT_BASE_FONT_SIZE,
    ClassificationResult,
    DocumentMetrics,
    ElementContext,
    ListInfo,
    TextElement,
    finite_or_none,
)

logger = logging.getLogger(__name__)

MIN_FONT_SIZE = 0.1
MAX_FONT_SIZE = 1000.0
MIN_RATIO = 0.1
MAX_RATIO = 10.0


class Classifier(Protocol):
    """Call signature shared by all classifiers."""

    def __call__(
        self,
        element: Any,
        metrics: Any = None,
        context: ElementContext | None = None,
        *,
        config: ClassifierConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> ClassificationResult: ...


@dataclass(frozen=True)
class Vote:
    """One weak check's opinion."""

    method: str
    positive: bool
    confidence: float
    info: ListInfo | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def support(self) -> float:
        """Confidence expressed in favour of the role."""
        return self.confidence if self.positive else 1.0 - self.confidence


def prepare(
    element: Any,
    metrics: Any = None,
    context: ElementContext | None = None,
) -> tuple[TextElement, DocumentMetrics, ElementContext]:
    """
    Coerce classifier inputs.

    Raises:
        InvalidElementError: If element is missing or not a key/value record.
    """
    if element is None:
        raise InvalidElementError("Element is missing")
    element = TextElement.from_mapping(element)
    metrics = DocumentMetrics.from_mapping(metrics)
    if not isinstance(context, ElementContext):
        context = ElementContext.from_element(element)
    return element, metrics, context


def validate_font_size(font_size: float | None, base_font_size: float) -> float:
    """Replace a missing, non-finite or non-positive size with the base size, clamp the rest."""
    font_size = finite_or_none(font_size)
    if font_size is None or font_size <= 0:
        return base_font_size if base_font_size > 0 else DEFAULT_BASE_FONT_SIZE
    return max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, font_size))


def font_size_ratio(element: TextElement, metrics: DocumentMetrics) -> float:
    """Element font size over the document base size, clamped to [0.1, 10]."""
    base = validate_font_size(metrics.base_font_size, DEFAULT_BASE_FONT_SIZE)
    size = validate_font_size(element.font_size, base)
    return max(MIN_RATIO, min(MAX_RATIO, size / base))


def degrade_on_invalid(role: str) -> Callable:
    """
    Decorate a classifier so invalid input yields a degraded result.

    Args:
        role: Classifier role, used to build the ``not-<role>`` type.
    """

    def decorator(func: Callable[..., ClassificationResult]) -> Callable[..., ClassificationResult]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> ClassificationResult:
            try:
                return func(*args, **kwargs)
            except InvalidElementError as e:
                log = kwargs.get("logger") or logger
                log.debug(f"{role} classifier degraded: {e}")
                return ClassificationResult.degraded(role, str(e))

        return wrapper

    return decorator


def weighted_consensus(votes: Sequence[Vote], weights: Sequence[float]) -> float:
    """Sum of weight * support over all votes."""
    return sum(weight * vote.support for vote, weight in zip(votes, weights))


def max_confidence_consensus(votes: Sequence[Vote]) -> Vote | None:
    """
    Most confident positive vote.

    Ties keep the earliest vote, so check order matters.
    """
    best = None
    for vote in votes:
        if vote.positive and (best is None or vote.confidence > best.confidence):
            best = vote
    return best
