"""
Classification orchestrator.

Runs the per-role classifiers over a document in order:
1. Compute DocumentMetrics once, before any element is classified
2. For each element, build context from the previous element's final role
   plus a raw lookahead at the next element
3. Image tag passthrough, then list (its veto must be known before
   heading), then heading, then table/formula, then paragraph
4. Assign document-relative heading levels

A failure on one element never aborts the pass: the element gets a
degraded paragraph entry and processing continues.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from docroles.analyzers.context import build_context
from docroles.analyzers.metrics import compute_metrics
from docroles.classifiers import (
    classify_formula,
    classify_heading,
    classify_image,
    classify_list,
    classify_paragraph,
    classify_subheading,
    classify_table,
)
from docroles.config import DEFAULT_CONFIG, ClassifierConfig
from docroles.exceptions import InvalidElementError
from docroles.hierarchy import assign_heading_levels
from docroles.models import (
    ClassificationResult,
    ClassifiedElement,
    DocumentMetrics,
    ElementContext,
    Role,
    TextElement,
)

logger = logging.getLogger(__name__)


@dataclass
class ClassificationRun:
    """Result of classifying one document."""

    metrics: DocumentMetrics
    items: list[ClassifiedElement]
    processing_log: list[str] = field(default_factory=list)

    @property
    def results(self) -> list[ClassificationResult]:
        """Winning classification per element, in document order."""
        return [item.result for item in self.items]

    @property
    def roles(self) -> list[Role]:
        """Resolved role per element, in document order."""
        return [item.role for item in self.items]

    def count(self, role: Role) -> int:
        """Number of elements resolved to role."""
        return sum(1 for item in self.items if item.role == role)


class StructureClassifier:
    """Classifies a flat element sequence into document roles.

    Usage:
        classifier = StructureClassifier()
        run = classifier.run(elements)
        for item in run.items:
            print(f"{item.role.value}: {item.text[:40]} (conf={item.confidence:.2f})")

    Custom thresholds:
        config = ClassifierConfig(heading=HeadingThresholds(min_font_size_ratio=1.25))
        classifier = StructureClassifier(config=config)
    """

    def __init__(
        self,
        *,
        config: ClassifierConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize the classifier.

        Args:
            config: Classifier configuration (default if None).
            logger: Logger for this run; the module logger when omitted.
        """
        self.config = config or DEFAULT_CONFIG
        self.log = logger or logging.getLogger(__name__)

    def run(self, elements: Iterable[Any] | None, metrics: Any = None) -> ClassificationRun:
        """Classify every element of a document.

        Args:
            elements: TextElements or key/value records in document order.
            metrics: Precomputed DocumentMetrics or record; computed from
                elements when None.

        Returns:
            ClassificationRun with one item per input element.
        """
        log: list[str] = []
        if elements is None:
            raw = []
        elif isinstance(elements, (str, bytes, Mapping)) or not isinstance(elements, Iterable):
            self.log.warning(f"Expected a sequence of elements, got {type(elements).__name__}")
            log.append("Input is not a sequence of elements")
            raw = []
        else:
            raw = list(elements)
        prepared, invalid = self._prepare(raw, log)

        if metrics is None:
            doc_metrics = compute_metrics(prepared, self.config, logger=self.log)
            log.append(
                f"Computed metrics: base font {doc_metrics.base_font_size:g}, "
                f"variability {doc_metrics.font_size_variability:.2f}"
            )
        else:
            doc_metrics = DocumentMetrics.from_mapping(metrics)
            log.append("Using supplied metrics")

        items: list[ClassifiedElement] = []
        previous_role: Role | None = None
        for i, element in enumerate(prepared):
            if i in invalid:
                item = self._degraded(element, invalid[i])
            else:
                item = self._classify_safely(prepared, i, previous_role, doc_metrics, log)
            items.append(item)
            previous_role = item.role

        if self.config.assign_heading_levels:
            for item, level in zip(items, assign_heading_levels(items, doc_metrics)):
                if level is not None:
                    item.heading_level = level

        summary = ", ".join(
            f"{role.value}={sum(1 for item in items if item.role == role)}"
            for role in Role
            if any(item.role == role for item in items)
        )
        log.append(f"Classified {len(items)} elements ({summary or 'none'})")
        return ClassificationRun(metrics=doc_metrics, items=items, processing_log=log)

    def _prepare(
        self, raw: list[Any], log: list[str]
    ) -> tuple[list[TextElement], dict[int, str]]:
        """Coerce records; remember which ones were unusable."""
        prepared = []
        invalid = {}
        for i, item in enumerate(raw):
            try:
                prepared.append(TextElement.from_mapping(item))
            except InvalidElementError as e:
                invalid[i] = str(e)
                prepared.append(TextElement())
                log.append(f"Element {i} is invalid: {e}")
                self.log.warning(f"Element {i} is invalid: {e}")
        return prepared, invalid

    def _classify_safely(
        self,
        elements: list[TextElement],
        index: int,
        previous_role: Role | None,
        metrics: DocumentMetrics,
        log: list[str],
    ) -> ClassifiedElement:
        """Classify one element with error handling."""
        try:
            context = build_context(elements, index, previous_role, self.config)
            return self._classify(elements[index], metrics, context)
        except Exception as e:
            log.append(f"Element {index} failed: {e}")
            self.log.warning(f"Element {index} failed: {e}")
            return self._degraded(elements[index], str(e))

    def _classify(
        self,
        element: TextElement,
        metrics: DocumentMetrics,
        context: ElementContext,
    ) -> ClassifiedElement:
        kwargs = {"config": self.config, "logger": self.log}

        if self.config.detect_images:
            image = classify_image(element, metrics, context, **kwargs)
            if image.is_positive:
                return ClassifiedElement(element, image, Role.IMAGE)

        list_result = classify_list(element, metrics, context, **kwargs)
        if list_result.is_positive:
            return ClassifiedElement(element, list_result, Role.LIST)

        heading = classify_heading(element, metrics, context, **kwargs)
        if heading.is_positive:
            level = classify_subheading(element, metrics, context, **kwargs).level
            return ClassifiedElement(element, heading, Role.HEADING, heading_level=level)

        for classifier, role in ((classify_table, Role.TABLE), (classify_formula, Role.FORMULA)):
            result = classifier(element, metrics, context, **kwargs)
            if result.is_positive:
                return ClassifiedElement(element, result, role)

        # Paragraph is the fallback role even when its own vote is negative
        paragraph = classify_paragraph(element, metrics, context, **kwargs)
        return ClassifiedElement(element, paragraph, Role.PARAGRAPH)

    @staticmethod
    def _degraded(element: TextElement, error: str) -> ClassifiedElement:
        return ClassifiedElement(
            element,
            ClassificationResult.degraded("paragraph", error),
            Role.PARAGRAPH,
        )


def classify(
    elements: Iterable[Any] | None,
    metrics: Any = None,
    *,
    config: ClassifierConfig | None = None,
    logger: logging.Logger | None = None,
) -> list[ClassifiedElement]:
    """
    Classify a document's elements.

    Args:
        elements: TextElements or key/value records in document order.
        metrics: Precomputed DocumentMetrics or record (computed if None).
        config: Classifier configuration (default if None).
        logger: Logger to use instead of the module logger.

    Returns:
        One ClassifiedElement per input element, in the same order.

    Example:
        >>> items = classify([{"text": "1. Introduction", "fontSize": 18}, ...])
        >>> items[0].role
        <Role.HEADING: 'heading'>
    """
    return StructureClassifier(config=config, logger=logger).run(elements, metrics).items
