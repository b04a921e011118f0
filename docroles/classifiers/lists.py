"""
List item classifier.

Marker detection runs in two passes:
1. Multi-line consensus: at least two line records start with a marker
   (recovers "Heading:" + several bullet lines bundled into one element)
2. Single text: marker at the start of the text, or embedded after a
   colon/whitespace boundary

Three weak checks then vote on the detection (ordered markers, bullet
markers, indentation) and the most confident "list" vote wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from docroles.classifiers.base import (
    Vote,
    degrade_on_invalid,
    font_size_ratio,
    max_confidence_consensus,
    prepare,
)
from docroles.config import DEFAULT_CONFIG, ClassifierConfig, ListSettings
from docroles.models import (
    ClassificationResult,
    DocumentMetrics,
    ElementContext,
    ListInfo,
    TextElement,
)
from docroles.patterns import find_embedded_marker, match_list_marker

logger = logging.getLogger(__name__)

# Where the marker was found
SOURCE_LINES = "lines"
SOURCE_START = "start"
SOURCE_EMBEDDED = "embedded"


@dataclass(frozen=True)
class MarkerDetection:
    """Outcome of marker detection for one element."""

    info: ListInfo | None = None
    source: str | None = None
    marker_lines: int = 0

    @property
    def found(self) -> bool:
        return self.info is not None


def detect_markers(
    element: TextElement,
    metrics: DocumentMetrics,
    config: ClassifierConfig | None = None,
) -> MarkerDetection:
    """
    Find the list marker that best describes an element.

    A single-text numbered marker on text at least min_font_size_ratio
    larger than the body ("1. Introduction" at 18pt, "Chapter 3. Results"
    at 16pt) belongs to a numbered heading, not a list item, and is not
    reported.
    """
    config = config or DEFAULT_CONFIG

    line_infos = [
        info for info in (match_list_marker(line) for line in element.line_texts) if info
    ]
    if len(element.lines) > 1 and len(line_infos) >= config.lists.min_marker_lines:
        return MarkerDetection(
            info=line_infos[0], source=SOURCE_LINES, marker_lines=len(line_infos)
        )

    text = element.clean_text
    info = match_list_marker(text)
    source = SOURCE_START
    if info is None:
        info = find_embedded_marker(text)
        source = SOURCE_EMBEDDED
    if info is None:
        return MarkerDetection(marker_lines=len(line_infos))

    if info.pattern == "numbered" and (
        font_size_ratio(element, metrics) >= config.heading.min_font_size_ratio
    ):
        return MarkerDetection(marker_lines=len(line_infos))

    return MarkerDetection(info=info, source=source, marker_lines=len(line_infos))


def _detection_confidence(detection: MarkerDetection, settings: ListSettings) -> float:
    if detection.source == SOURCE_LINES:
        return settings.multi_line_confidence
    if detection.source == SOURCE_START:
        return settings.start_marker_confidence
    return settings.embedded_marker_confidence


def check_ordered_marker(detection: MarkerDetection, settings: ListSettings) -> Vote:
    """Numbered, lettered or roman marker."""
    if detection.found and detection.info.ordered:
        return Vote(
            "numbered-pattern",
            True,
            _detection_confidence(detection, settings),
            info=detection.info,
        )
    return Vote("numbered-pattern", False, settings.baseline_confidence)


def check_bullet_marker(detection: MarkerDetection, settings: ListSettings) -> Vote:
    """Bullet glyph marker."""
    if detection.found and not detection.info.ordered:
        return Vote(
            "bulleted-pattern",
            True,
            _detection_confidence(detection, settings),
            info=detection.info,
        )
    return Vote("bulleted-pattern", False, settings.baseline_confidence)


def check_indentation(detection: MarkerDetection, settings: ListSettings) -> Vote:
    """Indentation-based detection.

    Needs line geometry that elements do not carry, so it never votes for
    a list.
    """
    return Vote(
        "indentation",
        False,
        settings.indentation_confidence,
        details={"note": "requires line geometry"},
    )


LIST_CHECKS = (check_ordered_marker, check_bullet_marker, check_indentation)


def _run_checks(
    element: TextElement, metrics: DocumentMetrics, config: ClassifierConfig
) -> tuple[MarkerDetection, list[Vote], Vote | None]:
    detection = detect_markers(element, metrics, config)
    votes = [check(detection, config.lists) for check in LIST_CHECKS]
    return detection, votes, max_confidence_consensus(votes)


def looks_like_list(
    element: TextElement,
    metrics: DocumentMetrics,
    config: ClassifierConfig | None = None,
) -> bool:
    """Whether the element independently qualifies as a list item."""
    config = config or DEFAULT_CONFIG
    if element.type == "list":
        return True
    _, _, best = _run_checks(element, metrics, config)
    return best is not None and best.confidence > config.lists.decision_threshold


@degrade_on_invalid("list")
def classify_list(
    element: Any,
    metrics: Any = None,
    context: ElementContext | None = None,
    *,
    config: ClassifierConfig | None = None,
    logger: logging.Logger | None = None,
) -> ClassificationResult:
    """
    Classify an element as a list item.

    Args:
        element: TextElement or key/value record.
        metrics: Document metrics (defaults substituted if missing).
        context: Sequential context (unused by the marker checks).
        config: Classifier configuration (default if None).
        logger: Logger to use instead of the module logger.

    Returns:
        "list" / "not-list" result; list results carry type, level,
        marker and pattern of the winning detection.
    """
    element, metrics, context = prepare(element, metrics, context)
    config = config or DEFAULT_CONFIG
    log = logger or logging.getLogger(__name__)

    detection, votes, best = _run_checks(element, metrics, config)
    confidence = best.confidence if best else 0.0
    is_list = confidence > config.lists.decision_threshold

    result = ClassificationResult(
        type="list" if is_list else "not-list",
        confidence=confidence,
        algorithm="consensus",
        details={
            "votes": [
                {"algorithm": v.method, "type": "list" if v.positive else "not-list",
                 "confidence": v.confidence}
                for v in votes
            ],
            "source": detection.source,
            "markerLines": detection.marker_lines,
        },
    )
    if is_list and best.info is not None:
        result.list_type = best.info.list_type
        result.list_level = best.info.level
        result.list_marker = best.info.marker
        result.list_pattern = best.info.pattern

    log.debug(
        f"List: {result.type} conf={confidence:.2f} source={detection.source} "
        f"text={element.clean_text[:50]!r}"
    )
    return result
