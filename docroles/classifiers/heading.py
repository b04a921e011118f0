"""
Heading classifier.

A table-driven scoring system: each signal is a (weight name, predicate)
pair; every predicate is evaluated, the weights of those that fire are
summed, and the total is compared against a threshold that adapts to the
document (font variability, base font size, homogeneity).

Penalties are ordinary signals with negative weights, so long prose
pushes the score down even when it is bold or large.

List classification always vetoes a heading decision.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from docroles.classifiers.base import degrade_on_invalid, font_size_ratio, prepare
from docroles.classifiers.lists import looks_like_list
from docroles.config import DEFAULT_CONFIG, ClassifierConfig
from docroles.models import (
    ClassificationResult,
    DocumentMetrics,
    ElementContext,
    TextElement,
)
from docroles.patterns import NUMBERED_HEADING, starts_with_capital, word_count

logger = logging.getLogger(__name__)

MULTI_WORD_CAPITAL_RANGE = (2, 6)


@dataclass(frozen=True)
class HeadingFeatures:
    """Everything the heading signals look at, computed once."""

    text: str
    length: int
    words: int
    ratio: float
    is_bold: bool
    is_italic: bool
    is_numbered: bool
    gap_after: float | None
    paragraph_gap_min: float | None
    variability: float
    context: ElementContext

    @property
    def is_styled(self) -> bool:
        return self.is_bold or self.is_italic

    @classmethod
    def extract(
        cls,
        element: TextElement,
        metrics: DocumentMetrics,
        context: ElementContext,
        config: ClassifierConfig,
    ) -> HeadingFeatures:
        text = element.clean_text
        ratio = font_size_ratio(element, metrics)
        return cls(
            text=text,
            length=len(text),
            words=word_count(text),
            ratio=ratio,
            is_bold=element.is_bold,
            is_italic=element.is_italic,
            is_numbered=(
                NUMBERED_HEADING.match(text) is not None
                and ratio >= config.heading.min_font_size_ratio
            ),
            gap_after=element.gap_after,
            paragraph_gap_min=metrics.gap_analysis.paragraph_gap_min,
            variability=metrics.font_size_variability,
            context=context,
        )


Predicate = Callable[[HeadingFeatures, ClassifierConfig], bool]


# Positive signals


def _numbered(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    return f.is_numbered


def _short_large_font(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    t = c.heading
    return f.length < t.short_large_max_length and f.ratio >= t.short_large_font_ratio


def _list_introducer(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    if f.context.introduces_list:
        return True
    return (
        f.text.endswith(":")
        and f.length < c.heading.short_large_max_length
        and f.context.next_is_list
    )


def _size(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    t = c.heading
    is_short = f.length < t.short_large_max_length
    if f.length < t.very_short_length and f.ratio >= t.very_short_bump_ratio:
        return True
    if is_short and f.ratio >= t.size_bump_ratio:
        return True

    required = (
        t.strong_font_size_ratio if f.variability > t.variability_cut else t.min_font_size_ratio
    )
    return f.ratio >= required and (
        f.ratio >= t.strong_font_size_ratio or f.is_styled or is_short
    )


def _multi_word_capital(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    low, high = MULTI_WORD_CAPITAL_RANGE
    return (
        starts_with_capital(f.text)
        and low <= f.words <= high
        and f.ratio >= c.heading.strong_font_size_ratio
    )


def _after_list(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    return f.context.prev_was_list


def _style(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    return f.is_styled


def _colon(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    return f.text.endswith(":") and f.length < c.heading.colon_max_length


def _gap_after(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    if f.gap_after is None:
        return False
    if f.paragraph_gap_min:
        return f.gap_after >= f.paragraph_gap_min * c.heading.significant_gap_multiplier
    return f.gap_after >= c.heading.min_gap_for_heading


def _short_capital(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    t = c.heading
    return (
        starts_with_capital(f.text)
        and f.length < t.capital_max_length
        and f.ratio >= t.min_font_size_ratio
    )


def _position(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    return f.context.is_first or f.context.prev_was_heading


def _first_short(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    return f.context.is_first and f.length < c.heading.short_text_max


# Penalties


def _very_long_text(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    return f.length > c.heading.definitely_prose_length


def _many_words(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    return f.words > c.heading.max_word_count


def _long_text_many_words(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    t = c.heading
    return f.length > t.medium_text and f.words > t.long_text_word_count


def _sentence_in_middle(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    return (
        "." in f.text
        and f.words > c.heading.sentence_word_count
        and not f.text.endswith(".")
    )


def _long_without_formatting(f: HeadingFeatures, c: ClassifierConfig) -> bool:
    t = c.heading
    return (
        f.length > t.short_text_max
        and not f.is_bold
        and f.ratio < t.short_large_font_ratio
    )


# (HeadingWeights field, predicate), evaluated in order
SIGNALS: tuple[tuple[str, Predicate], ...] = (
    ("numbered", _numbered),
    ("short_large_font", _short_large_font),
    ("list_introducer", _list_introducer),
    ("size", _size),
    ("multi_word_capital", _multi_word_capital),
    ("after_list", _after_list),
    ("style", _style),
    ("colon", _colon),
    ("gap_after", _gap_after),
    ("short_capital", _short_capital),
    ("position", _position),
    ("first_short", _first_short),
    ("very_long_text", _very_long_text),
    ("many_words", _many_words),
    ("long_text_many_words", _long_text_many_words),
    ("sentence_in_middle", _sentence_in_middle),
    ("long_without_formatting", _long_without_formatting),
)


def score_heading(features: HeadingFeatures, config: ClassifierConfig) -> tuple[float, list[str]]:
    """
    Sum the weights of every signal that fires.

    Returns:
        (score, names of fired signals)
    """
    score = 0.0
    fired = []
    for name, predicate in SIGNALS:
        if predicate(features, config):
            score += getattr(config.heading_weights, name)
            fired.append(name)
    return score, fired


def adaptive_threshold(metrics: DocumentMetrics, config: ClassifierConfig) -> float:
    """
    Score a heading must reach in this document.

    Lower when font sizes vary a lot (clear hierarchy), higher for small
    base fonts and for homogeneous documents unlikely to have headings.
    """
    t = config.heading
    if metrics.font_size_variability > t.variability_cut:
        threshold = t.high_variability_threshold
    else:
        threshold = t.low_variability_threshold

    if metrics.base_font_size < t.small_font_size:
        threshold += t.small_font_adjustment
    elif metrics.base_font_size > t.large_font_size:
        threshold += t.large_font_adjustment

    structure = metrics.structure
    if structure is not None and structure.is_homogeneous and not structure.likely_has_headings:
        threshold += t.homogeneous_adjustment

    return threshold


def heading_confidence(
    score: float,
    features: HeadingFeatures,
    is_heading: bool,
    config: ClassifierConfig,
) -> float:
    """Normalize score against the weight range, then apply boosts."""
    weights = config.heading_weights
    t = config.heading
    b = config.boosts

    confidence = (score - weights.min_score) / (weights.max_score - weights.min_score)

    boosts = (
        (features.length < t.short_large_max_length and features.ratio >= t.short_large_font_ratio,
         b.short_large_font),
        (features.context.is_first and features.length < t.short_text_max
         and features.ratio >= t.size_bump_ratio,
         b.first_short_larger),
        (features.ratio >= t.min_font_size_ratio and features.length < t.short_text_max
         and score > 0,
         b.large_ratio_short_text),
        (features.is_styled and features.length < t.short_text_max, b.styled_short),
        (features.length < t.very_short_length and features.ratio >= t.size_bump_ratio,
         b.short_any_size_bump),
    )
    for applies, factor in boosts:
        if applies:
            confidence = min(1.0, confidence * factor)

    if is_heading:
        confidence = max(confidence, t.min_heading_confidence)
    return max(0.0, min(1.0, confidence))


@degrade_on_invalid("heading")
def classify_heading(
    element: Any,
    metrics: Any = None,
    context: ElementContext | None = None,
    *,
    config: ClassifierConfig | None = None,
    logger: logging.Logger | None = None,
) -> ClassificationResult:
    """
    Classify an element as a heading.

    Args:
        element: TextElement or key/value record.
        metrics: Document metrics (defaults substituted if missing).
        context: Sequential context; built from the element's own hints
            when omitted.
        config: Classifier configuration (default if None).
        logger: Logger to use instead of the module logger.

    Returns:
        "heading" / "not-heading" result with score, threshold and the
        derived ratios in details.
    """
    element, metrics, context = prepare(element, metrics, context)
    config = config or DEFAULT_CONFIG
    log = logger or logging.getLogger(__name__)
    t = config.heading

    features = HeadingFeatures.extract(element, metrics, context, config)
    score, fired = score_heading(features, config)
    threshold = adaptive_threshold(metrics, config)

    is_very_large = (
        features.ratio >= t.very_large_font_ratio
        and features.words <= t.max_word_count_for_large_font
    )
    passes = (
        score >= threshold
        or (features.is_numbered and score >= t.numbered_min_score)
        or (is_very_large and score >= t.very_large_min_score)
    )
    is_heading = passes and not looks_like_list(element, metrics, config)
    confidence = heading_confidence(score, features, is_heading, config)

    log.debug(
        f"Heading: {'heading' if is_heading else 'not-heading'} score={score:g} "
        f"threshold={threshold:g} conf={confidence:.2f} text={features.text[:50]!r}"
    )
    return ClassificationResult(
        type="heading" if is_heading else "not-heading",
        confidence=confidence,
        algorithm="improved-scoring-system",
        details={
            "score": score,
            "threshold": threshold,
            "fontSizeRatio": round(features.ratio, 2),
            "textLength": features.length,
            "wordCount": features.words,
            "isNumbered": features.is_numbered,
            "isVeryLargeFont": is_very_large,
            "signals": fired,
        },
    )
