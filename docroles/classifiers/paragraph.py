"""
Paragraph classifier: weighted consensus of three weak votes.

Each vote states its own decision and its confidence in that decision;
the combinator turns not-paragraph votes into 1 - confidence before
weighting. Default weights are length 0.4, sentences 0.3, punctuation 0.3.
"""

from __future__ import annotations

import logging
from typing import Any

from docroles.classifiers.base import Vote, degrade_on_invalid, prepare, weighted_consensus
from docroles.config import DEFAULT_CONFIG, ClassifierConfig, ParagraphSettings
from docroles.models import ClassificationResult, ElementContext
from docroles.patterns import PUNCTUATION, SENTENCE_SPLIT, TERMINAL_PUNCTUATION

logger = logging.getLogger(__name__)

LENGTH_VOTE_CAP = 0.9
SENTENCE_VOTE_CAP = 0.8
MIN_SENTENCE_VOTE = 0.2
PUNCTUATION_VOTE_CONFIDENCE = 0.7
MIN_PUNCTUATION_MARKS = 2


def count_sentences(text: str) -> int:
    """Number of non-empty segments between sentence terminators."""
    return sum(1 for part in SENTENCE_SPLIT.split(text) if part.strip())


def vote_length(text: str, settings: ParagraphSettings) -> Vote:
    """Longer than the short cutoff favours paragraph; fragments do not."""
    length = len(text)
    if length > settings.short_length:
        confidence = min(LENGTH_VOTE_CAP, 0.5 + (length / settings.medium_length) * 0.4)
        return Vote("length", True, confidence, details={"length": length})
    confidence = min(LENGTH_VOTE_CAP, 0.5 + (1 - length / settings.short_length) * 0.4)
    return Vote("length", False, confidence, details={"length": length})


def vote_sentences(text: str, settings: ParagraphSettings) -> Vote:
    """Two or more sentences favour paragraph."""
    sentences = count_sentences(text)
    if sentences >= 2:
        confidence = min(SENTENCE_VOTE_CAP, 0.4 + sentences * 0.1)
        return Vote("sentence-structure", True, confidence, details={"sentences": sentences})
    confidence = max(MIN_SENTENCE_VOTE, 0.6 - 0.2 * sentences)
    return Vote("sentence-structure", False, confidence, details={"sentences": sentences})


def vote_punctuation(text: str, settings: ParagraphSettings) -> Vote:
    """Terminal punctuation plus at least two punctuation marks."""
    marks = len(PUNCTUATION.findall(text))
    positive = bool(TERMINAL_PUNCTUATION.search(text)) and marks >= MIN_PUNCTUATION_MARKS
    return Vote(
        "punctuation-density",
        positive,
        PUNCTUATION_VOTE_CONFIDENCE,
        details={"marks": marks},
    )


PARAGRAPH_VOTES = (vote_length, vote_sentences, vote_punctuation)


@degrade_on_invalid("paragraph")
def classify_paragraph(
    element: Any,
    metrics: Any = None,
    context: ElementContext | None = None,
    *,
    config: ClassifierConfig | None = None,
    logger: logging.Logger | None = None,
) -> ClassificationResult:
    """
    Classify an element as a paragraph.

    Paragraph iff the weighted consensus exceeds the decision threshold;
    the consensus value is reported as the confidence either way.
    """
    element, metrics, context = prepare(element, metrics, context)
    config = config or DEFAULT_CONFIG
    log = logger or logging.getLogger(__name__)
    settings = config.paragraph

    text = element.clean_text
    votes = [vote(text, settings) for vote in PARAGRAPH_VOTES]
    total = weighted_consensus(votes, settings.weights)
    is_paragraph = total > settings.decision_threshold

    log.debug(f"Paragraph: consensus={total:.3f} text={text[:50]!r}")
    return ClassificationResult(
        type="paragraph" if is_paragraph else "not-paragraph",
        confidence=total,
        algorithm="consensus",
        details={
            "votes": [
                {
                    "algorithm": v.method,
                    "type": "paragraph" if v.positive else "not-paragraph",
                    "confidence": round(v.confidence, 4),
                    **v.details,
                }
                for v in votes
            ],
            "weights": list(settings.weights),
        },
    )
