"""
Document-level metrics.

One pass over the whole element sequence, before any classification:
- base font size: length-weighted mode of rounded font sizes, so a few
  large captions or headings do not move it
- font size variability: coefficient of variation, bounded to [0, 1]
- minimal paragraph gap: taken only between elements that look like body
  text by length, never from heading decisions
- structure signals: font/style variation, homogeneity
"""

from __future__ import annotations

import logging
import statistics
from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from docroles.config import DEFAULT_CONFIG, ClassifierConfig, MetricsSettings
from docroles.exceptions import InvalidElementError
from docroles.models import (
    DocumentMetrics,
    DocumentStructure,
    GapAnalysis,
    TextElement,
    finite_or_none,
)

logger = logging.getLogger(__name__)

# Short first element followed by a long one suggests title + body
_TITLE_MAX_LENGTH = 150
_BODY_AFTER_TITLE_LENGTH = 200


def coerce_elements(
    elements: Iterable[Any] | None,
    log: logging.Logger | None = None,
) -> list[TextElement]:
    """Convert records to TextElements, dropping anything unusable."""
    log = log or logger
    if elements is None:
        return []
    if not isinstance(elements, Iterable) or isinstance(elements, (str, bytes, Mapping)):
        log.warning(f"Expected a sequence of elements, got {type(elements).__name__}")
        return []

    coerced = []
    for i, item in enumerate(elements):
        try:
            coerced.append(TextElement.from_mapping(item))
        except InvalidElementError as e:
            log.debug(f"Skipping element {i} for metrics: {e}")
    return coerced


def _valid_size(element: TextElement) -> float | None:
    size = finite_or_none(element.font_size)
    if size is None or size <= 0:
        return None
    return size


def _round_size(size: float, step: float) -> float:
    return round(size / step) * step


def dominant_font_size(
    elements: list[TextElement],
    settings: MetricsSettings | None = None,
) -> float:
    """
    Length-weighted mode of font sizes.

    Sizes are rounded to settings.font_size_rounding before voting; each
    element votes with its text length (at least 1). Ties go to the
    smaller size.
    """
    settings = settings or MetricsSettings()
    weights: Counter[float] = Counter()
    for element in elements:
        size = _valid_size(element)
        if size is None:
            continue
        weights[_round_size(size, settings.font_size_rounding)] += max(
            len(element.clean_text), 1
        )

    if not weights:
        return settings.default_font_size

    size, _ = max(weights.items(), key=lambda item: (item[1], -item[0]))
    return size


def font_size_variability(
    elements: list[TextElement],
    settings: MetricsSettings | None = None,
) -> float:
    """Population std / mean of font sizes, 0 when degenerate."""
    settings = settings or MetricsSettings()
    sizes = [s for s in (_valid_size(e) for e in elements) if s is not None]
    if len(sizes) < 2:
        return 0.0

    mean = statistics.fmean(sizes)
    if mean <= 0:
        return 0.0
    variability = statistics.pstdev(sizes) / mean
    return max(0.0, min(settings.max_variability, variability))


def analyze_gaps(
    elements: list[TextElement],
    settings: MetricsSettings | None = None,
) -> GapAnalysis:
    """
    Smallest gap between consecutive body-text elements.

    Both neighbours must be at least settings.body_text_min_length long.
    """
    settings = settings or MetricsSettings()
    gaps = []
    for current, following in zip(elements, elements[1:]):
        if len(current.clean_text) < settings.body_text_min_length:
            continue
        if len(following.clean_text) < settings.body_text_min_length:
            continue
        if current.gap_after is not None and current.gap_after > 0:
            gaps.append(current.gap_after)

    return GapAnalysis(
        paragraph_gap_min=min(gaps) if gaps else None,
        sample_count=len(gaps),
    )


def analyze_structure(
    elements: list[TextElement],
    settings: MetricsSettings | None = None,
) -> DocumentStructure:
    """Font and style variation signals for the whole document."""
    settings = settings or MetricsSettings()
    sizes = {
        _round_size(size, settings.font_size_rounding)
        for size in (_valid_size(e) for e in elements)
        if size is not None
    }
    has_font_variation = len(sizes) > 1
    has_style_variation = any(e.is_bold or e.is_italic for e in elements)

    title_then_body = (
        len(elements) >= 2
        and len(elements[0].clean_text) < _TITLE_MAX_LENGTH
        and len(elements[1].clean_text) > _BODY_AFTER_TITLE_LENGTH
    )

    return DocumentStructure(
        is_homogeneous=not has_font_variation and not has_style_variation,
        has_font_variation=has_font_variation,
        has_style_variation=has_style_variation,
        likely_has_headings=has_font_variation or has_style_variation or title_then_body,
        unique_font_sizes=tuple(sorted(sizes)),
        total_elements=len(elements),
    )


def compute_metrics(
    elements: Iterable[Any] | None,
    config: ClassifierConfig | None = None,
    *,
    logger: logging.Logger | None = None,
) -> DocumentMetrics:
    """
    Compute baseline statistics for a document.

    Never raises: malformed elements are skipped and empty input yields
    the default metrics.

    Args:
        elements: TextElements or key/value records in document order.
        config: Classifier configuration (default if None).
        logger: Logger to use instead of the module logger.

    Returns:
        DocumentMetrics including structure signals.
    """
    log = logger or logging.getLogger(__name__)
    settings = (config or DEFAULT_CONFIG).metrics
    items = coerce_elements(elements, log)

    metrics = DocumentMetrics(
        base_font_size=dominant_font_size(items, settings),
        font_size_variability=font_size_variability(items, settings),
        gap_analysis=analyze_gaps(items, settings),
        structure=analyze_structure(items, settings),
    )
    log.debug(
        f"Metrics: base={metrics.base_font_size:.1f} "
        f"variability={metrics.font_size_variability:.3f} "
        f"gap_min={metrics.gap_analysis.paragraph_gap_min} over {len(items)} elements"
    )
    return metrics
