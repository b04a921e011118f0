"""
Configuration for docroles classification.

Every tunable constant of the classifiers lives here so that thresholds,
signal weights and confidence boosts can be validated against a labeled
corpus (see docroles.evaluation) instead of being edited in place.
"""

from dataclasses import dataclass, field, fields

from docroles.exceptions import ConfigurationError


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if value < low or value > high:
        raise ConfigurationError(f"{name} must be between {low} and {high}, got {value}")


@dataclass
class HeadingWeights:
    """
    Score deltas for each heading signal.

    Positive weights are evidence for a heading, negative weights are
    penalties. The theoretical score range used to normalize confidence
    is derived from these values.
    """

    # Very strong
    numbered: float = 5
    short_large_font: float = 5
    list_introducer: float = 5

    # Strong
    size: float = 4
    multi_word_capital: float = 4
    after_list: float = 3

    # Moderate
    style: float = 3
    colon: float = 2
    gap_after: float = 3

    # Weak
    short_capital: float = 2
    position: float = 2
    first_short: float = 2

    # Penalties
    very_long_text: float = -3
    many_words: float = -2
    long_text_many_words: float = -2
    sentence_in_middle: float = -1
    long_without_formatting: float = -1

    @property
    def max_score(self) -> float:
        """Sum of all positive weights."""
        return sum(max(0.0, getattr(self, f.name)) for f in fields(self))

    @property
    def min_score(self) -> float:
        """Sum of all negative weights."""
        return sum(min(0.0, getattr(self, f.name)) for f in fields(self))

    def __post_init__(self):
        """Validate configuration."""
        if self.max_score <= self.min_score:
            raise ConfigurationError("heading weights must span a non-empty score range")


@dataclass
class HeadingThresholds:
    """Ratios, lengths and adaptive-threshold parts for heading detection."""

    # Font size ratios
    min_font_size_ratio: float = 1.3
    strong_font_size_ratio: float = 1.35
    very_large_font_ratio: float = 2.0
    short_large_font_ratio: float = 1.2
    size_bump_ratio: float = 1.1
    very_short_bump_ratio: float = 1.05

    # Text lengths (characters)
    short_large_max_length: int = 100
    very_short_length: int = 50
    short_text_max: int = 150
    colon_max_length: int = 100
    capital_max_length: int = 80
    medium_text: int = 200
    definitely_prose_length: int = 300

    # Word counts
    max_word_count: int = 15
    max_word_count_for_large_font: int = 5
    long_text_word_count: int = 10
    sentence_word_count: int = 5

    # Adaptive threshold
    variability_cut: float = 0.3
    high_variability_threshold: float = 3
    low_variability_threshold: float = 4
    small_font_size: float = 10
    small_font_adjustment: float = 1
    large_font_size: float = 16
    large_font_adjustment: float = -1
    homogeneous_adjustment: float = 1

    # Overrides of the adaptive threshold
    numbered_min_score: float = 2
    very_large_min_score: float = 1

    # Gap after
    significant_gap_multiplier: float = 1.5
    min_gap_for_heading: float = 20

    # Confidence floor for accepted headings
    min_heading_confidence: float = 0.6

    def __post_init__(self):
        """Validate configuration."""
        if self.strong_font_size_ratio < self.min_font_size_ratio:
            raise ConfigurationError(
                f"strong_font_size_ratio ({self.strong_font_size_ratio}) must be >= "
                f"min_font_size_ratio ({self.min_font_size_ratio})"
            )
        _check_range("min_heading_confidence", self.min_heading_confidence, 0.0, 1.0)
        if self.significant_gap_multiplier <= 0:
            raise ConfigurationError(
                f"significant_gap_multiplier must be > 0, got {self.significant_gap_multiplier}"
            )


@dataclass
class ConfidenceBoosts:
    """
    Multiplicative heading confidence boosts.

    These were tuned by eye on real documents and have no derivation;
    treat them as starting points and re-fit them with docroles.evaluation.
    """

    short_large_font: float = 2.0
    first_short_larger: float = 1.8
    large_ratio_short_text: float = 1.6
    short_any_size_bump: float = 1.5
    styled_short: float = 1.4

    def __post_init__(self):
        """Validate configuration."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 1.0:
                raise ConfigurationError(f"boost {f.name} must be >= 1.0, got {value}")


@dataclass
class ParagraphSettings:
    """Length cutoffs and vote weights for the paragraph consensus."""

    short_length: int = 50
    medium_length: int = 200
    weights: tuple[float, float, float] = (0.4, 0.3, 0.3)  # length, sentences, punctuation
    decision_threshold: float = 0.5

    def __post_init__(self):
        """Validate configuration."""
        if self.short_length < 1:
            raise ConfigurationError(f"short_length must be >= 1, got {self.short_length}")
        if self.medium_length <= self.short_length:
            raise ConfigurationError(
                f"medium_length ({self.medium_length}) must be > short_length ({self.short_length})"
            )
        if len(self.weights) != 3:
            raise ConfigurationError(f"paragraph weights need 3 entries, got {len(self.weights)}")
        total = sum(self.weights)
        if abs(total - 1.0) > 1e-6:
            raise ConfigurationError(f"paragraph weights must sum to 1.0, got {total:g}")
        _check_range("decision_threshold", self.decision_threshold, 0.0, 1.0)


@dataclass
class ListSettings:
    """Confidence levels for the list detection checks."""

    multi_line_confidence: float = 0.95
    start_marker_confidence: float = 0.9
    embedded_marker_confidence: float = 0.75
    baseline_confidence: float = 0.2
    indentation_confidence: float = 0.1
    min_marker_lines: int = 2
    decision_threshold: float = 0.5

    def __post_init__(self):
        """Validate configuration."""
        for name in (
            "multi_line_confidence",
            "start_marker_confidence",
            "embedded_marker_confidence",
            "baseline_confidence",
            "indentation_confidence",
            "decision_threshold",
        ):
            _check_range(name, getattr(self, name), 0.0, 1.0)
        if self.min_marker_lines < 2:
            raise ConfigurationError(f"min_marker_lines must be >= 2, got {self.min_marker_lines}")


@dataclass
class MetricsSettings:
    """Defaults and cutoffs for the document metrics pass."""

    default_font_size: float = 12.0
    body_text_min_length: int = 100
    font_size_rounding: float = 0.5
    max_variability: float = 1.0

    def __post_init__(self):
        """Validate configuration."""
        if self.default_font_size <= 0:
            raise ConfigurationError(
                f"default_font_size must be > 0, got {self.default_font_size}"
            )
        if self.font_size_rounding <= 0:
            raise ConfigurationError(
                f"font_size_rounding must be > 0, got {self.font_size_rounding}"
            )
        if self.max_variability <= 0:
            raise ConfigurationError(f"max_variability must be > 0, got {self.max_variability}")


@dataclass
class ClassifierConfig:
    """
    Configuration for document-structure classification.

    All options have sensible defaults. Create a config only
    if you need to customize behavior.

    Example:
        >>> config = ClassifierConfig(
        ...     boosts=ConfidenceBoosts(short_large_font=1.5),
        ... )
        >>> results = docroles.classify(elements, config=config)
    """

    heading_weights: HeadingWeights = field(default_factory=HeadingWeights)
    heading: HeadingThresholds = field(default_factory=HeadingThresholds)
    boosts: ConfidenceBoosts = field(default_factory=ConfidenceBoosts)
    paragraph: ParagraphSettings = field(default_factory=ParagraphSettings)
    lists: ListSettings = field(default_factory=ListSettings)
    metrics: MetricsSettings = field(default_factory=MetricsSettings)

    # Orchestrator options
    detect_images: bool = True
    assign_heading_levels: bool = True


DEFAULT_CONFIG = ClassifierConfig()
