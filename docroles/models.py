"""
Data models for docroles.

TextElement is what the upstream extraction stage hands us, DocumentMetrics
is computed once per document, and ClassificationResult is what every
classifier returns.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from docroles.exceptions import InvalidElementError, InvalidMetricsError

DEFAULT_BASE_FONT_SIZE = 12.0


class Role(str, Enum):
    """Semantic role of an element in the final document."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    TABLE = "table"
    IMAGE = "image"
    FORMULA = "formula"


# Accepted spellings for each TextElement field
_ELEMENT_KEYS = {
    "font_size": ("font_size", "fontSize"),
    "is_bold": ("is_bold", "isBold"),
    "is_italic": ("is_italic", "isItalic"),
    "gap_after": ("gap_after", "gapAfter"),
    "is_first": ("is_first", "isFirst"),
    "prev_was_heading": ("prev_was_heading", "prevWasHeading"),
    "prev_was_list": ("prev_was_list", "prevWasList"),
    "next_is_list": ("next_is_list", "nextIsList"),
    "followed_by_list": ("followed_by_list", "followedByList"),
    "is_list_heading": ("is_list_heading", "isListHeading"),
}


def _lookup(data: Mapping, keys: tuple[str, ...], default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


def finite_or_none(value: Any) -> float | None:
    """Return value as a finite float, or None if it is not one."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class LineRecord:
    """One visual line inside a multi-line element."""

    text: str

    @classmethod
    def coerce(cls, value: Any) -> LineRecord:
        """Build a line from a LineRecord, a string or a {text: ...} record."""
        if isinstance(value, LineRecord):
            return value
        if isinstance(value, str):
            return cls(text=value)
        if isinstance(value, Mapping):
            text = value.get("text")
            return cls(text="" if text is None else str(text))
        return cls(text="")


@dataclass
class TextElement:
    """
    One unit of extracted content with text and layout metadata.

    Positional hints (is_first, prev_was_heading, ...) are optional: the
    orchestrator derives them itself, but callers classifying a single
    element can set them directly.
    """

    text: str = ""
    font_size: float | None = None
    is_bold: bool = False
    is_italic: bool = False
    gap_after: float | None = None  # Vertical space before the next element
    lines: list[LineRecord] = field(default_factory=list)
    type: str | None = None  # Pre-set tag, e.g. "image"

    # Caller-supplied positional hints
    is_first: bool = False
    prev_was_heading: bool = False
    prev_was_list: bool = False
    next_is_list: bool = False
    followed_by_list: bool = False
    is_list_heading: bool = False

    def __post_init__(self):
        """Drop non-finite or non-numeric sizes and gaps."""
        self.font_size = finite_or_none(self.font_size)
        self.gap_after = finite_or_none(self.gap_after)
        if not isinstance(self.text, str):
            self.text = "" if self.text is None else str(self.text)

    @property
    def clean_text(self) -> str:
        """Text with surrounding whitespace removed."""
        return self.text.strip()

    @property
    def line_texts(self) -> list[str]:
        """Stripped text of each line record."""
        return [line.text.strip() for line in self.lines]

    @classmethod
    def from_mapping(cls, data: Any) -> TextElement:
        """
        Coerce a key/value record into a TextElement.

        Accepts camelCase (fontSize, isBold, gapAfter, ...) or snake_case
        keys. Malformed numeric fields become None rather than raising.

        Raises:
            InvalidElementError: If data is not a mapping or TextElement.
        """
        if isinstance(data, TextElement):
            return data
        if not isinstance(data, Mapping):
            raise InvalidElementError(
                f"Element must be a mapping or TextElement, got {type(data).__name__}"
            )

        text = data.get("text")
        raw_lines = data.get("lines") or []
        if isinstance(raw_lines, (str, bytes)) or not hasattr(raw_lines, "__iter__"):
            raw_lines = []

        element_type = data.get("type")
        kwargs: dict[str, Any] = {
            "text": "" if text is None else str(text),
            "font_size": finite_or_none(_lookup(data, _ELEMENT_KEYS["font_size"])),
            "gap_after": finite_or_none(_lookup(data, _ELEMENT_KEYS["gap_after"])),
            "lines": [LineRecord.coerce(line) for line in raw_lines],
            "type": element_type if isinstance(element_type, str) else None,
        }
        for name in (
            "is_bold",
            "is_italic",
            "is_first",
            "prev_was_heading",
            "prev_was_list",
            "next_is_list",
            "followed_by_list",
            "is_list_heading",
        ):
            kwargs[name] = bool(_lookup(data, _ELEMENT_KEYS[name], False))

        return cls(**kwargs)


@dataclass(frozen=True)
class GapAnalysis:
    """Inter-element gap statistics."""

    paragraph_gap_min: float | None = None  # Smallest gap between body paragraphs
    sample_count: int = 0

    def __post_init__(self):
        gap_min = finite_or_none(self.paragraph_gap_min)
        object.__setattr__(
            self, "paragraph_gap_min", gap_min if gap_min is not None and gap_min > 0 else None
        )


@dataclass(frozen=True)
class DocumentStructure:
    """Document-level style signals used to tune heading strictness."""

    is_homogeneous: bool = False
    has_font_variation: bool = False
    has_style_variation: bool = False
    likely_has_headings: bool = True
    unique_font_sizes: tuple[float, ...] = ()
    total_elements: int = 0


@dataclass(frozen=True)
class DocumentMetrics:
    """Baseline statistics computed once per document."""

    base_font_size: float = DEFAULT_BASE_FONT_SIZE
    font_size_variability: float = 0.0
    gap_analysis: GapAnalysis = field(default_factory=GapAnalysis)
    structure: DocumentStructure | None = None

    def __post_init__(self):
        """Replace unusable numbers with defaults, so metrics built directly are safe too."""
        base = finite_or_none(self.base_font_size)
        object.__setattr__(
            self, "base_font_size", base if base is not None and base > 0 else DEFAULT_BASE_FONT_SIZE
        )
        variability = finite_or_none(self.font_size_variability)
        object.__setattr__(
            self,
            "font_size_variability",
            variability if variability is not None and variability >= 0 else 0.0,
        )
        if not isinstance(self.gap_analysis, GapAnalysis):
            object.__setattr__(self, "gap_analysis", GapAnalysis())

    @classmethod
    def from_mapping(cls, data: Any, *, strict: bool = False) -> DocumentMetrics:
        """
        Coerce a metrics record, substituting defaults for bad values.

        Args:
            data: DocumentMetrics, mapping with camelCase or snake_case keys,
                or anything else (treated as missing).
            strict: Raise InvalidMetricsError instead of substituting defaults.

        Returns:
            DocumentMetrics with every field usable.
        """
        if isinstance(data, DocumentMetrics):
            return data
        if not isinstance(data, Mapping):
            if strict:
                raise InvalidMetricsError(
                    f"Metrics must be a mapping, got {type(data).__name__}"
                )
            return cls()

        base = finite_or_none(_lookup(data, ("base_font_size", "baseFontSize")))
        if base is None or base <= 0:
            if strict:
                raise InvalidMetricsError(f"Invalid base font size: {base!r}")
            base = DEFAULT_BASE_FONT_SIZE

        variability = finite_or_none(
            _lookup(data, ("font_size_variability", "fontSizeVariability"))
        )
        if variability is None or variability < 0:
            variability = 0.0

        gap_data = _lookup(data, ("gap_analysis", "gapAnalysis"))
        if isinstance(gap_data, GapAnalysis):
            gaps = gap_data
        elif isinstance(gap_data, Mapping):
            gaps = GapAnalysis(
                paragraph_gap_min=_lookup(gap_data, ("paragraph_gap_min", "paragraphGapMin"))
            )
        else:
            gaps = GapAnalysis()

        structure = data.get("structure")
        return cls(
            base_font_size=base,
            font_size_variability=variability,
            gap_analysis=gaps,
            structure=structure if isinstance(structure, DocumentStructure) else None,
        )


@dataclass(frozen=True)
class ElementContext:
    """Sequential context for one element."""

    is_first: bool = False
    prev_was_heading: bool = False
    prev_was_list: bool = False
    next_is_list: bool = False
    introduces_list: bool = False  # Caller flag or own lookahead: short text ending ':' before a list

    @classmethod
    def from_element(cls, element: TextElement) -> ElementContext:
        """Context from the caller-supplied hints on the element itself."""
        return cls(
            is_first=element.is_first,
            prev_was_heading=element.prev_was_heading,
            prev_was_list=element.prev_was_list,
            next_is_list=element.next_is_list,
            introduces_list=element.is_list_heading or element.followed_by_list,
        )


@dataclass(frozen=True)
class ListInfo:
    """Marker details of a detected list item."""

    marker: str
    pattern: str  # "numbered", "letter", "roman", "bullet"
    level: int
    ordered: bool

    @property
    def list_type(self) -> str:
        """'ordered' or 'unordered'."""
        return "ordered" if self.ordered else "unordered"


@dataclass
class ClassificationResult:
    """
    Output of a single classifier.

    type is one of the classifier's closed set ("heading" / "not-heading",
    "list" / "not-list", ...). Confidence is always clamped to [0, 1].
    """

    type: str
    confidence: float
    algorithm: str
    details: dict[str, Any] = field(default_factory=dict)

    # List results only
    list_type: str | None = None  # "ordered" | "unordered"
    list_level: int | None = None
    list_marker: str | None = None
    list_pattern: str | None = None  # "numbered" | "letter" | "roman" | "bullet"

    # Subheading results only
    level: int | None = None

    def __post_init__(self):
        """Clamp confidence to [0, 1]."""
        confidence = finite_or_none(self.confidence)
        self.confidence = 0.0 if confidence is None else max(0.0, min(1.0, confidence))

    @property
    def is_positive(self) -> bool:
        """Whether the classifier accepted its role."""
        return not self.type.startswith("not-")

    @classmethod
    def degraded(cls, role: str, error: str) -> ClassificationResult:
        """Safe result for input a classifier could not interpret."""
        return cls(
            type=f"not-{role}",
            confidence=0.0,
            algorithm="error",
            details={"error": error},
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            camelCase record; list fields only when set.
        """
        data: dict[str, Any] = {
            "type": self.type,
            "confidence": self.confidence,
            "algorithm": self.algorithm,
            "details": self.details,
        }
        if self.list_type is not None:
            data["listType"] = self.list_type
            data["listLevel"] = self.list_level
            data["listMarker"] = self.list_marker
            data["listPattern"] = self.list_pattern
        if self.level is not None:
            data["level"] = self.level
        return data


@dataclass
class ClassifiedElement:
    """An input element paired with its winning classification."""

    element: TextElement
    result: ClassificationResult
    role: Role
    heading_level: int | None = None

    @property
    def text(self) -> str:
        """The element text."""
        return self.element.text

    @property
    def confidence(self) -> float:
        """Confidence of the winning classification."""
        return self.result.confidence

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {
            "text": self.element.text,
            "role": self.role.value,
            "classification": self.result.to_dict(),
        }
        if self.heading_level is not None:
            data["headingLevel"] = self.heading_level
        return data
