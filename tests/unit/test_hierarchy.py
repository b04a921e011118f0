"""Tests for document-relative heading levels."""

from docroles.hierarchy import assign_heading_levels
from docroles.models import ClassificationResult, ClassifiedElement, DocumentMetrics, Role, TextElement


def item(text, size=None, role=Role.HEADING) -> ClassifiedElement:
    """Helper to create a classified element."""
    result = ClassificationResult(type=role.value, confidence=0.9, algorithm="test")
    return ClassifiedElement(TextElement(text=text, font_size=size), result, role)


class TestAssignHeadingLevels:
    """Numbering depth first, then size rank."""

    def test_numbering_depth(self):
        """Section numbers give the level directly."""
        levels = assign_heading_levels(
            [item("2. Methods", 14), item("2.1. Data", 14), item("2.1.3 Sampling", 14)]
        )
        assert levels == [1, 2, 3]

    def test_size_rank(self):
        """The largest heading size is level 1 even when it is small."""
        levels = assign_heading_levels(
            [item("Overview", 14), item("Details", 13), item("More", 14)]
        )
        assert levels == [1, 2, 1]

    def test_rank_capped(self):
        """Size ranks stop at 4."""
        sizes = [30, 26, 22, 18, 14]
        levels = assign_heading_levels([item(f"H{s}", s) for s in sizes])
        assert levels == [1, 2, 3, 4, 4]

    def test_rounding_groups_sizes(self):
        """Sizes within half a point share a rank."""
        assert assign_heading_levels([item("A", 16.1), item("B", 15.9)]) == [1, 1]

    def test_ratio_fallback(self):
        """Headings without a size fall back to the ratio bands."""
        assert assign_heading_levels([item("Title")], DocumentMetrics()) == [5]

    def test_non_headings_are_none(self):
        """Only headings get a level."""
        levels = assign_heading_levels(
            [item("Title", 18), item("Body text.", 12, Role.PARAGRAPH), item("• a", 12, Role.LIST)]
        )
        assert levels == [1, None, None]

    def test_empty(self):
        """No elements, no levels."""
        assert assign_heading_levels([]) == []
