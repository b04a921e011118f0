"""Tests for the subheading, image, table and formula classifiers."""

import pytest

from docroles.classifiers import (
    classify_formula,
    classify_image,
    classify_subheading,
    classify_table,
)
from docroles.classifiers.subheading import level_for_ratio


class TestSubheading:
    """Font-ratio level bands."""

    @pytest.mark.parametrize(
        "size, level",
        [(24, 1), (18, 1), (16, 2), (14.5, 3), (13.5, 4), (12, 5), (9, 5)],
    )
    def test_level_bands(self, body_metrics, size, level):
        """Ratio bands map to levels 1-5."""
        result = classify_subheading({"text": "Title", "fontSize": size}, body_metrics)
        assert result.type == "heading"
        assert result.level == level
        assert result.confidence == 0.5
        assert result.algorithm == "placeholder-font-size"

    def test_band_edges(self):
        """Band minimums are inclusive."""
        assert level_for_ratio(1.5) == 1
        assert level_for_ratio(1.1) == 4
        assert level_for_ratio(1.09) == 5

    def test_degenerate(self):
        """Invalid input degrades."""
        assert classify_subheading(None).algorithm == "error"


class TestImage:
    """Images are identified by their tag."""

    def test_tagged_image(self):
        """type == 'image' passes through with full confidence."""
        result = classify_image({"type": "image", "text": ""})
        assert result.type == "image"
        assert result.confidence == 1.0

    def test_text_element(self):
        """Text is not an image, and the check is certain."""
        result = classify_image({"text": "Figure 1"})
        assert result.type == "not-image"
        assert result.confidence == 1.0

    def test_degenerate(self):
        """Invalid input degrades."""
        result = classify_image(None)
        assert result.type == "not-image"
        assert result.confidence == 0.0


class TestPlaceholders:
    """Table and formula detectors never claim an element."""

    @pytest.mark.parametrize(
        "classifier, negative",
        [(classify_table, "not-table"), (classify_formula, "not-formula")],
    )
    def test_always_negative(self, body_metrics, classifier, negative):
        """Any element gets a zero-confidence negative."""
        result = classifier({"text": "| a | b |\n| 1 | 2 |"}, body_metrics)
        assert result.type == negative
        assert result.confidence == 0.0
        assert result.algorithm == "placeholder"

    @pytest.mark.parametrize("classifier", [classify_table, classify_formula])
    def test_degenerate(self, classifier):
        """Invalid input degrades with an error."""
        assert classifier(42).algorithm == "error"
