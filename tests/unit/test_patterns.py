"""Tests for text pattern helpers."""

import pytest

from docroles.patterns import (
    find_embedded_marker,
    match_list_marker,
    numbering_depth,
    split_embedded_items,
    starts_with_capital,
    strip_marker,
    word_count,
)


class TestListMarkerGrammar:
    """Test marker detection at text start."""

    @pytest.mark.parametrize(
        "text, marker, pattern, level, ordered",
        [
            ("1. First", "1", "numbered", 0, True),
            ("12) Twelfth", "12", "numbered", 0, True),
            ("A. Upper", "A", "letter", 0, True),
            ("b) lower", "b", "letter", 1, True),
            ("é) accented", "é", "letter", 1, True),
            ("ii. second", "ii", "roman", 1, True),
            ("IV) fourth", "IV", "roman", 0, True),
            ("• dot", "•", "bullet", 0, False),
            ("● circle", "●", "bullet", 0, False),
            ("- dash", "-", "bullet", 1, False),
            ("– en dash", "–", "bullet", 1, False),
            ("* star", "*", "bullet", 1, False),
            ("▪ square", "▪", "bullet", 0, False),
        ],
    )
    def test_markers(self, text, marker, pattern, level, ordered):
        """Each marker family is recognized with its level."""
        info = match_list_marker(text)
        assert info is not None
        assert (info.marker, info.pattern, info.level, info.ordered) == (
            marker, pattern, level, ordered,
        )

    @pytest.mark.parametrize("text", ["Introduction", "e.g. this", "-5 degrees", "2019 was", ""])
    def test_non_markers(self, text):
        """Ordinary text has no marker."""
        assert match_list_marker(text) is None

    def test_leading_whitespace(self):
        """Indented markers still match."""
        assert match_list_marker("   • indented").marker == "•"


class TestEmbeddedMarkers:
    """Test markers after a colon or whitespace."""

    def test_after_colon(self):
        """Marker after a colon is found."""
        info = find_embedded_marker("Steps: 1. Mix 2. Bake")
        assert info.marker == "1"
        assert info.pattern == "numbered"

    def test_bullet_after_space(self):
        """Bullet after whitespace is found."""
        assert find_embedded_marker("Bring • tent • stove").marker == "•"

    def test_none(self):
        """Prose without markers."""
        assert find_embedded_marker("Plain prose without markers") is None

    def test_split_items(self):
        """Text splits at every embedded marker."""
        assert split_embedded_items("Steps: 1. Mix 2. Bake") == ["Steps:", "1. Mix", "2. Bake"]

    @pytest.mark.parametrize(
        "text",
        [
            "The committee met twice – once in spring and once in autumn – and agreed.",
            "The model — trained on public data — performs well.",
            "Values range from 3 − 5 on most days.",
            "A well - known result.",
        ],
    )
    def test_prose_dashes_are_not_markers(self, text):
        """Spaced dashes inside prose do not open a list."""
        assert find_embedded_marker(text) is None
        assert split_embedded_items(text) == [text]

    def test_dash_after_colon(self):
        """A dash directly after a colon is a marker."""
        assert find_embedded_marker("Options: – fast – cheap").marker == "–"
        assert split_embedded_items("Options: - fast - cheap") == ["Options:", "- fast", "- cheap"]

    def test_earliest_marker_wins(self):
        """A bullet before a colon dash is reported first."""
        assert find_embedded_marker("Pack • tent then: - stove").marker == "•"


class TestTextHelpers:
    """Test word counting and friends."""

    def test_word_count_unicode_spaces(self):
        """Non-breaking and ideographic spaces separate words."""
        assert word_count("one two　three") == 3
        assert word_count("   ") == 0

    def test_starts_with_capital(self):
        """Capital check works across scripts."""
        assert starts_with_capital("Über")
        assert starts_with_capital("Ωmega")
        assert not starts_with_capital("über")
        assert not starts_with_capital("1. Intro")
        assert not starts_with_capital("")

    @pytest.mark.parametrize(
        "text, depth",
        [("2. Methods", 1), ("2.1. Data", 2), ("2.1.3 Sampling", 3), ("Methods", 0)],
    )
    def test_numbering_depth(self, text, depth):
        """Numbering depth counts section number parts."""
        assert numbering_depth(text) == depth

    def test_strip_marker(self):
        """Markers are removed from item text."""
        assert strip_marker("• Apples") == "Apples"
        assert strip_marker("3) Pears") == "Pears"
        assert strip_marker("Plain") == "Plain"
