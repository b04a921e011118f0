"""Tests for the context builder."""

from docroles.analyzers.context import build_context, next_is_list
from docroles.models import LineRecord, Role, TextElement


class TestNextIsList:
    """Test the raw lookahead."""

    def test_marker_at_start(self):
        """A bullet at the start counts."""
        assert next_is_list(TextElement(text="• Apples")) is True

    def test_embedded_marker(self):
        """An embedded numbered marker counts."""
        assert next_is_list(TextElement(text="Do this: 1. Mix 2. Bake")) is True

    def test_marker_lines(self):
        """Two marker lines count even if the text does not start with one."""
        element = TextElement(
            text="Shopping", lines=[LineRecord("Shopping"), LineRecord("- eggs"), LineRecord("- milk")]
        )
        assert next_is_list(element) is True

    def test_prose(self):
        """Ordinary prose is not a list."""
        assert next_is_list(TextElement(text="A sentence about lists.")) is False

    def test_missing(self):
        """No next element, no list."""
        assert next_is_list(None) is False


class TestBuildContext:
    """Test per-element context."""

    def test_first_element(self):
        """Index 0 is first and has no previous role."""
        elements = [TextElement(text="Title"), TextElement(text="Body.")]
        context = build_context(elements, 0, None)
        assert context.is_first is True
        assert context.prev_was_heading is False
        assert context.prev_was_list is False

    def test_previous_role(self):
        """Previous role comes from the finalized classification."""
        elements = [TextElement(text="a"), TextElement(text="b")]
        assert build_context(elements, 1, Role.HEADING).prev_was_heading is True
        assert build_context(elements, 1, Role.LIST).prev_was_list is True
        assert build_context(elements, 1, Role.PARAGRAPH).prev_was_heading is False

    def test_introduces_list_by_lookahead(self):
        """Short text ending in a colon before a list introduces it."""
        elements = [TextElement(text="Ingredients:"), TextElement(text="• Flour")]
        context = build_context(elements, 0, None)
        assert context.next_is_list is True
        assert context.introduces_list is True

    def test_long_colon_text_does_not_introduce(self):
        """Long text ending in a colon is not a list heading."""
        text = "A fairly long sentence that keeps going " * 3 + "as follows:"
        elements = [TextElement(text=text), TextElement(text="• Flour")]
        assert build_context(elements, 0, None).introduces_list is False

    def test_caller_flag(self):
        """Caller-supplied flags are equivalent evidence."""
        elements = [TextElement(text="Ingredients", is_list_heading=True), TextElement(text="x")]
        context = build_context(elements, 0, None)
        assert context.next_is_list is False
        assert context.introduces_list is True

    def test_last_element(self):
        """The last element has nothing to look ahead at."""
        elements = [TextElement(text="Steps:")]
        assert build_context(elements, 0, None).next_is_list is False
