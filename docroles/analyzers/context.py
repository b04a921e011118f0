"""
Sequential context for the classification pass.

Backward context comes from the already-finalized role of the previous
element; forward context is a raw pattern test on the next element's text,
never a recursive classification.
"""

from __future__ import annotations

from collections.abc import Sequence

from docroles.config import DEFAULT_CONFIG, ClassifierConfig
from docroles.models import ElementContext, Role, TextElement
from docroles.patterns import find_embedded_marker, match_list_marker


def has_marker_lines(element: TextElement, min_lines: int = 2) -> bool:
    """Whether at least min_lines of the element's lines start with a list marker."""
    count = 0
    for line in element.line_texts:
        if match_list_marker(line) is not None:
            count += 1
            if count >= min_lines:
                return True
    return False


def next_is_list(element: TextElement | None, config: ClassifierConfig | None = None) -> bool:
    """
    Lookahead test: does this element look like a list by its raw text?

    Args:
        element: The element following the one being classified, or None.
        config: Classifier configuration (default if None).
    """
    if element is None:
        return False
    config = config or DEFAULT_CONFIG
    text = element.clean_text
    if match_list_marker(text) is not None or find_embedded_marker(text) is not None:
        return True
    return has_marker_lines(element, config.lists.min_marker_lines)


def introduces_list(
    element: TextElement,
    followed_by_list: bool,
    config: ClassifierConfig | None = None,
) -> bool:
    """Caller flag, or a short text ending in ':' right before a list."""
    if element.is_list_heading or element.followed_by_list:
        return True
    config = config or DEFAULT_CONFIG
    text = element.clean_text
    return (
        followed_by_list
        and text.endswith(":")
        and len(text) < config.heading.short_large_max_length
    )


def build_context(
    elements: Sequence[TextElement],
    index: int,
    previous_role: Role | None,
    config: ClassifierConfig | None = None,
) -> ElementContext:
    """
    Context for elements[index].

    Args:
        elements: The whole document in order.
        index: Position of the element being classified.
        previous_role: Finalized role of elements[index - 1], None for the first.
        config: Classifier configuration (default if None).
    """
    element = elements[index]
    following = elements[index + 1] if index + 1 < len(elements) else None
    lookahead = next_is_list(following, config)

    return ElementContext(
        is_first=index == 0,
        prev_was_heading=previous_role == Role.HEADING,
        prev_was_list=previous_role == Role.LIST,
        next_is_list=lookahead,
        introduces_list=introduces_list(element, lookahead, config),
    )
