"""
Text patterns shared by the classifiers.

The list marker grammar is language-agnostic: numbered (``1.`` / ``1)``),
single-letter (``a.`` / ``B)``), roman numeral (``iv.`` / ``II)``) and a
fixed bullet glyph set. Letters use Unicode case, so ``é)`` and ``Ж.``
count as markers too.
"""

from __future__ import annotations

import re

from docroles.models import ListInfo

BULLET_CHARS = "•●-−—–*+▪▫◦‣⁃"
DASH_CHARS = "-−—–"
TOP_LEVEL_BULLETS = frozenset("•●")
NESTED_BULLETS = frozenset("-−—–*+")

NUMBERED_MARKER = re.compile(r"^\s*(\d+)[.)]\s+")
LETTER_MARKER = re.compile(r"^\s*([^\W\d_])[.)]\s+")
ROMAN_MARKER = re.compile(
    r"^\s*(i{1,3}|iv|vi{0,3}|xi{0,2}|I{1,3}|IV|VI{0,3}|XI{0,2})[.)]\s+"
)
BULLET_MARKER = re.compile(rf"^\s*([{re.escape(BULLET_CHARS)}])\s+")

# Marker after a colon or whitespace boundary, e.g. "Steps: 1. Mix 2. Bake".
# Dashes are ordinary punctuation in prose, so they only open an embedded
# list right after a colon ("Options: - fast - cheap").
_NON_DASH_BULLETS = "".join(c for c in BULLET_CHARS if c not in DASH_CHARS)
EMBEDDED_MARKER = re.compile(
    rf"([:\s]+)([{re.escape(_NON_DASH_BULLETS)}]|\d+[.)])\s+"
)
COLON_DASH_MARKER = re.compile(rf"(:\s*)([{re.escape(DASH_CHARS)}])\s+")
EMBEDDED_ITEM_BOUNDARY = re.compile(
    rf"([:\s]+)([{re.escape(BULLET_CHARS)}]|\d+[.)])\s+"
)

NUMBERED_HEADING = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?[.)]\s+")
SENTENCE_SPLIT = re.compile(r"[.!?]+")
PUNCTUATION = re.compile(r"[.,;:!?]")
TERMINAL_PUNCTUATION = re.compile(r"[.!?]$")


def word_count(text: str) -> int:
    """Count words split on Unicode whitespace."""
    return len(text.split())


def starts_with_capital(text: str) -> bool:
    """Whether the first character is an uppercase letter in any script."""
    return bool(text) and text[0].isupper()


def numbering_depth(text: str) -> int:
    """
    Depth of a leading section number.

    Returns:
        1 for "2. ", 2 for "2.1. ", 3 for "2.1.3 ", 0 if not numbered.
    """
    match = NUMBERED_HEADING.match(text.strip())
    if match is None:
        # "2.1.3 Title" has no trailing separator
        match = re.match(r"^(\d+)\.(\d+)(?:\.(\d+))?\s+", text.strip())
        if match is None:
            return 0
    return sum(1 for group in match.groups() if group)


def _level_by_case(letter: str) -> int:
    return 0 if letter.isupper() else 1


def match_list_marker(text: str) -> ListInfo | None:
    """
    Detect a list marker at the start of text.

    Patterns are tried in order numbered, letter, roman, bullet. A single
    "i." or "v." is read as a letter marker, which gives the same level.

    Returns:
        ListInfo for the first matching pattern, or None.
    """
    if not text:
        return None

    match = NUMBERED_MARKER.match(text)
    if match:
        return ListInfo(marker=match.group(1), pattern="numbered", level=0, ordered=True)

    match = LETTER_MARKER.match(text)
    if match:
        letter = match.group(1)
        return ListInfo(marker=letter, pattern="letter", level=_level_by_case(letter), ordered=True)

    match = ROMAN_MARKER.match(text)
    if match:
        numeral = match.group(1)
        return ListInfo(
            marker=numeral, pattern="roman", level=_level_by_case(numeral), ordered=True
        )

    match = BULLET_MARKER.match(text)
    if match:
        glyph = match.group(1)
        level = 1 if glyph in NESTED_BULLETS else 0
        return ListInfo(marker=glyph, pattern="bullet", level=level, ordered=False)

    return None


def find_embedded_marker(text: str) -> ListInfo | None:
    """
    Detect a list marker following a colon or whitespace boundary.

    Dash glyphs count only directly after a colon, so "met twice – once in
    spring" is not a list.
    """
    matches = [
        m for m in (EMBEDDED_MARKER.search(text), COLON_DASH_MARKER.search(text)) if m
    ]
    if not matches:
        return None
    match = min(matches, key=lambda m: m.start(2))
    return match_list_marker(text[match.start(2):])


def split_embedded_items(text: str) -> list[str]:
    """
    Split text at every embedded marker.

    "Steps: 1. Mix 2. Bake" -> ["Steps:", "1. Mix", "2. Bake"]

    Dash items split only once a colon has opened a dash list.
    """
    boundary = EMBEDDED_ITEM_BOUNDARY if COLON_DASH_MARKER.search(text) else EMBEDDED_MARKER
    parts = []
    start = 0
    for match in boundary.finditer(text):
        marker_start = match.start(2)
        if marker_start > start:
            parts.append(text[start:marker_start].strip())
        start = marker_start
    parts.append(text[start:].strip())
    return [part for part in parts if part]


def strip_marker(text: str) -> str:
    """Remove a leading list marker, if any."""
    for pattern in (NUMBERED_MARKER, LETTER_MARKER, ROMAN_MARKER, BULLET_MARKER):
        match = pattern.match(text)
        if match:
            return text[match.end():].strip()
    return text.strip()
