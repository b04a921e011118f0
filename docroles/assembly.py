"""
Structural assembly.

Turns the flat orchestrator output into content nodes for document
writers: headings with levels, paragraphs, lists with their items, and
image/table/formula passthroughs. Consecutive list elements of the same
type and level become one list node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from docroles.models import ClassifiedElement, Role, TextElement
from docroles.patterns import match_list_marker, split_embedded_items, strip_marker


@dataclass
class ContentNode:
    """A structurally tagged block of content."""

    kind: Role
    text: str = ""
    level: int | None = None  # Heading level, or list nesting level
    items: list[str] = field(default_factory=list)
    ordered: bool | None = None
    pattern: str | None = None  # List marker pattern
    source_indices: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {"type": self.kind.value}
        if self.kind == Role.LIST:
            data.update(
                items=list(self.items),
                listType="ordered" if self.ordered else "unordered",
                level=self.level,
                pattern=self.pattern,
            )
        else:
            data["text"] = self.text
            if self.level is not None:
                data["level"] = self.level
        return data


def split_list_items(element: TextElement) -> tuple[str, list[str]]:
    """
    Split a list element into (leading text, items).

    Multi-line elements split at marker lines: lines before the first
    marker are leading text, unmarked lines after it continue the previous
    item. Single-text elements split at each embedded marker.
    """
    lines = [line for line in element.line_texts if line]
    if len(lines) > 1 and any(match_list_marker(line) for line in lines):
        leading: list[str] = []
        items: list[str] = []
        for line in lines:
            if match_list_marker(line):
                items.append(strip_marker(line))
            elif items:
                items[-1] = f"{items[-1]} {line}".strip()
            else:
                leading.append(line)
        return " ".join(leading), items

    parts = split_embedded_items(element.clean_text)
    if not parts:
        return "", []
    leading_text = ""
    if match_list_marker(parts[0]) is None:
        leading_text, parts = parts[0], parts[1:]
    items = [strip_marker(part) for part in parts]
    if not items and leading_text:
        # Tagged as a list without any marker
        return "", [leading_text]
    return leading_text, items


def build_nodes(classified: list[ClassifiedElement]) -> list[ContentNode]:
    """
    Assemble content nodes from classified elements.

    Args:
        classified: Orchestrator output in document order.

    Returns:
        Content nodes in document order.
    """
    nodes: list[ContentNode] = []
    for index, item in enumerate(classified):
        if item.role == Role.LIST:
            _append_list(nodes, index, item)
        elif item.role == Role.HEADING:
            nodes.append(
                ContentNode(
                    Role.HEADING,
                    text=item.element.clean_text,
                    level=item.heading_level or 1,
                    source_indices=[index],
                )
            )
        else:
            nodes.append(
                ContentNode(item.role, text=item.element.clean_text, source_indices=[index])
            )
    return nodes


def _append_list(nodes: list[ContentNode], index: int, item: ClassifiedElement) -> None:
    result = item.result
    ordered = result.list_type == "ordered"
    level = result.list_level or 0

    leading, items = split_list_items(item.element)
    if leading:
        nodes.append(ContentNode(Role.PARAGRAPH, text=leading, source_indices=[index]))

    previous = nodes[-1] if nodes else None
    if (
        previous is not None
        and previous.kind == Role.LIST
        and previous.ordered == ordered
        and previous.level == level
    ):
        previous.items.extend(items)
        previous.source_indices.append(index)
        return

    nodes.append(
        ContentNode(
            Role.LIST,
            level=level,
            items=items,
            ordered=ordered,
            pattern=result.list_pattern,
            source_indices=[index],
        )
    )
