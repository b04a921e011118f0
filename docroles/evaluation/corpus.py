"""Load labeled documents for evaluation.

A labeled document is a YAML file:

    name: short-report
    metrics:                # optional, computed when absent
      baseFontSize: 12
    elements:
      - text: "1. Introduction"
        fontSize: 18
        isBold: true
        label: heading
      - text: "• First item"
        lines: ["• First item", "• Second item"]
        label: list
        list_marker: "•"   # optional
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from docroles.exceptions import InvalidElementError
from docroles.models import Role, TextElement

YAML_SUFFIXES = (".yaml", ".yml")


@dataclass
class LabeledElement:
    """An element with its expected role."""

    element: TextElement
    label: Role
    list_marker: str | None = None


@dataclass
class LabeledDocument:
    """A document whose elements carry expected roles."""

    name: str
    elements: list[LabeledElement]
    metrics: dict[str, Any] | None = None
    path: Path | None = None

    @property
    def raw_elements(self) -> list[TextElement]:
        """Elements without labels, ready for classification."""
        return [labeled.element for labeled in self.elements]

    @property
    def labels(self) -> list[Role]:
        """Expected role per element."""
        return [labeled.label for labeled in self.elements]

    @classmethod
    def from_mapping(cls, data: Any, *, path: Path | None = None) -> LabeledDocument:
        """Build a labeled document from parsed YAML.

        Raises:
            InvalidElementError: If the document or an element is malformed.
        """
        where = f" in {path}" if path else ""
        if not isinstance(data, Mapping):
            raise InvalidElementError(f"Labeled document must be a mapping{where}")

        raw_elements = data.get("elements")
        if not isinstance(raw_elements, list):
            raise InvalidElementError(f"Labeled document needs an 'elements' list{where}")

        elements = []
        for i, raw in enumerate(raw_elements):
            if not isinstance(raw, Mapping):
                raise InvalidElementError(f"Element {i}{where} is not a mapping")
            label = raw.get("label")
            try:
                role = Role(label)
            except ValueError:
                raise InvalidElementError(
                    f"Element {i}{where} has unknown label {label!r}"
                ) from None
            marker = raw.get("list_marker", raw.get("listMarker"))
            elements.append(
                LabeledElement(
                    element=TextElement.from_mapping(raw),
                    label=role,
                    list_marker=None if marker is None else str(marker),
                )
            )

        metrics = data.get("metrics")
        name = data.get("name") or (path.stem if path else "unnamed")
        return cls(
            name=str(name),
            elements=elements,
            metrics=dict(metrics) if isinstance(metrics, Mapping) else None,
            path=path,
        )


def load_labeled_document(path: Path | str) -> LabeledDocument:
    """Load one labeled YAML document.

    Args:
        path: Path to the YAML file.

    Returns:
        LabeledDocument

    Raises:
        InvalidElementError: If the file is not valid YAML or is malformed.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidElementError(f"Invalid YAML in {path}: {e}") from e
    return LabeledDocument.from_mapping(data, path=path)


def load_corpus(directory: Path | str) -> list[LabeledDocument]:
    """Load every labeled document in a directory, sorted by file name."""
    directory = Path(directory)
    paths = sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix in YAML_SUFFIXES
    )
    return [load_labeled_document(p) for p in paths]
