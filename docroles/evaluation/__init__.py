"""Labeled-corpus evaluation.

Tools for checking classifier thresholds and confidence boosts against
documents whose elements carry expected roles.

Modules:
    corpus: Load labeled YAML documents
    metrics: Precision, recall and F1 per role
    reports: CLI and JSON reports
"""

from docroles.evaluation.corpus import (
    LabeledDocument,
    LabeledElement,
    load_corpus,
    load_labeled_document,
)
from docroles.evaluation.metrics import (
    AggregateMetrics,
    Mismatch,
    RoleMetrics,
    evaluate,
    score_document,
)
from docroles.evaluation.reports import (
    generate_cli_report,
    generate_json_report,
    save_json_report,
)

__all__ = [
    "AggregateMetrics",
    "LabeledDocument",
    "LabeledElement",
    "Mismatch",
    "RoleMetrics",
    "evaluate",
    "generate_cli_report",
    "generate_json_report",
    "load_corpus",
    "load_labeled_document",
    "save_json_report",
    "score_document",
]
