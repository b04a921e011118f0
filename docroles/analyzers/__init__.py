"""
Document-level analyzers run ahead of, or alongside, classification.

- metrics: baseline font/gap statistics, computed once per document
- context: per-element sequential context
"""

from docroles.analyzers.context import build_context, next_is_list
from docroles.analyzers.metrics import analyze_structure, compute_metrics

__all__ = [
    "analyze_structure",
    "build_context",
    "compute_metrics",
    "next_is_list",
]
