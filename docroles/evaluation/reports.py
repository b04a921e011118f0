"""Evaluation reports.

1. generate_cli_report() - Terminal-friendly table output
2. generate_json_report() - Machine-readable JSON, usable as a baseline
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from tabulate import tabulate

from docroles.evaluation.metrics import AggregateMetrics
from docroles.models import Role

MAX_LISTED_MISMATCHES = 10


def generate_cli_report(
    metrics: AggregateMetrics,
    title: str = "Role Classification Report",
    baseline: dict[str, Any] | None = None,
) -> str:
    """Generate a CLI-friendly report with tables.

    Args:
        metrics: Aggregate metrics to report
        title: Report title
        baseline: Optional earlier JSON report for F1 deltas

    Returns:
        Formatted string for terminal output
    """
    baseline_roles = (baseline or {}).get("aggregate_metrics", {}).get("by_role", {})

    lines = ["=" * 60, title, "=" * 60, ""]
    lines.append(f"Documents: {metrics.documents}")
    lines.append(f"Labeled elements: {sum(m.support for m in metrics.by_role.values())}")
    lines.append("")

    headers = ["Role", "Precision", "Recall", "F1", "Support"]
    if baseline_roles:
        headers.append("F1 Delta")

    rows = []
    for role, m in sorted(metrics.by_role.items(), key=lambda item: item[0].value):
        row = [role.value, f"{m.precision:.3f}", f"{m.recall:.3f}", f"{m.f1:.3f}", str(m.support)]
        if baseline_roles:
            base = baseline_roles.get(role.value)
            row.append(f"{m.f1 - base['f1']:+.3f}" if base else "n/a")
        rows.append(row)

    lines.append(tabulate(rows, headers=headers, tablefmt="simple"))
    lines.append("")
    lines.append("-" * 40)
    lines.append(f"Micro F1: {metrics.micro_f1:.4f}")
    lines.append(f"Macro F1: {metrics.macro_f1:.4f}")

    list_metrics = metrics.by_role.get(Role.LIST)
    if list_metrics is not None and list_metrics.marker_accuracy is not None:
        lines.append(f"List marker accuracy: {list_metrics.marker_accuracy:.4f}")

    if metrics.mismatches:
        lines.append("")
        lines.append("Mismatches:")
        for mismatch in metrics.mismatches[:MAX_LISTED_MISMATCHES]:
            lines.append(
                f"  {mismatch.document}[{mismatch.index}] expected {mismatch.expected.value}, "
                f"got {mismatch.predicted.value}: {mismatch.text[:50]!r}"
            )
        remaining = len(metrics.mismatches) - MAX_LISTED_MISMATCHES
        if remaining > 0:
            lines.append(f"  ... and {remaining} more")

    lines.append("")
    return "\n".join(lines)


def generate_json_report(
    metrics: AggregateMetrics,
    corpus_path: str | None = None,
) -> dict[str, Any]:
    """Generate a JSON-serializable report."""
    return {
        "version": "1.0.0",
        "timestamp": datetime.now().isoformat(),
        "corpus": corpus_path,
        "aggregate_metrics": metrics.to_dict(),
    }


def save_json_report(metrics: AggregateMetrics, output_path: Path, corpus_path: str | None = None):
    """Save JSON report to file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(generate_json_report(metrics, corpus_path), f, indent=2, ensure_ascii=False)
