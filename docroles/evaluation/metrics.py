"""Score classification output against labeled documents.

This module provides:
1. RoleMetrics - TP/FP/FN and precision/recall/F1 for one role
2. AggregateMetrics - Per-role metrics plus micro/macro averages
3. score_document() - Compare one document's predictions to its labels
4. evaluate() - Classify and score a whole corpus
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from docroles.config import ClassifierConfig
from docroles.evaluation.corpus import LabeledDocument
from docroles.models import ClassifiedElement, Role
from docroles.orchestrator import StructureClassifier

logger = logging.getLogger(__name__)


@dataclass
class Mismatch:
    """One element whose predicted role differs from its label."""

    document: str
    index: int
    expected: Role
    predicted: Role
    text: str
    confidence: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "document": self.document,
            "index": self.index,
            "expected": self.expected.value,
            "predicted": self.predicted.value,
            "text": self.text[:80],
            "confidence": round(self.confidence, 4),
        }


@dataclass
class RoleMetrics:
    """Metrics for a single role."""

    true_positives: int = 0
    false_positives: int = 0
    false_negatives: int = 0

    # Labeled list items whose marker was also recovered
    marker_checked: int = 0
    marker_correct: int = 0

    @property
    def precision(self) -> float:
        """Precision = TP / (TP + FP)."""
        denom = self.true_positives + self.false_positives
        if denom == 0:
            return 0.0
        return self.true_positives / denom

    @property
    def recall(self) -> float:
        """Recall = TP / (TP + FN)."""
        denom = self.true_positives + self.false_negatives
        if denom == 0:
            return 0.0
        return self.true_positives / denom

    @property
    def f1(self) -> float:
        """F1 = 2 * (precision * recall) / (precision + recall)."""
        p, r = self.precision, self.recall
        if p + r == 0:
            return 0.0
        return 2 * (p * r) / (p + r)

    @property
    def support(self) -> int:
        """Total labeled elements (TP + FN)."""
        return self.true_positives + self.false_negatives

    @property
    def marker_accuracy(self) -> float | None:
        """Share of checked list markers recovered exactly."""
        if self.marker_checked == 0:
            return None
        return self.marker_correct / self.marker_checked

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = {
            "true_positives": self.true_positives,
            "false_positives": self.false_positives,
            "false_negatives": self.false_negatives,
            "precision": round(self.precision, 4),
            "recall": round(self.recall, 4),
            "f1": round(self.f1, 4),
            "support": self.support,
        }
        if self.marker_accuracy is not None:
            data["marker_accuracy"] = round(self.marker_accuracy, 4)
        return data


@dataclass
class AggregateMetrics:
    """Metrics across all roles and documents."""

    by_role: dict[Role, RoleMetrics] = field(default_factory=dict)
    mismatches: list[Mismatch] = field(default_factory=list)
    documents: int = 0

    def role(self, role: Role) -> RoleMetrics:
        """Metrics for role, created on first use."""
        return self.by_role.setdefault(role, RoleMetrics())

    @property
    def total_true_positives(self) -> int:
        """Total TP across all roles."""
        return sum(m.true_positives for m in self.by_role.values())

    @property
    def total_false_positives(self) -> int:
        """Total FP across all roles."""
        return sum(m.false_positives for m in self.by_role.values())

    @property
    def total_false_negatives(self) -> int:
        """Total FN across all roles."""
        return sum(m.false_negatives for m in self.by_role.values())

    @property
    def micro_precision(self) -> float:
        """Micro-averaged precision (across all elements)."""
        denom = self.total_true_positives + self.total_false_positives
        if denom == 0:
            return 0.0
        return self.total_true_positives / denom

    @property
    def micro_recall(self) -> float:
        """Micro-averaged recall (across all elements)."""
        denom = self.total_true_positives + self.total_false_negatives
        if denom == 0:
            return 0.0
        return self.total_true_positives / denom

    @property
    def micro_f1(self) -> float:
        """Micro-averaged F1 (across all elements)."""
        p, r = self.micro_precision, self.micro_recall
        if p + r == 0:
            return 0.0
        return 2 * (p * r) / (p + r)

    @property
    def macro_f1(self) -> float:
        """Macro-averaged F1 (unweighted average across roles)."""
        if not self.by_role:
            return 0.0
        return sum(m.f1 for m in self.by_role.values()) / len(self.by_role)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "documents": self.documents,
            "micro_precision": round(self.micro_precision, 4),
            "micro_recall": round(self.micro_recall, 4),
            "micro_f1": round(self.micro_f1, 4),
            "macro_f1": round(self.macro_f1, 4),
            "by_role": {role.value: m.to_dict() for role, m in self.by_role.items()},
            "mismatches": [m.to_dict() for m in self.mismatches],
        }


def score_document(
    document: LabeledDocument,
    predicted: list[ClassifiedElement],
    metrics: AggregateMetrics | None = None,
) -> AggregateMetrics:
    """Add one document's predictions to metrics.

    Every element is one decision: a correct role is a TP for that role,
    a wrong one is a FP for the predicted role and a FN for the label.

    Args:
        document: Labeled document.
        predicted: Orchestrator output for document, same order and length.
        metrics: Accumulator to update (new one if None).

    Returns:
        The updated accumulator.
    """
    metrics = metrics or AggregateMetrics()
    if len(predicted) != len(document.elements):
        raise ValueError(
            f"{document.name}: {len(predicted)} predictions for "
            f"{len(document.elements)} labeled elements"
        )

    for index, (labeled, item) in enumerate(zip(document.elements, predicted)):
        expected = labeled.label
        if item.role == expected:
            metrics.role(expected).true_positives += 1
        else:
            metrics.role(item.role).false_positives += 1
            metrics.role(expected).false_negatives += 1
            metrics.mismatches.append(
                Mismatch(
                    document=document.name,
                    index=index,
                    expected=expected,
                    predicted=item.role,
                    text=labeled.element.clean_text,
                    confidence=item.confidence,
                )
            )

        if expected == Role.LIST and labeled.list_marker is not None:
            role_metrics = metrics.role(Role.LIST)
            role_metrics.marker_checked += 1
            if item.result.list_marker == labeled.list_marker:
                role_metrics.marker_correct += 1

    metrics.documents += 1
    return metrics


def evaluate(
    documents: list[LabeledDocument],
    config: ClassifierConfig | None = None,
) -> AggregateMetrics:
    """Classify every document and score it against its labels.

    Args:
        documents: Labeled corpus.
        config: Classifier configuration to evaluate (default if None).

    Returns:
        AggregateMetrics over the whole corpus.
    """
    classifier = StructureClassifier(config=config)
    metrics = AggregateMetrics()
    for document in documents:
        run = classifier.run(document.raw_elements, document.metrics)
        score_document(document, run.items, metrics)
        logger.debug(f"Scored {document.name}: {len(run.items)} elements")

    logger.info(
        f"Evaluated {metrics.documents} documents: micro F1 {metrics.micro_f1:.3f}, "
        f"{len(metrics.mismatches)} mismatches"
    )
    return metrics
