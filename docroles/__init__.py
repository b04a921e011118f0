"""
docroles: infer the semantic role of extracted document text.

Takes a flat, ordered sequence of text elements annotated with font size,
style flags, vertical gaps and optional line groupings, and decides for
each one whether it is a heading, paragraph, list item, image, table or
formula, so that document writers can rebuild structured output.

Example:
    >>> import docroles
    >>> items = docroles.classify([
    ...     {"text": "1. Introduction", "fontSize": 18, "isBold": True},
    ...     {"text": "This is a paragraph. It has two sentences.", "fontSize": 12},
    ... ])
    >>> [item.role.value for item in items]
    ['heading', 'paragraph']

    >>> # Content nodes for writers
    >>> nodes = docroles.build_nodes(items)

See DESIGN.md for how the pieces fit together.
"""

from docroles.analyzers import build_context, compute_metrics
from docroles.assembly import ContentNode, build_nodes
from docroles.classifiers import (
    classify_formula,
    classify_heading,
    classify_image,
    classify_list,
    classify_paragraph,
    classify_subheading,
    classify_table,
)
from docroles.config import (
    ClassifierConfig,
    ConfidenceBoosts,
    HeadingThresholds,
    HeadingWeights,
    ListSettings,
    MetricsSettings,
    ParagraphSettings,
)
from docroles.exceptions import (
    ConfigurationError,
    DocRolesError,
    InvalidElementError,
    InvalidMetricsError,
)
from docroles.hierarchy import assign_heading_levels
from docroles.models import (
    ClassificationResult,
    ClassifiedElement,
    DocumentMetrics,
    DocumentStructure,
    ElementContext,
    GapAnalysis,
    LineRecord,
    ListInfo,
    Role,
    TextElement,
)
from docroles.orchestrator import ClassificationRun, StructureClassifier, classify

__version__ = "0.1.0"
__all__ = [
    # Main API
    "classify",
    "StructureClassifier",
    "ClassificationRun",
    "build_nodes",
    "ContentNode",
    "assign_heading_levels",
    # Analyzers
    "compute_metrics",
    "build_context",
    # Classifiers
    "classify_formula",
    "classify_heading",
    "classify_image",
    "classify_list",
    "classify_paragraph",
    "classify_subheading",
    "classify_table",
    # Configuration
    "ClassifierConfig",
    "ConfidenceBoosts",
    "HeadingThresholds",
    "HeadingWeights",
    "ListSettings",
    "MetricsSettings",
    "ParagraphSettings",
    # Models
    "ClassificationResult",
    "ClassifiedElement",
    "DocumentMetrics",
    "DocumentStructure",
    "ElementContext",
    "GapAnalysis",
    "LineRecord",
    "ListInfo",
    "Role",
    "TextElement",
    # Exceptions
    "ConfigurationError",
    "DocRolesError",
    "InvalidElementError",
    "InvalidMetricsError",
]
