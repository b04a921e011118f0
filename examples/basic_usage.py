#!/usr/bin/env python3
"""
Basic docroles Usage Example

This example demonstrates the core workflow:
1. Classify extracted elements into roles
2. Inspect confidence and classifier details
3. Tune thresholds with a custom configuration
4. Assemble content nodes for a document writer
5. Evaluate against a labeled corpus
"""

import json
import logging
from pathlib import Path

import docroles
from docroles import ClassifierConfig, HeadingThresholds, StructureClassifier

# What an extraction stage hands over: text plus layout metadata
ELEMENTS = [
    {"text": "1. Introduction", "fontSize": 18, "isBold": True},
    {
        "text": "Extraction gives us text and fonts, but not structure. "
        "This example recovers headings, paragraphs and lists.",
        "fontSize": 12,
        "gapAfter": 10,
    },
    {"text": "Requirements:", "fontSize": 12},
    {
        "text": "• Python 3.10 • PyYAML",
        "fontSize": 12,
        "lines": [{"text": "• Python 3.10"}, {"text": "• PyYAML"}],
    },
    {"text": "2. Usage", "fontSize": 18, "isBold": True},
    {"text": "Steps: 1. Install 2. Classify 3. Write output", "fontSize": 12},
]


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. Basic Classification
    # ─────────────────────────────────────────────────────────────────────────

    items = docroles.classify(ELEMENTS)
    for item in items:
        level = f" (level {item.heading_level})" if item.heading_level else ""
        print(f"{item.role.value:<10} {item.confidence:.2f}  {item.text[:40]!r}{level}")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Details and Processing Log
    # ─────────────────────────────────────────────────────────────────────────

    run = StructureClassifier().run(ELEMENTS)
    print(f"\nBase font size: {run.metrics.base_font_size:g}")
    for line in run.processing_log:
        print(f"  {line}")

    heading = run.items[0].result
    print(f"Heading score {heading.details['score']:g} vs threshold {heading.details['threshold']:g}")
    print(f"Signals: {', '.join(heading.details['signals'])}")

    # Single elements can be classified directly, with caller hints
    result = docroles.classify_heading(
        {"text": "Summary", "fontSize": 14, "isFirst": True},
        {"baseFontSize": 11},
    )
    print(f"Standalone: {result.type} ({result.confidence:.2f})")

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Custom Configuration
    # ─────────────────────────────────────────────────────────────────────────

    config = ClassifierConfig(
        heading=HeadingThresholds(
            min_font_size_ratio=1.25,  # Accept slightly smaller headings
            strong_font_size_ratio=1.3,
        ),
        detect_images=False,
    )
    strict_items = docroles.classify(ELEMENTS, config=config)
    print(f"\nWith custom config: {[item.role.value for item in strict_items]}")

    # Decisions are logged at DEBUG level
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    docroles.classify(ELEMENTS[:1], logger=logging.getLogger("example"))

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Content Nodes
    # ─────────────────────────────────────────────────────────────────────────

    nodes = docroles.build_nodes(items)
    print(json.dumps([node.to_dict() for node in nodes], indent=2, ensure_ascii=False))


def evaluation_example():
    """Score the classifier against labeled YAML documents."""
    from docroles.evaluation import evaluate, generate_cli_report, load_corpus

    corpus = Path("tests/fixtures/golden")
    metrics = evaluate(load_corpus(corpus))
    print(generate_cli_report(metrics))

    # Equivalent CLI:
    #   python -m docroles.evaluation tests/fixtures/golden -o baseline.json


if __name__ == "__main__":
    main()
