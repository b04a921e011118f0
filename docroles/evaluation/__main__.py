"""
Evaluate role classification against a labeled corpus.

Usage:
    # Report on every YAML document in a directory
    python -m docroles.evaluation tests/fixtures/golden

    # Single document, compared to a saved baseline
    python -m docroles.evaluation doc.yaml --baseline baseline.json

    # Save a JSON report (can serve as the next baseline)
    python -m docroles.evaluation tests/fixtures/golden -o results.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from docroles.evaluation.corpus import load_corpus, load_labeled_document
from docroles.evaluation.metrics import evaluate
from docroles.evaluation.reports import generate_cli_report, save_json_report
from docroles.exceptions import DocRolesError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m docroles.evaluation",
        description="Evaluate role classification against labeled documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "corpus",
        type=Path,
        help="Labeled YAML document or directory of them",
    )
    parser.add_argument(
        "--baseline",
        type=Path,
        help="Path to baseline JSON report for comparison",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write a JSON report to this path",
    )
    parser.add_argument(
        "--min-f1",
        type=float,
        help="Exit with error if micro F1 falls below this value",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log classifier decisions",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.corpus.exists():
        print(f"Error: corpus not found: {args.corpus}", file=sys.stderr)
        return 1

    try:
        if args.corpus.is_dir():
            documents = load_corpus(args.corpus)
        else:
            documents = [load_labeled_document(args.corpus)]
    except DocRolesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    metrics = evaluate(documents)

    baseline = None
    if args.baseline:
        try:
            with open(args.baseline, encoding="utf-8") as f:
                baseline = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Error: cannot read baseline {args.baseline}: {e}", file=sys.stderr)
            return 1

    print(generate_cli_report(metrics, baseline=baseline))

    if args.output:
        save_json_report(metrics, args.output, corpus_path=str(args.corpus))
        print(f"Report saved to {args.output}")

    if args.min_f1 is not None and metrics.micro_f1 < args.min_f1:
        print(f"Micro F1 {metrics.micro_f1:.4f} is below {args.min_f1:.4f}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
