"""
Per-role classifiers.

Each classifier is a plain function with the signature
``(element, metrics=None, context=None, *, config=None, logger=None)``
returning a ClassificationResult. None of them raise on malformed input.
"""

from docroles.classifiers.base import Classifier, Vote
from docroles.classifiers.formula import classify_formula
from docroles.classifiers.heading import classify_heading
from docroles.classifiers.image import classify_image
from docroles.classifiers.lists import classify_list
from docroles.classifiers.paragraph import classify_paragraph
from docroles.classifiers.subheading import classify_subheading
from docroles.classifiers.table import classify_table

__all__ = [
    "Classifier",
    "Vote",
    "classify_formula",
    "classify_heading",
    "classify_image",
    "classify_list",
    "classify_paragraph",
    "classify_subheading",
    "classify_table",
]
