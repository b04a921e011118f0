"""
Pytest configuration and fixtures for docroles tests.
"""

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def golden_dir(fixtures_dir) -> Path:
    """Return path to labeled golden documents."""
    return fixtures_dir / "golden"


@pytest.fixture
def sample_config():
    """Return a default ClassifierConfig for testing."""
    from docroles import ClassifierConfig

    return ClassifierConfig()


@pytest.fixture
def body_metrics():
    """Metrics for a 12pt document with no gap information."""
    from docroles import DocumentMetrics

    return DocumentMetrics(base_font_size=12.0, font_size_variability=0.2)


@pytest.fixture
def scenario_elements() -> list[dict]:
    """Heading, paragraph and bullet list, as handed over by extraction."""
    return [
        {"text": "1. Introduction", "fontSize": 18, "isBold": True, "isFirst": True},
        {
            "text": "This is a long paragraph with several sentences. "
            "It continues here. And ends here.",
            "fontSize": 12,
        },
        {
            "text": "• First item",
            "fontSize": 12,
            "lines": [
                {"text": "• First item"},
                {"text": "• Second item"},
                {"text": "• Third item"},
            ],
        },
    ]
