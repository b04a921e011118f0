"""Tests for the classification orchestrator."""

import logging

import pytest

import docroles
from docroles import ClassifierConfig, Role, StructureClassifier, classify
from docroles.models import TextElement

BODY = (
    "Structured documents mix headings, body text and lists. This paragraph is "
    "long enough to count as body text, has several sentences, and ends with a "
    "full stop. It also uses commas, semicolons; and more."
)

MIXED = [
    {"text": "Part One", "fontSize": 24, "isBold": True},
    {"text": BODY, "fontSize": 12, "gapAfter": 6},
    {"text": "Background", "fontSize": 18},
    {"text": BODY, "fontSize": 12, "gapAfter": 6},
    {"text": "Ingredients:", "fontSize": 12},
    {"text": "• Flour", "fontSize": 12},
    {"text": "• Water", "fontSize": 12},
    {"text": "", "type": "image"},
    {"text": "x", "fontSize": float("nan")},
    {"text": BODY, "fontSize": 12},
]


class TestScenario:
    """The three-element end-to-end document."""

    def test_roles(self, scenario_elements):
        """Heading, paragraph, list."""
        items = classify(scenario_elements)
        assert [item.role for item in items] == [Role.HEADING, Role.PARAGRAPH, Role.LIST]

    def test_heading(self, scenario_elements):
        """The numbered heading is confident and level 1."""
        heading = classify(scenario_elements)[0]
        assert heading.confidence >= 0.6
        assert heading.heading_level == 1
        assert heading.result.details["score"] == 21

    def test_paragraph(self, scenario_elements):
        """The paragraph wins its own consensus."""
        paragraph = classify(scenario_elements)[1]
        assert paragraph.result.type == "paragraph"
        assert paragraph.confidence == pytest.approx(0.6856)

    def test_list(self, scenario_elements):
        """The bullet element is a multi-line list."""
        item = classify(scenario_elements)[2]
        assert item.confidence >= 0.9
        assert item.result.list_marker == "•"
        assert item.result.list_type == "unordered"


class TestInvariants:
    """Properties that hold for any input."""

    def test_deterministic(self):
        """Identical input gives identical output."""
        first = [item.to_dict() for item in classify(MIXED)]
        second = [item.to_dict() for item in classify(MIXED)]
        assert first == second

    def test_one_output_per_input(self):
        """Output is parallel to input."""
        assert len(classify(MIXED)) == len(MIXED)

    def test_confidence_bounds(self):
        """Every confidence is in [0, 1]."""
        for item in classify(MIXED):
            assert 0.0 <= item.confidence <= 1.0

    def test_list_vetoes_heading(self):
        """No element is both a list item and a heading."""
        for item in classify(MIXED):
            if item.role == Role.HEADING:
                assert docroles.classify_list(item.element).type == "not-list"

    def test_mixed_roles(self):
        """The mixed document resolves as expected."""
        roles = [item.role for item in classify(MIXED)]
        assert roles[0] == Role.HEADING
        assert roles[2] == Role.HEADING
        assert roles[4] == Role.HEADING
        assert roles[5:7] == [Role.LIST, Role.LIST]
        assert roles[7] == Role.IMAGE

    def test_prose_with_dashes_stays_paragraph(self):
        """Dashes used as punctuation do not turn prose into a list."""
        prose = (
            "The committee met twice – once in spring and once in autumn – and "
            "agreed on the plan. Work begins soon."
        )
        item = classify([{"text": BODY, "fontSize": 12}, {"text": prose, "fontSize": 12}])[1]
        assert item.role == Role.PARAGRAPH
        assert item.result.list_marker is None

    def test_heading_levels_by_size(self):
        """Larger headings get smaller levels."""
        items = classify(MIXED)
        assert items[0].heading_level < items[2].heading_level

    def test_list_introducer_uses_lookahead(self):
        """Colon text before a bullet is a heading via the lookahead."""
        item = classify(MIXED)[4]
        assert "list_introducer" in item.result.details["signals"]


class TestRobustness:
    """Malformed input is tolerated."""

    def test_invalid_elements_are_placeholders(self):
        """Unusable records become degraded paragraphs in place."""
        run = StructureClassifier().run([None, {"text": BODY}, 42])
        assert len(run.items) == 3
        assert run.items[0].role == Role.PARAGRAPH
        assert run.items[0].result.algorithm == "error"
        assert run.items[1].result.type == "paragraph"
        assert run.items[2].result.algorithm == "error"
        assert any("Element 0 is invalid" in line for line in run.processing_log)

    @pytest.mark.parametrize("elements", [None, "text", 42, {"text": "x"}])
    def test_not_a_sequence(self, elements):
        """Non-sequence input gives no items."""
        assert classify(elements) == []

    @pytest.mark.parametrize("size", [float("nan"), float("inf")])
    def test_non_finite_size_on_text_element(self, size):
        """TextElements built with NaN or inf sizes classify without raising."""
        elements = [TextElement(text=BODY, font_size=12.0), TextElement(text="Intro", font_size=size)]
        items = classify(elements)
        assert len(items) == 2
        assert items[1].element.font_size is None
        assert 0.0 <= items[1].confidence <= 1.0

    def test_empty(self):
        """Empty document."""
        run = StructureClassifier().run([])
        assert run.items == []
        assert run.processing_log[-1] == "Classified 0 elements (none)"

    def test_classifier_failure_degrades(self, monkeypatch):
        """An unexpected error on one element does not abort the pass."""

        def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("docroles.orchestrator.classify_heading", boom)
        run = StructureClassifier().run([{"text": "Title"}, {"text": "• item"}])
        assert run.items[0].result.algorithm == "error"
        assert run.items[0].role == Role.PARAGRAPH
        assert run.items[1].role == Role.LIST
        assert any("Element 0 failed: boom" in line for line in run.processing_log)


class TestRun:
    """ClassificationRun bookkeeping and options."""

    def test_processing_log(self, scenario_elements):
        """Metrics and a summary are logged."""
        run = StructureClassifier().run(scenario_elements)
        assert run.processing_log[0].startswith("Computed metrics: base font 12")
        assert run.processing_log[-1] == "Classified 3 elements (heading=1, paragraph=1, list=1)"

    def test_counts(self, scenario_elements):
        """Role counts and parallel views."""
        run = StructureClassifier().run(scenario_elements)
        assert run.count(Role.LIST) == 1
        assert run.count(Role.TABLE) == 0
        assert len(run.results) == len(run.roles) == 3

    def test_supplied_metrics(self, scenario_elements):
        """Supplied metrics replace computed ones."""
        run = StructureClassifier().run(scenario_elements, {"baseFontSize": 18})
        assert run.metrics.base_font_size == 18
        assert "Using supplied metrics" in run.processing_log
        # At body size the numbered heading reads as a list item
        assert run.items[0].role == Role.LIST

    def test_detect_images_off(self):
        """Image tags are ignored when image detection is off."""
        elements = [{"text": "", "type": "image"}]
        assert classify(elements)[0].role == Role.IMAGE
        config = ClassifierConfig(detect_images=False)
        assert classify(elements, config=config)[0].role == Role.PARAGRAPH

    def test_heading_levels_off(self, scenario_elements):
        """Without hierarchy the subheading band level is kept."""
        config = ClassifierConfig(assign_heading_levels=False)
        heading = classify(scenario_elements, config=config)[0]
        assert heading.heading_level == 1

    def test_injected_logger(self, scenario_elements, caplog):
        """Classifier debug output goes to the injected logger."""
        custom = logging.getLogger("tests.docroles.custom")
        with caplog.at_level(logging.DEBUG, logger="tests.docroles.custom"):
            classify(scenario_elements, logger=custom)
        names = {record.name for record in caplog.records}
        assert "tests.docroles.custom" in names
        assert any(record.getMessage().startswith("Heading:") for record in caplog.records)

    def test_to_dict(self, scenario_elements):
        """Serialized items carry role and classification."""
        data = classify(scenario_elements)[0].to_dict()
        assert data["role"] == "heading"
        assert data["headingLevel"] == 1
        assert data["classification"]["algorithm"] == "improved-scoring-system"
