"""
Unit tests for the explanation parser.

Tests:
- Paragraph splitting and summary extraction
- Step title detection and markers
- Formula lifting
- Degenerate input (no steps, empty text)
"""

import pytest

from src.utils.explanation_parser import (
    DEFAULT_SUMMARY,
    ROTATING_MARKERS,
    choose_marker,
    parse_explanation,
    parse_step,
    split_paragraphs,
)


class TestSplitParagraphs:
    def test_blank_lines_separate(self):
        assert split_paragraphs("a\n\nb\n \nc") == ["a", "b", "c"]

    def test_empty_paragraphs_dropped(self):
        assert split_paragraphs("\n\na\n\n\n\nb\n\n") == ["a", "b"]

    def test_windows_newlines(self):
        assert split_paragraphs("a\r\n\r\nb") == ["a", "b"]

    def test_none(self):
        assert split_paragraphs(None) == []


class TestChooseMarker:
    @pytest.mark.parametrize(
        "title,marker",
        [
            ("Introduction", "📚"),
            ("Key concepts", "🔑"),
            ("Worked example", "💡"),
            ("An analogy", "🎯"),
            ("Real-world applications", "🌍"),
            ("Practice", "✍️"),
        ],
    )
    def test_topical_markers(self, title, marker):
        assert choose_marker(title, 1) == marker

    def test_rotating_marker_by_position(self):
        assert choose_marker("Wrap up", 0) == ROTATING_MARKERS[0]
        assert choose_marker("Wrap up", 4) == ROTATING_MARKERS[1]


class TestParseStep:
    def test_colon_heading(self):
        step = parse_step("Main concept:\nA derivative is a rate of change.", 1, 1)
        assert step.title.endswith("Main concept")
        assert step.content == "A derivative is a rate of change."

    def test_ordinal_heading(self):
        step = parse_step("2. Worked example\nf(x) = x^2 gives 2x.", 2, 2)
        assert step.title == "💡 Worked example"

    def test_heading_without_body_is_not_a_title(self):
        step = parse_step("Just one line:", 3, 3)
        assert step.title.endswith("Step 3")
        assert step.content == "Just one line:"

    def test_plain_paragraph_gets_default_title(self):
        step = parse_step("A derivative is a slope.", 1, 1)
        assert step.title == f"{ROTATING_MARKERS[1]} Step 1"
        assert step.content == "A derivative is a slope."

    def test_formula_lifted(self):
        step = parse_step("Key concepts:\nForce causes acceleration.\nFormula: F = m * a", 1, 1)
        assert step.formula == "F = m * a"
        assert "Formula" not in step.content

    def test_formula_only_body_keeps_content(self):
        step = parse_step("Key concepts:\nFormula: E = m c^2", 1, 1)
        assert step.formula == "E = m c^2"
        assert step.content


class TestParseExplanation:
    """Test suite for parse_explanation."""

    def test_summary_and_steps(self):
        text = "Hook sentence.\n\nMain concept:\nBody one.\n\nExample:\nBody two."
        parsed = parse_explanation(text, topic="derivatives")

        assert parsed.summary == "Hook sentence."
        assert [s.id for s in parsed.steps] == [1, 2]
        assert parsed.steps[0].content == "Body one."
        assert parsed.steps[1].title == "💡 Example"

    def test_single_paragraph_yields_one_step(self):
        parsed = parse_explanation("Only a summary here.", topic="limits")
        assert parsed.summary == "Only a summary here."
        assert len(parsed.steps) == 1
        assert parsed.steps[0].content == "Only a summary here."

    def test_empty_text_never_yields_zero_steps(self):
        parsed = parse_explanation("", topic="limits")
        assert parsed.summary == DEFAULT_SUMMARY.format(topic="limits")
        assert len(parsed.steps) == 1

    def test_step_ids_are_sequential(self):
        text = "\n\n".join(["summary"] + [f"Part {i}:\nbody {i}" for i in range(6)])
        parsed = parse_explanation(text)
        assert [s.id for s in parsed.steps] == list(range(1, 7))

    def test_step_to_dict(self):
        parsed = parse_explanation("s\n\nKey concepts:\nbody\nFormula: a = b")
        data = parsed.steps[0].to_dict()
        assert data["formula"] == "a = b"
        assert set(data) == {"id", "title", "content", "formula"}
