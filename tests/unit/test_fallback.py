"""
Unit tests for local fallback content.

Tests:
- Template explanation structure and preference gating
- Fallback output survives the explanation parser with recovered titles
- Template exercises are structurally valid
"""

from src.models.content import GenerationParameters
from src.models.student_profile import LearningPreferences
from src.providers.fallback import FALLBACK_NOTICE, FallbackContentGenerator
from src.utils.explanation_parser import parse_explanation
from src.utils.validation import validate_provider_exercise


def make_params(**overrides):
    values = {"topic": "derivatives", "subject": "math", "level": "secondary"}
    values.update(overrides)
    return GenerationParameters(**values)


class TestFallbackExplanation:
    """Test suite for the template explanation."""

    def setup_method(self):
        self.fallback = FallbackContentGenerator()

    def test_always_available(self):
        assert self.fallback.is_available()
        assert self.fallback.name == "local"

    def test_deterministic(self):
        params = make_params()
        assert self.fallback.generate_explanation(params) == self.fallback.generate_explanation(params)

    def test_default_preferences_sections(self):
        parsed = parse_explanation(self.fallback.generate_explanation(make_params()))
        titles = [step.title for step in parsed.steps]

        assert titles[0] == "📚 Introduction"
        assert titles[1] == "🔑 Key concepts"
        assert "💡 Examples" in titles
        assert "🎯 Analogy" in titles
        assert "🌍 Real-world applications" in titles
        assert "✍️ Practice" in titles

    def test_disabled_preferences_omit_sections(self):
        prefs = LearningPreferences.from_dict(
            {"examples": False, "analogies": False, "realWorldContext": False}
        )
        text = self.fallback.generate_explanation(make_params(preferences=prefs))
        titles = [step.title for step in parse_explanation(text).steps]

        assert not any("Examples" in t or "Analogy" in t or "Real-world" in t for t in titles)
        assert "✍️ Practice" in titles

    def test_notice_included(self):
        text = self.fallback.generate_explanation(make_params())
        assert FALLBACK_NOTICE in text

    def test_subject_formula_lifted(self):
        parsed = parse_explanation(self.fallback.generate_explanation(make_params(subject="physics")))
        assert parsed.steps[1].formula == "F = m * a"

    def test_simplified_intro(self):
        text = self.fallback.generate_explanation(make_params(simplified=True))
        assert text.startswith("Hi! Today we are going to learn about derivatives.")

    def test_encouraging_practice(self):
        text = self.fallback.generate_explanation(make_params(encouraging=True))
        assert "Don't worry" in text

    def test_related_topic_mentioned(self):
        text = self.fallback.generate_explanation(make_params(related_topics=("limits",)))
        assert "closely related to limits" in text

    def test_depth_changes_concepts(self):
        simple = self.fallback.generate_explanation(make_params(depth="simple"))
        detailed = self.fallback.generate_explanation(make_params(depth="detailed"))
        assert "Theorems and proofs" in detailed
        assert "Theorems and proofs" not in simple


class TestFallbackExercises:
    """Test suite for template exercises."""

    def test_count_matches_difficulties(self):
        items = FallbackContentGenerator().generate_exercises(make_params(), [5, 6, 7])
        assert len(items) == 3

    def test_items_are_valid(self):
        for item in FallbackContentGenerator().generate_exercises(make_params(), [5, 6]):
            assert validate_provider_exercise(item)
            assert item["correct_answer"] == "D"

    def test_questions_are_numbered(self):
        items = FallbackContentGenerator().generate_exercises(make_params(), [5, 6])
        assert "Question 1" in items[0]["question"]
        assert "Question 2" in items[1]["question"]
