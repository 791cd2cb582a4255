"""
Unit tests for the Adaptive Exercise Generator.

Tests:
- Qualitative difficulty rules
- Numeric difficulty curve
- Batch size, ordering and metadata
- Programming-contract violations
"""

import pytest

from src.agents.exercise_generator import AdaptiveExerciseGenerator, difficulty_curve
from src.orchestrator import GenerationOrchestrator


class TestDifficultyCurve:
    """Test suite for difficulty_curve."""

    def test_secondary_three_items(self):
        assert difficulty_curve("secondary", 3) == [5, 6, 7]

    def test_university_starts_at_seven(self):
        assert difficulty_curve("university", 1) == [7]

    def test_unknown_level_uses_default_base(self):
        assert difficulty_curve("postgraduate", 1) == [5]

    @pytest.mark.parametrize("level", ["secondary", "university", "postgraduate"])
    @pytest.mark.parametrize("count", [1, 2, 5, 10])
    def test_non_decreasing_and_bounded(self, level, count):
        curve = difficulty_curve(level, count)
        assert len(curve) == count
        assert curve == sorted(curve)
        assert all(1 <= value <= 10 for value in curve)
        assert curve[-1] - curve[0] < 3

    def test_label_shifts_curve(self):
        assert difficulty_curve("secondary", 3, "easy") == [4, 5, 6]
        assert difficulty_curve("secondary", 3, "hard") == [6, 7, 8]

    def test_clamped_at_top(self):
        assert max(difficulty_curve("university", 10, "hard")) == 10


class TestDetermineDifficulty:
    """Test suite for the qualitative difficulty rules."""

    def make(self, profile=None, history=None):
        return AdaptiveExerciseGenerator(profile, history, GenerationOrchestrator([]))

    def test_difficulty_topic_is_easy(self, young_profile):
        assert self.make(young_profile).determine_difficulty("integrals") == "easy"

    def test_known_topic_is_medium(self, university_profile):
        assert self.make(university_profile).determine_difficulty("derivatives") == "medium"

    def test_strength_is_hard(self, session_history):
        assert self.make(None, session_history).determine_difficulty("limits") == "hard"

    def test_default_is_medium(self):
        assert self.make().determine_difficulty("vectors") == "medium"

    def test_difficulty_wins_over_knowledge(self):
        profile = {"priorKnowledge": ["integrals"], "difficulties": ["integrals"]}
        assert self.make(profile).determine_difficulty("integrals") == "easy"

    def test_hint_step_by_step(self):
        hint = self.make().generate_hint("vectors", "medium")
        assert "vectors" in hint
        assert "step by step" in hint

    def test_hint_without_step_by_step(self):
        generator = self.make({"preferences": {"stepByStep": False}})
        hint = generator.generate_hint("vectors", "hard")
        assert "step by step" not in hint


class TestGenerateExercises:
    """Test suite for AdaptiveExerciseGenerator.generate_exercises."""

    def test_exact_count_with_curve(self, working_provider):
        generator = AdaptiveExerciseGenerator(None, None, GenerationOrchestrator([working_provider]))

        batch = generator.generate_exercises("math", "secondary", "derivatives", 3)

        assert len(batch) == 3
        assert [e.id for e in batch.exercises] == [1, 2, 3]
        assert [e.difficulty for e in batch.exercises] == [5, 6, 7]
        assert [d for _, d in working_provider.exercise_calls] == [5, 6, 7]
        assert batch.source == "primary"
        assert batch.first_difficulty == 5

    def test_default_count(self, fallback_orchestrator):
        batch = AdaptiveExerciseGenerator(None, None, fallback_orchestrator).generate_exercises(
            "math", "secondary", "derivatives"
        )
        assert len(batch) == 3

    def test_reinforcement_for_difficult_topic(self, young_profile, fallback_orchestrator):
        generator = AdaptiveExerciseGenerator(young_profile, None, fallback_orchestrator)

        batch = generator.generate_exercises("math", "secondary", "integrals", 2)

        for exercise in batch.exercises:
            assert exercise.difficulty_label == "easy"
            assert exercise.metadata["focus"] == "reinforcement"
            assert exercise.metadata["adapted_for"] == "14 years"
            assert exercise.metadata["source"] == "local"

    def test_practice_focus_and_level_when_age_unknown(self, fallback_orchestrator):
        batch = AdaptiveExerciseGenerator(None, None, fallback_orchestrator).generate_exercises(
            "physics", "university", "optics", 1
        )
        exercise = batch.exercises[0]
        assert exercise.metadata["focus"] == "practice"
        assert exercise.metadata["adapted_for"] == "university"

    def test_batch_never_mixes_sources(self, fake_provider_factory):
        first = fake_provider_factory(name="groq", fail_on_item=3)
        second = fake_provider_factory(name="together")
        generator = AdaptiveExerciseGenerator(None, None, GenerationOrchestrator([first, second]))

        batch = generator.generate_exercises("math", "secondary", "derivatives", 4)

        assert {e.metadata["source"] for e in batch.exercises} == {"together"}

    @pytest.mark.parametrize("count", [0, -1, 2.5, "3", True])
    def test_invalid_count_raises(self, fallback_orchestrator, count):
        generator = AdaptiveExerciseGenerator(None, None, fallback_orchestrator)
        with pytest.raises(ValueError):
            generator.generate_exercises("math", "secondary", "derivatives", count)

    def test_to_dict(self, fallback_orchestrator):
        batch = AdaptiveExerciseGenerator(None, None, fallback_orchestrator).generate_exercises(
            "math", "secondary", "derivatives", 1
        )
        data = batch.to_dict()
        assert data["source"] == "local"
        assert data["exercises"][0]["hint"]
        assert len(data["exercises"][0]["options"]) == 4
