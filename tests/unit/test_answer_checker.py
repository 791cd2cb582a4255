"""Unit tests for answer checking."""

import pytest

from src.agents.answer_checker import CORRECT_FEEDBACK, check_answer


class TestCheckAnswer:
    @pytest.mark.parametrize("answer", ["B", "b", " B ", "b\n"])
    def test_normalized_match(self, answer):
        result = check_answer(answer, "B", exercise_id=2)
        assert result.is_correct
        assert result.feedback == CORRECT_FEEDBACK
        assert result.correct_answer is None

    def test_mismatch_reveals_answer(self):
        result = check_answer("A", "C", exercise_id=1)
        assert not result.is_correct
        assert result.feedback == "Incorrect. The correct answer is: C"
        assert result.correct_answer == "C"

    def test_free_text_answers(self):
        assert check_answer("  Gravity ", "gravity").is_correct

    def test_to_dict(self):
        data = check_answer("A", "B", exercise_id=7).to_dict()
        assert data == {
            "exercise_id": 7,
            "is_correct": False,
            "feedback": "Incorrect. The correct answer is: B",
            "correct_answer": "B",
        }
