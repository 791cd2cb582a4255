"""
Answer checking for multiple-choice exercises.

Comparison is whitespace-trimmed and case-insensitive, so "b", " B " and "B"
are all the same answer. The expected answer is revealed only on a mismatch.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

CORRECT_FEEDBACK = "Correct! Well done."
INCORRECT_FEEDBACK = "Incorrect. The correct answer is: {answer}"


@dataclass
class AnswerCheck:
    """Outcome of checking one answer."""

    is_correct: bool
    feedback: str
    correct_answer: Optional[str] = None
    exercise_id: Union[int, str, None] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exercise_id": self.exercise_id,
            "is_correct": self.is_correct,
            "feedback": self.feedback,
            "correct_answer": self.correct_answer,
        }


def normalize_answer(answer: str) -> str:
    return answer.strip().lower()


def check_answer(
    user_answer: str,
    correct_answer: str,
    exercise_id: Union[int, str, None] = None,
) -> AnswerCheck:
    """
    Compare a student's answer with the expected one.

    Args:
        user_answer: Answer given by the student
        correct_answer: Expected answer (usually an option letter)
        exercise_id: Exercise identifier, echoed back

    Returns:
        AnswerCheck; correct_answer is set only when the answer was wrong
    """
    if normalize_answer(user_answer) == normalize_answer(correct_answer):
        return AnswerCheck(is_correct=True, feedback=CORRECT_FEEDBACK, exercise_id=exercise_id)

    return AnswerCheck(
        is_correct=False,
        feedback=INCORRECT_FEEDBACK.format(answer=correct_answer.strip()),
        correct_answer=correct_answer.strip(),
        exercise_id=exercise_id,
    )
