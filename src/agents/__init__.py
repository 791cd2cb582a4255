"""
Personalization agents for the tutor.

This module contains the adaptive agents built on the generation orchestrator:
- Explanation engine (depth, language and context adapted explanations)
- Exercise generator (difficulty curve, hints, reinforcement focus)
- Answer checking (deterministic, no LLM involved)
"""

from .explanation_engine import (
    AdaptiveExplanationEngine,
    adjust_language,
    build_generation_parameters,
    determine_depth,
)
from .exercise_generator import (
    AdaptiveExerciseGenerator,
    difficulty_curve,
)
from .answer_checker import (
    AnswerCheck,
    check_answer,
)

__all__ = [
    # Explanations
    "AdaptiveExplanationEngine",
    "adjust_language",
    "build_generation_parameters",
    "determine_depth",
    # Exercises
    "AdaptiveExerciseGenerator",
    "difficulty_curve",
    # Answers
    "AnswerCheck",
    "check_answer",
]
