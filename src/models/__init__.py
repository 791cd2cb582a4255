"""
Data models for personalized tutoring.

This module contains core data models:
- StudentProfile / LearningPreferences: normalized learner profile
- SessionContext / SessionRecord: analytics over recent study sessions
- Explanation, Exercise and friends: generated content with provenance
"""

from .student_profile import LearningPreferences, StudentProfile, PREFERENCE_KEYS
from .session_context import SessionContext, SessionRecord
from .content import (
    DEPTHS,
    FALLBACK_MODEL,
    FALLBACK_SOURCE,
    Exercise,
    ExerciseBatch,
    Explanation,
    ExplanationStep,
    GeneratedContent,
    GenerationParameters,
)

__all__ = [
    "LearningPreferences",
    "StudentProfile",
    "PREFERENCE_KEYS",
    "SessionContext",
    "SessionRecord",
    "DEPTHS",
    "FALLBACK_MODEL",
    "FALLBACK_SOURCE",
    "Exercise",
    "ExerciseBatch",
    "Explanation",
    "ExplanationStep",
    "GeneratedContent",
    "GenerationParameters",
]
