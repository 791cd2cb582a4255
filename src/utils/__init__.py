"""
Utility modules for TutorAdapt.

This module contains utility functions:
- validation: JSON Schema validation for requests and provider payloads
- explanation_parser: raw explanation text to summary + steps
"""

from .validation import (
    ValidationResult,
    SchemaValidator,
    StudentProfileValidator,
    SessionHistoryValidator,
    ExerciseValidator,
    validate_student_profile,
    validate_session_history,
    validate_provider_exercise,
    validate_tutor_request,
    validate_answer_request,
)
from .explanation_parser import (
    ParsedExplanation,
    parse_explanation,
    split_paragraphs,
    choose_marker,
)

__all__ = [
    # Validation
    "ValidationResult",
    "SchemaValidator",
    "StudentProfileValidator",
    "SessionHistoryValidator",
    "ExerciseValidator",
    "validate_student_profile",
    "validate_session_history",
    "validate_provider_exercise",
    "validate_tutor_request",
    "validate_answer_request",
    # Explanation parsing
    "ParsedExplanation",
    "parse_explanation",
    "split_paragraphs",
    "choose_marker",
]
