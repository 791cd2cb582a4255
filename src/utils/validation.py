"""
Schema validation utilities for TutorAdapt.

Provides JSON Schema validation with clear error messages for everything
that enters the core from outside:
- Student profile input (request boundary)
- Session history input (request boundary)
- Exercise payloads decoded from LLM responses (provider boundary)

Validation never trusts duck-typed input: callers get a tagged
ValidationResult and decide what a failure means (a 400 at the request
boundary, a tier failure at the provider boundary).
"""

import json
import re
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, FormatChecker, ValidationError

try:
    from ..config import config
    from ..errors import RequestValidationError
except ImportError:
    from src.config import config
    from src.errors import RequestValidationError


class ValidationResult:
    """
    Result of a validation attempt.

    Attributes:
        valid: Whether data passed validation
        errors: List of error messages
        data: The validated data (may be modified if repair was attempted)
        repairs: List of repairs applied (for transparency)
    """

    def __init__(
        self,
        valid: bool,
        errors: list[str],
        data: Any = None,
        repairs: Optional[list[str]] = None,
    ):
        self.valid = valid
        self.errors = errors
        self.data = data
        self.repairs = repairs or []

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.valid:
            msg = "✓ Validation passed"
            if self.repairs:
                msg += f" (with {len(self.repairs)} repair(s))"
            return msg
        return f"✗ Validation failed with {len(self.errors)} error(s):\n" + "\n".join(
            f"  - {error}" for error in self.errors
        )


class SchemaValidator:
    """
    JSON Schema validator.

    Usage:
        validator = SchemaValidator("path/to/schema.json")
        result = validator.validate(data)
        if result:
            print("Valid!")
        else:
            print(result.errors)
    """

    def __init__(self, schema_path: Path | str):
        """
        Initialize validator with a schema file.

        Args:
            schema_path: Path to JSON Schema file
        """
        self.schema_path = Path(schema_path)
        with open(self.schema_path, "r", encoding="utf-8") as f:
            self.schema = json.load(f)
        # Use FormatChecker to validate date-time etc.
        self.validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        """
        Validate data against schema.

        Args:
            data: Data to validate
            auto_repair: If True, attempt to fix common validation errors first

        Returns:
            ValidationResult with validation status and any errors
        """
        repairs: list[str] = []
        if auto_repair:
            data, repairs = self._attempt_repair(data)

        errors = [self._format_error(error) for error in self.validator.iter_errors(data)]

        return ValidationResult(
            valid=not errors, errors=errors, data=data, repairs=repairs
        )

    def _format_error(self, error: ValidationError) -> str:
        """
        Convert ValidationError to human-readable message with details.

        Args:
            error: jsonschema ValidationError

        Returns:
            Formatted error message with validator and schema path
        """
        path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        validator_name = getattr(error, "validator", "unknown")
        schema_path = "/".join(str(p) for p in error.schema_path)
        return (
            f"At '{path}': {error.message} "
            f"[validator={validator_name}, schema_path=/{schema_path}]"
        )

    def _attempt_repair(self, data: Any) -> tuple[Any, list[str]]:
        """Hook for subclasses; the base validator repairs nothing."""
        return data, []


class StudentProfileValidator(SchemaValidator):
    """
    Validator for student profile input.

    Features:
    - JSON Schema validation (only the six known preference keys, all booleans)
    - Age bounds taken from configuration
    """

    def __init__(self):
        """Initialize validator with the student profile schema."""
        super().__init__(config.paths.schema("student_profile"))

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        """
        Validate profile data with profile-specific checks.

        Args:
            data: Partial profile dictionary (camelCase keys)
            auto_repair: Unused, profiles are never repaired

        Returns:
            ValidationResult
        """
        result = super().validate(data)
        if not isinstance(data, dict):
            return result

        profile_errors = []
        age = data.get("age")
        if isinstance(age, (int, float)) and not isinstance(age, bool):
            if not (config.tutor.min_age <= age <= config.tutor.max_age):
                profile_errors.append(
                    f"At 'age': must be between {config.tutor.min_age} and "
                    f"{config.tutor.max_age}, got {age}"
                )

        all_errors = result.errors + profile_errors
        return ValidationResult(valid=not all_errors, errors=all_errors, data=data)


class SessionHistoryValidator(SchemaValidator):
    """Validator for the recent-session slice sent with a request."""

    def __init__(self):
        """Initialize validator with the session record schema."""
        super().__init__(config.paths.schema("session_record"))


class ExerciseValidator(SchemaValidator):
    """
    Structural validator for exercises decoded from provider output.

    Auto-repair normalizes cosmetic noise that LLMs commonly produce
    (padding whitespace, lowercase or decorated answer letters such as
    "b" or "B)") before the strict schema check. Anything still wrong is
    reported, never guessed.
    """

    _ANSWER_LETTER = re.compile(r"^\(?([A-Da-d])[).:]?$")

    def __init__(self):
        """Initialize validator with the provider exercise schema."""
        super().__init__(config.paths.schema("provider_exercise"))

    def _attempt_repair(self, data: Any) -> tuple[Any, list[str]]:
        if not isinstance(data, dict):
            return data, []

        repaired = deepcopy(data)
        repairs = []

        for key in ("question", "explanation"):
            value = repaired.get(key)
            if isinstance(value, str) and value != value.strip():
                repaired[key] = value.strip()
                repairs.append(f"Stripped whitespace from '{key}'")

        options = repaired.get("options")
        if isinstance(options, list) and all(isinstance(o, str) for o in options):
            stripped = [o.strip() for o in options]
            if stripped != options:
                repaired["options"] = stripped
                repairs.append("Stripped whitespace from options")

        answer = repaired.get("correct_answer")
        if isinstance(answer, str):
            match = self._ANSWER_LETTER.match(answer.strip())
            if match and match.group(1).upper() != answer:
                repaired["correct_answer"] = match.group(1).upper()
                repairs.append(
                    f"Normalized correct_answer {answer!r} -> {repaired['correct_answer']!r}"
                )

        return repaired, repairs


# Validators are stateless after construction; build each schema once.
_validators: dict[str, SchemaValidator] = {}


def _get_validator(cls: type) -> SchemaValidator:
    if cls.__name__ not in _validators:
        _validators[cls.__name__] = cls()
    return _validators[cls.__name__]


# Convenience functions for quick validation
def validate_student_profile(data: Any) -> ValidationResult:
    """
    Quick validation of student profile input.

    Example:
        result = validate_student_profile({"age": 14, "preferences": {"examples": True}})
        if not result:
            print("Errors:", result.errors)
    """
    return _get_validator(StudentProfileValidator).validate(data)


def validate_session_history(data: Any) -> ValidationResult:
    """Quick validation of a session history slice."""
    return _get_validator(SessionHistoryValidator).validate(data)


def validate_provider_exercise(data: Any) -> ValidationResult:
    """Validate (and cosmetically repair) one provider exercise payload."""
    return _get_validator(ExerciseValidator).validate(data, auto_repair=True)


def validate_tutor_request(
    subject: Any,
    level: Any,
    topic: Any,
    count: Any = None,
) -> None:
    """
    Validate an explanation or exercise request.

    Args:
        subject: Must be one of the configured subjects
        level: Must be one of the configured levels
        topic: Non-blank string of at least min_topic_length characters
        count: Optional exercise count in [1, max_exercise_count]

    Raises:
        RequestValidationError: Listing every problem found
    """
    errors = []

    if not subject or not level or not topic:
        errors.append("Missing required fields: subject, level, topic")

    if subject and subject not in config.tutor.subjects:
        errors.append(f"subject must be one of {list(config.tutor.subjects)}, got {subject!r}")

    if level and level not in config.tutor.levels:
        errors.append(f"level must be one of {list(config.tutor.levels)}, got {level!r}")

    if topic and (
        not isinstance(topic, str)
        or len(topic.strip()) < config.tutor.min_topic_length
    ):
        errors.append(
            f"topic must be a string of at least {config.tutor.min_topic_length} characters"
        )

    if count is not None:
        if isinstance(count, bool) or not isinstance(count, int):
            errors.append(f"count must be an integer, got {count!r}")
        elif not (1 <= count <= config.tutor.max_exercise_count):
            errors.append(
                f"count must be between 1 and {config.tutor.max_exercise_count}, got {count}"
            )

    if errors:
        raise RequestValidationError(errors)


def validate_answer_request(exercise_id: Any, user_answer: Any, correct_answer: Any) -> None:
    """
    Validate an answer-check request.

    Raises:
        RequestValidationError: If any field is missing or not a string
    """
    errors = []
    if exercise_id is None or exercise_id == "":
        errors.append("exercise_id is required")
    for name, value in (("user_answer", user_answer), ("correct_answer", correct_answer)):
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{name} must be a non-empty string")
    if errors:
        raise RequestValidationError(errors)
