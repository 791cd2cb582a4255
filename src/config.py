"""
Configuration management for TutorAdapt.

This module centralizes all configuration settings following 12-factor app principles:
- Secrets (provider API keys) loaded from environment variables
- Sensible defaults for development
- Provider priority fixed by configuration, read-only after startup
- Thread-safe token tracking
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass
class ProviderConfig:
    """Settings for one LLM provider tier (OpenAI-compatible endpoint)."""

    name: str
    api_key: str = ""
    model_name: str = ""
    base_url: Optional[str] = None

    temperature: float = 0.7
    exercise_temperature: float = 0.8
    max_tokens: int = 800
    exercise_max_tokens: int = 500

    # A timed-out call counts as a tier failure
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "30.0"))
    )
    enabled: bool = True

    @property
    def configured(self) -> bool:
        """Whether a credential is present and the tier is switched on."""
        return self.enabled and bool(self.api_key)


def _groq_provider() -> ProviderConfig:
    return ProviderConfig(
        name="groq",
        api_key=os.getenv("GROQ_API_KEY", ""),
        model_name=os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile"),
        base_url=os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1"),
    )


def _together_provider() -> ProviderConfig:
    return ProviderConfig(
        name="together",
        api_key=os.getenv("TOGETHER_API_KEY", ""),
        model_name=os.getenv("TOGETHER_MODEL", "meta-llama/Llama-3-70b-chat-hf"),
        base_url=os.getenv("TOGETHER_BASE_URL", "https://api.together.xyz/v1"),
    )


@dataclass
class TutorConfig:
    """Request boundary settings: accepted subjects, levels and bounds."""

    subjects: tuple = ("math", "physics")
    levels: tuple = ("secondary", "university")
    subject_names: dict = field(
        default_factory=lambda: {"math": "Mathematics", "physics": "Physics"}
    )

    min_topic_length: int = 3
    default_exercise_count: int = 3
    max_exercise_count: int = 10

    # Plausible human ages accepted at the validation boundary
    min_age: int = 5
    max_age: int = 100
    young_student_age: int = 16


@dataclass
class ExerciseConfig:
    """Exercise difficulty model configuration."""

    difficulty_labels: tuple = ("easy", "medium", "hard")
    default_difficulty: str = "medium"

    # Numeric 1-10 curve: base per level, spread across the batch
    level_base_difficulty: dict = field(
        default_factory=lambda: {"secondary": 5, "university": 7}
    )
    default_base_difficulty: int = 5
    difficulty_spread: int = 3
    label_offsets: dict = field(
        default_factory=lambda: {"easy": -1, "medium": 0, "hard": 1}
    )
    min_difficulty: int = 1
    max_difficulty: int = 10

    option_ids: tuple = ("A", "B", "C", "D")


@dataclass
class AnalyticsConfig:
    """Session history analytics thresholds (score percentages)."""

    weakness_threshold: float = 60.0  # below → weakness
    strength_threshold: float = 80.0  # at or above → strength
    recent_sessions_default: int = 5


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)
    schemas_dir: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        self.schemas_dir = self.project_root / "schemas"

    def schema(self, name: str) -> Path:
        """Path of a JSON Schema file by base name."""
        return self.schemas_dir / f"{name}.schema.json"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    log_tokens: bool = True


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from src.config import config

        # Provider tiers in priority order
        for provider in config.providers:
            print(provider.name, provider.configured)

        max_count = config.tutor.max_exercise_count
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.providers = (_groq_provider(), _together_provider())
            cls._instance.tutor = TutorConfig()
            cls._instance.exercises = ExerciseConfig()
            cls._instance.analytics = AnalyticsConfig()
            cls._instance.logging = LoggingConfig()

        return cls._instance

    def provider(self, name: str) -> Optional[ProviderConfig]:
        """Look up a provider tier by name."""
        return next((p for p in self.providers if p.name == name), None)

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        A missing provider key is not fatal (the local fallback always
        answers) but is still reported.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not any(p.configured for p in self.providers):
            errors.append(
                "No provider API key set (GROQ_API_KEY / TOGETHER_API_KEY); "
                "only local fallback content will be served"
            )

        names = [p.name for p in self.providers]
        if len(names) != len(set(names)):
            errors.append(f"Provider names must be unique, got {names}")

        for p in self.providers:
            if not (0 <= p.temperature <= 2):
                errors.append(f"{p.name}: temperature must be in [0, 2], got {p.temperature}")
            if p.max_tokens <= 0:
                errors.append(f"{p.name}: max_tokens must be > 0, got {p.max_tokens}")
            if p.request_timeout <= 0:
                errors.append(
                    f"{p.name}: request_timeout must be > 0, got {p.request_timeout}"
                )

        if not self.tutor.subjects:
            errors.append("At least one subject must be configured")
        if not self.tutor.levels:
            errors.append("At least one level must be configured")
        if self.tutor.max_exercise_count < 1:
            errors.append(
                f"max_exercise_count must be >= 1, got {self.tutor.max_exercise_count}"
            )
        if not (
            1 <= self.tutor.default_exercise_count <= self.tutor.max_exercise_count
        ):
            errors.append(
                f"default_exercise_count must be in [1, {self.tutor.max_exercise_count}], "
                f"got {self.tutor.default_exercise_count}"
            )
        if self.tutor.min_age >= self.tutor.max_age:
            errors.append(
                f"min_age ({self.tutor.min_age}) must be < max_age ({self.tutor.max_age})"
            )

        if not (
            self.exercises.min_difficulty
            <= self.exercises.default_base_difficulty
            <= self.exercises.max_difficulty
        ):
            errors.append(
                f"default_base_difficulty must be in [{self.exercises.min_difficulty}, "
                f"{self.exercises.max_difficulty}], got {self.exercises.default_base_difficulty}"
            )
        if self.exercises.default_difficulty not in self.exercises.difficulty_labels:
            errors.append(
                f"default_difficulty must be one of {list(self.exercises.difficulty_labels)}, "
                f"got {self.exercises.default_difficulty!r}"
            )
        unknown_labels = set(self.exercises.label_offsets) - set(self.exercises.difficulty_labels)
        if unknown_labels:
            errors.append(f"label_offsets has unknown labels: {sorted(unknown_labels)}")
        unknown_levels = set(self.exercises.level_base_difficulty) - set(self.tutor.levels)
        if unknown_levels:
            errors.append(f"level_base_difficulty has unknown levels: {sorted(unknown_levels)}")
        if len(self.exercises.option_ids) != 4:
            errors.append(
                f"Exactly 4 option ids are required, got {len(self.exercises.option_ids)}"
            )

        if not (
            0 <= self.analytics.weakness_threshold
            < self.analytics.strength_threshold
            <= 100
        ):
            errors.append(
                "Analytics thresholds must satisfy 0 <= weakness < strength <= 100, "
                f"got {self.analytics.weakness_threshold} / {self.analytics.strength_threshold}"
            )

        for schema_name in ("student_profile", "session_record", "provider_exercise"):
            schema_path = self.paths.schema(schema_name)
            if not schema_path.exists():
                errors.append(f"Schema not found: {schema_path}")

        return errors


# Global config instance
config = Config()


_logging_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """Apply LoggingConfig to the root logger (idempotent)."""
    global _logging_configured
    if _logging_configured:
        return
    logging.basicConfig(
        level=(level or config.logging.log_level).upper(),
        format=config.logging.log_format,
    )
    _logging_configured = True


# Thread-safe token tracking utility
class TokenTracker:
    """
    Thread-safe tracker for provider token usage.

    Usage:
        from src.config import token_tracker

        token_tracker.add_tokens(input_tokens=100, output_tokens=50)
        print(token_tracker.summary())
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.input_tokens = 0
        self.output_tokens = 0
        self.total_calls = 0

    def add_tokens(self, input_tokens: int, output_tokens: int):
        """Add tokens from an API call (thread-safe)."""
        with self._lock:
            self.input_tokens += input_tokens
            self.output_tokens += output_tokens
            self.total_calls += 1

    def total_tokens(self) -> int:
        """Get total tokens used (thread-safe)."""
        with self._lock:
            return self.input_tokens + self.output_tokens

    def summary(self) -> str:
        """Get formatted summary of usage."""
        stats = self.get_stats()
        return (
            "Token Usage Summary:\n"
            f"  API Calls: {stats['calls']}\n"
            f"  Input Tokens: {stats['input_tokens']:,}\n"
            f"  Output Tokens: {stats['output_tokens']:,}\n"
            f"  Total Tokens: {stats['total_tokens']:,}"
        )

    def reset(self):
        """Reset counters (thread-safe)."""
        with self._lock:
            self.input_tokens = 0
            self.output_tokens = 0
            self.total_calls = 0

    def get_stats(self) -> dict:
        """Get current stats as dict (thread-safe)."""
        with self._lock:
            input_tokens = self.input_tokens
            output_tokens = self.output_tokens
            total_calls = self.total_calls

        return {
            "calls": total_calls,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
        }


# Global token tracker instance
token_tracker = TokenTracker()

