"""
Generated content records: generation parameters, explanations and exercises.

Every record carries provenance (`source`) so callers can tell model output
from local fallback content without the shape of the response changing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

try:
    from .student_profile import LearningPreferences
except ImportError:
    from src.models.student_profile import LearningPreferences


# Type aliases
Depth = Literal["simple", "standard", "detailed"]
DifficultyLabel = Literal["easy", "medium", "hard"]
ContentKind = Literal["explanation", "exercises"]

DEPTHS = ("simple", "standard", "detailed")
FALLBACK_SOURCE = "local"
FALLBACK_MODEL = "fallback"


def utc_now() -> str:
    """Get current UTC timestamp in ISO 8601 format."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class GenerationParameters:
    """
    Everything a provider (or the fallback) needs to generate content.

    Derived per request from the student profile and session context.
    """

    topic: str
    subject: str
    level: str
    depth: Depth = "standard"
    age: Optional[int] = None
    interests: tuple[str, ...] = ()
    preferences: LearningPreferences = field(default_factory=LearningPreferences)
    simplified: bool = False
    encouraging: bool = False
    related_topics: tuple[str, ...] = ()


@dataclass
class ExplanationStep:
    """One step of a structured explanation."""

    id: int
    title: str
    content: str
    formula: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "title": self.title, "content": self.content}
        if self.formula:
            data["formula"] = self.formula
        return data


@dataclass
class Explanation:
    """
    Structured, personalized explanation.

    Attributes:
        subject: Subject identifier
        level: Academic level
        topic: Topic explained
        summary: Opening paragraph
        steps: Ordered steps (never empty)
        metadata: Personalization details and provenance
        timestamp: ISO 8601 creation time
    """

    subject: str
    level: str
    topic: str
    summary: str
    steps: List[ExplanationStep]
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=utc_now)

    @property
    def source(self) -> str:
        return self.metadata.get("source", FALLBACK_SOURCE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for transport."""
        return {
            "subject": self.subject,
            "level": self.level,
            "topic": self.topic,
            "summary": self.summary,
            "steps": [step.to_dict() for step in self.steps],
            "metadata": self.metadata,
            "timestamp": self.timestamp,
        }


@dataclass
class Exercise:
    """
    A single multiple-choice practice exercise.

    Attributes:
        id: 1-based position in its batch
        question: Question text
        options: Exactly four answer options (A-D in order)
        correct_answer: Letter of the correct option
        explanation: Rationale for the correct answer
        hint: Personalized hint
        difficulty: Numeric difficulty on the 1-10 scale
        difficulty_label: Qualitative difficulty for the whole batch
        metadata: Personalization details and provenance
    """

    id: int
    question: str
    options: List[str]
    correct_answer: str
    explanation: str
    difficulty: int
    difficulty_label: DifficultyLabel = "medium"
    hint: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for transport."""
        return {
            "id": self.id,
            "question": self.question,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
            "explanation": self.explanation,
            "hint": self.hint,
            "difficulty": self.difficulty,
            "difficulty_label": self.difficulty_label,
            "metadata": self.metadata,
        }


@dataclass
class ExerciseBatch:
    """Ordered exercises produced by a single tier."""

    exercises: List[Exercise]
    source: str
    model: str

    @property
    def first_difficulty(self) -> Optional[int]:
        """Difficulty of the first item, for quick display."""
        return self.exercises[0].difficulty if self.exercises else None

    def __len__(self) -> int:
        return len(self.exercises)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exercises": [exercise.to_dict() for exercise in self.exercises],
            "source": self.source,
            "model": self.model,
        }


@dataclass
class GeneratedContent:
    """
    Orchestrator output: content plus the tier that produced it.

    Attributes:
        content: Raw explanation text, or list of exercise dicts
        source: Provider name, or "local" for the fallback
        model: Model identifier used by that tier
        tier: 1-based position of the tier (0 for the fallback)
        failures: "<tier>: <reason>" for every tier that failed before
    """

    content: Any
    source: str
    model: str
    tier: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def is_fallback(self) -> bool:
        return self.source == FALLBACK_SOURCE
