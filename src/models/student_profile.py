"""
Student Profile: normalized learner representation for personalization.

A profile is built per request from caller-supplied partial data merged over
defaults, is never persisted, and is immutable for the duration of one
generation call.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Iterable, Optional

try:
    from ..config import config
except ImportError:
    from src.config import config


# camelCase wire key -> attribute name
PREFERENCE_KEYS = {
    "easyReading": "easy_reading",
    "examples": "examples",
    "analogies": "analogies",
    "stepByStep": "step_by_step",
    "visualAids": "visual_aids",
    "realWorldContext": "real_world_context",
}


@dataclass(frozen=True)
class LearningPreferences:
    """
    Named boolean toggles that shape explanations and exercises.

    Attributes:
        easy_reading: Use simplified, accessible language
        examples: Include worked examples
        analogies: Use analogies and metaphors
        step_by_step: Break explanations into detailed steps
        visual_aids: Suggest diagrams or other visual support
        real_world_context: Connect with everyday situations
    """

    easy_reading: bool = False
    examples: bool = True
    analogies: bool = True
    step_by_step: bool = True
    visual_aids: bool = False
    real_world_context: bool = True

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]] = None) -> LearningPreferences:
        """
        Merge a partial preference map over the defaults.

        Accepts camelCase (wire) or snake_case keys.

        Raises:
            ValueError: On an unknown key or a non-boolean value
        """
        values = {}
        attributes = set(PREFERENCE_KEYS.values())
        for key, value in (data or {}).items():
            attr = PREFERENCE_KEYS.get(key, key)
            if attr not in attributes:
                raise ValueError(f"Unknown preference key: {key}")
            if not isinstance(value, bool):
                raise ValueError(f"Preference {key} must be a boolean, got {value!r}")
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> dict[str, bool]:
        """All six preferences keyed by their wire (camelCase) names."""
        return {key: getattr(self, attr) for key, attr in PREFERENCE_KEYS.items()}

    def enabled(self) -> list[str]:
        """Wire names of the preferences that are switched on."""
        return [key for key, value in self.to_dict().items() if value]


def _unique(items: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Deduplicate while keeping first-seen order; drops blank entries."""
    seen = []
    for item in items or ():
        if isinstance(item, str) and item.strip() and item not in seen:
            seen.append(item)
    return tuple(seen)


def _contains_topic(entries: Iterable[str], topic: str) -> bool:
    needle = (topic or "").strip().lower()
    if not needle:
        return False
    return any(needle in entry.lower() for entry in entries)


@dataclass(frozen=True)
class StudentProfile:
    """
    Learner profile used to personalize generated content.

    Attributes:
        age: Age in years, if known
        level_detail: Free-text academic sub-level ("Calculus I", "9th grade")
        prior_knowledge: Topics the student has mastered
        difficulties: Topics the student struggles with
        interests: Personal interests used to ground analogies and examples
        preferences: Learning preference toggles (always all six)
    """

    age: Optional[int] = None
    level_detail: str = ""
    prior_knowledge: tuple[str, ...] = ()
    difficulties: tuple[str, ...] = ()
    interests: tuple[str, ...] = ()
    preferences: LearningPreferences = field(default_factory=LearningPreferences)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]] = None) -> StudentProfile:
        """
        Build a profile from partial wire data.

        Args:
            data: Optional keys age, levelDetail, priorKnowledge, difficulties,
                interests, preferences (camelCase, as sent by clients)

        Returns:
            StudentProfile with defaults applied
        """
        data = data or {}
        age = data.get("age")
        return cls(
            age=int(age) if age is not None else None,
            level_detail=data.get("levelDetail") or "",
            prior_knowledge=_unique(data.get("priorKnowledge")),
            difficulties=_unique(data.get("difficulties")),
            interests=_unique(data.get("interests")),
            preferences=LearningPreferences.from_dict(data.get("preferences")),
        )

    def is_young_student(self) -> bool:
        """Young students get simpler language and framing."""
        return self.age is not None and self.age < config.tutor.young_student_age

    def needs_detailed_explanations(self) -> bool:
        """Whether the learner prefers step-by-step or example-rich content."""
        return self.preferences.step_by_step or self.preferences.examples

    def has_knowledge(self, topic: str) -> bool:
        """Case-insensitive substring match of topic against prior knowledge."""
        return _contains_topic(self.prior_knowledge, topic)

    def has_difficulty(self, topic: str) -> bool:
        """Case-insensitive substring match of topic against known difficulties."""
        return _contains_topic(self.difficulties, topic)

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire dictionary."""
        return {
            "age": self.age,
            "levelDetail": self.level_detail,
            "priorKnowledge": list(self.prior_knowledge),
            "difficulties": list(self.difficulties),
            "interests": list(self.interests),
            "preferences": self.preferences.to_dict(),
        }

    def __repr__(self) -> str:
        populated = [f.name for f in fields(self) if getattr(self, f.name)]
        return f"StudentProfile(age={self.age}, fields={populated})"
