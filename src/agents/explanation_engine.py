"""
Adaptive Explanation Engine - personalized, structured explanations.

Turns (subject, level, topic, student profile, session history) into
generation parameters, asks the generation orchestrator for raw text and
parses it into a summary plus steps with personalization metadata attached.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

try:
    from ..models.content import Depth, Explanation, FALLBACK_SOURCE, GenerationParameters
    from ..models.session_context import SessionContext
    from ..models.student_profile import StudentProfile
    from ..orchestrator import GenerationOrchestrator
    from ..utils.explanation_parser import parse_explanation
except ImportError:
    from src.models.content import Depth, Explanation, FALLBACK_SOURCE, GenerationParameters
    from src.models.session_context import SessionContext
    from src.models.student_profile import StudentProfile
    from src.orchestrator import GenerationOrchestrator
    from src.utils.explanation_parser import parse_explanation


def as_profile(profile: Union[StudentProfile, Dict[str, Any], None]) -> StudentProfile:
    if isinstance(profile, StudentProfile):
        return profile
    return StudentProfile.from_dict(profile)


def as_context(context: Union[SessionContext, list, None]) -> SessionContext:
    if isinstance(context, SessionContext):
        return context
    return SessionContext(context)


def determine_depth(profile: StudentProfile) -> Depth:
    """Age rule first, then the step-by-step preference."""
    if profile.is_young_student():
        return "simple"
    if profile.preferences.step_by_step:
        return "detailed"
    return "standard"


def adjust_language(profile: StudentProfile, context: SessionContext) -> Dict[str, bool]:
    """Tone adjustments derived from age, preferences and recent results."""
    simplified = profile.is_young_student() or profile.preferences.easy_reading
    return {
        "simplified": simplified,
        "formal": not simplified,
        "encouraging": len(context.weaknesses) > 0,
    }


def build_generation_parameters(
    profile: StudentProfile,
    context: SessionContext,
    subject: str,
    level: str,
    topic: str,
) -> GenerationParameters:
    """Derive generation parameters for a learner and topic."""
    language = adjust_language(profile, context)
    return GenerationParameters(
        topic=topic,
        subject=subject,
        level=level,
        depth=determine_depth(profile),
        age=profile.age,
        interests=profile.interests,
        preferences=profile.preferences,
        simplified=language["simplified"],
        encouraging=language["encouraging"],
        related_topics=tuple(context.find_related_topics(topic)),
    )


class AdaptiveExplanationEngine:
    """
    Personalizes explanations from a student profile and session context.

    Never fails on validated input: provider failures are absorbed by the
    orchestrator, and the parser always yields at least one step.
    """

    def __init__(
        self,
        profile: Union[StudentProfile, Dict[str, Any], None] = None,
        context: Union[SessionContext, list, None] = None,
        orchestrator: Optional[GenerationOrchestrator] = None,
    ):
        """
        Initialize engine.

        Args:
            profile: StudentProfile or partial profile dict
            context: SessionContext or list of session dicts
            orchestrator: Tier chain (defaults to the configured providers)
        """
        self.profile = as_profile(profile)
        self.context = as_context(context)
        self.orchestrator = orchestrator or GenerationOrchestrator.from_config()

    def determine_depth(self) -> Depth:
        return determine_depth(self.profile)

    def adjust_language(self) -> Dict[str, bool]:
        return adjust_language(self.profile, self.context)

    def build_parameters(self, subject: str, level: str, topic: str) -> GenerationParameters:
        return build_generation_parameters(self.profile, self.context, subject, level, topic)

    def generate_explanation(self, subject: str, level: str, topic: str) -> Explanation:
        """
        Generate a personalized explanation.

        Args:
            subject: Subject identifier (validated upstream)
            level: Academic level (validated upstream)
            topic: Topic to explain

        Returns:
            Explanation with summary, non-empty steps and metadata
        """
        params = self.build_parameters(subject, level, topic)
        is_review = self.profile.has_knowledge(topic)
        is_difficult = self.profile.has_difficulty(topic)

        generated = self.orchestrator.generate_explanation(params)
        parsed = parse_explanation(generated.content, topic=topic)

        metadata = {
            "adapted_for": {
                "age": self.profile.age,
                "is_young_student": self.profile.is_young_student(),
                "preferences": self.profile.preferences.to_dict(),
            },
            "context": {
                "is_review": is_review,
                "is_difficult": is_difficult,
                "related_topics": list(params.related_topics),
                "weaknesses": self.context.weaknesses,
            },
            "depth": params.depth,
            "language": self.adjust_language(),
            "source": generated.source,
            "model": generated.model,
            "ai_generated": generated.source != FALLBACK_SOURCE,
        }

        return Explanation(
            subject=subject,
            level=level,
            topic=topic,
            summary=parsed.summary,
            steps=parsed.steps,
            metadata=metadata,
        )
