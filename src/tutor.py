"""
Tutor service - the request boundary of the personalization engine.

Validates inbound requests (subject, level, topic, count, profile, session
history), builds the request-scoped profile and context, runs the adaptive
agents and shapes the outbound records:

    service = TutorService()
    result = service.explain("math", "secondary", "derivatives",
                             profile_data={"age": 15})
    result["data"]["steps"], result["personalization"]["applied"]

Validation failures raise RequestValidationError before any generation
happens; provider failures never surface here.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

try:
    from .agents import AdaptiveExerciseGenerator, AdaptiveExplanationEngine, check_answer
    from .errors import RequestValidationError
    from .models.session_context import SessionContext
    from .models.student_profile import StudentProfile
    from .orchestrator import GenerationOrchestrator
    from .utils.validation import (
        validate_answer_request,
        validate_session_history,
        validate_student_profile,
        validate_tutor_request,
    )
except ImportError:
    from src.agents import AdaptiveExerciseGenerator, AdaptiveExplanationEngine, check_answer
    from src.errors import RequestValidationError
    from src.models.session_context import SessionContext
    from src.models.student_profile import StudentProfile
    from src.orchestrator import GenerationOrchestrator
    from src.utils.validation import (
        validate_answer_request,
        validate_session_history,
        validate_student_profile,
        validate_tutor_request,
    )

logger = logging.getLogger(__name__)


class TutorService:
    """Entry point used by the transport layer (HTTP handlers, CLI, tests)."""

    def __init__(self, orchestrator: Optional[GenerationOrchestrator] = None):
        """
        Initialize service.

        Args:
            orchestrator: Shared tier chain (defaults to the configured providers)
        """
        self.orchestrator = orchestrator or GenerationOrchestrator.from_config()

    def _load_student(
        self,
        profile_data: Optional[Dict[str, Any]],
        recent_sessions: Optional[List[Dict[str, Any]]],
    ) -> tuple[StudentProfile, SessionContext]:
        errors = []

        if profile_data is not None:
            result = validate_student_profile(profile_data)
            if not result:
                errors.extend(f"profile: {e}" for e in result.errors)

        if recent_sessions is not None:
            result = validate_session_history(recent_sessions)
            if not result:
                errors.extend(f"recent_sessions: {e}" for e in result.errors)

        if errors:
            raise RequestValidationError(errors)

        try:
            profile = StudentProfile.from_dict(profile_data)
            context = SessionContext(recent_sessions)
        except (TypeError, ValueError) as e:
            raise RequestValidationError([str(e)]) from e
        return profile, context

    @staticmethod
    def _personalization(profile_data, recent_sessions) -> Dict[str, Any]:
        return {
            "applied": profile_data is not None,
            "context_used": len(recent_sessions or []),
        }

    def explain(
        self,
        subject: str,
        level: str,
        topic: str,
        profile_data: Optional[Dict[str, Any]] = None,
        recent_sessions: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """
        Personalized explanation for a topic.

        Returns:
            {"success": True, "data": Explanation dict,
             "personalization": {"applied", "context_used"}}

        Raises:
            RequestValidationError: If the request, profile or history is invalid
        """
        validate_tutor_request(subject, level, topic)
        profile, context = self._load_student(profile_data, recent_sessions)

        engine = AdaptiveExplanationEngine(profile, context, self.orchestrator)
        explanation = engine.generate_explanation(subject, level, topic.strip())
        logger.info(
            "Explanation for %r (%s/%s) served by %s with %d step(s)",
            topic, subject, level, explanation.source, len(explanation.steps),
        )

        return {
            "success": True,
            "data": explanation.to_dict(),
            "personalization": self._personalization(profile_data, recent_sessions),
        }

    def exercises(
        self,
        subject: str,
        level: str,
        topic: str,
        count: Optional[int] = None,
        profile_data: Optional[Dict[str, Any]] = None,
        recent_sessions: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """
        Personalized exercise batch.

        Returns:
            {"success": True, "data": [Exercise dict, ...],
             "source", "model",
             "personalization": {"applied", "difficulty", "context_used"}}

        Raises:
            RequestValidationError: If the request, profile or history is invalid
        """
        validate_tutor_request(subject, level, topic, count)
        profile, context = self._load_student(profile_data, recent_sessions)

        generator = AdaptiveExerciseGenerator(profile, context, self.orchestrator)
        batch = generator.generate_exercises(subject, level, topic.strip(), count)
        logger.info(
            "%d exercise(s) for %r (%s/%s) served by %s",
            len(batch), topic, subject, level, batch.source,
        )

        personalization = self._personalization(profile_data, recent_sessions)
        personalization["difficulty"] = batch.first_difficulty
        return {
            "success": True,
            "data": [exercise.to_dict() for exercise in batch.exercises],
            "source": batch.source,
            "model": batch.model,
            "personalization": personalization,
        }

    def check(self, exercise_id: Any, user_answer: str, correct_answer: str) -> Dict[str, Any]:
        """
        Check a submitted answer.

        Raises:
            RequestValidationError: If a field is missing
        """
        validate_answer_request(exercise_id, user_answer, correct_answer)
        result = check_answer(user_answer, correct_answer, exercise_id=exercise_id)
        return {"success": True, "data": result.to_dict()}
