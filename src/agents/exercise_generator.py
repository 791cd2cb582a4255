"""
Adaptive Exercise Generator - personalized practice batches.

Derives a qualitative difficulty from the student's profile and history,
spreads a numeric difficulty curve across the batch and requests the items
from the generation orchestrator.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

try:
    from ..config import config
    from ..models.content import DifficultyLabel, Exercise, ExerciseBatch
    from ..models.session_context import SessionContext
    from ..models.student_profile import StudentProfile
    from ..orchestrator import GenerationOrchestrator
    from .explanation_engine import as_context, as_profile, build_generation_parameters
except ImportError:
    from src.config import config
    from src.models.content import DifficultyLabel, Exercise, ExerciseBatch
    from src.models.session_context import SessionContext
    from src.models.student_profile import StudentProfile
    from src.orchestrator import GenerationOrchestrator
    from src.agents.explanation_engine import as_context, as_profile, build_generation_parameters


def difficulty_curve(level: str, count: int, label: DifficultyLabel = "medium") -> List[int]:
    """
    Numeric difficulty for each item of a batch.

    Starts from the level's base (shifted by the qualitative label) and rises
    by up to `difficulty_spread` points across the batch, clamped to the
    1-10 scale. The sequence is non-decreasing.

    Args:
        level: Academic level ("secondary", "university"; others use the default base)
        count: Batch size
        label: Qualitative difficulty for the batch

    Returns:
        List of `count` integers
    """
    cfg = config.exercises
    base = cfg.level_base_difficulty.get(level, cfg.default_base_difficulty)
    base += cfg.label_offsets.get(label, 0)

    curve = []
    for index in range(count):
        value = base + (index * cfg.difficulty_spread) // count
        curve.append(max(cfg.min_difficulty, min(cfg.max_difficulty, value)))
    return curve


class AdaptiveExerciseGenerator:
    """
    Generates exercise batches adapted to a student.

    Features:
    - Batch difficulty label from difficulties, prior knowledge and strengths
    - Monotonic per-item difficulty curve
    - Personalized hints and per-item metadata
    """

    def __init__(
        self,
        profile: Union[StudentProfile, Dict[str, Any], None] = None,
        context: Union[SessionContext, list, None] = None,
        orchestrator: Optional[GenerationOrchestrator] = None,
    ):
        """
        Initialize generator.

        Args:
            profile: StudentProfile or partial profile dict
            context: SessionContext or list of session dicts
            orchestrator: Tier chain (defaults to the configured providers)
        """
        self.profile = as_profile(profile)
        self.context = as_context(context)
        self.orchestrator = orchestrator or GenerationOrchestrator.from_config()

    def determine_difficulty(self, topic: str) -> DifficultyLabel:
        """
        Qualitative difficulty for the batch.

        A known difficulty gives "easy"; prior knowledge gives "medium";
        a strength from session history gives "hard"; otherwise "medium".
        """
        if self.profile.has_difficulty(topic):
            return "easy"
        if self.profile.has_knowledge(topic):
            return "medium"
        if topic in self.context.strengths:
            return "hard"
        return config.exercises.default_difficulty

    def generate_hint(self, topic: str, label: DifficultyLabel) -> str:
        """Hint matched to the batch difficulty."""
        if label == "easy":
            hint = f"Hint: remember the basic concepts of {topic}."
        elif label == "medium":
            hint = f"Hint: apply the main formula or rule of {topic}."
        else:
            hint = "Hint: combine the advanced concepts you have learned."

        if self.profile.preferences.step_by_step:
            hint += " Work step by step and check each calculation."
        return hint

    def generate_exercises(
        self,
        subject: str,
        level: str,
        topic: str,
        count: Optional[int] = None,
    ) -> ExerciseBatch:
        """
        Generate a batch of exercises.

        Args:
            subject: Subject identifier (validated upstream)
            level: Academic level (validated upstream)
            topic: Topic to practice
            count: Number of exercises (default from config)

        Returns:
            ExerciseBatch with exactly `count` exercises, all from one tier

        Raises:
            ValueError: If count is not a positive integer
        """
        if count is None:
            count = config.tutor.default_exercise_count
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"count must be a positive integer, got {count!r}")

        label = self.determine_difficulty(topic)
        curve = difficulty_curve(level, count, label)
        params = build_generation_parameters(self.profile, self.context, subject, level, topic)

        generated = self.orchestrator.generate_exercises(params, curve)

        adapted_for = f"{self.profile.age} years" if self.profile.age is not None else level
        focus = "reinforcement" if self.profile.has_difficulty(topic) else "practice"
        hint = self.generate_hint(topic, label)

        exercises = [
            Exercise(
                id=index,
                question=item["question"],
                options=list(item["options"]),
                correct_answer=item["correct_answer"],
                explanation=item["explanation"],
                difficulty=difficulty,
                difficulty_label=label,
                hint=hint,
                metadata={
                    "adapted_for": adapted_for,
                    "focus": focus,
                    "source": generated.source,
                },
            )
            for index, (item, difficulty) in enumerate(zip(generated.content, curve), start=1)
        ]

        return ExerciseBatch(exercises=exercises, source=generated.source, model=generated.model)
