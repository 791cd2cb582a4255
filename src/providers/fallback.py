"""
Local fallback content - used when no provider tier is available or all fail.

Deterministic, provider-free and never fails. The explanation follows the
fixed curriculum template (introduction, key concepts, examples, analogy,
applications, practice) and its text states plainly that it is not
model-generated.
"""

from __future__ import annotations

from typing import Any, Dict, List

try:
    from ..config import config
    from ..models.content import FALLBACK_MODEL, FALLBACK_SOURCE, GenerationParameters
except ImportError:
    from src.config import config
    from src.models.content import FALLBACK_MODEL, FALLBACK_SOURCE, GenerationParameters


FALLBACK_NOTICE = (
    "Note: this is template content, not AI-generated. "
    "Configure GROQ_API_KEY or TOGETHER_API_KEY for personalized explanations."
)

_SUBJECT_FORMULAS = {"math": "y = f(x)", "physics": "F = m * a"}

_CONCEPT_BULLETS = {
    "simple": ["A simple, clear definition", "The main ideas", "How it works"],
    "standard": ["Definition", "Main properties", "Relations with other concepts"],
    "detailed": [
        "Formal, precise definition",
        "Fundamental properties",
        "Theorems and proofs",
        "Conditions and restrictions",
    ],
}


class FallbackContentGenerator:
    """
    Template-based generator with the same operations as a provider.

    Usage:
        fallback = FallbackContentGenerator()
        text = fallback.generate_explanation(params)
    """

    name = FALLBACK_SOURCE
    model_name = FALLBACK_MODEL

    def is_available(self) -> bool:
        return True

    # ==================== Explanations ====================

    def generate_explanation(self, params: GenerationParameters) -> str:
        """
        Build a blank-line separated explanation.

        The first paragraph is the summary; every other paragraph opens with
        a "Title:" line so the explanation parser recovers the step titles.
        """
        paragraphs = [self._intro(params)]
        paragraphs.append(self._step("Introduction", self._introduction_body(params)))
        paragraphs.append(self._step("Key concepts", self._concepts_body(params)))

        prefs = params.preferences
        if prefs.examples:
            kind = "easy" if params.simplified else "practical"
            paragraphs.append(
                self._step(
                    "Examples",
                    f"Some {kind} examples of how to apply {params.topic}:\n"
                    "Example 1: an everyday situation related to the topic\n"
                    "Example 2: a problem solved step by step\n"
                    "Example 3: a real application case",
                )
            )
        if prefs.analogies:
            paragraphs.append(
                self._step(
                    "Analogy",
                    f"To understand {params.topic} more intuitively, compare it with "
                    "something familiar from everyday life. The comparison helps you "
                    "picture how the concept works.",
                )
            )
        if prefs.real_world_context:
            paragraphs.append(
                self._step(
                    "Real-world applications",
                    f"{params.topic} shows up in engineering and technology, the natural "
                    "sciences, industry and everyday life.",
                )
            )
        paragraphs.append(self._step("Practice", self._practice_body(params)))
        paragraphs.append(FALLBACK_NOTICE)
        return "\n\n".join(paragraphs)

    @staticmethod
    def _step(title: str, body: str) -> str:
        return f"{title}:\n{body}"

    @staticmethod
    def _subject_name(params: GenerationParameters) -> str:
        return config.tutor.subject_names.get(params.subject, params.subject)

    def _intro(self, params: GenerationParameters) -> str:
        if params.simplified:
            return f"Hi! Today we are going to learn about {params.topic}."
        return (
            f"An introduction to {params.topic} in {self._subject_name(params)} "
            f"at the {params.level} level."
        )

    def _introduction_body(self, params: GenerationParameters) -> str:
        body = f"{params.topic} is a fundamental concept in {self._subject_name(params)}."
        if params.related_topics:
            body += f" It is closely related to {params.related_topics[0]}, which you have already studied."
        if params.simplified:
            body += " We will learn it in an easy and fun way."
        else:
            body += " We start with the fundamentals and build up gradually."
        return body

    def _concepts_body(self, params: GenerationParameters) -> str:
        bullets = _CONCEPT_BULLETS.get(params.depth, _CONCEPT_BULLETS["standard"])
        lines = [f"The key concepts of {params.topic} include:"]
        lines.extend(f"- {bullet}" for bullet in bullets)
        formula = _SUBJECT_FORMULAS.get(params.subject)
        if formula:
            lines.append(f"Formula: {formula}")
        return "\n".join(lines)

    def _practice_body(self, params: GenerationParameters) -> str:
        if params.encouraging:
            opener = "Don't worry if it feels hard at first! Practice is the key to improving."
        else:
            opener = "Great! Now it is time to put what you learned into practice."
        return (
            f"{opener} Solve a few exercises about {params.topic} to consolidate "
            "your understanding and build confidence."
        )

    # ==================== Exercises ====================

    def generate_exercise(
        self, params: GenerationParameters, difficulty: int, index: int = 0
    ) -> Dict[str, Any]:
        """Templated multiple-choice item; the last option is always correct."""
        options: List[str] = [
            "Its definition",
            "Its main properties",
            "Its applications",
            "All of the above",
        ]
        return {
            "question": (
                f"[Practice template] Question {index + 1} about {params.topic}: "
                f"which of these are part of understanding {params.topic}?"
            ),
            "options": options,
            "correct_answer": config.exercises.option_ids[-1],
            "explanation": (
                f"All of them are part of understanding {params.topic}. "
                "(Template exercise, not AI-generated.)"
            ),
        }

    def generate_exercises(
        self, params: GenerationParameters, difficulties: List[int]
    ) -> List[Dict[str, Any]]:
        return [
            self.generate_exercise(params, difficulty, index)
            for index, difficulty in enumerate(difficulties)
        ]
