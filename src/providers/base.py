"""
Provider adapter contract.

A provider adapter wraps one LLM backend (one tier). Availability is a cheap,
synchronous predicate over configuration; generation calls may block on a
network round trip and may fail with any exception.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

try:
    from ..models.content import GenerationParameters
except ImportError:
    from src.models.content import GenerationParameters


class ProviderAdapter(ABC):
    """
    Base class for content providers.

    Subclasses set `name` (used as provenance) and `model_name`.
    """

    name: str = "provider"
    model_name: str = "unknown"

    @abstractmethod
    def is_available(self) -> bool:
        """Whether this tier may be attempted (e.g. a credential is configured)."""

    @abstractmethod
    def generate_explanation(self, params: GenerationParameters) -> str:
        """
        Generate raw explanation text.

        Raises:
            Exception: Any failure; the orchestrator treats it as a tier failure
        """

    @abstractmethod
    def generate_exercise(self, params: GenerationParameters, difficulty: int) -> Dict[str, Any]:
        """
        Generate one multiple-choice exercise.

        Returns:
            Dict with question, options (4), correct_answer (A-D), explanation

        Raises:
            Exception: Any failure, including structurally invalid output
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, model={self.model_name!r})"
