"""
Exception types for TutorAdapt.

Validation errors are raised at the request boundary before the core runs.
Provider errors never leave the generation orchestrator: they only move a
request on to the next tier.
"""

from __future__ import annotations

from typing import Optional


class TutorError(Exception):
    """Base class for all tutor errors."""


class RequestValidationError(TutorError, ValueError):
    """
    A request was rejected at the boundary.

    Attributes:
        errors: Every problem found, not just the first one
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Invalid request: " + "; ".join(self.errors))


class ProviderError(TutorError):
    """A provider tier failed (network, timeout, authentication...)."""

    def __init__(self, message: str, provider: Optional[str] = None):
        self.provider = provider
        prefix = f"[{provider}] " if provider else ""
        super().__init__(f"{prefix}{message}")


class ProviderResponseError(ProviderError):
    """A provider answered with empty or structurally invalid content."""
