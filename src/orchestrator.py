"""
Generation Orchestrator - resilient, multi-tier content generation.

Tries provider tiers in their configured priority order and falls back to
deterministic local content when every tier is unavailable or fails:

1. For each tier: skip it if unavailable, otherwise attempt it once
2. First success wins; content is tagged with that tier's identity
3. A failure is logged once, its partial output discarded, next tier tried
4. No tier left: the local fallback answers (it never fails)

Tiers run strictly one after another, never raced in parallel. Exercise
batches are all-or-nothing per tier so a batch never mixes provenance.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

try:
    from .config import Config, config as default_config
    from .models.content import (
        FALLBACK_MODEL,
        FALLBACK_SOURCE,
        ContentKind,
        GeneratedContent,
        GenerationParameters,
    )
    from .providers import FallbackContentGenerator, ProviderAdapter, build_providers
    from .utils.validation import validate_provider_exercise
except ImportError:
    from src.config import Config, config as default_config
    from src.models.content import (
        FALLBACK_MODEL,
        FALLBACK_SOURCE,
        ContentKind,
        GeneratedContent,
        GenerationParameters,
    )
    from src.providers import FallbackContentGenerator, ProviderAdapter, build_providers
    from src.utils.validation import validate_provider_exercise

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """
    Runs a generation request across provider tiers with guaranteed success.

    Usage:
        orchestrator = GenerationOrchestrator.from_config()
        result = orchestrator.generate_explanation(params)
        result.content, result.source  # text, "groq" | "together" | "local"
    """

    def __init__(
        self,
        providers: Sequence[ProviderAdapter],
        fallback: Optional[FallbackContentGenerator] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            providers: Adapters in priority order (order is never recomputed)
            fallback: Local generator used when every tier fails
        """
        self.providers: tuple[ProviderAdapter, ...] = tuple(providers)
        self.fallback = fallback or FallbackContentGenerator()

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> GenerationOrchestrator:
        """Build the configured provider chain."""
        return cls(build_providers(cfg or default_config))

    def available_providers(self) -> List[str]:
        """Names of tiers that would currently be attempted."""
        return [p.name for p in self.providers if p.is_available()]

    # ==================== Public API ====================

    def generate_explanation(self, params: GenerationParameters) -> GeneratedContent:
        """
        Generate raw explanation text.

        Never raises; worst case is local fallback content.
        """
        return self._run_tiers(
            kind="explanation",
            attempt=lambda provider: self._explanation_from(provider, params),
            fallback=lambda: self.fallback.generate_explanation(params),
        )

    def generate_exercises(
        self, params: GenerationParameters, difficulties: Sequence[int]
    ) -> GeneratedContent:
        """
        Generate one exercise per requested difficulty, in order.

        Items are requested one by one from the active tier. If any item
        fails, the whole batch moves to the next tier.

        Returns:
            GeneratedContent whose content is a list of item dicts
            (question, options, correct_answer, explanation)
        """
        difficulties = list(difficulties)
        return self._run_tiers(
            kind="exercises",
            attempt=lambda provider: self._exercises_from(provider, params, difficulties),
            fallback=lambda: self.fallback.generate_exercises(params, difficulties),
        )

    # ==================== Tier Combinator ====================

    def _run_tiers(
        self,
        kind: ContentKind,
        attempt: Callable[[ProviderAdapter], Any],
        fallback: Callable[[], Any],
    ) -> GeneratedContent:
        """Try each tier in order with early exit; fall back when exhausted."""
        failures: List[str] = []

        for tier, provider in enumerate(self.providers, start=1):
            if not self._is_available(provider):
                logger.debug("[%d] %s unavailable for %s, skipping", tier, provider.name, kind)
                continue

            logger.info("[%d] %s: generating %s", tier, provider.name, kind)
            try:
                content = attempt(provider)
            except Exception as e:
                reason = str(e) or type(e).__name__
                failures.append(f"{provider.name}: {reason}")
                logger.warning("[%d] %s failed for %s: %s", tier, provider.name, kind, reason)
                continue

            logger.info("[%d] %s: %s OK", tier, provider.name, kind)
            return GeneratedContent(
                content=content,
                source=provider.name,
                model=provider.model_name,
                tier=tier,
                failures=failures,
            )

        logger.info("Using local fallback for %s", kind)
        return GeneratedContent(
            content=fallback(),
            source=FALLBACK_SOURCE,
            model=FALLBACK_MODEL,
            tier=0,
            failures=failures,
        )

    @staticmethod
    def _is_available(provider: ProviderAdapter) -> bool:
        """Availability check; a raising predicate counts as unavailable."""
        try:
            return bool(provider.is_available())
        except Exception as e:
            logger.warning("%s availability check failed: %s", provider.name, e)
            return False

    @staticmethod
    def _explanation_from(provider: ProviderAdapter, params: GenerationParameters) -> str:
        text = provider.generate_explanation(params)
        if not isinstance(text, str) or not text.strip():
            raise ValueError("empty explanation")
        return text

    @staticmethod
    def _exercises_from(
        provider: ProviderAdapter,
        params: GenerationParameters,
        difficulties: List[int],
    ) -> List[dict]:
        # Local list: discarded as a whole if any item fails
        items = []
        for index, difficulty in enumerate(difficulties):
            item = provider.generate_exercise(params, difficulty)
            if not isinstance(item, dict):
                raise ValueError(
                    f"exercise {index + 1} is {type(item).__name__}, expected a mapping"
                )
            result = validate_provider_exercise(item)
            if not result:
                raise ValueError(
                    f"exercise {index + 1} is malformed: " + "; ".join(result.errors)
                )
            items.append(result.data)
        return items
