"""
Chat provider adapter - one LLM tier behind an OpenAI-compatible endpoint.

Groq and Together both expose OpenAI-compatible chat APIs, so a single
adapter class configured with a base URL serves every tier.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

try:
    from ..config import ProviderConfig, config, token_tracker
    from ..errors import ProviderError, ProviderResponseError
    from ..models.content import GenerationParameters
    from ..utils.validation import validate_provider_exercise
    from . import prompts
    from .base import ProviderAdapter
except ImportError:
    from src.config import ProviderConfig, config, token_tracker
    from src.errors import ProviderError, ProviderResponseError
    from src.models.content import GenerationParameters
    from src.utils.validation import validate_provider_exercise
    from src.providers import prompts
    from src.providers.base import ProviderAdapter

logger = logging.getLogger(__name__)


def extract_json(response: str) -> str:
    """Strip markdown code fences an LLM may wrap around JSON."""
    response = response.strip()
    if "```json" in response:
        response = response.split("```json")[1].split("```")[0].strip()
    elif "```" in response:
        response = response.split("```")[1].split("```")[0].strip()
    return response


class ChatProviderAdapter(ProviderAdapter):
    """
    Provider tier backed by a LangChain chat model.

    The chat client is created lazily on first use so that an unconfigured
    tier never builds one. Retries are disabled on the client: a tier fails
    at most once per call and the orchestrator moves on.
    """

    def __init__(self, provider_config: ProviderConfig, llm: Optional[Any] = None):
        """
        Initialize adapter.

        Args:
            provider_config: Tier settings (credential, model, endpoint, timeout)
            llm: Pre-built chat model (tests inject fakes here)
        """
        self.provider_config = provider_config
        self.name = provider_config.name
        self.model_name = provider_config.model_name
        self._llm = llm
        self._exercise_llm = llm

    def is_available(self) -> bool:
        if self._llm is not None:
            return self.provider_config.enabled
        return self.provider_config.configured

    def _build_llm(self, temperature: float, max_tokens: int) -> ChatOpenAI:
        cfg = self.provider_config
        return ChatOpenAI(
            model=cfg.model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=cfg.request_timeout,
            max_retries=0,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
        )

    def _get_llm(self, for_exercise: bool = False):
        cfg = self.provider_config
        if for_exercise:
            if self._exercise_llm is None:
                self._exercise_llm = self._build_llm(
                    cfg.exercise_temperature, cfg.exercise_max_tokens
                )
            return self._exercise_llm
        if self._llm is None:
            self._llm = self._build_llm(cfg.temperature, cfg.max_tokens)
        return self._llm

    def _invoke(self, system_prompt: str, user_prompt: str, for_exercise: bool = False) -> str:
        """Send one chat request; wrap any client failure as ProviderError."""
        llm = self._get_llm(for_exercise=for_exercise)
        try:
            response = llm.invoke(
                [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
            )
        except Exception as e:
            raise ProviderError(f"{type(e).__name__}: {e}", provider=self.name) from e

        self._track_usage(response)
        content = getattr(response, "content", response)
        if not isinstance(content, str):
            raise ProviderResponseError(
                f"unexpected response content type {type(content).__name__}",
                provider=self.name,
            )
        return content

    def _track_usage(self, response: Any) -> None:
        usage = getattr(response, "usage_metadata", None)
        if not isinstance(usage, dict):
            return
        input_tokens = int(usage.get("input_tokens", 0))
        output_tokens = int(usage.get("output_tokens", 0))
        token_tracker.add_tokens(input_tokens, output_tokens)
        if config.logging.log_tokens:
            logger.debug(
                "%s usage: %d input / %d output tokens",
                self.name, input_tokens, output_tokens,
            )

    def generate_explanation(self, params: GenerationParameters) -> str:
        """
        Generate raw explanation text.

        Raises:
            ProviderError: Client failure or timeout
            ProviderResponseError: Empty response
        """
        prompt = prompts.explanation_prompt.format(**prompts.explanation_variables(params))
        content = self._invoke(prompts.EXPLANATION_SYSTEM_PROMPT, prompt)
        if not content.strip():
            raise ProviderResponseError("empty explanation", provider=self.name)
        return content

    def generate_exercise(self, params: GenerationParameters, difficulty: int) -> Dict[str, Any]:
        """
        Generate and structurally validate one exercise.

        Raises:
            ProviderError: Client failure or timeout
            ProviderResponseError: Not JSON, or not the required shape
        """
        prompt = prompts.exercise_prompt.format(
            **prompts.exercise_variables(params, difficulty)
        )
        content = self._invoke(prompts.EXERCISE_SYSTEM_PROMPT, prompt, for_exercise=True)

        try:
            data = json.loads(extract_json(content))
        except json.JSONDecodeError as e:
            raise ProviderResponseError(f"exercise is not valid JSON: {e}", provider=self.name) from e

        result = validate_provider_exercise(data)
        if not result:
            raise ProviderResponseError(
                "invalid exercise structure: " + "; ".join(result.errors),
                provider=self.name,
            )
        return {key: result.data[key] for key in ("question", "options", "correct_answer", "explanation")}
