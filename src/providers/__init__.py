"""
Content providers.

- ProviderAdapter: contract for one LLM tier
- ChatProviderAdapter: LangChain chat model behind an OpenAI-compatible endpoint
- FallbackContentGenerator: deterministic local content, never fails
"""

from .base import ProviderAdapter
from .chat import ChatProviderAdapter
from .fallback import FallbackContentGenerator, FALLBACK_NOTICE

try:
    from ..config import Config
except ImportError:
    from src.config import Config


def build_providers(cfg: Config) -> list[ProviderAdapter]:
    """Adapters for every configured tier, in configured priority order."""
    return [ChatProviderAdapter(provider_config) for provider_config in cfg.providers]


__all__ = [
    "ProviderAdapter",
    "ChatProviderAdapter",
    "FallbackContentGenerator",
    "FALLBACK_NOTICE",
    "build_providers",
]
