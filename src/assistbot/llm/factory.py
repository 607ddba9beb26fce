from typing import Any

from .base import LLMProvider
from .providers import OpenRouterProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type (currently only 'openrouter')
        **config: Provider-specific configuration
            For OpenRouter:
                - api_key: str (required)
                - model: str (default: 'deepseek/deepseek-r1-0528:free')
                - base_url: str (default: 'https://openrouter.ai/api/v1')
                - referer: str (HTTP-Referer header)
                - title: str (X-Title header)

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_llm_provider(
        ...     "openrouter",
        ...     api_key="sk-or-v1-...",
        ...     model="deepseek/deepseek-r1-0528:free"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "openrouter":
        if "api_key" not in config:
            raise TypeError("OpenRouter provider requires 'api_key' in config")
        return OpenRouterProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'openrouter'"
    )
