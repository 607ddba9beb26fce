from .base import LLMProvider
from .exceptions import GENERIC_API_FAILURE, CompletionError
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse
from .providers import OpenRouterProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "CompletionError",
    "GENERIC_API_FAILURE",
    "LLMResponse",
    "OpenRouterProvider",
]
