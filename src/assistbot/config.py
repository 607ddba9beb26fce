"""Runtime settings for the assistant.

Centralizes the external endpoint details and the simulated latency of the
built-in responder. Settings are code-level only; the credential is never part
of them and is supplied interactively at runtime.
"""

from pydantic import BaseModel, ConfigDict, Field

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "deepseek/deepseek-r1-0528:free"
DEFAULT_REFERER = "http://localhost"
DEFAULT_TITLE = "AI Chatbot"

# Seconds the built-in responder "thinks" before answering
DEFAULT_FALLBACK_DELAY = 1.0


class ChatSettings(BaseModel):
    """Settings shared by the dispatcher and the LLM provider."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        default=OPENROUTER_BASE_URL,
        description="Base URL of the OpenAI-compatible chat-completions API"
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        description="Model identifier sent with every completion request"
    )
    referer: str = Field(
        default=DEFAULT_REFERER,
        description="Value of the HTTP-Referer identity header"
    )
    title: str = Field(
        default=DEFAULT_TITLE,
        description="Value of the X-Title identity header"
    )
    fallback_delay: float = Field(
        default=DEFAULT_FALLBACK_DELAY,
        ge=0.0,
        description="Simulated latency of the built-in responder, in seconds"
    )
    request_timeout: float | None = Field(
        default=None,
        gt=0.0,
        description="Request timeout in seconds (None keeps the SDK default)"
    )

    def provider_config(self) -> dict[str, object]:
        """Keyword arguments for ``create_llm_provider`` (minus the api_key)."""
        config: dict[str, object] = {
            "model": self.model,
            "base_url": self.base_url,
            "referer": self.referer,
            "title": self.title,
        }
        if self.request_timeout is not None:
            config["timeout"] = self.request_timeout
        return config
