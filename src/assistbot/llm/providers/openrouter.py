from collections.abc import Mapping
from typing import Any

from openai import APIResponseValidationError, APIStatusError, AsyncOpenAI

from ...config import DEFAULT_MODEL, DEFAULT_REFERER, DEFAULT_TITLE, OPENROUTER_BASE_URL
from ..base import LLMProvider
from ..exceptions import GENERIC_API_FAILURE, CompletionError
from ..models import ChatMessage, LLMResponse


def extract_error_message(body: object) -> str:
    """Pull the service-provided error text out of an error body.

    Accepts both the full ``{"error": {"message": ...}}`` envelope and the
    already unwrapped ``{"message": ...}`` form the OpenAI SDK stores on
    APIStatusError.body. Falls back to a generic failure string.
    """
    if isinstance(body, Mapping):
        error = body.get("error", body)
        if isinstance(error, Mapping):
            message = error.get("message")
            if isinstance(message, str) and message.strip():
                return message
        elif isinstance(error, str) and error.strip():
            return error
    return GENERIC_API_FAILURE


class OpenRouterProvider(LLMProvider):
    """OpenRouter provider using its OpenAI-compatible chat-completions API.

    Hidden design decisions:
    - API client initialization (via the OpenAI SDK)
    - Caller identity headers (HTTP-Referer / X-Title)
    - Single attempt per request (SDK retries disabled)
    - Mapping of error bodies and malformed responses to CompletionError
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = OPENROUTER_BASE_URL,
        referer: str = DEFAULT_REFERER,
        title: str = DEFAULT_TITLE,
        **client_kwargs: Any
    ):
        """Initialize OpenRouter provider.

        Args:
            api_key: OpenRouter API key, sent as a bearer token
            model: Default model to use
            base_url: API base URL (default: https://openrouter.ai/api/v1)
            referer: HTTP-Referer header identifying the calling site
            title: X-Title header identifying the calling application
            **client_kwargs: Additional kwargs for AsyncOpenAI client
                (e.g. http_client, timeout)
        """
        self._model = model
        client_kwargs.setdefault("max_retries", 0)
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            default_headers={"HTTP-Referer": referer, "X-Title": title},
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion through OpenRouter.

        Only ``model`` and ``messages`` are sent unless extra parameters are
        passed explicitly.

        Args:
            messages: Conversation history, oldest first
            model: Model to use (overrides default)
            **kwargs: Additional request parameters

        Returns:
            LLMResponse with the first choice's content

        Raises:
            CompletionError: Non-success status or a response without content
        """
        model_to_use = model or self._model

        try:
            completion = await self._client.chat.completions.create(
                model=model_to_use,
                messages=[msg.to_payload() for msg in messages],
                **kwargs
            )
        except APIStatusError as e:
            raise CompletionError(extract_error_message(e.body), status_code=e.status_code) from e
        except APIResponseValidationError as e:
            raise CompletionError(extract_error_message(e.body), status_code=e.status_code) from e

        choices = getattr(completion, "choices", None)
        if not choices:
            # OpenRouter can answer 200 with an error envelope instead of choices
            raise CompletionError(extract_error_message({"error": getattr(completion, "error", None)}))

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise CompletionError("Response did not contain a completion")

        usage = None
        if getattr(completion, "usage", None):
            counts = {
                "prompt_tokens": getattr(completion.usage, "prompt_tokens", None),
                "completion_tokens": getattr(completion.usage, "completion_tokens", None),
                "total_tokens": getattr(completion.usage, "total_tokens", None)
            }
            usage = {key: value for key, value in counts.items() if isinstance(value, int)}

        return LLMResponse(
            content=content,
            model=getattr(completion, "model", None) or model_to_use,
            finish_reason=getattr(choices[0], "finish_reason", None),
            usage=usage
        )

    async def close(self) -> None:
        """Close the underlying OpenAI client.

        Note: Uses the OpenAI SDK's async context manager for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        await self._client.close()
