from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """One entry of the conversation history sent to a provider."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the message sender")
    content: str = Field(description="Content of the message")

    def to_payload(self) -> dict[str, str]:
        """Wire format used by OpenAI-compatible chat-completion APIs."""
        return {"role": self.role, "content": self.content}


class LLMResponse(BaseModel):
    """Completion returned by an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Content of the first returned choice")
    model: str = Field(description="Model that generated the response")
    finish_reason: str | None = Field(
        default=None,
        description="Why generation stopped, when the service reports it"
    )
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
