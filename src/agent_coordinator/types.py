"""Unified types for LLM interactions.

These types provide a provider-agnostic interface for completion calls.
All clients convert their provider-specific formats to/from these types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class MessageRole(Enum):
    """Role of a message in the conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class FinishReason(Enum):
    """Reason why the model stopped generating."""
    STOP = "stop"
    LENGTH = "length"
    ERROR = "error"


@dataclass
class UsageStats:
    """Token usage statistics."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class UnifiedMessage:
    """A message sent to or received from a model.

    This is the canonical message format used throughout the package.
    Each LLM client converts to/from this format internally.

    Attributes:
        role: The role of the message sender
        content: Text content of the message
        reasoning_content: Thinking output, for models that expose it
    """
    role: MessageRole
    content: str | None = None
    reasoning_content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary representation."""
        result: dict[str, Any] = {"role": self.role.value}
        if self.content is not None:
            result["content"] = self.content
        if self.reasoning_content is not None:
            result["reasoning_content"] = self.reasoning_content
        return result


@dataclass
class UnifiedResponse:
    """Response from an LLM provider.

    Attributes:
        message: The assistant's response message
        finish_reason: Why the model stopped generating
        usage: Token usage statistics (optional)
    """
    message: UnifiedMessage
    finish_reason: FinishReason
    usage: UsageStats | None = None

    @property
    def text(self) -> str:
        """The response text, or an empty string if the model returned none."""
        return self.message.content or ""
