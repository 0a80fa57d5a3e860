"""Anthropic client implementation (Claude models).

Anthropic has unique requirements:
- System prompt is passed separately, not in messages
- max_tokens is mandatory on every request
- Extended thinking takes a separate "thinking" parameter and fixes sampling

The coordinator sizes every oracle call through ``max_tokens`` (500 for
analysis, 2000 for synthesis, ...). That value is treated as the budget for
the visible answer: when thinking is enabled the thinking budget is added on
top, so a small per-phase limit never collides with the thinking minimum.
"""

import os
from contextlib import contextmanager
from typing import Any

from anthropic import Anthropic, APIConnectionError, InternalServerError
from anthropic import AuthenticationError as AnthropicAuthError
from anthropic import NotFoundError as AnthropicNotFoundError
from anthropic import PermissionDeniedError as AnthropicPermissionError
from anthropic import RateLimitError as AnthropicRateLimitError

from ..exceptions import (
    AuthenticationError,
    InvalidResponseError,
    ModelNotFoundError,
    ProviderUnavailableError,
    RateLimitError,
)
from ..types import (
    FinishReason,
    MessageRole,
    UnifiedMessage,
    UnifiedResponse,
    UsageStats,
)
from .base import BaseLLMClient

SUPPORTED_CONFIG_KEYS = {
    "temperature",
    "top_p",
    "top_k",
    "max_tokens",
    "stop_sequences",
    # extended thinking
    "thinking_enabled",
    "thinking_budget_tokens",
}

# sampling keys the API rejects while thinking is enabled
_THINKING_FIXED_KEYS = ("temperature", "top_p", "top_k")

DEFAULT_MAX_TOKENS = 4096
MIN_THINKING_BUDGET = 1024


class AnthropicClient(BaseLLMClient):
    """Anthropic API client with unified response handling."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-5-20250929",
        client_config: dict | None = None,
    ):
        """Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY env var.
            model: Model to use. Defaults to Claude Sonnet 4.5.
            client_config: Optional configuration parameters:
                - temperature, top_p, top_k: sampling (ignored while thinking)
                - max_tokens: int, answer budget (default 4096)
                - stop_sequences: list[str]
                - thinking_enabled: bool (enable extended thinking)
                - thinking_budget_tokens: int (min 1024), added to max_tokens
        """
        super().__init__(client_config)
        self.client = Anthropic(api_key=api_key or os.environ.get("ANTHROPIC_API_KEY"))
        self.model = model
        self._validate_config(self.client_config)

    def _validate_config(self, config: dict[str, Any]) -> None:
        unsupported = set(config) - SUPPORTED_CONFIG_KEYS
        if unsupported:
            raise ValueError(f"Unsupported config keys for Anthropic: {unsupported}")

        budget = config.get("thinking_budget_tokens")
        if config.get("thinking_enabled") and budget is not None and budget < MIN_THINKING_BUDGET:
            raise ValueError(f"thinking_budget_tokens must be at least {MIN_THINKING_BUDGET}")

    def generate(
        self,
        messages: list[UnifiedMessage],
        overrides: dict[str, Any] | None = None,
    ) -> UnifiedResponse:
        """Generate a completion from Anthropic.

        Raises:
            AuthenticationError: If API key is invalid
            RateLimitError: If rate limit is exceeded
            ModelNotFoundError: If the model does not exist
            ProviderUnavailableError: If API is unavailable or overloaded
        """
        config = self.resolve_config(overrides)
        self._validate_config(config)

        system_prompt, converted_messages = self._convert_messages(messages)
        kwargs = self._build_api_kwargs(system_prompt, converted_messages, config)

        with self._handle_api_errors():
            response = self.client.messages.create(**kwargs)
        return self._parse_response(response)

    @contextmanager
    def _handle_api_errors(self):
        """Map Anthropic SDK errors onto the client error hierarchy."""
        try:
            yield
        except (AnthropicAuthError, AnthropicPermissionError) as e:
            raise AuthenticationError(f"Anthropic authentication failed: {e}") from e
        except AnthropicRateLimitError as e:
            raise RateLimitError(
                "Anthropic rate limit exceeded", retry_after=_retry_after(e)
            ) from e
        except AnthropicNotFoundError as e:
            raise ModelNotFoundError(self.model) from e
        except (APIConnectionError, InternalServerError) as e:
            raise ProviderUnavailableError(f"Anthropic API unavailable: {e}") from e

    def _build_api_kwargs(
        self,
        system_prompt: str | None,
        messages: list[dict[str, Any]],
        config: dict[str, Any],
    ) -> dict[str, Any]:
        answer_tokens = config.get("max_tokens", DEFAULT_MAX_TOKENS)
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": answer_tokens,
        }

        if system_prompt:
            kwargs["system"] = system_prompt

        thinking = bool(config.get("thinking_enabled"))
        for key in ("temperature", "top_p", "top_k", "stop_sequences"):
            if key in config and not (thinking and key in _THINKING_FIXED_KEYS):
                kwargs[key] = config[key]

        if thinking:
            budget = config.get("thinking_budget_tokens", MIN_THINKING_BUDGET)
            kwargs["max_tokens"] = answer_tokens + budget
            kwargs["thinking"] = {"type": "enabled", "budget_tokens": budget}

        return kwargs

    def _convert_messages(
        self, messages: list[UnifiedMessage]
    ) -> tuple[str | None, list[dict[str, Any]]]:
        system_prompt = None
        converted = []

        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                system_prompt = msg.content
            else:
                converted.append({"role": msg.role.value, "content": msg.content or ""})

        return system_prompt, converted

    def _parse_response(self, response: Any) -> UnifiedResponse:
        """Parse Anthropic response into unified format."""
        try:
            text_parts = []
            thinking_parts = []
            for block in response.content:
                if block.type == "text":
                    text_parts.append(block.text)
                elif block.type == "thinking":
                    thinking_parts.append(block.thinking)

            return UnifiedResponse(
                message=UnifiedMessage(
                    role=MessageRole.ASSISTANT,
                    content="".join(text_parts) or None,
                    reasoning_content="".join(thinking_parts) or None,
                ),
                finish_reason=(
                    FinishReason.LENGTH if response.stop_reason == "max_tokens" else FinishReason.STOP
                ),
                usage=UsageStats(
                    prompt_tokens=response.usage.input_tokens,
                    completion_tokens=response.usage.output_tokens,
                    total_tokens=response.usage.input_tokens + response.usage.output_tokens,
                ),
            )
        except Exception as e:
            raise InvalidResponseError(f"Failed to parse Anthropic response: {e}") from e


def _retry_after(error: AnthropicRateLimitError) -> float | None:
    """Read the retry-after header of a rate-limit response, if present."""
    value = error.response.headers.get("retry-after")
    try:
        return float(value) if value is not None else None
    except ValueError:
        return None
