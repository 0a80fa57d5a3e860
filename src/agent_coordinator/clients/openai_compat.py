"""Base class for OpenAI-compatible API clients.

This class provides shared implementation for providers that use the
OpenAI-compatible chat completions format (OpenAI, Together, Groq, etc.).
"""

from abc import abstractmethod
from contextlib import contextmanager
from typing import Any

from ..exceptions import InvalidResponseError
from ..types import (
    FinishReason,
    MessageRole,
    UnifiedMessage,
    UnifiedResponse,
    UsageStats,
)
from .base import BaseLLMClient


class OpenAICompatibleClient(BaseLLMClient):
    """Base class for clients using OpenAI-compatible API format.

    Subclasses must implement:
    - _create_client(): initialize the provider SDK client
    - _get_supported_config_keys(): return set of supported config parameters
    - _get_default_api_args(): return provider-specific default arguments
    - _handle_api_errors(): context manager for exception mapping
    """

    def __init__(
        self,
        api_key: str | None,
        model: str,
        client_config: dict | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: API key for the provider
            model: Model name to use
            client_config: Optional configuration parameters
        """
        super().__init__(client_config)
        self.model = model
        self.client = self._create_client(api_key)

    @abstractmethod
    def _create_client(self, api_key: str | None) -> Any:
        """Create the provider's SDK client instance."""

    @abstractmethod
    def _get_supported_config_keys(self) -> set[str]:
        """Return the set of config keys supported by this provider."""

    @abstractmethod
    def _get_default_api_args(self) -> dict[str, Any]:
        """Return provider-specific default API arguments."""

    @abstractmethod
    @contextmanager
    def _handle_api_errors(self):
        """Context manager for handling provider-specific errors.

        Should catch provider exceptions and re-raise as our exceptions:
        - AuthenticationError
        - RateLimitError
        - ProviderUnavailableError
        """

    def _prepare_api_args(self, api_args: dict[str, Any]) -> dict[str, Any]:
        """Adjust the request arguments just before the call. Identity by default."""
        return api_args

    # ==================== shared implementations ====================

    def generate(
        self,
        messages: list[UnifiedMessage],
        overrides: dict[str, Any] | None = None,
    ) -> UnifiedResponse:
        """Generate a completion from the provider.

        Raises:
            AuthenticationError: If API key is invalid
            RateLimitError: If rate limit is exceeded
            ProviderUnavailableError: If API is unavailable
        """
        api_args = {
            "model": self.model,
            "messages": self._convert_messages(messages),
            **self._get_default_api_args(),
        }

        # apply config overrides for supported keys
        supported_keys = self._get_supported_config_keys()
        for key, value in self.resolve_config(overrides).items():
            if key in supported_keys:
                api_args[key] = value
        api_args = self._prepare_api_args(api_args)

        with self._handle_api_errors():
            response = self.client.chat.completions.create(**api_args)
            return self._parse_response(response)

    def _convert_messages(self, messages: list[UnifiedMessage]) -> list[dict[str, Any]]:
        """Convert unified messages to OpenAI-compatible format."""
        return [
            {"role": message.role.value, "content": message.content or ""}
            for message in messages
        ]

    def _map_finish_reason(self, reason: str | None) -> FinishReason:
        """Map OpenAI-compatible finish reason to unified FinishReason."""
        if reason == "length":
            return FinishReason.LENGTH
        return FinishReason.STOP

    def _parse_response(self, response: Any) -> UnifiedResponse:
        """Parse OpenAI-compatible response into unified format."""
        try:
            choice = response.choices[0]
            message = choice.message

            # check for reasoning field (primary) then reasoning_content (fallback)
            reasoning_content = getattr(message, "reasoning", None) or getattr(
                message, "reasoning_content", None
            )

            usage = None
            if response.usage:
                usage = UsageStats(
                    prompt_tokens=response.usage.prompt_tokens,
                    completion_tokens=response.usage.completion_tokens,
                    total_tokens=response.usage.total_tokens,
                )

            return UnifiedResponse(
                message=UnifiedMessage(
                    role=MessageRole.ASSISTANT,
                    content=message.content,
                    reasoning_content=reasoning_content,
                ),
                finish_reason=self._map_finish_reason(choice.finish_reason),
                usage=usage,
            )
        except Exception as e:
            raise InvalidResponseError(
                f"Failed to parse {self.__class__.__name__} response: {e}"
            ) from e
