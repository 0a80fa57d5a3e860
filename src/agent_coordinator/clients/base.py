"""Base class for LLM clients.

All LLM provider clients inherit from BaseLLMClient and implement
the normalization methods to convert between provider-specific formats
and the unified types.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..types import UnifiedMessage, UnifiedResponse


class BaseLLMClient(ABC):
    """Abstract base class for all LLM clients.

    Each client is responsible for:
    1. Converting UnifiedMessage list to provider format
    2. Making API calls
    3. Converting responses back to UnifiedResponse

    The coordinator only interacts with unified types - all provider-specific
    handling is encapsulated within each client implementation.
    """

    def __init__(self, client_config: dict | None = None):
        """Initialize the client.

        Args:
            client_config: Optional dictionary of configuration parameters
                           (e.g. temperature, max_tokens, etc.)
        """
        self.client_config = client_config or {}

    @abstractmethod
    def generate(
        self,
        messages: list[UnifiedMessage],
        overrides: dict[str, Any] | None = None,
    ) -> UnifiedResponse:
        """Generate a completion from the LLM.

        Args:
            messages: Conversation in unified format
            overrides: Per-call config values (temperature, max_tokens) that
                take precedence over ``client_config``

        Returns:
            UnifiedResponse with the model's reply
        """

    @abstractmethod
    def _convert_messages(self, messages: list[UnifiedMessage]) -> Any:
        """Convert unified messages to provider-specific format.

        Each provider has different message formats:
        - OpenAI/Together: list of dicts with role/content
        - Anthropic: system separated from the message list
        - Google: parts-based contents with a separate system instruction

        Args:
            messages: List of UnifiedMessage objects

        Returns:
            Provider-specific message format
        """

    @abstractmethod
    def _parse_response(self, response: Any) -> UnifiedResponse:
        """Parse provider response into unified format.

        Args:
            response: Raw response from the provider API

        Returns:
            UnifiedResponse with normalized message and metadata
        """

    def resolve_config(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """Merge per-call overrides over the client's base configuration."""
        return {**self.client_config, **(overrides or {})}
