"""Together AI client implementation.

Together serves open-weight models behind an OpenAI-compatible chat API, so
the request and response handling is shared with the OpenAI client. Only SDK
construction, accepted sampling keys and error mapping differ.
"""

import os
from contextlib import contextmanager
from typing import Any

from together import Together
from together.error import APIConnectionError as TogetherConnectionError
from together.error import AuthenticationError as TogetherAuthError
from together.error import RateLimitError as TogetherRateLimitError
from together.error import ServiceUnavailableError as TogetherServiceUnavailableError
from together.error import Timeout as TogetherTimeout

from ..exceptions import (
    AuthenticationError,
    ProviderUnavailableError,
    RateLimitError,
)
from .openai_compat import OpenAICompatibleClient

# oracle prompts pass their own max_tokens; this only caps direct generate() calls
DEFAULT_MAX_TOKENS = 2048


class TogetherClient(OpenAICompatibleClient):
    """Together AI client (Llama, Mistral, Qwen and other hosted models)."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "meta-llama/Meta-Llama-3.1-70B-Instruct-Turbo",
        client_config: dict | None = None,
        base_url: str | None = None,
    ):
        """Initialize the Together client.

        Args:
            api_key: Together API key. Defaults to TOGETHER_API_KEY env var.
            model: Model to use. Defaults to Llama 3.1 70B.
            client_config: Optional dictionary of configuration parameters.
            base_url: Optional API root, e.g. a dedicated endpoint.
        """
        self.base_url = base_url or os.environ.get("TOGETHER_BASE_URL")
        super().__init__(api_key, model, client_config)

    def _create_client(self, api_key: str | None) -> Together:
        return Together(
            api_key=api_key or os.environ.get("TOGETHER_API_KEY"),
            base_url=self.base_url,
        )

    def _get_supported_config_keys(self) -> set[str]:
        return {
            "temperature",
            "top_p",
            "top_k",
            "repetition_penalty",
            "max_tokens",
            "stop",
            "seed",
        }

    def _get_default_api_args(self) -> dict[str, Any]:
        return {"max_tokens": DEFAULT_MAX_TOKENS}

    @contextmanager
    def _handle_api_errors(self):
        """Map Together SDK errors onto the client error hierarchy."""
        try:
            yield
        except TogetherAuthError as e:
            raise AuthenticationError(f"Together authentication failed: {e}") from e
        except TogetherRateLimitError as e:
            raise RateLimitError("Together rate limit exceeded") from e
        except (TogetherConnectionError, TogetherTimeout, TogetherServiceUnavailableError) as e:
            raise ProviderUnavailableError(f"Together API unavailable: {e}") from e
