"""OpenAI client implementation.

This client talks to the OpenAI chat completions API, or to any gateway that
serves the same API when ``base_url`` (or OPENAI_BASE_URL) is set.
"""

import os
from contextlib import contextmanager
from typing import Any

from openai import APIConnectionError, OpenAI
from openai import AuthenticationError as OpenAIAuthError
from openai import NotFoundError as OpenAINotFoundError
from openai import RateLimitError as OpenAIRateLimitError

from ..exceptions import (
    AuthenticationError,
    ModelNotFoundError,
    ProviderUnavailableError,
    RateLimitError,
)
from .openai_compat import OpenAICompatibleClient


class OpenAIClient(OpenAICompatibleClient):
    """OpenAI API client with unified response handling.

    ``seed`` is passed through when configured so that planning prompts can
    be sampled reproducibly.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o",
        client_config: dict | None = None,
        base_url: str | None = None,
    ):
        """Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key. Defaults to OPENAI_API_KEY env var.
            model: Model to use. Defaults to gpt-4o.
            client_config: Optional dictionary of configuration parameters.
            base_url: Optional API root for OpenAI-compatible gateways.
        """
        self.base_url = base_url or os.environ.get("OPENAI_BASE_URL")
        super().__init__(api_key, model, client_config)

    def _create_client(self, api_key: str | None) -> OpenAI:
        """Create the OpenAI SDK client."""
        return OpenAI(
            api_key=api_key or os.environ.get("OPENAI_API_KEY"),
            base_url=self.base_url,
        )

    def _get_supported_config_keys(self) -> set[str]:
        """Return config keys supported by OpenAI."""
        return {
            "temperature",
            "top_p",
            "max_tokens",
            "stop",
            "seed",
            "presence_penalty",
            "frequency_penalty",
        }

    def _get_default_api_args(self) -> dict[str, Any]:
        """Return default API arguments for OpenAI."""
        return {}  # OpenAI uses API defaults

    def _prepare_api_args(self, api_args: dict[str, Any]) -> dict[str, Any]:
        """Send the token limit as ``max_completion_tokens`` on the OpenAI API.

        Reasoning models reject ``max_tokens``. Gateways behind ``base_url``
        keep the classic name, which they are more likely to understand.
        """
        if self.base_url is None and "max_tokens" in api_args:
            api_args = dict(api_args)
            api_args["max_completion_tokens"] = api_args.pop("max_tokens")
        return api_args

    @contextmanager
    def _handle_api_errors(self):
        """Handle OpenAI-specific errors."""
        try:
            yield
        except OpenAIAuthError as e:
            raise AuthenticationError(f"OpenAI authentication failed: {e}") from e
        except OpenAIRateLimitError as e:
            raise RateLimitError("OpenAI rate limit exceeded") from e
        except OpenAINotFoundError as e:
            raise ModelNotFoundError(self.model) from e
        except APIConnectionError as e:
            raise ProviderUnavailableError(f"OpenAI API unavailable: {e}") from e
