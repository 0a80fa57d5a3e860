"""Google Gemini client implementation using the google-genai SDK.

This client handles communication with the Google Gemini API and normalizes
responses to the unified format.

Google Gemini has unique requirements:
- Uses "parts" format for message content
- System instruction is a separate parameter
- Role names: "user" and "model" (not "assistant")
- Thinking is configured with thinking_budget and include_thoughts, and
  thinking tokens count against max_output_tokens
"""

import os
from contextlib import contextmanager
from typing import Any

from google import genai
from google.genai import types
from google.genai.errors import APIError, ServerError

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

# supported configuration keys for google
SUPPORTED_CONFIG_KEYS = {
    "temperature",
    "top_p",
    "top_k",
    "max_tokens",
    "stop_sequences",
    # thinking features
    "thinking_budget",
    "include_thoughts",
}

DEFAULT_MAX_TOKENS = 4096


class GoogleClient(BaseLLMClient):
    """Google Gemini API client using the google-genai SDK.

    Supports:
    - Thinking/reasoning with thinking_budget configuration
    - Generation parameters: temperature, top_p, top_k, max_tokens
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-2.0-flash",
        client_config: dict | None = None,
    ):
        """Initialize the Google client.

        Args:
            api_key: Google API key. Defaults to GOOGLE_API_KEY or GEMINI_API_KEY env var.
            model: Model to use. Defaults to gemini-2.0-flash.
            client_config: Optional configuration parameters:
                - temperature, top_p, top_k, max_tokens (default 4096)
                - stop_sequences: list[str]
                - thinking_budget: int
                - include_thoughts: bool (return thought summaries)
        """
        super().__init__(client_config)

        resolved_key = api_key or os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY")
        if not resolved_key:
            raise ValueError("Google API key not found. Set GOOGLE_API_KEY or GEMINI_API_KEY env var.")

        self.client = genai.Client(api_key=resolved_key)
        self.model_name = model

        unsupported = set(self.client_config.keys()) - SUPPORTED_CONFIG_KEYS
        if unsupported:
            raise ValueError(f"Unsupported config keys for Google: {unsupported}")

    def generate(
        self,
        messages: list[UnifiedMessage],
        overrides: dict[str, Any] | None = None,
    ) -> UnifiedResponse:
        """Generate a completion from Google Gemini.

        Raises:
            AuthenticationError: If API key is invalid
            RateLimitError: If quota or rate limit is exhausted
            ModelNotFoundError: If the model does not exist
            ProviderUnavailableError: If API is unavailable
        """
        system_instruction, contents = self._convert_messages(messages)
        config = self._build_generation_config(self.resolve_config(overrides), system_instruction)

        with self._handle_api_errors():
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=config,
            )
        return self._parse_response(response)

    @contextmanager
    def _handle_api_errors(self):
        """Map google-genai errors onto the client error hierarchy by HTTP status."""
        try:
            yield
        except APIError as e:
            if e.code in (401, 403):
                raise AuthenticationError(f"Google authentication failed: {e}") from e
            if e.code == 404:
                raise ModelNotFoundError(self.model_name) from e
            if e.code == 429:
                # RESOURCE_EXHAUSTED arrives as a client error, not a server error
                raise RateLimitError("Google rate limit exceeded") from e
            if isinstance(e, ServerError):
                raise ProviderUnavailableError(f"Google API unavailable: {e}") from e
            raise InvalidResponseError(f"Invalid request to Google API: {e}") from e

    def _build_generation_config(
        self,
        cfg: dict[str, Any],
        system_instruction: str | None = None,
    ) -> types.GenerateContentConfig:
        """Build the generation config from the resolved configuration.

        ``max_tokens`` is the budget for the visible answer. Gemini counts
        thinking against ``max_output_tokens``, so a positive thinking budget
        is added on top.
        """
        thinking_budget = cfg.get("thinking_budget")
        max_output_tokens = cfg.get("max_tokens", DEFAULT_MAX_TOKENS)
        if thinking_budget and thinking_budget > 0:
            max_output_tokens += thinking_budget

        config_kwargs: dict[str, Any] = {"max_output_tokens": max_output_tokens}

        if system_instruction:
            config_kwargs["system_instruction"] = system_instruction

        for key in ("temperature", "top_p", "top_k", "stop_sequences"):
            if key in cfg:
                config_kwargs[key] = cfg[key]

        include_thoughts = cfg.get("include_thoughts", False)
        if thinking_budget is not None or include_thoughts:
            thinking_kwargs: dict[str, Any] = {}
            if thinking_budget is not None:
                thinking_kwargs["thinking_budget"] = thinking_budget
            if include_thoughts:
                thinking_kwargs["include_thoughts"] = include_thoughts
            config_kwargs["thinking_config"] = types.ThinkingConfig(**thinking_kwargs)

        return types.GenerateContentConfig(**config_kwargs)

    def _convert_messages(
        self, messages: list[UnifiedMessage]
    ) -> tuple[str | None, list[types.Content]]:
        """Convert unified messages to Gemini format."""
        system_instruction = None
        converted: list[types.Content] = []

        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                system_instruction = msg.content
                continue
            role = "model" if msg.role == MessageRole.ASSISTANT else "user"
            converted.append(types.Content(
                role=role,
                parts=[types.Part.from_text(text=msg.content or "")],
            ))

        return system_instruction, converted

    def _parse_response(self, response: Any) -> UnifiedResponse:
        """Parse Gemini response into unified format."""
        try:
            candidate = response.candidates[0]

            text_content = ""
            reasoning_content = ""
            for part in candidate.content.parts:
                if getattr(part, "thought", False):
                    reasoning_content += part.text or ""
                elif getattr(part, "text", None):
                    text_content += part.text

            finish_reason = FinishReason.STOP
            if candidate.finish_reason and "MAX_TOKENS" in str(candidate.finish_reason):
                finish_reason = FinishReason.LENGTH

            usage = None
            um = getattr(response, "usage_metadata", None)
            if um:
                usage = UsageStats(
                    prompt_tokens=getattr(um, "prompt_token_count", 0) or 0,
                    completion_tokens=getattr(um, "candidates_token_count", 0) or 0,
                    total_tokens=getattr(um, "total_token_count", 0) or 0,
                )

            return UnifiedResponse(
                message=UnifiedMessage(
                    role=MessageRole.ASSISTANT,
                    content=text_content or None,
                    reasoning_content=reasoning_content or None,
                ),
                finish_reason=finish_reason,
                usage=usage,
            )
        except Exception as e:
            raise InvalidResponseError(f"Failed to parse Google response: {e}") from e
