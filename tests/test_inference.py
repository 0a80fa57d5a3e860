"""Tests for the inference oracle service."""

import logging
import time
from unittest.mock import patch

from agent_coordinator.exceptions import AuthenticationError, RateLimitError
from agent_coordinator.inference import (
    CompletionResult,
    InferenceService,
    LLMInferenceService,
    ask_oracle,
)
from agent_coordinator.types import FinishReason, MessageRole, UnifiedMessage, UnifiedResponse


class TestLLMInferenceService:
    """Tests for LLMInferenceService."""

    def test_success(self, mock_client, sample_response):
        """Test a completion returns stripped text."""
        mock_client.generate.return_value = sample_response
        service = LLMInferenceService(mock_client)

        result = service.complete("What is 1 + 2?", 0.3, 500)

        assert result.success
        assert result.text == "The result is 3."
        assert result.error is None

    def test_passes_sampling_overrides(self, mock_client, sample_response):
        """Test temperature and max_tokens are sent as per-call overrides."""
        mock_client.generate.return_value = sample_response
        LLMInferenceService(mock_client).complete("prompt", 0.4, 1500)

        messages = mock_client.generate.call_args.args[0]
        assert mock_client.generate.call_args.kwargs["overrides"] == {
            "temperature": 0.4,
            "max_tokens": 1500,
        }
        assert [m.role for m in messages] == [MessageRole.USER]
        assert messages[0].content == "prompt"

    def test_system_prompt(self, mock_client, sample_response):
        """Test a configured system prompt leads the conversation."""
        mock_client.generate.return_value = sample_response
        LLMInferenceService(mock_client, system_prompt="Be brief.").complete("prompt", 0.3, 100)

        messages = mock_client.generate.call_args.args[0]
        assert messages[0].role == MessageRole.SYSTEM
        assert messages[0].content == "Be brief."

    def test_client_error_becomes_failure(self, mock_client):
        """Test provider errors are reported, not raised."""
        mock_client.generate.side_effect = AuthenticationError("bad key")

        result = LLMInferenceService(mock_client).complete("prompt", 0.3, 100)

        assert not result.success
        assert result.error == "bad key"
        assert result.text == ""

    @patch("agent_coordinator.retry.time.sleep")
    def test_retries_rate_limits(self, _sleep, mock_client, sample_response):
        """Test rate limits are retried before giving up."""
        mock_client.generate.side_effect = [RateLimitError(), sample_response]

        result = LLMInferenceService(mock_client, max_retries=2).complete("prompt", 0.3, 100)

        assert result.success
        assert mock_client.generate.call_count == 2

    def test_empty_completion(self, mock_client):
        """Test a blank reply is a failure."""
        mock_client.generate.return_value = UnifiedResponse(
            message=UnifiedMessage(role=MessageRole.ASSISTANT, content="   "),
            finish_reason=FinishReason.STOP,
        )

        result = LLMInferenceService(mock_client).complete("prompt", 0.3, 100)

        assert not result.success
        assert result.error == "Empty completion"

    def test_truncated_completion_warns(self, mock_client, caplog):
        """Test a reply cut off at the token limit is kept but logged."""
        mock_client.generate.return_value = UnifiedResponse(
            message=UnifiedMessage(role=MessageRole.ASSISTANT, content="Security: sec"),
            finish_reason=FinishReason.LENGTH,
        )

        with caplog.at_level(logging.WARNING, logger="agent_coordinator"):
            result = LLMInferenceService(mock_client).complete("prompt", 0.3, 100)

        assert result.success
        assert "hit the 100 token limit" in caplog.text

    def test_timeout(self, mock_client, sample_response):
        """Test a slow provider call becomes a failed result."""
        def slow(*args, **kwargs):
            time.sleep(0.5)
            return sample_response

        mock_client.generate.side_effect = slow

        result = LLMInferenceService(mock_client, timeout=0.05).complete("prompt", 0.3, 100)

        assert not result.success
        assert "timed out" in result.error


class TestAskOracle:
    """Tests for ask_oracle."""

    def test_returns_completion(self, scripted_inference):
        """Test the service's result is passed through."""
        oracle = scripted_inference(default="fine")
        assert ask_oracle(oracle, "prompt", 0.3, 100) == CompletionResult.ok("fine")
        assert oracle.calls == [("prompt", 0.3, 100)]

    def test_raising_service(self):
        """Test a service that raises is turned into a failure."""
        class Broken(InferenceService):
            def complete(self, prompt, temperature, max_tokens):
                raise RuntimeError("broken")

        result = ask_oracle(Broken(), "prompt", 0.3, 100)

        assert not result.success
        assert result.error == "RuntimeError: broken"

    def test_timeout(self):
        """Test a slow service is cut off by the oracle deadline."""
        class Slow(InferenceService):
            def complete(self, prompt, temperature, max_tokens):
                time.sleep(0.5)
                return CompletionResult.ok("late")

        result = ask_oracle(Slow(), "prompt", 0.3, 100, timeout=0.05, operation="synthesis")

        assert not result.success
        assert "synthesis" in result.error
