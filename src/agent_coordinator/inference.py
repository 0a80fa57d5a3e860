"""Inference oracle used for analysis, planning and synthesis.

The coordinator never talks to a provider SDK directly. It asks an
InferenceService for a completion and receives a CompletionResult that is
either successful text or a failure description; provider errors are
reported, never raised.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .cancellation import call_with_timeout
from .clients.base import BaseLLMClient
from .exceptions import ClientError, StepTimeoutError
from .logging import get_logger
from .retry import with_retry
from .types import FinishReason, MessageRole, UnifiedMessage

logger = get_logger(__name__)


@dataclass
class CompletionResult:
    """Outcome of a single oracle call.

    Attributes:
        success: Whether the oracle produced a reply
        text: The reply text (empty on failure)
        error: Failure description when success is False
    """
    success: bool
    text: str = ""
    error: str | None = None

    @classmethod
    def ok(cls, text: str) -> "CompletionResult":
        return cls(success=True, text=text)

    @classmethod
    def failed(cls, error: str) -> "CompletionResult":
        return cls(success=False, error=error)


class InferenceService(ABC):
    """Text-completion oracle contract."""

    @abstractmethod
    def complete(self, prompt: str, temperature: float, max_tokens: int) -> CompletionResult:
        """Complete a prompt.

        Implementations must not raise for provider failures; they return a
        CompletionResult with success=False instead.
        """


class LLMInferenceService(InferenceService):
    """InferenceService backed by any BaseLLMClient.

    Transient provider errors (rate limits, outages) are retried with
    exponential backoff. Remaining client errors and timeouts become failed
    results.
    """

    def __init__(
        self,
        client: BaseLLMClient,
        max_retries: int = 2,
        timeout: float | None = None,
        retry_initial_delay: float = 1.0,
        system_prompt: str | None = None,
    ):
        """Initialize the service.

        Args:
            client: The LLM client that serves completions.
            max_retries: Retries for rate-limit and availability errors.
            timeout: Seconds a single completion may take, or None.
            retry_initial_delay: First backoff delay in seconds.
            system_prompt: Optional system message sent with every prompt.
        """
        self.client = client
        self.max_retries = max_retries
        self.timeout = timeout
        self.retry_initial_delay = retry_initial_delay
        self.system_prompt = system_prompt

    def complete(self, prompt: str, temperature: float, max_tokens: int) -> CompletionResult:
        messages = []
        if self.system_prompt:
            messages.append(UnifiedMessage(role=MessageRole.SYSTEM, content=self.system_prompt))
        messages.append(UnifiedMessage(role=MessageRole.USER, content=prompt))
        overrides = {"temperature": temperature, "max_tokens": max_tokens}

        @with_retry(max_retries=self.max_retries, initial_delay=self.retry_initial_delay)
        def _generate():
            return call_with_timeout(
                lambda: self.client.generate(messages, overrides=overrides),
                self.timeout,
                operation="inference",
            )

        try:
            response = _generate()
        except (ClientError, StepTimeoutError) as e:
            logger.warning(f"inference failed: {e}")
            return CompletionResult.failed(str(e))

        if response.finish_reason == FinishReason.LENGTH:
            logger.warning(f"completion hit the {max_tokens} token limit and may be truncated")

        text = response.text.strip()
        if not text:
            return CompletionResult.failed("Empty completion")
        return CompletionResult.ok(text)


def ask_oracle(
    inference: InferenceService,
    prompt: str,
    temperature: float,
    max_tokens: int,
    timeout: float | None = None,
    operation: str = "inference",
) -> CompletionResult:
    """Call an inference service with an optional deadline.

    A timeout, or an exception from a service that broke its no-raise
    contract, is returned as a failed CompletionResult.
    """
    try:
        return call_with_timeout(
            lambda: inference.complete(prompt, temperature, max_tokens),
            timeout,
            operation=operation,
        )
    except StepTimeoutError as e:
        logger.warning(str(e))
        return CompletionResult.failed(str(e))
    except Exception as e:
        logger.exception(f"{operation} raised instead of reporting failure")
        return CompletionResult.failed(f"{type(e).__name__}: {e}")
