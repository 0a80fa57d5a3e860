"""Custom exception hierarchy for the agent coordinator.

This module defines all custom exceptions used throughout the package,
organized into logical categories: client errors and coordination errors.
"""


class AgentError(Exception):
    """Base exception for all agent coordinator errors."""


# =============================================================================
# Client Errors - Issues with LLM API interactions
# =============================================================================

class ClientError(AgentError):
    """Base class for LLM client errors."""


class AuthenticationError(ClientError):
    """API key is invalid or missing."""


class RateLimitError(ClientError):
    """Rate limit exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: float | None = None):
        self.retry_after = retry_after
        if retry_after:
            message = f"{message}. Retry after: {retry_after}s"
        super().__init__(message)


class ModelNotFoundError(ClientError):
    """Requested model does not exist."""

    def __init__(self, model_name: str):
        self.model_name = model_name
        super().__init__(f"Model not found: {model_name}")


class ProviderUnavailableError(ClientError):
    """Provider API is temporarily unavailable."""


class InvalidResponseError(ClientError):
    """Response from provider could not be parsed."""


# =============================================================================
# Coordination Errors - Issues while planning or running a workflow
# =============================================================================

class CoordinationError(AgentError):
    """Base class for coordination errors."""


class StepTimeoutError(CoordinationError):
    """An agent or oracle call did not finish before its deadline."""

    def __init__(self, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"'{operation}' timed out after {timeout}s")


class CoordinationCancelled(CoordinationError):
    """Raised when a coordination call is cancelled by its caller.

    This is a control flow mechanism, not an error. The coordinator catches
    it and returns a cancelled AgentResponse.
    """

    def __init__(self, message: str = "Coordination cancelled"):
        super().__init__(message)


class AgentRegistrationError(CoordinationError):
    """An agent could not be added to the registry."""

    def __init__(self, agent_id: str, reason: str):
        self.agent_id = agent_id
        self.reason = reason
        super().__init__(f"Cannot register agent '{agent_id}': {reason}")
