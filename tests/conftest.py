"""Shared test fixtures and configuration."""

import os
import time
from unittest.mock import MagicMock, patch

import pytest

from agent_coordinator.agents.base import SpecializedAgent
from agent_coordinator.clients.base import BaseLLMClient
from agent_coordinator.config import Settings
from agent_coordinator.coordination.events import CoordinationEvents
from agent_coordinator.inference import CompletionResult, InferenceService
from agent_coordinator.models import (
    AgentResponse,
    AgentSpecialization,
    CapabilityAssessment,
    ComplexAgentRequest,
)
from agent_coordinator.types import (
    FinishReason,
    MessageRole,
    UnifiedMessage,
    UnifiedResponse,
    UsageStats,
)

# phrases that identify each coordinator prompt
PHASE_MARKERS = {
    "analysis": "identify the required agent specializations",
    "structure": "create an optimal workflow structure",
    "optimization": "optimize this agent workflow",
    "synthesis": "Synthesize the following coordinated agent responses",
}


class ScriptedInference(InferenceService):
    """Inference oracle that answers from a script instead of a model.

    ``replies`` maps a phase name (see PHASE_MARKERS) or any prompt substring
    to the reply text; a reply of None makes that call fail.
    """

    def __init__(self, replies=None, default="I cannot answer that."):
        self.replies = dict(replies or {})
        self.default = default
        self.calls = []

    def complete(self, prompt, temperature, max_tokens):
        self.calls.append((prompt, temperature, max_tokens))
        for key, reply in self.replies.items():
            if PHASE_MARKERS.get(key, key) in prompt:
                if reply is None:
                    return CompletionResult.failed("oracle unavailable")
                return CompletionResult.ok(reply)
        return CompletionResult.ok(self.default)

    def prompts_for(self, phase):
        marker = PHASE_MARKERS.get(phase, phase)
        return [prompt for prompt, _, _ in self.calls if marker in prompt]


class StubAgent(SpecializedAgent):
    """Agent with scripted assessments and responses."""

    def __init__(
        self,
        agent_id,
        specializations,
        score=0.8,
        can_handle=True,
        result=None,
        confidence=0.9,
        success=True,
        error=None,
        failures=(),
        terminate=False,
        shared=None,
        delay=0.0,
        assess_error=None,
        on_process=None,
    ):
        super().__init__(agent_id, specializations)
        self.score = score
        self.can_handle = can_handle
        self.result = result if result is not None else f"{agent_id} output"
        self.confidence = confidence
        self.success = success
        self.error = error
        self.failures = list(failures)
        self.terminate = terminate
        self.shared = shared
        self.delay = delay
        self.assess_error = assess_error
        self.on_process = on_process
        self.requests = []
        self.assessed = []
        self.coordinated_with = []

    def assess_capability(self, request):
        self.assessed.append(request)
        if self.assess_error is not None:
            raise self.assess_error
        return CapabilityAssessment(
            can_handle_request=self.can_handle,
            capability_score=self.score,
        )

    def process(self, request):
        self.requests.append(request)
        if self.on_process is not None:
            self.on_process()
        if self.delay:
            time.sleep(self.delay)
        if self.failures:
            raise self.failures.pop(0)
        if self.error is not None:
            raise self.error
        if not self.success:
            return AgentResponse.failure(f"{self.agent_id} failed")
        metadata = {"shared_results": dict(self.shared)} if self.shared else {}
        return AgentResponse(
            result=self.result,
            confidence=self.confidence,
            metadata=metadata,
            should_terminate_workflow=self.terminate,
        )

    def coordinate(self, request, collaborators):
        self.coordinated_with.append([c.agent_id for c in collaborators])
        return self.process(request)


@pytest.fixture
def mock_client():
    """Create a mock LLM client."""
    client = MagicMock(spec=BaseLLMClient)
    return client


@pytest.fixture
def sample_messages():
    """Create sample conversation messages."""
    return [
        UnifiedMessage(role=MessageRole.SYSTEM, content="You are a helpful assistant."),
        UnifiedMessage(role=MessageRole.USER, content="Hello!"),
        UnifiedMessage(role=MessageRole.ASSISTANT, content="Hi there!"),
    ]


@pytest.fixture
def sample_response():
    """Create a sample unified response."""
    return UnifiedResponse(
        message=UnifiedMessage(
            role=MessageRole.ASSISTANT,
            content="  The result is 3.  ",
        ),
        finish_reason=FinishReason.STOP,
        usage=UsageStats(
            prompt_tokens=10,
            completion_tokens=5,
            total_tokens=15,
        ),
    )


@pytest.fixture
def make_settings():
    """Build Settings isolated from the environment and any .env file."""
    def _make(**overrides):
        overrides.setdefault("retry_initial_delay", 0.0)
        with patch.dict(os.environ, {}, clear=True):
            return Settings(_env_file=None, **overrides)
    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def scripted_inference():
    """Factory for ScriptedInference oracles."""
    return ScriptedInference


@pytest.fixture
def stub_agent():
    """Factory for StubAgent instances."""
    return StubAgent


@pytest.fixture
def recorded_events():
    """Event emitter plus the list of (event, fields) it delivered."""
    events = CoordinationEvents()
    received = []
    events.subscribe(lambda event, fields: received.append((event, fields)))
    return events, received


@pytest.fixture
def login_request():
    return ComplexAgentRequest("Generate a login endpoint", target_platforms=("web",))


@pytest.fixture
def security_and_quality(stub_agent):
    """One security agent and one code quality agent."""
    return [
        stub_agent("security", [AgentSpecialization.SECURITY_ANALYSIS]),
        stub_agent("quality", [AgentSpecialization.CODE_QUALITY]),
    ]
