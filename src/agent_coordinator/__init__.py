"""Agent Coordinator - multi-agent coordination for complex code generation.

This package selects specialized agents for a complex request, plans an
ordered workflow for them, runs it step by step, and synthesizes a final
answer through a provider-agnostic inference oracle.
"""

from .agents import LLMSpecializedAgent, SpecializedAgent, create_default_agents
from .cancellation import CancellationToken
from .coordination import (
    AgentCoordinator,
    AgentRegistry,
    AgentWorkflow,
    CoordinatedResponse,
    CoordinationEvent,
    CoordinationEvents,
    WorkflowStep,
    create_coordinator,
    create_coordinator_from_config,
)
from .exceptions import (
    AgentError,
    ClientError,
    CoordinationCancelled,
    CoordinationError,
    StepTimeoutError,
)
from .inference import CompletionResult, InferenceService, LLMInferenceService
from .models import (
    AgentRequest,
    AgentResponse,
    AgentSpecialization,
    CapabilityAssessment,
    ComplexAgentRequest,
    OptimizationTarget,
    PerformanceLevel,
    PerformanceProfile,
    PerformanceRequirements,
    QualityRequirements,
    SecurityLevel,
    SecurityRequirements,
)

__all__ = [
    # main coordinator
    "AgentCoordinator",
    "AgentRegistry",
    "CancellationToken",
    "create_coordinator",
    "create_coordinator_from_config",
    # agents
    "SpecializedAgent",
    "LLMSpecializedAgent",
    "create_default_agents",
    # inference
    "CompletionResult",
    "InferenceService",
    "LLMInferenceService",
    # types
    "AgentRequest",
    "AgentResponse",
    "AgentSpecialization",
    "AgentWorkflow",
    "CapabilityAssessment",
    "ComplexAgentRequest",
    "CoordinatedResponse",
    "CoordinationEvent",
    "CoordinationEvents",
    "OptimizationTarget",
    "PerformanceLevel",
    "PerformanceProfile",
    "PerformanceRequirements",
    "QualityRequirements",
    "SecurityLevel",
    "SecurityRequirements",
    "WorkflowStep",
    # exceptions
    "AgentError",
    "ClientError",
    "CoordinationCancelled",
    "CoordinationError",
    "StepTimeoutError",
]
