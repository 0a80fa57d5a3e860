"""Multi-agent coordination.

This module selects specialized agents for a complex request, plans an
ordered workflow for them, runs it, and synthesizes the results.

Architecture:
    AgentCoordinator
        |
        +-- analyzes required specializations (oracle)
        +-- AgentSelector picks one agent per specialization
        +-- WorkflowPlanner plans the steps (oracle, default fallback)
        +-- WorkflowExecutor runs the steps in order
        +-- ResponseSynthesizer merges the results (oracle)

Example usage:
    from agent_coordinator.clients import create_client
    from agent_coordinator.coordination import create_coordinator
    from agent_coordinator.inference import LLMInferenceService
    from agent_coordinator.models import ComplexAgentRequest

    inference = LLMInferenceService(create_client("anthropic"))
    coordinator = create_coordinator(inference)

    response = coordinator.coordinate_complex_task(
        ComplexAgentRequest("Generate a login endpoint", target_platforms=("web",))
    )
"""

from .coordinator import (
    AgentCoordinator,
    create_coordinator,
    create_coordinator_from_config,
    parse_specializations,
)
from .events import CoordinationEvent, CoordinationEvents
from .executor import WorkflowExecutor
from .planner import WorkflowPlanner
from .registry import AgentRegistry
from .selector import AgentSelector
from .synthesizer import ResponseSynthesizer
from .visualizer import WorkflowVisualizer
from .workflow import AgentWorkflow, CoordinatedResponse, ExecutionContext, WorkflowStep

__all__ = [
    # core classes
    "AgentCoordinator",
    "AgentRegistry",
    "AgentSelector",
    "ResponseSynthesizer",
    "WorkflowExecutor",
    "WorkflowPlanner",
    "WorkflowVisualizer",
    # workflow types
    "AgentWorkflow",
    "CoordinatedResponse",
    "ExecutionContext",
    "WorkflowStep",
    # events
    "CoordinationEvent",
    "CoordinationEvents",
    # factory functions
    "create_coordinator",
    "create_coordinator_from_config",
    "parse_specializations",
]
