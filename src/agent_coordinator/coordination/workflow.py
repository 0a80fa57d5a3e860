"""Workflow types: planned steps, execution context and collected results."""

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from ..agents.base import SpecializedAgent
from ..models import AgentRequest, AgentResponse


@dataclass(frozen=True)
class WorkflowStep:
    """One unit of work in a workflow.

    Attributes:
        name: Step name, unique within its workflow
        assigned_agent: Agent that runs the step
        request: The step's base request
        requires_coordination: Run the agent with its collaborators
        collaborators: Agents the assigned agent coordinates with
    """
    name: str
    assigned_agent: SpecializedAgent
    request: AgentRequest
    requires_coordination: bool = False
    collaborators: tuple[SpecializedAgent, ...] = ()


@dataclass(frozen=True)
class AgentWorkflow:
    """An ordered plan of steps for a single complex request.

    Workflows are values: optimization produces a new workflow via
    ``with_steps`` instead of mutating this one.
    """
    workflow_id: str
    name: str
    steps: tuple[WorkflowStep, ...] = ()
    context: Mapping[str, Any] = field(default_factory=dict)

    def with_steps(self, steps: Iterable[WorkflowStep]) -> "AgentWorkflow":
        return replace(self, steps=tuple(steps))

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)


@dataclass
class ExecutionContext:
    """Results shared across the steps of one workflow run."""
    shared_results: dict[str, Any] = field(default_factory=dict)
    completed_steps: list[str] = field(default_factory=list)

    def update_from_response(self, step_name: str, response: AgentResponse) -> None:
        """Record a finished step and merge any results it shares.

        A successful response may publish a ``shared_results`` mapping in its
        metadata; later steps overwrite keys set by earlier ones.
        """
        self.completed_steps.append(step_name)
        if not response.success:
            return
        shared = response.metadata.get("shared_results")
        if isinstance(shared, Mapping):
            self.shared_results.update(shared)


@dataclass
class CoordinatedResponse:
    """Step responses collected while executing one workflow.

    Attributes:
        responses: Step name to response, in execution order
        execution_context: Shared results accumulated across steps
        terminated_early: A step asked to stop the workflow
        terminated_at: Name of the step that stopped it
        cancelled: The run was cancelled before finishing
    """
    responses: dict[str, AgentResponse] = field(default_factory=dict)
    execution_context: ExecutionContext = field(default_factory=ExecutionContext)
    terminated_early: bool = False
    terminated_at: str | None = None
    cancelled: bool = False

    @property
    def successful_responses(self) -> dict[str, AgentResponse]:
        return {name: r for name, r in self.responses.items() if r.success}

    @property
    def step_names(self) -> list[str]:
        return list(self.responses)
