"""Workflow planning.

The planner asks the inference oracle to propose a workflow for the selected
agents, and falls back to a fixed ordering when the oracle fails or its
answer cannot be used.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from ..agents.base import SpecializedAgent
from ..config import Settings, get_settings
from ..inference import CompletionResult, InferenceService, ask_oracle
from ..models import (
    AgentRequest,
    AgentSpecialization,
    ComplexAgentRequest,
    PerformanceRequirements,
)
from .events import CoordinationEvent, CoordinationEvents
from .plan_parser import StructuralStep, parse_step_order, parse_workflow_plan
from .prompts import format_optimization_prompt, format_structure_prompt
from .workflow import AgentWorkflow, WorkflowStep


@dataclass(frozen=True)
class DefaultStep:
    """A step of the fallback plan and the specialization that staffs it."""
    name: str
    specialization: AgentSpecialization


# fallback ordering when the oracle's plan is unusable
DEFAULT_PLAN = (
    DefaultStep("SecurityAnalysis", AgentSpecialization.SECURITY_ANALYSIS),
    DefaultStep("PerformanceOptimization", AgentSpecialization.PERFORMANCE_OPTIMIZATION),
    DefaultStep("PlatformOptimization", AgentSpecialization.PLATFORM_SPECIFIC),
    DefaultStep("QualityAssurance", AgentSpecialization.CODE_QUALITY),
)

# step-name keywords, checked in order, and the specialization each implies
STEP_KEYWORDS = (
    ("security", AgentSpecialization.SECURITY_ANALYSIS),
    ("performance", AgentSpecialization.PERFORMANCE_OPTIMIZATION),
    ("platform", AgentSpecialization.PLATFORM_SPECIFIC),
    ("quality", AgentSpecialization.CODE_QUALITY),
    ("test", AgentSpecialization.TEST_GENERATION),
    ("documentation", AgentSpecialization.DOCUMENTATION_GENERATION),
)


def specialization_for_step(step_name: str) -> AgentSpecialization:
    """Infer a step's specialization from keywords in its name."""
    lowered = step_name.lower()
    for keyword, specialization in STEP_KEYWORDS:
        if keyword in lowered:
            return specialization
    return AgentSpecialization.NONE


def build_default_plan(agents: Sequence[SpecializedAgent]) -> list[StructuralStep]:
    """Build the fallback plan for a set of agents.

    Each default step is kept only if some agent has its specialization; the
    first such agent runs it. The performance step coordinates with the
    platform agent when there is one.
    """
    def first_with(specialization: AgentSpecialization) -> SpecializedAgent | None:
        return next((a for a in agents if a.has_specialization(specialization)), None)

    platform_agent = first_with(AgentSpecialization.PLATFORM_SPECIFIC)
    steps = []
    for default in DEFAULT_PLAN:
        agent = first_with(default.specialization)
        if agent is None:
            continue
        collaborators: tuple[str, ...] = ()
        if (
            default.specialization == AgentSpecialization.PERFORMANCE_OPTIMIZATION
            and platform_agent is not None
            and platform_agent is not agent
        ):
            collaborators = (platform_agent.agent_id,)
        steps.append(StructuralStep(
            name=default.name,
            agent_id=agent.agent_id,
            requires_coordination=bool(collaborators),
            collaborator_ids=collaborators,
        ))
    return steps


class WorkflowPlanner:
    """Turns selected agents and a complex request into an AgentWorkflow."""

    def __init__(
        self,
        inference: InferenceService,
        settings: Settings | None = None,
        events: CoordinationEvents | None = None,
    ):
        self.inference = inference
        self.settings = settings or get_settings()
        self.events = events or CoordinationEvents()

    def create_workflow(
        self,
        agents: Sequence[SpecializedAgent],
        request: ComplexAgentRequest,
    ) -> AgentWorkflow:
        """Plan a workflow for ``agents``.

        Oracle failures never propagate: an unusable plan falls back to the
        default ordering restricted to the agents' specializations.
        """
        agents = list(agents)
        agents_by_id = {agent.agent_id: agent for agent in agents}

        completion = self._ask_oracle(
            format_structure_prompt(agents, request),
            self.settings.structure_temperature,
            self.settings.structure_max_tokens,
        )

        structural: list[StructuralStep] = []
        if completion.success:
            structural = parse_workflow_plan(completion.text, agents_by_id.keys())

        plan_source = "oracle"
        if not structural:
            plan_source = "default"
            structural = build_default_plan(agents)
            self.events.emit(
                CoordinationEvent.PLANNING_FALLBACK,
                reason=completion.error if not completion.success else "unparseable_plan",
                steps=[s.name for s in structural],
            )

        workflow_id = str(uuid.uuid4())
        workflow = AgentWorkflow(
            workflow_id=workflow_id,
            name=f"Workflow-{workflow_id[:8]}",
            steps=tuple(self._materialize(s, agents_by_id, request) for s in structural),
            context={
                "original_request": request,
                "agent_count": len(agents),
                "created_at": datetime.now(timezone.utc),
                "plan_source": plan_source,
            },
        )
        self.events.emit(
            CoordinationEvent.WORKFLOW_CREATED,
            workflow_id=workflow.workflow_id,
            steps=workflow.step_names,
            plan_source=plan_source,
        )
        return workflow

    def optimize_workflow(self, workflow: AgentWorkflow) -> AgentWorkflow:
        """Reorder a workflow's steps as the oracle recommends.

        Only the order changes; steps are never added, dropped or reassigned.
        An oracle failure or a reply that is not a valid ordering returns
        ``workflow`` unchanged.
        """
        if len(workflow.steps) < 2:
            return workflow

        completion = self._ask_oracle(
            format_optimization_prompt(workflow),
            self.settings.optimization_temperature,
            self.settings.optimization_max_tokens,
        )
        if not completion.success:
            self.events.emit(
                CoordinationEvent.OPTIMIZATION_SKIPPED,
                workflow_id=workflow.workflow_id,
                reason=completion.error,
            )
            return workflow

        order = parse_step_order(completion.text, workflow.step_names)
        if order is None:
            self.events.emit(
                CoordinationEvent.OPTIMIZATION_SKIPPED,
                workflow_id=workflow.workflow_id,
                reason="invalid_order",
            )
            return workflow
        if order == workflow.step_names:
            return workflow

        steps_by_name = {step.name: step for step in workflow.steps}
        optimized = workflow.with_steps(steps_by_name[name] for name in order)
        self.events.emit(
            CoordinationEvent.WORKFLOW_OPTIMIZED,
            workflow_id=workflow.workflow_id,
            steps=optimized.step_names,
        )
        return optimized

    def _ask_oracle(self, prompt: str, temperature: float, max_tokens: int) -> CompletionResult:
        return ask_oracle(
            self.inference,
            prompt,
            temperature,
            max_tokens,
            timeout=self.settings.oracle_timeout,
            operation="workflow planning",
        )

    def _materialize(
        self,
        step: StructuralStep,
        agents_by_id: dict[str, SpecializedAgent],
        request: ComplexAgentRequest,
    ) -> WorkflowStep:
        base = request.to_agent_request()
        step_request = AgentRequest(
            input=f"{request.description}\n\nStep: {step.name}",
            context=base.context,
            performance_requirements=PerformanceRequirements.from_profile(
                request.performance_requirements
            ),
            required_specialization=specialization_for_step(step.name),
        )
        return WorkflowStep(
            name=step.name,
            assigned_agent=agents_by_id[step.agent_id],
            request=step_request,
            requires_coordination=step.requires_coordination,
            collaborators=tuple(agents_by_id[c] for c in step.collaborator_ids),
        )
