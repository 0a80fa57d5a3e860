"""Prompts the coordinator sends to the inference oracle.

One prompt per coordination phase: specialization analysis, workflow
structure, workflow optimization and final synthesis.
"""

from typing import TYPE_CHECKING, Iterable

from ..models import AgentResponse, AgentSpecialization, ComplexAgentRequest

if TYPE_CHECKING:
    from ..agents.base import SpecializedAgent
    from .workflow import AgentWorkflow

SPECIALIZATION_HINTS = {
    AgentSpecialization.PERFORMANCE_OPTIMIZATION: "For performance-critical code",
    AgentSpecialization.SECURITY_ANALYSIS: "For security-sensitive applications",
    AgentSpecialization.PLATFORM_SPECIFIC: "For platform-specific optimizations",
    AgentSpecialization.ARCHITECTURAL_DESIGN: "For complex system design",
    AgentSpecialization.TEST_GENERATION: "For comprehensive testing",
    AgentSpecialization.DOCUMENTATION_GENERATION: "For detailed documentation",
    AgentSpecialization.CODE_QUALITY: "For code quality improvements",
    AgentSpecialization.DATABASE_DESIGN: "For database-related code",
    AgentSpecialization.NETWORKING_OPTIMIZATION: "For network-related code",
    AgentSpecialization.UIUX_GENERATION: "For user interface code",
    AgentSpecialization.GAME_DEVELOPMENT: "For game-specific code",
    AgentSpecialization.WEB_DEVELOPMENT: "For web applications",
    AgentSpecialization.MOBILE_DEVELOPMENT: "For mobile applications",
    AgentSpecialization.DEVOPS_INTEGRATION: "For deployment and operations",
}


ANALYSIS_PROMPT = """Analyze this complex code generation request and identify the required agent specializations:

{request_summary}
Quality Requirements: {quality}

Identify which of these specializations are needed:
{specializations}

Return only the specializations that are clearly needed, separated by commas."""


STRUCTURE_PROMPT = """Analyze this complex request and create an optimal workflow structure:

{request_summary}

Available Agents:
{agents}

Create a workflow that:
1. Determines the optimal order of agent execution
2. Identifies which steps require coordination
3. Minimizes dependencies and bottlenecks
4. Ensures all requirements are addressed

Answer with one step per line, in execution order, formatted as:
StepName: AgentId
For a step whose agent must work with other agents, list them after an arrow:
StepName: AgentId <- CollaboratorId, CollaboratorId

Alternatively answer with JSON only:
{{"steps": [{{"name": "...", "agent_id": "...", "requires_coordination": false, "collaborators": []}}]}}"""


OPTIMIZATION_PROMPT = """Analyze and optimize this agent workflow for better performance and efficiency:

Workflow: {name}
Steps: {count}

Current Steps:
{steps}

Suggest a better execution order considering:
1. Step ordering and dependencies
2. Coordination requirements
3. Error handling and fallbacks

Answer with JSON only, listing every step name in the recommended order:
{{"order": ["StepName", "..."]}}"""


SYNTHESIS_PROMPT = """Synthesize the following coordinated agent responses into a final, cohesive result:

Original Request: {description}
Target Platforms: {platforms}

Agent Responses:
{responses}

Create a final, integrated solution that:
1. Combines the best aspects of each agent's contribution
2. Ensures consistency across all components
3. Addresses all requirements from the original request
4. Maintains high code quality and performance
5. Includes proper error handling and validation

Provide the complete, production-ready solution."""


def _request_summary(request: ComplexAgentRequest) -> str:
    perf = request.performance_requirements
    security = request.security_requirements
    return (
        f"Description: {request.description}\n"
        f"Target Platforms: {', '.join(request.target_platforms)}\n"
        f"Performance Requirements: {perf.primary_target.value if perf else ''}\n"
        f"Security Requirements: {security.level.value if security else ''}"
    )


def format_analysis_prompt(request: ComplexAgentRequest) -> str:
    quality = request.quality_requirements
    specializations = "\n".join(
        f"- {spec.value}: {hint}" for spec, hint in SPECIALIZATION_HINTS.items()
    )
    return ANALYSIS_PROMPT.format(
        request_summary=_request_summary(request),
        quality=quality.minimum_code_quality if quality else "",
        specializations=specializations,
    )


def format_structure_prompt(
    agents: Iterable["SpecializedAgent"],
    request: ComplexAgentRequest,
) -> str:
    agent_lines = "\n".join(
        f"- {agent.agent_id}: {', '.join(agent.specialization_names())}" for agent in agents
    )
    return STRUCTURE_PROMPT.format(request_summary=_request_summary(request), agents=agent_lines)


def format_optimization_prompt(workflow: "AgentWorkflow") -> str:
    step_lines = "\n".join(
        f"- {step.name}: {step.assigned_agent.agent_id} "
        f"(Coordination: {step.requires_coordination})"
        for step in workflow.steps
    )
    return OPTIMIZATION_PROMPT.format(
        name=workflow.name,
        count=len(workflow.steps),
        steps=step_lines,
    )


def format_synthesis_prompt(
    responses: dict[str, AgentResponse],
    request: ComplexAgentRequest,
) -> str:
    sections = "\n".join(
        f"\n{name}:\n{response.result}"
        for name, response in responses.items()
        if response.success and response.has_result
    )
    return SYNTHESIS_PROMPT.format(
        description=request.description,
        platforms=", ".join(request.target_platforms),
        responses=sections,
    )
