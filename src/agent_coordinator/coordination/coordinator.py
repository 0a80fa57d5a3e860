"""Agent coordinator: the entry point for complex, multi-agent requests.

A coordination call runs five phases on the caller's thread:

    analyze required specializations   (oracle)
    select one agent per specialization
    plan a workflow                     (oracle, with a fixed fallback)
    execute the steps in order
    synthesize the step results         (oracle)

Failures are absorbed where they happen. Only a failed synthesis, a
cancellation, or an unexpected error reaches the caller, and always as an
AgentResponse rather than an exception.
"""

import re
import uuid
from pathlib import Path
from typing import Iterable, Sequence

from ..agents.base import SpecializedAgent
from ..agents.specialists import create_default_agents
from ..cancellation import CancellationToken
from ..clients.factory import create_client
from ..config import DEFAULT_CONFIG_PATH, Settings, get_settings, load_yaml_config
from ..exceptions import CoordinationCancelled
from ..inference import InferenceService, LLMInferenceService, ask_oracle
from ..logging import get_logger, run_context
from ..models import AgentResponse, AgentSpecialization, ComplexAgentRequest
from .events import CoordinationEvent, CoordinationEvents
from .executor import WorkflowExecutor
from .planner import WorkflowPlanner
from .prompts import format_analysis_prompt
from .registry import AgentRegistry
from .selector import AgentSelector
from .synthesizer import ResponseSynthesizer
from .workflow import AgentWorkflow

logger = get_logger(__name__)

# used when the oracle cannot say which specializations a request needs
DEFAULT_SPECIALIZATIONS = (
    AgentSpecialization.CODE_QUALITY,
    AgentSpecialization.PLATFORM_SPECIFIC,
)

_TOKEN_SEPARATORS = re.compile(r"[\n,]")
_TOKEN_TRAILER = re.compile(r":|\(| - ")


def parse_specializations(text: str) -> list[AgentSpecialization]:
    """Parse a comma or newline separated list of specialization names.

    Each token may carry a bullet and a trailing explanation such as
    "- SecurityAnalysis: handles passwords". Unknown names and NONE are
    dropped; the result keeps first-mention order without duplicates.
    """
    found: list[AgentSpecialization] = []
    for token in _TOKEN_SEPARATORS.split(text):
        token = token.strip()
        if not token:
            continue
        specialization = AgentSpecialization.parse(token)
        if specialization is None:
            specialization = AgentSpecialization.parse(_TOKEN_TRAILER.split(token, 1)[0])
        if specialization is None or specialization == AgentSpecialization.NONE:
            continue
        if specialization not in found:
            found.append(specialization)
    return found


class AgentCoordinator:
    """Coordinates specialized agents to answer one complex request."""

    def __init__(
        self,
        agents: Iterable[SpecializedAgent] | AgentRegistry,
        inference: InferenceService,
        settings: Settings | None = None,
        events: CoordinationEvents | None = None,
    ):
        """Initialize the coordinator.

        Args:
            agents: The agent pool, or a registry holding it.
            inference: Oracle used for analysis, planning and synthesis.
            settings: Coordinator settings. Defaults to get_settings().
            events: Event emitter shared by every coordination component.
        """
        self.registry = agents if isinstance(agents, AgentRegistry) else AgentRegistry(agents)
        self.inference = inference
        self.settings = settings or get_settings()
        self.events = events or CoordinationEvents()

        self.selector = AgentSelector(self.registry, self.events)
        self.planner = WorkflowPlanner(inference, self.settings, self.events)
        self.executor = WorkflowExecutor(self.settings, self.events)
        self.synthesizer = ResponseSynthesizer(inference, self.settings, self.events)

    def coordinate_complex_task(
        self,
        request: ComplexAgentRequest,
        cancellation: CancellationToken | None = None,
    ) -> AgentResponse:
        """Coordinate agents to answer ``request``.

        Args:
            request: The complex request.
            cancellation: Optional token checked before each phase and
                between workflow steps.

        Returns:
            The synthesized response. On synthesis failure, cancellation or
            an unexpected error, a failed response with zero confidence.
        """
        with run_context(uuid.uuid4().hex[:8]) as run_id:
            response = self._run(request, cancellation or CancellationToken(), run_id)
        response.metadata["run_id"] = run_id
        return response

    def _run(
        self,
        request: ComplexAgentRequest,
        token: CancellationToken,
        run_id: str,
    ) -> AgentResponse:
        self.events.emit(
            CoordinationEvent.COORDINATION_STARTED,
            run_id=run_id,
            description=request.description,
            platforms=list(request.target_platforms),
        )

        try:
            token.raise_if_cancelled()
            specializations = self.analyze_required_specializations(request)

            token.raise_if_cancelled()
            agents = self.select_optimal_agents(specializations, request)

            token.raise_if_cancelled()
            workflow = self.create_workflow(agents, request)
            if self.settings.optimize_workflows:
                token.raise_if_cancelled()
                workflow = self.optimize_workflow(workflow)

            token.raise_if_cancelled()
            results = self.executor.execute(workflow, token)
            if results.cancelled:
                raise CoordinationCancelled()

            token.raise_if_cancelled()
            response = self.synthesizer.synthesize(results, request)
        except CoordinationCancelled as e:
            self.events.emit(CoordinationEvent.COORDINATION_CANCELLED, description=request.description)
            return AgentResponse.cancelled(str(e))
        except Exception as e:
            logger.exception("unexpected error during coordination")
            self.events.emit(CoordinationEvent.COORDINATION_FAILED, error=str(e))
            return AgentResponse.failure(f"Coordination failed: {e}", error_type=type(e).__name__)

        self.events.emit(
            CoordinationEvent.COORDINATION_COMPLETED,
            success=response.success,
            confidence=response.confidence,
            steps=results.step_names,
        )
        return response

    def analyze_required_specializations(
        self, request: ComplexAgentRequest
    ) -> list[AgentSpecialization]:
        """Ask the oracle which specializations ``request`` needs.

        When the oracle fails or names none, the defaults (code quality and
        platform specifics) are used, followed by every other specialization
        the registered agents cover.
        """
        completion = ask_oracle(
            self.inference,
            format_analysis_prompt(request),
            self.settings.analysis_temperature,
            self.settings.analysis_max_tokens,
            timeout=self.settings.oracle_timeout,
            operation="specialization analysis",
        )

        specializations = parse_specializations(completion.text) if completion.success else []
        if specializations:
            self.events.emit(
                CoordinationEvent.SPECIALIZATIONS_ANALYZED,
                specializations=[s.value for s in specializations],
            )
            return specializations

        fallback = list(DEFAULT_SPECIALIZATIONS)
        fallback += [s for s in self.registry.covered_specializations() if s not in fallback]
        self.events.emit(
            CoordinationEvent.ANALYSIS_FALLBACK,
            reason=completion.error if not completion.success else "no_specializations",
            specializations=[s.value for s in fallback],
        )
        return fallback

    def select_optimal_agents(
        self,
        required_specializations: Iterable[AgentSpecialization],
        request: ComplexAgentRequest,
    ) -> list[SpecializedAgent]:
        return self.selector.select_optimal_agents(required_specializations, request)

    def create_workflow(
        self,
        agents: Sequence[SpecializedAgent],
        request: ComplexAgentRequest,
    ) -> AgentWorkflow:
        return self.planner.create_workflow(agents, request)

    def optimize_workflow(self, workflow: AgentWorkflow) -> AgentWorkflow:
        return self.planner.optimize_workflow(workflow)

    def register_agent(self, agent: SpecializedAgent, replace: bool = False) -> None:
        """Add an agent to the pool used by later coordination calls."""
        self.registry.register(agent, replace=replace)

    def unregister_agent(self, agent_id: str) -> SpecializedAgent | None:
        return self.registry.unregister(agent_id)


def create_coordinator(
    inference: InferenceService,
    agents: Iterable[SpecializedAgent] | None = None,
    settings: Settings | None = None,
    events: CoordinationEvents | None = None,
) -> AgentCoordinator:
    """Create a coordinator for an inference service.

    Args:
        inference: Oracle for the coordinator and the default agents.
        agents: Agent pool. Defaults to every built-in specialist.
        settings: Coordinator settings. Defaults to get_settings().
        events: Optional shared event emitter.

    Returns:
        Configured AgentCoordinator.
    """
    if agents is None:
        agents = create_default_agents(inference)
    return AgentCoordinator(agents, inference, settings=settings, events=events)


def create_coordinator_from_config(
    config_path: str | Path = DEFAULT_CONFIG_PATH,
    provider: str | None = None,
    model: str | None = None,
) -> AgentCoordinator:
    """Create a coordinator from settings and an optional config.yaml.

    Priority is explicit arguments, then the yaml ``llm`` section, then
    environment settings, then provider auto-detection from API keys. The
    yaml ``coordinator`` section overrides settings and ``agents`` lists the
    built-in specialists to enable (all by default).

    Raises:
        ValueError: If no provider can be determined or its API key is missing.
    """
    yaml_config = load_yaml_config(config_path)
    llm_config = yaml_config.get("llm") or {}
    settings = get_settings().with_overrides(yaml_config.get("coordinator"))

    provider = provider or llm_config.get("provider") or settings.detect_provider()
    if not provider:
        raise ValueError(
            "No LLM provider configured. Set LLM_PROVIDER or an API key "
            "(ANTHROPIC_API_KEY, OPENAI_API_KEY, TOGETHER_API_KEY, GOOGLE_API_KEY)."
        )
    model = model or llm_config.get("model") or settings.llm_model

    client = create_client(
        provider,
        model=model,
        client_config=llm_config.get("client_config"),
        api_key=settings.get_api_key_for_provider(provider),
    )
    inference = LLMInferenceService(client, retry_initial_delay=settings.retry_initial_delay)
    agents = create_default_agents(inference, yaml_config.get("agents"))

    logger.info(f"coordinator created with provider={provider} agents={[a.agent_id for a in agents]}")
    return AgentCoordinator(agents, inference, settings=settings)
