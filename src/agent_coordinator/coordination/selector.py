"""Agent selection: one best capable agent per required specialization."""

from dataclasses import replace
from typing import Iterable

from ..agents.base import SpecializedAgent
from ..logging import get_logger
from ..models import AgentRequest, AgentSpecialization, ComplexAgentRequest
from .events import CoordinationEvent, CoordinationEvents
from .registry import AgentRegistry

logger = get_logger(__name__)


class AgentSelector:
    """Picks the highest-scoring capable agent for each specialization.

    Candidates are ranked by capability score, highest first, with ties
    broken by ascending ``agent_id`` so that selection is reproducible.
    Missing coverage is reported as a ``coverage_gap`` event, never raised.
    """

    def __init__(self, registry: AgentRegistry, events: CoordinationEvents | None = None):
        self.registry = registry
        self.events = events or CoordinationEvents()

    def select_optimal_agents(
        self,
        required_specializations: Iterable[AgentSpecialization],
        request: ComplexAgentRequest,
    ) -> list[SpecializedAgent]:
        """Select agents for the required specializations.

        Args:
            required_specializations: Specializations in priority order.
            request: The complex request agents assess themselves against.

        Returns:
            Deduplicated agents in specialization order. An agent chosen for
            several specializations appears once, at its first position.
        """
        base_request = request.to_agent_request()
        selected: list[SpecializedAgent] = []
        seen: set[str] = set()

        for specialization in required_specializations:
            agent = self.select_for_specialization(specialization, base_request)
            if agent is not None and agent.agent_id not in seen:
                seen.add(agent.agent_id)
                selected.append(agent)

        return selected

    def select_for_specialization(
        self,
        specialization: AgentSpecialization,
        request: AgentRequest,
    ) -> SpecializedAgent | None:
        """Return the best capable agent for one specialization, or None."""
        candidates = self.registry.candidates_for(specialization)
        if not candidates:
            self.events.emit(
                CoordinationEvent.COVERAGE_GAP,
                specialization=specialization.value,
                reason="no_candidates",
            )
            return None

        assessed_request = replace(request, required_specialization=specialization)
        capable: list[tuple[float, SpecializedAgent]] = []
        for agent in candidates:
            try:
                assessment = agent.assess_capability(assessed_request)
            except Exception as e:
                # a failing self-assessment counts as "cannot handle"
                self.events.emit(
                    CoordinationEvent.ASSESSMENT_FAILED,
                    agent_id=agent.agent_id,
                    specialization=specialization.value,
                    error=str(e),
                )
                continue
            if assessment.can_handle_request:
                capable.append((assessment.capability_score, agent))

        if not capable:
            self.events.emit(
                CoordinationEvent.COVERAGE_GAP,
                specialization=specialization.value,
                reason="no_capable_agent",
                candidates=[a.agent_id for a in candidates],
            )
            return None

        score, best = min(capable, key=lambda item: (-item[0], item[1].agent_id))
        self.events.emit(
            CoordinationEvent.AGENT_SELECTED,
            specialization=specialization.value,
            agent_id=best.agent_id,
            score=round(score, 3),
        )
        return best
