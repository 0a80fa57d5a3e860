"""Base class for specialized agents.

The coordinator only talks to agents through this interface: it asks them
to assess a request, then to process it alone or in coordination with
collaborating agents.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from ..models import AgentRequest, AgentResponse, AgentSpecialization, CapabilityAssessment


class SpecializedAgent(ABC):
    """Abstract base class for all agents the coordinator can schedule.

    Agents are shared between coordination calls and are not owned by the
    coordinator; implementations that keep mutable state must protect it
    themselves.
    """

    def __init__(
        self,
        agent_id: str,
        specializations: Iterable[AgentSpecialization],
        platform_expertise: Iterable[str] = (),
        description: str = "",
    ):
        """Initialize an agent.

        Args:
            agent_id: Unique identifier used in plans and selection tie-breaks.
            specializations: Capability domains this agent declares.
            platform_expertise: Platform identifiers this agent knows well.
            description: Human-readable description used in planning prompts.
        """
        if not agent_id:
            raise ValueError("agent_id must not be empty")
        self.agent_id = agent_id
        self.specializations = frozenset(
            s for s in specializations if s is not AgentSpecialization.NONE
        )
        self.platform_expertise = tuple(platform_expertise)
        self.description = description or f"Agent: {agent_id}"

    def has_specialization(self, specialization: AgentSpecialization) -> bool:
        """Check whether this agent declares a specialization."""
        return specialization in self.specializations

    @abstractmethod
    def assess_capability(self, request: AgentRequest) -> CapabilityAssessment:
        """Assess how well this agent can handle a request.

        Args:
            request: The request to assess.

        Returns:
            CapabilityAssessment used to rank this agent among candidates.
        """

    @abstractmethod
    def process(self, request: AgentRequest) -> AgentResponse:
        """Handle a request alone."""

    @abstractmethod
    def coordinate(
        self,
        request: AgentRequest,
        collaborators: Sequence["SpecializedAgent"],
    ) -> AgentResponse:
        """Handle a request together with collaborating agents."""

    def specialization_names(self) -> list[str]:
        """Return declared specialization names, sorted."""
        return sorted(s.value for s in self.specializations)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(agent_id='{self.agent_id}', "
            f"specializations={self.specialization_names()})"
        )
