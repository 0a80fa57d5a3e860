"""Pool of agents available to the coordinator, indexed by specialization."""

import threading
from typing import Iterable, Iterator

from ..agents.base import SpecializedAgent
from ..exceptions import AgentRegistrationError
from ..models import AgentSpecialization


class AgentRegistry:
    """Registered agents, looked up by id or by specialization.

    The registry is read-mostly and shared by concurrent coordination calls.
    Readers get snapshots, so registering or unregistering an agent never
    changes a list a caller is iterating.
    """

    def __init__(self, agents: Iterable[SpecializedAgent] = ()):
        self._agents: dict[str, SpecializedAgent] = {}
        self._by_specialization: dict[AgentSpecialization, list[SpecializedAgent]] = {}
        self._lock = threading.RLock()
        for agent in agents:
            self.register(agent)

    def register(self, agent: SpecializedAgent, replace: bool = False) -> None:
        """Add an agent to the pool.

        Args:
            agent: The agent to add.
            replace: Replace an agent already registered under the same id.

        Raises:
            AgentRegistrationError: If the id is taken (and ``replace`` is
                False) or the agent declares no specializations.
        """
        if not agent.specializations:
            raise AgentRegistrationError(agent.agent_id, "declares no specializations")

        with self._lock:
            if agent.agent_id in self._agents:
                if not replace:
                    raise AgentRegistrationError(agent.agent_id, "already registered")
                self._remove(agent.agent_id)

            self._agents[agent.agent_id] = agent
            for specialization in agent.specializations:
                self._by_specialization.setdefault(specialization, []).append(agent)

    def unregister(self, agent_id: str) -> SpecializedAgent | None:
        """Remove an agent, returning it, or None if it was not registered."""
        with self._lock:
            return self._remove(agent_id)

    def _remove(self, agent_id: str) -> SpecializedAgent | None:
        agent = self._agents.pop(agent_id, None)
        if agent is None:
            return None
        for specialization in agent.specializations:
            candidates = self._by_specialization.get(specialization, [])
            if agent in candidates:
                candidates.remove(agent)
            if not candidates:
                self._by_specialization.pop(specialization, None)
        return agent

    def get(self, agent_id: str) -> SpecializedAgent | None:
        with self._lock:
            return self._agents.get(agent_id)

    @property
    def agents(self) -> list[SpecializedAgent]:
        """Registered agents in registration order."""
        with self._lock:
            return list(self._agents.values())

    def candidates_for(self, specialization: AgentSpecialization) -> list[SpecializedAgent]:
        """Agents declaring ``specialization``, in registration order."""
        with self._lock:
            return list(self._by_specialization.get(specialization, []))

    def covered_specializations(self) -> list[AgentSpecialization]:
        """Specializations at least one agent declares, in enum order."""
        with self._lock:
            return [s for s in AgentSpecialization if s in self._by_specialization]

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, SpecializedAgent):
            return self._agents.get(item.agent_id) is item
        return item in self._agents

    def __iter__(self) -> Iterator[SpecializedAgent]:
        return iter(self.agents)

    def __repr__(self) -> str:
        return f"AgentRegistry(agents={list(self._agents)})"
