"""Predefined specialist agents.

This module provides factory functions to create inference-backed agents
for security, performance, platform, quality, testing and documentation
work.
"""

from typing import Callable, Iterable

from ...inference import InferenceService
from ..llm_agent import LLMSpecializedAgent
from .documentation import create_documentation_agent
from .performance import create_performance_agent
from .platform import create_platform_agent
from .quality import create_quality_agent
from .security import create_security_agent
from .testing import create_test_agent

SPECIALIST_FACTORIES: dict[str, Callable[[InferenceService], LLMSpecializedAgent]] = {
    "security": create_security_agent,
    "performance": create_performance_agent,
    "platform": create_platform_agent,
    "quality": create_quality_agent,
    "testing": create_test_agent,
    "documentation": create_documentation_agent,
}


def create_default_agents(
    inference: InferenceService,
    names: Iterable[str] | None = None,
) -> list[LLMSpecializedAgent]:
    """Create the built-in specialists.

    Args:
        inference: Oracle shared by every created agent.
        names: Specialist names to create (keys of SPECIALIST_FACTORIES).
            Defaults to all of them.

    Raises:
        ValueError: If a name is not a known specialist.
    """
    selected = list(names) if names is not None else list(SPECIALIST_FACTORIES)
    unknown = [n for n in selected if n not in SPECIALIST_FACTORIES]
    if unknown:
        raise ValueError(
            f"Unknown specialists: {unknown}. Available: {list(SPECIALIST_FACTORIES)}"
        )
    return [SPECIALIST_FACTORIES[name](inference) for name in dict.fromkeys(selected)]


__all__ = [
    "SPECIALIST_FACTORIES",
    "create_default_agents",
    "create_documentation_agent",
    "create_performance_agent",
    "create_platform_agent",
    "create_quality_agent",
    "create_security_agent",
    "create_test_agent",
]
