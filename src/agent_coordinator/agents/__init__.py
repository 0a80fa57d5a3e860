"""Specialized agents the coordinator schedules.

Custom agents subclass SpecializedAgent; the built-in specialists are
LLMSpecializedAgents created by the factories in ``specialists``.
"""

from .base import SpecializedAgent
from .llm_agent import KeywordCapability, LLMSpecializedAgent
from .specialists import (
    SPECIALIST_FACTORIES,
    create_default_agents,
    create_documentation_agent,
    create_performance_agent,
    create_platform_agent,
    create_quality_agent,
    create_security_agent,
    create_test_agent,
)

__all__ = [
    # core classes
    "SpecializedAgent",
    "LLMSpecializedAgent",
    "KeywordCapability",
    # factory functions
    "SPECIALIST_FACTORIES",
    "create_default_agents",
    "create_documentation_agent",
    "create_performance_agent",
    "create_platform_agent",
    "create_quality_agent",
    "create_security_agent",
    "create_test_agent",
]
