"""Platform specialist factory."""

from typing import Sequence

from ...inference import InferenceService
from ...models import AgentSpecialization
from ..llm_agent import KeywordCapability, LLMSpecializedAgent
from ..prompts import format_platform_prompt

DEFAULT_PLATFORMS = ("web", "ios", "android", "desktop")

PLATFORM_KEYWORDS = (
    "platform",
    "mobile",
    "web",
    "desktop",
    "native",
    "browser",
)


def create_platform_agent(
    inference: InferenceService,
    platforms: Sequence[str] = DEFAULT_PLATFORMS,
    agent_id: str = "platform",
) -> LLMSpecializedAgent:
    """Create a platform-specific agent.

    The agent scores higher when the request targets one of ``platforms``.

    Args:
        inference: Oracle that performs the agent's work.
        platforms: Platform identifiers the agent has expertise in.
        agent_id: Identifier for the agent.

    Returns:
        Configured platform LLMSpecializedAgent.
    """
    keywords = tuple(dict.fromkeys(PLATFORM_KEYWORDS + tuple(p.lower() for p in platforms)))

    specializations = [AgentSpecialization.PLATFORM_SPECIFIC]
    lowered = {p.lower() for p in platforms}
    if lowered & {"ios", "android", "mobile"}:
        specializations.append(AgentSpecialization.MOBILE_DEVELOPMENT)
    if "web" in lowered:
        specializations.append(AgentSpecialization.WEB_DEVELOPMENT)

    return LLMSpecializedAgent(
        agent_id=agent_id,
        specializations=specializations,
        inference=inference,
        role_prompt=format_platform_prompt(platforms),
        capability=KeywordCapability(
            keywords=keywords,
            matched_score=0.8,
            unmatched_score=0.3,
            threshold=0.4,
            platform_bonus=0.15,
            strengths=("Platform-native APIs", "Cross-platform structure"),
            limitation="No target platform named in request",
        ),
        platform_expertise=platforms,
        description=f"Platform specialist for {', '.join(platforms)}.",
    )
