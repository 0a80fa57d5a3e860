"""Performance specialist factory."""

from ...inference import InferenceService
from ...models import AgentSpecialization
from ..llm_agent import KeywordCapability, LLMSpecializedAgent
from ..prompts import PERFORMANCE_PROMPT

PERFORMANCE_KEYWORDS = (
    "performance",
    "optimiz",
    "fast",
    "latency",
    "throughput",
    "memory",
    "cache",
    "scal",
    "real-time",
    "concurren",
)


def create_performance_agent(
    inference: InferenceService,
    agent_id: str = "performance",
) -> LLMSpecializedAgent:
    """Create a performance optimization agent.

    Args:
        inference: Oracle that performs the agent's work.
        agent_id: Identifier for the agent.

    Returns:
        Configured performance LLMSpecializedAgent.
    """
    return LLMSpecializedAgent(
        agent_id=agent_id,
        specializations=[
            AgentSpecialization.PERFORMANCE_OPTIMIZATION,
            AgentSpecialization.NETWORKING_OPTIMIZATION,
        ],
        inference=inference,
        role_prompt=PERFORMANCE_PROMPT,
        capability=KeywordCapability(
            keywords=PERFORMANCE_KEYWORDS,
            matched_score=0.8,
            unmatched_score=0.2,
            threshold=0.5,
            context_bonus={"performance_requirements": 0.2},
            strengths=(
                "Performance optimization expertise",
                "Cross-platform performance tuning",
            ),
            limitation="May be overkill for simple code",
        ),
        description="Performance engineer for profiling-driven optimization.",
    )
