"""Code quality specialist factory."""

from ...inference import InferenceService
from ...models import AgentSpecialization
from ..llm_agent import KeywordCapability, LLMSpecializedAgent
from ..prompts import QUALITY_PROMPT

QUALITY_KEYWORDS = (
    "quality",
    "refactor",
    "clean",
    "maintainab",
    "readab",
    "review",
    "architecture",
)


def create_quality_agent(
    inference: InferenceService,
    agent_id: str = "quality",
) -> LLMSpecializedAgent:
    """Create a code quality agent.

    Every request benefits from a quality pass, so the agent can handle
    requests that mention none of its keywords.
    """
    return LLMSpecializedAgent(
        agent_id=agent_id,
        specializations=[
            AgentSpecialization.CODE_QUALITY,
            AgentSpecialization.ARCHITECTURAL_DESIGN,
        ],
        inference=inference,
        role_prompt=QUALITY_PROMPT,
        capability=KeywordCapability(
            keywords=QUALITY_KEYWORDS,
            matched_score=0.9,
            unmatched_score=0.6,
            threshold=0.4,
            context_bonus={"quality_requirements": 0.1},
            strengths=("Code review", "Maintainability improvements"),
            limitation="General-purpose review only",
        ),
        description="Senior reviewer for code quality and maintainability.",
        confidence=0.8,
    )
