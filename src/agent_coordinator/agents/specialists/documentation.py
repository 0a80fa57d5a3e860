"""Documentation specialist factory."""

from ...inference import InferenceService
from ...models import AgentSpecialization
from ..llm_agent import KeywordCapability, LLMSpecializedAgent
from ..prompts import DOCUMENTATION_PROMPT

DOCUMENTATION_KEYWORDS = ("document", "docs", "readme", "docstring", "guide", "tutorial")


def create_documentation_agent(
    inference: InferenceService,
    agent_id: str = "documentation",
) -> LLMSpecializedAgent:
    """Create a documentation agent."""
    return LLMSpecializedAgent(
        agent_id=agent_id,
        specializations=[AgentSpecialization.DOCUMENTATION_GENERATION],
        inference=inference,
        role_prompt=DOCUMENTATION_PROMPT,
        capability=KeywordCapability(
            keywords=DOCUMENTATION_KEYWORDS,
            matched_score=0.85,
            unmatched_score=0.45,
            threshold=0.4,
            strengths=("API reference", "Usage examples"),
            limitation="Documentation not explicitly requested",
        ),
        description="Technical writer for code documentation.",
        confidence=0.8,
        temperature=0.5,
    )
