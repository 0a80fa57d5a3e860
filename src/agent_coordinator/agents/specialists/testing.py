"""Test generation specialist factory."""

from ...inference import InferenceService
from ...models import AgentSpecialization
from ..llm_agent import KeywordCapability, LLMSpecializedAgent
from ..prompts import TEST_PROMPT

TEST_KEYWORDS = ("test", "coverage", "unit", "integration", "verify", "regression")


def create_test_agent(
    inference: InferenceService,
    agent_id: str = "testing",
) -> LLMSpecializedAgent:
    """Create a test generation agent."""
    return LLMSpecializedAgent(
        agent_id=agent_id,
        specializations=[AgentSpecialization.TEST_GENERATION],
        inference=inference,
        role_prompt=TEST_PROMPT,
        capability=KeywordCapability(
            keywords=TEST_KEYWORDS,
            matched_score=0.85,
            unmatched_score=0.5,
            threshold=0.4,
            strengths=("Edge case coverage", "Deterministic tests"),
            limitation="Tests not explicitly requested",
        ),
        description="Test engineer for automated test generation.",
        confidence=0.8,
    )
