"""Security specialist factory.

Creates an agent specialized for security analysis and hardening.
"""

from ...inference import InferenceService
from ...models import AgentSpecialization
from ..llm_agent import KeywordCapability, LLMSpecializedAgent
from ..prompts import SECURITY_PROMPT

SECURITY_KEYWORDS = (
    "authentication",
    "authorization",
    "encryption",
    "password",
    "token",
    "api",
    "database",
    "input",
    "validation",
)


def create_security_agent(
    inference: InferenceService,
    agent_id: str = "security",
) -> LLMSpecializedAgent:
    """Create a security analysis agent.

    The agent considers itself highly capable when the request mentions
    authentication, secrets, data access or input handling, and gains a
    small bonus when the caller states security requirements.

    Args:
        inference: Oracle that performs the agent's work.
        agent_id: Identifier for the agent.

    Returns:
        Configured security LLMSpecializedAgent.
    """
    return LLMSpecializedAgent(
        agent_id=agent_id,
        specializations=[AgentSpecialization.SECURITY_ANALYSIS],
        inference=inference,
        role_prompt=SECURITY_PROMPT,
        capability=KeywordCapability(
            keywords=SECURITY_KEYWORDS,
            matched_score=0.9,
            unmatched_score=0.3,
            threshold=0.4,
            context_bonus={"security_requirements": 0.1},
            strengths=(
                "Vulnerability detection",
                "Secure coding practices",
                "Authentication and authorization review",
            ),
            limitation="Limited security context",
        ),
        description="Security engineer for vulnerability analysis and code hardening.",
        confidence=0.95,
        temperature=0.2,
    )
