"""Agent backed by the inference oracle.

An LLMSpecializedAgent assesses requests by keyword matching and does its
work by prompting the inference oracle with its role prompt.
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..inference import InferenceService
from ..logging import get_logger
from ..models import AgentRequest, AgentResponse, AgentSpecialization, CapabilityAssessment
from .base import SpecializedAgent
from .prompts import format_agent_prompt, format_coordination_prompt

logger = get_logger(__name__)

# longest summary an agent publishes to the shared context
SUMMARY_MAX_CHARS = 200


@dataclass(frozen=True)
class KeywordCapability:
    """Keyword rules an agent uses to assess a request.

    Attributes:
        keywords: Lowercase substrings that signal a relevant request
        matched_score: Score when any keyword appears in the input
        unmatched_score: Score when none does
        threshold: The agent can handle a request scoring above this
        context_bonus: Score added when a context key is present
        platform_bonus: Score added when a target platform is in the agent's expertise
        strengths: Reported when a keyword matched
        limitation: Reported when nothing matched
    """
    keywords: tuple[str, ...]
    matched_score: float = 0.9
    unmatched_score: float = 0.3
    threshold: float = 0.4
    context_bonus: dict[str, float] = field(default_factory=dict)
    platform_bonus: float = 0.0
    strengths: tuple[str, ...] = ()
    limitation: str = "No relevant context in request"


class LLMSpecializedAgent(SpecializedAgent):
    """A specialized agent whose work is done by the inference oracle."""

    def __init__(
        self,
        agent_id: str,
        specializations: Iterable[AgentSpecialization],
        inference: InferenceService,
        role_prompt: str,
        capability: KeywordCapability,
        platform_expertise: Iterable[str] = (),
        description: str = "",
        confidence: float = 0.85,
        temperature: float = 0.3,
        max_tokens: int = 2000,
    ):
        """Initialize the agent.

        Args:
            agent_id: Unique identifier for this agent.
            specializations: Capability domains this agent declares.
            inference: Oracle that performs the agent's work.
            role_prompt: Prompt describing the agent's role.
            capability: Keyword rules for capability assessment.
            platform_expertise: Platform identifiers this agent knows well.
            description: Human-readable description.
            confidence: Confidence reported on successful work.
            temperature: Sampling temperature for the agent's prompts.
            max_tokens: Completion budget for the agent's prompts.
        """
        super().__init__(agent_id, specializations, platform_expertise, description)
        self.inference = inference
        self.role_prompt = role_prompt
        self.capability = capability
        self.confidence = confidence
        self.temperature = temperature
        self.max_tokens = max_tokens

    def assess_capability(self, request: AgentRequest) -> CapabilityAssessment:
        cap = self.capability
        text = request.input.lower()
        matched = [k for k in cap.keywords if k in text]

        score = cap.matched_score if matched else cap.unmatched_score
        strengths = list(cap.strengths) if matched else []
        limitations = [] if matched else [cap.limitation]

        for key, bonus in cap.context_bonus.items():
            if request.context.get(key) is not None:
                score += bonus

        platforms = {p.lower() for p in request.context.get("target_platforms") or ()}
        expertise = {p.lower() for p in self.platform_expertise}
        if cap.platform_bonus and platforms & expertise:
            score += cap.platform_bonus
            strengths.append(f"Expertise in {', '.join(sorted(platforms & expertise))}")

        if score > 0.7:
            recommendation = "Highly recommended"
        elif score > cap.threshold:
            recommendation = "Suitable"
        else:
            recommendation = "Consider alternatives"

        return CapabilityAssessment(
            can_handle_request=score > cap.threshold,
            capability_score=score,
            strengths=strengths,
            limitations=limitations,
            recommendation=recommendation,
        )

    def process(self, request: AgentRequest) -> AgentResponse:
        prompt = format_agent_prompt(self.role_prompt, request)
        return self._complete(prompt, coordination_type="single")

    def coordinate(
        self,
        request: AgentRequest,
        collaborators: Sequence[SpecializedAgent],
    ) -> AgentResponse:
        contributions: dict[str, str] = {}
        for collaborator in collaborators:
            if collaborator is self:
                continue
            response = collaborator.process(request)
            if response.success and response.has_result:
                contributions[collaborator.agent_id] = response.result
            else:
                logger.info(
                    f"{self.agent_id}: collaborator {collaborator.agent_id} contributed nothing"
                )

        prompt = format_coordination_prompt(self.role_prompt, request, contributions)
        response = self._complete(prompt, coordination_type="collaborative")
        if response.success:
            response.metadata["collaborators"] = list(contributions)
        return response

    def _complete(self, prompt: str, coordination_type: str) -> AgentResponse:
        completion = self.inference.complete(prompt, self.temperature, self.max_tokens)
        if not completion.success:
            return AgentResponse.failure(
                f"{self.agent_id} could not complete the request: {completion.error}",
                agent_id=self.agent_id,
            )

        return AgentResponse(
            result=completion.text,
            confidence=self.confidence,
            metadata={
                "agent_id": self.agent_id,
                "specializations": self.specialization_names(),
                "coordination_type": coordination_type,
                "shared_results": {f"{self.agent_id}_summary": _summarize(completion.text)},
            },
        )


def _summarize(text: str) -> str:
    for line in text.splitlines():
        line = line.strip()
        if line:
            return line[:SUMMARY_MAX_CHARS]
    return ""
