"""Synthesis of step results into the final coordinated answer."""

from ..config import Settings, get_settings
from ..inference import InferenceService, ask_oracle
from ..models import AgentResponse, ComplexAgentRequest
from .events import CoordinationEvent, CoordinationEvents
from .prompts import format_synthesis_prompt
from .workflow import CoordinatedResponse

SYNTHESIS_METHOD = "ai-coordinated"


class ResponseSynthesizer:
    """Merges step responses into one AgentResponse with a single oracle call.

    Confidence is the mean confidence of the successful steps, capped at
    ``settings.confidence_cap``; a run where no step succeeded reports 0.0.
    """

    def __init__(
        self,
        inference: InferenceService,
        settings: Settings | None = None,
        events: CoordinationEvents | None = None,
    ):
        self.inference = inference
        self.settings = settings or get_settings()
        self.events = events or CoordinationEvents()

    def synthesize(self, results: CoordinatedResponse, request: ComplexAgentRequest) -> AgentResponse:
        completion = ask_oracle(
            self.inference,
            format_synthesis_prompt(results.responses, request),
            self.settings.synthesis_temperature,
            self.settings.synthesis_max_tokens,
            timeout=self.settings.oracle_timeout,
            operation="synthesis",
        )

        if not completion.success:
            self.events.emit(CoordinationEvent.SYNTHESIS_FAILED, error=completion.error)
            return AgentResponse.failure(
                f"Failed to synthesize coordinated results: {completion.error or 'no reply'}",
                workflow_steps=results.step_names,
            )

        return AgentResponse(
            result=completion.text,
            confidence=self.overall_confidence(results),
            metadata={
                "coordinated_responses": dict(results.responses),
                "workflow_steps": results.step_names,
                "synthesis_method": SYNTHESIS_METHOD,
                "agent_count": len(results.responses),
                "successful_steps": list(results.successful_responses),
                "terminated_early": results.terminated_early,
            },
        )

    def overall_confidence(self, results: CoordinatedResponse) -> float:
        successful = results.successful_responses
        if not successful:
            return 0.0
        mean = sum(r.confidence for r in successful.values()) / len(successful)
        return min(mean, self.settings.confidence_cap)
