"""Tests for response synthesis."""

import pytest

from agent_coordinator.coordination import CoordinatedResponse, CoordinationEvent, ResponseSynthesizer
from agent_coordinator.models import AgentResponse


def make_results(**responses):
    results = CoordinatedResponse()
    for name, response in responses.items():
        results.responses[name] = response
        results.execution_context.update_from_response(name, response)
    return results


class TestResponseSynthesizer:
    """Tests for ResponseSynthesizer."""

    def test_success(self, scripted_inference, settings, login_request):
        """Test the oracle's reply becomes the final result with metadata."""
        oracle = scripted_inference(replies={"synthesis": "final code"})
        results = make_results(
            SecurityAnalysis=AgentResponse(result="secure", confidence=0.8),
            QualityAssurance=AgentResponse(result="clean", confidence=0.6),
        )

        response = ResponseSynthesizer(oracle, settings).synthesize(results, login_request)

        assert response.success
        assert response.result == "final code"
        assert response.confidence == pytest.approx(0.7)
        assert response.metadata["synthesis_method"] == "ai-coordinated"
        assert response.metadata["workflow_steps"] == ["SecurityAnalysis", "QualityAssurance"]
        assert response.metadata["agent_count"] == 2
        assert response.metadata["coordinated_responses"]["SecurityAnalysis"].result == "secure"
        assert oracle.calls[0][1:] == (settings.synthesis_temperature, settings.synthesis_max_tokens)

    def test_confidence_cap(self, scripted_inference, settings, login_request):
        """Test confidence never exceeds the configured cap."""
        results = make_results(
            A=AgentResponse(result="x", confidence=1.0),
            B=AgentResponse(result="y", confidence=1.0),
        )
        response = ResponseSynthesizer(scripted_inference(), settings).synthesize(
            results, login_request
        )
        assert response.confidence == 0.95

    def test_failed_steps_excluded(self, scripted_inference, settings, login_request):
        """Test failed steps count toward neither the prompt nor confidence."""
        oracle = scripted_inference()
        results = make_results(
            Good=AgentResponse(result="works", confidence=0.6),
            Bad=AgentResponse.failure("broke"),
        )

        response = ResponseSynthesizer(oracle, settings).synthesize(results, login_request)

        assert response.confidence == 0.6
        assert response.metadata["successful_steps"] == ["Good"]
        prompt = oracle.prompts_for("synthesis")[0]
        assert "\nGood:\nworks" in prompt
        assert "Bad:" not in prompt
        assert "Original Request: Generate a login endpoint" in prompt
        assert "Target Platforms: web" in prompt

    def test_no_successful_steps(self, scripted_inference, settings, login_request):
        """Test a run without successes still synthesizes, with zero confidence."""
        results = make_results(Bad=AgentResponse.failure("broke"))
        response = ResponseSynthesizer(scripted_inference(), settings).synthesize(
            results, login_request
        )
        assert response.success
        assert response.confidence == 0.0

    def test_oracle_failure(self, scripted_inference, settings, login_request, recorded_events):
        """Test a failed synthesis is reported as a failed response."""
        events, received = recorded_events
        oracle = scripted_inference(replies={"synthesis": None})
        results = make_results(A=AgentResponse(result="x", confidence=0.9))

        response = ResponseSynthesizer(oracle, settings, events).synthesize(results, login_request)

        assert not response.success
        assert response.confidence == 0.0
        assert response.error_message == (
            "Failed to synthesize coordinated results: oracle unavailable"
        )
        assert response.metadata["workflow_steps"] == ["A"]
        assert [e for e, _ in received] == [CoordinationEvent.SYNTHESIS_FAILED]

    def test_terminated_early_flag(self, scripted_inference, settings, login_request):
        """Test early termination is reported in metadata."""
        results = make_results(A=AgentResponse(result="x", confidence=0.9))
        results.terminated_early = True
        response = ResponseSynthesizer(scripted_inference(), settings).synthesize(
            results, login_request
        )
        assert response.metadata["terminated_early"] is True
