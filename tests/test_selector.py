"""Tests for agent selection."""

from agent_coordinator.coordination import AgentRegistry, AgentSelector, CoordinationEvent
from agent_coordinator.models import AgentSpecialization

SECURITY = AgentSpecialization.SECURITY_ANALYSIS
QUALITY = AgentSpecialization.CODE_QUALITY
PLATFORM = AgentSpecialization.PLATFORM_SPECIFIC


def _events_of(received, event):
    return [fields for e, fields in received if e == event]


class TestAgentSelector:
    """Tests for AgentSelector."""

    def test_one_agent_per_specialization(self, security_and_quality, login_request):
        """Test each selected agent covers a requested specialization."""
        selector = AgentSelector(AgentRegistry(security_and_quality))

        selected = selector.select_optimal_agents([QUALITY, SECURITY], login_request)

        assert [a.agent_id for a in selected] == ["quality", "security"]

    def test_highest_score_wins(self, stub_agent, login_request):
        """Test the best capable candidate is chosen."""
        weak = stub_agent("a-weak", [SECURITY], score=0.5)
        strong = stub_agent("z-strong", [SECURITY], score=0.9)
        selector = AgentSelector(AgentRegistry([weak, strong]))

        assert selector.select_optimal_agents([SECURITY], login_request) == [strong]

    def test_tie_break_by_agent_id(self, stub_agent, login_request):
        """Test equal scores are broken by ascending agent id."""
        second = stub_agent("beta", [SECURITY], score=0.7)
        first = stub_agent("alpha", [SECURITY], score=0.7)
        selector = AgentSelector(AgentRegistry([second, first]))

        assert selector.select_optimal_agents([SECURITY], login_request) == [first]

    def test_incapable_agents_skipped(self, stub_agent, login_request, recorded_events):
        """Test agents that cannot handle the request are never selected."""
        events, received = recorded_events
        unable = stub_agent("unable", [SECURITY], score=0.99, can_handle=False)
        selector = AgentSelector(AgentRegistry([unable]), events)

        assert selector.select_optimal_agents([SECURITY], login_request) == []
        gap = _events_of(received, CoordinationEvent.COVERAGE_GAP)
        assert gap == [{
            "specialization": "SecurityAnalysis",
            "reason": "no_capable_agent",
            "candidates": ["unable"],
        }]

    def test_no_candidates(self, security_and_quality, login_request, recorded_events):
        """Test an uncovered specialization is reported and skipped."""
        events, received = recorded_events
        selector = AgentSelector(AgentRegistry(security_and_quality), events)

        selected = selector.select_optimal_agents([PLATFORM, QUALITY], login_request)

        assert [a.agent_id for a in selected] == ["quality"]
        gap = _events_of(received, CoordinationEvent.COVERAGE_GAP)
        assert gap[0]["reason"] == "no_candidates"
        assert gap[0]["specialization"] == "PlatformSpecific"

    def test_failing_assessment(self, stub_agent, login_request, recorded_events):
        """Test an assessment that raises counts as cannot handle."""
        events, received = recorded_events
        broken = stub_agent("broken", [SECURITY], score=1.0, assess_error=RuntimeError("oops"))
        fine = stub_agent("fine", [SECURITY], score=0.6)
        selector = AgentSelector(AgentRegistry([broken, fine]), events)

        assert selector.select_optimal_agents([SECURITY], login_request) == [fine]
        failed = _events_of(received, CoordinationEvent.ASSESSMENT_FAILED)
        assert failed[0]["agent_id"] == "broken"
        assert failed[0]["error"] == "oops"

    def test_deduplicates(self, stub_agent, login_request):
        """Test an agent chosen twice appears once, at its first position."""
        both = stub_agent("both", [SECURITY, QUALITY])
        selector = AgentSelector(AgentRegistry([both]))

        assert selector.select_optimal_agents([SECURITY, QUALITY], login_request) == [both]

    def test_assessment_request(self, stub_agent, login_request):
        """Test agents assess the narrowed request for the specialization."""
        agent = stub_agent("security", [SECURITY])
        AgentSelector(AgentRegistry([agent])).select_optimal_agents([SECURITY], login_request)

        request = agent.assessed[0]
        assert request.input == "Generate a login endpoint"
        assert request.required_specialization == SECURITY
        assert request.context["target_platforms"] == ["web"]

    def test_selected_event(self, security_and_quality, login_request, recorded_events):
        """Test selections are reported."""
        events, received = recorded_events
        AgentSelector(AgentRegistry(security_and_quality), events).select_optimal_agents(
            [SECURITY], login_request
        )
        assert _events_of(received, CoordinationEvent.AGENT_SELECTED) == [
            {"specialization": "SecurityAnalysis", "agent_id": "security", "score": 0.8}
        ]
