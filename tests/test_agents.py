"""Tests for specialized agents and the built-in specialists."""

import pytest

from agent_coordinator.agents import (
    SPECIALIST_FACTORIES,
    LLMSpecializedAgent,
    SpecializedAgent,
    create_default_agents,
    create_platform_agent,
    create_quality_agent,
    create_security_agent,
)
from agent_coordinator.agents.llm_agent import KeywordCapability
from agent_coordinator.models import (
    AgentRequest,
    AgentSpecialization,
    SecurityLevel,
    SecurityRequirements,
)


class TestSpecializedAgent:
    """Tests for the SpecializedAgent base class."""

    def test_empty_id_rejected(self, stub_agent):
        """Test an agent needs an id."""
        with pytest.raises(ValueError):
            stub_agent("", [AgentSpecialization.CODE_QUALITY])

    def test_none_specialization_dropped(self, stub_agent):
        """Test NONE is never declared as a capability."""
        agent = stub_agent("a", [AgentSpecialization.NONE, AgentSpecialization.CODE_QUALITY])
        assert agent.specializations == frozenset({AgentSpecialization.CODE_QUALITY})
        assert not agent.has_specialization(AgentSpecialization.NONE)

    def test_specialization_names_sorted(self, stub_agent):
        """Test names are reported in a stable order."""
        agent = stub_agent(
            "a", [AgentSpecialization.SECURITY_ANALYSIS, AgentSpecialization.CODE_QUALITY]
        )
        assert agent.specialization_names() == ["CodeQuality", "SecurityAnalysis"]
        assert "agent_id='a'" in repr(agent)


class TestLLMSpecializedAgent:
    """Tests for inference-backed agents."""

    def test_keyword_match(self, scripted_inference):
        """Test a matching keyword makes the agent capable."""
        agent = create_security_agent(scripted_inference())
        assessment = agent.assess_capability(AgentRequest("Add password authentication"))
        assert assessment.can_handle_request
        assert assessment.capability_score == pytest.approx(0.9)
        assert assessment.recommendation == "Highly recommended"
        assert assessment.strengths

    def test_no_keyword(self, scripted_inference):
        """Test an unrelated request scores below the threshold."""
        agent = create_security_agent(scripted_inference())
        assessment = agent.assess_capability(AgentRequest("Draw a chart"))
        assert not assessment.can_handle_request
        assert assessment.capability_score == pytest.approx(0.3)
        assert assessment.recommendation == "Consider alternatives"
        assert assessment.limitations == ["Limited security context"]

    def test_context_bonus_is_clamped(self, scripted_inference):
        """Test stated security requirements raise the score, capped at 1.0."""
        agent = create_security_agent(scripted_inference())
        request = AgentRequest(
            "Add password authentication",
            context={"security_requirements": SecurityRequirements(SecurityLevel.HIGH)},
        )
        assert agent.assess_capability(request).capability_score == pytest.approx(1.0)

    def test_platform_bonus(self, scripted_inference):
        """Test a targeted platform in the agent's expertise raises the score."""
        agent = create_platform_agent(scripted_inference(), platforms=("ios",))
        request = AgentRequest("Build a settings screen", context={"target_platforms": ["iOS"]})
        assessment = agent.assess_capability(request)
        assert assessment.capability_score == pytest.approx(0.45)
        assert assessment.can_handle_request
        assert assessment.recommendation == "Suitable"

    def test_process(self, scripted_inference):
        """Test processing prompts the oracle with role and task."""
        oracle = scripted_inference(default="def login():\n    pass")
        agent = create_security_agent(oracle)

        response = agent.process(AgentRequest("Add password authentication"))

        assert response.success
        assert response.result == "def login():\n    pass"
        assert response.confidence == 0.95
        assert response.metadata["coordination_type"] == "single"
        assert response.metadata["shared_results"] == {"security_summary": "def login():"}
        prompt, temperature, _ = oracle.calls[0]
        assert "Task:\nAdd password authentication" in prompt
        assert temperature == 0.2

    def test_process_includes_constraints(self, scripted_inference, login_request):
        """Test request constraints are written into the prompt."""
        oracle = scripted_inference()
        create_quality_agent(oracle).process(login_request.to_agent_request())
        assert "Target platforms: web" in oracle.calls[0][0]

    def test_process_failure(self, scripted_inference):
        """Test an oracle failure becomes a failed response."""
        agent = create_security_agent(scripted_inference(replies={"Task:": None}))

        response = agent.process(AgentRequest("Add password authentication"))

        assert not response.success
        assert response.confidence == 0.0
        assert response.error_message == (
            "security could not complete the request: oracle unavailable"
        )

    def test_coordinate(self, scripted_inference, stub_agent):
        """Test collaborator output is folded into the prompt."""
        oracle = scripted_inference(default="merged")
        agent = create_security_agent(oracle)
        helper = stub_agent("platform", [AgentSpecialization.PLATFORM_SPECIFIC], result="use keychain")
        silent = stub_agent("quiet", [AgentSpecialization.CODE_QUALITY], success=False)

        response = agent.coordinate(AgentRequest("Store a token"), [agent, helper, silent])

        assert response.success
        assert response.result == "merged"
        assert response.metadata["coordination_type"] == "collaborative"
        assert response.metadata["collaborators"] == ["platform"]
        assert "[platform]\nuse keychain" in oracle.calls[0][0]
        assert len(helper.requests) == 1


class TestSpecialists:
    """Tests for the built-in specialist factories."""

    def test_default_agents(self, scripted_inference):
        """Test every specialist is created by default."""
        agents = create_default_agents(scripted_inference())
        assert [a.agent_id for a in agents] == list(SPECIALIST_FACTORIES)
        assert all(isinstance(a, LLMSpecializedAgent) for a in agents)
        assert all(isinstance(a, SpecializedAgent) for a in agents)

    def test_selected_agents(self, scripted_inference):
        """Test a subset is created once each, in the given order."""
        agents = create_default_agents(
            scripted_inference(), ["quality", "security", "quality"]
        )
        assert [a.agent_id for a in agents] == ["quality", "security"]

    def test_unknown_specialist(self, scripted_inference):
        """Test unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown specialists"):
            create_default_agents(scripted_inference(), ["astrologer"])

    def test_specializations(self, scripted_inference):
        """Test the specializations each specialist declares."""
        by_id = {a.agent_id: a for a in create_default_agents(scripted_inference())}
        assert by_id["security"].has_specialization(AgentSpecialization.SECURITY_ANALYSIS)
        assert by_id["performance"].has_specialization(AgentSpecialization.PERFORMANCE_OPTIMIZATION)
        assert by_id["quality"].has_specialization(AgentSpecialization.CODE_QUALITY)
        assert by_id["testing"].has_specialization(AgentSpecialization.TEST_GENERATION)
        assert by_id["documentation"].has_specialization(
            AgentSpecialization.DOCUMENTATION_GENERATION
        )

    def test_platform_specializations_follow_platforms(self, scripted_inference):
        """Test mobile and web specializations depend on the platforms."""
        mobile = create_platform_agent(scripted_inference(), platforms=("android",))
        web = create_platform_agent(scripted_inference(), platforms=("web",))
        assert mobile.has_specialization(AgentSpecialization.MOBILE_DEVELOPMENT)
        assert not mobile.has_specialization(AgentSpecialization.WEB_DEVELOPMENT)
        assert web.has_specialization(AgentSpecialization.WEB_DEVELOPMENT)
        assert web.has_specialization(AgentSpecialization.PLATFORM_SPECIFIC)

    def test_custom_capability(self, scripted_inference):
        """Test an agent can be built from custom keyword rules."""
        agent = LLMSpecializedAgent(
            agent_id="db",
            specializations=[AgentSpecialization.DATABASE_DESIGN],
            inference=scripted_inference(),
            role_prompt="You design schemas.",
            capability=KeywordCapability(keywords=("schema",), threshold=0.5),
        )
        assert agent.assess_capability(AgentRequest("Design a schema")).can_handle_request
        assert not agent.assess_capability(AgentRequest("Write a poem")).can_handle_request
