"""Domain types exchanged between the coordinator and its agents.

Requests flow from the caller into the coordinator as a ComplexAgentRequest,
are narrowed into per-step AgentRequests, and come back from agents as
AgentResponses.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class AgentSpecialization(Enum):
    """Capability domain an agent can declare.

    Values are the names the inference oracle is asked to answer with.
    """
    PERFORMANCE_OPTIMIZATION = "PerformanceOptimization"
    SECURITY_ANALYSIS = "SecurityAnalysis"
    PLATFORM_SPECIFIC = "PlatformSpecific"
    ARCHITECTURAL_DESIGN = "ArchitecturalDesign"
    TEST_GENERATION = "TestGeneration"
    DOCUMENTATION_GENERATION = "DocumentationGeneration"
    CODE_QUALITY = "CodeQuality"
    DATABASE_DESIGN = "DatabaseDesign"
    NETWORKING_OPTIMIZATION = "NetworkingOptimization"
    UIUX_GENERATION = "UIUXGeneration"
    GAME_DEVELOPMENT = "GameDevelopment"
    WEB_DEVELOPMENT = "WebDevelopment"
    MOBILE_DEVELOPMENT = "MobileDevelopment"
    DEVOPS_INTEGRATION = "DevOpsIntegration"
    NONE = "None"

    @classmethod
    def parse(cls, text: str) -> "AgentSpecialization | None":
        """Resolve a specialization name written by a person or a model.

        Matching ignores case, spaces, underscores, hyphens and a leading
        bullet or list number, so "- Security Analysis", "security_analysis"
        and "SECURITY-ANALYSIS" all resolve to SECURITY_ANALYSIS.

        Returns:
            The matching member, or None if the text names no specialization.
        """
        return _SPECIALIZATION_LOOKUP.get(_normalize_name(text))


_BULLET_PREFIX = re.compile(r"^\s*(?:[-*+•]|\d+[.)])\s*")


def _normalize_name(text: str) -> str:
    text = _BULLET_PREFIX.sub("", text or "")
    return re.sub(r"[^a-z0-9]", "", text.lower())


_SPECIALIZATION_LOOKUP: dict[str, AgentSpecialization] = {
    _normalize_name(member.value): member for member in AgentSpecialization
}


class OptimizationTarget(Enum):
    """What a request should be optimized for first."""
    PERFORMANCE = "performance"
    MEMORY = "memory"
    SECURITY = "security"
    QUALITY = "quality"
    BALANCED = "balanced"


class PerformanceLevel(Enum):
    """Minimum acceptable performance of generated code."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SecurityLevel(Enum):
    """Required security posture of generated code."""
    LOW = "low"
    STANDARD = "standard"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class PerformanceProfile:
    """Caller-level performance expectations.

    Attributes:
        primary_target: What to optimize for first
        minimum_acceptable_level: Performance floor for the result
        supports_real_time_optimization: Whether real-time constraints apply
    """
    primary_target: OptimizationTarget = OptimizationTarget.BALANCED
    minimum_acceptable_level: PerformanceLevel = PerformanceLevel.MEDIUM
    supports_real_time_optimization: bool = False


@dataclass(frozen=True)
class SecurityRequirements:
    level: SecurityLevel = SecurityLevel.STANDARD


@dataclass(frozen=True)
class QualityRequirements:
    minimum_code_quality: int = 70

    def __post_init__(self):
        if not 0 <= self.minimum_code_quality <= 100:
            raise ValueError("minimum_code_quality must be between 0 and 100")


# memory ceiling (MB) granted to a step for each minimum performance level
MEMORY_CEILING_MB = {
    PerformanceLevel.LOW: 200,
    PerformanceLevel.MEDIUM: 100,
    PerformanceLevel.HIGH: 50,
    PerformanceLevel.CRITICAL: 25,
}
DEFAULT_MEMORY_CEILING_MB = 100
DEFAULT_MAX_EXECUTION_TIME_MS = 5000


@dataclass(frozen=True)
class PerformanceRequirements:
    """Step-level performance constraints handed to an agent.

    Attributes:
        max_execution_time_ms: Time budget for the step
        max_memory_usage_mb: Memory ceiling for generated code
        requires_real_time: Whether the code must meet real-time constraints
        prefer_parallel: Whether parallel implementations are preferred
        memory_critical: Whether memory use dominates other concerns
    """
    max_execution_time_ms: int = DEFAULT_MAX_EXECUTION_TIME_MS
    max_memory_usage_mb: int = DEFAULT_MEMORY_CEILING_MB
    requires_real_time: bool = False
    prefer_parallel: bool = False
    memory_critical: bool = False

    @classmethod
    def from_profile(cls, profile: PerformanceProfile | None) -> "PerformanceRequirements":
        """Translate a caller's performance profile into step constraints."""
        if profile is None:
            return cls()
        return cls(
            max_memory_usage_mb=MEMORY_CEILING_MB.get(
                profile.minimum_acceptable_level, DEFAULT_MEMORY_CEILING_MB
            ),
            requires_real_time=profile.supports_real_time_optimization,
            prefer_parallel=profile.primary_target == OptimizationTarget.PERFORMANCE,
            memory_critical=profile.primary_target == OptimizationTarget.MEMORY,
        )


@dataclass(frozen=True)
class AgentRequest:
    """A unit of work addressed to a single agent.

    Attributes:
        input: The text the agent works on
        context: Free-form key-value data from the caller
        performance_requirements: Step-level constraints, if any
        required_specialization: Specialization the step was planned for
    """
    input: str
    context: Mapping[str, Any] = field(default_factory=dict)
    performance_requirements: PerformanceRequirements | None = None
    required_specialization: AgentSpecialization = AgentSpecialization.NONE

    def with_input(self, text: str) -> "AgentRequest":
        """Return a copy of this request with a different input."""
        return replace(self, input=text)


@dataclass(frozen=True)
class ComplexAgentRequest:
    """A caller's request to coordinate several agents on one task.

    Attributes:
        description: What should be built
        target_platforms: Platform identifiers, in the caller's order
        performance_requirements: Optional performance profile
        security_requirements: Optional security requirements
        quality_requirements: Optional quality bar
        context: Opaque caller data, forwarded to every step
    """
    description: str
    target_platforms: tuple[str, ...] = ()
    performance_requirements: PerformanceProfile | None = None
    security_requirements: SecurityRequirements | None = None
    quality_requirements: QualityRequirements | None = None
    context: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # accept any iterable of platforms, store a tuple
        object.__setattr__(self, "target_platforms", tuple(self.target_platforms))

    def to_agent_request(self) -> AgentRequest:
        """Build the request agents assess their capability against."""
        context: dict[str, Any] = dict(self.context)
        context["target_platforms"] = list(self.target_platforms)
        if self.performance_requirements is not None:
            context["performance_requirements"] = self.performance_requirements
        if self.security_requirements is not None:
            context["security_requirements"] = self.security_requirements
        if self.quality_requirements is not None:
            context["quality_requirements"] = self.quality_requirements

        return AgentRequest(
            input=self.description,
            context=context,
            performance_requirements=PerformanceRequirements.from_profile(
                self.performance_requirements
            ),
        )


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass
class CapabilityAssessment:
    """An agent's self-assessment for one request.

    The score is only used to rank candidates; it is clamped to 0.0-1.0.
    """
    can_handle_request: bool
    capability_score: float = 0.0
    strengths: list[str] = field(default_factory=list)
    limitations: list[str] = field(default_factory=list)
    recommendation: str = ""

    def __post_init__(self):
        self.capability_score = _clamp(self.capability_score)


@dataclass
class AgentResponse:
    """Result of an agent, a workflow step, or a whole coordination call.

    Attributes:
        success: Whether the work succeeded
        result: Text payload, typically generated code or analysis
        confidence: Self-reported confidence, clamped to 0.0-1.0
        error_message: Failure description, set when success is False
        metadata: Diagnostic data; a ``shared_results`` mapping here is
            merged into the workflow's shared context
        should_terminate_workflow: Stop running later workflow steps
    """
    success: bool = True
    result: str | None = None
    confidence: float = 0.0
    error_message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    should_terminate_workflow: bool = False

    def __post_init__(self):
        self.confidence = _clamp(self.confidence)

    @classmethod
    def failure(cls, message: str, **metadata: Any) -> "AgentResponse":
        """Build a failed response with zero confidence."""
        return cls(success=False, confidence=0.0, error_message=message, metadata=metadata)

    @classmethod
    def cancelled(cls, message: str = "Coordination cancelled") -> "AgentResponse":
        return cls.failure(message, cancelled=True)

    @classmethod
    def no_action(cls) -> "AgentResponse":
        """Build a successful response from an agent that declines to act."""
        return cls(success=True, result=None, confidence=0.0, metadata={"no_action": True})

    @property
    def has_result(self) -> bool:
        return bool(self.result and self.result.strip())

    @property
    def is_no_action(self) -> bool:
        return bool(self.metadata.get("no_action"))


# shared and read-only; callers that annotate a response use no_action()
NO_ACTION = AgentResponse(
    success=True, result=None, confidence=0.0, metadata=MappingProxyType({"no_action": True})
)
AgentResponse.NO_ACTION = NO_ACTION
