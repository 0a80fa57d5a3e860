"""Prompts for specialized agents.

This module contains the role prompts for the built-in specialists and the
helpers that turn an AgentRequest into the text sent to the inference oracle.
"""

from typing import Sequence

from ..models import AgentRequest

SECURITY_PROMPT = """You are a security engineer reviewing and hardening generated code.

Your responsibilities:
- Identify vulnerabilities such as injection, XSS, broken authentication and weak crypto
- Check input validation, authorization and secret handling
- Rewrite insecure code so that it is safe by default
- Explain each finding briefly with its severity

Return the hardened code first, followed by a short list of findings."""


PERFORMANCE_PROMPT = """You are a performance engineer optimizing generated code.

Your responsibilities:
- Find hot paths, unnecessary allocations and blocking calls
- Choose data structures and algorithms that meet the stated constraints
- Respect memory ceilings and real-time requirements when they are given
- Keep optimizations readable and explain the expected gain

Return the optimized code followed by a short summary of the changes."""


PLATFORM_PROMPT = """You are a platform specialist adapting code to specific target platforms.

Your responsibilities:
- Use each platform's idiomatic APIs, threading model and lifecycle
- Call out platform limitations that affect the design
- Keep shared logic separate from platform-specific glue

Target platforms: {platforms}

Return the adapted code, grouped by platform where they differ."""


QUALITY_PROMPT = """You are a senior reviewer focused on code quality and maintainability.

Your responsibilities:
- Make the code readable, consistently named and well structured
- Add error handling where it is missing
- Remove duplication and dead code
- Make sure the final result is complete and production ready

Return the improved code followed by a short review summary."""


TEST_PROMPT = """You are a test engineer writing automated tests for generated code.

Your responsibilities:
- Cover the main behavior, edge cases and failure paths
- Keep tests independent and deterministic
- Use the testing conventions of the target platform

Return the test code followed by a list of what is covered."""


DOCUMENTATION_PROMPT = """You are a technical writer documenting generated code.

Your responsibilities:
- Write a concise overview of what the code does and how to use it
- Document public functions, parameters and return values
- Add a short usage example

Return the documentation in Markdown."""


def format_platform_prompt(platforms: Sequence[str]) -> str:
    """Format the platform prompt for a set of target platforms."""
    return PLATFORM_PROMPT.format(platforms=", ".join(platforms) or "any")


def _format_constraints(request: AgentRequest) -> str:
    lines = []
    perf = request.performance_requirements
    if perf is not None:
        lines.append(f"- Maximum execution time: {perf.max_execution_time_ms} ms")
        lines.append(f"- Maximum memory usage: {perf.max_memory_usage_mb} MB")
        if perf.requires_real_time:
            lines.append("- Must meet real-time constraints")
        if perf.prefer_parallel:
            lines.append("- Prefer parallel implementations")
        if perf.memory_critical:
            lines.append("- Memory usage is critical")

    security = request.context.get("security_requirements")
    if security is not None:
        lines.append(f"- Security level: {security.level.value}")

    quality = request.context.get("quality_requirements")
    if quality is not None:
        lines.append(f"- Minimum code quality: {quality.minimum_code_quality}/100")

    platforms = request.context.get("target_platforms")
    if platforms:
        lines.append(f"- Target platforms: {', '.join(platforms)}")

    return "\n".join(lines)


def format_agent_prompt(role_prompt: str, request: AgentRequest) -> str:
    """Build the oracle prompt for an agent working alone."""
    parts = [role_prompt, f"Task:\n{request.input}"]
    constraints = _format_constraints(request)
    if constraints:
        parts.append(f"Constraints:\n{constraints}")
    return "\n\n".join(parts)


def format_coordination_prompt(
    role_prompt: str,
    request: AgentRequest,
    contributions: dict[str, str],
) -> str:
    """Build the oracle prompt for an agent merging collaborator output into its own."""
    prompt = format_agent_prompt(role_prompt, request)
    if not contributions:
        return prompt

    sections = "\n\n".join(
        f"[{agent_id}]\n{output}" for agent_id, output in contributions.items()
    )
    return (
        f"{prompt}\n\n"
        f"Collaborating agents contributed the following:\n\n{sections}\n\n"
        "Integrate their contributions into a single result, resolving any conflicts."
    )
