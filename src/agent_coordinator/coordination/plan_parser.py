"""Parsing of workflow plans proposed by the inference oracle.

Oracle output is untrusted. A strict JSON plan validated with pydantic is
tried first; colon-separated ``StepName: AgentId`` lines are the fallback,
and a line counts only if everything after the colon names a known agent.
"""

import json
import re
from dataclasses import dataclass, replace
from typing import Collection

from pydantic import BaseModel, ConfigDict, Field, ValidationError

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_LIST_PREFIX = re.compile(r"^\s*(?:[-*+•]|\d+[.)]|step\s+\d+[.):]?)\s*", re.IGNORECASE)
_TRAILING_NOTE = re.compile(r"\s*\([^()]*\)\s*$")
_DECORATION = "*`'\" "
COLLABORATOR_ARROW = "<-"


class PlanStepSchema(BaseModel):
    """One step of a JSON workflow plan."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    agent_id: str = Field(min_length=1)
    requires_coordination: bool = False
    collaborators: list[str] = Field(default_factory=list)


class WorkflowPlanSchema(BaseModel):
    """A JSON workflow plan: ``{"steps": [...]}``."""
    model_config = ConfigDict(extra="ignore")

    steps: list[PlanStepSchema]


class StepOrderSchema(BaseModel):
    """A JSON step ordering: ``{"order": [...]}``."""
    model_config = ConfigDict(extra="ignore")

    order: list[str]


@dataclass(frozen=True)
class StructuralStep:
    """A parsed plan step, before it is bound to agents and requests."""
    name: str
    agent_id: str
    requires_coordination: bool = False
    collaborator_ids: tuple[str, ...] = ()


def parse_workflow_plan(text: str, known_agent_ids: Collection[str]) -> list[StructuralStep]:
    """Parse an oracle reply into structural steps.

    Args:
        text: The oracle's reply.
        known_agent_ids: Ids of the agents the plan may use.

    Returns:
        Steps in plan order with unique names. Empty if nothing usable was found.
    """
    resolver = _AgentResolver(known_agent_ids)
    plan = _parse_json(text, WorkflowPlanSchema)
    if plan is not None:
        steps = _steps_from_schema(plan, resolver)
    else:
        steps = _steps_from_lines(text, resolver)
    return _with_unique_names(steps)


def parse_step_order(text: str, step_names: list[str]) -> list[str] | None:
    """Parse an oracle's recommended step order.

    A JSON ``{"order": [...]}`` may name a subset of the steps; the rest keep
    their relative order after the named ones. Without JSON, the reply must
    be a list whose items each name exactly one step, covering every step.

    Returns:
        A permutation of ``step_names``, or None if the reply does not
        recommend a complete, valid order.
    """
    known = set(step_names)
    order = _parse_json(text, StepOrderSchema)
    if order is not None:
        if any(name not in known for name in order.order):
            return None
        mentioned = list(dict.fromkeys(order.order))
    else:
        mentioned = _step_names_in_list(text, step_names)
        if mentioned is not None and len(mentioned) != len(step_names):
            return None

    if not mentioned:
        return None
    return mentioned + [name for name in step_names if name not in mentioned]


class _AgentResolver:
    """Matches agent ids exactly, then case-insensitively."""

    def __init__(self, known_agent_ids: Collection[str]):
        self._exact = set(known_agent_ids)
        self._folded = {agent_id.lower(): agent_id for agent_id in known_agent_ids}

    def resolve(self, candidate: str) -> str | None:
        candidate = candidate.strip(_DECORATION)
        if candidate in self._exact:
            return candidate
        return self._folded.get(candidate.lower())


def _parse_json(text: str, schema: type[BaseModel]):
    for candidate in _json_candidates(text):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        try:
            return schema.model_validate(data)
        except ValidationError:
            continue
    return None


def _json_candidates(text: str) -> list[str]:
    candidates = [m.group(1).strip() for m in _FENCED_BLOCK.finditer(text)]
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])
    return candidates


def _steps_from_schema(plan: WorkflowPlanSchema, resolver: _AgentResolver) -> list[StructuralStep]:
    steps = []
    for entry in plan.steps:
        agent_id = resolver.resolve(entry.agent_id)
        name = entry.name.strip()
        if agent_id is None or not name:
            continue
        collaborators = _resolve_collaborators(entry.collaborators, agent_id, resolver)
        steps.append(StructuralStep(
            name=name,
            agent_id=agent_id,
            requires_coordination=(
                entry.requires_coordination
                or bool(collaborators)
                or "coordination" in name.lower()
            ),
            collaborator_ids=collaborators,
        ))
    return steps


def _steps_from_lines(text: str, resolver: _AgentResolver) -> list[StructuralStep]:
    steps = []
    for raw_line in text.splitlines():
        line = _LIST_PREFIX.sub("", raw_line.strip())
        if ":" not in line:
            continue

        name, _, rest = line.partition(":")
        name = name.strip(_DECORATION)
        agent_part, _, collaborator_part = rest.partition(COLLABORATOR_ARROW)
        # the whole text after the colon must be an agent id; only a
        # parenthesised note may follow it
        agent_text = _TRAILING_NOTE.sub("", agent_part).strip(_DECORATION).rstrip(".,;")
        if not name or not agent_text:
            continue

        agent_id = resolver.resolve(agent_text)
        if agent_id is None:
            continue

        collaborators = _resolve_collaborators(
            collaborator_part.split(","), agent_id, resolver
        )
        steps.append(StructuralStep(
            name=name,
            agent_id=agent_id,
            requires_coordination="coordination" in name.lower() or bool(collaborators),
            collaborator_ids=collaborators,
        ))
    return steps


def _resolve_collaborators(
    candidates: list[str],
    agent_id: str,
    resolver: _AgentResolver,
) -> tuple[str, ...]:
    resolved = []
    for candidate in candidates:
        collaborator = resolver.resolve(candidate.strip())
        if collaborator and collaborator != agent_id and collaborator not in resolved:
            resolved.append(collaborator)
    return tuple(resolved)


def _with_unique_names(steps: list[StructuralStep]) -> list[StructuralStep]:
    used: set[str] = set()
    unique = []
    for step in steps:
        name, n = step.name, 2
        while name in used:
            name = f"{step.name} ({n})"
            n += 1
        used.add(name)
        unique.append(step if name == step.name else replace(step, name=name))
    return unique


def _step_names_in_list(text: str, step_names: list[str]) -> list[str] | None:
    """Step names from list-item lines, or None if any item is ambiguous.

    Lines that are not list items (prose) are ignored. Each item must name
    exactly one step, and no step may be named twice.
    """
    patterns = {
        name: re.compile(rf"(?<!\w){re.escape(name)}(?!\w)", re.IGNORECASE)
        for name in step_names
    }
    ordered: list[str] = []
    for raw_line in text.splitlines():
        if not _LIST_PREFIX.match(raw_line):
            continue
        found = [name for name, pattern in patterns.items() if pattern.search(raw_line)]
        # "Security Review" also matches the step "Security"
        found = [
            name for name in found
            if not any(name != other and name.lower() in other.lower() for other in found)
        ]
        if len(found) != 1 or found[0] in ordered:
            return None
        ordered.append(found[0])
    return ordered
