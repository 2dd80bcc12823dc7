"""Namespace parsing for workflow names and workflow-kind inference from paths."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol, TypeVar

from lint.types import WorkflowKind

DEFAULT_GROUP = "General"


@dataclass(frozen=True)
class ParsedWorkflowName:
    namespace: str | None
    section: str | None
    name: str
    full_path: tuple[str, ...]

    @property
    def display_name(self) -> str:
        return self.name


def _split_at(cleaned: str, index: int) -> ParsedWorkflowName:
    namespace, item = cleaned[:index], cleaned[index + 1 :]
    return ParsedWorkflowName(namespace, None, item, (namespace, item))


def parse_workflow_name(name: str) -> ParsedWorkflowName:
    """Split a workflow name into namespace, optional section and item name.

    Separators are tried in priority order:

    - ``gsd:plan-phase`` -> namespace ``gsd``, name ``plan-phase``
    - ``gsd:milestone.audit`` -> namespace ``gsd``, section ``milestone``, name ``audit``
    - ``vidyard.work-report`` -> namespace ``vidyard``, name ``work-report``
    - ``vidyard-debug_prod`` -> namespace ``vidyard-debug``, name ``prod`` (last ``_``)
    - ``my-long-name`` -> namespace ``my-long``, name ``name`` (last ``-``)
    - ``deploy`` -> no namespace

    A leading ``/`` is ignored. Underscores and hyphens only split when they
    are neither the first nor the last character.
    """
    cleaned = name[1:] if name.startswith("/") else name

    if ":" in cleaned:
        namespace, _, rest = cleaned.partition(":")
        if "." in rest:
            section, _, item = rest.partition(".")
            return ParsedWorkflowName(namespace, section, item, (namespace, section, item))
        return ParsedWorkflowName(namespace, None, rest, (namespace, rest))

    if "." in cleaned:
        namespace, _, rest = cleaned.partition(".")
        return ParsedWorkflowName(namespace, None, rest, (namespace, rest))

    for separator in ("_", "-"):
        index = cleaned.rfind(separator)
        if 0 < index < len(cleaned) - 1:
            return _split_at(cleaned, index)

    return ParsedWorkflowName(None, None, cleaned, (cleaned,))


class _Named(Protocol):
    name: str


T = TypeVar("T", bound=_Named)


def group_workflows_by_namespace(workflows: Iterable[T]) -> dict[str, list[T]]:
    """Group workflows by parsed namespace; names without one go to "General"."""
    groups: dict[str, list[T]] = {}
    for workflow in workflows:
        key = parse_workflow_name(workflow.name).namespace or DEFAULT_GROUP
        groups.setdefault(key, []).append(workflow)
    return groups


def infer_workflow_kind(path: str | Path) -> WorkflowKind | None:
    """Guess the workflow kind of a file from its location.

    Only ``SKILL.md`` files are skills; other files below a ``skills``
    directory are reference material. Files below an ``agents`` or
    ``commands`` directory are agents or commands. Anything else is unknown.
    """
    path = Path(path)
    if path.name == "SKILL.md":
        return WorkflowKind.SKILL
    for parent in path.parents:
        if parent.name == "agents":
            return WorkflowKind.AGENT
        if parent.name == "commands":
            return WorkflowKind.COMMAND
        if parent.name == "skills":
            return None
    return None
