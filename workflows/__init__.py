"""Discovery of agent, command and skill files and their dependencies."""

from .extract import build_dependencies
from .naming import (
    ParsedWorkflowName,
    group_workflows_by_namespace,
    infer_workflow_kind,
    parse_workflow_name,
)
from .scanner import WorkflowScanner
from .types import (
    AgentInfo,
    CommandInfo,
    SkillInfo,
    ValidationError,
    WorkflowGraph,
    WorkflowNode,
)

__all__ = [
    "AgentInfo",
    "CommandInfo",
    "ParsedWorkflowName",
    "SkillInfo",
    "ValidationError",
    "WorkflowGraph",
    "WorkflowNode",
    "WorkflowScanner",
    "build_dependencies",
    "group_workflows_by_namespace",
    "infer_workflow_kind",
    "parse_workflow_name",
]
