"""Frontmatter and markdown linting for agent, command and skill files."""

from .frontmatter import Frontmatter, parse_frontmatter
from .linter import apply_fixes, get_lint_status_summary, lint_workflow_file
from .markdown import validate_markdown_content
from .tool_names import BUILTIN_TOOLS, is_valid_tool, normalize_tools
from .types import (
    LintDiagnostic,
    LintResult,
    LintStatus,
    LintStatusSummary,
    Severity,
    WorkflowKind,
)
from .validators import validate_agent_frontmatter, validate_skill_frontmatter

__all__ = [
    "BUILTIN_TOOLS",
    "Frontmatter",
    "LintDiagnostic",
    "LintResult",
    "LintStatus",
    "LintStatusSummary",
    "Severity",
    "WorkflowKind",
    "apply_fixes",
    "get_lint_status_summary",
    "is_valid_tool",
    "lint_workflow_file",
    "normalize_tools",
    "parse_frontmatter",
    "validate_agent_frontmatter",
    "validate_markdown_content",
    "validate_skill_frontmatter",
]
