"""Lint entry points for workflow markdown files."""

from __future__ import annotations

from typing import Iterable

from utils import get_logger

from .frontmatter import BOM, DELIMITER, parse_frontmatter
from .markdown import validate_markdown_content
from .types import (
    LintDiagnostic,
    LintResult,
    LintStatus,
    LintStatusSummary,
    Severity,
    WorkflowKind,
)
from .validators import validate_agent_frontmatter, validate_skill_frontmatter

logger = get_logger(__name__)


def _missing_frontmatter(content: str) -> LintDiagnostic:
    if content.lstrip(BOM).strip().startswith(DELIMITER):
        return LintDiagnostic(
            severity=Severity.WARNING,
            field="frontmatter",
            line=1,
            message="Frontmatter block is not closed with '---'",
            suggestion="Add a closing --- line after the frontmatter fields",
        )
    return LintDiagnostic(
        severity=Severity.WARNING,
        field="frontmatter",
        message="Missing frontmatter delimiter '---' at start of file",
        suggestion="Add YAML frontmatter between --- delimiters at the top of the file",
    )


def _bucket(diagnostics: Iterable[LintDiagnostic]) -> LintResult:
    errors: list[LintDiagnostic] = []
    warnings: list[LintDiagnostic] = []
    info: list[LintDiagnostic] = []
    for diagnostic in diagnostics:
        if diagnostic.severity is Severity.ERROR:
            errors.append(diagnostic)
        elif diagnostic.severity is Severity.WARNING:
            warnings.append(diagnostic)
        else:
            info.append(diagnostic)
    return LintResult(errors=tuple(errors), warnings=tuple(warnings), info=tuple(info))


def lint_workflow_file(content: str, kind: str | WorkflowKind) -> LintResult:
    """Lint an agent, command or skill markdown file.

    Frontmatter is validated against the schema for ``kind`` (commands and
    skills share one). When there is no usable frontmatter block a warning is
    reported instead and only the markdown checks run.

    Args:
        content: Full file content.
        kind: "agent", "command" or "skill".

    Returns:
        Diagnostics bucketed by severity.

    Raises:
        ValueError: If ``kind`` is not a known workflow kind.
    """
    workflow_kind = WorkflowKind.parse(kind)
    diagnostics: list[LintDiagnostic] = []

    frontmatter = parse_frontmatter(content)
    if frontmatter is None:
        diagnostics.append(_missing_frontmatter(content))
    elif workflow_kind is WorkflowKind.AGENT:
        diagnostics.extend(validate_agent_frontmatter(frontmatter.data))
    else:
        diagnostics.extend(validate_skill_frontmatter(frontmatter.data))

    diagnostics.extend(validate_markdown_content(content))
    return _bucket(diagnostics)


def _pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def get_lint_status_summary(result: LintResult) -> LintStatusSummary:
    """Summarize a lint result for a status badge.

    Errors take priority over warnings; info never shows up in the summary.
    """
    if result.errors:
        return LintStatusSummary(LintStatus.ERRORS, _pluralize(len(result.errors), "error"))
    if result.warnings:
        return LintStatusSummary(
            LintStatus.WARNINGS, _pluralize(len(result.warnings), "warning")
        )
    return LintStatusSummary(LintStatus.VALID, "Valid")


def apply_fixes(
    content: str, kind: str | WorkflowKind, max_passes: int = 20
) -> tuple[str, list[LintDiagnostic]]:
    """Apply fixable diagnostics one at a time, re-linting after each fix.

    Args:
        content: Full file content.
        kind: Workflow kind used for linting.
        max_passes: Upper bound on the number of fixes applied.

    Returns:
        The fixed content and the diagnostics whose fixes were applied.
    """
    applied: list[LintDiagnostic] = []
    for _ in range(max_passes):
        result = lint_workflow_file(content, kind)
        for diagnostic in result.fixable:
            fixed = diagnostic.apply(content)
            if fixed != content:
                logger.debug(f"Applied fix for '{diagnostic.field}': {diagnostic.message}")
                content = fixed
                applied.append(diagnostic)
                break
        else:
            break
    return content, applied
