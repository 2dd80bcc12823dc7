"""Structural checks for the markdown body of workflow files."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import reduce

from .frontmatter import find_closing_delimiter
from .types import LintDiagnostic, Severity

HEADING_RE = re.compile(r"^(#{1,6})\s+")
FENCE = "```"


@dataclass(frozen=True)
class _ScanState:
    diagnostics: tuple[LintDiagnostic, ...] = ()
    has_h1: bool = False
    last_heading_level: int = 0
    open_fence_line: int | None = None


def _is_closing_fence(stripped: str) -> bool:
    return stripped.startswith(FENCE) and stripped.strip("`") == ""


def _step(state: _ScanState, numbered_line: tuple[int, str]) -> _ScanState:
    line_number, line = numbered_line
    stripped = line.strip()

    if state.open_fence_line is not None:
        if _is_closing_fence(stripped):
            return replace(state, open_fence_line=None)
        return state

    if stripped.startswith(FENCE):
        return replace(state, open_fence_line=line_number)

    match = HEADING_RE.match(line)
    if not match:
        return state

    level = len(match.group(1))
    emitted: list[LintDiagnostic] = []

    if level == 1 and state.has_h1:
        emitted.append(
            LintDiagnostic(
                severity=Severity.WARNING,
                line=line_number,
                message="Multiple H1 headings found - consider using only one main heading",
            )
        )

    if state.last_heading_level > 0 and level > state.last_heading_level + 1:
        emitted.append(
            LintDiagnostic(
                severity=Severity.INFO,
                line=line_number,
                message=(
                    f"Heading jumps from H{state.last_heading_level} to H{level} "
                    "- consider not skipping heading levels"
                ),
            )
        )

    return replace(
        state,
        diagnostics=state.diagnostics + tuple(emitted),
        has_h1=state.has_h1 or level == 1,
        last_heading_level=level,
    )


def content_start_index(lines: list[str]) -> int:
    """Index of the first line after the frontmatter block (0 when there is none)."""
    end_index = find_closing_delimiter(lines)
    return 0 if end_index is None else end_index + 1


def validate_markdown_content(content: str) -> tuple[LintDiagnostic, ...]:
    """Check heading structure and code fences of the document body.

    Headings inside fenced code blocks are ignored. A fence opened but never
    closed before the end of the file is reported at its opening line.

    Args:
        content: Full file content, frontmatter included.

    Returns:
        Diagnostics in the order they were found.
    """
    lines = content.split("\n")
    start = content_start_index(lines)
    numbered = ((index + 1, lines[index]) for index in range(start, len(lines)))
    final = reduce(_step, numbered, _ScanState())

    if final.open_fence_line is None:
        return final.diagnostics

    return final.diagnostics + (
        LintDiagnostic(
            severity=Severity.WARNING,
            line=final.open_fence_line,
            message="Unclosed code block",
        ),
    )
