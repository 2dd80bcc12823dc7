"""Data models for workflow file linting."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


class Severity(Enum):
    """Severity of a lint diagnostic. Only ERROR affects validity."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class WorkflowKind(Enum):
    """Kind of workflow definition file being linted."""

    AGENT = "agent"
    COMMAND = "command"
    SKILL = "skill"

    @classmethod
    def parse(cls, value: str | WorkflowKind) -> WorkflowKind:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown workflow kind '{value}'. Valid kinds: {valid}") from None


class LintStatus(Enum):
    VALID = "valid"
    WARNINGS = "warnings"
    ERRORS = "errors"


@dataclass(frozen=True)
class LintDiagnostic:
    """A single finding about a workflow file.

    Attributes:
        severity: How serious the finding is.
        message: Human-readable description.
        field: Frontmatter field the finding is about, if any.
        line: 1-based line number, if known.
        column: 1-based column, if known.
        suggestion: Suggested replacement value or remediation text.
        fixable: Whether ``fix`` can correct the finding automatically.
        fix: Pure function from the original file content to corrected content.
    """

    severity: Severity
    message: str
    field: str | None = None
    line: int | None = None
    column: int | None = None
    suggestion: str | None = None
    fixable: bool = False
    fix: Callable[[str], str] | None = dataclasses.field(default=None, compare=False, repr=False)

    def apply(self, content: str) -> str:
        """Apply this diagnostic's fix, returning content unchanged if there is none."""
        if self.fix is None:
            return content
        return self.fix(content)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "severity": self.severity.value,
            "message": self.message,
            "fixable": self.fixable,
        }
        for key in ("field", "line", "column", "suggestion"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class LintResult:
    """Diagnostics of one lint run bucketed by severity."""

    errors: tuple[LintDiagnostic, ...] = ()
    warnings: tuple[LintDiagnostic, ...] = ()
    info: tuple[LintDiagnostic, ...] = ()

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def diagnostics(self) -> tuple[LintDiagnostic, ...]:
        return self.errors + self.warnings + self.info

    @property
    def fixable(self) -> tuple[LintDiagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.fixable and d.fix is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [d.to_dict() for d in self.errors],
            "warnings": [d.to_dict() for d in self.warnings],
            "info": [d.to_dict() for d in self.info],
        }


@dataclass(frozen=True)
class LintStatusSummary:
    status: LintStatus
    text: str
