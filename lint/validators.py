"""Frontmatter schema validation for agents, commands and skills.

Commands and skills share one schema; agents have their own. Validators only
read the untyped frontmatter mapping and return diagnostics in field order;
they never mutate the input.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from .frontmatter import FrontmatterValue, insert_field_line, replace_field_value
from .tool_names import normalize_tools, unknown_tools
from .types import LintDiagnostic, Severity

VALID_MODELS = ("sonnet", "opus", "haiku", "inherit")
VALID_PERMISSION_MODES = ("default", "acceptEdits", "dontAsk", "bypassPermissions", "plan")
VALID_CONTEXT_VALUES = ("fork",)
SKILL_BOOLEAN_FIELDS = ("disable-model-invocation", "user-invocable")

NAME_RE = re.compile(r"^[a-z][a-z0-9-]*$")
MAX_NAME_LENGTH = 64

Frontmatter = dict[str, FrontmatterValue]


def suggest_name(name: str) -> str:
    """Turn an arbitrary name into a lowercase hyphenated slug."""
    slug = re.sub(r"[^a-z0-9-]", "-", name.lower())
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def _set_value_fix(field: str, value: str) -> Callable[[str], str]:
    def fix(content: str) -> str:
        return replace_field_value(content, field, value)

    return fix


def _insert_line_fix(line: str, after_field: str | None) -> Callable[[str], str]:
    def fix(content: str) -> str:
        return insert_field_line(content, line, after_field=after_field)

    return fix


def _fill_field_fix(
    data: Frontmatter, field: str, placeholder: str, after_field: str | None
) -> Callable[[str], str]:
    """Set an empty field in place, or insert it when the key is absent."""
    if field in data:
        return _set_value_fix(field, placeholder)
    return _insert_line_fix(f"{field}: {placeholder}", after_field=after_field)


def _error(field: str, message: str, **kwargs: Any) -> LintDiagnostic:
    return LintDiagnostic(severity=Severity.ERROR, field=field, message=message, **kwargs)


def _warning(field: str, message: str, **kwargs: Any) -> LintDiagnostic:
    return LintDiagnostic(severity=Severity.WARNING, field=field, message=message, **kwargs)


def _check_name_value(name: FrontmatterValue) -> list[LintDiagnostic]:
    if not isinstance(name, str):
        return [_error("name", "'name' must be a string")]

    if not NAME_RE.match(name):
        suggested = suggest_name(name)
        fixable = bool(NAME_RE.match(suggested))
        return [
            _warning(
                "name",
                "'name' should use lowercase letters, numbers, and hyphens only",
                suggestion=suggested,
                fixable=fixable,
                fix=_set_value_fix("name", suggested) if fixable else None,
            )
        ]

    if len(name) > MAX_NAME_LENGTH:
        return [_error("name", f"'name' must be {MAX_NAME_LENGTH} characters or less")]

    return []


def _check_description(data: Frontmatter, noun: str, reason: str) -> list[LintDiagnostic]:
    description = data.get("description")
    if not description:
        placeholder = f"TODO - Add a description for this {noun}"
        return [
            _warning(
                "description",
                f"'description' is recommended {reason}",
                suggestion="Add a description field to the frontmatter",
                fixable=True,
                fix=_fill_field_fix(data, "description", placeholder, after_field="name"),
            )
        ]
    if not isinstance(description, str):
        return [_error("description", "'description' must be a string")]
    return []


def _check_tools(data: Frontmatter, field: str) -> list[LintDiagnostic]:
    if field not in data:
        return []

    tools = normalize_tools(data[field])
    if tools is None:
        return [_error(field, f"'{field}' must be an array or comma-separated string")]

    return [
        _warning(
            field,
            f"Unknown tool '{tool}' - check spelling or ensure it's a valid MCP tool",
        )
        for tool in unknown_tools(tools)
    ]


def _check_enum(
    data: Frontmatter,
    field: str,
    valid: tuple[str, ...],
    fallback: str,
    case_insensitive: bool = False,
) -> list[LintDiagnostic]:
    if field not in data:
        return []

    value = data[field]
    if not isinstance(value, str):
        return [_error(field, f"'{field}' must be a string")]

    candidate = value.lower() if case_insensitive else value
    if candidate in valid:
        return []

    return [
        _error(
            field,
            f"Invalid {field} '{value}'. Valid values: {', '.join(valid)}",
            suggestion=fallback,
            fixable=True,
            fix=_set_value_fix(field, fallback),
        )
    ]


def _check_model(data: Frontmatter) -> list[LintDiagnostic]:
    return _check_enum(data, "model", VALID_MODELS, "sonnet", case_insensitive=True)


def validate_skill_frontmatter(data: Frontmatter) -> list[LintDiagnostic]:
    """Validate command/skill frontmatter.

    Args:
        data: Parsed frontmatter mapping.

    Returns:
        Diagnostics in field order.
    """
    diagnostics: list[LintDiagnostic] = []

    if "name" in data:
        diagnostics.extend(_check_name_value(data["name"]))

    diagnostics.extend(
        _check_description(data, "skill", "so Claude knows when to use the skill")
    )

    if "argument-hint" in data and not isinstance(data["argument-hint"], str):
        diagnostics.append(_error("argument-hint", "'argument-hint' must be a string"))

    for field in SKILL_BOOLEAN_FIELDS:
        if field in data and not isinstance(data[field], bool):
            diagnostics.append(_error(field, f"'{field}' must be a boolean (true/false)"))

    diagnostics.extend(_check_tools(data, "allowed-tools"))
    diagnostics.extend(_check_model(data))
    diagnostics.extend(_check_enum(data, "context", VALID_CONTEXT_VALUES, "fork"))

    if "agent" in data:
        if data.get("context") != "fork":
            diagnostics.append(
                _warning("agent", "'agent' field is only used when 'context: fork' is set")
            )
        elif not isinstance(data["agent"], str):
            diagnostics.append(
                _error(
                    "agent",
                    "'agent' must be a string (e.g., 'Explore', 'Plan', 'general-purpose')",
                )
            )

    return diagnostics


def validate_agent_frontmatter(data: Frontmatter) -> list[LintDiagnostic]:
    """Validate agent (subagent) frontmatter.

    Args:
        data: Parsed frontmatter mapping.

    Returns:
        Diagnostics in field order.
    """
    diagnostics: list[LintDiagnostic] = []

    if not data.get("name"):
        diagnostics.append(
            _warning(
                "name",
                "'name' is recommended for agents",
                suggestion="Add a name field to the frontmatter",
                fixable=True,
                fix=_fill_field_fix(data, "name", "TODO - Add agent name", after_field=None),
            )
        )
    else:
        diagnostics.extend(_check_name_value(data["name"]))

    diagnostics.extend(
        _check_description(data, "agent", "- Claude uses it to decide when to delegate tasks")
    )

    diagnostics.extend(_check_tools(data, "tools"))
    diagnostics.extend(_check_tools(data, "disallowedTools"))
    diagnostics.extend(_check_model(data))
    diagnostics.extend(
        _check_enum(data, "permissionMode", VALID_PERMISSION_MODES, "default")
    )

    if "skills" in data and not isinstance(data["skills"], list):
        diagnostics.append(_error("skills", "'skills' must be an array of skill names"))

    return diagnostics
