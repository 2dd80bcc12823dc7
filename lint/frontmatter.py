"""Minimal frontmatter parser used by the linter.

Only a single leading ``---`` delimited block is recognized. Values are kept
untyped (string, bool or list of strings) until the validators inspect them.
It is not a YAML parser: there are no nested mappings, block
scalars or escapes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

FrontmatterValue = Union[str, bool, list[str]]

DELIMITER = "---"
BOM = "\ufeff"

_QUOTE_EDGES_RE = re.compile(r"^[\"']|[\"']$")


@dataclass(frozen=True)
class Frontmatter:
    """Parsed frontmatter block.

    Attributes:
        data: Field values keyed by field name.
        start_line: 1-based line of the opening delimiter.
        end_line: 1-based line of the closing delimiter.
    """

    data: dict[str, FrontmatterValue]
    start_line: int
    end_line: int


def find_closing_delimiter(lines: list[str]) -> int | None:
    """Return the index of the closing delimiter, or None if the block is absent or open."""
    if not lines or lines[0].lstrip(BOM).strip() != DELIMITER:
        return None
    for i in range(1, len(lines)):
        if lines[i].strip() == DELIMITER:
            return i
    return None


def _strip_quote_edges(value: str) -> str:
    return _QUOTE_EDGES_RE.sub("", value)


def _coerce_scalar(value: str) -> FrontmatterValue:
    if value.startswith("[") and value.endswith("]"):
        return [_strip_quote_edges(item.strip()) for item in value[1:-1].split(",")]
    if value == "true":
        return True
    if value == "false":
        return False
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _collect_list_items(lines: list[str], start: int) -> tuple[list[str], int]:
    """Collect ``- item`` lines starting at ``start``.

    Blank and comment lines may sit between items. Returns the items and the
    index of the first line that was not consumed.
    """
    items: list[str] = []
    index = start
    consumed = start
    while index < len(lines):
        stripped = lines[index].strip()
        if stripped.startswith("-"):
            items.append(stripped[1:].strip())
            index += 1
            consumed = index
        elif stripped == "" or stripped.startswith("#"):
            index += 1
        else:
            break
    return items, consumed


def parse_frontmatter(content: str) -> Frontmatter | None:
    """Parse the leading frontmatter block of a markdown document.

    Args:
        content: Full file content.

    Returns:
        The parsed block, or None when the first line is not ``---`` or the
        block is never closed.
    """
    lines = content.split("\n")
    end_index = find_closing_delimiter(lines)
    if end_index is None:
        return None

    block = lines[1:end_index]
    data: dict[str, FrontmatterValue] = {}

    i = 0
    while i < len(block):
        line = block[i]
        stripped = line.strip()
        i += 1
        if not stripped or stripped.startswith("#"):
            continue

        key, sep, raw_value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = raw_value.strip()

        if value == "":
            items, consumed = _collect_list_items(block, i)
            if items:
                data[key] = items
                i = consumed
            else:
                data[key] = ""
            continue

        data[key] = _coerce_scalar(value)

    return Frontmatter(data=data, start_line=1, end_line=end_index + 1)


def _field_line_re(field: str) -> re.Pattern[str]:
    return re.compile(rf"^(\s*{re.escape(field)}\s*:[ \t]*)(.*?)(\r?)$")


def replace_field_value(content: str, field: str, value: str) -> str:
    """Replace the value of ``field`` inside the frontmatter block.

    Content without a closed frontmatter block, or without the field, is
    returned unchanged.
    """
    lines = content.split("\n")
    end_index = find_closing_delimiter(lines)
    if end_index is None:
        return content

    pattern = _field_line_re(field)
    for i in range(1, end_index):
        match = pattern.match(lines[i])
        if match:
            lines[i] = f"{match.group(1)}{value}{match.group(3)}"
            return "\n".join(lines)
    return content


def insert_field_line(content: str, line: str, after_field: str | None = None) -> str:
    """Insert ``line`` into the frontmatter block.

    The line goes right after ``after_field`` when that field is present,
    otherwise right after the opening delimiter. Content without a closed
    frontmatter block is returned unchanged.
    """
    lines = content.split("\n")
    end_index = find_closing_delimiter(lines)
    if end_index is None:
        return content

    position = 1
    if after_field is not None:
        pattern = _field_line_re(after_field)
        for i in range(1, end_index):
            if pattern.match(lines[i]):
                position = i + 1
                break

    newline_suffix = "\r" if lines[0].endswith("\r") else ""
    lines.insert(position, f"{line}{newline_suffix}")
    return "\n".join(lines)
