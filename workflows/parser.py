"""File discovery and YAML frontmatter helpers for workflow files."""

from __future__ import annotations

import asyncio
from pathlib import Path

import aiofiles
import aiofiles.os
import yaml

from lint.tool_names import split_tool_list


def split_frontmatter(text: str, strict: bool = False) -> tuple[dict[str, object], str]:
    """Split a markdown file into its YAML frontmatter and body.

    Args:
        text: Full file content.
        strict: Re-raise YAML errors instead of treating the file as having no
            frontmatter.

    Returns:
        The frontmatter mapping (empty when absent) and the body.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, text

    end_idx = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        return {}, text

    yaml_text = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError:
        if strict:
            raise
        return {}, text

    if not isinstance(data, dict):
        return {}, body

    return data, body


def string_list(value: object) -> list[str]:
    """Tool lists may be YAML lists or comma-separated strings.

    Commas inside ``Bash(...)`` restrictions do not split.
    """
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        return split_tool_list(value)
    return []


def is_safe_name(name: str) -> bool:
    return ".." not in name and "/" not in name and "\\" not in name


async def read_text(path: Path) -> str:
    async with aiofiles.open(path, encoding="utf-8-sig") as handle:
        return await handle.read()


async def list_markdown_files(directory: Path) -> list[Path]:
    if not await aiofiles.os.path.exists(directory):
        return []

    def _collect() -> list[Path]:
        return sorted(p for p in directory.glob("*.md") if p.is_file() and is_safe_name(p.name))

    return await asyncio.to_thread(_collect)


async def list_skill_files(skills_dir: Path) -> list[Path]:
    if not await aiofiles.os.path.exists(skills_dir):
        return []

    def _collect() -> list[Path]:
        results: list[Path] = []
        for entry in sorted(skills_dir.iterdir()):
            if not entry.is_dir() or not is_safe_name(entry.name):
                continue
            candidate = entry / "SKILL.md"
            if candidate.is_file():
                results.append(candidate)
        return results

    return await asyncio.to_thread(_collect)
