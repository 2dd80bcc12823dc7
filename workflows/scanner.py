"""Scan a config directory for agents, commands and skills."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from config import Config
from utils import get_logger

from .extract import build_dependencies
from .parser import list_markdown_files, list_skill_files, read_text, split_frontmatter, string_list
from .types import AgentInfo, CommandInfo, SkillInfo, ValidationError, WorkflowGraph

logger = get_logger(__name__)


@dataclass
class _ParsedFile:
    data: dict[str, object] = field(default_factory=dict)
    content: str = ""
    errors: list[ValidationError] = field(default_factory=list)


def _string_field(data: dict[str, object], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _check_metadata(data: dict[str, object]) -> list[ValidationError]:
    errors = []
    if not isinstance(data.get("name"), str) or not data.get("name"):
        errors.append(ValidationError("name", "Missing or invalid 'name' field in frontmatter"))
    if "model" in data and not isinstance(data["model"], str):
        errors.append(ValidationError("model", "'model' field should be a string"))
    if "tools" in data and not isinstance(data["tools"], (list, str)):
        errors.append(ValidationError("tools", "'tools' field should be an array"))
    return errors


async def _parse_file(path: Path, missing_severity: str) -> _ParsedFile:
    try:
        content = await read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return _ParsedFile(errors=[ValidationError("file", f"Could not read file: {e}", "error")])

    parsed = _ParsedFile(content=content)
    if not content.strip().startswith("---"):
        parsed.errors.append(
            ValidationError(
                "frontmatter", "Missing frontmatter opening delimiter '---'", missing_severity
            )
        )

    try:
        parsed.data, _ = split_frontmatter(content, strict=True)
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse frontmatter of {path}: {e}")
        parsed.errors.append(
            ValidationError("frontmatter", f"Failed to parse YAML frontmatter: {e}", "error")
        )
    return parsed


class WorkflowScanner:
    """Build a :class:`WorkflowGraph` from ``agents/``, ``commands/`` and ``skills/``.

    Layout of the scanned directory::

        <base_dir>/agents/<id>.md
        <base_dir>/commands/<id>.md
        <base_dir>/skills/<id>/SKILL.md
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self.base_dir = Path(base_dir or Config.WORKFLOWS_DIR).expanduser()

    async def load(self) -> WorkflowGraph:
        logger.debug(f"Scanning workflows in {self.base_dir}")
        agents, agent_contents = await self._scan_agents()
        commands, command_contents = await self._scan_commands()
        skills = await self._scan_skills()

        agent_ids = [a.id for a in agents]
        command_ids = [c.id for c in commands]
        skill_ids = [s.id for s in skills]

        for agent in agents:
            agent.dependencies = build_dependencies(
                agent_contents[agent.id],
                agent.tools,
                [i for i in agent_ids if i != agent.id],
                command_ids,
                skill_ids,
            )
        for command in commands:
            command.dependencies = build_dependencies(
                command_contents[command.id],
                command.allowed_tools,
                agent_ids,
                [i for i in command_ids if i != command.id],
                skill_ids,
            )

        logger.info(
            f"Loaded {len(agents)} agents, {len(commands)} commands, "
            f"{len(skills)} skills from {self.base_dir}"
        )
        return WorkflowGraph(agents=agents, commands=commands, skills=skills)

    async def _scan_agents(self) -> tuple[list[AgentInfo], dict[str, str]]:
        agents: list[AgentInfo] = []
        contents: dict[str, str] = {}
        for path in await list_markdown_files(self.base_dir / "agents"):
            parsed = await _parse_file(path, missing_severity="error")
            agent_id = path.stem
            agents.append(
                AgentInfo(
                    id=agent_id,
                    name=_string_field(parsed.data, "name", agent_id),
                    description=_string_field(parsed.data, "description"),
                    source_path=path,
                    tools=string_list(parsed.data.get("tools")),
                    model=_string_field(parsed.data, "model"),
                    validation_errors=parsed.errors + _check_metadata(parsed.data),
                )
            )
            contents[agent_id] = parsed.content
        return agents, contents

    async def _scan_commands(self) -> tuple[list[CommandInfo], dict[str, str]]:
        commands: list[CommandInfo] = []
        contents: dict[str, str] = {}
        for path in await list_markdown_files(self.base_dir / "commands"):
            parsed = await _parse_file(path, missing_severity="warning")
            command_id = path.stem
            tools = parsed.data.get("allowed-tools")
            if tools is None:
                tools = parsed.data.get("tools")
            commands.append(
                CommandInfo(
                    id=command_id,
                    name=_string_field(parsed.data, "name", command_id),
                    description=_string_field(parsed.data, "description"),
                    source_path=path,
                    allowed_tools=string_list(tools),
                    validation_errors=parsed.errors,
                )
            )
            contents[command_id] = parsed.content
        return commands, contents

    async def _scan_skills(self) -> list[SkillInfo]:
        skills: list[SkillInfo] = []
        for path in await list_skill_files(self.base_dir / "skills"):
            parsed = await _parse_file(path, missing_severity="warning")
            skill_id = path.parent.name
            skills.append(
                SkillInfo(
                    id=skill_id,
                    name=_string_field(parsed.data, "name", skill_id),
                    description=_string_field(parsed.data, "description"),
                    source_path=path,
                    validation_errors=parsed.errors,
                )
            )
        return skills
