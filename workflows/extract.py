"""Detect runtime dependencies in the markdown body of workflow files.

Every detector works on the full file content. Agent, command and skill
detectors only report ids that exist in the scanned graph, so prose that merely
looks like a reference is ignored.
"""

from __future__ import annotations

import re
from typing import Iterable

from diagram.types import BackgroundTaskMetadata, CliAppMetadata, DependencyGraph, McpTool

MCP_MENTION_RE = re.compile(r"@mcp[_-]?([a-zA-Z0-9_-]+)")

AGENT_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"uses?\s+(?:the\s+)?([a-z][a-z0-9-]*)\s+agent",
        r"spawn(?:ed)?\s+(?:by\s+)?`?([a-z][a-z0-9-]*)`?",
        r"launch(?:es)?\s+(?:\d+-?\d*\s+)?(?:the\s+)?([a-z][a-z0-9-]*)\s+agents?",
        r"Task.*?agent.*?`([a-z][a-z0-9-]*)`",
        r"fresh\s+([a-z][a-z0-9-]*)\s+agent",
        r"\*\*([a-z][a-z0-9-]*)\*\*\s+agent",
        r"agents/([a-z][a-z0-9-]*)\.md",
        r"\*\*(?:.*?)?([a-z][a-z0-9-]*)\s+Agent:\*\*",
    )
)

COMMAND_RE = re.compile(r"/([a-z][a-z0-9:-]*)", re.IGNORECASE)

SKILL_PATTERNS = (
    re.compile(r"skill:\s*[\"']([a-z][a-z0-9-]*)[\"']", re.IGNORECASE),
    re.compile(r"(?:invoke|use)\s+(?:the\s+)?([a-z][a-z0-9-]*)\s+skill", re.IGNORECASE),
)

BASH_TOOL_RE = re.compile(r"Bash\(([a-z][a-z0-9-]*)[\s:)]")
BASH_BLOCK_RE = re.compile(r"```bash\n(.*?)```", re.DOTALL)
CLI_APPS = (
    "aws",
    "kubectl",
    "gh",
    "docker",
    "terraform",
    "helm",
    "git",
    "npm",
    "yarn",
    "bun",
    "curl",
    "jq",
    "dy",
)
CLI_LINE_RE = re.compile(rf"^({'|'.join(CLI_APPS)})\s+\S")
MAX_COMMAND_LENGTH = 60
MAX_COMMANDS_PER_APP = 5
MAX_DESCRIPTION_LENGTH = 80

BACKGROUND_AGENT_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(?:spawn|run|start|use|maintain)\s+(?:a\s+)?background[- ]agent\s+(?:to\s+)?([^.!?\n]+)",
        r"background[- ]agent\s+(?:that\s+|which\s+|to\s+)?([^.!?\n]+)",
        r"(?:as|in)\s+(?:a\s+)?background\s+agent[,.]?\s*([^.!?\n]*)",
    )
)
PARALLEL_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"spawns?\s+parallel\s+([^,.\n]+)",
        r"(?:launch|run|spawn)\s+(?:\d+\s+)?(?:agents?\s+)?in\s+parallel\s+(?:to\s+)?([^.!?\n:]+)",
        r"parallel\s+agents?\s+(?:for|to)\s+([^.!?\n:]+)",
        r"(?:launch|run|spawn)\s+\d+\s+parallel\s+\S+\s+agents?\s+(?:in\s+)?([^.!?\n:]+)",
    )
)
BACKGROUND_TASKS_RE = re.compile(r"launch(?:es)?\s+background\s+tasks?", re.IGNORECASE)
ASYNC_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(?:start|trigger|initiate)\s+(?:a\s+)?(?:long[- ]running|async)\s+"
        r"(?:task|operation|process)\s+(?:to\s+|for\s+)?([^.!?\n]+)",
        r"(?:as\s+)?(?:an?\s+)?async\s+(?:task|operation)\s*[,:]?\s*([^.!?\n]*)",
        r"run(?:s|ning)?\s+in\s+(?:the\s+)?background[,.]?\s*([^.!?\n]*)",
    )
)
FRONTMATTER_DESCRIPTION_RE = re.compile(r"^---\n(.*?)\n---", re.DOTALL)


def _known_matches(
    patterns: Iterable[re.Pattern[str]], content: str, known_ids: Iterable[str]
) -> list[str]:
    known = set(known_ids)
    found: dict[str, None] = {}
    for pattern in patterns:
        for match in pattern.finditer(content):
            candidate = match.group(1).lower()
            if candidate in known:
                found.setdefault(candidate)
    return list(found)


def extract_mcp_servers(content: str) -> list[str]:
    """Servers mentioned as ``@mcp-<server>`` or ``@mcp_<server>``."""
    return list(dict.fromkeys(m.group(1) for m in MCP_MENTION_RE.finditer(content)))


def extract_agent_invocations(content: str, agent_ids: Iterable[str]) -> list[str]:
    return _known_matches(AGENT_PATTERNS, content, agent_ids)


def extract_command_invocations(content: str, command_ids: Iterable[str]) -> list[str]:
    """Slash command references such as ``/deploy`` or ``/gsd:plan-phase``."""
    return _known_matches((COMMAND_RE,), content, command_ids)


def extract_skill_invocations(content: str, skill_ids: Iterable[str]) -> list[str]:
    return _known_matches(SKILL_PATTERNS, content, skill_ids)


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def extract_cli_apps(content: str, tools: Iterable[str]) -> list[CliAppMetadata]:
    """CLI applications allowed through ``Bash(app:...)`` or used in bash blocks.

    Each app keeps up to five example command lines, cut at 60 characters.
    Apps are sorted by name.
    """
    apps: dict[str, list[str]] = {}
    for tool in tools:
        match = BASH_TOOL_RE.search(tool)
        if match:
            apps.setdefault(match.group(1), [])

    for block in BASH_BLOCK_RE.finditer(content):
        for line in block.group(1).split("\n"):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            match = CLI_LINE_RE.match(stripped)
            if not match:
                continue
            command = stripped[:MAX_COMMAND_LENGTH]
            if len(stripped) > MAX_COMMAND_LENGTH:
                command += "..."
            examples = apps.setdefault(match.group(1), [])
            if command not in examples:
                examples.append(command)

    return [
        CliAppMetadata(name=name, commands=commands[:MAX_COMMANDS_PER_APP])
        for name, commands in sorted(apps.items())
    ]


def truncate_description(text: str) -> str:
    """Collapse whitespace and cut to 80 characters."""
    return _truncate(" ".join(text.split()), MAX_DESCRIPTION_LENGTH)


def frontmatter_description(content: str) -> str:
    match = FRONTMATTER_DESCRIPTION_RE.match(content)
    if not match:
        return ""
    desc = re.search(r"^description:\s*(.+)$", match.group(1), re.MULTILINE)
    return desc.group(1).strip() if desc else ""


def _background_agents(content: str) -> list[BackgroundTaskMetadata]:
    tasks: list[BackgroundTaskMetadata] = []
    for pattern in BACKGROUND_AGENT_PATTERNS:
        for match in pattern.finditer(content):
            description = truncate_description(
                (match.group(1) or "").strip() or "Runs continuously in background"
            )
            if not any(t.description == description for t in tasks):
                tasks.append(BackgroundTaskMetadata("background-agent", description))
    return tasks


def _parallel_agents(content: str, frontmatter_desc: str) -> BackgroundTaskMetadata | None:
    if not re.search(r"parallel", content, re.IGNORECASE):
        return None
    if frontmatter_desc and re.search(r"parallel", frontmatter_desc, re.IGNORECASE):
        return BackgroundTaskMetadata("parallel-agents", truncate_description(frontmatter_desc))
    for pattern in PARALLEL_PATTERNS:
        for match in pattern.finditer(content):
            description = (match.group(1) or "").strip()
            if len(description) > 5:
                return BackgroundTaskMetadata(
                    "parallel-agents", truncate_description(description)
                )
    return BackgroundTaskMetadata("parallel-agents", "Multiple agents running concurrently")


def _async_task(content: str) -> BackgroundTaskMetadata | None:
    for pattern in ASYNC_PATTERNS:
        match = pattern.search(content)
        if match:
            description = (match.group(1) or "").strip() or "Non-blocking async operation"
            return BackgroundTaskMetadata("async-task", truncate_description(description))
    return None


def extract_background_tasks(content: str) -> list[BackgroundTaskMetadata]:
    """Background agents, parallel agents, background processes and async tasks.

    At most one parallel, one background-process and one async entry is
    reported. Async tasks are skipped when background processes were found.
    """
    frontmatter_desc = frontmatter_description(content)
    tasks = _background_agents(content)

    if not tasks and re.search(r"background[- ]agent", content, re.IGNORECASE):
        tasks.append(
            BackgroundTaskMetadata("background-agent", "Persistent agent running in background")
        )

    parallel = _parallel_agents(content, frontmatter_desc)
    if parallel is not None:
        tasks.append(parallel)

    if BACKGROUND_TASKS_RE.search(content):
        description = "Multiple background processes"
        if frontmatter_desc and re.search(r"background", frontmatter_desc, re.IGNORECASE):
            description = frontmatter_desc
        tasks.append(BackgroundTaskMetadata("background-tasks", truncate_description(description)))
    else:
        async_task = _async_task(content)
        if async_task is not None:
            tasks.append(async_task)

    return tasks


def classify_tools(tools: Iterable[str], skill_ids: Iterable[str]) -> DependencyGraph:
    """Sort a frontmatter tool list into built-in tools, MCP tools and skills.

    ``mcp__<server>__<tool>`` entries are MCP tools (``ALL`` for wildcards)
    and register their server. Entries naming a known skill are declared
    skills. Everything else counts as a built-in tool.
    """
    skills = set(skill_ids)
    deps = DependencyGraph()
    for tool in tools:
        if McpTool.is_mcp_name(tool):
            mcp_tool = McpTool.parse(tool)
            deps.mcp_tools.append(mcp_tool)
            if mcp_tool.server not in deps.mcp_servers:
                deps.mcp_servers.append(mcp_tool.server)
            deps.tools.append(tool)
        elif tool in skills or tool.lower() in skills:
            deps.skills.append(tool)
        else:
            deps.builtin_tools.append(tool)
            deps.tools.append(tool)
    return deps


def build_dependencies(
    content: str,
    tools: Iterable[str],
    agent_ids: Iterable[str],
    command_ids: Iterable[str],
    skill_ids: Iterable[str],
) -> DependencyGraph:
    """Declared dependencies from ``tools`` plus runtime usage found in ``content``."""
    tools = list(tools)
    skill_ids = list(skill_ids)
    deps = classify_tools(tools, skill_ids)

    for server in extract_mcp_servers(content):
        if server not in deps.mcp_servers:
            deps.mcp_servers.append(server)

    deps.agents = extract_agent_invocations(content, agent_ids)
    deps.commands = extract_command_invocations(content, command_ids)
    deps.skill_invocations = extract_skill_invocations(content, skill_ids)
    deps.cli_apps = list(extract_cli_apps(content, tools))
    deps.background_tasks = list(extract_background_tasks(content))
    return deps


