import textwrap

from diagram import McpTool
from workflows import build_dependencies
from workflows.extract import (
    classify_tools,
    extract_agent_invocations,
    extract_background_tasks,
    extract_cli_apps,
    extract_command_invocations,
    extract_mcp_servers,
    extract_skill_invocations,
    truncate_description,
)


def _doc(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


class TestClassifyTools:
    def test_builtin_mcp_and_skill_entries(self):
        deps = classify_tools(
            ["Read", "mcp__github__create_issue", "mcp__slack__*", "lint"], skill_ids=["lint"]
        )

        assert deps.builtin_tools == ["Read"]
        assert deps.mcp_tools == [
            McpTool("mcp__github__create_issue", "github"),
            McpTool("ALL", "slack"),
        ]
        assert deps.mcp_servers == ["github", "slack"]
        assert deps.skills == ["lint"]
        assert deps.tools == ["Read", "mcp__github__create_issue", "mcp__slack__*"]


class TestInvocations:
    def test_agents_only_known_ids(self):
        content = "First use the planner agent, then spawn `builder`. Use the magic agent."

        found = extract_agent_invocations(content, ["planner", "builder"])

        assert found == ["planner", "builder"]

    def test_agent_file_reference(self):
        content = "See agents/reviewer.md for details."

        assert extract_agent_invocations(content, ["reviewer"]) == ["reviewer"]

    def test_agent_matches_are_deduplicated(self):
        content = "Use the planner agent. Later, use planner agent again."

        assert extract_agent_invocations(content, ["planner"]) == ["planner"]

    def test_commands(self):
        content = "Run /gsd:plan-phase then /deploy. Paths like /usr/bin are ignored."

        found = extract_command_invocations(content, ["deploy", "gsd:plan-phase"])

        assert found == ["gsd:plan-phase", "deploy"]

    def test_skills(self):
        content = 'Call Skill with skill: "lint" and invoke the review skill.'

        assert extract_skill_invocations(content, ["lint", "review", "other"]) == [
            "lint",
            "review",
        ]

    def test_mcp_mentions(self):
        content = "Query @mcp-github and @mcp_linear, then @mcp-github again."

        assert extract_mcp_servers(content) == ["github", "linear"]


class TestCliApps:
    def test_bash_restrictions_and_blocks(self):
        content = _doc(
            """
            ```bash
            # list open prs
            gh pr list --state open
            docker ps
            gh pr list --state open
            echo done
            ```
            """
        )

        apps = extract_cli_apps(content, ["Bash(git status:*)", "Read"])

        assert [app.name for app in apps] == ["docker", "gh", "git"]
        assert apps[0].commands == ["docker ps"]
        assert apps[1].commands == ["gh pr list --state open"]
        assert apps[2].commands == []

    def test_long_commands_are_cut(self):
        command = "kubectl get pods " + "x" * 80
        content = f"```bash\n{command}\n```\n"

        (app,) = extract_cli_apps(content, [])

        assert app.commands == [command[:60] + "..."]

    def test_at_most_five_examples(self):
        lines = "\n".join(f"git log -{i}" for i in range(8))
        content = f"```bash\n{lines}\n```\n"

        (app,) = extract_cli_apps(content, [])

        assert len(app.commands) == 5


class TestBackgroundTasks:
    def test_background_agent(self):
        content = "Spawn a background agent to watch the deploy logs. Then report."

        tasks = extract_background_tasks(content)

        assert tasks[0].type == "background-agent"
        assert tasks[0].description == "watch the deploy logs"

    def test_parallel_prefers_frontmatter_description(self):
        content = _doc(
            """
            ---
            description: Reviews files with parallel agents
            ---
            Launch 3 agents in parallel to review each module.
            """
        )

        tasks = extract_background_tasks(content)

        assert [t.type for t in tasks] == ["parallel-agents"]
        assert tasks[0].description == "Reviews files with parallel agents"

    def test_parallel_from_body(self):
        content = "Launch agents in parallel to review each module separately."

        (task,) = extract_background_tasks(content)

        assert task.type == "parallel-agents"
        assert task.description == "review each module separately"

    def test_background_tasks_suppress_async(self):
        content = "This command launches background tasks and runs in the background."

        tasks = extract_background_tasks(content)

        assert [t.type for t in tasks] == ["background-tasks"]
        assert tasks[0].description == "Multiple background processes"

    def test_async_task(self):
        content = "Start a long-running task to rebuild the search index."

        (task,) = extract_background_tasks(content)

        assert task.type == "async-task"
        assert task.description == "rebuild the search index"

    def test_nothing_found(self):
        assert extract_background_tasks("Read the file and summarize it.") == []

    def test_truncate_description(self):
        text = "word  " * 30

        cut = truncate_description(text)

        assert len(cut) == 80
        assert cut.endswith("...")
        assert "  " not in cut


def test_build_dependencies_combines_declared_and_runtime():
    content = _doc(
        """
        ---
        name: shipper
        ---
        Use the builder agent, then run /deploy. Check @mcp-sentry.

        ```bash
        gh release create v1
        ```
        """
    )

    deps = build_dependencies(
        content,
        tools=["Read", "mcp__github__*"],
        agent_ids=["builder"],
        command_ids=["deploy"],
        skill_ids=[],
    )

    assert deps.builtin_tools == ["Read"]
    assert deps.mcp_servers == ["github", "sentry"]
    assert deps.agents == ["builder"]
    assert deps.commands == ["deploy"]
    assert [app.name for app in deps.cli_apps] == ["gh"]
    assert deps.background_tasks == []
