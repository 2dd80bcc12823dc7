import json
import sys
import textwrap

import pytest

import main as wflens_main
from config import Config


class _DummyConsole:
    def __init__(self):
        self.lines: list[str] = []

    def print(self, *args, **kwargs):  # noqa: ARG002
        self.lines.append(" ".join(str(a) for a in args))


def _setup_common(monkeypatch, argv: list[str]):
    calls = {"error": [], "warning": [], "tables": [], "fixes": []}
    console = _DummyConsole()

    monkeypatch.setattr(sys, "argv", ["wflens", *argv])
    monkeypatch.setattr(wflens_main, "ensure_runtime_dirs", lambda create_logs=False: None)
    monkeypatch.setattr(wflens_main, "setup_logger", lambda: None)

    monkeypatch.setattr(
        wflens_main.terminal_ui,
        "print_error",
        lambda msg, title="Error": calls["error"].append((title, msg)),
    )
    monkeypatch.setattr(
        wflens_main.terminal_ui,
        "print_warning",
        lambda msg: calls["warning"].append(msg),
    )
    monkeypatch.setattr(
        wflens_main.terminal_ui,
        "print_workflow_table",
        lambda kind, rows: calls["tables"].append((kind, list(rows))),
    )
    monkeypatch.setattr(
        wflens_main.terminal_ui,
        "print_fixes_applied",
        lambda path, messages: calls["fixes"].extend(messages),
    )
    monkeypatch.setattr(wflens_main.terminal_ui, "console", console)

    return calls, console


def _write(path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")


@pytest.fixture
def workflows_dir(tmp_path):
    _write(
        tmp_path / "agents" / "reviewer.md",
        """
        ---
        name: reviewer
        description: Reviews code
        tools: Read, Grep
        model: gpt-4
        ---
        # Reviewer

        Use the builder agent, then run /gsd:ship.
        """,
    )
    _write(
        tmp_path / "agents" / "builder.md",
        """
        ---
        name: builder
        description: Builds things
        ---
        # Builder
        """,
    )
    _write(
        tmp_path / "commands" / "gsd:ship.md",
        """
        ---
        description: Ship a release
        ---
        # Ship

        # Checklist
        """,
    )
    return tmp_path


class TestLintCommand:
    def test_missing_path(self, monkeypatch, tmp_path):
        calls, _ = _setup_common(monkeypatch, ["lint", str(tmp_path / "missing.md")])

        assert wflens_main.main() == 2
        assert calls["error"][0][0] == "Lint Error"

    def test_errors_set_exit_code(self, monkeypatch, workflows_dir):
        _, console = _setup_common(monkeypatch, ["lint", str(workflows_dir / "agents")])

        assert wflens_main.main() == 1
        assert any("2 file(s) checked: 1 error(s)" in line for line in console.lines)

    def test_json_output(self, monkeypatch, capsys, workflows_dir):
        _setup_common(
            monkeypatch, ["lint", "--json", str(workflows_dir / "agents" / "reviewer.md")]
        )

        assert wflens_main.main() == 1

        (report,) = json.loads(capsys.readouterr().out)
        assert report["kind"] == "agent"
        assert report["status"] == "errors"
        assert report["valid"] is False
        assert report["errors"][0]["field"] == "model"
        assert report["errors"][0]["suggestion"] == "sonnet"

    def test_fix_rewrites_file(self, monkeypatch, workflows_dir):
        path = workflows_dir / "agents" / "reviewer.md"
        calls, _ = _setup_common(monkeypatch, ["lint", "--fix", str(path)])

        assert wflens_main.main() == 0
        assert "model: sonnet" in path.read_text(encoding="utf-8")
        assert len(calls["fixes"]) == 1

    def test_unknown_location_needs_type(self, monkeypatch, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("---\nname: x\n---\n", encoding="utf-8")
        calls, _ = _setup_common(monkeypatch, ["lint", str(path)])

        assert wflens_main.main() == 0
        assert calls["warning"]

    def test_skill_reference_documents_are_skipped(self, monkeypatch, capsys, tmp_path):
        _write(tmp_path / "skills" / "lint" / "SKILL.md", "---\ndescription: d\n---\n# Lint\n")
        _write(tmp_path / "skills" / "lint" / "references" / "api.md", "# API\n\n# Notes\n")
        _setup_common(monkeypatch, ["lint", "--json", str(tmp_path / "skills")])

        assert wflens_main.main() == 0

        (report,) = json.loads(capsys.readouterr().out)
        assert report["kind"] == "skill"
        assert report["path"].endswith("SKILL.md")

    def test_explicit_type(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("---\nname: x\ndescription: d\n---\n", encoding="utf-8")
        _setup_common(monkeypatch, ["lint", "--json", "--type", "skill", str(path)])

        assert wflens_main.main() == 0
        (report,) = json.loads(capsys.readouterr().out)
        assert report["status"] == "valid"


class TestGraphCommand:
    def test_mermaid_for_agent(self, monkeypatch, capsys, workflows_dir):
        _setup_common(monkeypatch, ["graph", "reviewer", "--dir", str(workflows_dir)])

        assert wflens_main.main() == 0

        out = capsys.readouterr().out
        assert out.startswith("graph TD\n")
        assert '  NA0["Agent: builder"]' in out
        assert '  C0["Command: gsd:ship"]' in out

    def test_mermaid_for_command_lists_dependents(self, monkeypatch, capsys, workflows_dir):
        _setup_common(monkeypatch, ["graph", "/gsd:ship", "--dir", str(workflows_dir)])

        assert wflens_main.main() == 0

        out = capsys.readouterr().out
        assert '  MAIN["Command: gsd:ship"]' in out
        assert '  A0["Agent: reviewer"]' in out

    def test_json_layout(self, monkeypatch, capsys, workflows_dir):
        _setup_common(
            monkeypatch,
            ["graph", "reviewer", "-f", "json", "--direction", "LR", "-d", str(workflows_dir)],
        )

        assert wflens_main.main() == 0

        diagram = json.loads(capsys.readouterr().out)
        ids = [n["id"] for n in diagram["nodes"]]
        assert ids == ["agent", "builtin-group", "agent-0", "command-0"]
        assert diagram["nodes"][0]["position"]["x"] == 0
        assert all(n["position"]["x"] > 0 for n in diagram["nodes"][1:])
        assert {e["source"] for e in diagram["edges"]} == {"agent"}

    def test_unknown_name(self, monkeypatch, workflows_dir):
        calls, _ = _setup_common(monkeypatch, ["graph", "nobody", "--dir", str(workflows_dir)])

        assert wflens_main.main() == 1
        assert calls["error"][0][0] == "Graph Error"


class TestListCommand:
    def test_tables_per_kind(self, monkeypatch, workflows_dir):
        calls, _ = _setup_common(monkeypatch, ["list", "--dir", str(workflows_dir)])

        assert wflens_main.main() == 0

        tables = dict(calls["tables"])
        assert list(tables) == ["agent", "command"]
        assert [(row[1], row[3]) for row in tables["agent"]] == [
            ("builder", "valid"),
            ("reviewer", "errors"),
        ]
        group, name, description, status, text = tables["command"][0]
        assert (group, name, description, status) == ("gsd", "ship", "Ship a release", "warnings")
        assert text == "1 warning"


def test_invalid_config(monkeypatch, tmp_path):
    calls, _ = _setup_common(monkeypatch, ["list", "--dir", str(tmp_path)])
    monkeypatch.setattr(Config, "LAYOUT_DIRECTION", "diagonal")

    assert wflens_main.main() == 2
    assert calls["error"][0][0] == "Configuration Error"
