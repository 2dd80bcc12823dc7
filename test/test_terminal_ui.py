import io

from rich.console import Console

from lint import lint_workflow_file
from utils import terminal_ui
from utils.tui.theme import Theme


def _capture(monkeypatch) -> io.StringIO:
    buffer = io.StringIO()
    console = Console(file=buffer, width=160, theme=Theme.get_rich_theme(), color_system=None)
    monkeypatch.setattr(terminal_ui, "console", console)
    return buffer


def test_lint_result_lists_diagnostics(monkeypatch):
    buffer = _capture(monkeypatch)
    result = lint_workflow_file("---\nname: a\ndescription: d\nmodel: [gpt]\n---\n", "agent")

    terminal_ui.print_lint_result("agents/a.md", result)

    out = buffer.getvalue()
    assert "agents/a.md" in out
    assert "'model' must be a string" in out


def test_suggestions_and_brackets_are_printed_literally(monkeypatch):
    buffer = _capture(monkeypatch)
    result = lint_workflow_file("---\nname: a\ndescription: d\nmodel: gpt-4\n---\n", "agent")

    terminal_ui.print_lint_result("[draft]/a.md", result)

    out = buffer.getvalue()
    assert "[draft]/a.md" in out
    assert "(suggestion: sonnet)" in out
    assert "(fixable)" in out


def test_clean_file(monkeypatch):
    buffer = _capture(monkeypatch)

    result = lint_workflow_file("---\ndescription: d\n---\n", "skill")

    terminal_ui.print_lint_result("skills/x/SKILL.md", result)

    assert "✓ skills/x/SKILL.md" in buffer.getvalue()


def test_workflow_table_hides_repeated_groups(monkeypatch):
    buffer = _capture(monkeypatch)

    terminal_ui.print_workflow_table(
        "command",
        [
            ("gsd", "plan", "Plan a phase", "valid", "Valid"),
            ("gsd", "ship", "Ship it", "errors", "2 errors"),
        ],
    )

    out = buffer.getvalue()
    assert out.count("gsd") == 1
    assert "✗ 2 errors" in out
