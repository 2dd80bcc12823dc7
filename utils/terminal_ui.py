"""Terminal UI utilities using Rich library for lint and diagram output.

This module provides a unified interface for terminal output, integrating
with the TUI theme system for consistent styling.
"""

from typing import Any, Iterable, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config import Config
from utils.tui.theme import Theme, set_theme

# Initialize theme from config
set_theme(Config.TUI_THEME)

# Global console instance with theme support
console = Console(theme=Theme.get_rich_theme())

STATUS_ICONS = {"valid": "✓", "warnings": "!", "errors": "✗"}


def _get_colors():
    """Get current theme colors."""
    return Theme.get_colors()


def _status_color(status: str) -> str:
    colors = _get_colors()
    return {"valid": colors.success, "warnings": colors.warning}.get(status, colors.error)


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header panel.

    Args:
        title: Main title text
        subtitle: Optional subtitle text
    """
    colors = _get_colors()
    content = f"[bold {colors.primary}]{title}[/bold {colors.primary}]"
    if subtitle:
        content += f"\n[{colors.text_secondary}]{subtitle}[/{colors.text_secondary}]"

    console.print(Panel(content, border_style=colors.primary, box=box.DOUBLE, padding=(1, 2)))


def print_lint_result(path: str, result: Any) -> None:
    """Print the diagnostics of one linted file.

    Args:
        path: File that was linted
        result: Its LintResult
    """
    colors = _get_colors()
    diagnostics = list(result.diagnostics)
    if not diagnostics:
        console.print(f"[{colors.success}]✓ {escape(path)}[/{colors.success}]")
        return

    console.print(Text(path, style=f"bold {colors.text_primary}"))
    table = Table(
        show_header=True,
        header_style=f"bold {colors.primary}",
        box=box.SIMPLE,
        border_style=colors.text_muted,
        padding=(0, 1),
    )
    table.add_column("Line", justify="right", style=colors.text_secondary)
    table.add_column("Severity")
    table.add_column("Field", style=colors.secondary)
    table.add_column("Message", style=colors.text_primary)

    for diagnostic in diagnostics:
        severity = diagnostic.severity.value
        message = Text(diagnostic.message)
        if diagnostic.suggestion:
            message.append(f" (suggestion: {diagnostic.suggestion})", style=colors.text_muted)
        if diagnostic.fixable:
            message.append(" (fixable)", style=colors.success)
        table.add_row(
            str(diagnostic.line) if diagnostic.line else "",
            Text(severity, style=f"severity.{severity}"),
            diagnostic.field or "",
            message,
        )

    console.print(table)


def print_lint_summary(files: int, errors: int, warnings: int) -> None:
    """Print totals after linting several files."""
    colors = _get_colors()
    color = colors.error if errors else colors.warning if warnings else colors.success
    console.print(
        f"[bold {color}]{files} file(s) checked: "
        f"{errors} error(s), {warnings} warning(s)[/bold {color}]"
    )


def print_fixes_applied(path: str, messages: Sequence[str]) -> None:
    """Print the fixes written back to a file.

    Args:
        path: File that was rewritten
        messages: Messages of the diagnostics that were fixed
    """
    colors = _get_colors()
    for message in messages:
        prefix = f"[{colors.success}]✓ fixed[/{colors.success}]"
        console.print(f"{prefix} {escape(path)}: {escape(message)}")


def print_workflow_table(kind: str, rows: Iterable[Tuple[str, str, str, str, str]]) -> None:
    """Print workflows of one kind grouped by namespace.

    Args:
        kind: "agent", "command" or "skill"
        rows: (group, name, description, status, status_text) tuples, already
            in display order
    """
    colors = _get_colors()
    table = Table(
        title=Text(f"{kind.capitalize()}s", style=f"kind.{kind}"),
        title_justify="left",
        show_header=True,
        header_style=f"bold {colors.primary}",
        box=box.ROUNDED,
        border_style=colors.text_muted,
        padding=(0, 1),
    )
    table.add_column("Group", style=colors.secondary)
    table.add_column("Name", style=Theme.kind_color(kind))
    table.add_column("Description", style=colors.text_secondary, overflow="ellipsis")
    table.add_column("Lint")

    previous_group = None
    for group, name, description, status, status_text in rows:
        shown_group = group if group != previous_group else ""
        previous_group = group
        icon = STATUS_ICONS.get(status, "?")
        badge = Text(f"{icon} {status_text}", style=_status_color(status))
        table.add_row(shown_group, name, description, badge)

    console.print(table)


def print_error(message: str, title: str = "Error") -> None:
    """Print an error message.

    Args:
        message: Error message
        title: Error title (default: "Error")
    """
    colors = _get_colors()
    console.print(
        Panel(
            f"[{colors.error}]{escape(message)}[/{colors.error}]",
            title=f"[bold {colors.error}]{title}[/bold {colors.error}]",
            border_style=colors.error,
            box=box.ROUNDED,
        )
    )


def print_warning(message: str) -> None:
    """Print a warning message.

    Args:
        message: Warning message
    """
    colors = _get_colors()
    console.print(f"[{colors.warning}]{escape(message)}[/{colors.warning}]")


def print_log_location(log_file: str) -> None:
    """Print log file location.

    Args:
        log_file: Path to log file
    """
    colors = _get_colors()
    console.print()
    console.print(f"[{colors.text_muted}]Detailed logs: {log_file}[/{colors.text_muted}]")
