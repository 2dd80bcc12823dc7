"""Theme system for terminal output with dark and light mode support."""

from dataclasses import dataclass
from typing import Dict

from rich.style import Style
from rich.theme import Theme as RichTheme


@dataclass
class ThemeColors:
    """Color palette for a terminal theme."""

    # Primary colors
    primary: str  # Main accent color
    secondary: str  # Secondary accent
    success: str  # Valid files
    warning: str  # Warnings
    error: str  # Errors
    info: str  # Informational hints

    # Text colors
    text_primary: str  # Primary text
    text_secondary: str  # Secondary/muted text
    text_muted: str  # Very muted text

    # Workflow kinds
    agent: str
    command: str
    skill: str


# Dark theme - Professional, high contrast
DARK_THEME = ThemeColors(
    primary="#00D9FF",  # Bright cyan
    secondary="#A78BFA",  # Soft purple
    success="#10B981",  # Emerald green
    warning="#F59E0B",  # Amber
    error="#EF4444",  # Red
    info="#60A5FA",  # Light blue
    text_primary="#F0F6FC",  # Bright white
    text_secondary="#8B949E",  # Gray
    text_muted="#484F58",  # Dark gray
    agent="#8B5CF6",  # Violet
    command="#F59E0B",  # Amber
    skill="#10B981",  # Emerald
)

# Light theme - Clean, professional
LIGHT_THEME = ThemeColors(
    primary="#0969DA",  # Blue
    secondary="#8250DF",  # Purple
    success="#1A7F37",  # Green
    warning="#9A6700",  # Amber
    error="#CF222E",  # Red
    info="#0550AE",  # Dark blue
    text_primary="#1F2328",  # Near black
    text_secondary="#57606A",  # Medium gray
    text_muted="#8C959F",  # Light gray
    agent="#6639BA",  # Violet
    command="#9A6700",  # Amber
    skill="#1A7F37",  # Green
)


class Theme:
    """Terminal theme manager."""

    _current_theme: str = "dark"
    _themes: Dict[str, ThemeColors] = {
        "dark": DARK_THEME,
        "light": LIGHT_THEME,
    }

    @classmethod
    def get_colors(cls) -> ThemeColors:
        """Get the current theme colors."""
        return cls._themes[cls._current_theme]

    @classmethod
    def set_theme(cls, name: str) -> None:
        """Set the current theme.

        Args:
            name: Theme name ('dark' or 'light')

        Raises:
            ValueError: If theme name is invalid
        """
        if name not in cls._themes:
            raise ValueError(f"Unknown theme: {name}. Available: {list(cls._themes.keys())}")
        cls._current_theme = name

    @classmethod
    def kind_color(cls, kind: str) -> str:
        """Accent color for a workflow kind ("agent", "command" or "skill")."""
        colors = cls.get_colors()
        return getattr(colors, kind, colors.text_primary)

    @classmethod
    def get_rich_theme(cls) -> RichTheme:
        """Get a Rich Theme object for the current theme."""
        colors = cls.get_colors()
        return RichTheme(
            {
                # Primary styles
                "primary": Style(color=colors.primary),
                "secondary": Style(color=colors.secondary),
                "success": Style(color=colors.success),
                "warning": Style(color=colors.warning),
                "error": Style(color=colors.error),
                # Diagnostic severities
                "severity.error": Style(color=colors.error, bold=True),
                "severity.warning": Style(color=colors.warning, bold=True),
                "severity.info": Style(color=colors.info),
                # Text styles
                "text": Style(color=colors.text_primary),
                "text.secondary": Style(color=colors.text_secondary),
                "text.muted": Style(color=colors.text_muted),
                # Workflow kinds
                "kind.agent": Style(color=colors.agent, bold=True),
                "kind.command": Style(color=colors.command, bold=True),
                "kind.skill": Style(color=colors.skill, bold=True),
                # UI element styles
                "panel.border": Style(color=colors.text_muted),
                "divider": Style(color=colors.text_muted),
            }
        )


def set_theme(name: str) -> None:
    """Set the current theme (convenience function)."""
    Theme.set_theme(name)
