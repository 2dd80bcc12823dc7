"""Terminal styling for workflow-lens: dark and light themes for Rich output."""

from utils.tui.theme import Theme, ThemeColors, set_theme

__all__ = [
    "Theme",
    "ThemeColors",
    "set_theme",
]
