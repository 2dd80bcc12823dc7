"""Configuration management for workflow-lens."""

import os

# Define path constants directly to avoid circular imports with utils
# (utils.terminal_ui imports Config, and utils.runtime is in the utils package)
_RUNTIME_DIR = os.path.join(os.path.expanduser("~"), ".workflow-lens")
_CONFIG_FILE = os.path.join(_RUNTIME_DIR, "config")

# Default configuration template
_DEFAULT_CONFIG = """\
# workflow-lens Configuration

# Directory holding agents/, commands/ and skills/
# (the CLAUDE_CONFIG_DIR environment variable takes precedence)
WORKFLOWS_DIR=~/.claude

# Diagram layout: TB (top to bottom) or LR (left to right)
LAYOUT_DIRECTION=TB
LAYOUT_RANK_GAP=80
LAYOUT_NODE_GAP=40

# Upper bound on fixes applied by `wflens lint --fix` per file
MAX_FIX_PASSES=20

# Optional settings
LOG_LEVEL=DEBUG
TUI_THEME=dark
"""


def _load_config(path: str) -> dict[str, str]:
    """Parse a KEY=VALUE config file, skipping comments and blank lines."""
    cfg: dict[str, str] = {}
    if not os.path.isfile(path):
        return cfg
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            # Strip inline comments (# ...) from the value
            if "#" in value:
                value = value[: value.index("#")]
            cfg[key.strip()] = value.strip()
    return cfg


def _ensure_config():
    """Ensure ~/.workflow-lens/config exists, create with defaults if not.

    An unwritable home directory is not fatal; defaults are used instead.
    """
    if os.path.exists(_CONFIG_FILE):
        return
    try:
        os.makedirs(_RUNTIME_DIR, exist_ok=True)
        with open(_CONFIG_FILE, "w", encoding="utf-8") as f:
            f.write(_DEFAULT_CONFIG)
    except OSError:
        pass


# Ensure config exists and load it
_ensure_config()
_cfg = _load_config(_CONFIG_FILE)


class Config:
    """Configuration for workflow-lens.

    All configuration is centralized here. Access config values directly via Config.XXX.
    """

    # Workflow discovery
    WORKFLOWS_DIR = os.path.expanduser(
        os.environ.get("CLAUDE_CONFIG_DIR") or _cfg.get("WORKFLOWS_DIR") or "~/.claude"
    )

    # Diagram layout
    LAYOUT_DIRECTION = _cfg.get("LAYOUT_DIRECTION", "TB").upper()
    LAYOUT_RANK_GAP = int(_cfg.get("LAYOUT_RANK_GAP", "80"))
    LAYOUT_NODE_GAP = int(_cfg.get("LAYOUT_NODE_GAP", "40"))

    # Linting
    MAX_FIX_PASSES = int(_cfg.get("MAX_FIX_PASSES", "20"))

    # Logging Configuration
    # Note: Logging is controlled via --verbose flag
    # Log files go to ~/.workflow-lens/logs/ (see utils.runtime)
    LOG_LEVEL = _cfg.get("LOG_LEVEL", "DEBUG").upper()

    # TUI Configuration
    TUI_THEME = _cfg.get("TUI_THEME", "dark")  # "dark" or "light"

    @classmethod
    def validate(cls):
        """Validate configuration values.

        Raises:
            ValueError: If a value is out of range
        """
        if cls.LAYOUT_DIRECTION not in ("TB", "LR"):
            raise ValueError(
                f"Invalid LAYOUT_DIRECTION '{cls.LAYOUT_DIRECTION}' in {_CONFIG_FILE}. "
                "Use TB or LR."
            )
        if cls.LAYOUT_RANK_GAP < 0 or cls.LAYOUT_NODE_GAP < 0:
            raise ValueError(f"Layout gaps must not be negative. Check {_CONFIG_FILE}.")
        if cls.MAX_FIX_PASSES < 1:
            raise ValueError(f"MAX_FIX_PASSES must be at least 1. Check {_CONFIG_FILE}.")
        if cls.TUI_THEME not in ("dark", "light"):
            raise ValueError(f"Invalid TUI_THEME '{cls.TUI_THEME}'. Use dark or light.")
