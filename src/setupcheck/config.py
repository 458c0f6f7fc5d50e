"""
Configuration constants for setupcheck.

This module centralises the file names, claim tokens and environment
variable names that the verification checks look for.  New values
should be added here deliberately; the checks themselves never embed
literal paths.
"""

from typing import Final

# Title printed in the report banner.
REPORT_TITLE: Final[str] = "Claude Code Web Template - Verification Report"

# Required project files, relative to the project root.
INSTRUCTIONS_FILE: Final[str] = "CLAUDE.md"
MCP_CONFIG_FILE: Final[str] = ".mcp.json"
SETTINGS_FILE: Final[str] = ".claude/settings.json"
DEPLOY_CONFIG_FILE: Final[str] = "netlify.toml"
SETUP_SCRIPT: Final[str] = "scripts/setup.sh"

# Top-level key of the MCP config holding the server map.
MCP_SERVERS_KEY: Final[str] = "mcpServers"

# Lifecycle hook that must be present under ``hooks`` in the settings file.
SESSION_START_HOOK: Final[str] = "SessionStart"

# Section marker and claim tokens expected in the instructions file.
# Claims are reported in this order when missing.
CLAIMS_MARKER: Final[str] = "CRITICAL CLAIMS"
REQUIRED_CLAIMS: Final[list[str]] = [
    "NO_LOCALHOST",
    "HTTP_MCP_ONLY",
    "SESSION_EPHEMERAL",
]

# Environment variables.  The remote flag only counts when set to
# exactly ``REMOTE_FLAG_VALUE``.
SITE_ID_VAR: Final[str] = "NETLIFY_SITE_ID"
REMOTE_FLAG_VAR: Final[str] = "CLAUDE_CODE_REMOTE"
REMOTE_FLAG_VALUE: Final[str] = "true"

# Dotenv files and the variables the template must document.
ENV_FILE: Final[str] = ".env"
ENV_EXAMPLE_FILE: Final[str] = ".env.example"
REQUIRED_ENV_VARS: Final[list[str]] = [SITE_ID_VAR]

# Slash commands expected under the commands directory.
COMMANDS_DIR: Final[str] = ".claude/commands"
EXPECTED_COMMANDS: Final[list[str]] = [
    "init-project.md",
    "preview.md",
    "check-env.md",
    "verify.md",
]

# Optional skills directory; a skill is either a markdown file or a
# subdirectory carrying ``SKILL_FILE``.
SKILLS_DIR: Final[str] = ".claude/skills"
SKILL_FILE: Final[str] = "SKILL.md"

# Marker written by the SessionStart hook once default plugins are installed.
PLUGINS_MARKER_FILE: Final[str] = ".claude/.plugins_installed"
DEFAULT_PLUGINS: Final[list[str]] = [
    "claude-plugins-official",
    "SuperClaude",
]

# Bounded wait for a single MCP health probe.
PROBE_TIMEOUT_SECONDS: Final[float] = 5.0

__all__ = [
    "REPORT_TITLE",
    "INSTRUCTIONS_FILE",
    "MCP_CONFIG_FILE",
    "SETTINGS_FILE",
    "DEPLOY_CONFIG_FILE",
    "SETUP_SCRIPT",
    "MCP_SERVERS_KEY",
    "SESSION_START_HOOK",
    "CLAIMS_MARKER",
    "REQUIRED_CLAIMS",
    "SITE_ID_VAR",
    "REMOTE_FLAG_VAR",
    "REMOTE_FLAG_VALUE",
    "ENV_FILE",
    "ENV_EXAMPLE_FILE",
    "REQUIRED_ENV_VARS",
    "COMMANDS_DIR",
    "EXPECTED_COMMANDS",
    "SKILLS_DIR",
    "SKILL_FILE",
    "PLUGINS_MARKER_FILE",
    "DEFAULT_PLUGINS",
    "PROBE_TIMEOUT_SECONDS",
]
