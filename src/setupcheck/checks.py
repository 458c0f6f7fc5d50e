"""Filesystem, content and environment checks.

Every check in this module is a plain function taking a
:class:`~setupcheck.context.ProjectContext` and returning a
:class:`~setupcheck.models.CheckReturn`.  Checks never read a file they
have not first confirmed exists; JSON decoding errors are left to
propagate so the harness reports them as a failure of the check that
tripped over them.

:data:`FILESYSTEM_CHECKS` lists the checks with their report names in
the order they run.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

from . import config
from .context import ProjectContext
from .models import CheckReturn


def _required_file_check(
    ctx: ProjectContext,
    relative: str,
    *,
    found: str | None = None,
    context: str | None = None,
    fix: str | None = None,
) -> CheckReturn:
    if ctx.exists(relative):
        return CheckReturn(status="pass", message=found or f"{relative} found")
    return CheckReturn(
        status="fail",
        message=f"{relative} not found",
        context=context,
        fix=fix,
    )


def instructions_file_exists(ctx: ProjectContext) -> CheckReturn:
    return _required_file_check(
        ctx,
        config.INSTRUCTIONS_FILE,
        context="CLAUDE.md contains critical claims and instructions for Claude Code",
        fix="Create CLAUDE.md with Claims section including " + ", ".join(config.REQUIRED_CLAIMS),
    )


def mcp_config_exists(ctx: ProjectContext) -> CheckReturn:
    return _required_file_check(
        ctx,
        config.MCP_CONFIG_FILE,
        context="MCP configuration file is required for HTTP MCP server connections",
        fix=f"Create .mcp.json with {config.MCP_SERVERS_KEY} object containing HTTP MCP endpoints",
    )


def settings_file_exists(ctx: ProjectContext) -> CheckReturn:
    return _required_file_check(
        ctx,
        config.SETTINGS_FILE,
        context="Claude Code settings hold the SessionStart hook that prepares each web session",
        fix=(
            f"Create {config.SETTINGS_FILE} with "
            '{"hooks": {"SessionStart": [{"hooks": [{"type": "command", "command": "scripts/setup.sh"}]}]}}'
        ),
    )


def deploy_config_exists(ctx: ProjectContext) -> CheckReturn:
    return _required_file_check(
        ctx,
        config.DEPLOY_CONFIG_FILE,
        context="Preview deployments replace localhost for visual testing in the web environment",
        fix='Create netlify.toml with a [build] section, e.g. command = "npm run build" and publish = "dist"',
    )


def setup_script_exists(ctx: ProjectContext) -> CheckReturn:
    return _required_file_check(
        ctx,
        config.SETUP_SCRIPT,
        found="setup.sh found",
        context="The SessionStart hook runs this script to bootstrap each session",
        fix=f"Create {config.SETUP_SCRIPT} (starting with #!/usr/bin/env bash) and chmod +x it",
    )


# -----------------------------------------------------------------------------
# MCP configuration
#
# A server counts as HTTP when it is typed ``http`` or its url uses
# https.  It counts as stdio when it is typed ``stdio`` or names a launch
# command.  A server can fall into both groups.  When the config file is
# missing the HTTP check fails while the stdio check passes; that
# asymmetry is intentional.


def server_map(raw: Dict[str, Any]) -> Optional[Dict[str, Dict[str, Any]]]:
    """Return the declared server map, or None when the key is absent or null."""
    return raw.get(config.MCP_SERVERS_KEY)


def is_http_server(server: Any) -> bool:
    # Entries that are not objects are neither HTTP nor stdio
    if not isinstance(server, dict):
        return False
    url = server.get("url")
    return server.get("type") == "http" or (isinstance(url, str) and url.startswith("https://"))


def is_stdio_server(server: Any) -> bool:
    if not isinstance(server, dict):
        return False
    return server.get("type") == "stdio" or bool(server.get("command"))


def mcp_has_http_servers(ctx: ProjectContext) -> CheckReturn:
    if not ctx.exists(config.MCP_CONFIG_FILE):
        return CheckReturn(status="fail", message=".mcp.json not found")
    raw = ctx.read_json(config.MCP_CONFIG_FILE)
    servers = server_map(raw)
    if servers is None:
        return CheckReturn(status="fail", message="No mcpServers defined")
    http_servers = [name for name, server in servers.items() if is_http_server(server)]
    if not http_servers:
        return CheckReturn(status="fail", message="No HTTP MCP servers found")
    return CheckReturn(
        status="pass",
        message=f"{len(http_servers)} HTTP MCP servers configured: {', '.join(http_servers)}",
    )


def mcp_has_no_stdio_servers(ctx: ProjectContext) -> CheckReturn:
    if not ctx.exists(config.MCP_CONFIG_FILE):
        return CheckReturn(status="pass", message="No .mcp.json (OK)")
    raw = ctx.read_json(config.MCP_CONFIG_FILE)
    servers = server_map(raw)
    if servers is None:
        return CheckReturn(status="pass", message="No MCP servers")
    stdio_servers = [name for name, server in servers.items() if is_stdio_server(server)]
    if stdio_servers:
        return CheckReturn(
            status="fail",
            message=f"Found stdio MCP servers (not web compatible): {', '.join(stdio_servers)}",
            context="The web environment has no persistent local processes, so stdio transports cannot start",
            fix="Replace stdio servers with HTTP MCP endpoints (type: http, url: https://...)",
        )
    return CheckReturn(status="pass", message="No stdio MCP servers (good for web)")


def session_start_hook_configured(ctx: ProjectContext) -> CheckReturn:
    if not ctx.exists(config.SETTINGS_FILE):
        return CheckReturn(status="fail", message=f"{config.SETTINGS_FILE} not found")
    raw = ctx.read_json(config.SETTINGS_FILE)
    hooks = raw.get("hooks") or {}
    if not hooks.get(config.SESSION_START_HOOK):
        return CheckReturn(
            status="fail",
            message="No SessionStart hook configured",
            fix=f'Add a "hooks": {{"{config.SESSION_START_HOOK}": [...]}} entry to {config.SETTINGS_FILE}',
        )
    return CheckReturn(status="pass", message="SessionStart hook configured")


# -----------------------------------------------------------------------------
# Instructions file content


def claims_section_present(ctx: ProjectContext) -> CheckReturn:
    if not ctx.exists(config.INSTRUCTIONS_FILE):
        return CheckReturn(status="fail", message="CLAUDE.md not found")
    if config.CLAIMS_MARKER in ctx.read_text(config.INSTRUCTIONS_FILE):
        return CheckReturn(status="pass", message="Claims section found")
    return CheckReturn(status="warn", message="No Claims section in CLAUDE.md")


def key_claims_present(ctx: ProjectContext) -> CheckReturn:
    if not ctx.exists(config.INSTRUCTIONS_FILE):
        return CheckReturn(status="fail", message="CLAUDE.md not found")
    content = ctx.read_text(config.INSTRUCTIONS_FILE)
    missing = [claim for claim in config.REQUIRED_CLAIMS if claim not in content]
    if missing:
        return CheckReturn(status="warn", message=f"Missing claims: {', '.join(missing)}")
    return CheckReturn(status="pass", message="All key claims present")


# -----------------------------------------------------------------------------
# Environment
#
# Both variables may be configured out-of-band (environment selector), so
# their absence only warns.


def _is_remote(ctx: ProjectContext) -> bool:
    return ctx.getenv(config.REMOTE_FLAG_VAR) == config.REMOTE_FLAG_VALUE


def site_id_env_set(ctx: ProjectContext) -> CheckReturn:
    if ctx.getenv(config.SITE_ID_VAR):
        return CheckReturn(status="pass", message=f"{config.SITE_ID_VAR} is set")
    return CheckReturn(
        status="warn",
        message=f"{config.SITE_ID_VAR} not set - set in environment selector",
    )


def remote_env_flag(ctx: ProjectContext) -> CheckReturn:
    if _is_remote(ctx):
        return CheckReturn(status="pass", message="Running in web Claude Code environment")
    return CheckReturn(status="warn", message="Not running in web environment (local)")


def env_file_exists(ctx: ProjectContext) -> CheckReturn:
    if ctx.exists(config.ENV_FILE):
        return CheckReturn(status="pass", message=".env file found")
    if ctx.exists(config.ENV_EXAMPLE_FILE):
        return CheckReturn(status="warn", message=".env.example found - copy to .env and configure")
    return CheckReturn(status="warn", message="No .env file - set variables in environment selector")


def env_template_documents_vars(ctx: ProjectContext) -> CheckReturn:
    # The template is preferred here; a real .env is the fallback.
    content = ""
    for candidate in (config.ENV_EXAMPLE_FILE, config.ENV_FILE):
        if ctx.exists(candidate):
            content = ctx.read_text(candidate)
            break
    if not content:
        return CheckReturn(status="warn", message="No .env.example to check")
    missing = [var for var in config.REQUIRED_ENV_VARS if var not in content]
    if missing:
        return CheckReturn(status="warn", message=f"Missing in template: {', '.join(missing)}")
    return CheckReturn(status="pass", message="All required variables documented")


# -----------------------------------------------------------------------------
# Commands, plugins and skills


def installed_commands(ctx: ProjectContext) -> List[str]:
    """Sorted markdown file names in the commands directory."""
    return sorted(p.name for p in ctx.path(config.COMMANDS_DIR).iterdir() if p.name.endswith(".md"))


def slash_commands_present(ctx: ProjectContext) -> CheckReturn:
    if not ctx.path(config.COMMANDS_DIR).is_dir():
        return CheckReturn(
            status="fail",
            message="No .claude/commands directory",
            fix="Create .claude/commands/ with command markdown files",
        )
    installed = installed_commands(ctx)
    missing = [cmd for cmd in config.EXPECTED_COMMANDS if cmd not in installed]
    if missing:
        return CheckReturn(
            status="warn",
            message=f"Installed: {', '.join(installed)} | Missing: {', '.join(missing)}",
            fix="Create missing command files in .claude/commands/",
        )
    return CheckReturn(
        status="pass",
        message="Commands: /" + ", /".join(c[: -len(".md")] for c in installed),
    )


def default_plugins_installed(ctx: ProjectContext) -> CheckReturn:
    if ctx.exists(config.PLUGINS_MARKER_FILE):
        logged = ctx.read_text(config.PLUGINS_MARKER_FILE).strip()
        return CheckReturn(
            status="pass",
            message=f"Default plugins installed: {', '.join(config.DEFAULT_PLUGINS)} ({logged})",
        )
    return CheckReturn(
        status="warn",
        message="Default plugins not yet installed",
        context="SessionStart hook will install on first session",
        fix=(
            "Run setup.sh or: claude plugin add anthropics/claude-plugins-official "
            "&& claude plugin add SuperClaude-Org/SuperClaude_Framework"
        ),
    )


def installed_skills(ctx: ProjectContext) -> List[str]:
    """Sorted skill entries: markdown files or directories holding SKILL.md."""
    skills_dir = ctx.path(config.SKILLS_DIR)
    return sorted(
        p.name
        for p in skills_dir.iterdir()
        if p.name.endswith(".md") or (p / config.SKILL_FILE).is_file()
    )


def skills_directory(ctx: ProjectContext) -> CheckReturn:
    if not ctx.path(config.SKILLS_DIR).is_dir():
        return CheckReturn(status="pass", message="No skills installed (minimal template)")
    skills = installed_skills(ctx)
    if skills:
        return CheckReturn(status="pass", message=f"Skills: {', '.join(skills)}")
    return CheckReturn(status="pass", message="No skills installed")


def visual_testing_approach(ctx: ProjectContext) -> CheckReturn:
    if _is_remote(ctx):
        return CheckReturn(
            status="pass",
            message="Use Netlify preview URLs for visual testing (no localhost in web)",
        )
    return CheckReturn(
        status="pass",
        message="Local: Use localhost or Netlify preview for visual testing",
    )


FILESYSTEM_CHECKS: List[Tuple[str, Callable[[ProjectContext], CheckReturn]]] = [
    ("CLAUDE.md exists", instructions_file_exists),
    (".mcp.json exists", mcp_config_exists),
    (".claude/settings.json exists", settings_file_exists),
    ("netlify.toml exists", deploy_config_exists),
    ("scripts/setup.sh exists and is executable", setup_script_exists),
    (".mcp.json has HTTP MCP servers", mcp_has_http_servers),
    ("No stdio MCP servers in config", mcp_has_no_stdio_servers),
    ("SessionStart hook is configured", session_start_hook_configured),
    ("CLAUDE.md contains Claims section", claims_section_present),
    ("CLAUDE.md contains key claims", key_claims_present),
    ("NETLIFY_SITE_ID environment variable", site_id_env_set),
    ("CLAUDE_CODE_REMOTE check", remote_env_flag),
    (".env or .env.example exists", env_file_exists),
    (".env.example has required variables", env_template_documents_vars),
    ("Slash commands exist", slash_commands_present),
    ("Default plugins installed", default_plugins_installed),
    ("Skills directory (optional)", skills_directory),
    ("Visual testing approach", visual_testing_approach),
]

__all__ = ["FILESYSTEM_CHECKS", "server_map", "is_http_server", "is_stdio_server"]
