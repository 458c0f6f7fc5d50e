"""Tests for the filesystem, content and environment checks.

Each test lays out a project template under ``tmp_path`` and runs the
relevant checks through a :class:`~setupcheck.harness.CheckRunner` so
that errors are captured exactly as they are in a real run.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

import pytest

from setupcheck import checks
from setupcheck.context import ProjectContext
from setupcheck.harness import CheckRunner
from setupcheck.models import Outcome


def _write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _run(name: str, root: Path, env: Optional[Dict[str, str]] = None) -> Outcome:
    """Run the check registered under ``name`` against ``root``."""
    ctx = ProjectContext(root=root, env=env or {})
    fn = dict(checks.FILESYSTEM_CHECKS)[name]
    return CheckRunner().check(name, lambda: fn(ctx))


HTTP_CHECK = ".mcp.json has HTTP MCP servers"
STDIO_CHECK = "No stdio MCP servers in config"


def test_check_names_are_unique() -> None:
    names = [name for name, _ in checks.FILESYSTEM_CHECKS]
    assert len(names) == len(set(names))


@pytest.mark.parametrize(
    "name, relative",
    [
        ("CLAUDE.md exists", "CLAUDE.md"),
        (".mcp.json exists", ".mcp.json"),
        (".claude/settings.json exists", ".claude/settings.json"),
        ("netlify.toml exists", "netlify.toml"),
        ("scripts/setup.sh exists and is executable", "scripts/setup.sh"),
    ],
)
def test_required_files(tmp_path: Path, name: str, relative: str) -> None:
    missing = _run(name, tmp_path)
    assert missing.status == "fail"
    assert missing.message == f"{relative} not found"
    assert missing.fix
    _write(tmp_path, relative, "x")
    assert _run(name, tmp_path).status == "pass"


def test_mcp_servers_partitioned(tmp_path: Path) -> None:
    """An http server passes the HTTP check; a command server fails the stdio check."""
    _write(
        tmp_path,
        ".mcp.json",
        json.dumps({"mcpServers": {"A": {"type": "http", "url": "https://x"}, "B": {"command": "run"}}}),
    )
    http = _run(HTTP_CHECK, tmp_path)
    assert http.status == "pass"
    assert http.message == "1 HTTP MCP servers configured: A"
    stdio = _run(STDIO_CHECK, tmp_path)
    assert stdio.status == "fail"
    assert stdio.message == "Found stdio MCP servers (not web compatible): B"


def test_https_url_counts_as_http(tmp_path: Path) -> None:
    _write(
        tmp_path,
        ".mcp.json",
        json.dumps({"mcpServers": {"one": {"url": "https://a"}, "two": {"url": "http://b"}}}),
    )
    outcome = _run(HTTP_CHECK, tmp_path)
    assert outcome.message == "1 HTTP MCP servers configured: one"
    assert _run(STDIO_CHECK, tmp_path).message == "No stdio MCP servers (good for web)"


def test_stdio_type_detected(tmp_path: Path) -> None:
    _write(tmp_path, ".mcp.json", json.dumps({"mcpServers": {"local": {"type": "stdio"}}}))
    assert _run(HTTP_CHECK, tmp_path).message == "No HTTP MCP servers found"
    assert _run(STDIO_CHECK, tmp_path).status == "fail"


def test_missing_mcp_config_is_asymmetric(tmp_path: Path) -> None:
    http = _run(HTTP_CHECK, tmp_path)
    assert (http.status, http.message) == ("fail", ".mcp.json not found")
    stdio = _run(STDIO_CHECK, tmp_path)
    assert (stdio.status, stdio.message) == ("pass", "No .mcp.json (OK)")


def test_mcp_config_without_server_map(tmp_path: Path) -> None:
    _write(tmp_path, ".mcp.json", "{}")
    assert _run(HTTP_CHECK, tmp_path).message == "No mcpServers defined"
    stdio = _run(STDIO_CHECK, tmp_path)
    assert (stdio.status, stdio.message) == ("pass", "No MCP servers")


def test_empty_server_map(tmp_path: Path) -> None:
    _write(tmp_path, ".mcp.json", json.dumps({"mcpServers": {}}))
    assert _run(HTTP_CHECK, tmp_path).message == "No HTTP MCP servers found"
    assert _run(STDIO_CHECK, tmp_path).status == "pass"


def test_non_object_server_entries_are_ignored(tmp_path: Path) -> None:
    """Entries that are not objects count as neither HTTP nor stdio."""
    _write(tmp_path, ".mcp.json", json.dumps({"mcpServers": {"a": "https://x", "b": None, "c": ["run"]}}))
    http = _run(HTTP_CHECK, tmp_path)
    assert (http.status, http.message) == ("fail", "No HTTP MCP servers found")
    stdio = _run(STDIO_CHECK, tmp_path)
    assert (stdio.status, stdio.message) == ("pass", "No stdio MCP servers (good for web)")


def test_malformed_mcp_config_fails_both_checks(tmp_path: Path) -> None:
    _write(tmp_path, ".mcp.json", "{ not json")
    for name in (HTTP_CHECK, STDIO_CHECK):
        outcome = _run(name, tmp_path)
        assert outcome.status == "fail"
        assert outcome.message.startswith("Error: ")


def test_session_start_hook(tmp_path: Path) -> None:
    name = "SessionStart hook is configured"
    assert _run(name, tmp_path).status == "fail"
    _write(tmp_path, ".claude/settings.json", json.dumps({"hooks": {"Stop": []}}))
    assert _run(name, tmp_path).message == "No SessionStart hook configured"
    _write(
        tmp_path,
        ".claude/settings.json",
        json.dumps({"hooks": {"SessionStart": [{"hooks": [{"type": "command", "command": "x"}]}]}}),
    )
    assert _run(name, tmp_path).status == "pass"


def test_claims_section(tmp_path: Path) -> None:
    name = "CLAUDE.md contains Claims section"
    assert _run(name, tmp_path).status == "fail"
    _write(tmp_path, "CLAUDE.md", "# Project\n")
    assert _run(name, tmp_path).status == "warn"
    _write(tmp_path, "CLAUDE.md", "## CRITICAL CLAIMS\n")
    assert _run(name, tmp_path).status == "pass"


def test_key_claims(tmp_path: Path) -> None:
    name = "CLAUDE.md contains key claims"
    _write(tmp_path, "CLAUDE.md", "NO_LOCALHOST HTTP_MCP_ONLY SESSION_EPHEMERAL")
    assert _run(name, tmp_path).status == "pass"
    _write(tmp_path, "CLAUDE.md", "NO_LOCALHOST SESSION_EPHEMERAL")
    outcome = _run(name, tmp_path)
    assert outcome.status == "warn"
    assert outcome.message == "Missing claims: HTTP_MCP_ONLY"
    _write(tmp_path, "CLAUDE.md", "HTTP_MCP_ONLY")
    assert _run(name, tmp_path).message == "Missing claims: NO_LOCALHOST, SESSION_EPHEMERAL"


def test_env_variables_only_warn(tmp_path: Path) -> None:
    site = _run("NETLIFY_SITE_ID environment variable", tmp_path)
    remote = _run("CLAUDE_CODE_REMOTE check", tmp_path, {"CLAUDE_CODE_REMOTE": "1"})
    assert site.status == "warn"
    assert remote.status == "warn"
    env = {"NETLIFY_SITE_ID": "abc", "CLAUDE_CODE_REMOTE": "true"}
    assert _run("NETLIFY_SITE_ID environment variable", tmp_path, env).status == "pass"
    assert _run("CLAUDE_CODE_REMOTE check", tmp_path, env).status == "pass"


def test_env_file_preference(tmp_path: Path) -> None:
    name = ".env or .env.example exists"
    assert _run(name, tmp_path).message == "No .env file - set variables in environment selector"
    _write(tmp_path, ".env.example", "NETLIFY_SITE_ID=\n")
    outcome = _run(name, tmp_path)
    assert outcome.status == "warn"
    assert "copy to .env" in outcome.message
    _write(tmp_path, ".env", "NETLIFY_SITE_ID=abc\n")
    assert _run(name, tmp_path).status == "pass"


def test_env_template_variables(tmp_path: Path) -> None:
    name = ".env.example has required variables"
    assert _run(name, tmp_path).message == "No .env.example to check"
    _write(tmp_path, ".env", "NETLIFY_SITE_ID=abc\n")
    assert _run(name, tmp_path).status == "pass"
    # The template wins over .env when both exist
    _write(tmp_path, ".env.example", "OTHER=1\n")
    outcome = _run(name, tmp_path)
    assert outcome.status == "warn"
    assert outcome.message == "Missing in template: NETLIFY_SITE_ID"


def test_slash_commands_partial(tmp_path: Path) -> None:
    _write(tmp_path, ".claude/commands/verify.md", "")
    _write(tmp_path, ".claude/commands/preview.md", "")
    _write(tmp_path, ".claude/commands/notes.txt", "")
    outcome = _run("Slash commands exist", tmp_path)
    assert outcome.status == "warn"
    assert outcome.message == "Installed: preview.md, verify.md | Missing: init-project.md, check-env.md"


def test_slash_commands_complete(tmp_path: Path) -> None:
    for cmd in ["init-project.md", "preview.md", "check-env.md", "verify.md"]:
        _write(tmp_path, f".claude/commands/{cmd}", "")
    outcome = _run("Slash commands exist", tmp_path)
    assert outcome.status == "pass"
    assert outcome.message == "Commands: /check-env, /init-project, /preview, /verify"


def test_slash_commands_directory_missing(tmp_path: Path) -> None:
    outcome = _run("Slash commands exist", tmp_path)
    assert outcome.status == "fail"
    assert outcome.message == "No .claude/commands directory"


def test_plugins_marker(tmp_path: Path) -> None:
    name = "Default plugins installed"
    outcome = _run(name, tmp_path)
    assert outcome.status == "warn"
    assert outcome.context and outcome.fix
    _write(tmp_path, ".claude/.plugins_installed", "2026-01-01T00:00:00Z\n")
    outcome = _run(name, tmp_path)
    assert outcome.status == "pass"
    assert outcome.message.endswith("(2026-01-01T00:00:00Z)")


def test_skills_directory_never_fails(tmp_path: Path) -> None:
    name = "Skills directory (optional)"
    assert _run(name, tmp_path).message == "No skills installed (minimal template)"
    (tmp_path / ".claude" / "skills" / "empty-dir").mkdir(parents=True)
    assert _run(name, tmp_path).message == "No skills installed"
    _write(tmp_path, ".claude/skills/review.md", "")
    _write(tmp_path, ".claude/skills/deploy/SKILL.md", "")
    outcome = _run(name, tmp_path)
    assert outcome.status == "pass"
    assert outcome.message == "Skills: deploy, review.md"


def test_visual_testing_always_passes(tmp_path: Path) -> None:
    name = "Visual testing approach"
    local = _run(name, tmp_path)
    remote = _run(name, tmp_path, {"CLAUDE_CODE_REMOTE": "true"})
    assert local.status == remote.status == "pass"
    assert "no localhost" in remote.message
