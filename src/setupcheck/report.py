"""Console rendering of a :class:`~setupcheck.models.RunReport`.

The report is written for two readers: a person scanning icons and
messages, and automation parsing the JSON block between the
``--- JSON Summary`` and ``---`` lines.
"""

from __future__ import annotations

import json
from typing import Callable

import click

from . import config
from .models import RunReport

Echo = Callable[..., None]

ICONS = {"pass": "✅", "fail": "❌", "warn": "⚠️"}
RULE = "=" * 60
JSON_BLOCK_START = "--- JSON Summary (for automation) ---"
JSON_BLOCK_END = "---"

FAIL_NOTICE = "❌ Some tests failed. Please fix the issues above."
WARN_NOTICE = "⚠️ All tests passed with warnings. Review the warnings above."
PASS_NOTICE = "✅ All tests passed! Template is ready for web Claude Code."


def final_notice(report: RunReport) -> str:
    if report.failed > 0:
        return FAIL_NOTICE
    if report.warned > 0:
        return WARN_NOTICE
    return PASS_NOTICE


def render_report(report: RunReport, echo: Echo = click.echo) -> None:
    """Print the banner, every outcome, the JSON summary and the final notice."""
    echo("\n")
    echo(RULE)
    echo(f"  {config.REPORT_TITLE}")
    echo(RULE)
    echo("\n")

    for outcome in report.outcomes:
        echo(f"{ICONS[outcome.status]} {outcome.name}")
        echo(f"   {outcome.message}")
        # Context and fix are only useful when something needs attention
        if outcome.status != "pass":
            if outcome.context:
                echo(f"   📋 Context: {outcome.context}")
            if outcome.fix:
                echo(f"   🔧 Fix: {outcome.fix}")
        echo()

    echo(JSON_BLOCK_START)
    echo(json.dumps(report.summary(), indent=2, ensure_ascii=False))
    echo(JSON_BLOCK_END)

    echo(RULE)
    echo(f"  Summary: {report.passed} passed, {report.warned} warnings, {report.failed} failed")
    echo(RULE)

    echo(f"\n{final_notice(report)}")
