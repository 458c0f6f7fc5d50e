"""Command-line interface for setupcheck.

This module uses the :mod:`click` library to expose the verification
pipeline as the ``setupcheck`` command.  The command checks a project
template directory, probes its MCP servers, prints the report and exits
with status 1 when any check failed (warnings never change the exit
status).
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click

from . import config
from .context import ProjectContext
from .pipeline import run_verification
from .report import render_report


@click.command(name="setupcheck", help="Verify a project template for the web Claude Code environment.")
@click.option(
    "--project-dir",
    default=".",
    show_default=True,
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    help="Project directory to verify",
)
@click.option(
    "--timeout",
    default=config.PROBE_TIMEOUT_SECONDS,
    show_default=True,
    type=click.FloatRange(min=0, min_open=True),
    help="Timeout in seconds for each MCP server health probe",
)
@click.option(
    "--skip-network",
    is_flag=True,
    default=False,
    help="Skip MCP server health probes",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Log check execution details to stderr",
)
def cli(project_dir: Path, timeout: float, skip_network: bool, verbose: bool) -> None:
    """Run every setup check and print the verification report."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx = ProjectContext.from_process(project_dir)
    report = asyncio.run(run_verification(ctx, timeout=timeout, skip_network=skip_network))
    render_report(report)
    # Exit explicitly so warnings still yield 0 and any failure yields 1
    click.get_current_context().exit(report.exit_code)
