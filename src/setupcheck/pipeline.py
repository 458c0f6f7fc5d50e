"""Verification pipeline.

:func:`run_verification` runs every filesystem, content and environment
check in order, then the MCP health probes, and returns the resulting
:class:`~setupcheck.models.RunReport`.
"""

from __future__ import annotations

from typing import Optional

import click
import requests

from . import config
from .checks import FILESYSTEM_CHECKS
from .context import ProjectContext
from .harness import CheckRunner
from .models import RunReport
from .probes import ProbeSession, run_mcp_health_checks


def run_filesystem_checks(runner: CheckRunner, ctx: ProjectContext) -> None:
    for name, check in FILESYSTEM_CHECKS:
        runner.check(name, lambda check=check: check(ctx))


async def run_verification(
    ctx: ProjectContext,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = config.PROBE_TIMEOUT_SECONDS,
    skip_network: bool = False,
    echo=click.echo,
) -> RunReport:
    """Run all checks against ``ctx`` and return the report.

    Parameters
    ----------
    ctx : ProjectContext
        Project root and environment to verify.
    session : requests.Session, optional
        Session used for health probes.  When omitted a
        :class:`~setupcheck.probes.ProbeSession` is created for the run
        and closed afterwards.
    timeout : float
        Per-probe timeout in seconds.
    skip_network : bool
        When true no probe checks are registered.
    echo : callable
        Writer for progress lines printed before the probes.
    """
    runner = CheckRunner()
    run_filesystem_checks(runner, ctx)
    if not skip_network:
        if session is None:
            with ProbeSession() as owned:
                await run_mcp_health_checks(runner, ctx, session=owned, timeout=timeout, echo=echo)
        else:
            await run_mcp_health_checks(runner, ctx, session=session, timeout=timeout, echo=echo)
    return runner.report()
