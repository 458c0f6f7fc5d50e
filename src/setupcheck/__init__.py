"""Setup verification for web Claude Code project templates.

This package checks that a project directory carries the files,
configuration and environment a browser-hosted coding-assistant
session expects.  It defines Pydantic models for individual outcomes
and the aggregate run report, a harness that runs each check in
isolation, the checks themselves, MCP server health probes and the
console report renderer.
"""

from .models import CheckReturn, Outcome, RunReport
from .context import ProjectContext
from .pipeline import run_verification

__version__ = "0.1.0"

__all__ = ["CheckReturn", "Outcome", "RunReport", "ProjectContext", "run_verification"]
