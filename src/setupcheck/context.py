"""Read-only view of the project being verified.

The checks never touch ``os.environ`` or the process working directory
directly.  Instead the CLI builds a :class:`ProjectContext` from the
``--project-dir`` option and the process environment and passes it in,
which keeps every check testable against a temporary directory and a
plain dict.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ProjectContext:
    """Project root and environment snapshot for one verification run."""

    root: Path
    env: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_process(cls, root: Optional[Path] = None) -> "ProjectContext":
        """Build a context from the process environment.

        The environment is copied so later mutations of ``os.environ``
        do not leak into a run.
        """
        return cls(root=Path(root) if root is not None else Path.cwd(), env=dict(os.environ))

    def path(self, relative: str) -> Path:
        return self.root / relative

    def exists(self, relative: str) -> bool:
        return self.path(relative).exists()

    def read_text(self, relative: str) -> str:
        return self.path(relative).read_text(encoding="utf-8")

    def read_json(self, relative: str) -> Any:
        """Parse a JSON file under the root.

        Decoding errors propagate; the check harness turns them into a
        failing outcome for the check that asked.
        """
        return json.loads(self.read_text(relative))

    def getenv(self, name: str) -> Optional[str]:
        return self.env.get(name)
