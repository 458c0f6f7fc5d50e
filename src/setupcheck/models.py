"""Pydantic models for setupcheck.

Each check body returns a :class:`CheckReturn`; the harness attaches
the check name to produce an :class:`Outcome`.  The aggregate
:class:`RunReport` holds every outcome in execution order and derives
the counts, the filtered failure/warning lists and the exit code from
them.  Nothing here is persisted between runs.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

# Outcome statuses.  ``fail`` marks a hard setup problem and is the only
# status that affects the exit code.  ``warn`` is advisory.
Status = Literal["pass", "fail", "warn"]


class CheckReturn(BaseModel):
    """Value returned by a check body.

    Attributes:
        status: The outcome status (pass, fail or warn).
        message: Short human-readable summary.
        context: Optional explanation of why a non-passing result matters.
        fix: Optional suggested remediation.
    """

    status: Status
    message: str
    context: Optional[str] = None
    fix: Optional[str] = None


class Outcome(BaseModel):
    """Result of one named check within a run.

    The name is unique per check within a run.  Fields are declared
    name-first so that serialised outcomes read in that order.
    """

    name: str
    status: Status
    message: str
    context: Optional[str] = None
    fix: Optional[str] = None

    @classmethod
    def from_return(cls, name: str, result: CheckReturn) -> "Outcome":
        return cls(name=name, **result.model_dump())

    def as_summary(self) -> Dict[str, Any]:
        """Return the outcome as a dict with unset optional fields omitted."""
        return self.model_dump(exclude_none=True)


class RunReport(BaseModel):
    """Outcomes of a single verification run, in execution order."""

    outcomes: List[Outcome] = Field(default_factory=list)

    def _with_status(self, status: Status) -> List[Outcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def passed(self) -> int:
        return len(self._with_status("pass"))

    @property
    def failed(self) -> int:
        return len(self._with_status("fail"))

    @property
    def warned(self) -> int:
        return len(self._with_status("warn"))

    @property
    def failures(self) -> List[Outcome]:
        return self._with_status("fail")

    @property
    def warnings(self) -> List[Outcome]:
        return self._with_status("warn")

    @property
    def exit_code(self) -> int:
        """Process exit status: 1 when any check failed, otherwise 0."""
        return 1 if self.failed > 0 else 0

    def summary(self) -> Dict[str, Any]:
        """Machine-readable summary of counts, failures and warnings."""
        return {
            "passed": self.passed,
            "failed": self.failed,
            "warned": self.warned,
            "failures": [o.as_summary() for o in self.failures],
            "warnings": [o.as_summary() for o in self.warnings],
        }
