"""Check registration and execution harness.

A :class:`CheckRunner` owns the ordered, append-only list of outcomes
for one run.  Checks are registered through :meth:`CheckRunner.check`
(synchronous) or :meth:`CheckRunner.check_async` (awaited), and each
registration appends exactly one :class:`~setupcheck.models.Outcome`.

Check bodies are wrapped by :func:`capture` / :func:`capture_async`,
which return a :class:`CheckSuccess` or :class:`CheckFailure` instead
of letting an exception escape.  A failure becomes a ``fail`` outcome
carrying the error's description, so a defect in one check never
aborts the remaining ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Union

from .models import CheckReturn, Outcome, RunReport

logger = logging.getLogger(__name__)

SyncCheck = Callable[[], CheckReturn]
AsyncCheck = Callable[[], Awaitable[CheckReturn]]

SYNC_ERROR_CONTEXT = "Unexpected exception during check execution"
ASYNC_ERROR_CONTEXT = "Unexpected exception during async check execution"


@dataclass(frozen=True)
class CheckSuccess:
    value: CheckReturn


@dataclass(frozen=True)
class CheckFailure:
    error: BaseException


CheckResult = Union[CheckSuccess, CheckFailure]


def _coerce(value: Any) -> CheckReturn:
    # Bodies may return a plain mapping; anything that does not validate
    # is treated like a raised error.
    if isinstance(value, CheckReturn):
        return value
    return CheckReturn.model_validate(value)


def capture(fn: SyncCheck) -> CheckResult:
    """Run a synchronous check body and wrap its result."""
    try:
        return CheckSuccess(_coerce(fn()))
    except Exception as exc:
        return CheckFailure(exc)


async def capture_async(fn: AsyncCheck) -> CheckResult:
    """Await an asynchronous check body and wrap its result."""
    try:
        return CheckSuccess(_coerce(await fn()))
    except Exception as exc:
        return CheckFailure(exc)


class CheckRunner:
    """Runs checks in registration order and collects their outcomes."""

    def __init__(self) -> None:
        self._outcomes: List[Outcome] = []

    @property
    def outcomes(self) -> List[Outcome]:
        return list(self._outcomes)

    def check(self, name: str, fn: SyncCheck) -> Outcome:
        """Run ``fn`` immediately and record its outcome under ``name``."""
        logger.debug("running check %r", name)
        return self._record(name, capture(fn), SYNC_ERROR_CONTEXT)

    async def check_async(self, name: str, fn: AsyncCheck) -> Outcome:
        """Await ``fn`` and record its outcome under ``name``."""
        logger.debug("running async check %r", name)
        return self._record(name, await capture_async(fn), ASYNC_ERROR_CONTEXT)

    def report(self) -> RunReport:
        return RunReport(outcomes=self.outcomes)

    def _record(self, name: str, result: CheckResult, error_context: str) -> Outcome:
        if isinstance(result, CheckSuccess):
            outcome = Outcome.from_return(name, result.value)
        else:
            logger.debug("check %r raised", name, exc_info=result.error)
            outcome = Outcome(
                name=name,
                status="fail",
                message=f"Error: {result.error}",
                context=error_context,
            )
        logger.debug("check %r -> %s: %s", name, outcome.status, outcome.message)
        self._outcomes.append(outcome)
        return outcome
