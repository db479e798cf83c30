# src/seatbelt/state.py
#
"""
Defines the per-run state models: result counters and run sessions.
"""

from enum import Enum, auto

import structlog
from attrs import define, field, mutable

from seatbelt.outcome import OutcomeFuture
from seatbelt.testing.modules import ModuleRef

# Logger specific to state management
log: structlog.stdlib.BoundLogger = structlog.get_logger("state")


class ResultKind(Enum):
    """Terminal outcome of a single test."""

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"


class RunStatus(Enum):
    """Enumeration of the lifecycle states of a run session."""

    PENDING = auto()  # Created, not yet submitted.
    WAITING = auto()  # Parked behind the readiness gate.
    RUNNING = auto()  # Modules loading or tests executing.
    PASSED = auto()  # Outcome resolved.
    FAILED = auto()  # Outcome rejected by a load error or the threshold policy.
    ABORTED = auto()  # Dropped before it could run.


TERMINAL_STATUSES = frozenset({RunStatus.PASSED, RunStatus.FAILED, RunStatus.ABORTED})


@define(frozen=True, slots=True)
class Counts:
    """Immutable snapshot of a run's counters."""

    passed: int = 0
    failed: int = 0
    errored: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"pass": self.passed, "fail": self.failed, "error": self.errored}


@mutable(slots=True)
class CounterStore:
    """Mutable pass/fail/error counters for one run."""

    _counts: dict[ResultKind, int] = field(factory=lambda: dict.fromkeys(ResultKind, 0), init=False)

    def reset(self) -> None:
        for kind in ResultKind:
            self._counts[kind] = 0

    def increment(self, kind: ResultKind) -> None:
        self._counts[kind] += 1

    def snapshot(self) -> Counts:
        return Counts(
            passed=self._counts[ResultKind.PASS],
            failed=self._counts[ResultKind.FAIL],
            errored=self._counts[ResultKind.ERROR],
        )


@mutable(slots=True)
class RunSession:
    """
    Holds everything that belongs to one requested run.

    Each session owns its counters and its outcome, so events that arrive late
    for one run can never be observed by another.
    """

    run_id: int = field()
    module_refs: tuple[ModuleRef, ...] = field(converter=tuple)
    outcome: OutcomeFuture = field()
    counts: CounterStore = field(factory=CounterStore)
    status: RunStatus = field(default=RunStatus.PENDING)
    error_message: str | None = field(default=None)

    @property
    def is_settled(self) -> bool:
        return self.status in TERMINAL_STATUSES or self.outcome.done()

    def update_status(self, new_status: RunStatus, error_msg: str | None = None) -> None:
        """Updates the status and logs the transition."""
        old_status = self.status
        if old_status == new_status:
            return

        self.status = new_status
        log_func = log.debug
        if new_status in (RunStatus.FAILED, RunStatus.ABORTED):
            self.error_message = error_msg or "Unknown error"
            log_func = log.warning

        log_func(
            "Run status changed",
            run_id=self.run_id,
            old_status=old_status.name,
            new_status=new_status.name,
            **({"error": self.error_message} if new_status in (RunStatus.FAILED, RunStatus.ABORTED) else {}),
        )

    def begin(self) -> None:
        """Marks the session as running and zeroes its counters."""
        self.counts.reset()
        self.update_status(RunStatus.RUNNING)

    def record(self, kind: ResultKind) -> None:
        self.counts.increment(kind)

    def succeed(self) -> None:
        if self.outcome.resolve(True):
            self.update_status(RunStatus.PASSED)

    def fail(self, reason: BaseException) -> None:
        if self.outcome.reject(reason):
            self.update_status(RunStatus.FAILED, str(reason))

    def abort(self, reason: BaseException) -> None:
        if self.outcome.reject(reason):
            self.update_status(RunStatus.ABORTED, str(reason))


# 🔼⚙️
