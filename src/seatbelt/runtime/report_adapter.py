# src/seatbelt/runtime/report_adapter.py
"""
Bridges the test library's event stream into one run session's counters,
console narration and outcome.
"""

import structlog

from seatbelt.rules import DEFAULT_MINIMUM_PASS_THRESHOLD, check_threshold
from seatbelt.runtime.console_interface import ConsoleInterface
from seatbelt.state import ResultKind, RunSession
from seatbelt.telemetry import StructLogger
from seatbelt.testing.protocols import RunSummary, TestInfo

log: StructLogger = structlog.get_logger("runtime.report_adapter")


class ReportAdapter:
    """
    Listener bound to a single run session.

    Registered after the library's default listener, so the library's own
    reporting has already happened when these side effects run. Events that
    arrive after the session settled are ignored.
    """

    def __init__(
        self,
        session: RunSession,
        console: ConsoleInterface,
        minimum_pass_threshold: int = DEFAULT_MINIMUM_PASS_THRESHOLD,
    ):
        self.session = session
        self.console = console
        self.minimum_pass_threshold = minimum_pass_threshold
        self._log = log.bind(run_id=session.run_id)

    def _stale(self, event: str) -> bool:
        if self.session.outcome.done():
            self._log.debug("Ignoring event for settled run", run_event=event)
            return True
        return False

    def begin_unit(self, info: TestInfo) -> None:
        if self._stale("begin_unit"):
            return
        self.console.begin_unit(info.name)

    def end_unit(self, info: TestInfo) -> None:
        if self._stale("end_unit"):
            return
        self.console.end_unit()

    def on_pass(self, info: TestInfo) -> None:
        self._record(ResultKind.PASS, info)

    def on_fail(self, info: TestInfo) -> None:
        self._record(ResultKind.FAIL, info)

    def on_error(self, info: TestInfo) -> None:
        self._record(ResultKind.ERROR, info)

    def end_run(self, summary: RunSummary) -> None:
        if self._stale("end_run"):
            return

        counts = self.session.counts.snapshot()
        self.console.summary(counts)

        failure = check_threshold(counts, self.minimum_pass_threshold)
        if failure is None:
            self._log.info("Run passed", emoji_key="success", **counts.as_dict())
            self.session.succeed()
        else:
            self._log.info("Run failed", reason=str(failure), emoji_key="fail", **counts.as_dict())
            self.session.fail(failure)

    def _record(self, kind: ResultKind, info: TestInfo) -> None:
        if self._stale(kind.value):
            return
        self.console.result(kind)
        self.session.record(kind)
        self._log.debug("Test result recorded", test=info.name, result=kind.value)


# 🔼⚙️
