# src/seatbelt/runtime/orchestrator.py

"""
High-level coordinator for test runs.
Owns the readiness gate, creates one session per requested run and executes
sessions one at a time.
"""

import asyncio
import itertools
from collections.abc import Iterable
from pathlib import Path

import structlog

from seatbelt.config import SeatbeltConfig
from seatbelt.exceptions import RunAbortedError
from seatbelt.outcome import OutcomeFuture
from seatbelt.runtime.console_interface import ConsoleInterface
from seatbelt.runtime.gate import ReadinessGate
from seatbelt.runtime.report_adapter import ReportAdapter
from seatbelt.state import RunSession
from seatbelt.telemetry import StructLogger
from seatbelt.testing import (
    ListenerChain,
    LoopListener,
    ModuleRef,
    ModuleRegistry,
    TestLibrary,
    find_files,
    get_test_library,
    path_to_module_ref,
)

log: StructLogger = structlog.get_logger("runtime.orchestrator")

DEFAULT_WAITING_MESSAGE = "Waiting for the environment to become ready..."
STARTING_MESSAGE = "Running tests..."


class RunOrchestrator:
    """Instantiates and coordinates all runtime components for test runs."""

    def __init__(
        self,
        config: SeatbeltConfig,
        console: ConsoleInterface | None = None,
        registry: ModuleRegistry | None = None,
        library: TestLibrary | None = None,
        gate: ReadinessGate | None = None,
    ):
        self.config = config
        self.console = console or ConsoleInterface()
        self.registry = registry or ModuleRegistry(config.source_root, config.project_root)
        self.library = library or get_test_library(config.runner.library, self.registry)
        self.gate = gate or ReadinessGate()
        self.active_session: RunSession | None = None
        self._run_ids = itertools.count(1)
        self._worker: asyncio.Task | None = None

    # --- Public entry points ---

    def signal_ready(self, message: str) -> bool:
        """Opens the readiness gate; queued runs then execute in request order."""
        opened = self.gate.signal_ready(message)
        if opened:
            self.console.notice(message, emoji="🚦")
        return opened

    def request_run(
        self,
        module_refs: Iterable[ModuleRef],
        waiting_message: str = DEFAULT_WAITING_MESSAGE,
    ) -> OutcomeFuture:
        """
        Requests a run of ``module_refs`` and returns its outcome without blocking.

        If the environment is not ready yet, ``waiting_message`` is printed and
        the run waits behind the readiness gate.
        """
        run_id = next(self._run_ids)
        session = RunSession(
            run_id=run_id,
            module_refs=tuple(module_refs),
            outcome=OutcomeFuture(run_id),
        )
        self.active_session = session
        log.info("Run requested", run_id=run_id, modules=[str(ref) for ref in session.module_refs])

        if not self.gate.is_ready:
            self.console.notice(waiting_message, emoji="⏳")
        self.gate.submit(session)
        self._ensure_worker()
        return session.outcome

    async def run_modules(self, session: RunSession) -> None:
        """
        Executes one session: reset counters, reload modules, invoke the library.

        The outcome is settled by the report adapter when the library ends the
        run. Anything raised while loading or starting the run rejects the
        outcome right away.
        """
        run_log = log.bind(run_id=session.run_id)
        self.console.notice(STARTING_MESSAGE, emoji="🏃")
        session.begin()

        chain = ListenerChain(
            [
                self.library.default_listener(self.console),
                ReportAdapter(session, self.console, self.config.runner.minimum_pass_threshold),
            ]
        )

        # The library runs in a worker thread; its events are handed back to the loop.
        listener = LoopListener(chain, asyncio.get_running_loop(), session.fail)

        try:
            for ref in session.module_refs:
                await asyncio.to_thread(self.registry.load, ref, force_reload=True)
            await asyncio.to_thread(self.library.run_tests, session.module_refs, listener)
        except Exception as e:
            run_log.error("Run failed before completing", error=str(e), exc_info=True)
            session.fail(e)
            return

        if not session.outcome.done():
            run_log.debug("Library returned before ending the run, awaiting settlement")

    async def discover_modules(self) -> list[ModuleRef]:
        """Finds all test modules under the configured source root."""
        paths = await asyncio.to_thread(find_files, self.config.source_root, self.config.runner.test_glob)
        refs = sorted({self.module_ref_for_path(path) for path in paths})
        log.debug("Discovered test modules", count=len(refs))
        self.console.notice(f"Running tests in these {len(refs)} modules [{', '.join(map(str, refs))}]")
        return refs

    def module_ref_for_path(self, path: Path) -> ModuleRef:
        root, depth = self.config.module_anchor
        return path_to_module_ref(
            Path(path).resolve(),
            depth=depth,
            suffix=self.config.runner.module_suffix,
            root=root.resolve(),
        )

    async def aclose(self) -> None:
        """Stops executing runs and aborts the ones still queued."""
        if self._worker and not self._worker.done():
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
        self._worker = None

        for session in self.gate.drain_pending():
            session.abort(RunAbortedError(f"Run {session.run_id} aborted: orchestrator closed"))
        log.debug("Orchestrator closed")

    # --- Internals ---

    def _ensure_worker(self) -> None:
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self._drain(), name="seatbelt-run-worker")

    async def _drain(self) -> None:
        """Runs queued sessions one at a time, each only after the previous one settled."""
        while True:
            session = await self.gate.next()
            try:
                await self.run_modules(session)
                await session.outcome.wait_settled()
            except asyncio.CancelledError:
                session.abort(RunAbortedError(f"Run {session.run_id} aborted: orchestrator closed"))
                raise
            except Exception as e:
                log.critical("Unexpected error while executing run", run_id=session.run_id, exc_info=True)
                session.fail(e)


# 🔼⚙️
