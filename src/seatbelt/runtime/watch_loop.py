# src/seatbelt/runtime/watch_loop.py
"""
Consumes filesystem events, reloads changed modules and re-runs the tests.
"""
import asyncio
from collections.abc import Callable
from pathlib import Path

import structlog

from seatbelt.exceptions import LoadError
from seatbelt.monitor import EventKind, MonitoredEvent, MonitoringService
from seatbelt.runtime.orchestrator import DEFAULT_WAITING_MESSAGE, RunOrchestrator
from seatbelt.telemetry import StructLogger
from seatbelt.testing import ModuleRef

log: StructLogger = structlog.get_logger("runtime.watch_loop")

MonitorFactory = Callable[..., MonitoringService]

TRIGGER_LABELS = {
    EventKind.CREATED: "File created:",
    EventKind.CHANGED: "File changed:",
    EventKind.DELETED: "File deleted:",
}
WATCHER_STARTED = "Watcher started"


class WatchLoop:
    """Runs one watch cycle per batch of file events, forever."""

    def __init__(
        self,
        orchestrator: RunOrchestrator,
        monitor_factory: MonitorFactory = MonitoringService,
    ):
        self.orchestrator = orchestrator
        self.config = orchestrator.config
        self.console = orchestrator.console
        self.registry = orchestrator.registry
        self.event_queue: asyncio.Queue[MonitoredEvent] = asyncio.Queue()
        self.monitor = monitor_factory(
            self.event_queue,
            self.config.project_root,
            patterns=self.config.watch.patterns,
            ignore_patterns=self.config.watch.ignore_patterns,
        )
        self.cycles = 0
        self._waiting_message = DEFAULT_WAITING_MESSAGE
        self._task: asyncio.Task | None = None
        self._forever: asyncio.Future | None = None

    async def start(self, waiting_message: str = DEFAULT_WAITING_MESSAGE) -> asyncio.Future:
        """
        Starts watching and triggers an initial run.

        Returns a future that never settles on its own; ``stop()`` cancels it.
        """
        loop = asyncio.get_running_loop()
        self._waiting_message = waiting_message
        self.monitor.start(loop)
        self.event_queue.put_nowait(MonitoredEvent(kind=EventKind.STARTED))
        self._task = asyncio.create_task(self.run(), name="seatbelt-watch-loop")
        self._forever = loop.create_future()
        log.info("Watch loop started", root=str(self.config.project_root), emoji_key="watch")
        return self._forever

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        await self.monitor.stop()
        if self._forever and not self._forever.done():
            self._forever.cancel()
        log.info("Watch loop stopped")

    async def run(self) -> None:
        """Main event consumption loop."""
        while True:
            try:
                events = await self._collect_events()
                await self.run_cycle(events)
            except asyncio.CancelledError:
                log.info("Watch loop cancelled.")
                raise
            except Exception:
                log.exception("Error in watch loop.")

    async def _collect_events(self) -> list[MonitoredEvent]:
        """Waits for one event, then gathers whatever else arrives within the debounce delay."""
        events = [await self.event_queue.get()]
        delay = self.config.watch.debounce_seconds
        if delay > 0:
            await asyncio.sleep(delay)
        while not self.event_queue.empty():
            events.append(self.event_queue.get_nowait())
        return events

    async def run_cycle(self, events: list[MonitoredEvent]) -> None:
        """One watch cycle: reload, rediscover, run, report, go idle."""
        self.cycles += 1
        cycle_log = log.bind(cycle=self.cycles, events=len(events))
        cycle_log.debug("Starting watch cycle")
        for event in events:
            self.console.notice(self.describe(event), emoji="👀")

        try:
            for event in events:
                await asyncio.to_thread(self._apply_event, event)
        except LoadError as e:
            cycle_log.warning("Reload failed, skipping run", error=str(e))
            self.console.nay(str(e))
            self.console.waiting_for_changes()
            return

        module_refs = await self.orchestrator.discover_modules()
        outcome = self.orchestrator.request_run(module_refs, self._waiting_message)
        try:
            await outcome
            self.console.yay()
        except Exception as e:
            self.console.nay(str(e))
        finally:
            self.console.waiting_for_changes()

    def describe(self, event: MonitoredEvent) -> str:
        """One console line naming what triggered a cycle."""
        if event.src_path is None:
            return WATCHER_STARTED
        path = Path(event.src_path).resolve()
        root = self.config.project_root.resolve()
        if path.is_relative_to(root):
            path = path.relative_to(root)
        return f"{TRIGGER_LABELS.get(event.kind, WATCHER_STARTED)} {path}"

    def _apply_event(self, event: MonitoredEvent) -> None:
        if event.src_path is None:
            return

        path = Path(event.src_path).resolve()
        ref = self._module_ref(path)

        if event.kind is EventKind.DELETED:
            if ref is not None:
                self.registry.forget(ref)
            return

        if not event.reloads_module:
            return
        if ref is not None:
            self.registry.load(ref, force_reload=True, transitive=True)
        else:
            self.registry.load_path(path, transitive=True)

    def _module_ref(self, path: Path) -> ModuleRef | None:
        """The ref of a module file under the source root, or None for any other file."""
        if not path.is_relative_to(self.config.source_root.resolve()):
            return None
        if not path.name.endswith(self.config.runner.module_suffix):
            return None
        try:
            return self.orchestrator.module_ref_for_path(path)
        except ValueError:
            # e.g. an __init__ file directly in the source root
            return None


async def start_watching(
    orchestrator: RunOrchestrator,
    waiting_message: str = DEFAULT_WAITING_MESSAGE,
    monitor_factory: MonitorFactory = MonitoringService,
) -> tuple[WatchLoop, asyncio.Future]:
    """Creates and starts a watch loop for ``orchestrator``."""
    watch_loop = WatchLoop(orchestrator, monitor_factory=monitor_factory)
    forever = await watch_loop.start(waiting_message)
    return watch_loop, forever


# 🔼⚙️
