#
# src/seatbelt/monitor/service.py
#
"""
Watches the project tree with watchdog and feeds file events into an asyncio queue.
"""
import asyncio
import os
from collections.abc import Callable, Iterable
from pathlib import Path

import structlog
from watchdog.events import FileSystemEvent, PatternMatchingEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from seatbelt.monitor.events import EventKind, MonitoredEvent
from seatbelt.telemetry import StructLogger

log: StructLogger = structlog.get_logger("monitor.service")


class ChangeHandler(PatternMatchingEventHandler):
    """Forwards matching watchdog events to the event loop thread."""

    def __init__(
        self,
        event_queue: asyncio.Queue[MonitoredEvent],
        loop: asyncio.AbstractEventLoop,
        patterns: Iterable[str],
        ignore_patterns: Iterable[str],
    ):
        super().__init__(
            patterns=list(patterns),
            ignore_patterns=list(ignore_patterns),
            ignore_directories=True,
        )
        self._queue = event_queue
        self._loop = loop

    def _post(self, kind: EventKind, raw_path: str | bytes) -> None:
        event = MonitoredEvent(kind=kind, src_path=Path(os.fsdecode(raw_path)))
        log.debug("File event", kind=kind.value, path=str(event.src_path), emoji_key="watch")
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    def on_created(self, event: FileSystemEvent) -> None:
        self._post(EventKind.CREATED, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._post(EventKind.CHANGED, event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._post(EventKind.DELETED, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._post(EventKind.DELETED, event.src_path)
        self._post(EventKind.CREATED, event.dest_path)


class MonitoringService:
    """Owns the watchdog observer for one project root."""

    def __init__(
        self,
        event_queue: asyncio.Queue[MonitoredEvent],
        root: Path,
        patterns: Iterable[str] = ("*.py",),
        ignore_patterns: Iterable[str] = (),
        observer_factory: Callable[[], BaseObserver] = Observer,
    ):
        self.event_queue = event_queue
        self.root = Path(root)
        self.patterns = tuple(patterns)
        self.ignore_patterns = tuple(ignore_patterns)
        self._observer_factory = observer_factory
        self._observer: BaseObserver | None = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        if self.is_running:
            log.debug("Monitoring service already running")
            return

        loop = loop or asyncio.get_running_loop()
        handler = ChangeHandler(self.event_queue, loop, self.patterns, self.ignore_patterns)
        observer = self._observer_factory()
        observer.schedule(handler, str(self.root), recursive=True)
        observer.start()
        self._observer = observer
        log.info("Filesystem monitoring started", root=str(self.root), patterns=list(self.patterns), emoji_key="watch")

    async def stop(self) -> None:
        observer = self._observer
        if observer is None:
            return
        self._observer = None
        observer.stop()
        await asyncio.to_thread(observer.join)
        log.info("Filesystem monitoring stopped", root=str(self.root))


# 🔼⚙️
