# src/seatbelt/runtime/gate.py
"""
Readiness gate: holds requested runs until the environment says it is safe to run.
"""

import asyncio
from collections.abc import Callable
from pathlib import Path

import structlog

from seatbelt.state import RunSession, RunStatus
from seatbelt.telemetry import StructLogger

log: StructLogger = structlog.get_logger("runtime.gate")

READY_POLL_INTERVAL = 0.1  # seconds


class ReadinessGate:
    """
    A one-way NotReady -> Ready switch in front of a FIFO queue of run sessions.

    Sessions may be submitted at any time; ``next()`` only hands them out once
    the gate is ready, in submission order.
    """

    def __init__(self) -> None:
        self._ready = asyncio.Event()
        self._queue: asyncio.Queue[RunSession] = asyncio.Queue()
        self.ready_message: str | None = None

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    @property
    def pending_count(self) -> int:
        return self._queue.qsize()

    def signal_ready(self, message: str) -> bool:
        """
        Opens the gate. Returns False if it was already open.
        """
        if self._ready.is_set():
            log.debug("Readiness already signalled, ignoring", message=message)
            return False
        self.ready_message = message
        self._ready.set()
        log.info("Environment ready", message=message, pending=self._queue.qsize(), emoji_key="ready")
        return True

    def submit(self, session: RunSession) -> None:
        if not self.is_ready:
            session.update_status(RunStatus.WAITING)
        self._queue.put_nowait(session)
        log.debug("Run submitted", run_id=session.run_id, ready=self.is_ready, pending=self._queue.qsize())

    async def next(self) -> RunSession:
        """Waits for readiness, then returns the oldest submitted session."""
        await self._ready.wait()
        return await self._queue.get()

    def drain_pending(self) -> list[RunSession]:
        """Removes and returns every session still queued."""
        sessions = []
        while not self._queue.empty():
            sessions.append(self._queue.get_nowait())
        return sessions


async def signal_when_exists(
    signal_ready: Callable[[str], bool],
    path: Path,
    message: str | None = None,
    interval: float = READY_POLL_INTERVAL,
) -> None:
    """Polls for ``path`` and calls ``signal_ready`` once it exists."""
    log.info("Waiting for ready file", path=str(path), emoji_key="ready")
    while not path.exists():
        await asyncio.sleep(interval)
    signal_ready(message or f"Ready file found: {path}")


# 🔼⚙️
