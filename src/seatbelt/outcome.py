#
# src/seatbelt/outcome.py
#
"""
One-shot outcome handle for a single test run.
"""

import asyncio
from collections.abc import Callable, Generator
from typing import Any

import structlog

from seatbelt.telemetry import StructLogger

log: StructLogger = structlog.get_logger("outcome")


class OutcomeFuture:
    """
    A single-assignment result cell: pending, resolved with ``True`` or rejected
    with an exception.

    The first settlement wins. Later calls to ``resolve``/``reject`` leave the
    recorded outcome untouched and return ``False``.
    """

    def __init__(self, run_id: int = 0, loop: asyncio.AbstractEventLoop | None = None):
        self.run_id = run_id
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[bool] = self._loop.create_future()
        self._future.add_done_callback(self._on_settled)

    def __repr__(self) -> str:
        if not self._future.done():
            state = "pending"
        elif self._future.cancelled():
            state = "cancelled"
        elif self._future.exception() is not None:
            state = f"rejected({self._future.exception()!r})"
        else:
            state = f"resolved({self._future.result()!r})"
        return f"<OutcomeFuture run_id={self.run_id} {state}>"

    def __await__(self) -> Generator[Any, None, bool]:
        return self._future.__await__()

    def resolve(self, value: bool = True) -> bool:
        """Resolves the outcome. Returns False if it was already settled."""
        if self._future.done():
            log.debug("Ignoring resolve of an already settled outcome", run_id=self.run_id)
            return False
        self._future.set_result(value)
        return True

    def reject(self, reason: BaseException) -> bool:
        """Rejects the outcome with ``reason``. Returns False if it was already settled."""
        if self._future.done():
            log.debug(
                "Ignoring reject of an already settled outcome",
                run_id=self.run_id,
                reason=str(reason),
            )
            return False
        self._future.set_exception(reason)
        return True

    def done(self) -> bool:
        return self._future.done()

    def result(self) -> bool:
        return self._future.result()

    def exception(self) -> BaseException | None:
        return self._future.exception()

    def add_done_callback(self, callback: Callable[["OutcomeFuture"], None]) -> None:
        self._future.add_done_callback(lambda _: callback(self))

    async def wait_settled(self) -> None:
        """Waits until the outcome is settled without raising its rejection."""
        await asyncio.wait([self._future])

    def _on_settled(self, future: asyncio.Future[bool]) -> None:
        # Retrieving the exception here keeps unawaited rejections quiet at GC time.
        if future.cancelled():
            log.debug("Outcome cancelled", run_id=self.run_id)
            return
        error = future.exception()
        if error is None:
            log.debug("Outcome resolved", run_id=self.run_id, value=future.result())
        else:
            log.debug("Outcome rejected", run_id=self.run_id, reason=str(error))


# 🔼⚙️
