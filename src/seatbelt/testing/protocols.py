#
# src/seatbelt/testing/protocols.py
#
"""
Defines protocols and data structures for test execution.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from attrs import define, field

from seatbelt.testing.modules import ModuleRef

if TYPE_CHECKING:
    from seatbelt.runtime.console_interface import ConsoleInterface


@define(frozen=True, slots=True)
class TestInfo:
    """
    Describes one test-level event reported by a test library.
    """

    __test__ = False

    name: str
    description: str | None = field(default=None)
    message: str | None = field(default=None)
    details: str | None = field(default=None)


@define(frozen=True, slots=True)
class RunSummary:
    """
    Totals a test library reports when a run ends.
    """

    tests_run: int = 0
    failures: int = 0
    errors: int = 0
    skipped: int = 0


@runtime_checkable
class RunListener(Protocol):
    """
    Receives the event stream of one test run, in order.
    """

    def begin_unit(self, info: TestInfo) -> None: ...

    def end_unit(self, info: TestInfo) -> None: ...

    def on_pass(self, info: TestInfo) -> None: ...

    def on_fail(self, info: TestInfo) -> None: ...

    def on_error(self, info: TestInfo) -> None: ...

    def end_run(self, summary: RunSummary) -> None: ...


@runtime_checkable
class TestLibrary(Protocol):
    """
    Protocol for a test library that executes test modules and reports events.
    """

    name: str

    def default_listener(self, console: "ConsoleInterface") -> RunListener:
        """
        Returns the listener carrying the library's own default reporting.

        It is registered ahead of any other listener for a run.
        """
        ...

    def run_tests(self, module_refs: Sequence[ModuleRef], listener: RunListener) -> None:
        """
        Runs the tests of all ``module_refs`` as one batch.

        Args:
            module_refs: The modules to run, in submission order.
            listener: Receives every event; ``end_run`` is emitted last.
        """
        ...


# 🔼⚙️
