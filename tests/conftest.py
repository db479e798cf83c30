import asyncio
import io
import sys
from collections.abc import AsyncIterator, Callable, Iterator, Sequence
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from rich.console import Console

from seatbelt.config import RunnerConfig, SeatbeltConfig, WatchConfig
from seatbelt.runtime import ConsoleInterface, RunOrchestrator
from seatbelt.testing import ModuleRef, ModuleRegistry, RunListener, RunSummary, TestInfo


class RecordingListener:
    """Listener that records every event as (event, payload) pairs."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def begin_unit(self, info: TestInfo) -> None:
        self.events.append(("begin_unit", info.name))

    def end_unit(self, info: TestInfo) -> None:
        self.events.append(("end_unit", info.name))

    def on_pass(self, info: TestInfo) -> None:
        self.events.append(("pass", info.name))

    def on_fail(self, info: TestInfo) -> None:
        self.events.append(("fail", info.name))

    def on_error(self, info: TestInfo) -> None:
        self.events.append(("error", info.name))

    def end_run(self, summary: RunSummary) -> None:
        self.events.append(("end_run", summary))

    def names(self, event: str) -> list[object]:
        return [payload for name, payload in self.events if name == event]


class FakeLibrary:
    """Scripted test library: emits one unit per entry of ``results``."""

    name = "fake"

    def __init__(self, results: Sequence[str] = ("pass", "pass", "pass"), emit_end: bool = True):
        self.results = list(results)
        self.emit_end = emit_end
        self.calls: list[tuple[ModuleRef, ...]] = []
        self.listeners: list[RunListener] = []
        self.default_listeners: list[RecordingListener] = []
        self.raise_on_run: Exception | None = None

    def default_listener(self, console: ConsoleInterface) -> RecordingListener:
        listener = RecordingListener()
        self.default_listeners.append(listener)
        return listener

    def run_tests(self, module_refs: Sequence[ModuleRef], listener: RunListener) -> None:
        self.calls.append(tuple(module_refs))
        self.listeners.append(listener)
        if self.raise_on_run is not None:
            raise self.raise_on_run
        for index, result in enumerate(self.results):
            info = TestInfo(name=f"test_{index}")
            listener.begin_unit(info)
            {"pass": listener.on_pass, "fail": listener.on_fail, "error": listener.on_error}[result](info)
            listener.end_unit(info)
        if self.emit_end:
            listener.end_run(RunSummary(tests_run=len(self.results)))


async def wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Polls ``predicate`` on the event loop until it holds."""
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0.005)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> ConsoleInterface:
    return ConsoleInterface(Console(file=output, width=120, color_system=None))


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "tests").mkdir(parents=True)
    return root


@pytest.fixture
def seatbelt_config(project_root: Path) -> SeatbeltConfig:
    return SeatbeltConfig(
        project_root=project_root,
        runner=RunnerConfig(minimum_pass_threshold=2, source_root=Path("tests")),
        watch=WatchConfig(debounce_seconds=0),
    )


@pytest.fixture
def fake_library() -> FakeLibrary:
    return FakeLibrary()


@pytest.fixture
def fake_registry() -> MagicMock:
    return MagicMock(spec=ModuleRegistry)


@pytest_asyncio.fixture
async def orchestrator(
    seatbelt_config: SeatbeltConfig,
    console: ConsoleInterface,
    fake_registry: MagicMock,
    fake_library: FakeLibrary,
) -> AsyncIterator[RunOrchestrator]:
    orchestrator = RunOrchestrator(
        seatbelt_config,
        console=console,
        registry=fake_registry,
        library=fake_library,
    )
    yield orchestrator
    await orchestrator.aclose()


@pytest.fixture
def isolated_imports(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Restores sys.path and drops modules imported during the test."""
    monkeypatch.setattr(sys, "path", list(sys.path))
    monkeypatch.setattr(sys, "dont_write_bytecode", True)
    before = set(sys.modules)
    yield
    for name in set(sys.modules) - before:
        del sys.modules[name]


@pytest.fixture
def source_root(project_root: Path, isolated_imports: None) -> Path:
    return project_root / "tests"
