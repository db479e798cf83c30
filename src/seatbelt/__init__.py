#
# src/seatbelt/__init__.py
#
"""
Seatbelt: asynchronous test-run orchestrator.

Discovers test modules, holds their execution behind a readiness gate, runs them
and settles one outcome future per run. Watch mode re-runs on file changes.
"""

from seatbelt.exceptions import (
    ConfigurationError,
    LoadError,
    RunAbortedError,
    SeatbeltError,
    ThresholdFailure,
)
from seatbelt.outcome import OutcomeFuture
from seatbelt.runtime.orchestrator import RunOrchestrator
from seatbelt.runtime.watch_loop import WatchLoop
from seatbelt.testing.modules import ModuleRef, path_to_module_ref

__all__ = [
    "ConfigurationError",
    "LoadError",
    "ModuleRef",
    "OutcomeFuture",
    "RunAbortedError",
    "RunOrchestrator",
    "SeatbeltError",
    "ThresholdFailure",
    "WatchLoop",
    "path_to_module_ref",
]

# 🔼⚙️
