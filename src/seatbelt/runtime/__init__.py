#
# src/seatbelt/runtime/__init__.py
#
"""
Runtime components: readiness gate, report adapter, orchestrator and watch loop.
"""
from .console_interface import ConsoleInterface
from .gate import ReadinessGate, signal_when_exists
from .orchestrator import RunOrchestrator
from .report_adapter import ReportAdapter
from .watch_loop import WatchLoop, start_watching

__all__ = [
    "ConsoleInterface",
    "ReadinessGate",
    "ReportAdapter",
    "RunOrchestrator",
    "WatchLoop",
    "signal_when_exists",
    "start_watching",
]

# 🔼⚙️
