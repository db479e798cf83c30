#
# src/seatbelt/monitor/__init__.py
#
"""
Filesystem monitoring sub-package for seatbelt, built on watchdog.
"""
from .events import EventKind, MonitoredEvent
from .service import MonitoringService

__all__ = ["EventKind", "MonitoredEvent", "MonitoringService"]

# 🔼⚙️
