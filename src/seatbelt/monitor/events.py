#
# src/seatbelt/monitor/events.py
#
"""
Event records delivered from the filesystem watcher to the watch loop.
"""
from enum import Enum
from pathlib import Path

from attrs import define, field


class EventKind(Enum):
    STARTED = "started"  # Synthetic: emitted once when watching begins.
    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


@define(frozen=True, slots=True)
class MonitoredEvent:
    """A single file event, or the synthetic start event (no path)."""

    kind: EventKind
    src_path: Path | None = field(default=None)

    @property
    def reloads_module(self) -> bool:
        return self.kind in (EventKind.CREATED, EventKind.CHANGED) and self.src_path is not None

# 🔼⚙️
