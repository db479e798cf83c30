#
# src/seatbelt/exceptions.py
#
"""
Exception hierarchy for seatbelt.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seatbelt.state import Counts


class SeatbeltError(Exception):
    """Base class for all seatbelt errors."""

    pass


class ConfigurationError(SeatbeltError):
    """Raised when the configuration file cannot be read or is invalid."""

    pass


class UnsupportedLibraryError(ConfigurationError):
    """Raised when the configured test library is not known."""

    pass


class LoadError(SeatbeltError):
    """Raised when a test module fails to load or reload."""

    def __init__(
        self,
        module_ref: str,
        details: BaseException | None = None,
    ):
        self.module_ref = module_ref
        self.details = details
        message = f"Failed to load module '{module_ref}'"
        if details is not None:
            message += f": {type(details).__name__}: {details}"
        super().__init__(message)
        if details is not None and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class ThresholdFailure(SeatbeltError):
    """Verdict of the threshold policy when a run does not count as a success."""

    def __init__(self, message: str, counts: "Counts | None" = None):
        self.counts = counts
        super().__init__(message)


class RunAbortedError(SeatbeltError):
    """Raised into a run's outcome when the run is dropped before it executed."""

    pass


# 🔼⚙️
