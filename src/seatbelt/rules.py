#
# src/seatbelt/rules.py
#
"""
Threshold policy turning a run's aggregate counts into a verdict.
"""

import structlog

from seatbelt.exceptions import ThresholdFailure
from seatbelt.state import Counts
from seatbelt.telemetry import StructLogger

log: StructLogger = structlog.get_logger("rules")

DEFAULT_MINIMUM_PASS_THRESHOLD = 2
FAILED_OR_ERRORED_MESSAGE = "some tests failed or errored"


def check_threshold(counts: Counts, minimum: int = DEFAULT_MINIMUM_PASS_THRESHOLD) -> ThresholdFailure | None:
    """
    Applies the threshold policy to the final counts of a run.

    Any failure or error fails the run. Otherwise fewer than ``minimum`` passes
    also fails it, which catches runs where nothing actually executed.

    Returns:
        None when the run counts as a success, otherwise the failure to reject with.
    """
    if counts.failed + counts.errored > 0:
        log.debug("Threshold check failed: failures or errors", **counts.as_dict())
        return ThresholdFailure(FAILED_OR_ERRORED_MESSAGE, counts)

    if counts.passed < minimum:
        log.debug("Threshold check failed: too few passes", minimum=minimum, **counts.as_dict())
        return ThresholdFailure(f"fewer than {minimum} assertions passed ({counts.passed})", counts)

    return None


# 🔼⚙️
