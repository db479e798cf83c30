#
# src/seatbelt/telemetry/__init__.py
#
"""
Logging setup for seatbelt, built on structlog.
"""

from seatbelt.telemetry.logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
