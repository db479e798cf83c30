#
# src/seatbelt/telemetry/logger/__init__.py
#
from seatbelt.telemetry.logger.base import BASE_LOGGER_NAME, LOG_EMOJIS, StructLogger, setup_logging

__all__ = ["BASE_LOGGER_NAME", "LOG_EMOJIS", "StructLogger", "setup_logging"]

# 🔼⚙️
