#
# src/seatbelt/telemetry/logger/processors.py
#
"""
Custom structlog processors.
"""

import logging
from typing import Any

LOG_EMOJIS: dict[int | str, str] = {
    logging.DEBUG: "🐛",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💥",
    "load": "📄",
    "run": "🏃",
    "ready": "🚦",
    "watch": "👀",
    "fail": "🚫",
    "success": "🎉",
    "general": "➡️",
}

# Keys that only steer processors and must never reach a renderer.
_INTERNAL_KEYS = ("emoji_key",)


def add_emoji_processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Prefixes the event with an emoji chosen by ``emoji_key`` or the log level."""
    emoji_key = event_dict.get("emoji_key")
    if emoji_key is not None:
        emoji = LOG_EMOJIS.get(emoji_key, LOG_EMOJIS["general"])
    else:
        level = logging.getLevelName(str(event_dict.get("level", method_name)).upper())
        emoji = LOG_EMOJIS.get(level, "")

    event = event_dict.get("event")
    if emoji and isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in _INTERNAL_KEYS:
        event_dict.pop(key, None)
    return event_dict


# 🔼⚙️
