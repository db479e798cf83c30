#
# config/__init__.py
#
"""
Configuration handling sub-package for seatbelt.

Exports the loading function and core configuration model.
"""

# Export the main loading function from the loader module
from .loader import DEFAULT_CONFIG_NAME, load_config

# Export the core configuration models from the models module
from .models import (
    GlobalConfig,
    RunnerConfig,
    SeatbeltConfig,
    WatchConfig,
)

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "GlobalConfig",
    "RunnerConfig",
    "SeatbeltConfig",
    "WatchConfig",
    "load_config",
]

# 🔼⚙️
