#
# config/loader.py
#
"""
Loads seatbelt configuration from a TOML file into attrs models.
"""

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from seatbelt.config.models import GlobalConfig, RunnerConfig, SeatbeltConfig, WatchConfig
from seatbelt.exceptions import ConfigurationError
from seatbelt.telemetry import StructLogger

log: StructLogger = structlog.get_logger("config.loader")

DEFAULT_CONFIG_NAME = "seatbelt.toml"

_SECTIONS: dict[str, type] = {
    "global": GlobalConfig,
    "runner": RunnerConfig,
    "watch": WatchConfig,
}


def _build_section(name: str, raw: Any) -> Any:
    model = _SECTIONS[name]
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Section [{name}] must be a table, got {type(raw).__name__}.")
    try:
        return model(**raw)
    except TypeError as e:
        raise ConfigurationError(f"Unknown or missing key in section [{name}]: {e}") from e
    except ValueError as e:
        raise ConfigurationError(f"Invalid value in section [{name}]: {e}") from e


def load_config(config_path: Path) -> SeatbeltConfig:
    """
    Loads and validates the configuration at ``config_path``.

    A missing file yields the default configuration rooted at the current
    working directory. Relative paths are resolved against the directory that
    contains the configuration file.

    Raises:
        ConfigurationError: If the file cannot be parsed or holds invalid values.
    """
    config_path = Path(config_path)
    load_log = log.bind(config_path=str(config_path))

    if not config_path.exists():
        load_log.info("Config file not found, using defaults", emoji_key="load")
        return SeatbeltConfig(project_root=Path.cwd().resolve())

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Could not parse '{config_path}': {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Could not read '{config_path}': {e}") from e

    unknown = set(data) - set(_SECTIONS) - {"project_root"}
    if unknown:
        raise ConfigurationError(f"Unknown configuration section(s): {sorted(unknown)}")

    base_dir = config_path.resolve().parent
    project_root = Path(data.get("project_root", "."))
    if not project_root.is_absolute():
        project_root = (base_dir / project_root).resolve()

    sections = {name: _build_section(name, data[name]) for name in _SECTIONS if name in data}

    config = SeatbeltConfig(
        project_root=project_root,
        global_config=sections.get("global", GlobalConfig()),
        runner=sections.get("runner", RunnerConfig()),
        watch=sections.get("watch", WatchConfig()),
        config_file_path=config_path.resolve(),
    )

    if not config.source_root.is_dir():
        load_log.warning("Configured source_root does not exist", source_root=str(config.source_root))

    load_log.debug("Configuration loaded", project_root=str(project_root), emoji_key="load")
    return config


# 🔼⚙️
