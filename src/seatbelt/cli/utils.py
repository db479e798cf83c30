# src/seatbelt/cli/utils.py

import asyncio
import logging
from collections.abc import Coroutine
from pathlib import Path
from typing import Any

import click
import structlog

from seatbelt.config import DEFAULT_CONFIG_NAME
from seatbelt.telemetry.logger import setup_logging as core_setup_logging

log = structlog.get_logger("cli.utils")

LOG_LEVEL_CHOICES = click.Choice(list(logging.getLevelNamesMapping().keys()), case_sensitive=False)


def logging_options(f):
    """Decorator to add logging options to any command."""
    f = click.option(
        "-l",
        "--log-level",
        type=LOG_LEVEL_CHOICES,
        default=None,
        envvar="SEATBELT_LOG_LEVEL",
        help="Set the logging level (overrides config file).",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, writable=True, resolve_path=True),
        default=None,
        envvar="SEATBELT_LOG_FILE",
        help="Path to write logs to a file (JSON format).",
    )(f)
    f = click.option(
        "--json-logs",
        is_flag=True,
        default=None,
        envvar="SEATBELT_JSON_LOGS",
        help="Output console logs as JSON.",
    )(f)
    return f


def config_path_option(f):
    """Decorator adding the shared --config-path option."""
    return click.option(
        "-c",
        "--config-path",
        type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
        default=Path(DEFAULT_CONFIG_NAME),
        show_default=True,
        envvar="SEATBELT_CONF",
        help="Path to the seatbelt configuration file (env var SEATBELT_CONF).",
        show_envvar=True,
    )(f)


def ready_file_option(f):
    """Decorator adding --ready-file: hold runs until this file exists."""
    return click.option(
        "--ready-file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        envvar="SEATBELT_READY_FILE",
        help="Hold test runs until this file exists (env var SEATBELT_READY_FILE).",
    )(f)


def setup_logging_from_context(
    ctx: click.Context,
    local_log_level: str | None = None,
    local_log_file: str | None = None,
    local_json_logs: bool | None = None,
    default_log_level: str = "WARNING",
    **extra: Any,
) -> None:
    """
    Setup logging using context values, allowing local overrides.
    """
    obj = ctx.obj or {}
    log_level_str = local_log_level or obj.get("LOG_LEVEL") or default_log_level
    log_file_path = local_log_file or obj.get("LOG_FILE")
    use_json_logs = local_json_logs if local_json_logs is not None else obj.get("JSON_LOGS", False)

    numeric_level = logging.getLevelName(log_level_str.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
        log_level_str = "INFO"

    core_setup_logging(
        level=numeric_level,
        json_logs=use_json_logs,
        log_file=log_file_path,
        **extra,
    )

    log.debug(
        "CLI logging initialized via utils",
        level=log_level_str,
        file=log_file_path or "console",
        json=use_json_logs,
    )


def run_headless(main: Coroutine[Any, Any, int]) -> int:
    """
    Runs ``main`` with asyncio.run(), which installs SIGINT handling that
    cancels the main task, and maps the way it ends to an exit code.
    """
    try:
        return asyncio.run(main)
    except KeyboardInterrupt:
        log.warning("Shutdown initiated by KeyboardInterrupt (CTRL-C).")
        return 130  # Standard exit code for SIGINT
    except Exception:
        log.critical("Command exited with an unhandled exception.", exc_info=True)
        return 1
    finally:
        logging.shutdown()

# ⚙️🛠️
