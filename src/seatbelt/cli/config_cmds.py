# src/seatbelt/cli/config_cmds.py

from pathlib import Path

import click
import structlog
from rich.pretty import pretty_repr

# Import logging utilities
from seatbelt.cli.utils import config_path_option, logging_options, setup_logging_from_context
from seatbelt.config import load_config
from seatbelt.exceptions import ConfigurationError
from seatbelt.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.config")


# Create a command group for config-related commands
@click.group(name="config")
def config_cli():
    """Commands for inspecting and validating configuration."""
    pass


@config_cli.command(name="show")
@config_path_option
@logging_options
@click.pass_context
def show_config(ctx: click.Context, config_path: Path, **kwargs):
    """Load, validate, and display the configuration."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )
    log.info("Executing 'config show' command", config_path=str(config_path))

    try:
        config = load_config(config_path)
        log.debug("Configuration loaded successfully by 'show' command.")

        # Generate a rich-formatted string and echo it for testability.
        click.echo(pretty_repr(config, expand_all=True))

        if not config.source_root.is_dir():
            log.warning("Source root does not exist.", source_root=str(config.source_root))
        else:
            log.info("Source root validated successfully.")

    except ConfigurationError as e:
        log.error("Failed to load or validate configuration", error=str(e), exc_info=True)
        click.echo(f"Error: Configuration problem in '{config_path}':\n{e}", err=True)
        ctx.exit(1)

# 🔼⚙️
