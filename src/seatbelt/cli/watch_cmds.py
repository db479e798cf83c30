# src/seatbelt/cli/watch_cmds.py
#

import asyncio
from pathlib import Path

import click
import structlog

from seatbelt.cli.utils import (
    config_path_option,
    logging_options,
    ready_file_option,
    run_headless,
    setup_logging_from_context,
)
from seatbelt.config import SeatbeltConfig, load_config
from seatbelt.exceptions import ConfigurationError
from seatbelt.runtime import ConsoleInterface, RunOrchestrator, signal_when_exists, start_watching
from seatbelt.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.watch")

READY_MESSAGE = "Environment ready, watching for changes."
WAITING_MESSAGE = "Waiting for the ready file before running tests..."


async def _watch(config: SeatbeltConfig, ready_file: Path | None, console: ConsoleInterface) -> int:
    orchestrator = RunOrchestrator(config, console=console)
    ready_task = None
    watch_loop = None
    try:
        if ready_file is not None:
            ready_task = asyncio.create_task(signal_when_exists(orchestrator.signal_ready, ready_file))
        else:
            orchestrator.signal_ready(READY_MESSAGE)

        watch_loop, forever = await start_watching(orchestrator, WAITING_MESSAGE)
        await forever
        return 0
    finally:
        if ready_task is not None and not ready_task.done():
            ready_task.cancel()
        if watch_loop is not None:
            await watch_loop.stop()
        await orchestrator.aclose()


@click.command(name="watch")
@config_path_option
@ready_file_option
@logging_options
@click.pass_context
def watch_cli(ctx: click.Context, config_path: Path, ready_file: Path | None, **kwargs):
    """Re-run the test modules whenever source files change."""
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        click.echo(f"Error: Configuration problem in '{config_path}':\n{e}", err=True)
        ctx.exit(2)

    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
        default_log_level=config.global_config.log_level,
    )
    log.info("Initializing watch command...", project_root=str(config.project_root))

    exit_code = run_headless(_watch(config, ready_file, ConsoleInterface()))

    log.info("'watch' command finished.", exit_code=exit_code)
    ctx.exit(exit_code)


# 🔼⚙️
