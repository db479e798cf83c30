# src/seatbelt/cli/run_cmds.py

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
from seatbelt.runtime import ConsoleInterface, RunOrchestrator, signal_when_exists
from seatbelt.telemetry import StructLogger
from seatbelt.testing import ModuleRef

log: StructLogger = structlog.get_logger("cli.run")

READY_MESSAGE = "Environment ready, running tests."
WAITING_MESSAGE = "Waiting for the ready file before running tests..."


async def _run_once(
    config: SeatbeltConfig,
    module_refs: tuple[str, ...],
    ready_file: Path | None,
    console: ConsoleInterface,
) -> int:
    orchestrator = RunOrchestrator(config, console=console)
    ready_task = None
    try:
        if ready_file is not None:
            ready_task = asyncio.create_task(signal_when_exists(orchestrator.signal_ready, ready_file))
        else:
            orchestrator.signal_ready(READY_MESSAGE)

        refs = [ModuleRef(name) for name in module_refs] or await orchestrator.discover_modules()
        if not refs:
            log.warning("No test modules found", source_root=str(config.source_root), glob=config.runner.test_glob)

        outcome = orchestrator.request_run(refs, WAITING_MESSAGE)
        try:
            await outcome
        except Exception as e:
            console.nay(str(e))
            return 1
        console.yay()
        return 0
    finally:
        if ready_task is not None and not ready_task.done():
            ready_task.cancel()
        await orchestrator.aclose()


@click.command(name="run")
@config_path_option
@ready_file_option
@click.argument("module_refs", nargs=-1)
@logging_options
@click.pass_context
def run_cli(
    ctx: click.Context,
    config_path: Path,
    ready_file: Path | None,
    module_refs: tuple[str, ...],
    **kwargs,
):
    """Run the test modules once and report YAY or NAY.

    MODULE_REFS are dotted module refs (e.g. unit.test-orchestrator); when
    omitted, every test module under the source root is run.
    """
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
    log.info("Executing 'run' command", config_path=str(config_path), modules=list(module_refs))

    exit_code = run_headless(_run_once(config, module_refs, ready_file, ConsoleInterface()))
    log.info("'run' command finished.", exit_code=exit_code)
    ctx.exit(exit_code)

# 🔼⚙️
