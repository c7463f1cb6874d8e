"""status-leds — application entry point (composition root).

Wires together: Config → logging → HardwareFactory → Orchestrator.
``asyncio.run`` owns the event loop; SIGINT/SIGTERM set the shutdown event.
"""

from __future__ import annotations

import asyncio
import logging as _logging
import signal
import sys
from pathlib import Path

import click

from status_leds import __version__
from status_leds.config.config_manager import load_config, write_default_config
from status_leds.core.exceptions import StatusLedsError
from status_leds.core.interfaces.hardware import HardwareFactory
from status_leds.core.models.config import StatusLedsConfig
from status_leds.core.orchestrator import ExitReason, Orchestrator
from status_leds.hardware.factory import create_hardware_factory
from status_leds.log_config.logger import setup_logging

_log = _logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TASK_FAILED = 1
EXIT_STARTUP_ERROR = 2


async def run_service(config: StatusLedsConfig, factory: HardwareFactory) -> ExitReason:
    """Run the orchestrator until a signal or a task failure."""
    shutdown = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown.set)
        except NotImplementedError:  # pragma: no cover - non-Unix
            _log.debug("Signal handlers not supported on this platform")

    orchestrator = Orchestrator(
        config,
        state_source=factory.create_state_source(),
        sink=factory.create_byte_sink(),
    )
    _log.info(
        "Loaded configuration: %d services, %d LEDs",
        len(config.services),
        config.strip.length,
    )
    return await orchestrator.run(shutdown)


@click.command()
@click.version_option(version=__version__, prog_name="status-leds")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (.json or .yaml). Default: $STATUS_LEDS_CONFIG_FILE or the bundled file.",
)
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override system.log_level from the configuration.",
)
@click.option("--dev", is_flag=True, help="Use mock hardware and a mock state source.")
@click.option(
    "--write-default-config",
    "default_config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write a default configuration to this path and exit.",
)
def main(
    config_path: Path | None,
    log_level: str | None,
    dev: bool,
    default_config_path: Path | None,
) -> None:
    """Monitor systemd units and show their state on an RGBW LED strip."""
    if default_config_path is not None:
        try:
            write_default_config(default_config_path)
        except OSError as exc:
            click.echo(f"Failed to write default config: {exc}", err=True)
            sys.exit(EXIT_STARTUP_ERROR)
        click.echo(f"Wrote default configuration to {default_config_path}")
        return

    try:
        config = load_config(config_path)
    except (FileNotFoundError, StatusLedsError) as exc:
        message = exc.get_full_message() if isinstance(exc, StatusLedsError) else str(exc)
        click.echo(f"Failed to load config: {message}", err=True)
        sys.exit(EXIT_STARTUP_ERROR)

    if dev:
        config = config.model_copy(
            update={"system": config.system.model_copy(update={"dev_mode": True})}
        )
    setup_logging(log_level or config.system.log_level, config.system.log_dir)
    _log.info("Starting status-leds %s", __version__)

    factory = create_hardware_factory(config)
    try:
        reason = asyncio.run(run_service(config, factory))
    except StatusLedsError as exc:
        _log.error("%s", exc)
        click.echo(exc.get_full_message(), err=True)
        sys.exit(EXIT_STARTUP_ERROR)
    finally:
        factory.cleanup()

    if reason is ExitReason.SIGNAL:
        _log.info("status-leds stopped")
        sys.exit(EXIT_OK)
    _log.error("status-leds stopped: %s", reason.value)
    sys.exit(EXIT_TASK_FAILED)


if __name__ == "__main__":
    main()
