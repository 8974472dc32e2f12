"""Application entrypoint."""

import asyncio
import logging
from collections.abc import Sequence

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.logging.logging_config import configure_logs
from src.adapters.driven.metrics.meter_collector import build_registry
from src.adapters.driven.serial.port import SerialLineSource
from src.adapters.driving.http.metrics_server import MetricsServer
from src.adapters.driving.serial_reader import SerialReader
from src.adapters.driving.signals import make_stop_event
from src.core.meter_state import MeterState
from src.ports.settings import SettingsPort

__all__ = ["main", "run"]

logger = logging.getLogger(__name__)


async def main(argv: Sequence[str] | None = None) -> None:
    """Start the power meter exporter.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Build the meter state and its metrics registry.
    4. Start the serial reader thread.
    5. Serve /metrics until SIGTERM/SIGINT.

    The reader and the server are independent: if the serial port cannot be
    opened the endpoint still serves the initial state.

    Args:
        argv: Arguments without program name; None reads sys.argv.
    """
    configure_logs()
    logger.info("Starting power meter exporter...")

    try:
        config = load_settings(argv)
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check --serial-port/SERIAL_PORT, --listen-address/LISTEN_ADDRESS "
            "(host:port) and --log-level/LOG_LEVEL.",
            exc,
        )
        return

    logging.getLogger().setLevel(config.log_level)

    # Wrap config into port so adapters do not depend on pydantic
    settings_port = SettingsPort(
        serial_port=config.serial_port,
        listen_host=config.listen_host,
        listen_port=config.listen_port,
    )

    state = MeterState()
    registry = build_registry(state)

    reader = SerialReader(state=state, source=SerialLineSource(settings_port.serial_port))
    reader.start()

    stop = make_stop_event()
    server = MetricsServer(
        registry,
        host=settings_port.listen_host,
        port=settings_port.listen_port,
    )

    try:
        async with server:
            await stop.wait()
    except Exception as e:
        logger.error(f"Unhandled exception while serving metrics: {e}", exc_info=True)

    logger.info("Power meter exporter stopped.")


def run() -> None:
    """Console script entrypoint."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")


if __name__ == "__main__":
    run()
