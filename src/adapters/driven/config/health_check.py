"""Healthcheck validator for container orchestration."""

import logging
import os
from collections.abc import Sequence

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.logging.logging_config import configure_logs

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Run health check for container orchestration.

    Validates:
    - Flags and environment variables form a valid configuration.
    - The configured serial device exists.

    Args:
        argv: Arguments without program name; None reads sys.argv.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings(argv)
    except Exception as exc:
        logger.error(f"Exporter healthcheck FAILED: {exc}")
        return 1

    if not os.path.exists(settings.serial_port):
        logger.error(f"Exporter healthcheck FAILED: serial device {settings.serial_port} not found")
        return 1

    logger.info("Exporter healthcheck OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
