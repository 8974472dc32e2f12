"""Console logging setup for the exporter."""

import logging

__all__ = ["configure_logs"]


def configure_logs(level: str = "INFO") -> None:
    """Configure console logging.

    Sets up:
    - Root logger at the given level.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Format with timestamp, level, module, and line number.

    Args:
        level: Level name for the root logger.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%d/%m/%y %H:%M:%S"

    formatter = logging.Formatter(log_format, date_format)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    # Root logger
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
