"""Blocking line loop feeding the tick processor."""

import logging
from collections.abc import Callable, Iterable

__all__ = ["run_read_loop"]

logger = logging.getLogger(__name__)


def run_read_loop(lines: Iterable[str], on_line: Callable[[str], object]) -> int:
    """Forward every line of a stream to ``on_line`` until it ends or fails.

    A read error ends the loop without raising: ingestion stops, and whatever
    was recorded so far stays available to scrapes.

    Args:
        lines: Line stream, typically an open serial port.
        on_line: Callback invoked synchronously for each line.

    Returns:
        Number of lines forwarded.
    """
    forwarded = 0
    try:
        for line in lines:
            on_line(line)
            forwarded += 1
    except OSError as e:
        logger.error(f"Error reading serial input: {e}")
    else:
        logger.warning("Serial input ended")
    return forwarded
