"""Parsing of serial tick lines and their application to the meter state."""

import logging
import time
from collections.abc import Callable

from src.ports.meter import MeterStatePort, TickDto

__all__ = ["parse_tick", "process_tick", "FIELD_SEPARATOR"]

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\t"


def parse_tick(line: str, received_at_sec: float) -> TickDto:
    """Parse one `<millis>\\t<label>` line.

    A line whose first field is not a float still yields a tick, with
    ``interval_ms=None``. No range check is applied to the parsed value.

    Args:
        line: Raw line without terminator.
        received_at_sec: Clock reading when the line arrived.

    Returns:
        Parsed tick.
    """
    fields = line.split(FIELD_SEPARATOR)
    label = fields[1] if len(fields) > 1 else ""

    try:
        interval_ms: float | None = float(fields[0])
    except ValueError as e:
        logger.error(f"Error parsing tick interval from {line!r}: {e}")
        interval_ms = None

    return TickDto(received_at_sec=received_at_sec, interval_ms=interval_ms, label=label)


def process_tick(
    state: MeterStatePort,
    line: str,
    clock: Callable[[], float] = time.monotonic,
) -> TickDto:
    """Parse a line and record it on the meter state.

    Args:
        state: Shared meter state.
        line: Raw line without terminator.
        clock: Monotonic clock in seconds.

    Returns:
        The tick that was recorded.
    """
    tick = parse_tick(line, received_at_sec=clock())
    state.record(tick)

    if tick.interval_ms is not None:
        logger.info(f"tick time: {tick.interval_ms:.0f} ms, counter: {tick.label}")
    else:
        logger.info(f"tick time: <unparsed>, counter: {tick.label}")
    return tick
