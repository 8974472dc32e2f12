"""Background thread driving the tick processor from the serial port."""

import logging
import threading
import time
from collections.abc import Callable

from src.adapters.driven.serial.port import SerialLineSource
from src.core.read_loop import run_read_loop
from src.core.tick_processor import process_tick
from src.ports.meter import MeterStatePort

__all__ = ["SerialReader"]

logger = logging.getLogger(__name__)


class SerialReader(threading.Thread):
    """Daemon thread that reads meter ticks for the lifetime of the process.

    An open failure ends the thread and is kept on ``error``; it never
    takes the HTTP server down.
    """

    def __init__(
        self,
        state: MeterStatePort,
        source: SerialLineSource,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize reader.

        Args:
            state: Shared meter state to update.
            source: Line source over the serial device (not yet open).
            clock: Monotonic clock used to stamp ticks.
        """
        super().__init__(name="serial-reader", daemon=True)
        self.state = state
        self.source = source
        self.clock = clock
        self.error: Exception | None = None
        self.lines_read = 0

    def run(self) -> None:
        """Open the port and process lines until the stream fails."""
        try:
            self.source.open()
        except ConnectionError as e:
            self.error = e
            logger.error(f"Serial reader stopped: {e}")
            return

        try:
            self.lines_read = run_read_loop(
                self.source,
                lambda line: process_tick(self.state, line, clock=self.clock),
            )
        finally:
            self.source.close()
        logger.warning(f"Serial reader finished after {self.lines_read} lines")
