"""Lock-guarded meter state shared by the serial reader and scrapes."""

import threading

from src.ports.meter import MeterSnapshot, MeterStatePort, TickDto

__all__ = ["MeterState", "tick_time_ms"]


class MeterState(MeterStatePort):
    """Tick counter, last interval and last tick time behind one mutex.

    Single writer (the serial reader thread), many readers (scrapes).
    Every access holds the lock for its whole duration so readers never
    see a counter that is out of step with the interval or timestamp.
    """

    def __init__(self) -> None:
        """Initialize state with zero values."""
        self._lock = threading.Lock()
        self._tick_count: int = 0
        self._last_interval_ms: float = 0.0
        self._last_tick_at_sec: float | None = None

    def record(self, tick: TickDto) -> None:
        """Apply one tick.

        The timestamp and counter always move; the interval only when the
        tick carried a parsable value.

        Args:
            tick: Parsed tick.
        """
        with self._lock:
            self._last_tick_at_sec = tick.received_at_sec
            if tick.interval_ms is not None:
                self._last_interval_ms = tick.interval_ms
            self._tick_count += 1

    def snapshot(self) -> MeterSnapshot:
        """Return a consistent copy of the state.

        Returns:
            Snapshot taken under the lock.
        """
        with self._lock:
            return MeterSnapshot(
                tick_count=self._tick_count,
                last_interval_ms=self._last_interval_ms,
                last_tick_at_sec=self._last_tick_at_sec,
            )


def tick_time_ms(snapshot: MeterSnapshot, now_sec: float) -> float | None:
    """Compute the staleness-aware tick time for a snapshot.

    Reports the greater of the last interval and the time elapsed since the
    last tick, so an overdue tick shows up as a growing value instead of a
    frozen one.

    Args:
        snapshot: State snapshot.
        now_sec: Current reading of the same clock used for ticks.

    Returns:
        Milliseconds, or None while no positive interval has been seen.
    """
    if not snapshot.last_interval_ms > 0:
        return None

    value = snapshot.last_interval_ms
    if snapshot.last_tick_at_sec is not None:
        elapsed_ms = (now_sec - snapshot.last_tick_at_sec) * 1_000.0
        value = max(value, elapsed_ms)
    return value
