"""Meter state port definition (interface and DTOs)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["MeterSnapshot", "MeterStatePort", "TickDto"]


@dataclass(slots=True, frozen=True)
class TickDto:
    """Immutable result of parsing one line of serial input.

    Attributes:
        received_at_sec: Monotonic clock reading when the line arrived.
        interval_ms: Milliseconds reported by the meter; None if unparsable.
        label: Second tab-separated field, used for logging only.
    """

    received_at_sec: float
    interval_ms: float | None
    label: str = ""


@dataclass(slots=True, frozen=True)
class MeterSnapshot:
    """Consistent copy of the meter state taken under its lock.

    Attributes:
        tick_count: Number of lines received since startup.
        last_interval_ms: Interval of the most recent parsable tick (0.0 before any).
        last_tick_at_sec: Monotonic time of the most recent tick; None before any.
    """

    tick_count: int = 0
    last_interval_ms: float = 0.0
    last_tick_at_sec: float | None = None


class MeterStatePort(Protocol):
    """Interface for the shared meter state.

    Implementations must be thread-safe: the serial reader thread writes,
    HTTP scrape handlers read.
    """

    def record(self, tick: TickDto, /) -> None:
        """Apply one tick as a single atomic update.

        Args:
            tick: The parsed tick.
        """
        ...

    def snapshot(self) -> MeterSnapshot:
        """Return a consistent copy of the current state.

        Returns:
            Snapshot of counter, interval and timestamp.
        """
        ...
