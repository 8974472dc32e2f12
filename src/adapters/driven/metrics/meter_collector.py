"""Prometheus collector projecting meter state snapshots."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from src.core.meter_state import tick_time_ms
from src.ports.meter import MeterStatePort

__all__ = ["MeterCollector", "build_registry", "render_metrics"]

TICK_TIME_METRIC = "power_meter_tick_time"
TICK_TIME_DOC = "Time in milliseconds between two ticks"
TICKS_TOTAL_METRIC = "power_meter_ticks_total"
TICKS_TOTAL_DOC = "Number of ticks"


class MeterCollector(Collector):
    """Build tick metrics on every scrape.

    Values are computed from one snapshot, so the counter and the gauge in a
    single scrape always describe the same tick.
    """

    def __init__(
        self,
        state: MeterStatePort,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize collector.

        Args:
            state: Meter state to read.
            clock: Same monotonic clock the ticks are stamped with.
        """
        self._state = state
        self._clock = clock

    def collect(self) -> Iterator[Metric]:
        """Yield the gauge (once a positive interval is known) and the counter."""
        snapshot = self._state.snapshot()

        value = tick_time_ms(snapshot, now_sec=self._clock())
        if value is not None:
            gauge = GaugeMetricFamily(TICK_TIME_METRIC, TICK_TIME_DOC)
            gauge.add_metric((), value)
            yield gauge

        counter = CounterMetricFamily(TICKS_TOTAL_METRIC, TICKS_TOTAL_DOC)
        counter.add_metric((), float(snapshot.tick_count))
        yield counter


def build_registry(
    state: MeterStatePort,
    clock: Callable[[], float] = time.monotonic,
) -> CollectorRegistry:
    """Create a dedicated registry holding only the meter collector.

    Args:
        state: Meter state to expose.
        clock: Monotonic clock shared with the tick processor.

    Returns:
        Registry without default process metrics.
    """
    registry = CollectorRegistry()
    registry.register(MeterCollector(state, clock=clock))
    return registry


def render_metrics(registry: CollectorRegistry) -> bytes:
    """Render the registry in Prometheus text format.

    Args:
        registry: Registry to render.

    Returns:
        Exposition text as bytes.
    """
    return generate_latest(registry)
