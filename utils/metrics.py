"""
utils/metrics.py
----------------
Counter sinks used for fire-and-forget instrumentation.

A sink only needs an ``increment(counter_name)`` method. The service
treats every sink as best-effort: failures are logged, never raised.
"""

from typing import Protocol, runtime_checkable

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource

from config import METRICS_CONSOLE_EXPORT, OTEL_SERVICE_NAME
from utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class MetricsSink(Protocol):
    """Anything that can count named events."""

    def increment(self, counter_name: str) -> None:
        ...


def setup_metrics(service_name: str = OTEL_SERVICE_NAME) -> None:
    """
    Install an SDK MeterProvider that prints to the console.
    Should be called once at process startup. Without it the
    OpenTelemetry API falls back to its no-op provider.
    """
    if not METRICS_CONSOLE_EXPORT:
        logger.info("Metrics export disabled: METRICS_CONSOLE_EXPORT is off.")
        return

    resource = Resource.create(attributes={"service.name": service_name})
    reader = PeriodicExportingMetricReader(ConsoleMetricExporter())
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[reader]))
    logger.info(f"Console metrics export enabled for service: {service_name}")


class OpenTelemetryMetrics:
    """Sink that maps each counter name onto an OpenTelemetry counter."""

    def __init__(self, meter_name: str = OTEL_SERVICE_NAME, meter=None):
        self.meter = meter or metrics.get_meter(meter_name)
        self._counters = {}

    def increment(self, counter_name: str) -> None:
        counter = self._counters.get(counter_name)
        if counter is None:
            counter = self.meter.create_counter(counter_name, unit="1")
            self._counters[counter_name] = counter
        counter.add(1)
