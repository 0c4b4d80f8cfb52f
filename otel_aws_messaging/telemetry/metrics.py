"""
OpenTelemetry Metrics Collection

Counters and latency histograms for the SQS consumer and SNS publisher.
Instruments are created lazily through the global meter; until ``setup_metrics`` runs they are no-ops.
"""

import logging
import threading
from typing import Dict, Any, Optional

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource

logger = logging.getLogger(__name__)

# Descriptions for the instruments recorded by this package; other names get a generic one
INSTRUMENT_DESCRIPTIONS = {
    "sqs.consumer.received": "Messages received from the queue",
    "sqs.consumer.deleted": "Messages deleted after successful processing",
    "sqs.consumer.empty_polls": "Receive calls that returned no messages",
    "sqs.consumer.errors": "Receive, delete, handler and loop failures",
    "sqs.consumer.processing_latency": "Time from receipt to delete of one message",
    "sns.publisher.published": "Messages published to the topic",
    "sns.publisher.errors": "Failed publish attempts",
    "sns.publisher.latency": "Time to publish one message, retries included",
}

_counters = {}
_histograms = {}
# Guards instrument creation; consumer workers record from several threads
_lock = threading.Lock()


def setup_metrics(service_name: str,
                  otlp_endpoint: str = "http://localhost:4317",
                  export_interval_ms: int = 10000,
                  reader: MetricReader = None) -> MeterProvider:
    """Configure OpenTelemetry metrics collection

    Args:
        service_name: Service name
        otlp_endpoint: OTLP receiver address
        export_interval_ms: Metrics export interval in milliseconds
        reader: Metric reader to use instead of the OTLP exporter

    Returns:
        MeterProvider: The installed provider; shut it down on exit
    """
    readers = []
    if reader is not None:
        readers.append(reader)
    else:
        from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

        readers.append(PeriodicExportingMetricReader(
            OTLPMetricExporter(endpoint=otlp_endpoint),
            export_interval_millis=export_interval_ms
        ))

    provider = MeterProvider(
        resource=Resource.create({"service.name": service_name}),
        metric_readers=readers,
    )

    # Instruments resolve through the global provider
    metrics.set_meter_provider(provider)

    logger.info(f"OpenTelemetry metrics configured, service name: {service_name}, OTLP endpoint: {otlp_endpoint}")

    return provider


def get_counter(name: str, description: Optional[str] = None, unit: str = "1"):
    """Get or create a monotonic counter"""
    with _lock:
        if name not in _counters:
            _counters[name] = metrics.get_meter(__name__).create_counter(
                name=name,
                description=description or INSTRUMENT_DESCRIPTIONS.get(name, f"Counter for {name}"),
                unit=unit
            )
        return _counters[name]


def get_histogram(name: str, description: Optional[str] = None, unit: str = "ms"):
    """Get or create a histogram, in milliseconds unless ``unit`` says otherwise"""
    with _lock:
        if name not in _histograms:
            _histograms[name] = metrics.get_meter(__name__).create_histogram(
                name=name,
                description=description or INSTRUMENT_DESCRIPTIONS.get(name, f"Latency histogram for {name}"),
                unit=unit
            )
        return _histograms[name]


def increment_counter(name: str, amount: int = 1, attributes: Dict[str, Any] = None):
    """Add ``amount`` to the counter ``name``

    Args:
        name: Counter name, e.g. ``sqs.consumer.received``
        amount: Amount to add
        attributes: Attribute labels, e.g. ``{"queue": "orders"}``
    """
    get_counter(name).add(amount, attributes or {})


def record_latency(name: str, value_ms: float, attributes: Dict[str, Any] = None):
    """Record one latency sample in milliseconds"""
    get_histogram(name).record(value_ms, attributes or {})
