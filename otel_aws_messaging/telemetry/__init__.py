"""
OpenTelemetry Integration Module

Provides distributed tracing and metrics collection capabilities:
- tracer: explicitly constructed tracing handle (tracer, propagator, lifetime)
- metrics: Metrics collection
"""

from .tracer import (
    TelemetryHandle,
    default_propagator,
    INSTRUMENTATION_NAME,
)
from .metrics import (
    setup_metrics,
    increment_counter,
    record_latency,
)

__all__ = [
    "TelemetryHandle",
    "default_propagator",
    "INSTRUMENTATION_NAME",
    "setup_metrics",
    "increment_counter",
    "record_latency",
]
