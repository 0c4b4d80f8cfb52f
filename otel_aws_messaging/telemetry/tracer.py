"""
OpenTelemetry Trace Handle

Owns the tracer provider, tracer and text-map propagator used by the publisher and consumer.
The handle is constructed explicitly at startup, passed to the components that need it and
shut down (flushing buffered spans) on exit. Nothing is installed as process-wide global state.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Any, Iterator, Optional

from opentelemetry import trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.context import Context
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.trace import Span, SpanKind
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from otel_aws_messaging import __version__

logger = logging.getLogger(__name__)

INSTRUMENTATION_NAME = "otel_aws_messaging"


def default_propagator() -> TextMapPropagator:
    """W3C trace context + W3C baggage"""
    return CompositePropagator([
        TraceContextTextMapPropagator(),
        W3CBaggagePropagator(),
    ])


class TelemetryHandle:
    """Scoped tracing handle

    Args:
        tracer: Tracer used to start spans
        propagator: Text-map propagator used for inject/extract
        tracer_provider: SDK provider to flush and shut down, if owned by this handle
        meter_provider: SDK meter provider to flush and shut down, if owned by this handle
    """

    def __init__(self,
                 tracer: trace.Tracer,
                 propagator: Optional[TextMapPropagator] = None,
                 tracer_provider: Optional[TracerProvider] = None,
                 meter_provider=None):
        self.tracer = tracer
        self.propagator = propagator or default_propagator()
        self.tracer_provider = tracer_provider
        self.meter_provider = meter_provider
        self._shutdown = False

    @classmethod
    def create(cls,
               service_name: str,
               otlp_endpoint: str = "http://localhost:4317",
               span_exporter: Optional[SpanExporter] = None,
               propagator: Optional[TextMapPropagator] = None,
               meter_provider=None) -> "TelemetryHandle":
        """Configure an OpenTelemetry tracer

        Args:
            service_name: Service name
            otlp_endpoint: OTLP receiver address, used when no exporter is given
            span_exporter: Exporter to use instead of OTLP; spans are exported synchronously
            propagator: Text-map propagator (W3C trace context + baggage by default)
            meter_provider: Meter provider whose lifetime this handle also manages

        Returns:
            TelemetryHandle: The configured handle
        """
        resource = Resource.create({
            "service.name": service_name,
            "service.version": __version__,
        })
        provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

        if span_exporter is None:
            # Imported here so the gRPC exporter is only loaded when actually exporting
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

            provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
            logger.info(f"OpenTelemetry trace configured, service name: {service_name}, OTLP endpoint: {otlp_endpoint}")
        else:
            provider.add_span_processor(SimpleSpanProcessor(span_exporter))
            logger.info(f"OpenTelemetry trace configured, service name: {service_name}, exporter: {type(span_exporter).__name__}")

        tracer = provider.get_tracer(INSTRUMENTATION_NAME, __version__)
        return cls(tracer, propagator, provider, meter_provider)

    @classmethod
    def disabled(cls, propagator: Optional[TextMapPropagator] = None) -> "TelemetryHandle":
        """Handle with a no-op tracer; context is still propagated"""
        return cls(trace.NoOpTracer(), propagator)

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    @contextmanager
    def start_span(self,
                   name: str,
                   kind: SpanKind = SpanKind.INTERNAL,
                   context: Optional[Context] = None,
                   attributes: Dict[str, Any] = None) -> Iterator[Span]:
        """Start a span and make it the active context until the block exits

        Args:
            name: Span name
            kind: Span kind
            context: Parent context; the current context when None
            attributes: Span attributes

        Yields:
            Span: The active span
        """
        with self.tracer.start_as_current_span(
            name,
            context=context,
            kind=kind,
            attributes=attributes or {},
        ) as span:
            yield span

    def shutdown(self, timeout_seconds: float = 5.0) -> bool:
        """Flush buffered telemetry and release the providers

        Safe to call more than once.

        Args:
            timeout_seconds: Upper bound for the flush

        Returns:
            bool: Whether all buffered spans were flushed in time
        """
        if self._shutdown:
            return True
        self._shutdown = True

        timeout_millis = int(timeout_seconds * 1000)
        flushed = True

        if self.tracer_provider is not None:
            flushed = self.tracer_provider.force_flush(timeout_millis=timeout_millis)
            if not flushed:
                logger.warning(f"Span flush did not complete within {timeout_seconds}s")
            self.tracer_provider.shutdown()

        if self.meter_provider is not None:
            try:
                self.meter_provider.shutdown(timeout_millis=timeout_millis)
            except Exception as e:
                logger.warning(f"Error occurred while shutting down meter provider: {str(e)}")

        logger.info("OpenTelemetry telemetry shut down")
        return flushed

    def __enter__(self) -> "TelemetryHandle":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
