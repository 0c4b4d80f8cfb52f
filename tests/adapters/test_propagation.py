"""
Propagator bridge tests

W3C trace context and baggage carried through SNS/SQS message attributes.
"""

from opentelemetry import baggage, trace
from opentelemetry import context as context_api
from opentelemetry.context import Context
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from otel_aws_messaging.adapters.propagation import (
    attributes_getter,
    attributes_setter,
    extract_context,
    inject_context,
)
from otel_aws_messaging.adapters.sns.injector import MessageAttributesInjector
from otel_aws_messaging.adapters.sqs.extractor import MessageAttributesExtractor
from otel_aws_messaging.telemetry.tracer import default_propagator

TRACE_ID = 0x0AF7651916CD43DD8448EB211C80319C
SPAN_ID = 0xB7AD6B7169203331
TRACEPARENT = "00-0af7651916cd43dd8448eb211c80319c-b7ad6b7169203331-01"


def _context_with_span():
    span_context = SpanContext(
        trace_id=TRACE_ID,
        span_id=SPAN_ID,
        is_remote=False,
        trace_flags=TraceFlags(TraceFlags.SAMPLED),
    )
    return trace.set_span_in_context(NonRecordingSpan(span_context))


class TestGetterSetter:
    """Getter/Setter delegate to the carriers"""

    def test_setter_writes_through_injector(self):
        attributes = {}

        attributes_setter.set(MessageAttributesInjector(attributes), "traceparent", TRACEPARENT)

        assert attributes["traceparent"]["StringValue"] == TRACEPARENT

    def test_getter_returns_single_item_list(self, string_attribute):
        extractor = MessageAttributesExtractor({"traceparent": string_attribute(TRACEPARENT)})

        assert attributes_getter.get(extractor, "traceparent") == [TRACEPARENT]
        assert attributes_getter.get(extractor, "missing") is None
        assert attributes_getter.keys(extractor) == ["traceparent"]


class TestInjectExtract:
    """inject_context / extract_context helpers"""

    def test_inject_writes_traceparent(self):
        attributes = inject_context(default_propagator(), {}, _context_with_span())

        assert attributes["traceparent"] == {"DataType": "String", "StringValue": TRACEPARENT}

    def test_round_trip_preserves_span_context(self):
        propagator = default_propagator()
        attributes = inject_context(propagator, {}, _context_with_span())

        extracted = trace.get_current_span(extract_context(propagator, attributes)).get_span_context()

        assert extracted.is_valid
        assert extracted.is_remote
        assert extracted.trace_id == TRACE_ID
        assert extracted.span_id == SPAN_ID
        assert extracted.trace_flags.sampled

    def test_round_trip_preserves_baggage(self):
        propagator = default_propagator()
        context = baggage.set_baggage("tenant", "acme", context=_context_with_span())

        attributes = inject_context(propagator, {}, context)
        extracted = extract_context(propagator, attributes)

        assert "baggage" in attributes
        assert baggage.get_baggage("tenant", extracted) == "acme"

    def test_inject_without_span_writes_nothing(self):
        attributes = inject_context(default_propagator(), {}, Context())

        assert attributes == {}

    def test_inject_keeps_existing_attributes(self, string_attribute):
        attributes = {"tenant": string_attribute("acme")}

        inject_context(default_propagator(), attributes, _context_with_span())

        assert set(attributes) == {"tenant", "traceparent"}

    def test_extract_missing_attributes_gives_root_context(self):
        for attributes in (None, {}):
            context = extract_context(default_propagator(), attributes)

            assert not trace.get_current_span(context).get_span_context().is_valid

    def test_extract_malformed_traceparent_gives_root_context(self, string_attribute):
        attributes = {"traceparent": string_attribute("00-aaaa-bbbb-01")}

        context = extract_context(default_propagator(), attributes)

        assert not trace.get_current_span(context).get_span_context().is_valid

    def test_extract_ignores_non_string_traceparent(self):
        attributes = {"traceparent": {"DataType": "Binary", "BinaryValue": TRACEPARENT.encode()}}

        context = extract_context(default_propagator(), attributes)

        assert not trace.get_current_span(context).get_span_context().is_valid

    def test_extract_ignores_current_context(self):
        propagator = default_propagator()

        token = context_api.attach(_context_with_span())
        try:
            extracted = extract_context(propagator, {})
        finally:
            context_api.detach(token)

        assert not trace.get_current_span(extracted).get_span_context().is_valid
