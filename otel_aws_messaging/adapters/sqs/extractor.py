"""
SQS message attribute extractor

Lets an OpenTelemetry propagator read trace context from SQS message attributes.
"""

from typing import Any, List, Optional

from otel_aws_messaging.adapters.adapter_interface import TextMapReader


def _string_value(value: Any) -> Optional[str]:
    """Return StringValue for String / String.<custom> attributes, else None"""
    if not isinstance(value, dict):
        return None

    data_type = value.get("DataType")
    if not isinstance(data_type, str):
        return None
    if data_type != "String" and not data_type.startswith("String."):
        return None

    string_value = value.get("StringValue")
    return string_value if isinstance(string_value, str) else None


class MessageAttributesExtractor(TextMapReader):
    """Reader carrier over a dict of SQS message attributes

    ``get`` returns only string-typed values; Number and Binary attributes
    read as absent (no coercion).

    Example::

        parent = propagator.extract(MessageAttributesExtractor(attributes), getter=attributes_getter)
        with tracer.start_as_current_span("orders process", context=parent, kind=SpanKind.CONSUMER):
            ...
    """

    def get(self, key: str) -> Optional[str]:
        return _string_value(self.attributes.get(key))

    def keys(self) -> List[str]:
        return list(self.attributes.keys())
