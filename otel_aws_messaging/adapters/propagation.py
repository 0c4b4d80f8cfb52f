"""
Bridges between the message attribute carriers and OpenTelemetry text-map propagators.

The propagator API passes the carrier object through to a Getter/Setter; these
delegate to the directional carrier so the propagator never sees the attribute
value shape.
"""

import logging
from typing import List, Optional

from opentelemetry.context import Context
from opentelemetry.propagators.textmap import Getter, Setter, TextMapPropagator

from otel_aws_messaging.adapters.adapter_interface import (
    MessageAttributes,
    TextMapReader,
    TextMapWriter,
)
from otel_aws_messaging.adapters.sns.injector import MessageAttributesInjector
from otel_aws_messaging.adapters.sqs.extractor import MessageAttributesExtractor

logger = logging.getLogger(__name__)


class MessageAttributesSetter(Setter[TextMapWriter]):
    def set(self, carrier: TextMapWriter, key: str, value: str) -> None:
        carrier.set(key, value)


class MessageAttributesGetter(Getter[TextMapReader]):
    def get(self, carrier: TextMapReader, key: str) -> Optional[List[str]]:
        value = carrier.get(key)
        if value is None:
            return None
        return [value]

    def keys(self, carrier: TextMapReader) -> List[str]:
        return carrier.keys()


attributes_setter = MessageAttributesSetter()
attributes_getter = MessageAttributesGetter()


def inject_context(propagator: TextMapPropagator,
                   attributes: MessageAttributes,
                   context: Optional[Context] = None) -> MessageAttributes:
    """Inject ``context`` (the current context when None) into ``attributes``

    Args:
        propagator: Text-map propagator
        attributes: Attribute dict to write into, modified in place
        context: Context to inject

    Returns:
        MessageAttributes: The same ``attributes`` dict
    """
    propagator.inject(MessageAttributesInjector(attributes), context=context, setter=attributes_setter)
    return attributes


def extract_context(propagator: TextMapPropagator,
                    attributes: Optional[MessageAttributes]) -> Context:
    """Extract a parent context from ``attributes``

    Missing or malformed attributes yield an empty context (the next span is a root span).

    Args:
        propagator: Text-map propagator
        attributes: Received message attributes

    Returns:
        Context: Extracted parent context
    """
    carrier = MessageAttributesExtractor(attributes or {})
    context = propagator.extract(carrier, context=Context(), getter=attributes_getter)
    logger.debug(f"Extracted trace context from {carrier}")
    return context
