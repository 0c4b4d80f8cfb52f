"""
Messaging Adapters Module

- sns: message attribute injector, boto3 topic transport, traced publisher
- sqs: message attribute extractor, envelope unwrapping, boto3 queue transport, traced consumer loop

All adapters carry OpenTelemetry trace context out-of-band in message attributes.
"""

from .adapter_factory import TransportFactory, TransportType
from .adapter_interface import (
    MessageAttributes,
    ReceivedMessage,
    TextMapReader,
    TextMapWriter,
    QueueTransportInterface,
    TopicTransportInterface,
)
from .propagation import attributes_getter, attributes_setter, inject_context, extract_context

__all__ = [
    "TransportFactory",
    "TransportType",
    "MessageAttributes",
    "ReceivedMessage",
    "TextMapReader",
    "TextMapWriter",
    "QueueTransportInterface",
    "TopicTransportInterface",
    "attributes_getter",
    "attributes_setter",
    "inject_context",
    "extract_context",
]
