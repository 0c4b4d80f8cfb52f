"""
SQS Adapter

Consume side: trace context is extracted from SQS message attributes and bodies
are unwrapped from optional SNS envelopes.
"""

from otel_aws_messaging.adapters.sqs.extractor import MessageAttributesExtractor
from otel_aws_messaging.adapters.sqs.envelope import (
    DirectPayload,
    RawFallback,
    UnwrappedBody,
    unwrap_body,
)
from otel_aws_messaging.adapters.sqs.transport import SqsTransport, queue_name_from_url

__all__ = [
    "MessageAttributesExtractor",
    "DirectPayload",
    "RawFallback",
    "UnwrappedBody",
    "unwrap_body",
    "SqsTransport",
    "queue_name_from_url",
]
