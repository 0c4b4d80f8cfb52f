"""
SNS Adapter

Publish side: trace context is injected into SNS message attributes.
"""

from otel_aws_messaging.adapters.sns.injector import MessageAttributesInjector
from otel_aws_messaging.adapters.sns.transport import SnsTransport, topic_name_from_arn

__all__ = [
    "MessageAttributesInjector",
    "SnsTransport",
    "topic_name_from_arn",
]
