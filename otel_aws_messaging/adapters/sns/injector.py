"""
SNS message attribute injector

Lets an OpenTelemetry propagator write trace context into SNS message attributes.
"""

from otel_aws_messaging.adapters.adapter_interface import TextMapWriter

STRING_DATA_TYPE = "String"


class MessageAttributesInjector(TextMapWriter):
    """Writer carrier over a dict of SNS message attributes

    Values are stored as ``{"DataType": "String", "StringValue": value}``.
    Names are not validated; SNS rejects invalid names at publish time.

    Example::

        attributes = {}
        propagator.inject(MessageAttributesInjector(attributes), setter=attributes_setter)
        sns.publish(TopicArn=topic_arn, Message=body, MessageAttributes=attributes)
    """

    def set(self, key: str, value: str) -> None:
        self.attributes[key] = {
            "DataType": STRING_DATA_TYPE,
            "StringValue": value,
        }
