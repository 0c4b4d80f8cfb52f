"""
Shared fixtures: in-memory span exporter, telemetry handle and in-memory SNS/SQS transports.
"""

import itertools
import json
import time
from typing import List, Optional

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from otel_aws_messaging.adapters.adapter_interface import (
    QueueTransportInterface,
    ReceivedMessage,
    TopicTransportInterface,
)
from otel_aws_messaging.telemetry.tracer import TelemetryHandle

TEST_QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/orders-queue"
TEST_TOPIC_ARN = "arn:aws:sns:us-east-1:123456789012:orders-topic"


class FakeQueueTransport(QueueTransportInterface):
    """Queue transport returning scripted batches

    Each entry of ``batches`` is a list of messages or an exception to raise.
    Once the script is exhausted every receive returns an empty batch.
    """

    def __init__(self, batches=None):
        self.batches = list(batches or [])
        self.receive_calls = []
        self.deleted = []
        self.delete_errors = {}

    def receive(self, queue_url, max_messages, wait_seconds):
        self.receive_calls.append({
            "queue_url": queue_url,
            "max_messages": max_messages,
            "wait_seconds": wait_seconds,
            "at": time.monotonic(),
        })
        if not self.batches:
            return []
        batch = self.batches.pop(0)
        if isinstance(batch, Exception):
            raise batch
        return batch

    def delete(self, queue_url, receipt_handle):
        if receipt_handle in self.delete_errors:
            raise self.delete_errors[receipt_handle]
        self.deleted.append((queue_url, receipt_handle))


class FakeTopicTransport(TopicTransportInterface):
    """Topic transport recording publishes; ``failures`` are raised first, in order"""

    def __init__(self, failures=None):
        self.failures = list(failures or [])
        self.published = []
        self._ids = itertools.count(1)

    def publish(self, topic_arn, body, attributes, subject=None):
        if self.failures:
            raise self.failures.pop(0)
        message_id = f"sns-{next(self._ids)}"
        self.published.append({
            "topic_arn": topic_arn,
            "body": body,
            "attributes": attributes,
            "subject": subject,
            "message_id": message_id,
        })
        return message_id


class FakeBroker(FakeTopicTransport, FakeQueueTransport):
    """SNS topic subscribed by an SQS queue

    With ``raw_delivery`` the body and attributes arrive unchanged; otherwise the
    body is wrapped in an SNS notification and the SQS message carries no attributes.
    """

    def __init__(self, raw_delivery: bool = True):
        FakeTopicTransport.__init__(self)
        FakeQueueTransport.__init__(self)
        self.raw_delivery = raw_delivery
        self.queue: List[ReceivedMessage] = []
        self._handles = itertools.count(1)

    def publish(self, topic_arn, body, attributes, subject=None):
        message_id = FakeTopicTransport.publish(self, topic_arn, body, attributes, subject)
        if self.raw_delivery:
            sqs_body, sqs_attributes = body, dict(attributes)
        else:
            sqs_body = json.dumps({
                "Type": "Notification",
                "MessageId": message_id,
                "TopicArn": topic_arn,
                "Subject": subject,
                "Message": body,
                "MessageAttributes": {
                    name: {"Type": value["DataType"], "Value": value.get("StringValue")}
                    for name, value in attributes.items()
                },
            })
            sqs_attributes = {}
        self.queue.append(ReceivedMessage(
            message_id=f"sqs-{message_id}",
            body=sqs_body,
            attributes=sqs_attributes,
            receipt_handle=f"rh-{next(self._handles)}",
        ))
        return message_id

    def receive(self, queue_url, max_messages, wait_seconds):
        FakeQueueTransport.receive(self, queue_url, max_messages, wait_seconds)
        batch, self.queue = self.queue[:max_messages], self.queue[max_messages:]
        return batch


def make_message(body: Optional[str] = None, attributes=None,
                 receipt_handle: Optional[str] = "rh-1", message_id: str = "msg-1") -> ReceivedMessage:
    return ReceivedMessage(
        message_id=message_id,
        body=body,
        attributes=attributes or {},
        receipt_handle=receipt_handle,
    )


def string_attribute(value: str) -> dict:
    return {"DataType": "String", "StringValue": value}


@pytest.fixture
def span_exporter():
    """In-memory span exporter"""
    exporter = InMemorySpanExporter()
    yield exporter
    exporter.clear()


@pytest.fixture
def telemetry(span_exporter):
    """Telemetry handle exporting synchronously to ``span_exporter``"""
    handle = TelemetryHandle.create("test-service", span_exporter=span_exporter)
    yield handle
    handle.shutdown(timeout_seconds=1)


@pytest.fixture
def queue_transport():
    return FakeQueueTransport()


@pytest.fixture
def topic_transport():
    return FakeTopicTransport()


@pytest.fixture
def broker():
    return FakeBroker(raw_delivery=True)


@pytest.fixture
def envelope_broker():
    return FakeBroker(raw_delivery=False)


@pytest.fixture
def queue_url():
    return TEST_QUEUE_URL


@pytest.fixture
def topic_arn():
    return TEST_TOPIC_ARN


@pytest.fixture(name="make_message")
def make_message_fixture():
    return make_message


@pytest.fixture(name="string_attribute")
def string_attribute_fixture():
    return string_attribute
