"""
SNS publisher

Publishes application messages to an SNS topic under a producer span, injecting the
span's trace context into the message attributes so consumers can continue the trace.
"""

import logging
import threading
import time
from typing import Optional

from opentelemetry.trace import SpanKind, Status, StatusCode

from otel_aws_messaging.adapters.adapter_interface import MessageAttributes, TopicTransportInterface
from otel_aws_messaging.adapters.propagation import inject_context
from otel_aws_messaging.adapters.sns.transport import topic_name_from_arn
from otel_aws_messaging.exceptions import TransportError
from otel_aws_messaging.models import Message
from otel_aws_messaging.telemetry.metrics import increment_counter, record_latency
from otel_aws_messaging.telemetry.tracer import TelemetryHandle
from otel_aws_messaging.utils.backoff import BackoffTimer
from otel_aws_messaging.utils.serialization import message_to_json

logger = logging.getLogger(__name__)


class SnsPublisher:
    """Traced SNS publisher"""

    def __init__(self,
                 transport: TopicTransportInterface,
                 topic_arn: str,
                 telemetry: TelemetryHandle,
                 backoff_seconds: float = 5.0,
                 stop_event: Optional[threading.Event] = None):
        """Initialize the publisher

        Args:
            transport: Topic transport
            topic_arn: Topic ARN
            telemetry: Tracing handle (tracer + propagator)
            backoff_seconds: Pause between publish attempts
            stop_event: Set to abandon a pending retry
        """
        self.transport = transport
        self.topic_arn = topic_arn
        self.topic_name = topic_name_from_arn(topic_arn)
        self.telemetry = telemetry
        self.backoff = BackoffTimer(backoff_seconds)
        self.stop_event = stop_event or threading.Event()
        self._next_id = 1
        self._id_lock = threading.Lock()

        logger.info(f"SNS publisher created, topic: {topic_arn}")

    def next_message(self, content: str) -> Message:
        """Build a message with the next sequential id"""
        with self._id_lock:
            message_id = self._next_id
            self._next_id += 1
        return Message.create(message_id, content)

    def publish_message(self,
                        message: Message,
                        subject: Optional[str] = None,
                        attributes: Optional[MessageAttributes] = None,
                        max_retries: int = 3) -> Optional[str]:
        """Publish ``message`` with the current trace context attached

        Args:
            message: Message to publish
            subject: SNS subject
            attributes: Extra message attributes; trace context keys overwrite same-named entries
            max_retries: Maximum publish attempts

        Returns:
            Optional[str]: SNS MessageId, or None if every attempt failed
        """
        body = message_to_json(message)
        start_time = time.time()
        metric_attributes = {"topic": self.topic_name}

        with self.telemetry.start_span(
            f"{self.topic_name} publish",
            kind=SpanKind.PRODUCER,
            attributes={
                "messaging.system": "aws_sns",
                "messaging.operation": "publish",
                "messaging.destination.name": self.topic_name,
                "messaging.destination.kind": "topic",
            },
        ) as span:
            message_attributes = dict(attributes or {})
            # The producer span is current here, so consumers become its children
            inject_context(self.telemetry.propagator, message_attributes)

            for attempt in range(1, max_retries + 1):
                try:
                    message_id = self.transport.publish(self.topic_arn, body, message_attributes, subject)
                except TransportError as e:
                    increment_counter("sns.publisher.errors", 1, metric_attributes)
                    if attempt >= max_retries or self.stop_event.is_set():
                        logger.error(f"Failed to publish message {message.id} after {attempt} attempts: {str(e)}")
                        span.set_status(Status(StatusCode.ERROR, str(e)))
                        return None

                    delay = self.backoff.next_delay()
                    logger.warning(f"Publish attempt {attempt}/{max_retries} failed: {str(e)}, retrying in {delay:.1f}s")
                    self.stop_event.wait(delay)
                    continue

                span.set_attribute("messaging.message.id", message_id)
                increment_counter("sns.publisher.published", 1, metric_attributes)
                record_latency("sns.publisher.latency", (time.time() - start_time) * 1000, metric_attributes)
                logger.info(f"Published message {message.id} to SNS. MessageId: {message_id}")
                return message_id

        return None
