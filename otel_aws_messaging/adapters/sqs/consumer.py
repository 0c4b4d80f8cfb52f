"""
SQS consumer loop

Long-polls an SQS queue and processes each received message under its own
consumer span, parented on the trace context carried in the message attributes.
Messages are deleted only after the handler succeeds (at-least-once delivery;
no deduplication is attempted). Receive failures back off for a fixed interval.
No per-message or per-call error stops the loop; it runs until ``stop()``.
"""

import logging
import threading
import time
from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Optional

from opentelemetry.trace import Span, SpanKind, Status, StatusCode

from otel_aws_messaging.adapters.adapter_interface import QueueTransportInterface, ReceivedMessage
from otel_aws_messaging.adapters.propagation import extract_context
from otel_aws_messaging.adapters.sqs.envelope import DirectPayload, UnwrappedBody, unwrap_body
from otel_aws_messaging.adapters.sqs.transport import queue_name_from_url
from otel_aws_messaging.exceptions import TransportError
from otel_aws_messaging.telemetry.metrics import increment_counter, record_latency
from otel_aws_messaging.telemetry.tracer import TelemetryHandle
from otel_aws_messaging.utils.backoff import BackoffTimer

logger = logging.getLogger(__name__)

MessageHandler = Callable[[ReceivedMessage, UnwrappedBody], None]


def log_message_handler(message: ReceivedMessage, unwrapped: UnwrappedBody) -> None:
    """Default handler: log the decoded payload or the raw content"""
    if isinstance(unwrapped, DirectPayload):
        payload = unwrapped.payload
        logger.info(f"Received: {payload.content} (ID: {payload.id}, Timestamp: {payload.timestamp})")
    elif unwrapped.enveloped:
        logger.info(f"Received: {unwrapped.content}")
    else:
        logger.info(f"Raw message: {unwrapped.content}")


@dataclass
class ConsumerStats:
    """Per-consumer counters"""
    received: int = 0
    processed: int = 0
    deleted: int = 0
    delete_failures: int = 0
    handler_failures: int = 0
    receive_errors: int = 0
    empty_polls: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class SqsConsumer:
    """Traced SQS consumer loop"""

    def __init__(self,
                 transport: QueueTransportInterface,
                 queue_url: str,
                 telemetry: TelemetryHandle,
                 handler: Optional[MessageHandler] = None,
                 max_messages: int = 10,
                 wait_time_seconds: int = 20,
                 backoff_seconds: float = 5.0,
                 stop_event: Optional[threading.Event] = None,
                 name: str = "sqs-consumer"):
        """Initialize the consumer

        Args:
            transport: Queue transport
            queue_url: Queue URL
            telemetry: Tracing handle (tracer + propagator)
            handler: Called with each message and its unwrapped body; logs by default
            max_messages: Receive batch size
            wait_time_seconds: Long-poll wait time
            backoff_seconds: Pause after a failed receive
            stop_event: Event shared with other consumers to stop them together
            name: Name used for the worker thread and in logs
        """
        self.transport = transport
        self.queue_url = queue_url
        self.queue_name = queue_name_from_url(queue_url)
        self.telemetry = telemetry
        self.handler = handler or log_message_handler
        self.max_messages = max_messages
        self.wait_time_seconds = wait_time_seconds
        self.backoff = BackoffTimer(backoff_seconds)
        self.stop_event = stop_event or threading.Event()
        self.name = name
        self.stats = ConsumerStats()
        self.consumer_thread = None

        self._metric_attributes = {"queue": self.queue_name}

        logger.info(f"SQS consumer {name} created, queue: {queue_url}")

    @property
    def running(self) -> bool:
        return self.consumer_thread is not None and self.consumer_thread.is_alive()

    def start(self, threaded: bool = True):
        """Start the consumer loop

        Args:
            threaded: Whether to run in a separate thread
        """
        if threaded:
            self.consumer_thread = threading.Thread(target=self.run_forever, name=self.name)
            self.consumer_thread.daemon = True
            self.consumer_thread.start()
            logger.info(f"SQS consumer {self.name} started in background thread")
        else:
            logger.info(f"SQS consumer {self.name} started in current thread")
            self.run_forever()

    def stop(self, timeout: Optional[float] = None):
        """Stop the loop after the message being processed, if any

        Args:
            timeout: Maximum time to wait for the worker thread
        """
        self.stop_event.set()
        if self.consumer_thread and self.consumer_thread is not threading.current_thread():
            self.consumer_thread.join(timeout=timeout)
            if self.consumer_thread.is_alive():
                logger.warning(f"SQS consumer {self.name} did not stop within {timeout}s")
            else:
                logger.info(f"SQS consumer {self.name} stopped")

    def run_forever(self):
        """Consumer main loop"""
        logger.info(f"Polling {self.queue_name} for messages")

        while not self.stop_event.is_set():
            try:
                self.poll_once()
            except Exception as e:
                logger.error(f"Error occurred in consumer loop: {str(e)}")
                increment_counter("sqs.consumer.errors", 1, {**self._metric_attributes, "type": "loop_error"})
                self.backoff.wait(self.stop_event)

        logger.info(f"SQS consumer {self.name} exiting, stats: {self.stats.to_dict()}")

    def poll_once(self) -> int:
        """Run one receive/process iteration

        Returns:
            int: Number of messages received
        """
        try:
            messages = self.transport.receive(self.queue_url, self.max_messages, self.wait_time_seconds)
        except TransportError as e:
            self.stats.receive_errors += 1
            increment_counter("sqs.consumer.errors", 1, {**self._metric_attributes, "type": "receive"})
            delay = self.backoff.next_delay()
            logger.error(f"Error receiving messages: {str(e)}, retrying in {delay:.1f}s")
            self.stop_event.wait(delay)
            return 0

        if not messages:
            self.stats.empty_polls += 1
            increment_counter("sqs.consumer.empty_polls", 1, self._metric_attributes)
            logger.debug(f"No messages received from {self.queue_name}")
            return 0

        self.stats.received += len(messages)
        increment_counter("sqs.consumer.received", len(messages), self._metric_attributes)

        for index, message in enumerate(messages):
            if self.stop_event.is_set():
                # Undeleted messages reappear after the visibility timeout
                logger.info(f"Stop requested, leaving {len(messages) - index} messages for redelivery")
                break
            self.process_message(message)

        return len(messages)

    def process_message(self, message: ReceivedMessage) -> bool:
        """Process one message under a consumer span and delete it on success

        Args:
            message: Received message

        Returns:
            bool: Whether the message was deleted
        """
        start_time = time.time()
        parent_context = extract_context(self.telemetry.propagator, message.attributes)

        attributes = {
            "messaging.system": "aws_sqs",
            "messaging.operation": "process",
            "messaging.destination.name": self.queue_name,
            "messaging.destination.kind": "queue",
            "messaging.message.id": message.message_id,
        }

        with self.telemetry.start_span(
            f"{self.queue_name} process",
            kind=SpanKind.CONSUMER,
            context=parent_context,
            attributes=attributes,
        ) as span:
            unwrapped = unwrap_body(message.body)
            span.set_attribute("messaging.sqs.envelope", "sns" if unwrapped.enveloped else "raw")
            span.set_attribute("messaging.payload.decoded", isinstance(unwrapped, DirectPayload))

            try:
                self.handler(message, unwrapped)
            except Exception as e:
                self.stats.handler_failures += 1
                increment_counter("sqs.consumer.errors", 1, {**self._metric_attributes, "type": "handler"})
                logger.error(f"Handler failed for message {message.message_id}, leaving it for redelivery: {str(e)}")
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                deleted = False
            else:
                self.stats.processed += 1
                deleted = self._acknowledge(message, span)

        record_latency("sqs.consumer.processing_latency", (time.time() - start_time) * 1000, self._metric_attributes)
        return deleted

    def _acknowledge(self, message: ReceivedMessage, span: Span) -> bool:
        """Delete a processed message from the queue"""
        if not message.receipt_handle:
            logger.warning(f"Message {message.message_id} has no receipt handle, cannot delete")
            return False

        try:
            self.transport.delete(self.queue_url, message.receipt_handle)
        except TransportError as e:
            self.stats.delete_failures += 1
            increment_counter("sqs.consumer.errors", 1, {**self._metric_attributes, "type": "delete"})
            logger.error(f"Failed to delete message {message.message_id}: {str(e)}")
            span.set_status(Status(StatusCode.ERROR, str(e)))
            return False

        self.stats.deleted += 1
        increment_counter("sqs.consumer.deleted", 1, self._metric_attributes)
        logger.debug(f"Deleted message {message.message_id}")
        return True

    def drain(self, max_polls: int, interval_seconds: float = 0.0) -> List[int]:
        """Run a bounded number of poll iterations

        Args:
            max_polls: Number of iterations
            interval_seconds: Pause between iterations

        Returns:
            List[int]: Messages received per iteration
        """
        counts = []
        for poll in range(max_polls):
            if self.stop_event.is_set():
                break
            counts.append(self.poll_once())
            if interval_seconds and poll < max_polls - 1:
                self.stop_event.wait(interval_seconds)
        return counts
