"""
Carrier and transport interfaces

Carriers: the writer (inject) and reader (extract) views a text-map propagator uses
over a transport's message attributes. Each carrier wraps exactly one attribute
mapping for the duration of one inject or extract call and holds no other state.

Transports: the narrow SQS/SNS operations the consumer and publisher depend on.
Implementations translate client failures into ``TransportError``.
"""

import abc
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

# Attribute name -> {"DataType": ..., "StringValue": ...}
MessageAttributes = Dict[str, Dict[str, Any]]


class TextMapCarrier(abc.ABC):
    """Common base for the directional carriers"""

    def __init__(self, attributes: MessageAttributes):
        self.attributes = attributes

    def __len__(self) -> int:
        return len(self.attributes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.attributes)} attributes)"


class TextMapWriter(TextMapCarrier):
    """Write side of a carrier, used only during injection"""

    @abc.abstractmethod
    def set(self, key: str, value: str) -> None:
        """Insert or overwrite ``key`` with a string value

        Args:
            key: Attribute name
            value: Attribute value
        """
        pass


class TextMapReader(TextMapCarrier):
    """Read side of a carrier, used only during extraction"""

    @abc.abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the string value stored under ``key``, or None

        Args:
            key: Attribute name
        """
        pass

    @abc.abstractmethod
    def keys(self) -> List[str]:
        """Return every attribute name present, in no particular order"""
        pass


@dataclass
class ReceivedMessage:
    """A message returned by a queue receive call"""
    message_id: str
    body: Optional[str]
    attributes: MessageAttributes = field(default_factory=dict)
    receipt_handle: Optional[str] = None


class QueueTransportInterface(abc.ABC):
    """Pull-based queue operations"""

    @abc.abstractmethod
    def receive(self, queue_url: str, max_messages: int, wait_seconds: int) -> List[ReceivedMessage]:
        """Long-poll for a batch of messages

        Args:
            queue_url: Queue reference
            max_messages: Maximum batch size
            wait_seconds: Long-poll wait time

        Returns:
            List[ReceivedMessage]: The batch, possibly empty

        Raises:
            TransportError: Receive failed
        """
        pass

    @abc.abstractmethod
    def delete(self, queue_url: str, receipt_handle: str) -> None:
        """Acknowledge a message

        Args:
            queue_url: Queue reference
            receipt_handle: Receipt handle of the received message

        Raises:
            TransportError: Delete failed; the message stays visible for redelivery
        """
        pass


class TopicTransportInterface(abc.ABC):
    """Fan-out topic operations"""

    @abc.abstractmethod
    def publish(self, topic_arn: str, body: str,
                attributes: MessageAttributes,
                subject: Optional[str] = None) -> str:
        """Publish a message

        Args:
            topic_arn: Topic reference
            body: Message body
            attributes: Message attributes
            subject: Optional subject

        Returns:
            str: Message ID assigned by the topic

        Raises:
            TransportError: Publish failed
        """
        pass
