"""
boto3 SQS transport

Receive and delete calls against an SQS queue. Client failures surface as TransportError.
"""

import logging
from typing import List

from botocore.exceptions import BotoCoreError, ClientError

from otel_aws_messaging.adapters.adapter_interface import QueueTransportInterface, ReceivedMessage
from otel_aws_messaging.exceptions import TransportError

logger = logging.getLogger(__name__)


def queue_name_from_url(queue_url: str) -> str:
    """Last path segment of a queue URL"""
    return queue_url.rstrip("/").rsplit("/", 1)[-1]


class SqsTransport(QueueTransportInterface):
    """SQS queue transport over a boto3 ``sqs`` client"""

    def __init__(self, client):
        """
        Args:
            client: boto3 SQS client
        """
        self.client = client

    def receive(self, queue_url: str, max_messages: int, wait_seconds: int) -> List[ReceivedMessage]:
        try:
            response = self.client.receive_message(
                QueueUrl=queue_url,
                MaxNumberOfMessages=max_messages,
                WaitTimeSeconds=wait_seconds,
                # Message attributes are only returned when asked for
                MessageAttributeNames=["All"],
            )
        except (BotoCoreError, ClientError) as e:
            raise TransportError("receive", str(e)) from e

        messages = []
        for msg in response.get("Messages", []):
            messages.append(ReceivedMessage(
                message_id=msg.get("MessageId", ""),
                body=msg.get("Body"),
                attributes=msg.get("MessageAttributes") or {},
                receipt_handle=msg.get("ReceiptHandle"),
            ))

        logger.debug(f"Received {len(messages)} messages from {queue_name_from_url(queue_url)}")
        return messages

    def delete(self, queue_url: str, receipt_handle: str) -> None:
        try:
            self.client.delete_message(QueueUrl=queue_url, ReceiptHandle=receipt_handle)
        except (BotoCoreError, ClientError) as e:
            raise TransportError("delete", str(e)) from e
