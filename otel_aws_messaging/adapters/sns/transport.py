"""
boto3 SNS transport

Publish calls against an SNS topic. Client failures surface as TransportError.
"""

import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from otel_aws_messaging.adapters.adapter_interface import MessageAttributes, TopicTransportInterface
from otel_aws_messaging.exceptions import TransportError

logger = logging.getLogger(__name__)


def topic_name_from_arn(topic_arn: str) -> str:
    """Resource part of a topic ARN"""
    return topic_arn.rsplit(":", 1)[-1]


class SnsTransport(TopicTransportInterface):
    """SNS topic transport over a boto3 ``sns`` client"""

    def __init__(self, client):
        """
        Args:
            client: boto3 SNS client
        """
        self.client = client

    def publish(self, topic_arn: str, body: str,
                attributes: MessageAttributes,
                subject: Optional[str] = None) -> str:
        params = {
            "TopicArn": topic_arn,
            "Message": body,
        }
        if attributes:
            params["MessageAttributes"] = attributes
        if subject:
            params["Subject"] = subject

        try:
            response = self.client.publish(**params)
        except (BotoCoreError, ClientError) as e:
            raise TransportError("publish", str(e)) from e

        message_id = response.get("MessageId", "unknown")
        logger.debug(f"Published to {topic_name_from_arn(topic_arn)}, MessageId: {message_id}")
        return message_id
