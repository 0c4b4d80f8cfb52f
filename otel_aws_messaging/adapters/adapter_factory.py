"""
Transport factory

Creates boto3-backed SQS/SNS transports from a MessagingConfig.
"""

import logging
from typing import Optional

import boto3

from otel_aws_messaging.config import MessagingConfig
from otel_aws_messaging.adapters.sns.transport import SnsTransport
from otel_aws_messaging.adapters.sqs.transport import SqsTransport

logger = logging.getLogger(__name__)


class TransportType:
    """Transport type constants"""
    SQS = "sqs"
    SNS = "sns"


class TransportFactory:
    """Transport factory, used to create SQS/SNS transport instances"""

    @staticmethod
    def create_session(config: MessagingConfig) -> boto3.session.Session:
        """Create a boto3 session honouring the configured profile and region"""
        return boto3.session.Session(
            profile_name=config.profile_name,
            region_name=config.region_name,
        )

    @staticmethod
    def create_client(transport_type: str, config: MessagingConfig,
                      session: Optional[boto3.session.Session] = None):
        """Create a boto3 client

        Args:
            transport_type: "sqs" or "sns"
            config: Messaging configuration
            session: Session to create the client from

        Raises:
            ValueError: Invalid transport type
        """
        if transport_type not in (TransportType.SQS, TransportType.SNS):
            raise ValueError(f"Invalid transport type: {transport_type}")

        if session is None:
            session = TransportFactory.create_session(config)

        kwargs = {}
        if config.endpoint_url:
            kwargs["endpoint_url"] = config.endpoint_url

        logger.debug(f"Creating {transport_type} client, region: {session.region_name}, endpoint: {config.endpoint_url}")
        return session.client(transport_type, **kwargs)

    @staticmethod
    def create_queue_transport(config: MessagingConfig,
                               session: Optional[boto3.session.Session] = None) -> SqsTransport:
        """Create the SQS transport"""
        return SqsTransport(TransportFactory.create_client(TransportType.SQS, config, session))

    @staticmethod
    def create_topic_transport(config: MessagingConfig,
                               session: Optional[boto3.session.Session] = None) -> SnsTransport:
        """Create the SNS transport"""
        return SnsTransport(TransportFactory.create_client(TransportType.SNS, config, session))
