"""
SNS/SQS round-trip demo

Publishes a few messages to SNS_TOPIC_ARN, waits for delivery, then polls SQS_QUEUE_URL
a fixed number of times. Both sides share one trace per message.
"""

import argparse
import logging
import threading
from typing import List, Optional

from botocore.exceptions import BotoCoreError

from otel_aws_messaging.adapters.adapter_factory import TransportFactory
from otel_aws_messaging.adapters.sns.publisher import SnsPublisher
from otel_aws_messaging.adapters.sqs.consumer import SqsConsumer
from otel_aws_messaging.apps import EXIT_CONFIG_ERROR, build_telemetry, configure_logging
from otel_aws_messaging.config import MessagingConfig
from otel_aws_messaging.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEMO_WAIT_TIME_SECONDS = 10


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SNS/SQS trace propagation demo")
    parser.add_argument("--count", type=int, default=3, help="Messages to publish")
    parser.add_argument("--polls", type=int, default=3, help="Receive iterations")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def run_demo(publisher: SnsPublisher,
             consumer: SqsConsumer,
             count: int = 3,
             polls: int = 3,
             publish_interval: float = 0.5,
             delivery_delay: float = 2.0,
             poll_interval: float = 1.0) -> List[int]:
    """Publish ``count`` messages then run ``polls`` receive iterations

    Returns:
        List[int]: Messages received per poll
    """
    pause = threading.Event()

    logger.info("--- Publishing Messages ---")
    for i in range(1, count + 1):
        message = publisher.next_message(f"Test message number {i}")
        publisher.publish_message(message, subject="Test Message")
        if i < count:
            pause.wait(publish_interval)

    logger.info("--- Consuming Messages ---")
    # Give SNS time to fan out to the queue
    pause.wait(delivery_delay)

    counts = consumer.drain(polls, interval_seconds=poll_interval)
    logger.info(f"Received {sum(counts)} messages in {len(counts)} polls")
    return counts


def main(argv: Optional[List[str]] = None) -> int:
    """Run the demo; returns the process exit status"""
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = MessagingConfig.from_env(require_topic=True, require_queue=True,
                                          service_name="sns-sqs-demo")
    except ConfigurationError as e:
        logger.error(f"Configuration error: {str(e)}")
        return EXIT_CONFIG_ERROR

    logger.info(f"SNS Topic ARN: {config.topic_arn}")
    logger.info(f"SQS Queue URL: {config.queue_url}")

    telemetry = build_telemetry(config)
    try:
        session = TransportFactory.create_session(config)
        topic_transport = TransportFactory.create_topic_transport(config, session)
        queue_transport = TransportFactory.create_queue_transport(config, session)
    except BotoCoreError as e:
        logger.error(f"AWS client error: {str(e)}")
        telemetry.shutdown(config.shutdown_timeout_seconds)
        return EXIT_CONFIG_ERROR

    publisher = SnsPublisher(
        topic_transport,
        config.topic_arn,
        telemetry,
        backoff_seconds=config.backoff_seconds,
    )
    consumer = SqsConsumer(
        queue_transport,
        config.queue_url,
        telemetry,
        max_messages=config.max_messages,
        wait_time_seconds=DEMO_WAIT_TIME_SECONDS,
        backoff_seconds=config.backoff_seconds,
    )

    try:
        run_demo(publisher, consumer, count=args.count, polls=args.polls)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        telemetry.shutdown(config.shutdown_timeout_seconds)

    logger.info("Example completed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
