"""
SNS Publisher

Reads lines from stdin and publishes each one to SNS_TOPIC_ARN as a traced message.
Type 'quit' to exit. Run with: otel-sns-publisher
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from botocore.exceptions import BotoCoreError

from otel_aws_messaging.adapters.adapter_factory import TransportFactory
from otel_aws_messaging.adapters.sns.publisher import SnsPublisher
from otel_aws_messaging.apps import EXIT_CONFIG_ERROR, build_telemetry, configure_logging
from otel_aws_messaging.config import MessagingConfig
from otel_aws_messaging.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PROMPT = "Enter message (or 'quit' to exit): "


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive traced SNS publisher")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def run_interactive(publisher: SnsPublisher,
                    stdin: TextIO = None,
                    stdout: TextIO = None) -> int:
    """Publish lines read from ``stdin`` until 'quit' or end of input

    Returns:
        int: Number of messages published
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    published = 0

    while True:
        stdout.write(PROMPT)
        stdout.flush()

        line = stdin.readline()
        if not line:
            break

        text = line.strip()
        if text.lower() == "quit":
            stdout.write("Goodbye!\n")
            break
        if not text:
            continue

        message = publisher.next_message(text)
        message_id = publisher.publish_message(message, subject=f"Message {message.id}")
        if message_id is None:
            stdout.write("Failed to publish\n\n")
        else:
            stdout.write(f"Published! MessageId: {message_id}\n\n")
            published += 1

    return published


def main(argv: Optional[List[str]] = None) -> int:
    """Run the interactive publisher; returns the process exit status"""
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = MessagingConfig.from_env(require_topic=True, service_name="sns-producer")
    except ConfigurationError as e:
        logger.error(f"Configuration error: {str(e)}")
        return EXIT_CONFIG_ERROR

    logger.info(f"Publishing to: {config.topic_arn}")

    telemetry = build_telemetry(config)
    try:
        transport = TransportFactory.create_topic_transport(config)
    except BotoCoreError as e:
        logger.error(f"AWS client error: {str(e)}")
        telemetry.shutdown(config.shutdown_timeout_seconds)
        return EXIT_CONFIG_ERROR

    publisher = SnsPublisher(transport, config.topic_arn, telemetry, backoff_seconds=config.backoff_seconds)

    try:
        run_interactive(publisher)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        telemetry.shutdown(config.shutdown_timeout_seconds)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
