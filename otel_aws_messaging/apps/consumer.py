"""
SQS Consumer

Polls SQS_QUEUE_URL until interrupted (SIGINT/SIGTERM), continuing the publisher's
trace for each message. Run with: otel-sqs-consumer [--workers N]
"""

import argparse
import logging
import signal
import threading
from typing import List, Optional

from botocore.exceptions import BotoCoreError

from otel_aws_messaging.adapters.adapter_factory import TransportFactory
from otel_aws_messaging.adapters.sqs.consumer import SqsConsumer
from otel_aws_messaging.apps import EXIT_CONFIG_ERROR, build_telemetry, configure_logging
from otel_aws_messaging.config import MessagingConfig
from otel_aws_messaging.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Traced SQS consumer")
    parser.add_argument("--workers", type=int, default=1,
                        help="Number of consumer loops polling the queue")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Start the consumer loop(s); returns the process exit status"""
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = MessagingConfig.from_env(require_queue=True, service_name="sqs-consumer")
        if args.workers < 1:
            raise ConfigurationError(f"--workers must be at least 1, got {args.workers}")
    except ConfigurationError as e:
        logger.error(f"Configuration error: {str(e)}")
        return EXIT_CONFIG_ERROR

    logger.info(f"Consuming from: {config.queue_url}")

    telemetry = build_telemetry(config)
    try:
        transport = TransportFactory.create_queue_transport(config)
    except BotoCoreError as e:
        logger.error(f"AWS client error: {str(e)}")
        telemetry.shutdown(config.shutdown_timeout_seconds)
        return EXIT_CONFIG_ERROR

    stop_event = threading.Event()

    consumers = [
        SqsConsumer(
            transport,
            config.queue_url,
            telemetry,
            max_messages=config.max_messages,
            wait_time_seconds=config.wait_time_seconds,
            backoff_seconds=config.backoff_seconds,
            stop_event=stop_event,
            name=f"sqs-consumer-{i}",
        )
        for i in range(args.workers)
    ]

    # Add signal handlers for graceful exit
    def handle_signal(signum, frame):
        logger.info("Received exit signal, stopping after the current poll...")
        stop_event.set()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        for consumer in consumers[1:]:
            consumer.start(threaded=True)
        # The first loop runs in the main thread
        consumers[0].start(threaded=False)
    finally:
        stop_event.set()
        for consumer in consumers[1:]:
            consumer.stop(timeout=config.wait_time_seconds + config.shutdown_timeout_seconds)
        telemetry.shutdown(config.shutdown_timeout_seconds)

    logger.info("Consumer stopped")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
