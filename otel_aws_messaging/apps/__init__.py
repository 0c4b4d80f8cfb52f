"""
Command-line entry points: SQS consumer, interactive SNS publisher, publish-then-consume demo.
"""

import logging

from otel_aws_messaging.config import MessagingConfig
from otel_aws_messaging.telemetry.metrics import setup_metrics
from otel_aws_messaging.telemetry.tracer import TelemetryHandle

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Exit status for startup configuration errors
EXIT_CONFIG_ERROR = 2


def configure_logging(level: str = "INFO"):
    """Configure root logging for an entry point"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT
    )
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)


def build_telemetry(config: MessagingConfig) -> TelemetryHandle:
    """Create the telemetry handle (and metrics provider) for a process"""
    if not config.enable_tracing:
        return TelemetryHandle.disabled()

    meter_provider = setup_metrics(config.service_name, config.otlp_endpoint)
    return TelemetryHandle.create(
        config.service_name,
        otlp_endpoint=config.otlp_endpoint,
        meter_provider=meter_provider,
    )
