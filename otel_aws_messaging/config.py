"""
Configuration settings for the SNS publisher and SQS consumer
"""
import os
from typing import Dict, Any, Optional
from dataclasses import dataclass

from otel_aws_messaging.exceptions import ConfigurationError

# SQS receive_message limits
MAX_BATCH_SIZE = 10
MAX_WAIT_TIME_SECONDS = 20

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int) -> int:
    value = _env_str(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def _env_float(name: str, default: float) -> float:
    value = _env_str(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


def _env_bool(name: str, default: bool) -> bool:
    value = _env_str(name)
    if value is None:
        return default
    if value.lower() in _TRUE_VALUES:
        return True
    if value.lower() in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass
class MessagingConfig:
    """Configuration for the SNS/SQS messaging pair"""
    topic_arn: Optional[str] = None
    queue_url: Optional[str] = None

    # AWS client configuration (None falls back to the boto3 credential/region chain)
    region_name: Optional[str] = None
    profile_name: Optional[str] = None
    endpoint_url: Optional[str] = None

    # Consumer loop
    max_messages: int = MAX_BATCH_SIZE
    wait_time_seconds: int = MAX_WAIT_TIME_SECONDS
    backoff_seconds: float = 5.0

    # Tracing configuration
    enable_tracing: bool = True
    service_name: str = "sns-sqs-consumer"
    otlp_endpoint: str = "http://localhost:4317"
    shutdown_timeout_seconds: float = 5.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check value ranges

        Raises:
            ConfigurationError: If a value is out of range
        """
        if not 1 <= self.max_messages <= MAX_BATCH_SIZE:
            raise ConfigurationError(
                f"max_messages must be between 1 and {MAX_BATCH_SIZE}, got {self.max_messages}"
            )
        if not 0 <= self.wait_time_seconds <= MAX_WAIT_TIME_SECONDS:
            raise ConfigurationError(
                f"wait_time_seconds must be between 0 and {MAX_WAIT_TIME_SECONDS}, got {self.wait_time_seconds}"
            )
        if self.backoff_seconds < 0:
            raise ConfigurationError(f"backoff_seconds must not be negative, got {self.backoff_seconds}")
        if self.shutdown_timeout_seconds <= 0:
            raise ConfigurationError(
                f"shutdown_timeout_seconds must be positive, got {self.shutdown_timeout_seconds}"
            )

    @classmethod
    def from_env(cls, require_topic: bool = False, require_queue: bool = False,
                 service_name: Optional[str] = None) -> "MessagingConfig":
        """Create config from environment variables

        Args:
            require_topic: Fail if SNS_TOPIC_ARN is not set
            require_queue: Fail if SQS_QUEUE_URL is not set
            service_name: Default service name when OTEL_SERVICE_NAME is not set

        Raises:
            ConfigurationError: If a required variable is missing or a value is invalid
        """
        topic_arn = _env_str("SNS_TOPIC_ARN")
        queue_url = _env_str("SQS_QUEUE_URL")

        if require_topic and not topic_arn:
            raise ConfigurationError("SNS_TOPIC_ARN environment variable not set")
        if require_queue and not queue_url:
            raise ConfigurationError("SQS_QUEUE_URL environment variable not set")

        return cls(
            topic_arn=topic_arn,
            queue_url=queue_url,
            region_name=_env_str("AWS_REGION", _env_str("AWS_DEFAULT_REGION")),
            profile_name=_env_str("AWS_PROFILE"),
            endpoint_url=_env_str("AWS_ENDPOINT_URL"),
            max_messages=_env_int("SQS_MAX_MESSAGES", MAX_BATCH_SIZE),
            wait_time_seconds=_env_int("SQS_WAIT_TIME_SECONDS", MAX_WAIT_TIME_SECONDS),
            backoff_seconds=_env_float("SQS_BACKOFF_SECONDS", 5.0),
            enable_tracing=_env_bool("OTEL_TRACING_ENABLED", True),
            service_name=_env_str("OTEL_SERVICE_NAME", service_name or "sns-sqs-consumer"),
            otlp_endpoint=_env_str("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317"),
            shutdown_timeout_seconds=_env_float("OTEL_SHUTDOWN_TIMEOUT_SECONDS", 5.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging"""
        return {
            "topic_arn": self.topic_arn,
            "queue_url": self.queue_url,
            "region_name": self.region_name,
            "profile_name": self.profile_name,
            "endpoint_url": self.endpoint_url,
            "max_messages": self.max_messages,
            "wait_time_seconds": self.wait_time_seconds,
            "backoff_seconds": self.backoff_seconds,
            "enable_tracing": self.enable_tracing,
            "service_name": self.service_name,
            "otlp_endpoint": self.otlp_endpoint,
        }
