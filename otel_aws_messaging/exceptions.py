"""
Exception hierarchy shared by the transports, consumer, publisher and entry points.
"""


class MessagingError(Exception):
    """Base exception for otel_aws_messaging errors."""


class ConfigurationError(MessagingError, ValueError):
    """Raised when a required environment value is missing or invalid."""


class TransportError(MessagingError):
    """Raised when an SNS/SQS call fails at the transport level.

    Args:
        operation: Name of the failed transport operation (receive, delete, publish)
        message: Human readable description
    """

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class PayloadDecodeError(MessagingError, ValueError):
    """Raised when a body is not a valid application payload."""
