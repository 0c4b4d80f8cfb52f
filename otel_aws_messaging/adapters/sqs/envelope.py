"""
SQS body unwrapping

A body delivered to SQS from an SNS subscription is either the raw published
payload (RawMessageDelivery enabled) or an SNS notification whose ``Message``
field holds the payload as a nested JSON string. Envelope detection is best-effort:
anything that is not a recognisable payload degrades to raw content.

Trace context is never read from the body; it always comes from the outer SQS
message attributes.
"""

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import ValidationError

from otel_aws_messaging.exceptions import PayloadDecodeError
from otel_aws_messaging.models import Message, SnsNotification
from otel_aws_messaging.utils.serialization import json_to_message


@dataclass(frozen=True)
class DirectPayload:
    """Body decoded to an application payload"""
    payload: Message
    enveloped: bool = False


@dataclass(frozen=True)
class RawFallback:
    """Body (or envelope Message field) that is not a payload, kept as text"""
    content: str
    enveloped: bool = False


UnwrappedBody = Union[DirectPayload, RawFallback]


def _envelope_message(body: str) -> Optional[str]:
    """Return the SNS ``Message`` string if ``body`` is an SNS envelope"""
    try:
        return SnsNotification.model_validate_json(body).Message
    except ValidationError:
        return None


def _decode(text: str, enveloped: bool) -> UnwrappedBody:
    try:
        return DirectPayload(json_to_message(text), enveloped=enveloped)
    except PayloadDecodeError:
        return RawFallback(text, enveloped=enveloped)


def unwrap_body(body: Optional[str]) -> UnwrappedBody:
    """Recover the application payload from an SQS message body

    1. SNS envelope with a payload in ``Message`` -> DirectPayload(enveloped=True)
    2. SNS envelope with anything else in ``Message`` -> RawFallback(<Message>, enveloped=True)
    3. Direct payload JSON -> DirectPayload(enveloped=False)
    4. Anything else -> RawFallback(<body>, enveloped=False)

    Never raises.

    Args:
        body: SQS message body, None when the message had no body

    Returns:
        UnwrappedBody: DirectPayload or RawFallback
    """
    if body is None:
        return RawFallback("", enveloped=False)

    inner = _envelope_message(body)
    if inner is not None:
        return _decode(inner, enveloped=True)

    return _decode(body, enveloped=False)
