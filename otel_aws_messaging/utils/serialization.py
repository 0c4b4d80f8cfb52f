"""
Message serialization/deserialization tools

Provides functionality for converting between Message records and Python dictionaries/JSON.
"""

import json
from typing import Dict, Any

from pydantic import ValidationError

from otel_aws_messaging.exceptions import PayloadDecodeError
from otel_aws_messaging.models import MAX_MESSAGE_ID, Message


def message_to_dict(message: Message) -> Dict[str, Any]:
    """Convert Message to dictionary

    Args:
        message: Message record

    Returns:
        Dict: Dictionary containing message fields
    """
    if message is None:
        return {}

    return message.model_dump()


def dict_to_message(data: Dict[str, Any]) -> Message:
    """Convert dictionary to Message

    Unknown keys are ignored.

    Args:
        data: Dictionary data

    Returns:
        Message: Message record

    Raises:
        PayloadDecodeError: If a field is missing or has the wrong type
    """
    try:
        return Message.model_validate(data)
    except ValidationError as e:
        raise PayloadDecodeError(f"Invalid payload: {e.error_count()} validation error(s)") from e


def message_to_json(message: Message) -> str:
    """Convert Message to JSON string

    Args:
        message: Message record

    Returns:
        str: JSON string
    """
    if message is None:
        return "{}"

    return json.dumps(message_to_dict(message))


def json_to_message(json_str: str) -> Message:
    """Convert JSON string to Message

    Malformed JSON (including input nested past the parser's depth limit)
    is reported the same way as a schema mismatch.

    Args:
        json_str: JSON string

    Returns:
        Message: Message record

    Raises:
        PayloadDecodeError: If the string is not JSON or not a valid payload
    """
    if not json_str:
        raise PayloadDecodeError("Empty payload")

    try:
        return Message.model_validate_json(json_str)
    except ValidationError as e:
        raise PayloadDecodeError(f"Invalid payload: {e.error_count()} validation error(s)") from e
