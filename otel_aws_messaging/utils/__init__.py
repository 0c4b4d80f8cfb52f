"""
Utility helpers: payload serialization and retry backoff.
"""

from .backoff import BackoffTimer
from .serialization import (
    message_to_dict,
    dict_to_message,
    message_to_json,
    json_to_message,
)

__all__ = [
    "BackoffTimer",
    "message_to_dict",
    "dict_to_message",
    "message_to_json",
    "json_to_message",
]
