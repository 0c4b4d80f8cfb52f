"""
Wire models: the application message and the SNS notification envelope.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# Message ids are unsigned 32-bit on the wire
MAX_MESSAGE_ID = 2**32 - 1


class Message(BaseModel):
    """Application payload

    Constructed by the publisher, serialized once, deserialized once by the consumer.
    Unknown fields are ignored on decode.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: StrictInt = Field(..., ge=0, le=MAX_MESSAGE_ID)
    content: StrictStr
    timestamp: StrictStr

    @classmethod
    def create(cls, message_id: int, content: str) -> "Message":
        """Create a message stamped with the current UTC time (RFC3339)"""
        return cls(
            id=message_id,
            content=content,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )


class SnsNotification(BaseModel):
    """SNS notification body as delivered to a subscribed queue

    Only ``Message`` matters here; Type, TopicArn, Signature and the rest are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    Message: StrictStr
