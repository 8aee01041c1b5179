import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Message(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sender_id: str = Field(..., description="Author of the message")
    receiver_id: str = Field(..., description="Recipient of the message")
    text: str = Field(..., min_length=1, description="Message text")
    date: datetime = Field(default_factory=datetime.now)
    # Set when the message answers another one
    reply_to_id: Optional[str] = Field(None, description="ID of the replied message")

    @field_validator('text')
    @classmethod
    def validate_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Message must not be empty')
        return v
