import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NotificationType(str, Enum):
    FRIEND_REQUEST = "friend_request"
    MESSAGE = "message"
    SYSTEM = "system"


class Notification(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    description: str = Field(..., description="Notification text")
    user_id: str = Field(..., description="Target user")
    type: NotificationType = Field(NotificationType.SYSTEM, description="Notification type")
    date: datetime = Field(default_factory=datetime.now)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Description must not be empty')
        return v
