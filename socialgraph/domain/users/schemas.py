import re
import uuid
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

NAME_REGEX = r'^[a-zA-Z0-9._-]{3,20}$'
EMAIL_REGEX = r'^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$'

T = TypeVar("T")


class User(BaseModel):
    """
    A member of the network.

    Two users are the same user when they share an email address.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Stable user id")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: str = Field(..., description="Unique email address")
    password: str = Field(..., description="Password hash, never interpreted")

    @field_validator('first_name', 'last_name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not re.match(NAME_REGEX, v):
            raise ValueError('Invalid name format')
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not re.match(EMAIL_REGEX, v):
            raise ValueError('Invalid email address format')
        return v

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.email == other.email

    def __hash__(self) -> int:
        return hash(self.email)


class UserFilter(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    def matches(self, user: User) -> bool:
        criteria = (
            (self.first_name, user.first_name),
            (self.last_name, user.last_name),
            (self.email, user.email),
        )
        return all(
            wanted.lower() in actual.lower()
            for wanted, actual in criteria
            if wanted
        )


class Pageable(BaseModel):
    page_number: int = Field(0, ge=0)
    page_size: int = Field(20, ge=1)

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page_number: int
    page_size: int
