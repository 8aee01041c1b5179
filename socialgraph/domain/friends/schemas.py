from datetime import datetime
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

PairKey = Tuple[str, str]


def pair_key(uid1: str, uid2: str) -> PairKey:
    """Identity of a friendship: the unordered pair of user ids."""
    return tuple(sorted((uid1, uid2)))


class FriendshipStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"


class Friendship(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sender_id: str = Field(..., description="User who sent the request")
    receiver_id: str = Field(..., description="User who received the request")
    date: datetime = Field(default_factory=datetime.now, description="Request or acceptance time")
    pending: bool = Field(True, description="Request not accepted yet")

    @property
    def id(self) -> PairKey:
        return pair_key(self.sender_id, self.receiver_id)

    @property
    def status(self) -> FriendshipStatus:
        return FriendshipStatus.PENDING if self.pending else FriendshipStatus.ACCEPTED

    def contains_user(self, uid: str) -> bool:
        return uid in (self.sender_id, self.receiver_id)

    def friend_id_of(self, uid: str) -> str:
        return self.receiver_id if uid == self.sender_id else self.sender_id
