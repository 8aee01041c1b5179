from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey

from socialgraph.database.database import Base
from socialgraph.domain.friends.schemas import Friendship, pair_key


class FriendshipRow(Base):
    __tablename__ = "friendships"

    # The primary key is the sorted pair, so (A, B) and (B, A) share one row
    user_low = Column(String(36), primary_key=True)
    user_high = Column(String(36), primary_key=True)

    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    receiver_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    date = Column(DateTime, nullable=False)
    pending = Column(Boolean, default=True, nullable=False)

    def to_entity(self) -> Friendship:
        return Friendship.model_validate(self)

    @classmethod
    def from_entity(cls, friendship: Friendship) -> "FriendshipRow":
        user_low, user_high = pair_key(friendship.sender_id, friendship.receiver_id)
        return cls(
            user_low=user_low,
            user_high=user_high,
            sender_id=friendship.sender_id,
            receiver_id=friendship.receiver_id,
            date=friendship.date,
            pending=friendship.pending,
        )
