from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Index

from socialgraph.database.database import Base
from socialgraph.domain.chats.schemas import Message


class MessageRow(Base):
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, index=True)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    receiver_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    text = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False)
    reply_to_id = Column(String(36), ForeignKey("messages.id", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        Index('ix_messages_pair', 'sender_id', 'receiver_id'),
        Index('ix_messages_date', 'date'),
    )

    def to_entity(self) -> Message:
        return Message.model_validate(self)

    @classmethod
    def from_entity(cls, message: Message) -> "MessageRow":
        return cls(**message.model_dump())
