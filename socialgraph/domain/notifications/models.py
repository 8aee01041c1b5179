from sqlalchemy import Column, String, DateTime, ForeignKey, Index

from socialgraph.database.database import Base
from socialgraph.domain.notifications.schemas import Notification, NotificationType


class NotificationRow(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    type = Column(String, nullable=False, default=NotificationType.SYSTEM.value)
    description = Column(String, nullable=False)
    date = Column(DateTime, nullable=False)

    __table_args__ = (
        Index('ix_notifications_user_id', 'user_id'),
        Index('ix_notifications_date', 'date'),
    )

    def to_entity(self) -> Notification:
        return Notification.model_validate(self)

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRow":
        return cls(**notification.model_dump(mode="json", include={"id", "user_id", "type", "description"}),
                   date=notification.date)
