import logging
from typing import List, Optional

from socialgraph.domain.notifications.schemas import Notification, NotificationType
from socialgraph.events.event_bus import EventBus, EventType
from socialgraph.store.repository import Repository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: Repository[str, Notification], events: EventBus):
        self.notifications = notifications
        self.events = events

    def find_notification(self, notification_id: str) -> Optional[Notification]:
        return self.notifications.find_one(notification_id)

    def get_all_notifications(self) -> List[Notification]:
        return self.notifications.find_all()

    def get_user_notifications(self, uid: str) -> List[Notification]:
        return sorted(
            (n for n in self.notifications.find_all() if n.user_id == uid),
            key=lambda n: n.date,
            reverse=True,
        )

    def notify(self, uid: str, description: str, type: NotificationType = NotificationType.SYSTEM) -> Notification:
        """Creates a notification for ``uid``; raises if the store refuses it."""
        notification = Notification(description=description, user_id=uid, type=type)
        saved = self.add_notification(notification)
        if saved is None:
            logger.error(f"Notification for user {uid} was rejected by the store")
            raise RuntimeError(f"Notification {notification.id} could not be saved")
        return saved

    def add_notification(self, notification: Notification) -> Optional[Notification]:
        saved = self.notifications.save(notification)
        if saved is not None:
            logger.debug(f"Notification {saved.id} for user {saved.user_id}")
            self.events.emit(EventType.NOTIFICATION_ADDED, saved)
        return saved

    def update_notification(self, notification: Notification) -> Optional[Notification]:
        updated = self.notifications.update(notification)
        if updated is not None:
            self.events.emit(EventType.NOTIFICATION_UPDATED, updated)
        return updated

    def delete_notification(self, notification_id: str) -> Optional[Notification]:
        deleted = self.notifications.delete(notification_id)
        if deleted is not None:
            self.events.emit(EventType.NOTIFICATION_DELETED, deleted)
        return deleted

    def delete_notifications_of_user(self, uid: str) -> List[Notification]:
        deleted = []
        for notification in self.notifications.find_all():
            if notification.user_id == uid and self.delete_notification(notification.id) is not None:
                deleted.append(notification)
        return deleted
