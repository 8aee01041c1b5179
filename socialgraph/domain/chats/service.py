import logging
from typing import List, Optional

from socialgraph.core.exceptions import EntityNotFound
from socialgraph.domain.chats.schemas import Message
from socialgraph.domain.notifications.schemas import NotificationType
from socialgraph.domain.notifications.service import NotificationService
from socialgraph.domain.users.schemas import User
from socialgraph.events.event_bus import EventBus, EventType
from socialgraph.store.repository import Repository

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(
            self,
            messages: Repository[str, Message],
            users: Repository[str, User],
            notification_service: NotificationService,
            events: EventBus
    ):
        self.messages = messages
        self.users = users
        self.notification_service = notification_service
        self.events = events

    def find_message(self, message_id: str) -> Optional[Message]:
        return self.messages.find_one(message_id)

    def get_all_messages(self) -> List[Message]:
        return self.messages.find_all()

    def get_sent_messages(self, sender_id: str, receiver_id: str) -> List[Message]:
        return [
            m for m in self.messages.find_all()
            if m.sender_id == sender_id and m.receiver_id == receiver_id
        ]

    def get_chat(self, uid1: str, uid2: str) -> List[Message]:
        """All messages exchanged by the two users, oldest first."""
        chat = self.get_sent_messages(uid1, uid2) + self.get_sent_messages(uid2, uid1)
        chat.sort(key=lambda m: m.date)
        return chat

    def add_message(self, message: Message) -> Optional[Message]:
        sender = self.users.find_one(message.sender_id)
        if sender is None:
            logger.warning(f"Message from unknown user {message.sender_id}")
            raise EntityNotFound("Sender does not exist")

        saved = self.messages.save(message)
        if saved is None:
            return None

        try:
            self.notification_service.notify(
                saved.receiver_id,
                f"Message from {sender.email}",
                NotificationType.MESSAGE,
            )
        except Exception:
            # The message is only kept together with its notification
            self.messages.delete(saved.id)
            raise

        self.events.emit(EventType.MESSAGE_ADDED, saved)
        logger.debug(f"Message {saved.id} from {saved.sender_id} to {saved.receiver_id}")
        return saved

    def update_message(self, message: Message) -> Optional[Message]:
        updated = self.messages.update(message)
        if updated is not None:
            self.events.emit(EventType.MESSAGE_UPDATED, updated)
        return updated

    def delete_message(self, message_id: str) -> Optional[Message]:
        deleted = self.messages.delete(message_id)
        if deleted is not None:
            self.events.emit(EventType.MESSAGE_DELETED, deleted)
        return deleted

    def delete_chat(self, uid1: str, uid2: str) -> List[Message]:
        deleted = []
        for message in self.get_chat(uid1, uid2):
            if self.delete_message(message.id) is not None:
                deleted.append(message)
        if deleted:
            logger.info(f"Deleted {len(deleted)} messages between {uid1} and {uid2}")
        return deleted

    def delete_messages_of_user(self, uid: str) -> List[Message]:
        deleted = []
        for message in self.messages.find_all():
            if uid in (message.sender_id, message.receiver_id) and self.delete_message(message.id) is not None:
                deleted.append(message)
        return deleted
