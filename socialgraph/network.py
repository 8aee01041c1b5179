"""
The social graph engine.

``Network`` is built once by the application (see ``socialgraph.main``) and
handed to whoever needs it. It wires the services over the four entity
stores and one event bus, and exposes the operations callers use.
"""
import logging
from typing import Dict, List, Optional

from socialgraph.core.config import Settings, settings as default_settings
from socialgraph.domain.chats.schemas import Message
from socialgraph.domain.chats.service import MessageService
from socialgraph.domain.community.service import CommunityService
from socialgraph.domain.friends.schemas import Friendship, PairKey
from socialgraph.domain.friends.service import FriendshipService
from socialgraph.domain.graph.service import GraphQueryService
from socialgraph.domain.notifications.schemas import Notification
from socialgraph.domain.notifications.service import NotificationService
from socialgraph.domain.users.schemas import Page, Pageable, User, UserFilter
from socialgraph.domain.users.service import UserService
from socialgraph.events.event_bus import EventBus, Subscriber
from socialgraph.store.repository import Repository

logger = logging.getLogger(__name__)


class Network:
    def __init__(
            self,
            users: Repository[str, User],
            friendships: Repository[PairKey, Friendship],
            messages: Repository[str, Message],
            notifications: Repository[str, Notification],
            settings: Settings = default_settings
    ):
        self.settings = settings
        self.events = EventBus(source=self)

        self.user_service = UserService(users, self.events)
        self.notification_service = NotificationService(notifications, self.events)
        self.message_service = MessageService(messages, users, self.notification_service, self.events)
        self.friendship_service = FriendshipService(
            friendships, users, self.notification_service, self.message_service, self.events, settings
        )
        self.graph = GraphQueryService(friendships, users)
        self.community = CommunityService(self.graph, self.friendship_service, users)

    # Observers

    def subscribe(self, observer: Subscriber) -> None:
        self.events.subscribe(observer)

    def unsubscribe(self, observer: Subscriber) -> None:
        self.events.unsubscribe(observer)

    # Users

    def find_user(self, uid: str) -> Optional[User]:
        return self.user_service.find_user(uid)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.user_service.find_user_by_email(email)

    def get_all_users(self) -> List[User]:
        return self.user_service.get_all_users()

    def find_users_on_page(self, pageable: Pageable, user_filter: Optional[UserFilter] = None) -> Page[User]:
        return self.user_service.find_users_on_page(pageable, user_filter)

    def add_user(self, user: User) -> Optional[User]:
        return self.user_service.add_user(user)

    def update_user(self, user: User) -> Optional[User]:
        return self.user_service.update_user(user)

    def delete_user(self, uid: str) -> Optional[User]:
        """Deletes the user with its friendships, notifications and messages."""
        if self.user_service.find_user(uid) is None:
            return None

        self.friendship_service.delete_friendships_of_user(uid)
        self.notification_service.delete_notifications_of_user(uid)
        self.message_service.delete_messages_of_user(uid)
        return self.user_service.remove_user(uid)

    # Friendships

    def get_all_friendships(self) -> List[Friendship]:
        return self.friendship_service.get_all_friendships()

    def find_friendship(self, uid1: str, uid2: str) -> Optional[Friendship]:
        return self.friendship_service.find_friendship(uid1, uid2)

    def get_friends_of_user(self, uid: str) -> List[User]:
        return self.graph.friends_of(uid)

    def get_sent_requests_of_user(self, uid: str) -> List[User]:
        return self.graph.sent_requests_of(uid)

    def get_received_requests_of_user(self, uid: str) -> List[User]:
        return self.graph.received_requests_of(uid)

    def send_friend_request(self, sender_id: str, receiver_id: str) -> Friendship:
        return self.friendship_service.send_friend_request(sender_id, receiver_id)

    def delete_friend_request(self, sender_id: str, receiver_id: str) -> List[Friendship]:
        return self.friendship_service.delete_friend_request(sender_id, receiver_id)

    def decline_friend_request(self, receiver_id: str, sender_id: str) -> Optional[Friendship]:
        return self.friendship_service.decline_friend_request(receiver_id, sender_id)

    def cancel_friend_request(self, sender_id: str, receiver_id: str) -> Optional[Friendship]:
        return self.friendship_service.cancel_friend_request(sender_id, receiver_id)

    def unfriend(self, uid1: str, uid2: str) -> Optional[Friendship]:
        return self.friendship_service.unfriend(uid1, uid2)

    def is_friendship(self, uid1: str, uid2: str) -> bool:
        return self.friendship_service.is_friendship(uid1, uid2)

    def get_relations(self) -> Dict[str, List[str]]:
        return self.graph.relations()

    # Communities

    def count_communities(self) -> int:
        return self.community.count_communities()

    def get_most_social_community(self) -> List[User]:
        return self.community.largest_community()

    def get_communities(self) -> List[List[str]]:
        return self.community.communities()

    # Messages

    def find_message(self, message_id: str) -> Optional[Message]:
        return self.message_service.find_message(message_id)

    def get_all_messages(self) -> List[Message]:
        return self.message_service.get_all_messages()

    def get_sent_messages(self, sender_id: str, receiver_id: str) -> List[Message]:
        return self.message_service.get_sent_messages(sender_id, receiver_id)

    def get_chat(self, uid1: str, uid2: str) -> List[Message]:
        return self.message_service.get_chat(uid1, uid2)

    def add_message(self, message: Message) -> Optional[Message]:
        return self.message_service.add_message(message)

    def update_message(self, message: Message) -> Optional[Message]:
        return self.message_service.update_message(message)

    def delete_message(self, message_id: str) -> Optional[Message]:
        return self.message_service.delete_message(message_id)

    # Notifications

    def find_notification(self, notification_id: str) -> Optional[Notification]:
        return self.notification_service.find_notification(notification_id)

    def get_all_notifications(self) -> List[Notification]:
        return self.notification_service.get_all_notifications()

    def get_user_notifications(self, uid: str) -> List[Notification]:
        return self.notification_service.get_user_notifications(uid)

    def add_notification(self, notification: Notification) -> Optional[Notification]:
        return self.notification_service.add_notification(notification)

    def update_notification(self, notification: Notification) -> Optional[Notification]:
        return self.notification_service.update_notification(notification)

    def delete_notification(self, notification_id: str) -> Optional[Notification]:
        return self.notification_service.delete_notification(notification_id)
