import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, List, Optional

from socialgraph.core.config import Settings, settings as default_settings
from socialgraph.core.exceptions import DuplicateRelationship, EntityNotFound
from socialgraph.domain.chats.service import MessageService
from socialgraph.domain.friends.schemas import Friendship, PairKey, pair_key
from socialgraph.domain.notifications.schemas import NotificationType
from socialgraph.domain.notifications.service import NotificationService
from socialgraph.domain.users.schemas import User
from socialgraph.events.event_bus import EventBus, EventType
from socialgraph.store.repository import Repository

logger = logging.getLogger(__name__)


class _PairLock:
    def __init__(self):
        self.lock = threading.RLock()
        self.holders = 0


class FriendshipService:
    """
    Owns the lifecycle of a friendship edge.

    A request creates a pending edge sender -> receiver. The receiver sending
    a request back accepts it. There is never more than one edge per unordered
    pair of users.
    """

    def __init__(
            self,
            friendships: Repository[PairKey, Friendship],
            users: Repository[str, User],
            notification_service: NotificationService,
            message_service: MessageService,
            events: EventBus,
            settings: Settings = default_settings
    ):
        self.friendships = friendships
        self.users = users
        self.notification_service = notification_service
        self.message_service = message_service
        self.events = events
        self.settings = settings

        self._locks_guard = threading.Lock()
        self._pair_locks: Dict[PairKey, _PairLock] = {}

    @contextmanager
    def _pair_lock(self, uid1: str, uid2: str) -> Iterator[None]:
        key = pair_key(uid1, uid2)
        with self._locks_guard:
            entry = self._pair_locks.get(key)
            if entry is None:
                entry = self._pair_locks[key] = _PairLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            # Dropped once no thread holds or waits for it
            with self._locks_guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._pair_locks[key]

    def find_friendship(self, uid1: str, uid2: str) -> Optional[Friendship]:
        return self.friendships.find_one(pair_key(uid1, uid2))

    def get_all_friendships(self) -> List[Friendship]:
        return self.friendships.find_all()

    def is_friendship(self, uid1: str, uid2: str) -> bool:
        friendship = self.find_friendship(uid1, uid2)
        return friendship is not None and not friendship.pending

    def make_friendship(self, uid1: str, uid2: str) -> Optional[Friendship]:
        """Saves an accepted edge uid1 -> uid2 without looking for an existing one."""
        friendship = Friendship(sender_id=uid1, receiver_id=uid2, pending=False)
        return self.friendships.save(friendship)

    def send_friend_request(self, sender_id: str, receiver_id: str) -> Friendship:
        with self._pair_lock(sender_id, receiver_id):
            existing = self.find_friendship(sender_id, receiver_id)

            if existing is not None:
                if not existing.pending:
                    logger.info(f"Users {sender_id} and {receiver_id} are already friends")
                    raise DuplicateRelationship("Already friends")
                if existing.sender_id == sender_id:
                    logger.info(f"Request from {sender_id} to {receiver_id} already sent")
                    raise DuplicateRelationship("Request already sent")
                return self._accept(existing)

            return self._request(sender_id, receiver_id)

    def _accept(self, request: Friendship) -> Friendship:
        # Replaced in place: a rejected update leaves the pending request as it was
        friendship = Friendship(sender_id=request.receiver_id, receiver_id=request.sender_id, pending=False)
        if self.friendships.update(friendship) is None:
            logger.error(f"Could not accept friendship {request.id}")
            raise RuntimeError(f"Friendship {request.id} could not be accepted")

        logger.info(f"Friendship accepted between {request.sender_id} and {request.receiver_id}")
        self.events.emit(EventType.FRIENDSHIP_ACCEPTED, friendship)
        return friendship

    def _request(self, sender_id: str, receiver_id: str) -> Friendship:
        sender = self.users.find_one(sender_id)
        if sender is None:
            logger.warning(f"Friend request from unknown user {sender_id}")
            raise EntityNotFound("Sender does not exist")

        request = Friendship(sender_id=sender_id, receiver_id=receiver_id, date=datetime.now())
        saved = self.friendships.save(request)
        if saved is None:
            raise DuplicateRelationship("Request already sent")

        try:
            self.notification_service.notify(
                receiver_id,
                f"Request from {sender.email}",
                NotificationType.FRIEND_REQUEST,
            )
        except Exception:
            # The request is only kept together with its notification
            self.friendships.delete(saved.id)
            raise

        logger.info(f"Friend request sent from {sender_id} to {receiver_id}")
        self.events.emit(EventType.FRIEND_REQUEST_SENT, saved)
        return saved

    def delete_friend_request(self, sender_id: str, receiver_id: str) -> List[Friendship]:
        """
        Removes every edge between the two users, whatever its direction or
        state. With DELETE_MESSAGES_WITH_FRIENDSHIP the pair's chat goes too.
        Nothing happens when no edge exists.
        """
        with self._pair_lock(sender_id, receiver_id):
            deleted = []
            for friendship in self.friendships.find_all():
                if not (friendship.contains_user(sender_id) and friendship.contains_user(receiver_id)):
                    continue
                if self.friendships.delete(friendship.id) is not None:
                    deleted.append(friendship)
                    self.events.emit(EventType.FRIENDSHIP_DELETED, friendship)

        if self.settings.DELETE_MESSAGES_WITH_FRIENDSHIP:
            self.message_service.delete_chat(sender_id, receiver_id)
        return deleted

    def decline_friend_request(self, receiver_id: str, sender_id: str) -> Optional[Friendship]:
        """The receiver turns down the pending request sender -> receiver."""
        return self._delete_pending(sender_id, receiver_id)

    def cancel_friend_request(self, sender_id: str, receiver_id: str) -> Optional[Friendship]:
        """The sender withdraws the pending request sender -> receiver."""
        return self._delete_pending(sender_id, receiver_id)

    def unfriend(self, uid1: str, uid2: str) -> Optional[Friendship]:
        with self._pair_lock(uid1, uid2):
            friendship = self.find_friendship(uid1, uid2)
            if friendship is None or friendship.pending:
                return None
            deleted = self._delete(friendship)

        if deleted is not None and self.settings.PURGE_CHAT_ON_UNFRIEND:
            self.message_service.delete_chat(uid1, uid2)
        return deleted

    def _delete_pending(self, sender_id: str, receiver_id: str) -> Optional[Friendship]:
        with self._pair_lock(sender_id, receiver_id):
            friendship = self.find_friendship(sender_id, receiver_id)
            if friendship is None or not friendship.pending or friendship.sender_id != sender_id:
                return None
            return self._delete(friendship)

    def _delete(self, friendship: Friendship) -> Optional[Friendship]:
        deleted = self.friendships.delete(friendship.id)
        if deleted is not None:
            self.events.emit(EventType.FRIENDSHIP_DELETED, deleted)
        return deleted

    def delete_friendships_of_user(self, uid: str) -> List[Friendship]:
        deleted = []
        for friendship in self.friendships.find_all():
            if not friendship.contains_user(uid):
                continue
            with self._pair_lock(uid, friendship.friend_id_of(uid)):
                if self._delete(friendship) is not None:
                    deleted.append(friendship)
        return deleted
