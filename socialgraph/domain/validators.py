"""
Validators run by the entity stores before every save/update.

Structural rules live on the pydantic schemas; a validator re-applies them to
entities that were modified after construction (``model_copy`` skips
validation) and adds the referential rules that need the user store.
"""
from typing import Callable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from socialgraph.core.config import Settings, settings as default_settings
from socialgraph.core.exceptions import ValidationFailure
from socialgraph.domain.chats.schemas import Message
from socialgraph.domain.friends.schemas import Friendship
from socialgraph.domain.notifications.schemas import Notification
from socialgraph.domain.users.schemas import User
from socialgraph.store.repository import Repository

E = TypeVar("E", bound=BaseModel)

Validator = Callable[[E], None]


def _check_schema(entity: BaseModel) -> None:
    try:
        type(entity).model_validate(entity.model_dump())
    except ValidationError as e:
        messages = "; ".join(error["msg"] for error in e.errors())
        raise ValidationFailure(messages) from e


def _check_parties(sender_id: Optional[str], receiver_id: Optional[str],
                   users: Repository[str, User]) -> None:
    if sender_id is None or receiver_id is None:
        raise ValidationFailure("Sender or Receiver id must not be null")
    if users.find_one(sender_id) is None or users.find_one(receiver_id) is None:
        raise ValidationFailure("Sender or Receiver does not exist in the system")
    if sender_id == receiver_id:
        raise ValidationFailure("Sender and Receiver must not be the same")


class UserValidator:
    def __call__(self, user: User) -> None:
        if user is None:
            raise ValidationFailure("User must not be null")
        _check_schema(user)


class FriendshipValidator:
    def __init__(self, users: Repository[str, User]):
        self.users = users

    def __call__(self, friendship: Friendship) -> None:
        if friendship is None:
            raise ValidationFailure("Friendship must not be null")
        _check_parties(friendship.sender_id, friendship.receiver_id, self.users)


class MessageValidator:
    def __init__(self, users: Repository[str, User], settings: Settings = default_settings):
        self.users = users
        self.max_length = settings.MESSAGE_MAX_LENGTH

    def __call__(self, message: Message) -> None:
        if message is None:
            raise ValidationFailure("Message must not be null")
        _check_schema(message)
        _check_parties(message.sender_id, message.receiver_id, self.users)
        if len(message.text) >= self.max_length:
            raise ValidationFailure(f"Message must be less than {self.max_length} characters")


class NotificationValidator:
    def __init__(self, users: Repository[str, User], settings: Settings = default_settings):
        self.users = users
        self.max_length = settings.NOTIFICATION_MAX_LENGTH

    def __call__(self, notification: Notification) -> None:
        if notification is None:
            raise ValidationFailure("Notification must not be null")
        _check_schema(notification)
        if self.users.find_one(notification.user_id) is None:
            raise ValidationFailure("User does not exist in the system")
        if len(notification.description) >= self.max_length:
            raise ValidationFailure(f"Description must be less than {self.max_length} characters")
