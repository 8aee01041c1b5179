import logging
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    USER_ADDED = "user_added"
    USER_UPDATED = "user_updated"
    USER_DELETED = "user_deleted"
    FRIEND_REQUEST_SENT = "friend_request_sent"
    FRIENDSHIP_ACCEPTED = "friendship_accepted"
    FRIENDSHIP_DELETED = "friendship_deleted"
    MESSAGE_ADDED = "message_added"
    MESSAGE_UPDATED = "message_updated"
    MESSAGE_DELETED = "message_deleted"
    NOTIFICATION_ADDED = "notification_added"
    NOTIFICATION_UPDATED = "notification_updated"
    NOTIFICATION_DELETED = "notification_deleted"


class ChangeEvent(BaseModel):
    type: EventType
    entity: Any = None
    occurred_at: datetime = Field(default_factory=datetime.now)


class Observer(Protocol):
    def update(self, source: Any, event: ChangeEvent) -> None:
        ...


Subscriber = Union[Observer, Callable[[Any, ChangeEvent], None]]


class EventBus:
    """
    Synchronous fan-out of change events.

    Subscribers run in subscription order on the publishing thread. A failing
    subscriber is logged and skipped; the remaining ones are still called.
    """

    def __init__(self, source: Optional[Any] = None):
        self.source = source if source is not None else self
        self.observers: List[Subscriber] = []

    def subscribe(self, observer: Subscriber) -> None:
        self.observers.append(observer)

    def unsubscribe(self, observer: Subscriber) -> None:
        try:
            self.observers.remove(observer)
        except ValueError:
            logger.warning(f"Unsubscribe of unknown observer {observer!r}")

    def publish(self, event: ChangeEvent) -> None:
        logger.debug(f"Publishing {event.type.value} to {len(self.observers)} observers")
        for observer in list(self.observers):
            callback = getattr(observer, "update", observer)
            try:
                callback(self.source, event)
            except Exception:
                logger.exception(f"Observer {observer!r} failed on {event.type.value}")

    def emit(self, event_type: EventType, entity: Any = None) -> ChangeEvent:
        event = ChangeEvent(type=event_type, entity=entity)
        self.publish(event)
        return event
