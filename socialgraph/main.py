import logging

from socialgraph.core.config import Settings, settings
from socialgraph.database.repository import SqlRepository
from socialgraph.domain.validators import (
    FriendshipValidator,
    MessageValidator,
    NotificationValidator,
    UserValidator,
)
from socialgraph.network import Network
from socialgraph.store.memory import InMemoryRepository

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings = settings) -> None:
    logging.basicConfig(level=settings.LOG_LEVEL)


def create_memory_network(settings: Settings = settings) -> Network:
    users = InMemoryRepository(UserValidator())
    return Network(
        users=users,
        friendships=InMemoryRepository(FriendshipValidator(users)),
        messages=InMemoryRepository(MessageValidator(users, settings)),
        notifications=InMemoryRepository(NotificationValidator(users, settings)),
        settings=settings,
    )


def create_database_network(settings: Settings = settings) -> Network:
    from socialgraph.database.database import create_session_factory
    from socialgraph.domain.chats.models import MessageRow
    from socialgraph.domain.friends.models import FriendshipRow
    from socialgraph.domain.notifications.models import NotificationRow
    from socialgraph.domain.users.models import UserRow

    session_factory = create_session_factory(settings)
    users = SqlRepository(session_factory, UserRow, UserValidator())
    return Network(
        users=users,
        friendships=SqlRepository(session_factory, FriendshipRow, FriendshipValidator(users),
                                  order_by=FriendshipRow.date),
        messages=SqlRepository(session_factory, MessageRow, MessageValidator(users, settings),
                               order_by=MessageRow.date),
        notifications=SqlRepository(session_factory, NotificationRow, NotificationValidator(users, settings),
                                    order_by=NotificationRow.date),
        settings=settings,
    )


def create_network(settings: Settings = settings) -> Network:
    """Builds the engine over the store selected by STORE_BACKEND."""
    if settings.STORE_BACKEND == "memory":
        network = create_memory_network(settings)
    elif settings.STORE_BACKEND == "database":
        network = create_database_network(settings)
    else:
        raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND}")

    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started with {settings.STORE_BACKEND} store")
    return network


if __name__ == "__main__":
    configure_logging()
    network = create_network()
    logger.info(f"{len(network.get_all_users())} users, {network.count_communities()} communities")
