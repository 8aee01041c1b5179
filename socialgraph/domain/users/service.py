import logging
from typing import List, Optional

from socialgraph.domain.users.schemas import Page, Pageable, User, UserFilter
from socialgraph.events.event_bus import EventBus, EventType
from socialgraph.store.repository import Repository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: Repository[str, User], events: EventBus):
        self.users = users
        self.events = events

    def find_user(self, uid: str) -> Optional[User]:
        return self.users.find_one(uid)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.find_all() if u.email == email), None)

    def get_all_users(self) -> List[User]:
        return self.users.find_all()

    def find_users_on_page(self, pageable: Pageable, user_filter: Optional[UserFilter] = None) -> Page[User]:
        users = self.users.find_all()
        if user_filter is not None:
            users = [u for u in users if user_filter.matches(u)]
        items = users[pageable.offset:pageable.offset + pageable.page_size]
        return Page[User](
            items=items,
            total=len(users),
            page_number=pageable.page_number,
            page_size=pageable.page_size,
        )

    def add_user(self, user: User) -> Optional[User]:
        saved = self.users.save(user)
        if saved is None:
            logger.info(f"User with email {user.email} already exists")
            return None
        logger.info(f"User {saved.id} added")
        self.events.emit(EventType.USER_ADDED, saved)
        return saved

    def update_user(self, user: User) -> Optional[User]:
        updated = self.users.update(user)
        if updated is not None:
            self.events.emit(EventType.USER_UPDATED, updated)
        return updated

    def remove_user(self, uid: str) -> Optional[User]:
        """Deletes only the user row; relationships are cleaned up by the caller."""
        deleted = self.users.delete(uid)
        if deleted is not None:
            logger.info(f"User {uid} deleted")
            self.events.emit(EventType.USER_DELETED, deleted)
        return deleted
