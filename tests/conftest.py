"""
Shared fixtures: a fresh in-memory engine per test, a user factory and an
observer that records every published event.
"""
import pytest

from socialgraph.core.config import Settings
from socialgraph.domain.users.schemas import User
from socialgraph.main import create_memory_network


class Recorder:
    def __init__(self):
        self.events = []
        self.sources = []

    def update(self, source, event):
        self.sources.append(source)
        self.events.append(event)

    @property
    def types(self):
        return [event.type for event in self.events]

    def clear(self):
        self.events.clear()
        self.sources.clear()


@pytest.fixture
def settings():
    return Settings(STORE_BACKEND="memory")


@pytest.fixture
def network(settings):
    return create_memory_network(settings)


@pytest.fixture
def make_user(network):
    def factory(name: str) -> User:
        user = User(
            first_name=name,
            last_name="Tester",
            email=f"{name.lower()}@example.com",
            password="hashed-password",
        )
        assert network.add_user(user) is not None
        return user
    return factory


@pytest.fixture
def users(make_user):
    """Four users: alice, bob, carol, dave."""
    return [make_user(name) for name in ("alice", "bob", "carol", "dave")]


@pytest.fixture
def recorder(network):
    observer = Recorder()
    network.subscribe(observer)
    return observer


@pytest.fixture
def befriend(network):
    """Makes two users friends through a request and its reciprocal."""
    def connect(uid1: str, uid2: str) -> None:
        network.send_friend_request(uid1, uid2)
        network.send_friend_request(uid2, uid1)
    return connect
