from typing import Hashable, List, Optional, Protocol, TypeVar

ID = TypeVar("ID", bound=Hashable)
E = TypeVar("E")


class Repository(Protocol[ID, E]):
    """
    Entity store consumed by the engine.

    Every method answers with ``None`` instead of raising when the entity is
    missing (find/delete/update) or clashes with an existing one (save).
    """

    def find_one(self, id: ID) -> Optional[E]:
        ...

    def find_all(self) -> List[E]:
        ...

    def save(self, entity: E) -> Optional[E]:
        ...

    def delete(self, id: ID) -> Optional[E]:
        ...

    def update(self, entity: E) -> Optional[E]:
        ...
