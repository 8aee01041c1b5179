import logging
from typing import Callable, Dict, Hashable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

ID = TypeVar("ID", bound=Hashable)
E = TypeVar("E")


class InMemoryRepository:
    """Dict-backed entity store; keeps entities in insertion order."""

    def __init__(self, validator: Optional[Callable[[E], None]] = None):
        self.validator = validator
        self.entities: Dict[ID, E] = {}

    def find_one(self, id: ID) -> Optional[E]:
        if id is None:
            raise ValueError("ID must not be null")
        return self.entities.get(id)

    def find_all(self) -> List[E]:
        return list(self.entities.values())

    def save(self, entity: E) -> Optional[E]:
        if entity is None:
            raise ValueError("Entity must not be null")
        self._validate(entity)

        if entity.id in self.entities or self._conflicts(entity):
            logger.debug(f"Save rejected, entity already exists: {entity.id}")
            return None

        self.entities[entity.id] = entity
        return entity

    def delete(self, id: ID) -> Optional[E]:
        if id is None:
            raise ValueError("ID must not be null")
        return self.entities.pop(id, None)

    def update(self, entity: E) -> Optional[E]:
        if entity is None:
            raise ValueError("Entity must not be null")
        if entity.id not in self.entities:
            return None

        self._validate(entity)
        if self._conflicts(entity):
            logger.debug(f"Update rejected, clashes with another entity: {entity.id}")
            return None

        self.entities[entity.id] = entity
        return entity

    def _validate(self, entity: E) -> None:
        if self.validator is not None:
            self.validator(entity)

    def _conflicts(self, entity: E) -> bool:
        return any(
            existing == entity
            for key, existing in self.entities.items()
            if key != entity.id
        )
