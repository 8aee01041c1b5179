import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


class SqlRepository:
    """
    Entity store over one SQLAlchemy table.

    ``model`` is a declarative class exposing ``to_entity()`` and
    ``from_entity(entity)``; its primary key must match ``entity.id``.
    """

    def __init__(self, session_factory: sessionmaker, model, validator: Optional[Callable] = None,
                 order_by=None):
        self.session_factory = session_factory
        self.model = model
        self.validator = validator
        self.order_by = order_by

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def find_one(self, id):
        if id is None:
            raise ValueError("ID must not be null")
        with self._session() as db:
            row = db.get(self.model, id)
            return row.to_entity() if row is not None else None

    def find_all(self) -> List:
        with self._session() as db:
            query = db.query(self.model)
            if self.order_by is not None:
                query = query.order_by(self.order_by)
            return [row.to_entity() for row in query.all()]

    def save(self, entity):
        if entity is None:
            raise ValueError("Entity must not be null")
        self._validate(entity)

        with self._session() as db:
            if db.get(self.model, entity.id) is not None:
                return None
            db.add(self.model.from_entity(entity))
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                logger.debug(f"Save rejected by {self.model.__tablename__}: {e.orig}")
                return None
        return entity

    def delete(self, id):
        if id is None:
            raise ValueError("ID must not be null")
        with self._session() as db:
            row = db.get(self.model, id)
            if row is None:
                return None
            entity = row.to_entity()
            db.delete(row)
            db.commit()
            return entity

    def update(self, entity):
        if entity is None:
            raise ValueError("Entity must not be null")

        if self.find_one(entity.id) is None:
            return None
        self._validate(entity)

        with self._session() as db:
            db.merge(self.model.from_entity(entity))
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                logger.debug(f"Update rejected by {self.model.__tablename__}: {e.orig}")
                return None
        return entity

    def _validate(self, entity) -> None:
        if self.validator is not None:
            self.validator(entity)
