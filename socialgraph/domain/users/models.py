from sqlalchemy import Column, String

from socialgraph.database.database import Base
from socialgraph.domain.users.schemas import User


class UserRow(Base):
    """
    Users table
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, index=True)
    first_name = Column(String(20), nullable=False)
    last_name = Column(String(20), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)

    def to_entity(self) -> User:
        return User.model_validate(self)

    @classmethod
    def from_entity(cls, user: User) -> "UserRow":
        return cls(**user.model_dump())
