from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from socialgraph.core.config import Settings, settings as default_settings

Base = declarative_base()


def create_session_factory(settings: Settings = default_settings) -> sessionmaker:
    """
    Builds the engine for DATABASE_URL, creates missing tables
    and returns the session factory used by the SQL repositories.
    """
    if not settings.DATABASE_URL:
        raise ValueError("DATABASE_URL is not set")

    engine_kwargs = {"echo": settings.DEBUG, "future": True}
    if settings.DATABASE_URL.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory SQLite lives only as long as its single connection
        if ":memory:" in settings.DATABASE_URL or settings.DATABASE_URL == "sqlite://":
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_engine(settings.DATABASE_URL, **engine_kwargs)

    # Registers every table on Base.metadata
    from socialgraph.domain.chats import models as _chats  # noqa: F401
    from socialgraph.domain.friends import models as _friends  # noqa: F401
    from socialgraph.domain.notifications import models as _notifications  # noqa: F401
    from socialgraph.domain.users import models as _users  # noqa: F401

    Base.metadata.create_all(bind=engine)

    return sessionmaker(
        autoflush=False,
        bind=engine
    )
