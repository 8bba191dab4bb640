"""Generate database sessions"""

from functools import lru_cache
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import settings
from src.db.schema import Base


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the engine and make sure all tables exist."""
    connect_args = (
        {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )
    engine = create_engine(database_url, echo=echo, connect_args=connect_args)
    Base.metadata.create_all(bind=engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autoflush=False, bind=engine)


@lru_cache
def get_engine() -> Engine:
    """Engine for the configured DATABASE_URL (created on first use)."""
    return create_db_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Factory handed to the repository. Every repository call opens its own short-lived session from it."""
    return create_session_factory(get_engine())


def get_db(engine: Engine | None = None) -> Generator[Session, None, None]:
    session_factory = (
        create_session_factory(engine) if engine is not None else get_session_factory()
    )
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
