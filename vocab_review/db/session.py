"""Database engine and session management for the SQL backend."""
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from vocab_review.config import settings
from vocab_review.utils.exceptions import ConfigurationError


def build_engine(url: str) -> Engine:
    """Create an engine for ``url`` with the pooling used in production."""

    kwargs = {"pool_pre_ping": True}
    if not url.startswith("sqlite"):
        kwargs.update(pool_size=5, max_overflow=10, pool_recycle=3600)
    return create_engine(url, **kwargs)


@lru_cache()
def get_session_factory() -> sessionmaker[Session]:
    """Return the session factory bound to ``DATABASE_URL``."""

    if not settings.DATABASE_URL:
        raise ConfigurationError("DATABASE_URL is not set.")
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=build_engine(settings.DATABASE_URL),
        expire_on_commit=False,
    )
