"""Pytest fixtures for screen, repository and API tests."""

import os
from collections.abc import AsyncGenerator, Generator
from datetime import datetime

os.environ.setdefault("SUPABASE_URL", "https://store.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("DISPLAY_TIMEZONE", "UTC")

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from vocab_review.api.deps import get_repository, get_session_registry
from vocab_review.db.base import Base
from vocab_review.db.models import VocabEntryRecord
from vocab_review.main import create_app
from vocab_review.schemas import VocabEntry
from vocab_review.services.repository import SqlEntryRepository
from vocab_review.services.sessions import SessionRegistry

from fakes import utc


@pytest.fixture()
def make_entry():
    def _make(
        entry_id: int,
        *,
        part_of_speech: str = "verb",
        created_at: datetime | None = None,
        english: str | None = None,
        mongolian: str | None = None,
        usage_en: str | None = None,
        usage_mn: str | None = None,
    ) -> VocabEntry:
        created = created_at or utc(2024, 1, 5, 10, 0, 0)
        return VocabEntry(
            id=entry_id,
            english=english or f"word-{entry_id}",
            mongolian=mongolian or f"үг-{entry_id}",
            pronunciation=None,
            part_of_speech=part_of_speech,
            collocations=None,
            usage_en=usage_en,
            usage_mn=usage_mn,
            created_word=False,
            created_at=created,
            updated_at=created,
        )

    return _make


@pytest.fixture(scope="session")
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[VocabEntryRecord.__table__])
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=[VocabEntryRecord.__table__])


@pytest.fixture()
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def sample_entries(db_session):
    db_session.query(VocabEntryRecord).delete()
    db_session.commit()
    records = [
        VocabEntryRecord(
            id=1,
            english="run",
            mongolian="гүйх",
            part_of_speech="verb",
            created_at=utc(2024, 1, 4, 10, 0, 0),
            updated_at=utc(2024, 1, 4, 10, 0, 0),
        ),
        VocabEntryRecord(
            id=3,
            english="borrow",
            mongolian="зээлэх",
            pronunciation="ˈbɒrəʊ",
            part_of_speech="verb",
            collocations=["borrow money", "borrow a book"],
            usage_en="Can I borrow your pen?",
            usage_mn="Би таны үзэгийг зээлж болох уу?",
            created_at=utc(2024, 1, 5, 0, 0, 0),
            updated_at=utc(2024, 1, 5, 0, 0, 0),
        ),
        VocabEntryRecord(
            id=7,
            english="lend",
            mongolian="зээлүүлэх",
            part_of_speech="verb",
            created_at=utc(2024, 1, 5, 23, 59, 59),
            updated_at=utc(2024, 1, 5, 23, 59, 59),
        ),
        VocabEntryRecord(
            id=8,
            english="brave",
            mongolian="зоригтой",
            part_of_speech="adj",
            created_word=True,
            created_at=utc(2024, 1, 5, 12, 0, 0),
            updated_at=utc(2024, 1, 5, 12, 0, 0),
        ),
        VocabEntryRecord(
            id=9,
            english="forget",
            mongolian="мартах",
            part_of_speech="verb",
            created_at=utc(2024, 1, 6, 0, 0, 0),
            updated_at=utc(2024, 1, 6, 0, 0, 0),
        ),
    ]
    db_session.add_all(records)
    db_session.commit()
    try:
        yield records
    finally:
        db_session.query(VocabEntryRecord).delete()
        db_session.commit()


@pytest.fixture()
def sql_repository(session_factory) -> SqlEntryRepository:
    return SqlEntryRepository(session_factory)


@pytest.fixture()
def registry() -> SessionRegistry:
    return SessionRegistry(limit=8)


@pytest.fixture()
def client(sql_repository, registry) -> Generator[TestClient, None, None]:
    app = create_app()
    app.dependency_overrides[get_repository] = lambda: sql_repository
    app.dependency_overrides[get_session_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture()
async def async_client(sql_repository, registry) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_app()
    app.dependency_overrides[get_repository] = lambda: sql_repository
    app.dependency_overrides[get_session_registry] = lambda: registry

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
