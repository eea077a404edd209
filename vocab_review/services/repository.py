"""Read-only access to the ``vocab_entries`` table.

Two backends answer the same :class:`EntryQuery`: the hosted store's REST
interface (the default) and a direct SQLAlchemy connection. Both return
entries newest first and both raise :class:`RemoteQueryError` for anything
the store gets wrong; neither retries.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Protocol, Sequence

import httpx
from loguru import logger
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vocab_review.config import Settings, settings as default_settings
from vocab_review.db.models.vocabulary import VocabEntryRecord
from vocab_review.db.session import get_session_factory
from vocab_review.schemas.vocabulary import VocabEntry
from vocab_review.utils.dates import day_bounds, resolve_timezone
from vocab_review.utils.exceptions import ConfigurationError, RemoteQueryError


@dataclass(frozen=True)
class EntryQuery:
    """Constraints for a repository fetch; empty fields are not applied."""

    part_of_speech: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    ids: tuple[int, ...] = ()


def build_query(
    *,
    part_of_speech: str | None = None,
    day: date | None = None,
    ids: Sequence[int] = (),
    timezone_name: str | None = None,
) -> EntryQuery:
    """Translate a screen filter into an :class:`EntryQuery`.

    A calendar ``day`` becomes the inclusive range from its first to its last
    instant in the display timezone, converted to UTC.
    """

    tz = resolve_timezone(timezone_name or default_settings.DISPLAY_TIMEZONE)
    start, end = day_bounds(day, tz)
    return EntryQuery(
        part_of_speech=part_of_speech or None,
        start_date=start,
        end_date=end,
        ids=tuple(ids),
    )


def _iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


class EntryRepository(Protocol):
    """Anything that can answer an :class:`EntryQuery`."""

    async def fetch(self, query: EntryQuery) -> list[VocabEntry]:  # pragma: no cover - interface definition
        """Return matching entries, newest first."""


class RestEntryRepository:
    """Query the hosted store through its REST (PostgREST) interface."""

    def __init__(
        self,
        config: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or default_settings
        self._transport = transport

    def _credentials(self) -> tuple[str, str]:
        if not self.config.SUPABASE_URL:
            raise ConfigurationError("SUPABASE_URL is not set.")
        if not self.config.SUPABASE_ANON_KEY:
            raise ConfigurationError("SUPABASE_ANON_KEY is not set.")
        return str(self.config.SUPABASE_URL).rstrip("/"), self.config.SUPABASE_ANON_KEY

    @staticmethod
    def build_params(query: EntryQuery) -> list[tuple[str, str]]:
        """Encode ``query`` as PostgREST filter parameters."""

        params = [("select", "*"), ("order", "created_at.desc")]
        if query.part_of_speech:
            params.append(("part_of_speech", f"eq.{query.part_of_speech}"))
        if query.ids:
            params.append(("id", f"in.({','.join(str(word_id) for word_id in query.ids)})"))
        if query.start_date is not None:
            params.append(("created_at", f"gte.{_iso(query.start_date)}"))
        if query.end_date is not None:
            params.append(("created_at", f"lte.{_iso(query.end_date)}"))
        return params

    async def fetch(self, query: EntryQuery) -> list[VocabEntry]:
        base_url, api_key = self._credentials()
        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        path = f"/rest/v1/{self.config.VOCAB_TABLE}"

        try:
            async with httpx.AsyncClient(
                base_url=base_url,
                timeout=self.config.REQUEST_TIMEOUT_SECONDS,
                transport=self._transport,
            ) as client:
                response = await client.get(path, params=self.build_params(query), headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Vocabulary store unreachable", error=str(exc))
            raise RemoteQueryError("Vocabulary store request failed", {"error": str(exc)}) from exc

        if response.status_code >= 400:
            logger.error(
                "Vocabulary store returned error",
                status=response.status_code,
                body=response.text,
            )
            raise RemoteQueryError(
                f"Vocabulary store error {response.status_code}",
                {"status": response.status_code, "body": response.text},
            )

        try:
            rows = response.json()
            if not isinstance(rows, list):
                raise ValueError("expected a JSON array of rows")
            entries = [VocabEntry.model_validate(row) for row in rows]
        except (ValueError, ValidationError) as exc:
            logger.error("Vocabulary store returned malformed rows", error=str(exc))
            raise RemoteQueryError("Malformed response from vocabulary store") from exc

        logger.debug("Fetched vocabulary entries", count=len(entries), backend="rest")
        return entries


class SqlEntryRepository:
    """Query the table directly through SQLAlchemy."""

    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        self._session_factory = session_factory

    def _factory(self) -> Callable[[], Session]:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory

    @staticmethod
    def build_statement(query: EntryQuery):
        stmt = select(VocabEntryRecord).order_by(VocabEntryRecord.created_at.desc())
        if query.part_of_speech:
            stmt = stmt.where(VocabEntryRecord.part_of_speech == query.part_of_speech)
        if query.ids:
            stmt = stmt.where(VocabEntryRecord.id.in_(query.ids))
        if query.start_date is not None:
            stmt = stmt.where(VocabEntryRecord.created_at >= query.start_date.astimezone(timezone.utc))
        if query.end_date is not None:
            stmt = stmt.where(VocabEntryRecord.created_at <= query.end_date.astimezone(timezone.utc))
        return stmt

    def _fetch_sync(self, factory: Callable[[], Session], query: EntryQuery) -> list[VocabEntry]:
        db = factory()
        try:
            records = db.scalars(self.build_statement(query)).all()
            return [VocabEntry.model_validate(record) for record in records]
        finally:
            db.close()

    async def fetch(self, query: EntryQuery) -> list[VocabEntry]:
        factory = self._factory()
        try:
            entries = await asyncio.to_thread(self._fetch_sync, factory, query)
        except SQLAlchemyError as exc:
            logger.error("Vocabulary query failed", error=str(exc))
            raise RemoteQueryError("Vocabulary query failed", {"error": str(exc)}) from exc
        except ValidationError as exc:
            logger.error("Vocabulary table returned malformed rows", error=str(exc))
            raise RemoteQueryError("Malformed rows in vocabulary table") from exc

        logger.debug("Fetched vocabulary entries", count=len(entries), backend="sql")
        return entries


def create_repository(config: Settings | None = None) -> EntryRepository:
    """Return the repository selected by ``STORE_BACKEND``."""

    config = config or default_settings
    if config.STORE_BACKEND == "sql":
        return SqlEntryRepository()
    return RestEntryRepository(config)


__all__ = [
    "EntryQuery",
    "EntryRepository",
    "RestEntryRepository",
    "SqlEntryRepository",
    "build_query",
    "create_repository",
]
