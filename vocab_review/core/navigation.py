"""Query-string contract between the word list and the memorization screen.

The list screen hands a :class:`SessionRequest` to the session screen and the
session screen hands a :class:`ListRequest` back. Both are immutable and both
round-trip through the ``ids`` / ``type`` / ``day`` query parameters, so a
session can also be opened straight from a shared link.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping
from urllib.parse import parse_qs, urlencode, urlsplit

from vocab_review.utils.dates import parse_day

LIST_PATH = "/"
MEMORIZE_PATH = "/memorize"

_ID_TOKEN = re.compile(r"[+-]?[0-9]+")


def parse_ids(raw: str | None) -> tuple[int, ...]:
    """Split a comma-separated id list, dropping tokens that are not integers."""

    if not raw:
        return ()
    ids: list[int] = []
    for token in raw.split(","):
        token = token.strip()
        # ASCII digits only; int() would also take "1_0" and non-ASCII digits.
        if _ID_TOKEN.fullmatch(token):
            ids.append(int(token))
    return tuple(ids)


def _first(params: Mapping[str, Iterable[str] | str], key: str) -> str | None:
    value = params.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    for item in value:
        return item or None
    return None


@dataclass(frozen=True)
class ListRequest:
    """Filter the word list should be opened with."""

    part_of_speech: str | None = None
    day: date | None = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.part_of_speech:
            params["type"] = self.part_of_speech
        if self.day is not None:
            params["day"] = self.day.isoformat()
        return params

    def to_query(self) -> str:
        return urlencode(self.to_params())

    @property
    def location(self) -> str:
        query = self.to_query()
        return f"{LIST_PATH}?{query}" if query else LIST_PATH

    @classmethod
    def from_params(cls, params: Mapping[str, Iterable[str] | str]) -> "ListRequest":
        return cls(
            part_of_speech=_first(params, "type"),
            day=parse_day(_first(params, "day")),
        )


@dataclass(frozen=True)
class SessionRequest:
    """Words (and the filter they were picked under) for a memorization run."""

    ids: tuple[int, ...] = ()
    part_of_speech: str | None = None
    day: date | None = None

    def to_params(self) -> dict[str, str]:
        params = {"ids": ",".join(str(word_id) for word_id in self.ids)}
        params.update(self.list_request().to_params())
        return params

    def to_query(self) -> str:
        # Commas stay literal so the target reads ``ids=3,7``.
        return urlencode(self.to_params(), safe=",")

    @property
    def location(self) -> str:
        return f"{MEMORIZE_PATH}?{self.to_query()}"

    def list_request(self) -> ListRequest:
        """The filter to restore when leaving the session; ids are dropped."""

        return ListRequest(part_of_speech=self.part_of_speech, day=self.day)

    @classmethod
    def from_params(cls, params: Mapping[str, Iterable[str] | str]) -> "SessionRequest":
        listing = ListRequest.from_params(params)
        return cls(
            ids=parse_ids(_first(params, "ids")),
            part_of_speech=listing.part_of_speech,
            day=listing.day,
        )

    @classmethod
    def from_query(cls, query: str) -> "SessionRequest":
        """Decode either a bare query string or a full ``/memorize?...`` target."""

        if "?" in query:
            query = urlsplit(query).query
        return cls.from_params(parse_qs(query, keep_blank_values=True))
