from __future__ import annotations

import asyncio
import random
from datetime import date

import pytest

from vocab_review.core.navigation import ListRequest, SessionRequest
from vocab_review.screens.memorization import (
    EMPTY_RESULT_MESSAGE,
    EMPTY_SELECTION_MESSAGE,
    REMOTE_ERROR_MESSAGE,
    MemorizationScreen,
)
from vocab_review.utils.exceptions import RemoteQueryError

from fakes import FakeRepository, GatedRepository, utc


@pytest.fixture()
def entries(make_entry):
    return [
        make_entry(3, created_at=utc(2024, 1, 5, 0, 0)),
        make_entry(7, created_at=utc(2024, 1, 5, 23, 59, 59)),
        make_entry(8, part_of_speech="adj", created_at=utc(2024, 1, 5, 12, 0)),
        make_entry(9, created_at=utc(2024, 1, 6, 0, 0)),
    ]


def _screen(repository, request: SessionRequest, seed: int = 7) -> MemorizationScreen:
    return MemorizationScreen(repository, request, rng=random.Random(seed), timezone_name="UTC")


@pytest.mark.asyncio
async def test_empty_id_list_fails_without_fetching(entries):
    repository = FakeRepository(entries)
    screen = _screen(repository, SessionRequest.from_query("ids=,abc"))

    assert await screen.load() is False

    assert repository.queries == []
    assert screen.error == EMPTY_SELECTION_MESSAGE
    assert screen.error_kind == "empty_selection"
    assert screen.loading is False
    assert screen.progress == "Waiting for words…"
    assert not screen.can_next and not screen.can_reveal


@pytest.mark.asyncio
async def test_empty_result_is_a_terminal_state(entries):
    repository = FakeRepository(entries)
    request = SessionRequest(ids=(3, 7), part_of_speech="adj")
    screen = _screen(repository, request)

    assert await screen.load() is False

    assert len(repository.queries) == 1
    assert screen.error == EMPTY_RESULT_MESSAGE
    assert screen.error_kind == "empty_result"
    assert screen.queue == []


@pytest.mark.asyncio
async def test_remote_failure_shows_retry_message(entries):
    screen = _screen(FakeRepository(entries, error=RemoteQueryError("boom")), SessionRequest(ids=(3,)))

    assert await screen.load() is False

    assert screen.error == REMOTE_ERROR_MESSAGE
    assert screen.error_kind == "remote"
    assert screen.loading is False
    assert not screen.can_next
    assert screen.can_go_back


@pytest.mark.asyncio
async def test_load_fetches_requested_ids_within_filter(entries):
    repository = FakeRepository(entries)
    request = SessionRequest(ids=(3, 7, 9), part_of_speech="verb", day=date(2024, 1, 5))
    screen = _screen(repository, request)

    assert await screen.load() is True

    query = repository.queries[0]
    assert query.ids == (3, 7, 9)
    assert query.part_of_speech == "verb"
    assert query.start_date == utc(2024, 1, 5)
    assert sorted(entry.id for entry in screen.queue) == [3, 7]
    assert screen.current_index == 0
    assert screen.revealed is False
    assert screen.progress == "Word 1 of 2"


@pytest.mark.asyncio
async def test_single_word_session(entries):
    screen = _screen(FakeRepository(entries), SessionRequest.from_query("ids=3&type=verb&day=2024-01-05"))
    await screen.load()

    assert [entry.id for entry in screen.queue] == [3]
    assert screen.current.id == 3
    assert screen.progress == "Word 1 of 1"


@pytest.mark.asyncio
async def test_reveal_is_idempotent_and_disabled_once_shown(entries):
    screen = _screen(FakeRepository(entries), SessionRequest(ids=(3, 7)))
    await screen.load()

    assert screen.can_reveal
    assert screen.reveal() is True
    assert screen.revealed is True
    assert screen.can_reveal is False
    assert screen.reveal() is False
    assert screen.revealed is True


@pytest.mark.asyncio
async def test_next_advances_and_hides(entries):
    screen = _screen(FakeRepository(entries), SessionRequest(ids=(3, 7, 8, 9)))
    await screen.load()
    first = screen.current

    screen.reveal()
    assert screen.next() is True

    assert screen.current_index == 1
    assert screen.revealed is False
    assert screen.current is not first
    assert screen.progress == "Word 2 of 4"


@pytest.mark.asyncio
async def test_wraparound_reshuffles_and_resets(entries):
    screen = _screen(FakeRepository(entries), SessionRequest(ids=(3, 7, 8, 9)))
    await screen.load()
    ids = sorted(entry.id for entry in screen.queue)

    for _ in range(len(screen.queue) - 1):
        screen.next()
    screen.reveal()
    screen.next()

    assert screen.current_index == 0
    assert screen.revealed is False
    assert sorted(entry.id for entry in screen.queue) == ids
    assert len({entry.id for entry in screen.queue}) == len(ids)


@pytest.mark.asyncio
async def test_wraparound_order_varies_across_passes(entries):
    screen = _screen(FakeRepository(entries), SessionRequest(ids=(3, 7, 8, 9)), seed=99)
    await screen.load()
    orders = {tuple(entry.id for entry in screen.queue)}

    for _ in range(30):
        for _ in range(len(screen.queue)):
            screen.next()
        assert screen.current_index == 0
        orders.add(tuple(entry.id for entry in screen.queue))

    assert len(orders) > 1


@pytest.mark.asyncio
async def test_actions_disabled_while_loading(make_entry):
    repository = GatedRepository()
    screen = _screen(repository, SessionRequest(ids=(3,)))

    pending = asyncio.create_task(screen.load())
    await asyncio.sleep(0)

    assert screen.loading is True
    assert screen.reveal() is False
    assert screen.next() is False
    assert screen.can_go_back is True

    repository.pending[0][1].set_result([make_entry(3)])
    assert await pending is True
    assert screen.can_reveal and screen.can_next


@pytest.mark.asyncio
async def test_back_returns_filter_without_ids(entries):
    screen = _screen(
        FakeRepository(entries),
        SessionRequest(ids=(3,), part_of_speech="verb", day=date(2024, 1, 5)),
    )
    await screen.load()

    back = screen.back()

    assert back == ListRequest(part_of_speech="verb", day=date(2024, 1, 5))
    assert back.location == "/?type=verb&day=2024-01-05"
    assert screen.closed
    assert screen.next() is False


@pytest.mark.asyncio
async def test_leaving_during_fetch_discards_result(make_entry):
    repository = GatedRepository()
    screen = _screen(repository, SessionRequest(ids=(3,)))

    pending = asyncio.create_task(screen.load())
    await asyncio.sleep(0)
    screen.back()
    repository.pending[0][1].set_result([make_entry(3)])

    assert await pending is False
    assert screen.queue == []


@pytest.mark.asyncio
async def test_reload_keeps_only_latest_result(make_entry):
    repository = GatedRepository()
    screen = _screen(repository, SessionRequest(ids=(3, 7)))

    slow = asyncio.create_task(screen.load())
    await asyncio.sleep(0)
    fast = asyncio.create_task(screen.load())
    await asyncio.sleep(0)

    repository.pending[1][1].set_result([make_entry(7)])
    assert await fast is True
    repository.pending[0][1].set_result([make_entry(3), make_entry(7)])
    assert await slow is False

    assert [entry.id for entry in screen.queue] == [7]
