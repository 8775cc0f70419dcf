"""Virtual queue state machine."""
import random

import pytest

from conftest import assert_dense, waiting_positions
from doctorgo.errors import Conflict, NotFound
from doctorgo.fixtures import load_all
from doctorgo.repository import Repository
from doctorgo.services.queue import QueueService, never_tick, random_tick


@pytest.mark.asyncio
async def test_join_empty_queue_starts_at_position_one(services, repo):
    entry = await services.queue.join("prov-002", "user-001")

    assert entry.position == 1
    assert entry.estimated_wait == 15
    assert entry.status == "waiting"
    assert entry.token.startswith("QT-")
    assert repo.queue_length("prov-002") == 1


@pytest.mark.asyncio
async def test_join_appends_behind_existing_patients(services, repo):
    entry = await services.queue.join("prov-001", "user-001")

    assert entry.position == 4
    assert entry.estimated_wait == 60
    assert repo.queue_length("prov-001") == 4
    assert_dense(repo, "prov-001")


@pytest.mark.asyncio
async def test_join_unknown_provider_is_not_found(services):
    with pytest.raises(NotFound) as exc_info:
        await services.queue.join("prov-missing", "user-001")

    assert exc_info.value.code == "PROVIDER_NOT_FOUND"


@pytest.mark.asyncio
async def test_invite_next_moves_everyone_up_by_one(services, repo):
    before = {q.token: q.position for q in repo.waiting_entries("prov-001")}

    invited = await services.queue.invite_next("prov-001")

    assert invited.token == "QT-SEED-0001"
    assert invited.status == "invited"
    for entry in repo.waiting_entries("prov-001"):
        assert entry.position == before[entry.token] - 1
    assert_dense(repo, "prov-001")
    assert repo.queue_length("prov-001") == 2


@pytest.mark.asyncio
async def test_invite_next_with_nobody_waiting_returns_none(services):
    assert await services.queue.invite_next("prov-002") is None


@pytest.mark.asyncio
async def test_invite_next_unknown_provider(services):
    with pytest.raises(NotFound):
        await services.queue.invite_next("prov-missing")


@pytest.mark.asyncio
async def test_cancel_unknown_token(services):
    with pytest.raises(NotFound) as exc_info:
        await services.queue.cancel("QT-nope")

    assert exc_info.value.code == "QUEUE_NOT_FOUND"


@pytest.mark.asyncio
async def test_cancelled_entry_cannot_be_polled_and_rest_close_the_gap(services, repo):
    await services.queue.cancel("QT-SEED-0002")

    with pytest.raises(NotFound):
        await services.queue.status("QT-SEED-0002")

    assert repo.queue["QT-SEED-0001"].position == 1
    assert repo.queue["QT-SEED-0003"].position == 2
    assert repo.queue_length("prov-001") == 2
    assert_dense(repo, "prov-001")


@pytest.mark.asyncio
async def test_postpone_moves_entry_to_the_back(services, repo):
    entry = await services.queue.postpone("QT-SEED-0001")

    assert entry.position == 3
    assert entry.estimated_wait == 45
    assert [q.token for q in repo.waiting_entries("prov-001")] == [
        "QT-SEED-0002",
        "QT-SEED-0003",
        "QT-SEED-0001",
    ]
    assert_dense(repo, "prov-001")
    assert repo.queue_length("prov-001") == 3


@pytest.mark.asyncio
async def test_postpone_invited_patient_rejoins_waiting_set(services, repo):
    invited = await services.queue.invite_next("prov-001")

    entry = await services.queue.postpone(invited.token)

    assert entry.status == "waiting"
    assert entry.position == 3
    assert repo.queue_length("prov-001") == 3
    assert_dense(repo, "prov-001")


@pytest.mark.asyncio
async def test_postpone_unknown_token(services):
    with pytest.raises(NotFound):
        await services.queue.postpone("QT-nope")


@pytest.mark.asyncio
async def test_complete_only_from_invited(services):
    with pytest.raises(Conflict) as exc_info:
        await services.queue.complete("QT-SEED-0001")
    assert exc_info.value.code == "INVALID_QUEUE_STATE"

    invited = await services.queue.invite_next("prov-001")
    done = await services.queue.complete(invited.token)
    assert done.status == "completed"

    with pytest.raises(Conflict):
        await services.queue.postpone(invited.token)


@pytest.mark.asyncio
async def test_status_without_tick_keeps_position(services):
    entry = await services.queue.status("QT-SEED-0003")

    assert entry.position == 3
    assert entry.estimated_wait == 45


@pytest.mark.asyncio
async def test_status_tick_swaps_with_entry_ahead(repo, no_latency):
    queue = QueueService(repo, no_latency, tick=lambda entry: True)

    entry = await queue.status("QT-SEED-0003")

    assert entry.position == 2
    assert entry.estimated_wait == 30
    assert repo.queue["QT-SEED-0002"].position == 3
    assert_dense(repo, "prov-001")


@pytest.mark.asyncio
async def test_status_tick_never_moves_front_of_queue(repo, no_latency):
    queue = QueueService(repo, no_latency, tick=lambda entry: True)

    entry = await queue.status("QT-SEED-0001")

    assert entry.position == 1
    assert waiting_positions(repo, "prov-001") == [1, 2, 3]


@pytest.mark.asyncio
async def test_queue_length_tracks_waiting_entries_through_a_session(services, repo):
    a = await services.queue.join("prov-003", "user-001")
    b = await services.queue.join("prov-003", "user-002")
    c = await services.queue.join("prov-003", "guest-1")
    assert repo.queue_length("prov-003") == 3

    await services.queue.postpone(a.token)
    assert repo.queue_length("prov-003") == 3

    await services.queue.invite_next("prov-003")
    assert repo.queue_length("prov-003") == 2

    await services.queue.cancel(c.token)
    assert repo.queue_length("prov-003") == 1
    assert repo.queue[a.token].position == 1
    assert repo.queue[b.token].status == "invited"
    assert_dense(repo, "prov-003")


@pytest.mark.asyncio
async def test_list_for_provider_orders_waiting_first(services):
    invited = await services.queue.invite_next("prov-001")

    entries = await services.queue.list_for_provider("prov-001")

    assert [q.status for q in entries] == ["waiting", "waiting", "invited"]
    assert entries[-1].token == invited.token
    assert [q.position for q in entries[:2]] == [1, 2]


def test_random_tick_respects_probability():
    rng = random.Random(3)
    always = random_tick(1.0, rng)
    never = random_tick(0.0, rng)

    assert all(always(None) for _ in range(20))
    assert not any(never(None) for _ in range(20))
    assert never_tick(None) is False


@pytest.mark.asyncio
async def test_status_tick_on_lone_seeded_entry_stays_first(no_latency):
    seed = load_all()
    seed["queue"] = [
        {"token": "QT-lone", "providerId": "prov-002", "userId": "u1", "position": 2, "estimatedWait": 30,
         "joinedAt": "2026-10-17T08:00:00+00:00"},
    ]
    repo = Repository(seed=seed)
    queue = QueueService(repo, no_latency, tick=lambda entry: True)

    entry = await queue.status("QT-lone")

    assert entry.position == 1
    assert entry.estimated_wait == 15
    assert waiting_positions(repo, "prov-002") == [1]
