"""Seed loading and in-memory repository behaviour."""
import pytest

from conftest import assert_dense, waiting_positions
from doctorgo.errors import NotFound
from doctorgo.events import EventLog
from doctorgo.fixtures import load_all, load_fixture
from doctorgo.models import QueueEntry
from doctorgo.repository import Repository, generate_id


def test_fixtures_load_and_are_copies():
    providers = load_fixture("providers")
    providers[0]["name"] = "changed"

    assert load_fixture("providers")[0]["name"] == "Dr. Sarah Chen"
    assert set(load_all()) == {"providers", "bookings", "payments", "users", "queue", "symptom_profiles"}


def test_unknown_fixture():
    with pytest.raises(ValueError):
        load_fixture("nope")


def test_seeded_collections(repo):
    assert len(repo.providers) == 7
    assert [b.booking_id for b in repo.bookings] == ["BK-SEED-0001", "BK-SEED-0002"]
    assert repo.find_payment("PAY-SANDBOX-SEED-0001").booking_id == "BK-SEED-0001"
    assert repo.find_user_by_email("  JORDAN@doctorgo.test ").id == "user-002"
    assert "chest pain" in repo.symptom_keywords


def test_passwords_are_hashed_and_never_dumped(repo):
    user = repo.find_user("user-001")

    assert user.password_hash != "password123"
    assert "password_hash" not in user.model_dump()
    assert "passwordHash" not in user.model_dump(by_alias=True)


def test_seeded_queue_length_is_ignored():
    seed = load_all()
    seed["providers"][1]["queueLength"] = 12

    repo = Repository(seed=seed)

    assert repo.queue_length("prov-002") == 0
    assert repo.queue_length("prov-001") == 3


def test_queue_length_counts_waiting_only(repo):
    repo.queue["QT-SEED-0002"].status = "invited"

    assert repo.queue_length("prov-001") == 2
    assert [q.token for q in repo.waiting_entries("prov-001")] == ["QT-SEED-0001", "QT-SEED-0003"]


def test_get_missing_entries_raise(repo):
    with pytest.raises(NotFound):
        repo.get_provider("prov-missing")
    with pytest.raises(NotFound):
        repo.get_queue_entry("QT-missing")


def test_reset_restores_seed_state(repo):
    repo.get_provider("prov-001").availability_slots.clear()
    repo.add_queue_entry(
        QueueEntry(
            token="QT-x", provider_id="prov-002", user_id="u", position=1, estimated_wait=15, joined_at="now"
        )
    )
    repo.events.record("test.event", {})

    repo.reset()

    assert len(repo.get_provider("prov-001").availability_slots) == 4
    assert "QT-x" not in repo.queue
    assert len(repo.events) == 0


def test_repositories_do_not_share_state():
    first, second = Repository(), Repository()

    first.get_provider("prov-001").availability_slots[0].available = False

    assert second.get_provider("prov-001").availability_slots[0].available is True


def test_generate_id_prefix_and_uniqueness():
    ids = {generate_id("BK") for _ in range(50)}

    assert len(ids) == 50
    assert all(i.startswith("BK-") for i in ids)


def test_seeded_waiting_positions_are_made_dense():
    seed = load_all()
    seed["queue"] = [
        {"token": "QT-a", "providerId": "prov-002", "userId": "u1", "position": 2, "estimatedWait": 30,
         "joinedAt": "2026-10-17T08:00:00+00:00"},
        {"token": "QT-b", "providerId": "prov-003", "userId": "u2", "position": 5, "estimatedWait": 75,
         "joinedAt": "2026-10-17T08:00:00+00:00"},
        {"token": "QT-c", "providerId": "prov-003", "userId": "u3", "position": 5, "estimatedWait": 75,
         "joinedAt": "2026-10-17T08:10:00+00:00"},
    ]

    repo = Repository(seed=seed)

    assert waiting_positions(repo, "prov-002") == [1]
    assert [q.token for q in repo.waiting_entries("prov-003")] == ["QT-b", "QT-c"]
    assert_dense(repo, "prov-003")
    assert repo.queue["QT-c"].estimated_wait == 30


def test_event_log_keeps_only_the_most_recent():
    log = EventLog(limit=3)

    for n in range(5):
        log.record("test.event", {"n": n})

    assert len(log) == 3
    assert [e["data"]["n"] for e in log] == [2, 3, 4]
