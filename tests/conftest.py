"""Shared test fixtures."""
import pytest
from fastapi.testclient import TestClient

from doctorgo.latency import simulated_latency
from doctorgo.main import create_app
from doctorgo.repository import Repository
from doctorgo.services import build_services
from doctorgo.services.queue import never_tick


@pytest.fixture
def repo():
    """Fresh repository seeded from the bundled fixtures."""
    return Repository()


@pytest.fixture
def no_latency():
    return simulated_latency(0, 0)


@pytest.fixture
def services(repo, no_latency):
    """All services over one repository, no delay, queue never drifts."""
    return build_services(repo, no_latency, tick=never_tick)


@pytest.fixture
def app(repo):
    return create_app(repository=repo, latency_ms=(0, 0), tick=never_tick, seed=7)


@pytest.fixture
def client(app):
    """Create FastAPI test client."""
    return TestClient(app)


def waiting_positions(repo: Repository, provider_id: str) -> list[int]:
    return [q.position for q in repo.waiting_entries(provider_id)]


def assert_dense(repo: Repository, provider_id: str):
    positions = waiting_positions(repo, provider_id)
    assert positions == list(range(1, len(positions) + 1))
    for entry in repo.waiting_entries(provider_id):
        assert entry.estimated_wait == entry.position * 15
