import threading
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from scoreboard.app import create_app
from scoreboard.core import Settings, init_schema, make_engine
from scoreboard.ledger import (
    EventHub,
    MemoryPersistenceAdapter,
    RankingIndex,
    ScoreLedger,
    SQLPersistenceAdapter,
    SubmissionGateway,
)


class StepClock:
    """Deterministic clock advancing by ``step`` on every read."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            value = self.current
            self.current += self.step
            return value

    def advance(self, delta):
        with self._lock:
            self.current += delta


@pytest.fixture()
def clock():
    return StepClock()


@pytest.fixture()
def make_clock():
    return StepClock


@pytest.fixture(params=["memory", "sql"])
def adapter(request):
    if request.param == "memory":
        yield MemoryPersistenceAdapter()
        return
    engine = make_engine("sqlite://")
    init_schema(engine)
    store = SQLPersistenceAdapter(engine)
    yield store
    store.close()


@pytest.fixture()
def ledger(adapter, clock):
    return ScoreLedger(adapter, clock=clock)


@pytest.fixture()
def ranking(ledger):
    return RankingIndex(ledger)


@pytest.fixture()
def events():
    return EventHub()


@pytest.fixture()
def gateway(ledger, events):
    return SubmissionGateway(ledger, events)


@pytest.fixture()
def settings():
    return Settings(database_url="sqlite://", ledger_backend="sql")


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
