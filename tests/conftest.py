import pytest
from fastapi.testclient import TestClient
from sqlalchemy.dialects import postgresql

from broker_directory.cache import get_cache
from broker_directory.db import get_db
from broker_directory.main import app
from broker_directory.models import Provider
from broker_directory.rate_limit import limiter


class FakeResult:
    def __init__(self, rows):
        self._rows = rows

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)


class FakeSession:
    """Stands in for a SQLAlchemy Session.

    Each ``execute`` pops the next queued outcome: a list of rows, or an
    exception to raise. Executed statements are kept for inspection.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.statements = []
        self.closed = False

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)

    def execute(self, stmt, params=None):
        self.statements.append(stmt)
        outcome = self.outcomes.pop(0) if self.outcomes else []
        if isinstance(outcome, Exception):
            raise outcome
        return FakeResult(outcome)

    def close(self):
        self.closed = True


class FakeCache:
    def __init__(self, fail=None):
        self.store = {}
        self.ttls = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise self.fail
        return self.store.get(key)

    def setex(self, key, ttl, value):
        if self.fail:
            raise self.fail
        self.store[key] = value
        self.ttls[key] = ttl

    def ping(self):
        if self.fail:
            raise self.fail
        return True


def make_provider(id, name, specialties=("auto",), neighborhood="Aldeota", **fields):
    return Provider(id=id, name=name, specialties=list(specialties), neighborhood=neighborhood, **fields)


def compile_pg(stmt):
    compiled = stmt.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def fake_db():
    return FakeSession()


@pytest.fixture
def fake_cache():
    return None


@pytest.fixture
def client(fake_db, fake_cache):
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_cache] = lambda: fake_cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
