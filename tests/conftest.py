import pytest
from fastapi.testclient import TestClient

from errors import UpstreamFailure
from logic import PLACEHOLDER_AUTHOR
from main import app
from routes_quotes import get_source
from sources.base import PhilosopherLookup

QUOTES = [
    {"quote": "The unexamined life is not worth living.", "work": "Apology", "year": "399 BC",
     "philosopher": {"id": "socrates"}},
    {"quote": "He who thinks great thoughts, often makes great errors.", "philosopher": {"id": "heidegger"}},
    {"quote": "O'Brien & \"Co\" <said> it", "work": "Tom & Jerry", "year": "1940",
     "philosopher": {"id": "obrien"}},
]

NAMES = {"socrates": "Socrates", "heidegger": "Martin Heidegger", "obrien": "O'Brien"}


class FakeSource:
    def __init__(self, quotes=None, names=None, fail_quotes=None):
        self.quotes = QUOTES if quotes is None else quotes
        self.names = NAMES if names is None else names
        self.fail_quotes = fail_quotes
        self.lookups = []

    async def fetch_quotes(self):
        if self.fail_quotes:
            raise self.fail_quotes
        return self.quotes

    async def fetch_philosopher(self, philosopher_id):
        self.lookups.append(philosopher_id)
        name = self.names.get(philosopher_id)
        if name is None:
            return PhilosopherLookup(name=PLACEHOLDER_AUTHOR, ok=False, error="not found")
        return PhilosopherLookup(name=name)


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def client_for():
    def make(source):
        app.dependency_overrides[get_source] = lambda: source
        return TestClient(app)
    yield make
    app.dependency_overrides.clear()


@pytest.fixture
def upstream_down():
    return FakeSource(fail_quotes=UpstreamFailure("connection refused"))
