import pytest
from dataclasses import replace
from fastapi.testclient import TestClient

from deps.db import get_store
from main import app
from services.seeds import SeedRegistry, get_registry


class MemoryRoundStore:
    def __init__(self):
        self.rounds = {}

    def add(self, record):
        round_id = len(self.rounds) + 1
        self.rounds[round_id] = replace(record, round_id=round_id)
        return round_id

    def get(self, round_id):
        return self.rounds.get(round_id)


@pytest.fixture
def store():
    return MemoryRoundStore()


@pytest.fixture
def registry():
    return SeedRegistry("abc")


@pytest.fixture
def client(store, registry):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()
