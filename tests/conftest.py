import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.memory import MemoryStore
from app.main import create_app
from app.utils.analyzer import FinanceAnalyzer


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def analyzer(store):
    return FinanceAnalyzer(store)


@pytest.fixture
def client():
    app = create_app(Settings())
    with TestClient(app) as test_client:
        yield test_client
