import pytest
from fastapi.testclient import TestClient

from backend.contabilidad.main import create_app
from backend.contabilidad.seed import seed
from backend.contabilidad.store import EventStore


@pytest.fixture
def store():
    """Almacén con los dos eventos de ejemplo (ids 1 y 2)."""
    s = EventStore()
    seed(s)
    return s


@pytest.fixture
def client():
    with TestClient(create_app(store=EventStore(), seed_demo=True)) as c:
        yield c


@pytest.fixture
def client_vacio():
    with TestClient(create_app(store=EventStore(), seed_demo=False)) as c:
        yield c
