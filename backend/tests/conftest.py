import pytest
from fastapi.testclient import TestClient

from userstore.config import ConnectionInfo
from userstore.data.database import get_store
from userstore.main import app
from userstore.repository.user_store import UserStore


@pytest.fixture
def store():
    db = UserStore.connect(ConnectionInfo(url="sqlite://"))
    yield db
    if not db.closed:
        db.reset()
    db.close()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
