import pytest

from app.main import app
from app.db.installations import InMemoryInstallationStore


@pytest.fixture
def store():
    return InMemoryInstallationStore()


@pytest.fixture
def installed_store(store):
    store.put("loc_1", {"access_token": "tok_abc", "refresh_token": "ref", "locationId": "loc_1"})
    return store


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()
