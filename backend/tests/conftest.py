"""Shared fixtures: in-memory repositories and an API client over a temp data dir."""
import pytest
from fastapi.testclient import TestClient

from knowledge_api.domain.common.ids import SequentialIdAllocator
from knowledge_api.persistence.stores.json_store import InMemoryStore
from knowledge_api.persistence.repositories.json.json_topic_repository import JsonTopicRepository


@pytest.fixture
def topic_store():
    return InMemoryStore()


@pytest.fixture
def topic_repo(topic_store):
    return JsonTopicRepository(topic_store, SequentialIdAllocator())


# ------------------------------------------------------------------
# API
# ------------------------------------------------------------------
@pytest.fixture
def client(tmp_path, monkeypatch):
    from knowledge_api import container
    monkeypatch.setattr(container, "DATA_DIR", str(tmp_path))
    container.reset()

    from knowledge_api.main import app, seed_default_admin
    seed_default_admin()
    yield TestClient(app)
    container.reset()


def _login(client, email, password):
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def admin_headers(client):
    return _login(client, "admin@example.com", "admin")


@pytest.fixture
def make_user(client, admin_headers):
    def _make(role, email=None, password="secret"):
        email = email or f"{role.lower()}@example.com"
        resp = client.post(
            "/users/",
            json={"name": role, "email": email, "role": role, "password": password},
            headers=admin_headers,
        )
        assert resp.status_code == 201, resp.text
        return _login(client, email, password)
    return _make
