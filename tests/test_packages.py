import pytest
from fastapi.testclient import TestClient

from backend.app.core.cache import query_cache
from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    query_cache.clear()
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()["access_token"]


def create_package(client: TestClient, token: str, **overrides):
    payload = {"name": "Starter 8", "description": "Eight sessions", "price": 240.0, "session_count": 8}
    payload.update(overrides)
    return client.post("/packages/", json=payload, headers={"Authorization": f"Bearer {token}"})


def test_create_and_list_packages():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    resp = create_package(client, token)
    assert resp.status_code == 201
    assert resp.json()["session_count"] == 8
    assert resp.json()["is_active"] is True

    create_package(client, token, name="Legacy 4", session_count=4, is_active=False)
    everything = client.get("/packages/", headers={"Authorization": f"Bearer {token}"}).json()
    active = client.get("/packages/?active_only=true", headers={"Authorization": f"Bearer {token}"}).json()
    assert len(everything) == 2
    assert [p["name"] for p in active] == ["Starter 8"]


def test_duplicate_package_name_returns_400():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    create_package(client, token)
    assert create_package(client, token).status_code == 400


def test_package_requires_positive_session_count():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    assert create_package(client, token, session_count=0).status_code == 422


def test_update_and_delete_package():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    package = create_package(client, token).json()

    resp = client.put(
        f"/packages/{package['id']}", json={"price": 260.0}, headers={"Authorization": f"Bearer {token}"}
    )
    assert resp.status_code == 200
    assert resp.json()["price"] == 260.0

    resp = client.delete(f"/packages/{package['id']}", headers={"Authorization": f"Bearer {token}"})
    assert resp.json() == {"status": "deleted", "id": package["id"]}
