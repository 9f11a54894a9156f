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


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_create_coach_with_availability():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    resp = client.post(
        "/coaches/",
        json={"name": "Coach Rivera", "email": "rivera@example.com", "available_days": ["monday", "wednesday", "monday"]},
        headers=auth(token),
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["available_days"] == ["monday", "wednesday"]
    assert data["auth_id"] is None
    assert data["role"] == "coach"


def test_update_availability_replaces_days():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    coach = client.post(
        "/coaches/",
        json={"name": "Coach Rivera", "email": "rivera@example.com", "available_days": ["monday", "friday"]},
        headers=auth(token),
    ).json()

    resp = client.put(f"/coaches/{coach['id']}", json={"available_days": ["friday", "saturday"]}, headers=auth(token))
    assert resp.status_code == 200
    assert sorted(resp.json()["available_days"]) == ["friday", "saturday"]


def test_invalid_day_rejected():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    resp = client.post(
        "/coaches/",
        json={"name": "Coach Rivera", "email": "rivera@example.com", "available_days": ["funday"]},
        headers=auth(token),
    )
    assert resp.status_code == 422


def test_create_coach_with_password_creates_login():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    coach = client.post(
        "/coaches/",
        json={"name": "Coach Kim", "email": "kim@example.com", "password": "hoops123"},
        headers=auth(token),
    ).json()
    assert coach["auth_id"] is not None

    login = client.post("/auth/login", json={"email": "kim@example.com", "password": "hoops123"})
    assert login.status_code == 200
    assert login.json()["role"] == "coach"


def test_link_existing_user_once():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    user = client.post("/auth/register", json={"email": "staff@example.com", "password": "secret"}).json()

    first = client.post(
        "/coaches/", json={"name": "Coach A", "email": "a@example.com", "auth_id": user["id"]}, headers=auth(token)
    )
    assert first.status_code == 201
    assert first.json()["auth_id"] == user["id"]

    second = client.post(
        "/coaches/", json={"name": "Coach B", "email": "b@example.com", "auth_id": user["id"]}, headers=auth(token)
    )
    assert second.status_code == 400


def test_duplicate_coach_email_returns_400():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    payload = {"name": "Coach Rivera", "email": "rivera@example.com"}
    client.post("/coaches/", json=payload, headers=auth(token))
    assert client.post("/coaches/", json=payload, headers=auth(token)).status_code == 400


def test_delete_coach():
    client = TestClient(app)
    token = register_and_login(client, "admin@example.com", "secret")
    coach = client.post("/coaches/", json={"name": "Coach Rivera", "email": "rivera@example.com"}, headers=auth(token)).json()

    resp = client.delete(f"/coaches/{coach['id']}", headers=auth(token))
    assert resp.json() == {"status": "deleted", "id": coach["id"]}
    assert client.get(f"/coaches/{coach['id']}", headers=auth(token)).status_code == 404
