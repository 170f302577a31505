import pytest

from happyhour.db.session import get_db
from happyhour.dependencies import get_current_user
from happyhour.main import app
from happyhour.schemas import LoginResponse
from happyhour.services import auth as auth_module


async def no_db():
    yield None


@pytest.fixture
def offline_db(client):
    app.dependency_overrides[get_db] = no_db
    return client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_me(client):
    response = client.get("/me")
    assert response.status_code == 200
    assert response.json() == {"id": "user-1", "email": "owner@example.com", "display_name": "Owner"}


def test_logout_is_idempotent(client):
    assert client.post("/auth/logout").status_code == 204
    assert client.post("/auth/logout").status_code == 204


def test_bars_require_authentication(offline_db):
    app.dependency_overrides.pop(get_current_user)
    assert offline_db.get("/bars").status_code == 401
    assert offline_db.get("/bars", headers={"Authorization": "Bearer nonsense"}).status_code == 401


def test_login_route_delegates_to_service(offline_db, monkeypatch):
    async def fake_login(db, body):
        assert body.email == "owner@example.com"
        return LoginResponse(access_token="token")

    monkeypatch.setattr(auth_module, "login", fake_login)
    response = offline_db.post("/auth/login", json={"email": "owner@example.com", "password": "pw"})
    assert response.status_code == 200
    assert response.json()["access_token"] == "token"
    assert response.json()["mfa_required"] is False


def test_login_rejects_malformed_email(offline_db):
    response = offline_db.post("/auth/login", json={"email": "not-an-email", "password": "pw"})
    assert response.status_code == 422
