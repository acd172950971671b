# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from todo_app.config import Settings
from todo_app.main import create_app

PASSWORD = "secret1"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        jwt_secret_key="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # entering the client runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_and_login(client):
    def _go(email: str, name: str = "Tester", password: str = PASSWORD) -> str:
        res = client.post("/v1/register", json={"name": name, "email": email, "password": password})
        assert res.status_code == 201, res.text
        res = client.post("/v1/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        return res.json()["token"]

    return _go
