import pytest
import os
import sys
from typing import Generator

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

os.environ["TESTING"] = "1"

DEFAULT_PASSWORD = "password123"


@pytest.fixture
def test_settings():
    """Настройки тестового приложения: БД в памяти, дешёвый bcrypt"""
    from config import Settings
    return Settings(
        database_url="sqlite://",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        rate_limit_enabled=False,
        _env_file=None,
    )


@pytest.fixture
def app(test_settings) -> FastAPI:
    from main import create_app
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(app: FastAPI) -> Generator[Session, None, None]:
    """Сессия к той же БД в памяти, что и у приложения"""
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sample_user_data():
    """Тестовые данные пользователя"""
    return {
        "username": "testuser",
        "email": "testuser@example.com",
        "password": DEFAULT_PASSWORD,
        "first_name": "Test",
        "last_name": "User",
    }


def register_user(client: TestClient, username: str, password: str = DEFAULT_PASSWORD, **extra):
    payload = {
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
        "first_name": "First",
        "last_name": "Last",
    }
    payload.update(extra)
    return client.post("/api/users/register", json=payload)


def login_user(client: TestClient, username: str, password: str = DEFAULT_PASSWORD) -> str:
    response = client.post("/api/users/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]["token"]


@pytest.fixture
def make_user(client):
    """Зарегистрировать пользователя и вернуть заголовки с его токеном"""
    def _make_user(username: str, password: str = DEFAULT_PASSWORD) -> dict:
        response = register_user(client, username, password)
        assert response.status_code == 201, response.text
        token = login_user(client, username, password)
        return {"Authorization": f"Bearer {token}"}
    return _make_user


@pytest.fixture
def auth_headers(make_user) -> dict:
    return make_user("alice_user")


@pytest.fixture
def register(client):
    def _register(username: str, password: str = DEFAULT_PASSWORD, **extra):
        return register_user(client, username, password, **extra)
    return _register


@pytest.fixture
def login(client):
    def _login(username: str, password: str = DEFAULT_PASSWORD):
        return client.post("/api/users/login", json={"username": username, "password": password})
    return _login
