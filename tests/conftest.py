"""Shared fixtures: a fresh SQLite database per test, services and an API client."""

import pytest
from fastapi.testclient import TestClient

from storefront_api.app.core.config import settings
from storefront_api.app.core.db import DocumentStore, init_db
from storefront_api.app.core.security import ROLE_ADMIN, ROLE_USER, create_access_token


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    path = str(tmp_path / "storefront-test.db")
    monkeypatch.setattr(settings, "database_url", path)
    monkeypatch.setattr(settings, "secret_key", "test-secret")
    monkeypatch.setattr(settings, "super_admin_static_token", "")
    monkeypatch.setattr(settings, "bot_tokens", "")
    init_db(path)
    return path


@pytest.fixture()
def store(database):
    return DocumentStore(database)


@pytest.fixture()
def admin():
    return {"sub": "admin@example.com", "user_id": "admin-1", "role": ROLE_ADMIN}


@pytest.fixture()
def customer():
    return {"sub": "cust-1", "user_id": "cust-1", "role": ROLE_USER, "name": "Jane Doe"}


@pytest.fixture()
def client():
    from storefront_api.app.main import app

    return TestClient(app)


@pytest.fixture()
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin)}"}


@pytest.fixture()
def user_headers(customer):
    return {"Authorization": f"Bearer {create_access_token(customer)}"}
