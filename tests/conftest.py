# File: tests/conftest.py

"""
Shared fixtures.

Every test gets its own in-memory SQLite database wired into the app through
dependency overrides, and analysis runs on the canned demo sections so no
network is used.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from brandsense.api.deps import get_db, get_session_factory
from brandsense.client.api import BrandSenseClient
from brandsense.client.cache import LocalCache
from brandsense.core.config import get_settings
from brandsense.db.init_db import init_db
from brandsense.db.session import build_engine
from brandsense.main import app

TEST_EMAIL = "jane@acme.io"
TEST_PASSWORD = "s3cret-pass"
TEST_FULL_NAME = "Jane Doe"

PROJECT_FIELDS = {
    "name": "Acme Rockets",
    "market": "United States",
    "language": "English",
}


@pytest.fixture(autouse=True)
def demo_settings(monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "demo_mode", True)
    monkeypatch.setattr(settings, "resend_api_key", None)
    return settings


@pytest.fixture()
def session_factory():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield sessionmaker(autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


def _register(client, email=TEST_EMAIL, password=TEST_PASSWORD, full_name=TEST_FULL_NAME):
    resp = client.post(
        "/api/v1/auth/signup",
        json={"email": email, "password": password, "fullName": full_name},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["user"]


def _sign_in(client, email=TEST_EMAIL, password=TEST_PASSWORD) -> str:
    resp = client.post("/api/v1/auth/signin", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["accessToken"]


@pytest.fixture()
def register():
    return _register


@pytest.fixture()
def sign_in():
    return _sign_in


@pytest.fixture()
def auth_headers(client):
    _register(client)
    return {"Authorization": f"Bearer {_sign_in(client)}"}


@pytest.fixture()
def api(client):
    """BrandSenseClient talking to the app in-process."""
    return BrandSenseClient(base_url="http://testserver", http=client)


@pytest.fixture()
def cache(tmp_path):
    return LocalCache(tmp_path / "cache.json")


@pytest.fixture()
def project_fields():
    return dict(PROJECT_FIELDS)


@pytest.fixture()
def created_project(client, auth_headers, project_fields):
    """A project whose demo analysis already ran (background tasks finish inside the request)."""
    resp = client.post("/api/v1/projects", json=project_fields, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["project"]
