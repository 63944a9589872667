"""Shared fixtures: a throwaway SQLite database and an API client."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="eventlink-tests-")) / "eventlink_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["ADMIN_EMAILS"] = "boss@eventlink.io"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)
os.environ["WS_REQUIRE_TOKEN"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from eventlink.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from eventlink.infrastructure.database import Base, engine, initialize_database  # noqa: E402
from eventlink.infrastructure import models  # noqa: E402,F401  # register tables before the first drop_all
from eventlink.infrastructure.security import token_blacklist  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    initialize_database()
    token_blacklist.clear()
    yield
    engine.dispose()


@pytest.fixture()
def client():
    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


class Api:
    """Small helpers for driving the HTTP API in tests."""

    def __init__(self, client: TestClient) -> None:
        self.client = client

    def register(
        self,
        email: str,
        role: str = "freelancer",
        *,
        first_name: str = "Test",
        last_name: str = "User",
        password: str = "Secret123",
    ) -> tuple[dict[str, str], int]:
        response = self.client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": password,
                "role": role,
                "first_name": first_name,
                "last_name": last_name,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]["id"]

    def post_job(self, headers: dict[str, str], **overrides) -> dict:
        payload = {
            "title": "Lighting Technician",
            "company": "Stage Co",
            "location": "London",
            "type": "contract",
            "rate": "£250/day",
            "description": "Rig and focus a festival stage.",
            "skills": ["lighting", "rigging"],
        }
        payload.update(overrides)
        response = self.client.post("/api/jobs", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    def counts(self, headers: dict[str, str]) -> dict[str, int]:
        response = self.client.get("/api/notifications/category-counts", headers=headers)
        assert response.status_code == 200, response.text
        return response.json()

    def unread(self, headers: dict[str, str]) -> int:
        response = self.client.get("/api/notifications/unread-count", headers=headers)
        assert response.status_code == 200, response.text
        return response.json()["count"]

    def notifications(self, headers: dict[str, str]) -> list[dict]:
        response = self.client.get("/api/notifications", headers=headers)
        assert response.status_code == 200, response.text
        return response.json()


@pytest.fixture()
def api(client: TestClient) -> Api:
    return Api(client)
