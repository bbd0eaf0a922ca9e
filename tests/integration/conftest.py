"""Fixtures for HTTP API tests."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from panelkit import PanelKit
from panelkit.accounts.types import AccountCreate
from panelkit.api import create_app

ROOT_PASSWORD = "password"


@pytest.fixture
def seeded_panel(panel: PanelKit) -> PanelKit:
    """Panel with a creator (root) and two other accounts."""
    panel.accounts.create(
        AccountCreate(
            username="root",
            password=ROOT_PASSWORD,
            name="Root User",
            role="creator",
            system_profile='{"userId": "1"}',
        )
    )
    panel.accounts.create(
        AccountCreate(username="testuser1", password="password1", name="Test User 1", role="viewer")
    )
    panel.accounts.create(
        AccountCreate(username="testuser2", password="password2", name="Test User 2", role="viewer")
    )
    return panel


@pytest.fixture
def client(seeded_panel: PanelKit) -> Generator[TestClient, None, None]:
    with TestClient(create_app(seeded_panel)) as test_client:
        yield test_client


def _sign_in(client: TestClient, username: str, password: str) -> dict[str, str]:
    response = client.post("/api/auth/signin", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def root_headers(client: TestClient) -> dict[str, str]:
    return _sign_in(client, "root", ROOT_PASSWORD)


@pytest.fixture
def viewer_headers(client: TestClient) -> dict[str, str]:
    return _sign_in(client, "testuser1", "password1")
