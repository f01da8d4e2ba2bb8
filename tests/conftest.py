"""
Shared test fixtures: test client, fresh quotation registry.
"""

import pytest
from fastapi.testclient import TestClient

from worktops.main import app
from worktops.sessions import registry


@pytest.fixture(autouse=True)
def clear_registry():
    """Every test starts with no open quotations."""
    registry.clear()
    yield
    registry.clear()


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def quotation_id(client):
    """Open a quotation and return its id."""
    response = client.post("/api/quotations")
    assert response.status_code == 200
    return response.json()["quotation_id"]


