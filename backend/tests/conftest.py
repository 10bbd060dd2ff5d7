# backend/tests/conftest.py
import os
import sys
import pytest
from fastapi.testclient import TestClient

# Make /Project/backend importable as top-level
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from config import Settings  # noqa: E402
from main import app  # noqa: E402

OSRM_TEST_URL = "https://router.project-osrm.org"


@pytest.fixture(autouse=True)
def no_provider_keys(monkeypatch):
    """Tests never pick up real credentials from the environment or backend/.env."""
    monkeypatch.setattr(Settings, "GOOGLE_API_KEY", "")
    monkeypatch.setattr(Settings, "ORS_API_KEY", "")
    monkeypatch.setattr(Settings, "OSRM_BASE_URL", OSRM_TEST_URL)


@pytest.fixture(scope="session")
def client():
    # Use context manager so FastAPI lifespan (startup/shutdown) runs
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sf():
    return {"lat": 37.7749, "lng": -122.4194}


@pytest.fixture
def la():
    return {"lat": 34.0522, "lng": -118.2437}
