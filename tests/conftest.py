from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from core.settings import get_settings
from pregnancy.milestones import get_milestones


@pytest.fixture(autouse=True)
def data_path(tmp_path, monkeypatch):
    """Point every test at a fresh, not-yet-created data file."""

    path = tmp_path / "data" / "patients.json"
    monkeypatch.setenv("PATIENTS_DATA_PATH", str(path))
    monkeypatch.delenv("RECONCILE_DISPATCH", raising=False)
    monkeypatch.delenv("REMINDER_MILESTONES_FILE", raising=False)
    get_settings.cache_clear()
    get_milestones.cache_clear()
    yield path
    get_settings.cache_clear()
    get_milestones.cache_clear()


@pytest.fixture
def client() -> TestClient:
    from api.main import app

    return TestClient(app)


@pytest.fixture
def registration() -> dict:
    return {
        "name": "Amina Okello",
        "phone": "+256700000001",
        "lmp": "2024-01-01",
        "healthWorker": "Grace N.",
        "facility": "Kawempe HC IV",
    }
