import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reflectdiary import create_app
from reflectdiary.bootstrap import initialize_app
from reflectdiary.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


@pytest.fixture()
def app():
    """Per-test app on a fresh in-memory database with the default user and sections."""
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()
    db.create_all()
    initialize_app()
    try:
        yield app
    finally:
        db.session.remove()
        db.drop_all()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def auth_headers(client):
    resp = client.post("/api/auth/login", json={"password": "password"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture()
def section_ids(client, auth_headers):
    """Seeded section ids in display order."""
    resp = client.get("/api/sections", headers=auth_headers)
    return [s["id"] for s in resp.get_json()]
