import os
import tempfile
from pathlib import Path

import pytest

# Importing studyplanner.main builds the default app; keep its database out of the source tree.
os.environ.setdefault("DB_PATH", str(Path(tempfile.gettempdir()) / "studyplanner-pytest.sqlite"))

from fastapi.testclient import TestClient  # noqa: E402

from studyplanner.config import Settings  # noqa: E402
from studyplanner.main import create_app  # noqa: E402


@pytest.fixture
def app(tmp_path):
    """An application bound to a fresh SQLite file for each test."""
    application = create_app(Settings(DB_PATH=tmp_path / "planner.sqlite", FRONTEND_DIR=tmp_path / "frontend"))
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(client):
    """Create a user, overriding any default field, and return its id."""
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        payload = {
            "email": f"student{counter['n']}@example.com",
            "password_hash": "hash",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "date_of_birth": "2004-12-10",
        }
        payload.update(fields)
        r = client.post("/api/users", json=payload)
        assert r.status_code == 200, r.text
        return r.json()["id"]

    return _make
