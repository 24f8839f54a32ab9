import os
import tempfile

# Establish isolated data directory BEFORE importing app modules: importing
# app.main builds the module-level app with the cached default settings.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="expense_test_"))

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.dal import Database
from app.db.migrate import apply_migrations
from app.main import create_app


@pytest.fixture
def settings(tmp_path):
    s = Settings(data_dir=tmp_path, db_filename="test.sqlite3")
    s.init_post_load()
    return s


@pytest.fixture
def db(settings):
    apply_migrations(settings.db_path)
    return Database(settings.db_path)


@pytest.fixture
def client(settings, db):
    app = create_app(settings_override=settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def add_expense(client):
    """POST an expense through the API and return the created JSON body."""

    def _add(amount, category, date=None, description=None):
        payload = {"amount": amount, "category": category}
        if date is not None:
            payload["date"] = date
        if description is not None:
            payload["description"] = description
        resp = client.post("/api/expenses", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _add
