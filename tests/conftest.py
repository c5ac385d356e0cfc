import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.client.api import ResumeApiClient
from app.main import app
from app.models.schema import CreateResumeRequest
from app.services.database import TIMESTAMP_FORMAT, ResumeDatabase, get_database
from app.services.resumes import create_resume
from app.services.templates import ensure_default_templates


def ticking_clock(start=datetime(2024, 1, 1, tzinfo=timezone.utc)):
    """Clock that advances one second per call, so updated_at ordering is deterministic."""
    counter = itertools.count()

    def now():
        return (start + timedelta(seconds=next(counter))).strftime(TIMESTAMP_FORMAT)

    return now


@pytest.fixture
def db(tmp_path):
    database = ResumeDatabase(tmp_path / "resumes.db", clock=ticking_clock())
    ensure_default_templates(database)
    yield database
    database.close()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_database] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def api(client):
    return ResumeApiClient(http=client)


@pytest.fixture
def new_resume(db):
    def make(user_id="user-1", template_id="modern-professional", title=None):
        return create_resume(db, CreateResumeRequest(user_id=user_id, template_id=template_id, title=title))

    return make
