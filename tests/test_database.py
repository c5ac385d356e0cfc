"""Process-wide database dependency."""

import threading
import time

import pytest

import app.config as cfg
from app.services import database
from app.services.database import get_database, reset_database


@pytest.fixture
def fresh_dependency(tmp_path, monkeypatch):
    monkeypatch.setattr(cfg, "DB_PATH", tmp_path / "shared.db")
    reset_database()
    yield
    reset_database()


@pytest.mark.unit
def test_cold_start_opens_one_database(fresh_dependency, monkeypatch):
    opened = []

    class SlowDatabase(database.ResumeDatabase):
        def __init__(self, *args, **kwargs):
            opened.append(self)
            time.sleep(0.05)
            super().__init__(*args, **kwargs)

    monkeypatch.setattr(database, "ResumeDatabase", SlowDatabase)
    barrier = threading.Barrier(8)
    results = []
    errors = []

    def worker():
        barrier.wait()
        try:
            results.append(get_database())
        except Exception as e:  # surfaced by the assertion below
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(opened) == 1
    assert all(db is results[0] for db in results)
    assert results[0].query_one("SELECT COUNT(*) AS n FROM templates")["n"] == 8


@pytest.mark.unit
def test_reset_reopens_at_configured_path(fresh_dependency, tmp_path, monkeypatch):
    first = get_database()
    reset_database()
    monkeypatch.setattr(cfg, "DB_PATH", tmp_path / "other.db")

    second = get_database()

    assert second is not first
    assert (tmp_path / "other.db").exists()
