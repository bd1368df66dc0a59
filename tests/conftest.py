from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the roster package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roster.core import config as core_config  # noqa: E402
from roster.db import models  # noqa: E402
from roster.db import session as db_session  # noqa: E402
from roster.repositories.json_storage import JsonStudentStore  # noqa: E402


def make_student(sid: str, **overrides) -> dict:
    record = {
        "id": sid,
        "fullName": f"Student {sid}",
        "gender": "Male",
        "email": f"{sid.lower()}@example.com",
        "program": "CS",
        "yearLevel": "1st Year",
        "university": "State University",
    }
    record.update(overrides)
    return record


@pytest.fixture()
def sample_students() -> list[dict]:
    return [
        make_student("S1", fullName="Alan Turing", gender="Male", program="CS"),
        make_student("S2", fullName="Ada Lovelace", gender="Female", program="Math", yearLevel="2nd Year"),
        make_student("S3", fullName="Grace Hopper", gender="Female", program="CS", university="Navy College"),
    ]


@pytest.fixture()
def data_file(tmp_path) -> Path:
    return tmp_path / "data" / "students.json"


@pytest.fixture()
def json_store(data_file) -> JsonStudentStore:
    return JsonStudentStore(data_file)


@pytest.fixture()
def settings_env(monkeypatch, data_file):
    """Point settings at a temporary JSON document and reset the cache around the test."""
    monkeypatch.setenv("DATA_FILE", str(data_file))
    monkeypatch.setenv("STORAGE_BACKEND", "json")
    monkeypatch.delenv("API_PREFIX", raising=False)
    for key in ("CORS_ORIGINS", "APP_ENV", "PORT"):
        monkeypatch.delenv(key, raising=False)
    core_config.get_settings.cache_clear()
    yield core_config.get_settings()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Temporary SQLite database with full teardown so the file is never left locked."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    core_config.get_settings.cache_clear()
    db_session.reset_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    db_session.reset_caches()
    core_config.get_settings.cache_clear()
