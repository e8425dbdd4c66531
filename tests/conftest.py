from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from flock_records_api.app.core.config import settings
from flock_records_api.app.core.storage import DocumentStore
from flock_records_api.app.main import app
from flock_records_api.app.services.record_service import RecordService


class FakeClock:
    """Returns ``now`` until moved forward with ``advance``."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def data_path(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "flock_data.json"
    monkeypatch.setattr(settings, "data_file", str(path))
    return path


@pytest.fixture
def store(data_path: Path) -> DocumentStore:
    return DocumentStore(data_path)


@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    fake = FakeClock(datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc))
    monkeypatch.setattr(RecordService, "clock", fake)
    return fake


@pytest.fixture
def client(data_path: Path, clock: FakeClock) -> TestClient:
    return TestClient(app)
