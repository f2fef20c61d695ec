import logging

import pytest
from httpx import ASGITransport, AsyncClient

from app.application import create_app
from app.db import DbManager
from app.db.seed import seed_patients
from common.config import configure_structlog

configure_structlog(logging.DEBUG)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'patients.db'}"


@pytest.fixture
async def db_manager(database_url):
    manager = DbManager(database_url)
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
async def seeded(db_manager):
    """The two known records: Phillip Spec (id 1) and Sally Certify (id 2)."""
    return await seed_patients(db_manager)


@pytest.fixture
async def session(db_manager):
    async with db_manager.session() as session:
        yield session


@pytest.fixture
def app(db_manager):
    return create_app(db_manager, create_schema=True)


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


class RecordingLogger:
    """Stands in for a module's AppLogger and keeps (level, event, fields) per call."""

    def __init__(self):
        self.records = []

    def __getattr__(self, level):
        def log(msg, **kwargs):
            self.records.append((level, msg, kwargs))

        return log


@pytest.fixture
def capture_logs(monkeypatch):
    """Replace `module.logger` with a RecordingLogger and return its records."""

    def capture(module):
        recorder = RecordingLogger()
        monkeypatch.setattr(module, "logger", recorder)
        return recorder.records

    return capture
