"""Shared fixtures: a throwaway SQLite database and a recording job queue."""

import asyncio
import os
import tempfile
from pathlib import Path

import pytest

_DB_DIR = tempfile.mkdtemp(prefix="feedhub-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}"

from fastapi.testclient import TestClient  # noqa: E402

from feedhub.db.base import Base  # noqa: E402
from feedhub.db.session import engine  # noqa: E402
from feedhub.main import app  # noqa: E402


class RecordingRedis:
    """Stands in for the arq pool: records enqueued jobs and stores keys."""

    def __init__(self):
        self.jobs = []
        self.values = {}

    async def enqueue_job(self, function, *args, **kwargs):
        self.jobs.append((function, args))

    async def ping(self):
        return True

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value, ex=None):
        self.values[key] = value


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def redis():
    return RecordingRedis()


@pytest.fixture
def client(redis):
    asyncio.run(_reset_schema())
    app.state.redis = redis
    yield TestClient(app)


@pytest.fixture
def project(client):
    res = client.post("/api/v1/projects/", json={"name": "Acme Hub"})
    assert res.status_code == 201
    return res.json()


@pytest.fixture
def make_feedback(client, project):
    def _make(title, **fields):
        res = client.post(
            f"/api/v1/projects/{project['slug']}/feedback/",
            json={"title": title, **fields},
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _make
