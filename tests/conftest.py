"""Shared fixtures: a throwaway sqlite database and an authenticated admin client."""

import asyncio
import io
import os
import tempfile
from pathlib import Path

import pytest

_TMP_DIR = Path(tempfile.mkdtemp(prefix="psisite-tests-"))

# Must be set before psisite.settings is imported
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'test.db'}"
os.environ["UPLOAD_DIR"] = str(_TMP_DIR / "uploads")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DEBUG"] = "false"

from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image  # noqa: E402

from psisite import models  # noqa: E402,F401
from psisite.db import Base, engine, get_db_context  # noqa: E402
from psisite.main import app  # noqa: E402
from psisite.models import AdminUser  # noqa: E402
from psisite.services import config_store  # noqa: E402
from psisite.services.config_cache import config_cache  # noqa: E402
from psisite.services.password import hash_password  # noqa: E402
from psisite.services.rate_limiter import auth_rate_limiter  # noqa: E402

ADMIN_USERNAME = "adrielle"
ADMIN_PASSWORD = "senha-muito-segura"


async def _reset_database() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


def run_db(operation):
    """Run ``operation(db)`` in its own committed session and return its result."""

    async def _run():
        async with get_db_context() as db:
            return await operation(db)

    return asyncio.run(_run())


def put_config(key: str, value) -> None:
    """Write a config entry behind the app's back and drop the cache."""
    run_db(lambda db: config_store.upsert_entry(db, key, value))
    config_cache.invalidate()


def get_config(key: str):
    async def _get(db):
        entry = await config_store.get_entry(db, key)
        return entry.value if entry else None

    return run_db(_get)


def image_bytes(size=(64, 64), color=(236, 72, 153), fmt="PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def client():
    """App client on a freshly created database."""
    asyncio.run(_reset_database())
    config_cache.invalidate()
    auth_rate_limiter.reset()

    with TestClient(app, base_url="https://testserver") as test_client:
        yield test_client

    config_cache.invalidate()


@pytest.fixture
def admin_client(client):
    """Client logged in as the site admin."""

    async def _create_admin(db):
        db.add(AdminUser(username=ADMIN_USERNAME, hashed_password=hash_password(ADMIN_PASSWORD)))

    run_db(_create_admin)
    response = client.post(
        "/admin/login",
        data={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 303
    return client
