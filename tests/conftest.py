import os

# Settings are chosen at import time; pick the test profile before anything imports config
os.environ.setdefault("MODE", "test")

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import store as project_store
from store import DomainStore
from core.security import hash_credentials
from core.session_storage import MemoryStorage
from mock_data import CREDENTIALS, build_seed
from records.base import generate_id
from records.location import Location
from records.report import Report, ReportStatus
from records.user import User, UserRole

ADMIN_CREDENTIALS = {"email": "wh135@whies.com", "password": "sembarangsaja"}
TECHNICIAN_CREDENTIALS = {"email": "hendra@whies.com", "password": "whies2025"}


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session")
def credential_hashes():
    """Hash the seeded passwords once; bcrypt is slow on purpose."""
    return hash_credentials(CREDENTIALS)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def seed():
    return build_seed()


@pytest.fixture
def store(seed, storage, credential_hashes):
    """A fresh zero-latency store seeded with the mock data."""
    return DomainStore.from_seed(seed, storage=storage, credential_hashes=credential_hashes)


@pytest.fixture
def user_factory():
    def make(role: UserRole = UserRole.TECHNICIAN, **overrides) -> User:
        now = datetime.now(timezone.utc)
        data = dict(
            id=generate_id(),
            email=f"{role.value}@example.com",
            name=role.value,
            full_name=f"Test {role.value.title()}",
            badge_number="X001",
            role=role,
            created_at=now,
            updated_at=now,
        )
        data.update(overrides)
        return User(**data)
    return make


@pytest.fixture
def location_factory():
    def make(name: str = "Test Site", **overrides) -> Location:
        now = datetime.now(timezone.utc)
        data = dict(id=generate_id(), name=name, description=None, created_at=now, updated_at=now)
        data.update(overrides)
        return Location(**data)
    return make


@pytest.fixture
def report_factory():
    counter = {"n": 0}

    def make(**overrides) -> Report:
        counter["n"] += 1
        n = counter["n"]
        now = datetime.now(timezone.utc)
        data = dict(
            id=generate_id(),
            technician_id="tech-x",
            technician_name="Tech X",
            badge_number="T900",
            unit_id=f"UNIT-{n:03d}",
            location_id="loc-1",
            location_name="Site One",
            device_id=f"DEV-{n:03d}",
            card_number=f"CARD-{n:03d}",
            status=ReportStatus.PENDING,
            date=now,
            description=f"Check {n}",
            notes=None,
            images=None,
            created_at=now,
            updated_at=now,
        )
        data.update(overrides)
        return Report(**data)
    return make


@pytest.fixture
async def async_client(store):
    # Serve every request from this test's store
    fastapi_app.dependency_overrides[project_store.get_store] = lambda: store

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(async_client, store):
    """Client whose store session is the seeded admin."""
    await store.login(**ADMIN_CREDENTIALS)
    return async_client


@pytest.fixture
async def technician_client(async_client, store):
    """Client whose store session is the seeded technician."""
    await store.login(**TECHNICIAN_CREDENTIALS)
    return async_client
