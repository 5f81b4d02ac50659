import os
import warnings
from uuid import uuid4

import pytest

# Set environment variables BEFORE importing app modules
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["POSTGRES_DSN"] = "sqlite+aiosqlite:///file:kupipodaridai_tests?mode=memory&cache=shared&uri=true"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-32-chars-minimum!!"

warnings.filterwarnings("ignore", category=DeprecationWarning)

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.core.config import settings
from app.db.session import Base, enable_sqlite_foreign_keys, get_db
from app.main import app


def pytest_configure(config):
    warnings.filterwarnings("ignore", category=DeprecationWarning)


@pytest.fixture(scope="session", autouse=True)
def disable_rate_limiting():
    """Disable rate limiting for all tests."""
    original = settings.rate_limit_enabled
    settings.rate_limit_enabled = False
    yield
    settings.rate_limit_enabled = original


@pytest.fixture(autouse=True)
def sync_db_override(tmp_path):
    """Fresh SQLite file per test, wired in through get_db."""
    db_path = tmp_path / "test.db"
    from app.models import models as models_module
    _ = models_module
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    enable_sqlite_foreign_keys(engine)
    async_session = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)

    async def override_get_db():
        async with async_session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()
    engine.sync_engine.dispose()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_user(client):
    """Sign up and sign in a user; returns (profile json, auth headers)."""

    def _make_user(username: str | None = None, password: str = "secret-pass", **extra):
        username = username or f"user{uuid4().hex[:8]}"
        body = {
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
            **extra,
        }
        res = client.post("/signup", json=body)
        assert res.status_code == 201, res.text
        signin = client.post("/signin", json={"username": username, "password": password})
        assert signin.status_code == 200, signin.text
        return res.json(), {"Authorization": f"Bearer {signin.json()['access_token']}"}

    return _make_user


@pytest.fixture
def make_wish(client):
    """Create a wish owned by whoever the headers belong to."""

    def _make_wish(headers: dict, **overrides):
        body = {
            "name": "Наушники",
            "link": "https://shop.example.com/items/headphones",
            "image": "https://shop.example.com/images/headphones.jpg",
            "price": 5000,
            "description": "Беспроводные, с шумоподавлением",
            **overrides,
        }
        res = client.post("/wishes", json=body, headers=headers)
        assert res.status_code == 201, res.text
        return res.json()

    return _make_wish
