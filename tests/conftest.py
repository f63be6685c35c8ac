"""Pytest configuration and shared fixtures."""

from typing import Any, AsyncGenerator, Dict, Generator, List
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from app.application import create_app
from app.config import Settings, get_settings
from app.utils.backend import BackendClient
from app.utils.options_cache import OptionsCache
from app.utils.submission_gate import SubmissionGate


@pytest.fixture(autouse=True)
def test_settings(monkeypatch) -> Generator[Settings, None, None]:
    """Settings for tests, isolated from the developer's .env file."""
    monkeypatch.setenv("API_TITLE", "School Forms Test")
    monkeypatch.setenv("API_VERSION", "0.1.0-test")
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("DEBUG", "True")
    monkeypatch.setenv("BACKEND_BASE_URL", "http://backend.test")
    monkeypatch.setenv("OPTIONS_CACHE_TTL", "30")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def students() -> List[Dict[str, Any]]:
    """Student records as returned by GET /api/student."""
    return [
        {"id": 1, "name": "Ada Lovelace", "email": "ada@school.edu", "age": 17},
        {"id": 2, "name": "Alan Turing", "email": "alan@school.edu", "age": 18},
        {"id": 3, "name": "Grace Hopper", "email": "grace@school.edu", "age": 16},
    ]


@pytest.fixture
def courses() -> List[Dict[str, Any]]:
    """Course records as returned by GET /api/course."""
    return [
        {"id": 10, "name": "Biology II", "classroom": "101", "capacity": 33},
        {"id": 11, "name": "Algebra", "classroom": "204", "capacity": 25},
    ]


@pytest.fixture
def backend() -> AsyncMock:
    """BackendClient double with async get_json/post_json."""
    client = AsyncMock(spec=BackendClient)
    client.get_json = AsyncMock(return_value=[])
    client.post_json = AsyncMock(return_value={})
    return client


@pytest.fixture
def options_cache() -> OptionsCache:
    """Fresh options cache per test."""
    return OptionsCache(ttl=30)


@pytest.fixture
def gate() -> SubmissionGate:
    """Fresh submission gate per test."""
    return SubmissionGate()


@pytest.fixture
def app(test_settings: Settings) -> Generator:
    """Create FastAPI application instance for testing."""
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create test client for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for FastAPI application."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as async_test_client:
        yield async_test_client
