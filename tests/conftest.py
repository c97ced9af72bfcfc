"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

The application database is pointed at a throwaway SQLite file before any
``app`` module is imported; every test that touches the database starts
from freshly created tables.
"""

import asyncio
import os
import tempfile
from collections.abc import Generator
from pathlib import Path

_TEST_DIR = Path(tempfile.mkdtemp(prefix="life_rpg_tests_"))
os.environ["LIFE_RPG_DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_TO_FILE"] = "false"
os.environ["DAILY_RESET_TIMEZONE"] = "UTC"

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.db import reset_db  # noqa: E402


@pytest.fixture
async def fresh_db() -> None:
    """Drop and recreate all tables for an async service-level test."""
    await reset_db()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """
    Create a new application instance for the test session.
    """
    from main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Fixture to get a test client on an empty database.
    The TestClient handles the application's lifespan events (startup/shutdown).
    """
    asyncio.run(reset_db())
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client: TestClient):
    """Register a user through the API and return the parsed response body."""

    def _register(username: str = "hunter", password: str = "s3cret-pass") -> dict:
        response = client.post(
            "/api/auth/register", json={"username": username, "password": password}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register
