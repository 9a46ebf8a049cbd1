"""
Pytest Configuration and Shared Fixtures

This module contains shared test fixtures and configuration for all test modules.
"""

import os
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SEED_DATA"] = "false"

from library_api.db.database import Base, get_db  # noqa: E402
from library_api.main import app  # noqa: E402
from library_api.models import Author, Book  # noqa: E402,F401

TEST_DATABASE_URL = "sqlite+aiosqlite://"

HATEOAS = "application/vnd.marvin.hateoas+json"


class FakeRouteResolver:
    """Resolves every route to `http://test/<route>?<sorted path and query params>`."""

    def __init__(self):
        self.calls: list[tuple[str, dict[str, Any], dict[str, Any]]] = []

    def resolve(
        self,
        route_name: str,
        path_params: Mapping[str, Any],
        query_params: Mapping[str, Any] | None = None
    ) -> str:
        self.calls.append((route_name, dict(path_params), dict(query_params or {})))
        params = {**(query_params or {}), **path_params}
        query = urlencode(sorted((name, str(value)) for name, value in params.items()))
        return f"http://test/{route_name}" + (f"?{query}" if query else "")


@pytest.fixture()
def resolver():
    return FakeRouteResolver()


@pytest_asyncio.fixture()
async def test_db():
    """
    Create a fresh in-memory SQLite database for one test.

    StaticPool keeps the single connection alive so every session the
    application opens sees the same database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False
    )

    yield session_factory

    await engine.dispose()


@pytest_asyncio.fixture()
async def client(test_db):
    """Create test client bound to the test database"""
    async def override_get_db():
        async with test_db() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def sample_author_payload():
    """Author with two books, ready to POST"""
    return {
        "firstName": "Ursula",
        "lastName": "Le Guin",
        "dateOfBirth": "1929-10-21",
        "dateOfDeath": "2018-01-22",
        "genre": "Fantasy",
        "books": [
            {"title": "A Wizard of Earthsea", "description": "A young wizard unleashes a shadow."},
            {"title": "The Left Hand of Darkness", "description": "An envoy visits a planet of ambisexual people."},
        ]
    }


def author_payload(first_name: str, last_name: str, genre: str, born: str = "1950-01-01") -> dict:
    return {
        "firstName": first_name,
        "lastName": last_name,
        "dateOfBirth": born,
        "genre": genre,
    }


@pytest_asyncio.fixture()
async def many_authors(client):
    """
    Create 25 authors through the API.

    Names sort as "Author 01" .. "Author 25"; every fifth author writes Horror.
    """
    ids = []
    for number in range(1, 26):
        genre = "Horror" if number % 5 == 0 else "Fantasy"
        response = await client.post(
            "/api/authors",
            json=author_payload("Author", f"{number:02d}", genre, born=f"19{number + 40}-06-15")
        )
        assert response.status_code == 201, response.text
        ids.append(response.json()["id"])
    return ids


@pytest_asyncio.fixture()
async def sample_author(client, sample_author_payload):
    """Create the sample author (with books); returns the response body"""
    response = await client.post("/api/authors", json=sample_author_payload)
    assert response.status_code == 201, response.text
    return response.json()
