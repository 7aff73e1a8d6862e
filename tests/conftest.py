"""
Shared fixtures: an app wired to a throwaway SQLite database.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from main import create_app


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'users.db'}"


@pytest.fixture
def app(db_url):
    return create_app(engine=create_async_engine(db_url))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def alice():
    return {
        "username": "alice",
        "email": "a@b.com",
        "password": "secret1",
        "confirmPassword": "secret1",
    }
