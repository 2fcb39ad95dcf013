"""Test fixtures for the URL shortener application."""

import os

# Settings are read at import time, so the environment is prepared first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BASE_URL"] = ""
os.environ["STATIC_DIR"] = ""
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["DEBUG"] = "false"

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.base import get_engine, get_session_factory, init_models
from app.db.session import SessionManager
from app.main import app as main_app
from app.repositories.mapping_repository import MappingRepository


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test."""
    engine = get_engine(TEST_SQLALCHEMY_DATABASE_URL)
    await init_models(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_manager(test_engine) -> SessionManager:
    """Session manager bound to the test engine."""
    return SessionManager(get_session_factory(test_engine))


@pytest.fixture
def mapping_repository(session_manager) -> MappingRepository:
    """Mapping store backed by the test database."""
    return MappingRepository(session_manager)


@pytest.fixture
def test_app(test_engine, mapping_repository) -> FastAPI:
    """FastAPI app wired to the test database instead of the startup-created one."""
    app = main_app
    app.state.engine = test_engine
    app.state.mapping_repository = mapping_repository

    yield app

    app.dependency_overrides.clear()
    del app.state.engine
    del app.state.mapping_repository


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client calling the app in-process."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client


@pytest_asyncio.fixture
async def file_mapping_repository(tmp_path) -> AsyncGenerator[MappingRepository, None]:
    """Mapping store on a SQLite file, with one connection per session."""
    engine = get_engine(f"sqlite+aiosqlite:///{tmp_path / 'urls.db'}")
    await init_models(engine)

    yield MappingRepository(SessionManager(get_session_factory(engine)))

    await engine.dispose()
