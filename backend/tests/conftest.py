"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A fresh in-memory SQLite database per test (aiosqlite)
- Cheap hasher and fixed-key token issuer
- A facade wired the way the API wires it
"""

import os

# Settings are read from the environment at first use
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from gatehouse.config import HasherSettings, JwtSettings
from gatehouse.domain.events import DomainEventPublisher
from gatehouse.infrastructure.auth.jwt import TokenIssuer
from gatehouse.infrastructure.auth.password import CredentialHasher
from gatehouse.infrastructure.database.connection import Base
from gatehouse.infrastructure.database.models import AccountModel  # noqa: F401  (registers table)
from gatehouse.infrastructure.database.repositories.identity import AccountRepository
from gatehouse.infrastructure.database.unit_of_work import UnitOfWork
from gatehouse.interfaces.facade import GatehouseFacade

TEST_JWT_SETTINGS = JwtSettings(
    secret_key="test-secret-key-that-is-long-enough-for-hs256",
    issuer="test-issuer",
    audience="test-audience",
)

# Minimum Argon2 cost keeps the suite fast; production parameters come from Settings
TEST_HASHER_SETTINGS = HasherSettings(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def hasher() -> CredentialHasher:
    return CredentialHasher(TEST_HASHER_SETTINGS)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_JWT_SETTINGS)


@pytest.fixture
def publisher() -> DomainEventPublisher:
    return DomainEventPublisher()


@pytest.fixture
def repository(session) -> AccountRepository:
    return AccountRepository(session)


@pytest.fixture
def unit_of_work(session) -> UnitOfWork:
    return UnitOfWork(session)


@pytest.fixture
def facade(repository, unit_of_work, hasher, token_issuer, publisher) -> GatehouseFacade:
    return GatehouseFacade(
        account_repo=repository,
        unit_of_work=unit_of_work,
        hasher=hasher,
        token_issuer=token_issuer,
        publisher=publisher,
    )
