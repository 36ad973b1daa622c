"""FastAPI dependency injection: DB session, current subject id, and GatehouseFacade."""
from __future__ import annotations

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.application.identity.subscribers import build_event_publisher
from gatehouse.config import get_settings
from gatehouse.domain.events import DomainEventPublisher
from gatehouse.infrastructure.auth.jwt import TokenIssuer
from gatehouse.infrastructure.auth.password import CredentialHasher
from gatehouse.infrastructure.database.connection import get_db_session, get_session_factory
from gatehouse.infrastructure.database.repositories.identity import AccountRepository
from gatehouse.infrastructure.database.unit_of_work import UnitOfWork
from gatehouse.infrastructure.health import DatabaseHealthCheck
from gatehouse.interfaces.facade import GatehouseFacade

# ── Process-wide collaborators (built once, read-only afterwards) ─────────────

@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(get_settings().jwt_settings())


@lru_cache
def get_hasher() -> CredentialHasher:
    return CredentialHasher(get_settings().hasher_settings())


@lru_cache
def get_event_publisher() -> DomainEventPublisher:
    return build_event_publisher()


# ── Session ───────────────────────────────────────────────────────────────────

_bearer = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with get_db_session() as session:
        yield session


def _build_facade(session: AsyncSession) -> GatehouseFacade:
    return GatehouseFacade(
        account_repo=AccountRepository(session),
        unit_of_work=UnitOfWork(session),
        hasher=get_hasher(),
        token_issuer=get_token_issuer(),
        publisher=get_event_publisher(),
    )


async def get_facade(session: Annotated[AsyncSession, Depends(get_db)]) -> GatehouseFacade:
    return _build_facade(session)


def get_health_check() -> DatabaseHealthCheck:
    return DatabaseHealthCheck(get_session_factory())


# ── Auth ──────────────────────────────────────────────────────────────────────

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token.",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_subject_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> int:
    if credentials is None:
        raise _credentials_exception()
    try:
        return token_issuer.subject_id(credentials.credentials)
    except JWTError:
        raise _credentials_exception()


# Type aliases for cleaner signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
Facade = Annotated[GatehouseFacade, Depends(get_facade)]
CurrentSubjectId = Annotated[int, Depends(get_current_subject_id)]
HealthCheck = Annotated[DatabaseHealthCheck, Depends(get_health_check)]
