"""GatehouseFacade: the single entry point to the application layer.

Routers go through this facade instead of calling application functions
directly, which keeps the API layer thin.
"""
from __future__ import annotations

from gatehouse.application.common.results import Result
from gatehouse.application.identity import commands as id_commands
from gatehouse.application.identity import queries as id_queries
from gatehouse.application.identity.commands import AuthResult
from gatehouse.application.identity.queries import CurrentUserResult
from gatehouse.domain.events import DomainEventPublisher
from gatehouse.infrastructure.auth.jwt import TokenIssuer
from gatehouse.infrastructure.auth.password import CredentialHasher


class GatehouseFacade:
    """Aggregates the identity use cases. Injected via FastAPI dependency."""

    def __init__(
        self,
        account_repo,
        unit_of_work,
        hasher: CredentialHasher,
        token_issuer: TokenIssuer,
        publisher: DomainEventPublisher | None = None,
    ) -> None:
        self._account_repo = account_repo
        self._unit_of_work = unit_of_work
        self._hasher = hasher
        self._token_issuer = token_issuer
        self._publisher = publisher

    async def register(self, username: str, email: str, password: str) -> Result[AuthResult]:
        return await id_commands.register_account(
            username=username, email=email, password=password,
            account_repo=self._account_repo, unit_of_work=self._unit_of_work,
            hasher=self._hasher, token_issuer=self._token_issuer,
            publisher=self._publisher,
        )

    async def login(self, username: str, password: str) -> Result[AuthResult]:
        return await id_commands.login(
            username=username, password=password,
            account_repo=self._account_repo,
            hasher=self._hasher, token_issuer=self._token_issuer,
        )

    async def get_current_user(self, subject_id: int) -> Result[CurrentUserResult]:
        return await id_queries.get_current_user(subject_id, self._account_repo)
