"""
Port interfaces for identity persistence.

Adapters implement these protocols structurally. Every method is a coroutine;
cancelling the awaiting task aborts the storage round-trip.
"""
from __future__ import annotations

from typing import Protocol

from .entities import Account
from .value_objects import Email, Username


class IAccountRepository(Protocol):
    async def get_by_username(self, username: Username) -> Account | None:
        """Exact match on the stored (already normalized) username."""
        ...

    async def get_by_id(self, account_id: int) -> Account | None:
        ...

    async def username_exists(self, username: Username) -> bool:
        ...

    async def email_exists(self, email: Email) -> bool:
        ...

    async def add(self, account: Account) -> None:
        """Stage an insert. Nothing is durable until the unit of work commits."""
        ...


class IUnitOfWork(Protocol):
    async def save_changes(self) -> int:
        """
        Commit every staged write atomically.

        Returns:
            Number of rows written

        Raises:
            DuplicateAccountError: If a uniqueness constraint rejects the commit
        """
        ...
