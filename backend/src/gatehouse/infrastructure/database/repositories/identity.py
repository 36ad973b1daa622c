"""Concrete SQLAlchemy repository implementation for the identity context."""
from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.domain.identity.entities import Account
from gatehouse.domain.identity.value_objects import Email, PasswordHash, PasswordSalt, Username
from gatehouse.infrastructure.database.models.identity import AccountModel

_STAGED_KEY = "staged_accounts"


class AccountRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: int) -> Account | None:
        result = await self._session.get(AccountModel, account_id)
        return _to_account(result) if result else None

    async def get_by_username(self, username: Username) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.username == str(username))
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()
        return _to_account(row) if row else None

    async def username_exists(self, username: Username) -> bool:
        stmt = select(exists().where(AccountModel.username == str(username)))
        return bool(await self._session.scalar(stmt))

    async def email_exists(self, email: Email) -> bool:
        stmt = select(exists().where(AccountModel.email == str(email)))
        return bool(await self._session.scalar(stmt))

    async def add(self, account: Account) -> None:
        model = AccountModel(
            username=str(account.username),
            email=str(account.email),
            password_hash=str(account.password_hash),
            password_salt=str(account.password_salt),
            created_at=account.created_at,
        )
        self._session.add(model)
        staged_accounts(self._session).append((account, model))


def staged_accounts(session: AsyncSession) -> list[tuple[Account, AccountModel]]:
    """Accounts added on this session that are still waiting for an id."""
    return session.info.setdefault(_STAGED_KEY, [])


# ── Mappers ───────────────────────────────────────────────────────────────────

def _to_account(m: AccountModel) -> Account:
    return Account(
        id=m.id,
        username=Username(m.username),
        email=Email(m.email),
        password_hash=PasswordHash(m.password_hash),
        password_salt=PasswordSalt(m.password_salt),
        created_at=m.created_at,
    )
