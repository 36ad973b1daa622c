"""Registration eligibility domain service."""
from __future__ import annotations

from .entities import Account
from .repositories import IAccountRepository
from .value_objects import Email, PasswordHash, PasswordSalt, Username

USERNAME_TAKEN = "This username is already taken. Please choose a different one."
EMAIL_TAKEN = "This email is already registered. Please use a different email address."


class RegistrationEligibilityService:
    """Enforces username/email uniqueness before an account is constructed.

    The check and the later insert are separate round-trips. The storage
    unique constraints remain the source of truth; this check only produces a
    friendly message in the common case.
    """

    def __init__(self, account_repo: IAccountRepository) -> None:
        self._account_repo = account_repo

    async def can_register(self, username: Username, email: Email) -> tuple[bool, str | None]:
        if await self._account_repo.username_exists(username):
            return False, USERNAME_TAKEN
        if await self._account_repo.email_exists(email):
            return False, EMAIL_TAKEN
        return True, None

    def create_account(
        self,
        username: Username,
        email: Email,
        password_hash: PasswordHash,
        password_salt: PasswordSalt,
    ) -> Account:
        return Account(
            username=username,
            email=email,
            password_hash=password_hash,
            password_salt=password_salt,
        )
