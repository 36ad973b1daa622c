"""Domain entities for the Identity bounded context."""
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .value_objects import Email, PasswordHash, PasswordSalt, Username

UNSAVED_ID = 0


@dataclass
class Account:
    username: Username
    email: Email
    password_hash: PasswordHash
    password_salt: PasswordSalt
    id: int = UNSAVED_ID  # assigned by the unit of work on commit
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_persisted(self) -> bool:
        return self.id != UNSAVED_ID


@dataclass(frozen=True)
class AccountSummary:
    """Public projection of an account; carries no credentials."""
    id: int
    username: str
    email: str

    @classmethod
    def of(cls, account: Account) -> "AccountSummary":
        return cls(id=account.id, username=str(account.username), email=str(account.email))
