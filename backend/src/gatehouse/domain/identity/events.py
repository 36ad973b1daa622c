"""Domain events raised by the Identity bounded context."""
from dataclasses import dataclass
from typing import ClassVar

from gatehouse.domain.events import DomainEvent


@dataclass(frozen=True)
class AccountRegistered(DomainEvent):
    event_type: ClassVar[str] = "account.registered"

    account_id: int
    username: str
    email: str
