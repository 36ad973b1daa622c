"""Default subscribers for identity events, wired once at startup."""
import logging

from gatehouse.domain.events import DomainEventPublisher
from gatehouse.domain.identity.events import AccountRegistered

logger = logging.getLogger(__name__)


def log_account_registered(event: AccountRegistered) -> None:
    logger.info(
        "Account %s registered as %s at %s",
        event.account_id, event.username, event.occurred_at.isoformat(),
    )


def build_event_publisher() -> DomainEventPublisher:
    publisher = DomainEventPublisher()
    publisher.subscribe(AccountRegistered.event_type, log_account_registered)
    return publisher
