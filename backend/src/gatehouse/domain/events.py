"""In-process domain event publisher.

Subscribers are registered explicitly against an event-type tag at startup.
Publishing runs them in registration order; a failing subscriber is logged and
skipped so the remaining subscribers still run and nothing unwinds into the
publishing use case.
"""
from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import ClassVar, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainEvent:
    event_type: ClassVar[str] = "domain_event"
    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), kw_only=True
    )


Subscriber = Callable[[DomainEvent], Union[None, Awaitable[None]]]


class DomainEventPublisher:
    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscriber]] = defaultdict(list)

    def subscribe(self, event_type: str, subscriber: Subscriber) -> None:
        self._subscribers[event_type].append(subscriber)

    def subscribers_for(self, event_type: str) -> list[Subscriber]:
        return list(self._subscribers.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        subscribers = self.subscribers_for(event.event_type)
        logger.info(
            "Publishing domain event %s to %d subscriber(s)", event.event_type, len(subscribers)
        )
        for subscriber in subscribers:
            try:
                outcome = subscriber(event)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception:
                logger.exception("Error handling domain event %s", event.event_type)
