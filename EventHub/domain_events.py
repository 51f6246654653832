"""
In-process domain events for vendor profile lifecycle changes.

Publishers hand the event and their SQLAlchemy session to the bus; every
subscriber runs synchronously inside the same unit of work, so the caller's
commit covers both the vendor write and whatever the subscribers change.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Type

from loguru import logger

from EventHub.utils_time import get_utc_time


@dataclass(frozen=True)
class DomainEvent:
    occurred_at: datetime = field(default_factory=get_utc_time, kw_only=True)


@dataclass(frozen=True)
class VendorProfileCreated(DomainEvent):
    vendor_id: str
    user_id: str


@dataclass(frozen=True)
class VendorProfileDeleted(DomainEvent):
    vendor_id: str
    user_id: str


Handler = Callable[[DomainEvent, object], None]


class EventBus:
    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent], handler: Handler):
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent, db) -> None:
        handlers = self._handlers.get(type(event), [])
        logger.debug(f"Publishing {type(event).__name__} to {len(handlers)} handler(s)")
        for handler in handlers:
            handler(event, db)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[Handler]:
        return list(self._handlers.get(event_type, []))


event_bus = EventBus()
