"""In-process implementation of the TicketStore.

A single re-entrant lock serializes operations. Maps are snapshotted when
the outermost atomic block opens and restored if it exits with an error.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from ticketing.domain import Category, Event, EventId, HoldingKey
from ticketing.stores.interfaces import TicketStore


class InMemoryTicketStore(TicketStore):
    """Dictionary-backed store for local runs and tests."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._depth = 0
        self._next_id = 1
        self._events: dict[EventId, Event] = {}
        self._holdings: dict[HoldingKey, int] = {}

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            snapshot = (self._next_id, dict(self._events), dict(self._holdings))
            self._depth = 1
            try:
                yield
            except BaseException:
                self._next_id, self._events, self._holdings = snapshot
                raise
            finally:
                self._depth = 0

    def add_event(
        self,
        authority: str,
        name: str,
        date: int,
        total_tickets: int,
        categories: tuple[Category, ...],
    ) -> Event:
        with self.atomic():
            event = Event(
                id=EventId(self._next_id),
                authority=authority,
                name=name,
                date=date,
                total_tickets=total_tickets,
                remaining=total_tickets,
                categories=categories,
            )
            self._events[event.id] = event
            self._next_id += 1
            return event

    def get_event(self, event_id: EventId, for_update: bool = False) -> Event | None:
        return self._events.get(event_id)

    def list_events(self) -> list[Event]:
        return sorted(self._events.values(), key=lambda e: e.id.value)

    def save_remaining(self, event: Event) -> None:
        with self.atomic():
            if event.id not in self._events:
                raise KeyError(event.id)
            self._events[event.id] = event

    def get_holding(self, key: HoldingKey) -> int:
        return self._holdings.get(key, 0)

    def set_holding(self, key: HoldingKey, quantity: int) -> None:
        if quantity < 0:
            raise ValueError("Holding cannot be negative")
        with self.atomic():
            self._holdings[key] = quantity

    def list_holdings(self, holder: str, event_id: EventId) -> dict[str, int]:
        return {
            key.category_name: quantity
            for key, quantity in self._holdings.items()
            if key.holder == holder and key.event_id == event_id and quantity
        }
