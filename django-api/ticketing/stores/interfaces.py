"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from ticketing.domain import Category, Event, EventId, HoldingKey


class TicketStore(ABC):
    """Interface for the event catalog and the entitlement ledger."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Serialize one operation; changes made inside roll back on exception."""
        ...

    @abstractmethod
    def add_event(
        self,
        authority: str,
        name: str,
        date: int,
        total_tickets: int,
        categories: tuple[Category, ...],
    ) -> Event:
        """Allocate the next sequential id and store a new event."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId, for_update: bool = False) -> Event | None:
        """Return an event by ID, or None if not found.

        With ``for_update`` the event stays locked until the enclosing
        ``atomic()`` block ends.
        """
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by id ascending."""
        ...

    @abstractmethod
    def save_remaining(self, event: Event) -> None:
        """Persist the event's remaining total and per-category remaining counts."""
        ...

    @abstractmethod
    def get_holding(self, key: HoldingKey) -> int:
        """Return the quantity held, zero if never referenced."""
        ...

    @abstractmethod
    def set_holding(self, key: HoldingKey, quantity: int) -> None:
        """Store a non-negative holding quantity."""
        ...

    @abstractmethod
    def list_holdings(self, holder: str, event_id: EventId) -> dict[str, int]:
        """Return the holder's non-zero holdings for an event keyed by category."""
        ...
