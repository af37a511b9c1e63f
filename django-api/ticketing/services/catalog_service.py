"""Event catalog service.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from collections.abc import Sequence
from decimal import Decimal

import structlog

from ticketing.domain import Capacity, Category, Event, EventId, Money
from ticketing.domain.errors import DomainError, EventNotFoundError
from ticketing.domain.rules import check_create_event
from ticketing.services.clock import Clock
from ticketing.stores.interfaces import TicketStore

logger = structlog.get_logger(__name__)


class EventCatalog:
    """Service for event definition and availability views."""

    def __init__(self, store: TicketStore, authority: str, clock: Clock) -> None:
        self._store = store
        self._authority = authority
        self._clock = clock

    @property
    def authority(self) -> str:
        return self._authority

    def create_event(
        self,
        caller: str,
        name: str,
        date: int,
        total_tickets: int,
        category_names: Sequence[str],
        category_prices: Sequence[Decimal],
        category_counts: Sequence[int],
    ) -> Event:
        """Define a new event. Only the authority may call this.

        Raises:
            UnauthorizedError: If the caller is not the authority.
            InvalidEventDefinitionError: If the definition is malformed.
        """
        try:
            check_create_event(
                caller,
                self._authority,
                self._clock(),
                name,
                date,
                total_tickets,
                category_names,
                category_prices,
                category_counts,
            )
        except DomainError as exc:
            logger.warning("event_create_rejected", caller=caller, code=exc.code.value, message=exc.message)
            raise

        categories = tuple(
            Category(name=n, price=Money(p), initial=Capacity(c), remaining=Capacity(c))
            for n, p, c in zip(category_names, category_prices, category_counts)
        )
        event = self._store.add_event(
            authority=self._authority,
            name=name,
            date=date,
            total_tickets=total_tickets,
            categories=categories,
        )
        logger.info("event_created", event_id=event.id.value, name=name, total_tickets=total_tickets)
        return event

    def get_event(self, event_id: EventId) -> Event:
        """Return an event by ID.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id.value)
        return event

    def list_events(self) -> list[Event]:
        return self._store.list_events()

    def availability(self, event_id: EventId) -> list[Category]:
        return list(self.get_event(event_id).categories)

    def describe_availability(self, event_id: EventId) -> str:
        """Return one line per category, in creation order."""
        return "\n".join(
            f"{c.name}: price {c.price}, {c.remaining.value} remaining"
            for c in self.availability(event_id)
        )
