"""Django ORM implementation of the TicketStore.

Each operation runs in ``transaction.atomic()``; the event row is locked with
``select_for_update()`` so concurrent buyers of the same event serialize.
"""

from contextlib import AbstractContextManager

from django.db import transaction

from ticketing import models
from ticketing.domain import Capacity, Category, Event, EventId, HoldingKey, Money
from ticketing.stores.interfaces import TicketStore


def _to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(row.pk),
        authority=row.authority,
        name=row.name,
        date=row.date,
        total_tickets=row.total_tickets,
        remaining=row.remaining,
        categories=tuple(
            Category(
                name=c.name,
                price=Money(c.price),
                initial=Capacity(c.initial),
                remaining=Capacity(c.remaining),
            )
            for c in row.categories.all()
        ),
    )


class DjangoTicketStore(TicketStore):
    """Database-backed ticket store using Django ORM."""

    def atomic(self) -> AbstractContextManager[None]:
        return transaction.atomic()

    @transaction.atomic
    def add_event(
        self,
        authority: str,
        name: str,
        date: int,
        total_tickets: int,
        categories: tuple[Category, ...],
    ) -> Event:
        row = models.Event.objects.create(
            authority=authority,
            name=name,
            date=date,
            total_tickets=total_tickets,
            remaining=total_tickets,
        )
        models.TicketCategory.objects.bulk_create(
            models.TicketCategory(
                event=row,
                position=position,
                name=c.name,
                price=c.price.amount,
                initial=c.initial.value,
                remaining=c.remaining.value,
            )
            for position, c in enumerate(categories)
        )
        return _to_domain(row)

    def get_event(self, event_id: EventId, for_update: bool = False) -> Event | None:
        queryset = models.Event.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        row = queryset.filter(pk=event_id.value).first()
        if row is None:
            return None
        return _to_domain(row)

    def list_events(self) -> list[Event]:
        rows = models.Event.objects.prefetch_related("categories").order_by("id")
        return [_to_domain(row) for row in rows]

    @transaction.atomic
    def save_remaining(self, event: Event) -> None:
        updated = models.Event.objects.filter(pk=event.id.value).update(remaining=event.remaining)
        if not updated:
            raise models.Event.DoesNotExist(f"Event {event.id} does not exist")
        for position, category in enumerate(event.categories):
            models.TicketCategory.objects.filter(
                event_id=event.id.value, position=position
            ).update(remaining=category.remaining.value)

    def get_holding(self, key: HoldingKey) -> int:
        quantity = (
            models.Holding.objects.filter(
                holder=key.holder,
                event_id=key.event_id.value,
                category_name=key.category_name,
            )
            .values_list("quantity", flat=True)
            .first()
        )
        return quantity or 0

    def set_holding(self, key: HoldingKey, quantity: int) -> None:
        if quantity < 0:
            raise ValueError("Holding cannot be negative")
        models.Holding.objects.update_or_create(
            holder=key.holder,
            event_id=key.event_id.value,
            category_name=key.category_name,
            defaults={"quantity": quantity},
        )

    def list_holdings(self, holder: str, event_id: EventId) -> dict[str, int]:
        rows = models.Holding.objects.filter(
            holder=holder, event_id=event_id.value, quantity__gt=0
        ).order_by("category_name")
        return {row.category_name: row.quantity for row in rows}
