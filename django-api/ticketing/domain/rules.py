"""Role and time-window checks run before any state changes.

One pure function per operation. Each raises a DomainError on the first
violated precondition and returns None otherwise. The role check always
runs before the time check.
"""

from collections.abc import Sequence
from decimal import Decimal

from ticketing.domain.errors import (
    InvalidEventDefinitionError,
    InvalidEventReason,
    RefundWindowClosedError,
    UnauthorizedError,
    WindowClosedError,
)
from ticketing.domain.models import Event

REFUND_CUTOFF_SECONDS = 24 * 60 * 60


def check_create_event(
    caller: str,
    authority: str,
    now: int,
    name: str,
    date: int,
    total_tickets: int,
    category_names: Sequence[str],
    category_prices: Sequence[Decimal],
    category_counts: Sequence[int],
) -> None:
    if caller != authority:
        raise UnauthorizedError("Only the event authority can create events")
    if not name:
        raise InvalidEventDefinitionError(InvalidEventReason.EMPTY_NAME)
    if date <= now:
        raise InvalidEventDefinitionError(InvalidEventReason.PAST_DATE)
    if total_tickets <= 0:
        raise InvalidEventDefinitionError(InvalidEventReason.NO_TICKETS)
    if not len(category_names) == len(category_prices) == len(category_counts):
        raise InvalidEventDefinitionError(InvalidEventReason.LENGTH_MISMATCH)
    if len(set(category_names)) != len(category_names):
        raise InvalidEventDefinitionError(InvalidEventReason.DUPLICATE_CATEGORY)
    if any(p < 0 for p in category_prices) or any(c < 0 for c in category_counts):
        raise InvalidEventDefinitionError(InvalidEventReason.NEGATIVE_VALUE)
    if sum(category_counts) != total_tickets:
        raise InvalidEventDefinitionError(InvalidEventReason.COUNT_MISMATCH)


def _check_customer(caller: str, authority: str) -> None:
    if caller == authority:
        raise UnauthorizedError("The event authority cannot hold tickets")


def _check_booking_window(now: int, event: Event) -> None:
    # Booking opens once the event's scheduled time has passed.
    if not event.date < now:
        raise WindowClosedError(event.id)


def check_buy(caller: str, authority: str, now: int, event: Event) -> None:
    _check_customer(caller, authority)
    _check_booking_window(now, event)


def check_transfer(caller: str, authority: str, now: int, event: Event) -> None:
    _check_customer(caller, authority)
    _check_booking_window(now, event)


def check_refund(caller: str, authority: str, now: int, event: Event) -> None:
    _check_customer(caller, authority)
    if not event.date - REFUND_CUTOFF_SECONDS > now:
        raise RefundWindowClosedError(event.id)
