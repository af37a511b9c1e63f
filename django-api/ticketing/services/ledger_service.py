"""Entitlement ledger service: buy, transfer and refund tickets.

Every operation runs inside ``store.atomic()`` and reads the clock once.
New state is computed in memory first. The settlement call is the last
step before the store is written, so a failed settlement leaves nothing
changed and a successful one is always followed by the ledger updates.
"""

from collections.abc import Callable
from decimal import Decimal

import structlog

from ticketing.domain import Event, EventId, HoldingKey, Money
from ticketing.domain.errors import (
    CategoryNotFoundError,
    CategorySoldOutError,
    DomainError,
    EventNotFoundError,
    InsufficientHoldingError,
    InvalidQuantityError,
    PaymentMismatchError,
    SettlementFailureError,
)
from ticketing.domain.rules import check_buy, check_refund, check_transfer
from ticketing.services.clock import Clock
from ticketing.settlement.interfaces import SettlementError, SettlementGateway
from ticketing.stores.interfaces import TicketStore

logger = structlog.get_logger(__name__)


class TicketLedger:
    """Service for ticket ownership changes."""

    def __init__(
        self,
        store: TicketStore,
        settlement: SettlementGateway,
        authority: str,
        clock: Clock,
    ) -> None:
        self._store = store
        self._settlement = settlement
        self._authority = authority
        self._clock = clock

    def buy(
        self,
        caller: str,
        event_id: EventId,
        category_name: str,
        quantity: int,
        paid_amount: Decimal,
    ) -> int:
        """Buy tickets with exactly ``price * quantity`` attached.

        Returns the caller's new holding for the category.

        Raises:
            UnauthorizedError, WindowClosedError, EventNotFoundError,
            CategoryNotFoundError, CategorySoldOutError, PaymentMismatchError,
            SettlementFailureError, InvalidQuantityError
        """
        log = logger.bind(op="buy", caller=caller, event_id=event_id.value, category=category_name, quantity=quantity)
        try:
            with self._store.atomic():
                _check_quantity(quantity)
                event = self._load(event_id, for_update=True)
                check_buy(caller, self._authority, self._clock(), event)

                index = _select_purchasable(event, category_name, quantity, paid_amount)
                paid = event.categories[index].cost(quantity)
                updated = event.take(index, quantity)
                key = HoldingKey(caller, event_id, category_name)
                holding = self._store.get_holding(key) + quantity

                self._settle(self._settlement.collect, caller, paid)
                self._store.save_remaining(updated)
                self._store.set_holding(key, holding)
        except DomainError as exc:
            log.warning("tickets_buy_rejected", code=exc.code.value)
            raise

        log.info("tickets_bought", paid=str(paid), holding=holding)
        return holding

    def transfer(
        self,
        caller: str,
        event_id: EventId,
        category_name: str,
        quantity: int,
        recipient: str,
    ) -> int:
        """Move tickets the caller owns to ``recipient``.

        The recipient is not checked: transfers to oneself or to the authority
        go through. Returns the caller's new holding.

        Raises:
            UnauthorizedError, WindowClosedError, EventNotFoundError,
            InsufficientHoldingError, InvalidQuantityError
        """
        log = logger.bind(
            op="transfer",
            caller=caller,
            event_id=event_id.value,
            category=category_name,
            quantity=quantity,
            recipient=recipient,
        )
        try:
            with self._store.atomic():
                _check_quantity(quantity)
                event = self._load(event_id, for_update=True)
                check_transfer(caller, self._authority, self._clock(), event)

                sender_key = HoldingKey(caller, event_id, category_name)
                held = self._store.get_holding(sender_key)
                if held < quantity:
                    raise InsufficientHoldingError(held, quantity)

                recipient_key = HoldingKey(recipient, event_id, category_name)
                self._store.set_holding(recipient_key, self._store.get_holding(recipient_key) + quantity)
                holding = self._store.get_holding(sender_key) - quantity
                self._store.set_holding(sender_key, holding)
        except DomainError as exc:
            log.warning("tickets_transfer_rejected", code=exc.code.value)
            raise

        log.info("tickets_transferred", holding=holding)
        return holding

    def refund(
        self,
        caller: str,
        event_id: EventId,
        category_name: str,
        quantity: int,
    ) -> Money:
        """Return tickets for ``price * quantity`` paid back to the caller.

        Returns the refunded amount.

        Raises:
            UnauthorizedError, RefundWindowClosedError, EventNotFoundError,
            InsufficientHoldingError, CategoryNotFoundError,
            SettlementFailureError, InvalidQuantityError
        """
        log = logger.bind(op="refund", caller=caller, event_id=event_id.value, category=category_name, quantity=quantity)
        try:
            with self._store.atomic():
                _check_quantity(quantity)
                event = self._load(event_id, for_update=True)
                check_refund(caller, self._authority, self._clock(), event)

                key = HoldingKey(caller, event_id, category_name)
                held = self._store.get_holding(key)
                if held < quantity:
                    raise InsufficientHoldingError(held, quantity)

                found = event.find_category(category_name)
                if found is None:
                    raise CategoryNotFoundError(category_name)
                index, category = found
                amount = category.cost(quantity)
                updated = event.release(index, quantity)

                self._settle(self._settlement.payout, caller, amount)
                self._store.save_remaining(updated)
                self._store.set_holding(key, held - quantity)
        except DomainError as exc:
            log.warning("tickets_refund_rejected", code=exc.code.value)
            raise

        log.info("tickets_refunded", amount=str(amount), holding=held - quantity)
        return amount

    def holding(self, caller: str, event_id: EventId, category_name: str) -> int:
        """Return how many tickets the caller holds in one category."""
        self._load(event_id)
        return self._store.get_holding(HoldingKey(caller, event_id, category_name))

    def holdings(self, caller: str, event_id: EventId) -> dict[str, int]:
        self._load(event_id)
        return self._store.list_holdings(caller, event_id)

    def _load(self, event_id: EventId, for_update: bool = False) -> Event:
        event = self._store.get_event(event_id, for_update=for_update)
        if event is None:
            raise EventNotFoundError(event_id.value)
        return event

    def _settle(self, transfer: Callable[[str, Money], None], party: str, amount: Money) -> None:
        try:
            transfer(party, amount)
        except SettlementError as exc:
            logger.error("settlement_failed", party=party, amount=str(amount), error=str(exc))
            raise SettlementFailureError() from exc


def _check_quantity(quantity: int) -> None:
    if quantity <= 0:
        raise InvalidQuantityError(quantity)


def _select_purchasable(event: Event, category_name: str, quantity: int, paid: Decimal) -> int:
    found = event.find_category(category_name)
    if found is None:
        raise CategoryNotFoundError(category_name)

    index, category = found
    if category.remaining.value < quantity:
        raise CategorySoldOutError(category_name, category.remaining.value)
    if category.cost(quantity).amount != paid:
        raise PaymentMismatchError(str(category.cost(quantity)), str(paid))
    return index
