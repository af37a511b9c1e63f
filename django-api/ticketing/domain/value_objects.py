"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation


@dataclass(frozen=True)
class EventId:
    """Sequential identifier for an Event. The first event gets 1."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("EventId must be a positive integer")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except InvalidOperation as exc:
                raise ValueError("Money amount must be numeric") from exc
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def times(self, quantity: int) -> "Money":
        return Money(self.amount * quantity)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class HoldingKey:
    """Composite key of the entitlement ledger.

    Category names compare by exact, case-sensitive equality.
    """

    holder: str
    event_id: EventId
    category_name: str
