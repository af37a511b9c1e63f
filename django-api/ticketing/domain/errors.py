"""Domain error codes for the ticketing module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_EVENT_DEFINITION = "INVALID_EVENT_DEFINITION"
    WINDOW_CLOSED = "WINDOW_CLOSED"
    REFUND_WINDOW_CLOSED = "REFUND_WINDOW_CLOSED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    CATEGORY_SOLD_OUT = "CATEGORY_SOLD_OUT"
    PAYMENT_MISMATCH = "PAYMENT_MISMATCH"
    INSUFFICIENT_HOLDING = "INSUFFICIENT_HOLDING"
    SETTLEMENT_FAILURE = "SETTLEMENT_FAILURE"
    INVALID_QUANTITY = "INVALID_QUANTITY"


class InvalidEventReason(Enum):
    """Why an event definition was rejected."""

    EMPTY_NAME = "EMPTY_NAME"
    PAST_DATE = "PAST_DATE"
    NO_TICKETS = "NO_TICKETS"
    LENGTH_MISMATCH = "LENGTH_MISMATCH"
    DUPLICATE_CATEGORY = "DUPLICATE_CATEGORY"
    NEGATIVE_VALUE = "NEGATIVE_VALUE"
    COUNT_MISMATCH = "COUNT_MISMATCH"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class UnauthorizedError(DomainError):
    """Raised when the caller's role does not permit the operation."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.UNAUTHORIZED, message=message)


_INVALID_EVENT_MESSAGES = {
    InvalidEventReason.EMPTY_NAME: "Event name must not be empty",
    InvalidEventReason.PAST_DATE: "Event date must be in the future",
    InvalidEventReason.NO_TICKETS: "Total tickets must be greater than zero",
    InvalidEventReason.LENGTH_MISMATCH: "Category names, prices and counts must have the same length",
    InvalidEventReason.DUPLICATE_CATEGORY: "Category names must be unique within the event",
    InvalidEventReason.NEGATIVE_VALUE: "Category prices and counts cannot be negative",
    InvalidEventReason.COUNT_MISMATCH: "Category counts must add up to the total tickets",
}


class InvalidEventDefinitionError(DomainError):
    """Raised when a create-event request is malformed."""

    def __init__(self, reason: InvalidEventReason) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_DEFINITION,
            message=_INVALID_EVENT_MESSAGES[reason],
        )
        self.reason = reason


class WindowClosedError(DomainError):
    """Raised when buying or transferring before the booking window opens."""

    def __init__(self, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.WINDOW_CLOSED,
            message="Booking window is not open for this event",
        )
        self.event_id = event_id


class RefundWindowClosedError(DomainError):
    """Raised when a refund is requested within 24 hours of the event."""

    def __init__(self, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.REFUND_WINDOW_CLOSED,
            message="Refunds close 24 hours before the event",
        )
        self.event_id = event_id


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class CategoryNotFoundError(DomainError):
    """Raised when the event has no category with the given name."""

    def __init__(self, category_name: str) -> None:
        super().__init__(
            code=ErrorCode.CATEGORY_NOT_FOUND,
            message="Ticket category not found for event",
        )
        self.category_name = category_name


class CategorySoldOutError(DomainError):
    """Raised when a category has fewer tickets left than requested."""

    def __init__(self, category_name: str, remaining: int) -> None:
        super().__init__(
            code=ErrorCode.CATEGORY_SOLD_OUT,
            message=f"Not enough tickets left in category ({remaining} remaining)",
        )
        self.category_name = category_name
        self.remaining = remaining


class PaymentMismatchError(DomainError):
    """Raised when the paid amount is not exactly price times quantity."""

    def __init__(self, expected: object, paid: object) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_MISMATCH,
            message=f"Payment must be exactly {expected}",
        )
        self.expected = expected
        self.paid = paid


class InsufficientHoldingError(DomainError):
    """Raised when the caller owns fewer tickets than the operation moves."""

    def __init__(self, held: int, requested: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_HOLDING,
            message=f"You hold {held} ticket(s) in this category, {requested} requested",
        )
        self.held = held
        self.requested = requested


class SettlementFailureError(DomainError):
    """Raised when the external settlement mechanism rejects a transfer of value."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SETTLEMENT_FAILURE,
            message="Payment could not be settled",
        )


class InvalidQuantityError(DomainError):
    """Raised when a ticket quantity is not a positive integer."""

    def __init__(self, quantity: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_QUANTITY,
            message="Quantity must be greater than zero",
        )
        self.quantity = quantity
