from ticketing.domain.models import Category, Event
from ticketing.domain.value_objects import Capacity, EventId, HoldingKey, Money

__all__ = [
    "Event",
    "Category",
    "EventId",
    "HoldingKey",
    "Money",
    "Capacity",
]
