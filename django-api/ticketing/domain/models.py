"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in ticketing/models.py (persistence layer).

Events are immutable: selling or releasing tickets returns a new Event
that the store then persists.
"""

from dataclasses import dataclass, replace

from ticketing.domain.value_objects import Capacity, EventId, Money


@dataclass(frozen=True)
class Category:
    """A named ticket tier within an event."""

    name: str
    price: Money
    initial: Capacity
    remaining: Capacity

    def __post_init__(self) -> None:
        if self.remaining.value > self.initial.value:
            raise ValueError("Category remaining cannot exceed its initial count")

    def cost(self, quantity: int) -> Money:
        return self.price.times(quantity)

    def adjusted(self, delta: int) -> "Category":
        return replace(self, remaining=Capacity(self.remaining.value + delta))


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event and its remaining supply."""

    id: EventId
    authority: str
    name: str
    date: int
    total_tickets: int
    remaining: int
    categories: tuple[Category, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.remaining <= self.total_tickets:
            raise ValueError("Event remaining must be within [0, total_tickets]")
        if sum(c.remaining.value for c in self.categories) != self.remaining:
            raise ValueError("Category remaining counts must add up to event remaining")
        if len(set(self.category_names)) != len(self.categories):
            raise ValueError("Category names must be unique within an event")

    @property
    def category_names(self) -> list[str]:
        return [c.name for c in self.categories]

    @property
    def category_prices(self) -> list[Money]:
        return [c.price for c in self.categories]

    @property
    def category_remaining(self) -> list[int]:
        return [c.remaining.value for c in self.categories]

    def find_category(self, name: str) -> tuple[int, Category] | None:
        """Return the category whose name matches exactly, with its position."""
        for index, category in enumerate(self.categories):
            if category.name == name:
                return index, category
        return None

    def take(self, index: int, quantity: int) -> "Event":
        """Return a copy with ``quantity`` tickets sold from the category at ``index``.

        Raises:
            ValueError: If the category would go below zero.
        """
        return self._adjust(index, -quantity)

    def release(self, index: int, quantity: int) -> "Event":
        """Return a copy with ``quantity`` tickets returned to the category at ``index``.

        Raises:
            ValueError: If the category would exceed its initial count.
        """
        return self._adjust(index, quantity)

    def _adjust(self, index: int, delta: int) -> "Event":
        categories = list(self.categories)
        categories[index] = categories[index].adjusted(delta)
        return replace(
            self,
            remaining=self.remaining + delta,
            categories=tuple(categories),
        )
