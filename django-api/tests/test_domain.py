"""Unit tests for domain primitives and models.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from decimal import Decimal

import pytest

from ticketing.domain import Capacity, Category, Event, EventId, HoldingKey, Money


def make_category(name: str, price: int, initial: int, remaining: int | None = None) -> Category:
    return Category(
        name=name,
        price=Money(Decimal(price)),
        initial=Capacity(initial),
        remaining=Capacity(initial if remaining is None else remaining),
    )


def make_event(*categories: Category) -> Event:
    total = sum(c.initial.value for c in categories)
    return Event(
        id=EventId(1),
        authority="authority",
        name="Concert",
        date=1_900_000_000,
        total_tickets=total,
        remaining=sum(c.remaining.value for c in categories),
        categories=categories,
    )


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        assert Money(Decimal("12.50")).amount == Decimal("12.50")

    def test_money_accepts_zero(self):
        assert Money(Decimal("0")).amount == 0

    def test_money_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            Money(Decimal("-0.01"))

    def test_money_coerces_int(self):
        assert Money(50) == Money(Decimal("50.00"))

    def test_money_str_format(self):
        assert str(Money(Decimal("5"))) == "5.00"

    def test_times_multiplies_amount(self):
        assert Money(Decimal("50")).times(3) == Money(Decimal("150"))


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_positive_value(self):
        assert Capacity(3).value == 3

    def test_capacity_accepts_zero(self):
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        with pytest.raises(ValueError):
            Capacity(-1)


class TestEventId:
    """Tests for EventId value object."""

    def test_accepts_first_id(self):
        assert EventId(1).value == 1
        assert str(EventId(7)) == "7"

    def test_rejects_zero(self):
        with pytest.raises(ValueError):
            EventId(0)


class TestHoldingKey:
    def test_category_name_is_case_sensitive(self):
        assert HoldingKey("alice", EventId(1), "GA") != HoldingKey("alice", EventId(1), "ga")


class TestCategory:
    def test_remaining_cannot_exceed_initial(self):
        with pytest.raises(ValueError):
            make_category("GA", 50, 2, remaining=3)

    def test_cost(self):
        assert make_category("GA", 50, 8).cost(2) == Money(Decimal("100"))


class TestEvent:
    """Tests for Event domain model."""

    def test_parallel_views_follow_creation_order(self):
        event = make_event(make_category("VIP", 100, 2), make_category("GA", 50, 8))

        assert event.category_names == ["VIP", "GA"]
        assert event.category_prices == [Money(Decimal(100)), Money(Decimal(50))]
        assert event.category_remaining == [2, 8]

    def test_remaining_must_match_category_sum(self):
        with pytest.raises(ValueError):
            Event(
                id=EventId(1),
                authority="authority",
                name="Concert",
                date=1,
                total_tickets=10,
                remaining=9,
                categories=(make_category("GA", 50, 10),),
            )

    def test_take_decrements_category_and_total(self):
        event = make_event(make_category("VIP", 100, 2), make_category("GA", 50, 8))

        updated = event.take(1, 3)

        assert updated.remaining == 7
        assert updated.category_remaining == [2, 5]
        assert event.remaining == 10

    def test_take_cannot_go_negative(self):
        event = make_event(make_category("GA", 50, 2))

        with pytest.raises(ValueError):
            event.take(0, 3)

    def test_release_cannot_exceed_initial(self):
        event = make_event(make_category("GA", 50, 2))

        with pytest.raises(ValueError):
            event.release(0, 1)

    def test_find_category_matches_exact_name(self):
        event = make_event(make_category("GA", 50, 1), make_category("ga", 10, 1))

        index, category = event.find_category("ga")

        assert index == 1
        assert category.price == Money(Decimal(10))
        assert event.find_category("Ga") is None

    def test_duplicate_category_names_are_invalid(self):
        with pytest.raises(ValueError, match="unique"):
            make_event(make_category("GA", 50, 1), make_category("GA", 50, 1))
