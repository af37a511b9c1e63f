"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models


class Event(models.Model):
    """Persistence model for events."""

    authority = models.CharField(max_length=255)
    name = models.CharField(max_length=255)
    date = models.BigIntegerField(help_text="Scheduled start, seconds since epoch")
    total_tickets = models.PositiveIntegerField()
    remaining = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class TicketCategory(models.Model):
    """Persistence model for an event's ticket categories."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="categories")
    position = models.PositiveIntegerField()
    name = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=18, decimal_places=2)
    initial = models.PositiveIntegerField()
    remaining = models.PositiveIntegerField()

    class Meta:
        ordering = ["event", "position"]
        constraints = [
            models.UniqueConstraint(fields=["event", "position"], name="unique_category_position"),
            models.UniqueConstraint(fields=["event", "name"], name="unique_category_name"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.price}"


class Holding(models.Model):
    """Persistence model for the entitlement ledger."""

    holder = models.CharField(max_length=255)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="holdings")
    category_name = models.CharField(max_length=100)
    quantity = models.PositiveIntegerField(default=0)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["holder", "event", "category_name"], name="unique_holding_key"
            ),
        ]
        indexes = [
            models.Index(fields=["holder", "event"], name="holding_holder_event_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.holder} - {self.category_name} x{self.quantity}"
