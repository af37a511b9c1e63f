"""Serializers for request validation and domain model responses."""

from rest_framework import serializers


class CategorySerializer(serializers.Serializer):
    """Serializer for Category domain model."""

    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=18, decimal_places=2, source="price.amount")
    initial = serializers.IntegerField(source="initial.value")
    remaining = serializers.IntegerField(source="remaining.value")


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.IntegerField(source="id.value")
    name = serializers.CharField()
    date = serializers.IntegerField()
    total_tickets = serializers.IntegerField()
    remaining = serializers.IntegerField()
    categories = CategorySerializer(many=True)


class CreateEventSerializer(serializers.Serializer):
    """Input for POST /api/events.

    Only the shape is checked here; the ticketing rules run in the service.
    """

    name = serializers.CharField(allow_blank=True)
    date = serializers.IntegerField()
    total_tickets = serializers.IntegerField()
    category_names = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    category_prices = serializers.ListField(
        child=serializers.DecimalField(max_digits=18, decimal_places=2), allow_empty=True
    )
    category_counts = serializers.ListField(child=serializers.IntegerField(), allow_empty=True)


class BuySerializer(serializers.Serializer):
    category = serializers.CharField()
    quantity = serializers.IntegerField()
    paid_amount = serializers.DecimalField(max_digits=18, decimal_places=2)


class TransferSerializer(serializers.Serializer):
    category = serializers.CharField()
    quantity = serializers.IntegerField()
    recipient = serializers.CharField()


class RefundSerializer(serializers.Serializer):
    category = serializers.CharField()
    quantity = serializers.IntegerField()
