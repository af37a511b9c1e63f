from ticketing.handlers.views import (
    AvailabilityView,
    BuyView,
    EventDetailView,
    EventListView,
    HoldingDetailView,
    HoldingListView,
    RefundView,
    TransferView,
)

__all__ = [
    "AvailabilityView",
    "BuyView",
    "EventDetailView",
    "EventListView",
    "HoldingDetailView",
    "HoldingListView",
    "RefundView",
    "TransferView",
]
