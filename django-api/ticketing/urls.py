from django.urls import path

from ticketing.handlers import (
    AvailabilityView,
    BuyView,
    EventDetailView,
    EventListView,
    HoldingDetailView,
    HoldingListView,
    RefundView,
    TransferView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/availability",
        AvailabilityView.as_view(),
        name="event-availability",
    ),
    path("events/<str:event_id>/buy", BuyView.as_view(), name="ticket-buy"),
    path("events/<str:event_id>/transfer", TransferView.as_view(), name="ticket-transfer"),
    path("events/<str:event_id>/refund", RefundView.as_view(), name="ticket-refund"),
    path("events/<str:event_id>/holdings", HoldingListView.as_view(), name="holding-list"),
    path(
        "events/<str:event_id>/holdings/<str:category>",
        HoldingDetailView.as_view(),
        name="holding-detail",
    ),
]
