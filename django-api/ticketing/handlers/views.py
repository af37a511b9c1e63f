"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details

The caller's identity is supplied by the fronting gateway in the
X-Caller-Id header.
"""

import structlog
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ticketing.domain import EventId
from ticketing.domain.errors import DomainError, ErrorCode, EventNotFoundError, InvalidEventDefinitionError
from ticketing.handlers.serializers import (
    BuySerializer,
    CategorySerializer,
    CreateEventSerializer,
    EventSerializer,
    RefundSerializer,
    TransferSerializer,
)
from ticketing.services.wiring import get_services

logger = structlog.get_logger(__name__)

CALLER_HEADER = "X-Caller-Id"

ERROR_STATUS = {
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVALID_EVENT_DEFINITION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.WINDOW_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.REFUND_WINDOW_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CATEGORY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CATEGORY_SOLD_OUT: status.HTTP_409_CONFLICT,
    ErrorCode.PAYMENT_MISMATCH: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.INSUFFICIENT_HOLDING: status.HTTP_409_CONFLICT,
    ErrorCode.SETTLEMENT_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


def error_response(exc: DomainError) -> Response:
    body = {"code": exc.code.value, "message": exc.message}
    if isinstance(exc, InvalidEventDefinitionError):
        body["reason"] = exc.reason.value
    return Response(body, status=ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST))


def _bad_request(detail: object) -> Response:
    return Response({"code": "INVALID_REQUEST", "message": detail}, status=status.HTTP_400_BAD_REQUEST)


def _parse_event_id(raw: str) -> EventId | None:
    """Return None for malformed ids; well-formed ids outside the id range are unknown events."""
    try:
        value = int(raw)
    except ValueError:
        return None
    if value < 1:
        raise EventNotFoundError(value)
    return EventId(value)


class TicketingView(APIView):
    """Base view resolving the caller and mapping domain errors."""

    requires_caller = True

    def initial(self, request: Request, *args, **kwargs) -> None:
        super().initial(request, *args, **kwargs)
        self.caller = request.headers.get(CALLER_HEADER, "")

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            logger.info("domain_error_response", path=self.request.path, code=exc.code.value)
            return error_response(exc)
        return super().handle_exception(exc)

    def missing_caller(self) -> Response | None:
        if self.caller:
            return None
        return Response(
            {"code": "MISSING_CALLER", "message": f"{CALLER_HEADER} header is required"},
            status=status.HTTP_401_UNAUTHORIZED,
        )


class EventListView(TicketingView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        events = get_services().catalog.list_events()
        return Response(EventSerializer(events, many=True).data)

    def post(self, request: Request) -> Response:
        if (denied := self.missing_caller()) is not None:
            return denied
        serializer = CreateEventSerializer(data=request.data)
        if not serializer.is_valid():
            return _bad_request(serializer.errors)
        data = serializer.validated_data
        event = get_services().catalog.create_event(
            caller=self.caller,
            name=data["name"],
            date=data["date"],
            total_tickets=data["total_tickets"],
            category_names=data["category_names"],
            category_prices=data["category_prices"],
            category_counts=data["category_counts"],
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(TicketingView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        parsed = _parse_event_id(event_id)
        if parsed is None:
            return _bad_request("Invalid event ID format")
        event = get_services().catalog.get_event(parsed)
        return Response(EventSerializer(event).data)


class AvailabilityView(TicketingView):
    """Handler for GET /api/events/{event_id}/availability"""

    def get(self, request: Request, event_id: str) -> Response:
        parsed = _parse_event_id(event_id)
        if parsed is None:
            return _bad_request("Invalid event ID format")
        catalog = get_services().catalog
        return Response(
            {
                "event_id": parsed.value,
                "categories": CategorySerializer(catalog.availability(parsed), many=True).data,
                "description": catalog.describe_availability(parsed),
            }
        )


class BuyView(TicketingView):
    """Handler for POST /api/events/{event_id}/buy"""

    def post(self, request: Request, event_id: str) -> Response:
        if (denied := self.missing_caller()) is not None:
            return denied
        parsed = _parse_event_id(event_id)
        if parsed is None:
            return _bad_request("Invalid event ID format")
        serializer = BuySerializer(data=request.data)
        if not serializer.is_valid():
            return _bad_request(serializer.errors)
        data = serializer.validated_data
        holding = get_services().ledger.buy(
            self.caller, parsed, data["category"], data["quantity"], data["paid_amount"]
        )
        return Response(
            {"event_id": parsed.value, "category": data["category"], "holding": holding},
            status=status.HTTP_201_CREATED,
        )


class TransferView(TicketingView):
    """Handler for POST /api/events/{event_id}/transfer"""

    def post(self, request: Request, event_id: str) -> Response:
        if (denied := self.missing_caller()) is not None:
            return denied
        parsed = _parse_event_id(event_id)
        if parsed is None:
            return _bad_request("Invalid event ID format")
        serializer = TransferSerializer(data=request.data)
        if not serializer.is_valid():
            return _bad_request(serializer.errors)
        data = serializer.validated_data
        holding = get_services().ledger.transfer(
            self.caller, parsed, data["category"], data["quantity"], data["recipient"]
        )
        return Response({"event_id": parsed.value, "category": data["category"], "holding": holding})


class RefundView(TicketingView):
    """Handler for POST /api/events/{event_id}/refund"""

    def post(self, request: Request, event_id: str) -> Response:
        if (denied := self.missing_caller()) is not None:
            return denied
        parsed = _parse_event_id(event_id)
        if parsed is None:
            return _bad_request("Invalid event ID format")
        serializer = RefundSerializer(data=request.data)
        if not serializer.is_valid():
            return _bad_request(serializer.errors)
        data = serializer.validated_data
        refunded = get_services().ledger.refund(self.caller, parsed, data["category"], data["quantity"])
        return Response(
            {"event_id": parsed.value, "category": data["category"], "refunded": str(refunded)}
        )


class HoldingListView(TicketingView):
    """Handler for GET /api/events/{event_id}/holdings"""

    def get(self, request: Request, event_id: str) -> Response:
        if (denied := self.missing_caller()) is not None:
            return denied
        parsed = _parse_event_id(event_id)
        if parsed is None:
            return _bad_request("Invalid event ID format")
        holdings = get_services().ledger.holdings(self.caller, parsed)
        return Response({"event_id": parsed.value, "holdings": holdings})


class HoldingDetailView(TicketingView):
    """Handler for GET /api/events/{event_id}/holdings/{category}"""

    def get(self, request: Request, event_id: str, category: str) -> Response:
        if (denied := self.missing_caller()) is not None:
            return denied
        parsed = _parse_event_id(event_id)
        if parsed is None:
            return _bad_request("Invalid event ID format")
        quantity = get_services().ledger.holding(self.caller, parsed, category)
        return Response({"event_id": parsed.value, "category": category, "holding": quantity})
