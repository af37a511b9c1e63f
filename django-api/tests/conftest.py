"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from ticketing.services.catalog_service import EventCatalog
from ticketing.services.ledger_service import TicketLedger
from ticketing.services.wiring import reset_services
from ticketing.settlement.recording import RecordingSettlementGateway
from ticketing.stores.memory_store import InMemoryTicketStore

AUTHORITY = "authority"
ALICE = "alice"
BOB = "bob"

HOUR = 60 * 60
EVENT_DATE = 1_900_000_000


class FakeClock:
    """Settable clock returning whole seconds."""

    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_services():
    reset_services()
    yield
    reset_services()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(EVENT_DATE - 30 * 24 * HOUR)


@pytest.fixture
def store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def settlement() -> RecordingSettlementGateway:
    return RecordingSettlementGateway()


@pytest.fixture
def catalog(store, clock) -> EventCatalog:
    return EventCatalog(store, AUTHORITY, clock)


@pytest.fixture
def ledger(store, settlement, clock) -> TicketLedger:
    return TicketLedger(store, settlement, AUTHORITY, clock)


@pytest.fixture
def concert(catalog):
    """The "Concert" event: VIP 2 x 100, GA 8 x 50."""
    return catalog.create_event(
        AUTHORITY, "Concert", EVENT_DATE, 10, ["VIP", "GA"], [100, 50], [2, 8]
    )
