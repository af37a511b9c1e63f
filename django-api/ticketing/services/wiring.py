"""Builds the catalog and ledger once per process from Django settings."""

from dataclasses import dataclass
from functools import lru_cache

import structlog
from django.conf import settings

from ticketing.services.catalog_service import EventCatalog
from ticketing.services.clock import system_clock
from ticketing.services.ledger_service import TicketLedger
from ticketing.settlement.interfaces import SettlementGateway
from ticketing.settlement.recording import RecordingSettlementGateway
from ticketing.stores.interfaces import TicketStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TicketingServices:
    store: TicketStore
    settlement: SettlementGateway
    catalog: EventCatalog
    ledger: TicketLedger


def _build_store(backend: str) -> TicketStore:
    if backend == "memory":
        from ticketing.stores.memory_store import InMemoryTicketStore

        return InMemoryTicketStore()
    if backend == "django":
        from ticketing.stores.django_store import DjangoTicketStore

        return DjangoTicketStore()
    raise ValueError(f"Unknown TICKETING_STORE backend: {backend!r}")


@lru_cache(maxsize=1)
def get_services() -> TicketingServices:
    authority = settings.TICKETING_AUTHORITY
    store = _build_store(settings.TICKETING_STORE)
    settlement = RecordingSettlementGateway()
    logger.info("ticketing_services_built", store=settings.TICKETING_STORE, authority=authority)
    return TicketingServices(
        store=store,
        settlement=settlement,
        catalog=EventCatalog(store, authority, system_clock),
        ledger=TicketLedger(store, settlement, authority, system_clock),
    )


def reset_services() -> None:
    """Drop the cached services so the next call rebuilds them from settings."""
    get_services.cache_clear()
