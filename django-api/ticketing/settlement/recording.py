"""In-process settlement gateway that journals every transfer."""

import threading
from dataclasses import dataclass
from enum import Enum

import structlog

from ticketing.domain import Money
from ticketing.settlement.interfaces import SettlementError, SettlementGateway

logger = structlog.get_logger(__name__)


class Direction(Enum):
    IN = "IN"
    OUT = "OUT"


@dataclass(frozen=True)
class SettlementEntry:
    direction: Direction
    party: str
    amount: Money


class RecordingSettlementGateway(SettlementGateway):
    """Accepts every transfer and appends it to a journal.

    Set ``fail_next`` to make the next call raise SettlementError instead.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.entries: list[SettlementEntry] = []
        self.fail_next = False

    def collect(self, payer: str, amount: Money) -> None:
        self._record(Direction.IN, payer, amount)

    def payout(self, payee: str, amount: Money) -> None:
        self._record(Direction.OUT, payee, amount)

    def paid_out_to(self, payee: str) -> list[Money]:
        return [e.amount for e in self.entries if e.direction is Direction.OUT and e.party == payee]

    def collected_from(self, payer: str) -> list[Money]:
        return [e.amount for e in self.entries if e.direction is Direction.IN and e.party == payer]

    def _record(self, direction: Direction, party: str, amount: Money) -> None:
        with self._lock:
            if self.fail_next:
                self.fail_next = False
                raise SettlementError(f"Settlement {direction.value} for {party} rejected")
            self.entries.append(SettlementEntry(direction, party, amount))
        logger.info(
            "settlement_recorded",
            direction=direction.value,
            party=party,
            amount=str(amount),
        )
