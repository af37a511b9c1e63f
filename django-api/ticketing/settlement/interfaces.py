"""Settlement interface.

Moving value to and from callers is handled by an external ledger. Calls are
blocking and either complete or raise SettlementError.
"""

from abc import ABC, abstractmethod

from ticketing.domain import Money


class SettlementError(Exception):
    """Raised by a gateway when a transfer of value did not happen."""


class SettlementGateway(ABC):
    """Interface for the external payment ledger."""

    @abstractmethod
    def collect(self, payer: str, amount: Money) -> None:
        """Take ``amount`` attached to the caller's request."""
        ...

    @abstractmethod
    def payout(self, payee: str, amount: Money) -> None:
        """Send ``amount`` to ``payee``. Irreversible once it returns."""
        ...
