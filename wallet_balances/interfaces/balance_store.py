"""Balance store protocol — source of raw balance snapshots."""
from typing import Protocol

from ..models import BalancesSnapshot


class BalanceStore(Protocol):
    """Abstract interface for the state store holding raw balances.

    ``snapshot()`` must return the same object until the underlying data
    changes, and a new object afterwards.
    """

    def snapshot(self) -> BalancesSnapshot: ...
