"""Wallet balance source protocol — upstream fiat totals per wallet."""
from typing import Protocol

from ..models import WalletBalance


class WalletBalanceSource(Protocol):
    """Abstract interface for per-wallet and per-group fiat totals."""

    def wallet_balance(self, wallet_id: str) -> WalletBalance: ...
