"""Protocol interfaces for the collaborators this package reads from."""
from .balance_store import BalanceStore
from .rate_source import RateSource
from .wallet_source import WalletBalanceSource

__all__ = ["BalanceStore", "RateSource", "WalletBalanceSource"]
