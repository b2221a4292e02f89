"""Data models — all frozen (immutable)."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .errors import MissingDataError

# token symbol -> record
BalanceMap = Mapping[str, "BalanceRecord"]
# account -> chain -> token -> record
TokenBalances = Mapping[str, Mapping[str, BalanceMap]]

_EMPTY: Mapping = MappingProxyType({})


@dataclass(frozen=True)
class BalanceRecord:
    """Balance of one token, in the token's smallest unit."""

    amount: int
    unit: str


@dataclass(frozen=True)
class AccountRecord:
    """Native-asset balance of one account on one chain."""

    balance: int = 0
    staked_balance: int = 0


@dataclass(frozen=True)
class BalancesSnapshot:
    """Read-only view of the store at one point in time.

    The store hands out a new snapshot whenever its contents change, so
    snapshot identity doubles as the cache key for derived values.
    """

    token_balances: TokenBalances = field(default_factory=lambda: _EMPTY)
    accounts_by_chain: Mapping[str, Mapping[str, AccountRecord]] = field(
        default_factory=lambda: _EMPTY
    )

    def require_chain_balances(self, account: str, chain_id: str) -> BalanceMap:
        """Return the raw map for ``account`` on ``chain_id`` or raise."""
        chains = self.token_balances.get(account)
        if chains is None:
            raise MissingDataError(f"No balances for account {account}")
        balances = chains.get(chain_id)
        if balances is None:
            raise MissingDataError(
                f"No balances for account {account} on chain {chain_id}"
            )
        return balances


@dataclass(frozen=True)
class GroupBalance:
    """Fiat total of one account group, as computed upstream."""

    group_id: str
    total_balance_in_user_currency: float | None = None


@dataclass(frozen=True)
class WalletBalance:
    """Fiat totals of a wallet and its account groups."""

    wallet_id: str
    total_balance_in_user_currency: float | None = None
    groups: Mapping[str, GroupBalance] = field(default_factory=lambda: _EMPTY)


@dataclass(frozen=True)
class AggregateTotal:
    """A total and its display string; ``formatted`` is None while loading."""

    raw: float | None
    formatted: str | None

    @property
    def is_loading(self) -> bool:
        return self.formatted is None


@dataclass(frozen=True)
class NativeBalance:
    """Native-asset balance of an account, liquid and staked, with fiat values."""

    balance_wei: int
    balance: str
    balance_fiat: str
    balance_fiat_number: float
    staked_balance_wei: int
    staked_balance: str
    staked_balance_fiat: str
    staked_balance_fiat_number: float
    conversion_rate: float
    currency: str
