"""Balance selectors bound to live collaborators, with memoization."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .. import aggregation
from ..config import AppConfig
from ..interfaces.balance_store import BalanceStore
from ..interfaces.rate_source import RateSource
from ..interfaces.wallet_source import WalletBalanceSource
from ..memoize import memoize_selector
from ..models import AggregateTotal, BalanceMap, NativeBalance
from ..networks import make_test_network_predicate

logger = logging.getLogger(__name__)


class BalanceService:
    """Answers balance queries against the store's current snapshot.

    Each selector gets its own identity-keyed cache, so a query is recomputed
    only when the snapshot (or wallet balance, or rate table) it depends on is
    replaced by a new object.
    """

    def __init__(
        self,
        config: AppConfig,
        store: BalanceStore,
        rates: RateSource,
        wallets: WalletBalanceSource,
    ) -> None:
        self._config = config
        self._store = store
        self._rates = rates
        self._wallets = wallets
        self._rates_content: tuple[tuple[str, float], ...] | None = None
        self._rates_table: Mapping[str, float] = MappingProxyType({})
        self._display = config.display.settings()
        self._is_test_network = make_test_network_predicate(
            config.networks.test_networks
        )

        memoize = memoize_selector(config.cache.maxsize)
        self._per_account_per_chain = memoize(aggregation.per_account_per_chain)
        self._per_account_all_chains = memoize(aggregation.per_account_all_chains)
        self._all_accounts = memoize(aggregation.all_accounts)
        self._has_any_balance = memoize(aggregation.has_any_balance)
        self._single_token_balance = memoize(aggregation.single_token_balance)
        self._address_has_non_zero_balance = memoize(
            aggregation.address_has_non_zero_balance
        )
        self._account_fiat_total = memoize(aggregation.account_fiat_total)
        self._wallet_group_fiat_total = memoize(aggregation.wallet_group_fiat_total)
        self._wallet_group_totals = memoize(aggregation.wallet_group_totals)
        self._wallet_total_fiat = memoize(aggregation.wallet_total_fiat)
        self._native_balance = memoize(aggregation.native_balance)

    def _rate_table(self) -> Mapping[str, float]:
        """Read-only copy of the live rates, replaced only when they change.

        Rate sources may update their table in place; the fiat caches key on
        this copy, not on the object the source returns.
        """
        content = tuple(sorted(self._rates.rates().items()))
        if content != self._rates_content:
            self._rates_content = content
            self._rates_table = MappingProxyType(dict(content))
        return self._rates_table

    # ------------------------------------------------------------------
    # Merged balance maps
    # ------------------------------------------------------------------

    def per_account_per_chain(
        self, account: str, chain_id: str
    ) -> BalanceMap:
        return self._per_account_per_chain(self._store.snapshot(), account, chain_id)

    def per_account_all_chains(self, account: str) -> Mapping[str, BalanceMap]:
        return self._per_account_all_chains(self._store.snapshot(), account)

    def global_all_accounts(self) -> Mapping[str, Mapping[str, BalanceMap]]:
        return self._all_accounts(self._store.snapshot())

    # ------------------------------------------------------------------
    # Raw-data queries
    # ------------------------------------------------------------------

    def has_any_balance(self) -> bool:
        return self._has_any_balance(self._store.snapshot())

    def single_token_balance(
        self, account: str, chain_id: str, token: str
    ) -> BalanceMap:
        return self._single_token_balance(
            self._store.snapshot(), account, chain_id, token
        )

    def address_has_non_zero_balance(self, account: str | None) -> bool:
        return self._address_has_non_zero_balance(
            self._store.snapshot(),
            account,
            self._config.networks.show_test_networks,
            self._is_test_network,
        )

    # ------------------------------------------------------------------
    # Fiat totals
    # ------------------------------------------------------------------

    def account_fiat_total(self, account: str) -> AggregateTotal:
        return self._account_fiat_total(
            self._store.snapshot(),
            account,
            self._rate_table(),
            self._config.tokens.decimals,
            self._display,
        )

    def wallet_group_fiat_total(self, wallet_id: str, group_id: str) -> AggregateTotal:
        return self._wallet_group_fiat_total(
            self._wallets.wallet_balance(wallet_id), group_id, self._display
        )

    def wallet_group_totals(self, wallet_id: str) -> Mapping[str, AggregateTotal]:
        return self._wallet_group_totals(
            self._wallets.wallet_balance(wallet_id), self._display
        )

    def wallet_total_fiat(self, wallet_id: str) -> AggregateTotal:
        total = self._wallet_total_fiat(
            self._wallets.wallet_balance(wallet_id), self._display
        )
        if total.is_loading:
            logger.debug("Wallet %s total is still loading", wallet_id)
        return total

    def native_balance(self, account: str | None, chain_id: str) -> NativeBalance:
        symbol = self._config.tokens.native_symbol
        return self._native_balance(
            self._store.snapshot(),
            account,
            chain_id,
            self._rates.conversion_rate(symbol),
            symbol,
            self._display,
        )
