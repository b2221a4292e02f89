"""Pure derivations over a balances snapshot — no I/O, no caching.

Every function here is a pure function of its arguments. Caching lives in
``services.balance_service``, which wraps these with ``memoize_selector``.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType

from . import amounts
from .baseline import baseline_face_value, get_baseline
from .errors import MissingDataError
from .formatting import DisplaySettings, format_fiat
from .merger import merge_with_baseline
from .models import (
    AccountRecord,
    AggregateTotal,
    BalanceMap,
    BalanceRecord,
    BalancesSnapshot,
    NativeBalance,
    WalletBalance,
)

logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 18


# ---------------------------------------------------------------------------
# Optional lookups
# ---------------------------------------------------------------------------


def lookup_account(
    snapshot: BalancesSnapshot, account: str
) -> Mapping[str, BalanceMap] | None:
    """Chains of ``account``, or None when the store knows nothing of it."""
    return snapshot.token_balances.get(account)


def lookup_chain(
    chains: Mapping[str, BalanceMap] | None, chain_id: str
) -> BalanceMap | None:
    """Raw balances on ``chain_id``, or None when absent."""
    if chains is None:
        return None
    return chains.get(chain_id)


def lookup_account_record(
    snapshot: BalancesSnapshot, account: str, chain_id: str
) -> AccountRecord | None:
    accounts = snapshot.accounts_by_chain.get(chain_id)
    if accounts is None:
        return None
    return accounts.get(account)


# ---------------------------------------------------------------------------
# Merged balance maps
# ---------------------------------------------------------------------------


def _merge_chains(chains: Mapping[str, BalanceMap]) -> Mapping[str, BalanceMap]:
    return MappingProxyType(
        {chain_id: merge_with_baseline(real) for chain_id, real in chains.items()}
    )


def per_account_per_chain(
    snapshot: BalancesSnapshot, account: str, chain_id: str
) -> BalanceMap:
    """Merged balances of one account on one chain."""
    try:
        real = snapshot.require_chain_balances(account, chain_id)
    except MissingDataError as e:
        logger.debug("%s; merging against an empty map", e)
        real = {}
    return merge_with_baseline(real)


def per_account_all_chains(
    snapshot: BalancesSnapshot, account: str
) -> Mapping[str, BalanceMap]:
    """Merged balances of one account, per chain it has data for."""
    chains = lookup_account(snapshot, account) or {}
    return _merge_chains(chains)


def all_accounts(
    snapshot: BalancesSnapshot,
) -> Mapping[str, Mapping[str, BalanceMap]]:
    """Merged balances of every account on every chain."""
    return MappingProxyType(
        {
            account: _merge_chains(chains)
            for account, chains in snapshot.token_balances.items()
        }
    )


# ---------------------------------------------------------------------------
# Raw-data predicates
# ---------------------------------------------------------------------------


def has_any_balance(snapshot: BalancesSnapshot) -> bool:
    """True if any account/chain in the raw data holds at least one token.

    Looks at raw maps only; the baseline would make this always true.
    """
    for chains in snapshot.token_balances.values():
        for balances in chains.values():
            if len(balances) > 0:
                return True
    return False


def single_token_balance(
    snapshot: BalancesSnapshot, account: str, chain_id: str, token: str
) -> BalanceMap:
    """``{token: record}`` when the raw data has it, else empty. No merge."""
    balances = lookup_chain(lookup_account(snapshot, account), chain_id)
    record = balances.get(token) if balances is not None else None
    if record is None:
        return MappingProxyType({})
    return MappingProxyType({token: record})


def address_has_non_zero_balance(
    snapshot: BalancesSnapshot,
    account: str | None,
    show_test_networks: bool,
    is_test_network: Callable[[str], bool],
) -> bool:
    """True if ``account`` holds a non-zero raw amount on a visible chain."""
    if not account:
        return False

    chains = lookup_account(snapshot, account) or {}
    for chain_id, balances in chains.items():
        if is_test_network(chain_id) and not show_test_networks:
            continue
        if any(record.amount != 0 for record in (balances or {}).values()):
            return True
    return False


# ---------------------------------------------------------------------------
# Fiat totals
# ---------------------------------------------------------------------------


def token_fiat_value(
    record: BalanceRecord, rate: float, decimals: int = DEFAULT_DECIMALS
) -> float:
    """Value of a single token balance in the display currency."""
    return amounts.to_decimal(record.amount, decimals) * rate


def chain_fiat_total(
    balances: BalanceMap,
    rates: Mapping[str, float],
    token_decimals: Mapping[str, int],
) -> float:
    """Sum of token values in one balance map; tokens without a rate count as 0."""
    total = 0.0
    for symbol, record in balances.items():
        rate = rates.get(symbol)
        if rate is None:
            logger.debug("No conversion rate for %s, skipping", symbol)
            continue
        decimals = token_decimals.get(symbol, DEFAULT_DECIMALS)
        total += token_fiat_value(record, rate, decimals)
    return total


def account_fiat_total(
    snapshot: BalancesSnapshot,
    account: str,
    rates: Mapping[str, float],
    token_decimals: Mapping[str, int],
    display: DisplaySettings,
) -> AggregateTotal:
    """Fiat total of an account across chains, each chain merged first."""
    total = sum(
        (
            chain_fiat_total(merged, rates, token_decimals)
            for merged in per_account_all_chains(snapshot, account).values()
        ),
        0.0,
    )
    return AggregateTotal(raw=total, formatted=display.format(total))


def wallet_group_fiat_total(
    wallet: WalletBalance, group_id: str, display: DisplaySettings
) -> AggregateTotal:
    """Fiat total of one group; an unknown group total counts as 0."""
    group = wallet.groups.get(group_id)
    real_total = group.total_balance_in_user_currency if group is not None else None
    if real_total is None:
        logger.debug("Group %s has no total yet, using 0", group_id)
        real_total = 0.0
    merged_total = real_total + baseline_face_value()
    return AggregateTotal(raw=merged_total, formatted=display.format(merged_total))


def wallet_group_totals(
    wallet: WalletBalance, display: DisplaySettings
) -> Mapping[str, AggregateTotal]:
    """Fiat totals for every group in the wallet."""
    return MappingProxyType(
        {
            group_id: wallet_group_fiat_total(wallet, group_id, display)
            for group_id in wallet.groups
        }
    )


def wallet_total_fiat(wallet: WalletBalance, display: DisplaySettings) -> AggregateTotal:
    """Fiat total of the wallet; loading while the real total is unknown."""
    real_total = wallet.total_balance_in_user_currency
    if real_total is None:
        return AggregateTotal(raw=None, formatted=None)
    merged_total = real_total + baseline_face_value()
    return AggregateTotal(raw=merged_total, formatted=display.format(merged_total))


# ---------------------------------------------------------------------------
# Native asset
# ---------------------------------------------------------------------------


def _fiat_number(wei: int, rate: float, places: int) -> float:
    return round(amounts.to_decimal(wei, DEFAULT_DECIMALS) * rate, places)


def native_balance(
    snapshot: BalancesSnapshot,
    account: str | None,
    chain_id: str,
    conversion_rate: float | None,
    native_symbol: str,
    display: DisplaySettings,
) -> NativeBalance:
    """Native and staked balance of ``account`` on ``chain_id``, with fiat values.

    The liquid balance is merged with the baseline amount of ``native_symbol``.
    An unknown conversion rate is taken as 1.
    """
    record = lookup_account_record(snapshot, account, chain_id) if account else None
    if record is None:
        record = AccountRecord()

    base = get_baseline().get(native_symbol)
    base_amount = base.amount if base is not None else 0
    balance_wei = amounts.add(record.balance, base_amount)
    staked_wei = amounts.add(record.staked_balance, 0)

    rate = conversion_rate if conversion_rate is not None else 1.0
    balance_fiat = _fiat_number(balance_wei, rate, 2)
    staked_fiat = _fiat_number(staked_wei, rate, 2)
    return NativeBalance(
        balance_wei=balance_wei,
        balance=amounts.render_units(balance_wei),
        balance_fiat=format_fiat(balance_fiat, display.locale, display.options),
        balance_fiat_number=balance_fiat,
        staked_balance_wei=staked_wei,
        staked_balance=amounts.render_units(staked_wei),
        staked_balance_fiat=format_fiat(staked_fiat, display.locale, display.options),
        staked_balance_fiat_number=_fiat_number(staked_wei, rate, 5),
        conversion_rate=rate,
        currency=display.currency,
    )
