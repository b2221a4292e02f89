"""Convert raw store payloads into typed, read-only snapshots."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .amounts import coerce_amount
from .models import AccountRecord, BalanceRecord, BalancesSnapshot

logger = logging.getLogger(__name__)


def parse_balance_record(token: str, raw: Any) -> BalanceRecord:
    """Parse one raw token entry.

    Accepts a ``BalanceRecord``, a ``{"amount": ..., "unit": ...}`` dict, or a
    bare amount (int or text) whose unit is then the token key.
    """
    if isinstance(raw, BalanceRecord):
        return raw
    if isinstance(raw, Mapping):
        return BalanceRecord(
            amount=coerce_amount(raw.get("amount")),
            unit=str(raw.get("unit") or token),
        )
    return BalanceRecord(amount=coerce_amount(raw), unit=token)


def parse_balance_map(raw: Mapping[str, Any] | None) -> Mapping[str, BalanceRecord]:
    if not raw:
        return MappingProxyType({})
    return MappingProxyType(
        {token: parse_balance_record(token, entry) for token, entry in raw.items()}
    )


def parse_account_record(raw: Any) -> AccountRecord:
    if isinstance(raw, AccountRecord):
        return raw
    raw = raw or {}
    return AccountRecord(
        balance=coerce_amount(raw.get("balance")),
        staked_balance=coerce_amount(raw.get("stakedBalance", raw.get("staked_balance"))),
    )


def build_snapshot(
    raw_token_balances: Mapping[str, Mapping[str, Mapping[str, Any]]] | None,
    raw_accounts_by_chain: Mapping[str, Mapping[str, Any]] | None = None,
) -> BalancesSnapshot:
    """Build a snapshot from ``account -> chain -> token -> entry`` data.

    Raises:
        ValueError: an amount is malformed or negative.
        AmountOverflowError: an amount exceeds uint256.
    """
    token_balances = {
        account: MappingProxyType(
            {chain_id: parse_balance_map(raw) for chain_id, raw in (chains or {}).items()}
        )
        for account, chains in (raw_token_balances or {}).items()
    }
    accounts_by_chain = {
        chain_id: MappingProxyType(
            {address: parse_account_record(raw) for address, raw in (accounts or {}).items()}
        )
        for chain_id, accounts in (raw_accounts_by_chain or {}).items()
    }
    logger.debug(
        "Built snapshot: %d accounts, %d chains with native balances",
        len(token_balances),
        len(accounts_by_chain),
    )
    return BalancesSnapshot(
        token_balances=MappingProxyType(token_balances),
        accounts_by_chain=MappingProxyType(accounts_by_chain),
    )
