"""Unit tests for identity-keyed selector memoization."""
from __future__ import annotations

import gc
import weakref

import pytest

from wallet_balances import aggregation
from wallet_balances.memoize import memoize_selector
from wallet_balances.models import BalancesSnapshot
from wallet_balances.state import build_snapshot

from tests.conftest import ACCOUNT, MAINNET


def _counting(func):
    calls: list[tuple] = []

    def wrapped(*args, **kwargs):
        calls.append(args)
        return func(*args, **kwargs)

    return wrapped, calls


class TestMemoizeSelector:
    def test_same_snapshot_hits_cache(self, snapshot: BalancesSnapshot) -> None:
        func, calls = _counting(aggregation.per_account_per_chain)
        selector = memoize_selector()(func)
        first = selector(snapshot, ACCOUNT, MAINNET)
        second = selector(snapshot, ACCOUNT, MAINNET)
        assert first is second
        assert len(calls) == 1

    def test_new_snapshot_recomputes(self, raw_token_balances: dict) -> None:
        func, calls = _counting(aggregation.has_any_balance)
        selector = memoize_selector()(func)
        selector(build_snapshot(raw_token_balances))
        selector(build_snapshot(raw_token_balances))
        assert len(calls) == 2

    def test_scalars_keyed_by_value(self, snapshot: BalancesSnapshot) -> None:
        func, calls = _counting(aggregation.per_account_per_chain)
        selector = memoize_selector()(func)
        selector(snapshot, ACCOUNT, MAINNET)
        selector(snapshot, "".join([ACCOUNT[:5], ACCOUNT[5:]]), "0x" + "1")
        assert len(calls) == 1

    def test_different_scalar_misses(self, snapshot: BalancesSnapshot) -> None:
        func, calls = _counting(aggregation.per_account_per_chain)
        selector = memoize_selector()(func)
        selector(snapshot, ACCOUNT, MAINNET)
        selector(snapshot, ACCOUNT, "0x89")
        assert len(calls) == 2

    def test_equal_but_distinct_objects_miss(self) -> None:
        func, calls = _counting(aggregation.has_any_balance)
        selector = memoize_selector()(func)
        selector(BalancesSnapshot())
        selector(BalancesSnapshot())
        assert len(calls) == 2

    def test_memoized_equals_recomputed(self, snapshot: BalancesSnapshot) -> None:
        selector = memoize_selector()(aggregation.all_accounts)
        selector(snapshot)
        assert selector(snapshot) == aggregation.all_accounts(snapshot)

    def test_lru_eviction(self, snapshot: BalancesSnapshot) -> None:
        func, calls = _counting(aggregation.per_account_per_chain)
        selector = memoize_selector(maxsize=2)(func)
        selector(snapshot, ACCOUNT, "0x1")
        selector(snapshot, ACCOUNT, "0x89")
        selector(snapshot, ACCOUNT, "0x1")
        selector(snapshot, ACCOUNT, "0xa")  # evicts 0x89
        selector(snapshot, ACCOUNT, "0x1")
        selector(snapshot, ACCOUNT, "0x89")
        assert [c[2] for c in calls] == ["0x1", "0x89", "0xa", "0x89"]

    def test_cached_entry_keeps_arguments_alive(self) -> None:
        selector = memoize_selector()(aggregation.has_any_balance)
        snap = BalancesSnapshot()
        ref = weakref.ref(snap)
        selector(snap)
        del snap
        gc.collect()
        assert ref() is not None
        selector.cache_clear()
        gc.collect()
        assert ref() is None

    def test_cache_info_and_clear(self, snapshot: BalancesSnapshot) -> None:
        selector = memoize_selector(maxsize=4)(aggregation.has_any_balance)
        selector(snapshot)
        selector(snapshot)
        info = selector.cache_info()
        assert (info.hits, info.misses, info.maxsize, info.currsize) == (1, 1, 4, 1)
        selector.cache_clear()
        assert selector.cache_info().currsize == 0

    def test_keyword_arguments(self, snapshot: BalancesSnapshot) -> None:
        func, calls = _counting(aggregation.per_account_per_chain)
        selector = memoize_selector()(func)
        selector(snapshot, account=ACCOUNT, chain_id=MAINNET)
        selector(snapshot, chain_id=MAINNET, account=ACCOUNT)
        assert len(calls) == 1

    def test_bool_and_int_distinct(self) -> None:
        selector = memoize_selector()(lambda flag: repr(flag))
        assert selector(1) == "1"
        assert selector(True) == "True"

    def test_invalid_maxsize(self) -> None:
        with pytest.raises(ValueError):
            memoize_selector(maxsize=0)(aggregation.has_any_balance)

    def test_wraps_metadata(self) -> None:
        selector = memoize_selector()(aggregation.has_any_balance)
        assert selector.__name__ == "has_any_balance"
