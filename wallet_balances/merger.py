"""Merge a sparse real balance map with the baseline catalog — no I/O."""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from . import amounts
from .baseline import get_baseline
from .models import BalanceRecord


def merge_with_baseline(
    real: Mapping[str, BalanceRecord] | None = None,
) -> Mapping[str, BalanceRecord]:
    """Combine ``real`` with the baseline catalog.

    Every baseline token is present in the result with amount
    ``real + baseline`` and the baseline unit. Tokens outside the catalog are
    passed through untouched. ``None`` merges like an empty map. The result
    is read-only.

    Apply once per leaf map; summing raw maps and merging afterwards would
    add the baseline a different number of times.
    """
    if real is None:
        real = {}

    merged: dict[str, BalanceRecord] = {}
    for symbol, base in get_baseline().items():
        found = real.get(symbol)
        real_amount = found.amount if found is not None else 0
        merged[symbol] = BalanceRecord(
            amount=amounts.add(real_amount, base.amount),
            unit=base.unit,
        )

    for symbol, record in real.items():
        if symbol not in merged:
            merged[symbol] = record

    return MappingProxyType(merged)
