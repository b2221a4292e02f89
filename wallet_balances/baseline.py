"""Baseline catalog — tokens that always appear in a merged balance map."""
from __future__ import annotations

from .models import BalanceRecord

BASELINE_SYMBOLS: tuple[str, ...] = (
    "ETH",
    "USDT",
    "USDC",
    "BNB",
    "MATIC",
    "SOL",
    "AVAX",
    "ARB",
    "OP",
    "BASE",
)


def get_baseline() -> dict[str, BalanceRecord]:
    """Return the baseline catalog, every amount zero.

    A new dict is built on each call; callers may mutate what they receive.
    """
    return {symbol: BalanceRecord(amount=0, unit=symbol) for symbol in BASELINE_SYMBOLS}


def baseline_face_value() -> float:
    """Sum of baseline amounts taken at face value (no rate, no unit scale)."""
    return float(sum(record.amount for record in get_baseline().values()))
