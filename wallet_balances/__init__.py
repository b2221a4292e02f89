"""Multi-account, multi-chain wallet balance aggregation."""
from .baseline import get_baseline
from .formatting import FormatOptions, format_with_threshold
from .merger import merge_with_baseline
from .models import AggregateTotal, BalanceRecord, BalancesSnapshot

__version__ = "0.1.0"

__all__ = [
    "AggregateTotal",
    "BalanceRecord",
    "BalancesSnapshot",
    "FormatOptions",
    "format_with_threshold",
    "get_baseline",
    "merge_with_baseline",
]
