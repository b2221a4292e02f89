"""Error taxonomy for balance aggregation."""
from __future__ import annotations


class BalanceError(Exception):
    """Base class for all balance aggregation errors."""


class MissingDataError(BalanceError, LookupError):
    """A raw balance map is absent.

    Selectors absorb this and treat the map as empty; it never reaches callers.
    """


class AmountOverflowError(BalanceError, OverflowError):
    """An amount left the representable range (0 .. 2**256 - 1)."""


class FormatError(BalanceError, ValueError):
    """A non-finite value reached the currency formatter."""
