"""Locale-aware fiat formatting with a negligible-amount threshold."""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal, localcontext

from babel import Locale, UnknownLocaleError
from babel.numbers import format_currency, format_decimal

from .errors import FormatError

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"
DEFAULT_THRESHOLD = 0.01

STYLES = ("currency", "decimal")

_CURRENCY_RE = re.compile(r"^[A-Z]{3,5}$")


def normalize_currency(code: str) -> str:
    """Upper-case and validate a display currency code ("usd" → "USD")."""
    normalized = code.strip().upper()
    if not _CURRENCY_RE.match(normalized):
        raise ValueError(f"Invalid currency code: {code!r}")
    return normalized


def parse_locale(identifier: str) -> Locale:
    """Parse ``en-US`` or ``en_US`` style identifiers into a Babel locale."""
    return Locale.parse(identifier.strip().replace("-", "_"))


@dataclass(frozen=True)
class FormatOptions:
    """Display options; the currency code is normalized once, here."""

    currency: str
    style: str = "currency"

    def __post_init__(self) -> None:
        object.__setattr__(self, "currency", normalize_currency(self.currency))
        if self.style not in STYLES:
            raise ValueError(f"Unsupported format style: {self.style!r}")


@dataclass(frozen=True)
class DisplaySettings:
    """Everything needed to turn a fiat number into a display string."""

    options: FormatOptions
    locale: str = DEFAULT_LOCALE
    threshold: float = DEFAULT_THRESHOLD

    @property
    def currency(self) -> str:
        return self.options.currency

    def format(self, value: float | int | Decimal) -> str:
        return format_with_threshold(value, self.threshold, self.locale, self.options)


def _resolve_locale(identifier: str) -> Locale:
    try:
        return parse_locale(identifier)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(
            "Unknown locale %r (%s), falling back to %s", identifier, e, DEFAULT_LOCALE
        )
        return parse_locale(DEFAULT_LOCALE)


def _to_decimal(value: float | int | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise FormatError(f"Cannot format non-finite value: {value}")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if not math.isfinite(value):
        raise FormatError(f"Cannot format non-finite value: {value}")
    # str() keeps the shortest repr, so 5.5 stays 5.5 rather than a binary expansion.
    return Decimal(str(value))


def _render(number: Decimal, locale: Locale, options: FormatOptions) -> str:
    with localcontext() as ctx:
        # Babel quantizes in the current context; keep every integer digit.
        ctx.prec = max(ctx.prec, number.adjusted() + 16)
        if options.style == "currency":
            return format_currency(number, options.currency, locale=locale)
        return format_decimal(number, locale=locale)


def format_fiat(
    value: float | int | Decimal,
    locale: str,
    options: FormatOptions,
) -> str:
    """Format ``value`` for display, without any threshold."""
    return _render(_to_decimal(value), _resolve_locale(locale), options)


def format_with_threshold(
    value: float | int | Decimal,
    threshold: float,
    locale: str,
    options: FormatOptions,
) -> str:
    """Format ``value``, masking amounts too small to show meaningfully.

    - zero renders as the exact zero form ("$0.00")
    - ``0 < |value| < threshold`` renders as "<" + the threshold ("<$0.01")
    - anything else renders with the locale's grouping and decimal rules

    Raises:
        FormatError: ``value`` is NaN or infinite.
    """
    number = _to_decimal(value)
    resolved = _resolve_locale(locale)

    if number == 0:
        return _render(Decimal(0), resolved, options)

    limit = _to_decimal(threshold)
    if abs(number) < limit:
        return "<" + _render(limit, resolved, options)

    return _render(number, resolved, options)
