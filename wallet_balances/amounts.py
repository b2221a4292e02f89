"""Fixed-point balance amounts — exact integer arithmetic in the smallest unit."""
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from .errors import AmountOverflowError

# On-chain balances are uint256.
MAX_AMOUNT = 2**256 - 1

_HEX_RE = re.compile(r"^0[xX]([0-9a-fA-F]+)$")
_DEC_RE = re.compile(r"^[0-9]+$")


def _check_range(value: int) -> int:
    if value < 0:
        raise ValueError(f"Amount must be non-negative, got {value}")
    if value > MAX_AMOUNT:
        raise AmountOverflowError(f"Amount exceeds uint256 range: {value}")
    return value


def add(a: int, b: int) -> int:
    """Add two amounts exactly, refusing results outside uint256."""
    return _check_range(_check_range(a) + _check_range(b))


def to_text(amount: int) -> str:
    """Encode an amount as ``0x``-prefixed lowercase hex (zero is ``0x0``)."""
    return f"0x{_check_range(amount):x}"


def from_text(text: str) -> int:
    """Decode ``0x`` hex or base-10 digits back into an amount.

    Examples:
        "0x22b1c8c1227a0000" → 2500000000000000000
        "100" → 100
    """
    stripped = text.strip()
    match = _HEX_RE.match(stripped)
    if match:
        return _check_range(int(match.group(1), 16))
    if _DEC_RE.match(stripped):
        return _check_range(int(stripped, 10))
    raise ValueError(f"Malformed amount text: {text!r}")


def coerce_amount(value: Any) -> int:
    """Normalize a raw store value (int, text or None) to an amount."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError("Boolean is not an amount")
    if isinstance(value, int):
        return _check_range(value)
    if isinstance(value, str):
        return from_text(value)
    raise TypeError(f"Unsupported amount type: {type(value).__name__}")


def to_decimal(amount: int, unit_scale: int) -> float:
    """Lossy conversion to whole units, for fiat conversion and display only."""
    return amount / (10**unit_scale)


def render_units(amount: int, unit_scale: int = 18, places: int = 5) -> str:
    """Render a smallest-unit amount in whole units, rounded half-up.

    Trailing zeros are stripped: 2.5 ETH in wei renders as ``"2.5"``.
    """
    with localcontext() as ctx:
        # uint256 has 78 digits; leave room for the fractional places.
        ctx.prec = 128
        whole = Decimal(_check_range(amount)).scaleb(-unit_scale)
        rounded = whole.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    if rounded == 0:
        return "0"
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
