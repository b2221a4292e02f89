"""Rate source protocol — token to display-currency conversion rates."""
from collections.abc import Mapping
from typing import Protocol


class RateSource(Protocol):
    """Abstract interface for live conversion rates.

    ``rates()`` may return the same dict updated in place; callers copy it
    before caching anything derived from it.
    """

    def rates(self) -> Mapping[str, float]: ...

    def conversion_rate(self, symbol: str) -> float | None: ...
