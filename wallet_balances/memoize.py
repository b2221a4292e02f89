"""Identity-keyed memoization for pure selectors.

Scalar arguments (str, int, float, bool, None) are keyed by value, every
other argument by object identity. A cached entry stays valid until one of
its arguments is replaced by a different object; nothing expires on a timer.
"""
from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from cachetools import LRUCache, cached

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SCALARS = (str, int, float, bool, type(None))


def _key_part(arg: Any) -> tuple:
    if isinstance(arg, _SCALARS):
        return (type(arg), arg)
    return (object, id(arg))


def _make_key(*args: Any, **kwargs: Any) -> tuple:
    parts = [_key_part(a) for a in args]
    for name in sorted(kwargs):
        parts.append((name, _key_part(kwargs[name])))
    return tuple(parts)


def memoize_selector(maxsize: int = 32) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorate a pure selector with an identity-keyed LRU cache.

    Results are shared between callers; selectors return read-only mappings.
    """
    if maxsize < 1:
        raise ValueError("maxsize must be at least 1")

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        cache: LRUCache = LRUCache(maxsize=maxsize)

        # Entries hold on to their arguments so an id cannot be recycled
        # while it is still part of a live key.
        @cached(cache, key=_make_key, info=True)
        def pinned(*args: Any, **kwargs: Any) -> tuple[tuple, dict[str, Any], T]:
            logger.debug("Selector cache miss: %s", func.__qualname__)
            return args, kwargs, func(*args, **kwargs)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return pinned(*args, **kwargs)[2]

        wrapper.cache_info = pinned.cache_info  # type: ignore[attr-defined]
        wrapper.cache_clear = pinned.cache_clear  # type: ignore[attr-defined]
        return wrapper

    return decorator
