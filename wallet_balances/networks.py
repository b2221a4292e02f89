"""Test-network detection for chain ids."""
from __future__ import annotations

from collections.abc import Callable, Iterable

DEFAULT_TEST_NETWORKS: tuple[str, ...] = (
    "0x5",  # Goerli
    "0xaa36a7",  # Sepolia
    "0x4268",  # Holesky
    "0xe704",  # Linea Goerli
    "0xe705",  # Linea Sepolia
    "0x539",  # localhost
)


def _normalize(chain_id: str) -> str:
    return chain_id.strip().lower()


def make_test_network_predicate(
    chain_ids: Iterable[str],
) -> Callable[[str], bool]:
    """Build an ``is_test_network`` predicate over the given chain ids."""
    known = frozenset(_normalize(c) for c in chain_ids)

    def is_test(chain_id: str) -> bool:
        return _normalize(chain_id) in known

    return is_test


is_test_network = make_test_network_predicate(DEFAULT_TEST_NETWORKS)
