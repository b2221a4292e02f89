"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from wallet_balances.formatting import DisplaySettings, FormatOptions
from wallet_balances.models import BalancesSnapshot, GroupBalance, WalletBalance
from wallet_balances.state import build_snapshot

ACCOUNT = "0xabc0000000000000000000000000000000000001"
OTHER_ACCOUNT = "0xdef0000000000000000000000000000000000002"
MAINNET = "0x1"
POLYGON = "0x89"
SEPOLIA = "0xaa36a7"

TWO_AND_A_HALF_ETH = 2_500_000_000_000_000_000


# ---------------------------------------------------------------------------
# Snapshot fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def raw_token_balances() -> dict:
    return {
        ACCOUNT: {
            MAINNET: {
                "ETH": {"amount": hex(TWO_AND_A_HALF_ETH), "unit": "ETH"},
                "SHIB": {"amount": 100, "unit": "SHIB"},
            },
            POLYGON: {
                "USDC": {"amount": "5000000", "unit": "USDC"},
            },
            SEPOLIA: {
                "ETH": {"amount": "0x0", "unit": "ETH"},
            },
        },
        OTHER_ACCOUNT: {
            MAINNET: {},
        },
    }


@pytest.fixture()
def raw_accounts_by_chain() -> dict:
    return {
        MAINNET: {
            ACCOUNT: {
                "balance": hex(TWO_AND_A_HALF_ETH),
                "stakedBalance": hex(10**18),
            },
        },
    }


@pytest.fixture()
def snapshot(raw_token_balances: dict, raw_accounts_by_chain: dict) -> BalancesSnapshot:
    return build_snapshot(raw_token_balances, raw_accounts_by_chain)


@pytest.fixture()
def empty_snapshot() -> BalancesSnapshot:
    return BalancesSnapshot()


@pytest.fixture()
def sample_rates() -> dict[str, float]:
    return {"ETH": 2000.0, "USDC": 1.0}


@pytest.fixture()
def sample_decimals() -> dict[str, int]:
    return {"ETH": 18, "USDC": 6}


@pytest.fixture()
def usd_display() -> DisplaySettings:
    return DisplaySettings(options=FormatOptions(currency="usd"), locale="en-US")


@pytest.fixture()
def sample_wallet() -> WalletBalance:
    return WalletBalance(
        wallet_id="wallet-1",
        total_balance_in_user_currency=1234.5,
        groups={
            "group-a": GroupBalance("group-a", 1000.0),
            "group-b": GroupBalance("group-b", 0.004),
            "group-c": GroupBalance("group-c", None),
        },
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    display:
      currency: eur
      locale: de-DE
      negligible_threshold: 0.05
    networks:
      show_test_networks: true
      test_networks: ["0x5", "0xAA36A7"]
    tokens:
      native_symbol: ETH
      decimals: {ETH: 18, USDC: 6}
    cache:
      maxsize: 8
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
