"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from babel import UnknownLocaleError
from dotenv import load_dotenv

from .formatting import (
    DEFAULT_LOCALE,
    DEFAULT_THRESHOLD,
    DisplaySettings,
    FormatOptions,
    normalize_currency,
    parse_locale,
)
from .networks import DEFAULT_TEST_NETWORKS

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DisplayConfig:
    currency: str = "USD"
    locale: str = DEFAULT_LOCALE
    negligible_threshold: float = DEFAULT_THRESHOLD

    def settings(self) -> DisplaySettings:
        return DisplaySettings(
            options=FormatOptions(currency=self.currency),
            locale=self.locale,
            threshold=self.negligible_threshold,
        )


@dataclass(frozen=True)
class NetworksConfig:
    show_test_networks: bool = False
    test_networks: tuple[str, ...] = DEFAULT_TEST_NETWORKS


@dataclass(frozen=True)
class TokensConfig:
    native_symbol: str = "ETH"
    decimals: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class CacheConfig:
    maxsize: int = 32


@dataclass(frozen=True)
class AppConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    networks: NetworksConfig = field(default_factory=NetworksConfig)
    tokens: TokensConfig = field(default_factory=TokensConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


def _as_bool(value: Any) -> bool:
    # Interpolated env vars arrive as strings.
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_display(raw: dict[str, Any]) -> DisplayConfig:
    return DisplayConfig(
        currency=str(raw.get("currency", "USD")).upper(),
        locale=str(raw.get("locale", DEFAULT_LOCALE)),
        negligible_threshold=float(raw.get("negligible_threshold", DEFAULT_THRESHOLD)),
    )


def _build_networks(raw: dict[str, Any]) -> NetworksConfig:
    test_networks = raw.get("test_networks")
    return NetworksConfig(
        show_test_networks=_as_bool(raw.get("show_test_networks", False)),
        test_networks=(
            tuple(str(c) for c in test_networks)
            if test_networks is not None
            else DEFAULT_TEST_NETWORKS
        ),
    )


def _build_tokens(raw: dict[str, Any]) -> TokensConfig:
    return TokensConfig(
        native_symbol=str(raw.get("native_symbol", "ETH")),
        decimals={str(k): int(v) for k, v in (raw.get("decimals") or {}).items()},
    )


def _build_cache(raw: dict[str, Any]) -> CacheConfig:
    return CacheConfig(maxsize=int(raw.get("maxsize", 32)))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def default_config() -> AppConfig:
    """Defaults, without touching the filesystem."""
    return AppConfig()


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        display=_build_display(raw.get("display") or {}),
        networks=_build_networks(raw.get("networks") or {}),
        tokens=_build_tokens(raw.get("tokens") or {}),
        cache=_build_cache(raw.get("cache") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    normalize_currency(cfg.display.currency)

    try:
        parse_locale(cfg.display.locale)
    except (UnknownLocaleError, ValueError) as e:
        raise ValueError(f"Unknown locale '{cfg.display.locale}'") from e

    if cfg.display.negligible_threshold < 0:
        raise ValueError("negligible_threshold must be non-negative")

    if not cfg.tokens.native_symbol:
        raise ValueError("native_symbol must not be empty")

    for symbol, decimals in cfg.tokens.decimals.items():
        if not 0 <= decimals <= 36:
            raise ValueError(f"Token '{symbol}' has out-of-range decimals {decimals}")

    if cfg.cache.maxsize < 1:
        raise ValueError("cache maxsize must be at least 1")
