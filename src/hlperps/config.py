"""
Runtime configuration for the Hyperliquid perps ability.

Values come from constructor arguments or, via ``HlPerpsConfig.from_env()``,
from ``HLPERPS_*`` environment variables. Validation happens in
``__post_init__`` and raises ``ValueError`` naming the offending field.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

MAINNET_API_URL = "https://api.hyperliquid.xyz"
TESTNET_API_URL = "https://api.hyperliquid-testnet.xyz"

# Fixed safety margin on top of the notional margin requirement.
DEFAULT_SLIPPAGE_BUFFER = Decimal("0.01")
# Exchange-wide cap on price decimals, net of size decimals.
MAX_PRICE_DECIMALS = 6

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class HlPerpsConfig:
    """Configuration for the exchange endpoint, pricing constants and logging."""

    api_url: str = MAINNET_API_URL
    is_mainnet: bool = True
    request_timeout_ms: int = 10000
    slippage_buffer: Decimal = DEFAULT_SLIPPAGE_BUFFER
    max_price_decimals: int = MAX_PRICE_DECIMALS
    log_level: str = "INFO"
    json_logs: bool = True

    def __post_init__(self) -> None:
        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError(f"api_url must be an http(s) URL, got {self.api_url!r}")
        if self.request_timeout_ms <= 0:
            raise ValueError(f"request_timeout_ms must be > 0, got {self.request_timeout_ms}")
        if self.slippage_buffer < 0:
            raise ValueError(f"slippage_buffer must be >= 0, got {self.slippage_buffer}")
        if self.max_price_decimals < 0:
            raise ValueError(f"max_price_decimals must be >= 0, got {self.max_price_decimals}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"log_level must be a logging level name, got {self.log_level!r}")

    @property
    def request_timeout_s(self) -> float:
        return self.request_timeout_ms / 1000

    @classmethod
    def from_env(cls) -> HlPerpsConfig:
        """Build config from ``HLPERPS_*`` environment variables."""
        is_mainnet = os.environ.get("HLPERPS_MAINNET", "true").lower() in _TRUTHY
        default_api = MAINNET_API_URL if is_mainnet else TESTNET_API_URL

        raw_buffer = os.environ.get("HLPERPS_SLIPPAGE_BUFFER", str(DEFAULT_SLIPPAGE_BUFFER))
        try:
            slippage_buffer = Decimal(raw_buffer)
        except InvalidOperation as e:
            raise ValueError(f"slippage_buffer must be a decimal, got {raw_buffer!r}") from e

        return cls(
            api_url=os.environ.get("HLPERPS_API_URL", default_api),
            is_mainnet=is_mainnet,
            request_timeout_ms=int(os.environ.get("HLPERPS_REQUEST_TIMEOUT_MS", "10000")),
            slippage_buffer=slippage_buffer,
            max_price_decimals=int(
                os.environ.get("HLPERPS_MAX_PRICE_DECIMALS", str(MAX_PRICE_DECIMALS))
            ),
            log_level=os.environ.get("HLPERPS_LOG_LEVEL", "INFO"),
            json_logs=os.environ.get("HLPERPS_LOG_JSON", "true").lower() in _TRUTHY,
        )
