"""
Read-only client for the Hyperliquid ``/info`` endpoint.

Implements the market metadata, mid price and collateral capabilities.
Every call fetches fresh data; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from typing import Any

from hlperps.config import HlPerpsConfig
from hlperps.connectors.http import JsonHttpClient
from hlperps.errors import ExchangeError
from hlperps.trading.contracts import MarketInfo

logger = logging.getLogger(__name__)


class HyperliquidInfoClient(JsonHttpClient):
    """Async client for exchange metadata, mids and account state."""

    def __init__(self, config: HlPerpsConfig | None = None) -> None:
        self._config = config or HlPerpsConfig()
        super().__init__(self._config.api_url, self._config.request_timeout_s)

    async def _info(self, request_type: str, **fields: Any) -> Any:
        return await self._post("/info", {"type": request_type, **fields})

    async def get_markets(self) -> list[MarketInfo]:
        """
        Fetch the perp universe.

        Returns:
            MarketInfo per universe entry, with ``asset_index`` set to the
            entry's position (the asset id used by orders).
        """
        data = await self._info("meta")
        if not isinstance(data, dict) or not isinstance(data.get("universe"), list):
            raise ExchangeError("Malformed meta response: missing universe")

        markets: list[MarketInfo] = []
        for index, raw in enumerate(data["universe"]):
            try:
                markets.append(MarketInfo.from_raw(raw, asset_index=index))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(
                    "Failed to parse market",
                    extra={
                        "coin": raw.get("name") if isinstance(raw, dict) else None,
                        "error": str(e),
                    },
                )
        logger.debug("Fetched markets", extra={"count": len(markets)})
        return markets

    async def get_mid_prices(self) -> dict[str, str]:
        """Fetch mid prices for all coins as decimal strings."""
        data = await self._info("allMids")
        if not isinstance(data, dict):
            raise ExchangeError("Malformed allMids response")
        return {str(coin): str(px) for coin, px in data.items()}

    async def get_withdrawable(self, address: str) -> str:
        """Fetch withdrawable collateral (USDC) for ``address``."""
        data = await self._info("clearinghouseState", user=address)
        if not isinstance(data, dict) or "withdrawable" not in data:
            raise ExchangeError("Malformed clearinghouseState response: missing withdrawable")
        return str(data["withdrawable"])
