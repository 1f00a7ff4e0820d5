"""
Signed client for the Hyperliquid ``/exchange`` endpoint.

Implements the order submission capability. Actions are built and hashed
with ``hyperliquid-python-sdk`` and signed by a delegated wallet as L1
actions, then posted once over aiohttp; there is no retry and no
compensation between calls (a leverage update stays in place even if the
following order is rejected).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import orjson
from hyperliquid.utils.signing import (
    action_hash,
    construct_phantom_agent,
    get_timestamp_ms,
    l1_payload,
    order_wires_to_order_action,
)

from hlperps.config import HlPerpsConfig
from hlperps.connectors.http import JsonHttpClient
from hlperps.errors import ExchangeError

if TYPE_CHECKING:
    from hlperps.signing.wallet import DelegatedWallet
    from hlperps.trading.contracts import OrderRequest

logger = logging.getLogger(__name__)


def _check_response(data: Any, action_type: str) -> dict[str, Any]:
    """Raise ExchangeError on ``status: err`` or per-order error statuses."""
    if not isinstance(data, dict):
        raise ExchangeError(f"Malformed {action_type} response")
    if data.get("status") != "ok":
        raise ExchangeError(f"{action_type} rejected: {data.get('response')}")

    response = data.get("response")
    if isinstance(response, dict) and isinstance(response.get("data"), dict):
        statuses = response["data"].get("statuses", [])
        errors = [s["error"] for s in statuses if isinstance(s, dict) and "error" in s]
        if errors:
            raise ExchangeError(f"{action_type} rejected: {'; '.join(map(str, errors))}")
    return data


class HyperliquidExchangeClient(JsonHttpClient):
    """Async order submitter signing with a delegated wallet."""

    def __init__(self, wallet: DelegatedWallet, config: HlPerpsConfig | None = None) -> None:
        self._config = config or HlPerpsConfig()
        super().__init__(self._config.api_url, self._config.request_timeout_s)
        self._wallet = wallet
        self._last_nonce = 0

    def _next_nonce(self) -> int:
        # Millisecond timestamp, strictly increasing per client
        nonce = max(get_timestamp_ms(), self._last_nonce + 1)
        self._last_nonce = nonce
        return nonce

    async def _post_action(self, action: dict[str, Any]) -> dict[str, Any]:
        nonce = self._next_nonce()
        phantom_agent = construct_phantom_agent(
            action_hash(action, None, nonce, None), self._config.is_mainnet
        )
        signature = await self._wallet.sign_typed_data(l1_payload(phantom_agent))
        data = await self._post(
            "/exchange",
            {
                "action": action,
                "nonce": nonce,
                "signature": signature,
                "vaultAddress": None,
            },
        )
        return _check_response(data, action["type"])

    async def set_leverage(self, asset: int, leverage: int) -> dict[str, Any]:
        """Set isolated-margin leverage for ``asset``."""
        action = {
            "type": "updateLeverage",
            "asset": asset,
            "isCross": False,
            "leverage": leverage,
        }
        result = await self._post_action(action)
        logger.info("Leverage set", extra={"asset": asset, "leverage": leverage})
        return result

    async def submit_order(self, order: OrderRequest) -> dict[str, Any]:
        """Submit a single limit order with grouping ``na``."""
        action = order_wires_to_order_action([order.to_wire()])
        result = await self._post_action(action)
        logger.info(
            "Order submitted",
            extra={
                "asset": order.asset,
                "is_buy": order.is_buy,
                "price": order.price,
                "size": order.size,
                "result": orjson.dumps(result.get("response"), default=str).decode()[:200],
            },
        )
        return result
