"""Hyperliquid perps connector: ``/info`` reads and signed ``/exchange`` actions."""

from hlperps.connectors.hyperliquid.exchange_client import HyperliquidExchangeClient
from hlperps.connectors.hyperliquid.info_client import HyperliquidInfoClient

__all__ = [
    "HyperliquidExchangeClient",
    "HyperliquidInfoClient",
]
