"""Market metadata and order request types shared by trading and connectors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from hlperps.trading.contracts.types import TimeInForce


@dataclass(frozen=True)
class MarketInfo:
    """
    Parsed perp market metadata.

    Attributes:
        symbol: Market symbol (e.g., "BTC").
        asset_index: Position in the exchange universe; the asset id for orders.
        size_decimals: Decimal places allowed for order size.
        max_leverage: Maximum leverage for the market.
    """

    symbol: str
    asset_index: int
    size_decimals: int
    max_leverage: int

    @classmethod
    def from_raw(cls, data: dict[str, Any], asset_index: int) -> MarketInfo:
        """Parse one entry of the ``meta`` universe."""
        return cls(
            symbol=data["name"],
            asset_index=asset_index,
            size_decimals=int(data["szDecimals"]),
            max_leverage=int(data["maxLeverage"]),
        )


def find_market(markets: list[MarketInfo], symbol: str) -> MarketInfo | None:
    """Exact symbol lookup; no case folding."""
    for market in markets:
        if market.symbol == symbol:
            return market
    return None


@dataclass(frozen=True)
class OrderRequest:
    """
    A single limit order to submit.

    Attributes:
        asset: Asset index from MarketInfo.
        is_buy: Order side flag.
        price: Limit price as a decimal string.
        size: Order size as a decimal string.
        reduce_only: Only reduce an existing position.
        time_in_force: Limit order TIF.
    """

    asset: int
    is_buy: bool
    price: str
    size: str
    reduce_only: bool = False
    time_in_force: TimeInForce = TimeInForce.GTC

    def to_wire(self) -> dict[str, Any]:
        """Render the exchange's compact order shape."""
        return {
            "a": self.asset,
            "b": self.is_buy,
            "p": self.price,
            "s": self.size,
            "r": self.reduce_only,
            "t": {"limit": {"tif": self.time_in_force.value}},
        }
