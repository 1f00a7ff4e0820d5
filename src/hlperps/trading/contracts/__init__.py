"""Trading data contracts.

All contracts follow these invariants:
- Money/price/size arithmetic uses Decimal (not float)
- Strict enums for side and time in force
- No extra fields allowed on host-facing models (extra='forbid')
"""

from hlperps.trading.contracts.market import MarketInfo, OrderRequest, find_market
from hlperps.trading.contracts.outcome import Failure, Outcome, Success
from hlperps.trading.contracts.params import Delegation, TradeParams
from hlperps.trading.contracts.results import AbilityFailure, ExecuteSuccess, PrecheckSuccess
from hlperps.trading.contracts.types import (
    KnownError,
    TimeInForce,
    TradeSide,
)

__all__ = [
    "AbilityFailure",
    "Delegation",
    "ExecuteSuccess",
    "Failure",
    "KnownError",
    "MarketInfo",
    "OrderRequest",
    "Outcome",
    "PrecheckSuccess",
    "Success",
    "TimeInForce",
    "TradeParams",
    "TradeSide",
    "find_market",
]
