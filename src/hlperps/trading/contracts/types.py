"""Trading contract enums.

String values match the exchange wire format where one exists.
"""

from enum import Enum


class TradeSide(str, Enum):
    """Requested trade direction (host input)."""

    BUY = "buy"
    SELL = "sell"


class TimeInForce(str, Enum):
    """Limit order time in force."""

    GTC = "Gtc"  # Good Til Cancel


class KnownError(str, Enum):
    """Failure categories surfaced in ``Failure.code``."""

    UNKNOWN_COIN = "UNKNOWN_COIN"
    AMOUNT_BELOW_MINIMUM = "AMOUNT_BELOW_MINIMUM"
    LEVERAGE_EXCEEDS_MAXIMUM = "LEVERAGE_EXCEEDS_MAXIMUM"
    MID_PRICE_UNSUPPORTED = "MID_PRICE_UNSUPPORTED"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    INVALID_PARAMS = "INVALID_PARAMS"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
