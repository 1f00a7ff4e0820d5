"""Decimal helpers for size/price precision and collateral requirements.

All comparisons and arithmetic run on ``Decimal`` parsed from the exchange's
decimal strings, so threshold checks are exact at the boundaries.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from hlperps.config import DEFAULT_SLIPPAGE_BUFFER, MAX_PRICE_DECIMALS


def parse_decimal(v: object) -> Decimal:
    """Parse value to Decimal safely.

    Accepts Decimal (passthrough), str, int, and float (converted via str).
    Raises ValueError on anything unparseable or non-finite.
    """
    if isinstance(v, Decimal):
        result = v
    elif isinstance(v, bool):
        raise ValueError("Cannot convert bool to Decimal")
    elif isinstance(v, (str, int)):
        try:
            result = Decimal(v)
        except InvalidOperation as e:
            raise ValueError(f"Not a decimal: {v!r}") from e
    elif isinstance(v, float):
        result = Decimal(str(v))
    else:
        raise ValueError(f"Cannot convert {type(v).__name__} to Decimal")

    if not result.is_finite():
        raise ValueError(f"Not a finite decimal: {v!r}")
    return result


def min_order_size(size_decimals: int) -> Decimal:
    """Smallest tradable size: 10^-size_decimals."""
    return Decimal(1).scaleb(-size_decimals)


def price_decimals(size_decimals: int, max_decimals: int = MAX_PRICE_DECIMALS) -> int:
    """Decimal places allowed for price, net of size precision."""
    return max_decimals - size_decimals


def price_tick(size_decimals: int, max_decimals: int = MAX_PRICE_DECIMALS) -> Decimal:
    """One price unit at the market's price precision."""
    return Decimal(1).scaleb(-price_decimals(size_decimals, max_decimals))


def marketable_limit_price(
    mid: Decimal,
    is_buy: bool,
    size_decimals: int,
    max_decimals: int = MAX_PRICE_DECIMALS,
) -> Decimal:
    """Limit price one tick through the mid.

    BUY prices one tick above mid, SELL one tick below, so the order crosses
    the spread immediately.
    """
    tick = price_tick(size_decimals, max_decimals)
    return mid + tick if is_buy else mid - tick


def required_collateral(
    mid: Decimal,
    amount: Decimal,
    leverage: int,
    buffer: Decimal = DEFAULT_SLIPPAGE_BUFFER,
) -> Decimal:
    """Expected margin for the position: (mid * amount / leverage) * (1 + buffer)."""
    return (mid * amount / Decimal(leverage)) * (Decimal(1) + buffer)


def format_decimal(v: Decimal) -> str:
    """Plain (non-exponent) decimal string for the wire."""
    text = format(v, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
