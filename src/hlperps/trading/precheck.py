"""
Precheck Evaluator.

Read-only admissibility check for a requested trade. Checks, in order and
short-circuiting on the first failure:
- coin exists in market metadata
- amount >= minimum size (10^-szDecimals)
- leverage <= market max leverage
- mid price quoted for the coin
- withdrawable collateral >= (mid * amount / leverage) * (1 + buffer)

Nothing is reserved or mutated. Infrastructure errors (metadata, collateral
or mid price fetch failures) propagate to the caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hlperps.config import DEFAULT_SLIPPAGE_BUFFER
from hlperps.trading.contracts import (
    Failure,
    KnownError,
    PrecheckSuccess,
    Success,
    find_market,
)
from hlperps.trading.numeric import (
    format_decimal,
    min_order_size,
    parse_decimal,
    required_collateral,
)

if TYPE_CHECKING:
    from decimal import Decimal

    from hlperps.trading.contracts import Outcome, TradeParams
    from hlperps.trading.ports import CollateralReader, MarketMetadataReader, MidPriceReader

logger = logging.getLogger(__name__)


def unknown_coin_failure(coin: str) -> Failure:
    return Failure(
        reason=f"Coin '{coin}' is not a valid asset on Hyperliquid.",
        code=KnownError.UNKNOWN_COIN,
    )


async def evaluate_precheck(
    params: TradeParams,
    delegator_address: str,
    *,
    markets: MarketMetadataReader,
    mids: MidPriceReader,
    collateral: CollateralReader,
    slippage_buffer: Decimal = DEFAULT_SLIPPAGE_BUFFER,
) -> Outcome[PrecheckSuccess]:
    """
    Evaluate whether the trade is admissible right now.

    Args:
        params: Validated trade parameters.
        delegator_address: Address whose collateral backs the position.
        markets: Market metadata capability.
        mids: Mid price capability.
        collateral: Collateral capability.
        slippage_buffer: Fractional buffer on the margin requirement.

    Returns:
        Success with the observed withdrawable collateral, or Failure.
    """
    coin = params.coin

    market = find_market(await markets.get_markets(), coin)
    if market is None:
        return unknown_coin_failure(coin)

    amount = params.amount_decimal
    min_size = min_order_size(market.size_decimals)
    if amount < min_size:
        return Failure(
            reason=(
                f"Amount {params.amount} is less than minimum size "
                f"{format_decimal(min_size)} for coin {coin}."
            ),
            code=KnownError.AMOUNT_BELOW_MINIMUM,
        )

    leverage = params.leverage_int
    if leverage > market.max_leverage:
        return Failure(
            reason=(
                f"Leverage {params.leverage} is not allowed for coin {coin}. "
                f"Max leverage is {market.max_leverage}."
            ),
            code=KnownError.LEVERAGE_EXCEEDS_MAXIMUM,
        )

    withdrawable = parse_decimal(await collateral.get_withdrawable(delegator_address))

    raw_mid = (await mids.get_mid_prices()).get(coin)
    if raw_mid is None:
        return Failure(
            reason=f"MidPrice of Coin {coin} is not supported.",
            code=KnownError.MID_PRICE_UNSUPPORTED,
        )
    mid = parse_decimal(raw_mid)
    logger.info("Mid price fetched", extra={"coin": coin, "mid_price": raw_mid})

    expected = required_collateral(mid, amount, leverage, slippage_buffer)
    if withdrawable < expected:
        return Failure(
            reason=(
                f"Insufficient withdrawable USDC balance {format_decimal(withdrawable)} "
                f"to open position requiring approximately {format_decimal(expected)} USDC."
            ),
            code=KnownError.INSUFFICIENT_BALANCE,
        )

    return Success(PrecheckSuccess(withdrawable_usdc=withdrawable))
