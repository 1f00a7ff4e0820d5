"""
Execute Orchestrator.

Opens the position requested by ``TradeParams`` on behalf of the delegator:
1. acquire a delegated signing session for the delegator's public key
2. bind an order submitter to a wallet backed by that session
3. re-resolve the coin from fresh metadata (returns Failure if unknown)
4. set isolated leverage for the coin
5. re-fetch the mid price; price one tick through it
   (tick = 10^-(max_price_decimals - szDecimals))
6. submit one GTC limit order with the original amount string as size
7. return the JSON-serialized exchange response

Collateral is not re-checked here; callers run precheck first. Any exception
is logged and converted to a Failure at the ``run`` boundary.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import orjson

from hlperps.config import MAX_PRICE_DECIMALS
from hlperps.errors import MidPriceError
from hlperps.trading.contracts import (
    ExecuteSuccess,
    Failure,
    KnownError,
    OrderRequest,
    Success,
    find_market,
)
from hlperps.trading.numeric import format_decimal, marketable_limit_price, parse_decimal
from hlperps.trading.precheck import unknown_coin_failure

if TYPE_CHECKING:
    from decimal import Decimal

    from hlperps.trading.contracts import Outcome, TradeParams
    from hlperps.trading.ports import (
        MarketMetadataReader,
        MidPriceReader,
        OrderSubmitter,
        OrderSubmitterFactory,
        SigningSessionProvider,
    )

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


def parse_mid_price(coin: str, raw_mid: object) -> Decimal:
    """Parse a quoted mid; raises MidPriceError when missing or non-numeric."""
    if raw_mid is None:
        raise MidPriceError(f"midPrice for {coin} is not a number")
    try:
        return parse_decimal(raw_mid)
    except ValueError as e:
        raise MidPriceError(f"midPrice for {coin} is not a number") from e


class ExecuteOrchestrator:
    """Authenticates per call and submits a marketable limit order."""

    def __init__(
        self,
        *,
        sessions: SigningSessionProvider,
        submitter_factory: OrderSubmitterFactory,
        markets: MarketMetadataReader,
        mids: MidPriceReader,
        max_price_decimals: int = MAX_PRICE_DECIMALS,
    ) -> None:
        self._sessions = sessions
        self._submitter_factory = submitter_factory
        self._markets = markets
        self._mids = mids
        self._max_price_decimals = max_price_decimals

    async def run(self, params: TradeParams, delegator_public_key: str) -> Outcome[ExecuteSuccess]:
        """
        Execute the trade.

        Args:
            params: Validated trade parameters including the delegatee credential.
            delegator_public_key: Public key of the account being traded.

        Returns:
            Success with the serialized exchange response, or Failure.
        """
        try:
            return await self._run(params, delegator_public_key)
        except Exception as e:
            logger.error("Execute failed", exc_info=True, extra={"coin": params.coin})
            return Failure(reason=str(e) or UNKNOWN_ERROR_MESSAGE, code=KnownError.UNKNOWN_ERROR)

    async def _run(self, params: TradeParams, delegator_public_key: str) -> Outcome[ExecuteSuccess]:
        async with self._sessions.session(
            delegator_public_key, params.delegatee_private_key
        ) as session:
            submitter = self._submitter_factory(self._sessions.wallet(session))
            try:
                return await self._place(params, submitter)
            finally:
                await submitter.close()

    async def _place(
        self, params: TradeParams, submitter: OrderSubmitter
    ) -> Outcome[ExecuteSuccess]:
        coin = params.coin

        market = find_market(await self._markets.get_markets(), coin)
        if market is None:
            return unknown_coin_failure(coin)

        await submitter.set_leverage(market.asset_index, params.leverage_int)

        mid = parse_mid_price(coin, (await self._mids.get_mid_prices()).get(coin))
        price = marketable_limit_price(
            mid, params.is_buy, market.size_decimals, self._max_price_decimals
        )

        order = OrderRequest(
            asset=market.asset_index,
            is_buy=params.is_buy,
            price=format_decimal(price),
            size=params.amount,
        )
        result = await submitter.submit_order(order)

        serialized = orjson.dumps(result, default=str).decode()
        return Success(ExecuteSuccess(result=serialized))
