"""
Host-facing ability: raw parameter dicts in, plain result dicts out.

    ability = HyperliquidPerpsAbility.from_config(HlPerpsConfig.from_env(), sessions=provider)
    await ability.precheck(params, delegation)  # {"withdrawableUSDC": ...} | {"error": ...}
    await ability.execute(params, delegation)   # {"result": "..."} | {"error": ...}
    await ability.close()

``provider`` is the host's delegated-signing client (see
``hlperps.trading.ports.SigningSessionProvider``).

Parameter and delegation validation failures are returned as
``{"error": ...}`` by both phases. Beyond that, precheck lets
infrastructure errors propagate while execute converts them to
``{"error": ...}``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from hlperps.config import HlPerpsConfig
from hlperps.connectors.hyperliquid import HyperliquidExchangeClient, HyperliquidInfoClient
from hlperps.logging_config import configure_logging
from hlperps.trading.contracts import Delegation, Failure, KnownError, TradeParams
from hlperps.trading.execute import ExecuteOrchestrator
from hlperps.trading.precheck import evaluate_precheck

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hlperps.signing.wallet import DelegatedWallet
    from hlperps.trading.ports import (
        CollateralReader,
        MarketMetadataReader,
        MidPriceReader,
        OrderSubmitterFactory,
        SigningSessionProvider,
    )

logger = logging.getLogger(__name__)

PACKAGE_NAME = "hlperps-hyperliquid-perps"
ABILITY_DESCRIPTION = "Trade perps in hyperliquid"


def _format_validation_error(e: ValidationError, prefix: str = "Invalid ability params") -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return f"{prefix}: " + "; ".join(parts)


class HyperliquidPerpsAbility:
    """Precheck and execute entry points bound to concrete capabilities."""

    package_name = PACKAGE_NAME
    description = ABILITY_DESCRIPTION

    def __init__(
        self,
        *,
        markets: MarketMetadataReader,
        mids: MidPriceReader,
        collateral: CollateralReader,
        sessions: SigningSessionProvider,
        submitter_factory: OrderSubmitterFactory,
        config: HlPerpsConfig | None = None,
    ) -> None:
        self._config = config or HlPerpsConfig()
        self._markets = markets
        self._mids = mids
        self._collateral = collateral
        self._orchestrator = ExecuteOrchestrator(
            sessions=sessions,
            submitter_factory=submitter_factory,
            markets=markets,
            mids=mids,
            max_price_decimals=self._config.max_price_decimals,
        )
        self._closeables: list[Any] = []

    @classmethod
    def from_config(
        cls,
        config: HlPerpsConfig | None = None,
        *,
        sessions: SigningSessionProvider,
    ) -> HyperliquidPerpsAbility:
        """Configure logging and wire the Hyperliquid clients around ``sessions``."""
        config = config or HlPerpsConfig()
        configure_logging(config)
        info = HyperliquidInfoClient(config)

        def submitter_factory(wallet: DelegatedWallet) -> HyperliquidExchangeClient:
            return HyperliquidExchangeClient(wallet, config)

        ability = cls(
            markets=info,
            mids=info,
            collateral=info,
            sessions=sessions,
            submitter_factory=submitter_factory,
            config=config,
        )
        ability._closeables.append(info)
        return ability

    async def close(self) -> None:
        for client in self._closeables:
            await client.close()

    @staticmethod
    def parse_params(raw_params: Mapping[str, Any]) -> TradeParams | Failure:
        try:
            return TradeParams.model_validate(dict(raw_params))
        except ValidationError as e:
            return Failure(reason=_format_validation_error(e), code=KnownError.INVALID_PARAMS)

    @staticmethod
    def parse_delegation(delegation: Delegation | Mapping[str, Any]) -> Delegation | Failure:
        if isinstance(delegation, Delegation):
            return delegation
        try:
            return Delegation.model_validate(delegation)
        except ValidationError as e:
            return Failure(
                reason=_format_validation_error(e, "Invalid delegation"),
                code=KnownError.INVALID_PARAMS,
            )

    async def precheck(
        self,
        raw_params: Mapping[str, Any],
        delegation: Delegation | Mapping[str, Any],
    ) -> dict[str, object]:
        params = self.parse_params(raw_params)
        if isinstance(params, Failure):
            return params.to_dict()
        delegation = self.parse_delegation(delegation)
        if isinstance(delegation, Failure):
            return delegation.to_dict()

        outcome = await evaluate_precheck(
            params,
            delegation.eth_address,
            markets=self._markets,
            mids=self._mids,
            collateral=self._collateral,
            slippage_buffer=self._config.slippage_buffer,
        )
        if isinstance(outcome, Failure):
            logger.info("Precheck failed", extra={"coin": params.coin, "code": outcome.code.value})
        return outcome.to_dict()

    async def execute(
        self,
        raw_params: Mapping[str, Any],
        delegation: Delegation | Mapping[str, Any],
    ) -> dict[str, object]:
        params = self.parse_params(raw_params)
        if isinstance(params, Failure):
            return params.to_dict()
        delegation = self.parse_delegation(delegation)
        if isinstance(delegation, Failure):
            return delegation.to_dict()

        outcome = await self._orchestrator.run(params, delegation.public_key)
        return outcome.to_dict()
