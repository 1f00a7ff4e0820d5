"""Capability interfaces consumed by the precheck and execute paths.

Concrete implementations live in ``hlperps.connectors.hyperliquid`` and
``hlperps.signing``. The signing session provider is supplied by the host,
which owns the delegated-signing network client; tests substitute in-memory
fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    from hlperps.signing.session import DelegatedSession
    from hlperps.signing.wallet import DelegatedWallet
    from hlperps.trading.contracts import MarketInfo, OrderRequest


class MarketMetadataReader(Protocol):
    async def get_markets(self) -> list[MarketInfo]: ...


class MidPriceReader(Protocol):
    async def get_mid_prices(self) -> dict[str, str]: ...


class CollateralReader(Protocol):
    async def get_withdrawable(self, address: str) -> str: ...


class SigningSessionProvider(Protocol):
    def session(
        self,
        public_key: str,
        delegatee_private_key: str,
    ) -> AbstractAsyncContextManager[DelegatedSession]:
        """Scoped acquisition of a short-lived delegated signing session."""
        ...

    def wallet(self, session: DelegatedSession) -> DelegatedWallet: ...


class OrderSubmitter(Protocol):
    async def set_leverage(self, asset: int, leverage: int) -> Any:
        """Set isolated-margin leverage for the asset."""
        ...

    async def submit_order(self, order: OrderRequest) -> Any: ...

    async def close(self) -> None: ...


class OrderSubmitterFactory(Protocol):
    """Builds an order submitter bound to a delegated wallet."""

    def __call__(self, wallet: DelegatedWallet) -> OrderSubmitter: ...
