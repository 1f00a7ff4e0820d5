"""Shared in-memory fakes for the trading capabilities."""

from __future__ import annotations

import itertools
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import pytest

from hlperps.signing.session import DelegatedSession
from hlperps.trading.contracts import MarketInfo, OrderRequest, TradeParams

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

# Well-known test key (web3 docs); never funded.
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
DELEGATOR_ADDRESS = "0x00000000000000000000000000000000000000aa"
DELEGATOR_PUBLIC_KEY = "0x04" + "ab" * 64


class FakeInfo:
    """Market metadata, mid price and collateral reader."""

    def __init__(
        self,
        universe: list[dict[str, Any]] | None = None,
        mids: dict[str, str] | None = None,
        withdrawable: str = "0",
    ) -> None:
        self.universe = universe if universe is not None else []
        self.mids = mids if mids is not None else {}
        self.withdrawable = withdrawable
        self.calls: list[str] = []

    async def get_markets(self) -> list[MarketInfo]:
        self.calls.append("get_markets")
        return [MarketInfo.from_raw(raw, asset_index=i) for i, raw in enumerate(self.universe)]

    async def get_mid_prices(self) -> dict[str, str]:
        self.calls.append("get_mid_prices")
        return dict(self.mids)

    async def get_withdrawable(self, address: str) -> str:
        self.calls.append(f"get_withdrawable:{address}")
        return self.withdrawable


@dataclass
class FakeWallet:
    session: DelegatedSession


@dataclass
class FakeSubmitter:
    """Records mutating calls instead of sending them."""

    wallet: FakeWallet
    response: dict[str, Any] = field(
        default_factory=lambda: {
            "status": "ok",
            "response": {"type": "order", "data": {"statuses": [{"resting": {"oid": 77}}]}},
        }
    )
    leverage_calls: list[tuple[int, int]] = field(default_factory=list)
    orders: list[OrderRequest] = field(default_factory=list)
    fail_order_with: Exception | None = None
    closed: bool = False

    async def set_leverage(self, asset: int, leverage: int) -> Any:
        self.leverage_calls.append((asset, leverage))
        return {"status": "ok", "response": {"type": "default"}}

    async def submit_order(self, order: OrderRequest) -> Any:
        if self.fail_order_with is not None:
            raise self.fail_order_with
        self.orders.append(order)
        return self.response

    async def close(self) -> None:
        self.closed = True

    @property
    def mutating_calls(self) -> int:
        return len(self.leverage_calls) + len(self.orders)


class FakeSessionProvider:
    """Issues a fresh session per acquisition and tracks its lifecycle."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.fail_with = fail_with
        self.sessions: list[DelegatedSession] = []
        self.credentials: list[str] = []
        self._counter = itertools.count(1)

    @asynccontextmanager
    async def session(
        self, public_key: str, delegatee_private_key: str
    ) -> AsyncIterator[DelegatedSession]:
        if self.fail_with is not None:
            raise self.fail_with
        n = next(self._counter)
        self.credentials.append(delegatee_private_key)
        session = DelegatedSession(
            public_key=public_key,
            session_key_uri=f"lit:session:{n:064x}",
            nonce=str(1_700_000_000_000 + n),
            expires_at=datetime.now(UTC) + timedelta(hours=1),
            session_sigs={"node": {"sig": f"s{n}"}},
        )
        self.sessions.append(session)
        try:
            yield session
        finally:
            session.invalidate()

    def wallet(self, session: DelegatedSession) -> FakeWallet:
        return FakeWallet(session)


class SubmitterFactory:
    def __init__(self) -> None:
        self.submitters: list[FakeSubmitter] = []
        self.fail_order_with: Exception | None = None

    def __call__(self, wallet: FakeWallet) -> FakeSubmitter:
        submitter = FakeSubmitter(wallet=wallet, fail_order_with=self.fail_order_with)
        self.submitters.append(submitter)
        return submitter


def btc_universe(size_decimals: int = 5, max_leverage: int = 40) -> list[dict[str, Any]]:
    return [
        {"name": "BTC", "szDecimals": size_decimals, "maxLeverage": max_leverage},
        {"name": "ETH", "szDecimals": 4, "maxLeverage": 25},
    ]


def make_params(**overrides: Any) -> TradeParams:
    values: dict[str, Any] = {
        "coin": "BTC",
        "side": "buy",
        "amount": "0.01",
        "leverage": "10",
        "delegateePrivateKey": TEST_PRIVATE_KEY,
    }
    values.update(overrides)
    return TradeParams.model_validate(values)


@pytest.fixture
def session_provider() -> FakeSessionProvider:
    return FakeSessionProvider()


@pytest.fixture
def submitter_factory() -> SubmitterFactory:
    return SubmitterFactory()
