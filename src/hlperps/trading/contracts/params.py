"""TradeParams contract.

Parameters supplied by the host for both precheck and execute.
Producer: host runtime (camelCase JSON)
Consumer: Precheck Evaluator, Execute Orchestrator
"""

from __future__ import annotations

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from hlperps.trading.contracts.types import TradeSide

AMOUNT_PATTERN = r"^\d*\.?\d+$"
LEVERAGE_PATTERN = r"^[1-9]\d*$"


class TradeParams(BaseModel):
    """Request to open a leveraged perp position.

    ``amount`` and ``leverage`` stay strings: the amount string is sent to the
    exchange unmodified as the order size.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    coin: str = Field(min_length=1, description="Market symbol, e.g. BTC")
    side: TradeSide = Field(description="buy or sell")
    amount: str = Field(
        pattern=AMOUNT_PATTERN,
        description="Order size in base units as a decimal string",
    )
    leverage: str = Field(
        pattern=LEVERAGE_PATTERN,
        description="Positive integer leverage as a string, e.g. '10'",
    )
    delegatee_private_key: str = Field(
        alias="delegateePrivateKey",
        repr=False,
        description="Delegatee credential used only by execute",
    )

    @field_validator("amount")
    @classmethod
    def validate_amount_positive(cls, v: str) -> str:
        if Decimal(v) <= 0:
            raise ValueError("Amount must be greater than 0")
        return v

    @property
    def amount_decimal(self) -> Decimal:
        return Decimal(self.amount)

    @property
    def leverage_int(self) -> int:
        return int(self.leverage)

    @property
    def is_buy(self) -> bool:
        return self.side == TradeSide.BUY


class Delegation(BaseModel):
    """Identity of the delegator whose account is traded."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    eth_address: str = Field(alias="ethAddress", description="Delegator address (collateral owner)")
    public_key: str = Field(alias="publicKey", description="Delegator uncompressed public key")
