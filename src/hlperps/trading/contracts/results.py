"""Result payload contracts returned to the host.

Field aliases match the host's camelCase JSON shapes:
- precheck success: {"withdrawableUSDC": <number>}
- execute success: {"result": <json string>}
- failure: {"error": <reason>}
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class _ResultBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, mode="json")


class PrecheckSuccess(_ResultBase):
    """Precheck passed; carries the withdrawable collateral observed."""

    withdrawable_usdc: Decimal = Field(
        alias="withdrawableUSDC",
        ge=0,
        description="Withdrawable collateral at read time",
    )

    @field_serializer("withdrawable_usdc")
    def serialize_withdrawable(self, v: Decimal) -> float:
        """Host contract expects a JSON number."""
        return float(v)


class ExecuteSuccess(_ResultBase):
    """Order submitted; carries the serialized exchange response."""

    result: str = Field(description="JSON-serialized order submission response")


class AbilityFailure(_ResultBase):
    """Failure payload for either phase."""

    error: str = Field(description="Human-readable failure reason")
