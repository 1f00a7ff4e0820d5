"""Outcome result type: exactly one of Success or Failure per operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from hlperps.trading.contracts.results import AbilityFailure, ExecuteSuccess, PrecheckSuccess
from hlperps.trading.contracts.types import KnownError

T = TypeVar("T", PrecheckSuccess, ExecuteSuccess)


@dataclass(frozen=True)
class Success(Generic[T]):
    """Operation succeeded with a typed payload."""

    payload: T

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict[str, object]:
        return self.payload.to_payload()


@dataclass(frozen=True)
class Failure:
    """Operation failed with a human-readable reason."""

    reason: str
    code: KnownError = KnownError.UNKNOWN_ERROR

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> dict[str, object]:
        return AbilityFailure(error=self.reason).to_payload()


Outcome = Success[T] | Failure
