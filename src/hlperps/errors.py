"""Exception types raised by connectors and the execute path.

Validation outcomes are never raised; they are returned as ``Failure``
values. These exceptions cover infrastructure faults only.
"""

from __future__ import annotations


class HlPerpsError(Exception):
    """Base class for hlperps infrastructure errors."""


class ExchangeError(HlPerpsError):
    """Raised on HTTP errors or exchange-level rejections."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class SigningError(HlPerpsError):
    """Raised when the delegated-signing handshake or a signing request fails."""

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage


class MidPriceError(HlPerpsError):
    """Raised when a mid price is missing or non-numeric during execute."""
