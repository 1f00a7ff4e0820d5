"""
Delegated-signing sessions.

A session is acquired per execute call from a host-supplied
``SigningSessionProvider`` and never reused:

    async with provider.session(public_key, delegatee_private_key) as session:
        wallet = provider.wallet(session)
        ...

The provider owns the authorization handshake with the signing network.
This module only defines the session value the execute path holds while
the ``async with`` block is open; the provider invalidates it on exit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class DelegatedSession:
    """
    Short-lived signing authority for one delegator key.

    Attributes:
        public_key: Delegator's public key the session signs for.
        session_key_uri: URI of the per-session key (unique per session).
        nonce: Nonce presented in the delegatee's auth message.
        expires_at: End of the session signature validity window.
        session_sigs: Opaque session signatures issued by the signing network.
        active: Cleared when the owning scope exits.
    """

    public_key: str
    session_key_uri: str
    nonce: str
    expires_at: datetime
    session_sigs: dict[str, Any] = field(repr=False)
    active: bool = True

    def is_valid(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(UTC)
        return self.active and now < self.expires_at

    def invalidate(self) -> None:
        self.active = False
        self.session_sigs = {}
