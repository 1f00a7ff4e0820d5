"""
Delegated wallet: an Ethereum identity whose signatures come from a
delegated-signing session rather than a local private key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from eth_account.messages import encode_typed_data
from eth_utils import keccak, to_checksum_address

from hlperps.errors import SigningError

if TYPE_CHECKING:
    from hlperps.signing.session import DelegatedSession


class DigestSigner(Protocol):
    async def sign_digest(self, session: DelegatedSession, digest: bytes) -> str: ...


def public_key_to_address(public_key: str) -> str:
    """Derive the checksummed address for an uncompressed secp256k1 public key."""
    raw = bytes.fromhex(public_key.removeprefix("0x"))
    if len(raw) == 65 and raw[0] == 0x04:
        raw = raw[1:]
    if len(raw) != 64:
        raise ValueError(f"Expected an uncompressed public key, got {len(raw)} bytes")
    return to_checksum_address("0x" + keccak(raw)[-20:].hex())


def split_signature(signature: str) -> dict[str, Any]:
    """Split a 65-byte hex signature into ``{r, s, v}`` with v in {27, 28}."""
    raw = bytes.fromhex(signature.removeprefix("0x"))
    if len(raw) != 65:
        raise SigningError(f"Expected 65-byte signature, got {len(raw)} bytes", stage="sign")
    v = raw[64]
    if v < 27:
        v += 27
    return {"r": "0x" + raw[:32].hex(), "s": "0x" + raw[32:64].hex(), "v": v}


def typed_data_digest(typed_data: dict[str, Any]) -> bytes:
    """EIP-712 digest: keccak(0x19 || version || domainSeparator || structHash)."""
    signable = encode_typed_data(full_message=typed_data)
    return keccak(b"\x19" + signable.version + signable.header + signable.body)


class DelegatedWallet:
    """Wallet bound to one delegated session and the delegator's public key."""

    def __init__(self, signer: DigestSigner, session: DelegatedSession) -> None:
        self._signer = signer
        self._session = session
        self.public_key = session.public_key
        self.address = public_key_to_address(session.public_key)

    async def sign_typed_data(self, typed_data: dict[str, Any]) -> dict[str, Any]:
        """Sign an EIP-712 payload through the session; returns ``{r, s, v}``."""
        digest = typed_data_digest(typed_data)
        signature = await self._signer.sign_digest(self._session, digest)
        return split_signature(signature)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(address={self.address!r})"
