"""Delegated signing: session values and session-backed wallets."""

from hlperps.signing.session import DelegatedSession
from hlperps.signing.wallet import (
    DelegatedWallet,
    DigestSigner,
    public_key_to_address,
    split_signature,
    typed_data_digest,
)

__all__ = [
    "DelegatedSession",
    "DelegatedWallet",
    "DigestSigner",
    "public_key_to_address",
    "split_signature",
    "typed_data_digest",
]
