"""
Ed25519 keys for the local runtime.

Program ids and fee payers are identified by 32-byte Ed25519 public keys.
"""

import logging

logger = logging.getLogger(__name__)
import secrets
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

PUBKEY_LENGTH = 32
SIGNATURE_LENGTH = 64


@dataclass(frozen=True)
class Pubkey:
    """Immutable 32-byte public key."""

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != PUBKEY_LENGTH:
            raise ValueError(f"Pubkey must be exactly {PUBKEY_LENGTH} bytes")

    @classmethod
    def new_unique(cls) -> "Pubkey":
        """Random key with no private half, for ids that never sign."""
        return cls(secrets.token_bytes(PUBKEY_LENGTH))

    @classmethod
    def from_hex(cls, hex_string: str) -> "Pubkey":
        """Create a pubkey from hexadecimal string."""
        return cls(bytes.fromhex(hex_string))

    def to_hex(self) -> str:
        """Convert pubkey to hexadecimal string."""
        return self.value.hex()

    def verify(self, signature: bytes, message: bytes) -> bool:
        """Verify an Ed25519 signature made by this key."""
        if len(signature) != SIGNATURE_LENGTH:
            return False
        try:
            key = ed25519.Ed25519PublicKey.from_public_bytes(self.value)
            key.verify(signature, message)
            return True
        except (InvalidSignature, ValueError):
            return False

    def __str__(self) -> str:
        return self.value.hex()

    def __repr__(self) -> str:
        return f"Pubkey('{self.value.hex()[:16]}...')"


@dataclass(frozen=True)
class Keypair:
    """Ed25519 signing keypair."""

    _key: ed25519.Ed25519PrivateKey

    @classmethod
    def generate(cls) -> "Keypair":
        """Generate a new random keypair."""
        return cls(ed25519.Ed25519PrivateKey.generate())

    @classmethod
    def from_seed(cls, seed: bytes) -> "Keypair":
        """Create a keypair from a 32-byte seed."""
        if len(seed) != 32:
            raise ValueError("Keypair seed must be exactly 32 bytes")
        return cls(ed25519.Ed25519PrivateKey.from_private_bytes(seed))

    def seed(self) -> bytes:
        """Raw 32-byte private seed."""
        return self._key.private_bytes(
            Encoding.Raw, PrivateFormat.Raw, NoEncryption()
        )

    def pubkey(self) -> Pubkey:
        """Public half of the keypair."""
        return Pubkey(
            self._key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        )

    def sign(self, message: bytes) -> bytes:
        """Sign ``message`` and return the 64-byte signature."""
        return self._key.sign(message)

    def __repr__(self) -> str:
        return f"Keypair(pubkey={self.pubkey()!r})"
