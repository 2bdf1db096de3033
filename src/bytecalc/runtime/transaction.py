"""
Transactions accepted by the local runtime.

A transaction carries exactly one program instruction, the fee payer, a
recent blockhash and the payer's signature over the serialized message.
"""

import logging

logger = logging.getLogger(__name__)
from dataclasses import dataclass
from typing import Sequence, Tuple

from ..errors.exceptions import TransactionError
from .keys import Keypair, Pubkey

BLOCKHASH_LENGTH = 32


@dataclass(frozen=True)
class TransactionInstruction:
    """A program invocation: target program, accounts and raw data."""

    program_id: Pubkey
    data: bytes
    accounts: Tuple[Pubkey, ...] = ()

    def __post_init__(self) -> None:
        if len(self.accounts) > 255:
            raise ValueError("At most 255 accounts per instruction")
        # Accept any bytes-like input but store immutable bytes.
        object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "accounts", tuple(self.accounts))

    def to_bytes(self) -> bytes:
        """Serialize instruction to bytes."""
        data = self.program_id.value + len(self.accounts).to_bytes(1, "little")
        for account in self.accounts:
            data += account.value
        data += len(self.data).to_bytes(4, "little") + self.data
        return data


@dataclass(frozen=True)
class Message:
    """The signed part of a transaction."""

    instruction: TransactionInstruction
    payer: Pubkey
    recent_blockhash: bytes

    def __post_init__(self) -> None:
        if len(self.recent_blockhash) != BLOCKHASH_LENGTH:
            raise ValueError(f"Blockhash must be exactly {BLOCKHASH_LENGTH} bytes")

    def serialize(self) -> bytes:
        """Deterministic bytes covered by the payer signature."""
        return self.payer.value + self.recent_blockhash + self.instruction.to_bytes()


@dataclass(frozen=True)
class Transaction:
    """A message plus the payer signature."""

    message: Message
    signature: bytes

    @classmethod
    def new(cls, signers: Sequence[Keypair], message: Message) -> "Transaction":
        """Sign ``message`` with the payer's keypair from ``signers``."""
        for signer in signers:
            if signer.pubkey() == message.payer:
                return cls(message, signer.sign(message.serialize()))
        raise TransactionError(
            "Fee payer is not among the signers", reason="missing_payer_signature"
        )

    @property
    def signature_hex(self) -> str:
        return self.signature.hex()

    def verify(self) -> bool:
        """Check the payer signature over the message."""
        return self.message.payer.verify(self.signature, self.message.serialize())
