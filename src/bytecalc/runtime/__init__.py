"""
ByteCalc Local Runtime Package.

An in-process host for the calculator program: keys, signed transactions
and a runtime that executes them and captures program logs.
"""

from .keys import Keypair, Pubkey
from .local_runtime import LocalRuntime, ProgramEntrypoint, TransactionResult
from .transaction import Message, Transaction, TransactionInstruction

__all__ = [
    "Keypair",
    "Pubkey",
    "Message",
    "Transaction",
    "TransactionInstruction",
    "LocalRuntime",
    "ProgramEntrypoint",
    "TransactionResult",
]
