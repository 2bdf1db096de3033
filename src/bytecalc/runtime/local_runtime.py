"""
In-process runtime for executing the calculator program.

``LocalRuntime`` plays the role of the blockchain host: programs are
registered under a program id, transactions are checked (signature, recent
blockhash, duplicate submission, known program) and the program is invoked
with a fresh log capture so each :class:`TransactionResult` carries the
lines the program emitted.
"""

import logging

logger = logging.getLogger(__name__)
import secrets
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional, Set

from ..config import EvaluatorConfig
from ..errors.exceptions import ByteCalcError, TransactionError
from ..logging.core import LogConfig, LogLevel, LogManager
from ..logging.formatters import ProgramLogFormatter
from ..logging.handlers import MemoryHandler
from ..vm.evaluator import PROGRAM_LOGGER_NAME, Evaluator
from ..vm.program import process_instruction
from .keys import Pubkey
from .transaction import BLOCKHASH_LENGTH, Transaction

# Called as entrypoint(program_id, accounts, data, evaluator=evaluator)
ProgramEntrypoint = Callable[..., int]


@dataclass
class TransactionResult:
    """Outcome of one submitted transaction."""

    success: bool
    signature: str
    logs: List[str] = field(default_factory=list)
    return_value: Optional[int] = None
    error: Optional[ByteCalcError] = None
    execution_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "success": self.success,
            "signature": self.signature,
            "logs": list(self.logs),
            "return_value": self.return_value,
            "error": self.error.to_dict() if self.error else None,
            "execution_time": self.execution_time,
        }


class LocalRuntime:
    """Single-node program host."""

    def __init__(
        self,
        config: Optional[EvaluatorConfig] = None,
        max_recent_blockhashes: int = 150,
        max_history: int = 1000,
    ):
        if max_recent_blockhashes <= 0:
            raise ValueError("max_recent_blockhashes must be positive")
        if max_history <= 0:
            raise ValueError("max_history must be positive")

        self.config = config or EvaluatorConfig()
        self.programs: Dict[Pubkey, ProgramEntrypoint] = {}
        self._recent_blockhashes: Deque[bytes] = deque(maxlen=max_recent_blockhashes)
        # recent blockhash -> signatures processed against it
        self._processed: Dict[bytes, Set[bytes]] = {}
        self.history: Deque[TransactionResult] = deque(maxlen=max_history)
        self.expire_blockhash()

    def add_program(
        self, program_id: Pubkey, entrypoint: ProgramEntrypoint = process_instruction
    ) -> None:
        """Register ``entrypoint`` under ``program_id``."""
        if program_id in self.programs:
            raise ValueError(f"Program {program_id} is already deployed")
        self.programs[program_id] = entrypoint
        logger.info("Deployed program %s", program_id)

    def latest_blockhash(self) -> bytes:
        return self._recent_blockhashes[-1]

    def expire_blockhash(self) -> bytes:
        """Advance to a new latest blockhash."""
        blockhash = secrets.token_bytes(BLOCKHASH_LENGTH)
        if len(self._recent_blockhashes) == self._recent_blockhashes.maxlen:
            evicted = self._recent_blockhashes[0]
            self._processed.pop(evicted, None)
        self._recent_blockhashes.append(blockhash)
        return blockhash

    def send_transaction(self, transaction: Transaction) -> TransactionResult:
        """Validate and execute ``transaction``.

        Rejections before execution produce a failed result with a
        :class:`TransactionError` and no program logs.
        """
        signature = transaction.signature_hex
        rejection = self._check(transaction)
        if rejection is not None:
            logger.warning("Rejected transaction %s: %s", signature[:16], rejection)
            result = TransactionResult(
                success=False,
                signature=signature,
                error=TransactionError(
                    rejection, signature=signature, reason=rejection
                ),
            )
            self.history.append(result)
            return result

        self._processed.setdefault(
            transaction.message.recent_blockhash, set()
        ).add(transaction.signature)
        result = self._execute(transaction)
        self.history.append(result)
        return result

    def _check(self, transaction: Transaction) -> Optional[str]:
        message = transaction.message
        if transaction.signature in self._processed.get(message.recent_blockhash, ()):
            return "AlreadyProcessed"
        if not transaction.verify():
            return "SignatureFailure"
        if message.recent_blockhash not in self._recent_blockhashes:
            return "BlockhashNotFound"
        if message.instruction.program_id not in self.programs:
            return "ProgramAccountNotFound"
        return None

    def _execute(self, transaction: Transaction) -> TransactionResult:
        instruction = transaction.message.instruction
        program_id = instruction.program_id

        capture = MemoryHandler()
        capture.set_formatter(ProgramLogFormatter())
        manager = LogManager(LogConfig(level=LogLevel.INFO, handlers=["memory"]))
        manager.add_handler("memory", capture)
        program_logger = manager.get_logger(PROGRAM_LOGGER_NAME)
        evaluator = Evaluator(self.config, logger=program_logger)

        result = TransactionResult(success=False, signature=transaction.signature_hex)
        start_time = time.time()
        program_logger.info(f"Program {program_id} invoke [1]")
        try:
            result.return_value = self.programs[program_id](
                program_id, instruction.accounts, instruction.data, evaluator=evaluator
            )
            result.success = True
            program_logger.info(f"Program {program_id} success")
        except ByteCalcError as e:
            result.error = e
            program_logger.info(
                f"Program {program_id} failed: {e.program_error.value}"
            )
        finally:
            result.execution_time = time.time() - start_time
            result.logs = capture.get_lines()
            manager.shutdown()

        return result
