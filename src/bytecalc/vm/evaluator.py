"""
Instruction evaluator for the ByteCalc program.

Dispatches a decoded instruction to one of the six arithmetic operations,
validates the operands for that operation and computes the i64 result under
the configured overflow policy. Trace lines describing the operation are
written to an injectable logger.
"""

import logging

logger = logging.getLogger(__name__)
from typing import Optional, Union

from ..config import EvaluatorConfig, ExponentPolicy, OverflowPolicy
from ..errors.exceptions import (
    ArithmeticOverflowError,
    DivisionByZeroError,
    ExponentOutOfRangeError,
    NegativeExponentError,
    UnknownOperationError,
)
from ..logging.core import ByteCalcLogger, get_logger
from .arithmetic import CHECKED, U32_MAX, WRAPPING
from .instruction import OPERATIONS, Instruction, Operation, decode

PROGRAM_LOGGER_NAME = "bytecalc.program"


class Evaluator:
    """Evaluates calculator instructions.

    Holds no per-call state, so one instance can be shared between threads.
    """

    def __init__(
        self,
        config: Optional[EvaluatorConfig] = None,
        logger: Optional[ByteCalcLogger] = None,
    ):
        self.config = config or EvaluatorConfig()
        self._logger = logger

    @property
    def program_logger(self) -> ByteCalcLogger:
        """Injected logger, or the current global program logger."""
        if self._logger is not None:
            return self._logger
        return get_logger(PROGRAM_LOGGER_NAME)

    def msg(self, message: str) -> None:
        """Write a program trace line."""
        if self.config.trace:
            self.program_logger.info(message)

    def evaluate(self, instruction: Instruction) -> int:
        """Compute the result of ``instruction``.

        Raises:
            UnknownOperationError: selector outside the defined operations.
            DivisionByZeroError: Divide or Modulo by zero.
            NegativeExponentError: Power with a negative exponent.
            ExponentOutOfRangeError: Power exponent above ``2**32 - 1`` under
                the reject policy.
            ArithmeticOverflowError: result outside i64 under the trap policy.
        """
        left, right = instruction.left, instruction.right

        if not instruction.is_known:
            self.msg(f"Unknown operation: {instruction.operation}")
            raise UnknownOperationError(
                f"Unknown operation: {instruction.operation}",
                operation=instruction.operation,
                left=left,
                right=right,
            )

        operation = Operation(instruction.operation)
        info = OPERATIONS[operation]
        self.msg(f"{info.label}: {left} {info.symbol} {right}")

        if info.requires_nonzero_right and right == 0:
            reason = "Division" if operation == Operation.DIVIDE else "Modulus"
            self.msg(f"{reason} by zero is not allowed")
            raise DivisionByZeroError(
                f"{reason} by zero is not allowed",
                operation=operation.value,
                left=left,
                right=right,
            )

        if info.requires_nonnegative_right:
            right = self._narrow_exponent(operation, left, right)

        if self.config.overflow_policy == OverflowPolicy.WRAP:
            return WRAPPING[operation](left, right)

        result = CHECKED[operation](left, right)
        if result is None:
            self.msg(f"Arithmetic overflow in {info.label.lower()}")
            raise ArithmeticOverflowError(
                f"{info.name} of {left} and {instruction.right} overflows i64",
                operation=operation.value,
                left=left,
                right=instruction.right,
            )
        return result

    def _narrow_exponent(self, operation: Operation, left: int, right: int) -> int:
        if right < 0:
            self.msg("Negative exponent is not allowed")
            raise NegativeExponentError(
                "Negative exponent is not allowed",
                operation=operation.value,
                left=left,
                right=right,
            )
        if right > U32_MAX:
            if self.config.exponent_policy == ExponentPolicy.TRUNCATE:
                logger.debug("Truncating exponent %d to 32 bits", right)
                return right & U32_MAX
            self.msg("Exponent out of range")
            raise ExponentOutOfRangeError(
                f"Exponent {right} does not fit in 32 bits",
                operation=operation.value,
                left=left,
                right=right,
            )
        return right

    def evaluate_payload(self, payload: Union[bytes, bytearray, memoryview]) -> int:
        """Decode ``payload`` and evaluate it."""
        return self.evaluate(decode(payload))


def evaluate(
    instruction: Instruction,
    config: Optional[EvaluatorConfig] = None,
    logger: Optional[ByteCalcLogger] = None,
) -> int:
    """Evaluate one instruction with a throwaway :class:`Evaluator`."""
    return Evaluator(config, logger).evaluate(instruction)


def evaluate_payload(
    payload: Union[bytes, bytearray, memoryview],
    config: Optional[EvaluatorConfig] = None,
    logger: Optional[ByteCalcLogger] = None,
) -> int:
    """Decode and evaluate one raw payload."""
    return Evaluator(config, logger).evaluate_payload(payload)
