"""ByteCalc: a stateless arithmetic program for a blockchain virtual machine.

The program decodes a 17-byte instruction (operation selector plus two signed
64-bit operands), evaluates it and logs the result.
"""

from .config import EvaluatorConfig, ExponentPolicy, OverflowPolicy
from .errors import (
    ArithmeticOverflowError,
    ByteCalcError,
    DecodeError,
    DivisionByZeroError,
    EvaluationError,
    ExponentOutOfRangeError,
    NegativeExponentError,
    UnknownOperationError,
)
from .vm import (
    INSTRUCTION_SIZE,
    Evaluator,
    Instruction,
    Operation,
    decode,
    encode,
    evaluate,
    evaluate_payload,
    process_instruction,
)

__version__ = "0.1.0"

__all__ = [
    "EvaluatorConfig",
    "ExponentPolicy",
    "OverflowPolicy",
    "ByteCalcError",
    "DecodeError",
    "EvaluationError",
    "UnknownOperationError",
    "DivisionByZeroError",
    "NegativeExponentError",
    "ArithmeticOverflowError",
    "ExponentOutOfRangeError",
    "INSTRUCTION_SIZE",
    "Evaluator",
    "Instruction",
    "Operation",
    "decode",
    "encode",
    "evaluate",
    "evaluate_payload",
    "process_instruction",
]
