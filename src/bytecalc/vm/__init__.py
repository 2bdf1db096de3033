"""
ByteCalc Virtual Machine Package.

This package provides the calculator program: the instruction codec, signed
64-bit arithmetic, the evaluator and the program entrypoint.
"""

from .arithmetic import CHECKED, WRAPPING, to_i64, trunc_div, trunc_rem
from .evaluator import PROGRAM_LOGGER_NAME, Evaluator, evaluate, evaluate_payload
from .instruction import (
    I64_MAX,
    I64_MIN,
    INSTRUCTION_SIZE,
    OPERATIONS,
    Instruction,
    Operation,
    OperationInfo,
    decode,
    encode,
)
from .program import process_instruction

__all__ = [
    # Instructions
    "Instruction",
    "Operation",
    "OperationInfo",
    "OPERATIONS",
    "INSTRUCTION_SIZE",
    "I64_MIN",
    "I64_MAX",
    "decode",
    "encode",
    # Arithmetic
    "CHECKED",
    "WRAPPING",
    "to_i64",
    "trunc_div",
    "trunc_rem",
    # Evaluation
    "Evaluator",
    "PROGRAM_LOGGER_NAME",
    "evaluate",
    "evaluate_payload",
    # Entrypoint
    "process_instruction",
]
