"""ByteCalc Error Handling System.

This module provides the exception hierarchy raised by the instruction
decoder, the evaluator, the configuration layer and the local runtime.
"""

from .exceptions import (
    ArithmeticOverflowError,
    ByteCalcError,
    ConfigurationError,
    DecodeError,
    DivisionByZeroError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    EvaluationError,
    ExponentOutOfRangeError,
    NegativeExponentError,
    ProgramErrorCode,
    TransactionError,
    UnknownOperationError,
    ValidationError,
)

__all__ = [
    # Base
    "ByteCalcError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "ProgramErrorCode",
    # Decode / validation
    "DecodeError",
    "ValidationError",
    # Evaluation
    "EvaluationError",
    "UnknownOperationError",
    "DivisionByZeroError",
    "NegativeExponentError",
    "ArithmeticOverflowError",
    "ExponentOutOfRangeError",
    # Host
    "ConfigurationError",
    "TransactionError",
]
