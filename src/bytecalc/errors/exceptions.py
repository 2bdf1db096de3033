"""Exception hierarchy for ByteCalc.

This module defines the structured errors raised while decoding and
evaluating calculator instructions, plus the errors raised by the local
runtime and the configuration layer.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""

    DECODE = "decode"
    EVALUATION = "evaluation"
    VALIDATION = "validation"
    TRANSACTION = "transaction"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


class ProgramErrorCode(Enum):
    """Error codes reported at the program boundary."""

    INVALID_INSTRUCTION_DATA = "InvalidInstructionData"
    INVALID_ARGUMENT = "InvalidArgument"


@dataclass
class ErrorContext:
    """Context information for an error."""

    timestamp: float = field(default_factory=time.time)
    program_id: Optional[str] = None
    component: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary."""
        return {
            "timestamp": self.timestamp,
            "program_id": self.program_id,
            "component": self.component,
            "metadata": self.metadata,
        }


class ByteCalcError(Exception):
    """Base exception for all ByteCalc errors."""

    default_code: Optional[str] = None

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        context: Optional[ErrorContext] = None,
        program_error: ProgramErrorCode = ProgramErrorCode.INVALID_INSTRUCTION_DATA,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.severity = severity
        self.category = category
        self.context = context or ErrorContext()
        self.program_error = program_error
        self.metadata = metadata or {}
        self.timestamp = time.time()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "severity": self.severity.value,
            "category": self.category.value,
            "context": self.context.to_dict(),
            "program_error": self.program_error.value,
            "metadata": self.metadata,
            "timestamp": self.timestamp,
        }

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"{self.__class__.__name__}: {self.message}"]

        if self.error_code:
            parts.append(f"Code: {self.error_code}")

        if self.severity != ErrorSeverity.MEDIUM:
            parts.append(f"Severity: {self.severity.value}")

        if self.category != ErrorCategory.SYSTEM:
            parts.append(f"Category: {self.category.value}")

        return " | ".join(parts)


class DecodeError(ByteCalcError):
    """Instruction payload could not be parsed into the fixed layout."""

    default_code = "DECODE_ERROR"

    def __init__(
        self,
        message: str,
        payload_length: Optional[int] = None,
        expected_length: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.DECODE, **kwargs)
        self.payload_length = payload_length
        self.expected_length = expected_length

    def to_dict(self) -> Dict[str, Any]:
        """Convert decode error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "payload_length": self.payload_length,
                "expected_length": self.expected_length,
            }
        )
        return data


class ValidationError(ByteCalcError):
    """Validation error."""

    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        expected: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.VALIDATION, **kwargs)
        self.field = field
        self.value = value
        self.expected = expected

    def to_dict(self) -> Dict[str, Any]:
        """Convert validation error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "field": self.field,
                "value": str(self.value) if self.value is not None else None,
                "expected": str(self.expected) if self.expected is not None else None,
            }
        )
        return data


class EvaluationError(ByteCalcError):
    """Base class for failures while evaluating a decoded instruction."""

    default_code = "EVALUATION_ERROR"

    def __init__(
        self,
        message: str,
        operation: Optional[int] = None,
        left: Optional[int] = None,
        right: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.EVALUATION, **kwargs)
        self.operation = operation
        self.left = left
        self.right = right

    def to_dict(self) -> Dict[str, Any]:
        """Convert evaluation error to dictionary."""
        data = super().to_dict()
        data.update(
            {"operation": self.operation, "left": self.left, "right": self.right}
        )
        return data


class UnknownOperationError(EvaluationError):
    """Operation selector outside the defined set."""

    default_code = "UNKNOWN_OPERATION"


class DivisionByZeroError(EvaluationError):
    """Divide or Modulo with a zero right-hand operand."""

    default_code = "DIVISION_BY_ZERO"


class NegativeExponentError(EvaluationError):
    """Power with a negative exponent."""

    default_code = "NEGATIVE_EXPONENT"


class ArithmeticOverflowError(EvaluationError):
    """Result does not fit in a signed 64-bit integer."""

    default_code = "ARITHMETIC_OVERFLOW"

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        super().__init__(message, **kwargs)


class ExponentOutOfRangeError(EvaluationError):
    """Power exponent does not fit in an unsigned 32-bit integer."""

    default_code = "EXPONENT_OUT_OF_RANGE"


class ConfigurationError(ByteCalcError):
    """Configuration error."""

    default_code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            program_error=ProgramErrorCode.INVALID_ARGUMENT,
            **kwargs,
        )
        self.config_key = config_key
        self.config_value = config_value

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "config_key": self.config_key,
                "config_value": str(self.config_value)
                if self.config_value is not None
                else None,
            }
        )
        return data


class TransactionError(ByteCalcError):
    """Transaction rejected by the local runtime before program execution."""

    default_code = "TRANSACTION_ERROR"

    def __init__(
        self,
        message: str,
        signature: Optional[str] = None,
        reason: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(
            message,
            category=ErrorCategory.TRANSACTION,
            program_error=ProgramErrorCode.INVALID_ARGUMENT,
            **kwargs,
        )
        self.signature = signature
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction error to dictionary."""
        data = super().to_dict()
        data.update({"signature": self.signature, "reason": self.reason})
        return data
