"""
Calculator instruction definitions and wire codec.

An instruction is a one-byte operation selector followed by two signed
64-bit operands, little-endian, 17 bytes in total.
"""

import logging

logger = logging.getLogger(__name__)
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Union

from ..errors.exceptions import DecodeError, UnknownOperationError, ValidationError

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
U8_MAX = 0xFF

INSTRUCTION_LAYOUT = struct.Struct("<Bqq")
INSTRUCTION_SIZE = INSTRUCTION_LAYOUT.size  # 17


class Operation(IntEnum):
    """Operation selectors understood by the program."""

    ADD = 0
    SUBTRACT = 1
    MULTIPLY = 2
    DIVIDE = 3
    MODULO = 4
    POWER = 5

    @classmethod
    def from_name(cls, name: str) -> "Operation":
        """Resolve an operation from its name, symbol or alias."""
        key = name.strip().lower()
        for operation, info in OPERATIONS.items():
            if key == operation.name.lower() or key == info.symbol or key in info.aliases:
                return operation
        raise ValueError(f"Unknown operation name: {name!r}")


@dataclass(frozen=True)
class OperationInfo:
    """Information about an operation."""

    name: str
    symbol: str
    label: str
    description: str
    aliases: tuple = ()
    requires_nonzero_right: bool = False
    requires_nonnegative_right: bool = False


OPERATIONS: Dict[Operation, OperationInfo] = {
    Operation.ADD: OperationInfo(
        name="Add",
        symbol="+",
        label="Addition",
        description="left + right",
        aliases=("add", "plus"),
    ),
    Operation.SUBTRACT: OperationInfo(
        name="Subtract",
        symbol="-",
        label="Subtraction",
        description="left - right",
        aliases=("sub", "minus"),
    ),
    Operation.MULTIPLY: OperationInfo(
        name="Multiply",
        symbol="*",
        label="Multiplication",
        description="left * right",
        aliases=("mul", "times"),
    ),
    Operation.DIVIDE: OperationInfo(
        name="Divide",
        symbol="/",
        label="Division",
        description="left / right, truncating toward zero",
        aliases=("div",),
        requires_nonzero_right=True,
    ),
    Operation.MODULO: OperationInfo(
        name="Modulo",
        symbol="%",
        label="Modulus",
        description="left % right, sign follows left",
        aliases=("mod", "rem"),
        requires_nonzero_right=True,
    ),
    Operation.POWER: OperationInfo(
        name="Power",
        symbol="^",
        label="Power",
        description="left raised to the non-negative power right",
        aliases=("pow", "exp", "**"),
        requires_nonnegative_right=True,
    ),
}


def _check_range(field_name: str, value: int, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{field_name} must be an integer",
            field=field_name,
            value=value,
            expected="int",
        )
    if not low <= value <= high:
        raise ValidationError(
            f"{field_name} {value} is outside [{low}, {high}]",
            field=field_name,
            value=value,
            expected=f"[{low}, {high}]",
        )


@dataclass(frozen=True)
class Instruction:
    """A decoded calculator instruction.

    ``operation`` holds the raw selector byte. Selectors outside the defined
    set are representable on the wire and are only rejected when the
    instruction is evaluated.
    """

    operation: int
    left: int
    right: int

    def __post_init__(self) -> None:
        _check_range("operation", self.operation, 0, U8_MAX)
        _check_range("left", self.left, I64_MIN, I64_MAX)
        _check_range("right", self.right, I64_MIN, I64_MAX)

    @property
    def is_known(self) -> bool:
        """Whether the selector names one of the defined operations."""
        return self.operation in Operation._value2member_map_

    @property
    def op(self) -> Operation:
        """The selector as an :class:`Operation`."""
        if not self.is_known:
            raise UnknownOperationError(
                f"Unknown operation: {self.operation}",
                operation=self.operation,
                left=self.left,
                right=self.right,
            )
        return Operation(self.operation)

    def to_bytes(self) -> bytes:
        """Serialize instruction to its 17-byte wire form."""
        return INSTRUCTION_LAYOUT.pack(self.operation, self.left, self.right)

    @classmethod
    def from_bytes(cls, payload: Union[bytes, bytearray, memoryview]) -> "Instruction":
        """Deserialize an instruction from its wire form."""
        return decode(payload)

    def __str__(self) -> str:
        if self.is_known:
            symbol = OPERATIONS[Operation(self.operation)].symbol
            return f"{self.left} {symbol} {self.right}"
        return f"op{self.operation}({self.left}, {self.right})"


def decode(payload: Union[bytes, bytearray, memoryview]) -> Instruction:
    """Decode a raw payload into an :class:`Instruction`.

    Raises:
        DecodeError: if the payload is not a byte sequence of exactly
            ``INSTRUCTION_SIZE`` bytes.
    """
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        raise DecodeError(
            f"Instruction payload must be bytes, got {type(payload).__name__}",
            expected_length=INSTRUCTION_SIZE,
        )

    data = bytes(payload)
    if len(data) != INSTRUCTION_SIZE:
        raise DecodeError(
            f"Instruction payload must be {INSTRUCTION_SIZE} bytes, got {len(data)}",
            payload_length=len(data),
            expected_length=INSTRUCTION_SIZE,
        )

    operation, left, right = INSTRUCTION_LAYOUT.unpack(data)
    logger.debug("Decoded instruction op=%d left=%d right=%d", operation, left, right)
    return Instruction(operation=operation, left=left, right=right)


def encode(instruction: Instruction) -> bytes:
    """Encode an :class:`Instruction` into its 17-byte wire form."""
    return instruction.to_bytes()
