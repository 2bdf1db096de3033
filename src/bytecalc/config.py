"""
Configuration for the ByteCalc evaluator.

Overflow and exponent narrowing are the two places where fixed-width
arithmetic needs an explicit policy; both are chosen here.
"""

import logging

logger = logging.getLogger(__name__)
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .errors.exceptions import ConfigurationError


class OverflowPolicy(Enum):
    """What to do when a result leaves the signed 64-bit range."""

    TRAP = "trap"
    WRAP = "wrap"


class ExponentPolicy(Enum):
    """What to do when a Power exponent exceeds the unsigned 32-bit range."""

    REJECT = "reject"
    TRUNCATE = "truncate"


@dataclass
class EvaluatorConfig:
    """Configuration for instruction evaluation."""

    overflow_policy: OverflowPolicy = OverflowPolicy.TRAP
    exponent_policy: ExponentPolicy = ExponentPolicy.REJECT
    trace: bool = True  # emit per-operation trace lines

    def __post_init__(self) -> None:
        self.overflow_policy = _coerce(
            OverflowPolicy, self.overflow_policy, "overflow_policy"
        )
        self.exponent_policy = _coerce(
            ExponentPolicy, self.exponent_policy, "exponent_policy"
        )
        if not isinstance(self.trace, bool):
            raise ConfigurationError(
                "trace must be a boolean", config_key="trace", config_value=self.trace
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "overflow_policy": self.overflow_policy.value,
            "exponent_policy": self.exponent_policy.value,
            "trace": self.trace,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EvaluatorConfig":
        """Create from dictionary."""
        unknown = set(data) - {"overflow_policy", "exponent_policy", "trace"}
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                config_key=sorted(unknown)[0],
            )
        return cls(
            overflow_policy=data.get("overflow_policy", OverflowPolicy.TRAP.value),
            exponent_policy=data.get("exponent_policy", ExponentPolicy.REJECT.value),
            trace=data.get("trace", True),
        )


def _coerce(enum_cls, value, key: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(
            f"Invalid {key} {value!r}; expected one of: {choices}",
            config_key=key,
            config_value=value,
        ) from None
