"""Tests for the instruction evaluator."""

import io

import pytest

from bytecalc.config import EvaluatorConfig, ExponentPolicy, OverflowPolicy
from bytecalc.errors import (
    ArithmeticOverflowError,
    DecodeError,
    DivisionByZeroError,
    EvaluationError,
    ExponentOutOfRangeError,
    NegativeExponentError,
    UnknownOperationError,
)
from bytecalc.logging import LogConfig, setup_logging, shutdown_logging
from bytecalc.vm.evaluator import Evaluator, evaluate, evaluate_payload
from bytecalc.vm.instruction import I64_MAX, I64_MIN, Instruction

WRAP = EvaluatorConfig(overflow_policy=OverflowPolicy.WRAP)


class TestScenarios:
    """Basic calculator scenarios."""

    def test_addition(self):
        assert evaluate(Instruction(0, 10, 5)) == 15

    def test_subtraction(self):
        assert evaluate(Instruction(1, 20, 8)) == 12

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            evaluate(Instruction(3, 10, 0))

    def test_power(self):
        assert evaluate(Instruction(5, 2, 10)) == 1024

    def test_negative_exponent(self):
        with pytest.raises(NegativeExponentError):
            evaluate(Instruction(5, 3, -1))

    def test_unknown_operation(self):
        with pytest.raises(UnknownOperationError):
            evaluate(Instruction(9, 1, 1))


class TestDispatch:
    """Test each operation."""

    @pytest.mark.parametrize(
        "operation,left,right,expected",
        [
            (0, -7, 3, -4),
            (1, 3, 10, -7),
            (2, -6, 7, -42),
            (3, 7, 2, 3),
            (3, -7, 2, -3),
            (3, 7, -2, -3),
            (3, -7, -2, 3),
            (4, 7, 3, 1),
            (4, -7, 3, -1),
            (4, 7, -3, 1),
            (4, -7, -3, -1),
            (5, -2, 3, -8),
            (5, 0, 0, 1),
            (5, 7, 0, 1),
            (5, 0, 5, 0),
        ],
    )
    def test_results(self, operation, left, right, expected):
        """Test truncating division and sign-of-dividend remainder."""
        assert evaluate(Instruction(operation, left, right)) == expected

    def test_modulo_by_zero(self):
        """Test modulo by zero."""
        with pytest.raises(DivisionByZeroError) as exc_info:
            evaluate(Instruction(4, 10, 0))

        assert "Modulus" in exc_info.value.message

    @pytest.mark.parametrize("selector", [6, 7, 100, 255])
    def test_unknown_regardless_of_operands(self, selector):
        """Test unknown selectors fail even with a zero right operand."""
        with pytest.raises(UnknownOperationError) as exc_info:
            evaluate(Instruction(selector, 0, 0))

        assert exc_info.value.operation == selector
        assert exc_info.value.error_code == "UNKNOWN_OPERATION"

    def test_errors_share_base(self):
        """Test evaluation errors share a base class."""
        for exc in (
            UnknownOperationError,
            DivisionByZeroError,
            NegativeExponentError,
            ArithmeticOverflowError,
            ExponentOutOfRangeError,
        ):
            assert issubclass(exc, EvaluationError)

    def test_evaluate_payload(self):
        """Test decode plus evaluate."""
        assert evaluate_payload(Instruction(2, 6, 7).to_bytes()) == 42

    def test_evaluate_payload_bad_length(self):
        """Test decode errors propagate."""
        with pytest.raises(DecodeError):
            evaluate_payload(b"\x00" * 16)


class TestOverflowTrap:
    """Test the default trapping overflow policy."""

    @pytest.mark.parametrize(
        "operation,left,right",
        [
            (0, I64_MAX, 1),
            (1, I64_MIN, 1),
            (2, I64_MAX, 2),
            (3, I64_MIN, -1),
            (4, I64_MIN, -1),
            (5, 2, 63),
            (5, 3, 2**32 - 1),
        ],
    )
    def test_overflow_raises(self, operation, left, right):
        with pytest.raises(ArithmeticOverflowError):
            evaluate(Instruction(operation, left, right))

    def test_boundaries_do_not_trap(self):
        """Test results exactly at the limits are fine."""
        assert evaluate(Instruction(0, I64_MAX - 1, 1)) == I64_MAX
        assert evaluate(Instruction(5, -2, 63)) == I64_MIN
        assert evaluate(Instruction(5, 2, 62)) == 2**62
        assert evaluate(Instruction(3, I64_MIN, 1)) == I64_MIN

    def test_unit_bases_with_huge_exponents(self):
        """Test 0, 1 and -1 never overflow."""
        assert evaluate(Instruction(5, 1, 2**32 - 1)) == 1
        assert evaluate(Instruction(5, -1, 2**32 - 1)) == -1
        assert evaluate(Instruction(5, -1, 2**32 - 2)) == 1
        assert evaluate(Instruction(5, 0, 2**32 - 1)) == 0


class TestOverflowWrap:
    """Test the wrapping overflow policy."""

    def test_add_wraps(self):
        assert evaluate(Instruction(0, I64_MAX, 1), WRAP) == I64_MIN

    def test_sub_wraps(self):
        assert evaluate(Instruction(1, I64_MIN, 1), WRAP) == I64_MAX

    def test_mul_wraps(self):
        assert evaluate(Instruction(2, I64_MAX, 2), WRAP) == -2

    def test_min_div_minus_one(self):
        assert evaluate(Instruction(3, I64_MIN, -1), WRAP) == I64_MIN

    def test_min_rem_minus_one(self):
        assert evaluate(Instruction(4, I64_MIN, -1), WRAP) == 0

    def test_pow_wraps(self):
        assert evaluate(Instruction(5, 2, 64), WRAP) == 0
        assert evaluate(Instruction(5, 2, 63), WRAP) == I64_MIN
        assert evaluate(Instruction(5, 3, 40), WRAP) == 3**40 - 2**64

    def test_division_by_zero_still_rejected(self):
        with pytest.raises(DivisionByZeroError):
            evaluate(Instruction(3, 1, 0), WRAP)


class TestExponentNarrowing:
    """Test exponents above the 32-bit range."""

    def test_reject_by_default(self):
        with pytest.raises(ExponentOutOfRangeError):
            evaluate(Instruction(5, 1, 2**32))

    def test_truncate(self):
        config = EvaluatorConfig(exponent_policy=ExponentPolicy.TRUNCATE)

        # 2**32 + 3 keeps only the low 32 bits: 3
        assert evaluate(Instruction(5, 2, 2**32 + 3), config) == 8
        assert evaluate(Instruction(5, 5, 2**32), config) == 1


class TestTrace:
    """Test program trace lines."""

    def test_success_trace(self, log_capture):
        program_logger, handler = log_capture
        Evaluator(logger=program_logger).evaluate(Instruction(0, 10, 5))

        assert handler.get_messages() == ["Addition: 10 + 5"]

    @pytest.mark.parametrize(
        "instruction,expected",
        [
            (Instruction(3, 10, 0), ["Division: 10 / 0", "Division by zero is not allowed"]),
            (Instruction(4, 10, 0), ["Modulus: 10 % 0", "Modulus by zero is not allowed"]),
            (Instruction(5, 3, -1), ["Power: 3 ^ -1", "Negative exponent is not allowed"]),
            (Instruction(9, 1, 1), ["Unknown operation: 9"]),
        ],
    )
    def test_failure_trace(self, log_capture, instruction, expected):
        program_logger, handler = log_capture
        with pytest.raises(EvaluationError):
            Evaluator(logger=program_logger).evaluate(instruction)

        assert handler.get_messages() == expected

    def test_trace_disabled(self, log_capture):
        program_logger, handler = log_capture
        evaluator = Evaluator(EvaluatorConfig(trace=False), logger=program_logger)

        assert evaluator.evaluate(Instruction(2, 6, 7)) == 42
        assert handler.get_messages() == []

    def test_shared_evaluator_is_stateless(self, log_capture):
        program_logger, _ = log_capture
        evaluator = Evaluator(logger=program_logger)

        assert evaluator.evaluate(Instruction(0, 1, 2)) == 3
        with pytest.raises(DivisionByZeroError):
            evaluator.evaluate(Instruction(3, 1, 0))
        assert evaluator.evaluate(Instruction(1, 1, 2)) == -1

    def test_module_functions_accept_logger(self, log_capture):
        program_logger, handler = log_capture

        assert evaluate(Instruction(0, 10, 5), logger=program_logger) == 15
        payload = Instruction(2, 6, 7).to_bytes()
        assert evaluate_payload(payload, logger=program_logger) == 42

        assert handler.get_messages() == ["Addition: 10 + 5", "Multiplication: 6 * 7"]

    def test_default_logger_follows_global_setup(self):
        """Test an evaluator built before setup_logging writes to the new manager."""
        evaluator = Evaluator()
        first, second = io.StringIO(), io.StringIO()

        setup_logging(LogConfig(stream=first))
        evaluator.evaluate(Instruction(0, 1, 2))
        setup_logging(LogConfig(stream=second))
        evaluator.evaluate(Instruction(1, 5, 3))
        shutdown_logging()

        assert "Addition: 1 + 2" in first.getvalue()
        assert "Subtraction: 5 - 3" in second.getvalue()
        assert "Addition" not in second.getvalue()

    def test_injected_logger_wins(self, log_capture):
        program_logger, _ = log_capture

        assert Evaluator(logger=program_logger).program_logger is program_logger
