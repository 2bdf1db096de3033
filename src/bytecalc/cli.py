#!/usr/bin/env python3
"""
Command line interface for ByteCalc.

    bytecalc encode add 10 5        # print the 17-byte payload as hex
    bytecalc decode 000a000000...   # print the decoded instruction
    bytecalc eval pow 2 10          # evaluate in-process, trace on stderr
    bytecalc run sub 20 8           # send a signed transaction to a local runtime
"""

import argparse
import json
import sys
from typing import List, Optional

from .config import EvaluatorConfig, ExponentPolicy, OverflowPolicy
from .errors.exceptions import ByteCalcError
from .logging.core import LogConfig, LogContext, setup_logging, shutdown_logging
from .runtime import Keypair, LocalRuntime, Message, Transaction, TransactionInstruction
from .vm.evaluator import Evaluator
from .vm.program import process_instruction
from .vm.instruction import OPERATIONS, Instruction, Operation, decode


def parse_operation(value: str) -> int:
    """Accept an operation name, symbol or raw selector number."""
    try:
        return int(value, 0)
    except ValueError:
        pass
    try:
        return int(Operation.from_name(value))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bytecalc", description="Encode, decode and evaluate calculator instructions"
    )
    parser.add_argument(
        "--overflow",
        choices=[policy.value for policy in OverflowPolicy],
        default=OverflowPolicy.TRAP.value,
        help="Overflow policy for i64 results",
    )
    parser.add_argument(
        "--exponent",
        choices=[policy.value for policy in ExponentPolicy],
        default=ExponentPolicy.REJECT.value,
        help="Policy for Power exponents above 2**32 - 1",
    )
    parser.add_argument(
        "--log-format", choices=["text", "json"], default="text", help="Trace format"
    )
    parser.add_argument(
        "--no-trace", action="store_true", help="Do not emit program trace lines"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("encode", "Print the payload for an instruction as hex"),
        ("eval", "Evaluate an instruction"),
        ("run", "Execute an instruction through a local runtime"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("operation", type=parse_operation, help="Operation name or selector")
        sub.add_argument("left", type=int, help="Left operand")
        sub.add_argument("right", type=int, help="Right operand")

    decode_parser = subparsers.add_parser("decode", help="Decode a hex payload")
    decode_parser.add_argument("payload", help="Payload bytes as hex")

    return parser


def _instruction(parser: argparse.ArgumentParser, args) -> Instruction:
    try:
        return Instruction(args.operation, args.left, args.right)
    except ByteCalcError as e:
        parser.error(e.message)


def _describe(instruction: Instruction) -> str:
    name = (
        OPERATIONS[Operation(instruction.operation)].name
        if instruction.is_known
        else "Unknown"
    )
    return (
        f"operation={instruction.operation} ({name}) "
        f"left={instruction.left} right={instruction.right}"
    )


def _run(instruction: Instruction, config: EvaluatorConfig) -> int:
    runtime = LocalRuntime(config)
    payer = Keypair.generate()
    program_id = Keypair.generate().pubkey()
    runtime.add_program(program_id)

    message = Message(
        TransactionInstruction(program_id, instruction.to_bytes()),
        payer.pubkey(),
        runtime.latest_blockhash(),
    )
    result = runtime.send_transaction(Transaction.new([payer], message))
    for line in result.logs:
        print(line)
    if not result.success:
        print(f"Transaction failed: {result.error}", file=sys.stderr)
        return 1
    print(f"Transaction {result.signature[:16]}... succeeded")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``bytecalc`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = EvaluatorConfig(
        overflow_policy=args.overflow,
        exponent_policy=args.exponent,
        trace=not args.no_trace,
    )
    manager = setup_logging(LogConfig(format_type=args.log_format, stream=sys.stderr))
    manager.set_context(LogContext(component="cli"))

    try:
        if args.command == "encode":
            print(_instruction(parser, args).to_bytes().hex())
        elif args.command == "decode":
            try:
                payload = bytes.fromhex(args.payload)
            except ValueError:
                parser.error(f"payload is not valid hex: {args.payload!r}")
            print(_describe(decode(payload)))
        elif args.command == "eval":
            payload = _instruction(parser, args).to_bytes()
            print(process_instruction(None, [], payload, evaluator=Evaluator(config)))
        elif args.command == "run":
            return _run(_instruction(parser, args), config)
    except ByteCalcError as e:
        if args.log_format == "json":
            print(json.dumps(e.to_dict(), default=str), file=sys.stderr)
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_logging()

    return 0


if __name__ == "__main__":
    sys.exit(main())
